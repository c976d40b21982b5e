"""
应用配置模块
"""

from typing import List
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """应用设置"""
    
    # 基础设置
    APP_NAME: str = "Digital Notice Board"
    VERSION: str = "1.0.0"
    DEBUG: bool = True
    
    # 服务器设置
    HOST: str = "0.0.0.0"
    PORT: int = 8001
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]
    
    # 数据库设置
    DATABASE_URL: str = "sqlite:///./noticeboard.db"
    SEED_DEMO_DATA: bool = False
    
    # 投票设置
    ALLOW_VOTE_REVISION: bool = False  # 是否允许改票
    MIN_POLL_OPTIONS: int = 2
    MAX_POLL_OPTIONS: int = 4
    
    # 表单设置（仅用于显示计数，不作为硬性限制）
    SUBMISSION_SOFT_LIMIT: int = 1000
    POST_SOFT_LIMIT: int = 280
    
    # 实时推送设置
    REALTIME_HEARTBEAT_INTERVAL: int = 30
    
    # 客户端设置
    BACKEND_URL: str = "http://localhost:8001"
    REQUEST_TIMEOUT: int = 10
    
    class Config:
        env_file = ".env"
        case_sensitive = True

# 全局设置实例
settings = Settings()
