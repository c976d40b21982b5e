"""
数据库配置
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from noticeboard.core.config import settings

connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(
    settings.DATABASE_URL,
    connect_args=connect_args,
    echo=False  # 设置为True可以看到SQL查询日志
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def get_db():
    """获取数据库会话"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def import_models():
    """导入所有模型，确保表已注册到Base.metadata"""
    from noticeboard.models.profile import Profile
    from noticeboard.models.post import Post, PollOption
    from noticeboard.models.vote import PollVote
    from noticeboard.models.like import PostLike
    from noticeboard.models.submission import AnonymousSubmission

async def init_db():
    """初始化数据库"""
    import_models()

    # 创建所有表
    Base.metadata.create_all(bind=engine)

    if settings.SEED_DEMO_DATA:
        from noticeboard.services.seed_service import seed_demo_data
        db = SessionLocal()
        try:
            seed_demo_data(db)
        except Exception as e:
            db.rollback()
            print(f"⚠️ 演示数据写入失败: {e}")
        finally:
            db.close()

    print("数据库初始化完成")
