"""
实时变更通知的数据模式
"""

from pydantic import BaseModel
from typing import Literal, Optional

class ChangeEvent(BaseModel):
    """表变更事件，只作为重新拉取数据的信号"""
    type: Literal["change"] = "change"
    table: str
    event: Literal["INSERT", "UPDATE", "DELETE"]
    id: Optional[str] = None
