from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime

# 接口通用字段
class UserProgressBase(BaseModel):
    """用户每日进度基础模型

    Attributes:
        user_id: 身份服务中的用户ID
        day_number: 课程天数，1-30
    """
    user_id: str
    day_number: int = Field(..., ge=1, le=30)

# 用于创建接口的输入模型
class UserProgressCreate(UserProgressBase):
    """第一次打开某一天时创建的进度记录，默认未完成"""
    completed: bool = False
    last_accessed: datetime

# 用于更新接口的输入模型
class UserProgressUpdate(BaseModel):
    """用户每日进度更新模型

    Attributes:
        completed: 是否已完成
        completed_at: 完成时间
        last_accessed: 最近一次打开时间
    """
    completed: Optional[bool] = None
    completed_at: Optional[datetime] = None
    last_accessed: Optional[datetime] = None

class DayProgress(UserProgressBase):
    """返回给前端的单日进度"""
    model_config = ConfigDict(from_attributes=True)

    completed: bool
    completed_at: Optional[datetime] = None
    last_accessed: datetime
