from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime


class UserStreakCreate(BaseModel):
    """新用户的连续学习记录，全部从0开始"""
    user_id: str
    current_streak: int = Field(0, ge=0)
    longest_streak: int = Field(0, ge=0)
    last_activity_date: datetime


class UserStreakUpdate(BaseModel):
    """连续学习记录更新模型，只包含被显式设置的字段"""
    current_streak: Optional[int] = Field(None, ge=0)
    longest_streak: Optional[int] = Field(None, ge=0)
    last_activity_date: Optional[datetime] = None


class UserStreak(BaseModel):
    """连续学习记录响应模型

    Attributes:
        current_streak: 当前连续天数
        longest_streak: 历史最长连续天数
        last_activity_date: 最近一次完成课程的时间
    """
    model_config = ConfigDict(from_attributes=True)

    current_streak: int
    longest_streak: int
    last_activity_date: datetime
