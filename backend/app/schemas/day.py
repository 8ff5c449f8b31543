from pydantic import BaseModel, Field
from typing import Optional

from app.schemas.user_streak import UserStreak


class DayView(BaseModel):
    """打开某一天课程时返回的数据"""
    day_number: int
    topic: str
    title: str = Field(..., description="e.g. 'Day 3 - Operators'")
    completed: bool
    content_url: str
    streak: Optional[UserStreak] = None


class DayCompletionResult(BaseModel):
    """完成某一天课程后的结果

    Attributes:
        day_number: 完成的天
        already_completed: 该天之前已完成，本次不计入连续天数
        streak_continued: 连续记录是否延续（False 表示从1重新开始）
        streak: 更新后的连续学习记录
        message: 提示给用户的消息
        next_path: 前端下一步跳转的路径
    """
    day_number: int
    already_completed: bool
    streak_continued: bool
    streak: UserStreak
    message: str
    next_path: str
