from pydantic import BaseModel
from typing import List

from app.schemas.user_progress import DayProgress
from app.schemas.user_streak import UserStreak


class CalendarDay(BaseModel):
    """Progress grid cell for one lesson day."""
    day_number: int
    topic: str
    completed: bool


class DashboardResponse(BaseModel):
    """仪表盘响应模型

    Attributes:
        progress: 用户已打开过的天的进度记录
        streak: 当前连续学习记录（必要时已创建或重置）
        completed_days: 已完成的天数
        total_days: 课程总天数
        next_day: 第一个未完成的天；全部完成时为1
        all_completed: 是否全部完成
        headline: 仪表盘标题
        message: 仪表盘提示语
        calendar: 每一天的完成状态
    """
    progress: List[DayProgress]
    streak: UserStreak
    completed_days: int
    total_days: int
    next_day: int
    all_completed: bool
    headline: str
    message: str
    calendar: List[CalendarDay]
