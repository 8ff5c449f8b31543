from sqlalchemy import Column, Integer, String, DateTime, CheckConstraint
from datetime import datetime, UTC
from app.db.base_class import Base

class UserStreak(Base):
    """用户连续学习记录模型

    每个用户一条记录，只会在完成某一天或加载时的重置检查中被更新。

    Attributes:
        id: 自增ID
        user_id: 身份服务中的用户ID（唯一）
        current_streak: 当前连续天数
        longest_streak: 历史最长连续天数，始终 >= current_streak
        last_activity_date: 最近一次完成课程的时间
    """
    __tablename__ = "user_streaks"
    __table_args__ = (
        CheckConstraint("current_streak >= 0", name="ck_user_streaks_current_non_negative"),
        CheckConstraint("longest_streak >= current_streak", name="ck_user_streaks_longest_gte_current"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String, unique=True, index=True, nullable=False)
    current_streak = Column(Integer, default=0, nullable=False)
    longest_streak = Column(Integer, default=0, nullable=False)
    last_activity_date = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False)
