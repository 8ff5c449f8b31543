from sqlalchemy import Column, Integer, String, DateTime, Boolean, UniqueConstraint
from datetime import datetime, UTC
from app.db.base_class import Base

class UserProgress(Base):
    """用户每日进度模型

    每个用户每一天（1-30）最多一条记录。用户第一次打开某一天时创建，
    之后每次打开刷新 last_accessed，点击完成时写入 completed / completed_at。

    Attributes:
        id: 自增ID
        user_id: 身份服务中的用户ID
        day_number: 课程天数，1-30
        completed: 是否已完成
        completed_at: 完成时间，仅在 completed 为 True 时设置
        last_accessed: 最近一次打开该天课程的时间
    """
    __tablename__ = "user_progress"
    __table_args__ = (
        UniqueConstraint("user_id", "day_number", name="uq_user_progress_user_day"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String, index=True, nullable=False)
    day_number = Column(Integer, nullable=False)
    completed = Column(Boolean, default=False, nullable=False)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    last_accessed = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False)
