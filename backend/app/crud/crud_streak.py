from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase
from app.models.user_streak import UserStreak
from app.schemas.user_streak import UserStreakCreate, UserStreakUpdate


class CRUDStreak(CRUDBase[UserStreak, UserStreakCreate, UserStreakUpdate]):
    def get_by_user(self, db: Session, *, user_id: str, for_update: bool = False) -> Optional[UserStreak]:
        return self.get_by(db, filter_conditions={"user_id": user_id}, for_update=for_update)

    def create_initial(self, db: Session, *, user_id: str, now: datetime, commit: bool = True) -> UserStreak:
        """
        为新用户创建全零的连续学习记录
        """
        return self.create(
            db,
            obj_in=UserStreakCreate(user_id=user_id, last_activity_date=now),
            commit=commit,
        )

# 实例化并暴露给 API 层使用
streak = CRUDStreak(UserStreak)
