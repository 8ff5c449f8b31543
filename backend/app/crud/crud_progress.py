from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase
from app.models.user_progress import UserProgress
from app.schemas.user_progress import UserProgressCreate, UserProgressUpdate

class CRUDProgress(CRUDBase[UserProgress, UserProgressCreate, UserProgressUpdate]):
    def get_by_user(self, db: Session, *, user_id: str) -> List[UserProgress]:
        """
        查询指定用户的所有进度记录，按 day_number 升序
        """
        return self.get_multi(
            db,
            filter_conditions={"user_id": user_id},
            sort_by="day_number",
        )

    def get_day(
        self, db: Session, *, user_id: str, day_number: int, for_update: bool = False
    ) -> Optional[UserProgress]:
        return self.get_by(
            db,
            filter_conditions={"user_id": user_id, "day_number": day_number},
            for_update=for_update,
        )

    def touch(self, db: Session, *, user_id: str, day_number: int, now: datetime) -> UserProgress:
        """
        打开某一天：没有记录就创建一条未完成的记录，否则只刷新 last_accessed
        """
        record = self.get_day(db, user_id=user_id, day_number=day_number)
        if record is None:
            return self.create(
                db,
                obj_in=UserProgressCreate(user_id=user_id, day_number=day_number, last_accessed=now),
            )
        return self.update(db, db_obj=record, obj_in=UserProgressUpdate(last_accessed=now))

# 实例化并暴露给 API 层使用
progress = CRUDProgress(UserProgress)
