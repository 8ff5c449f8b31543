import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import LedgerError
from app.crud.crud_progress import progress as crud_progress
from app.crud.crud_streak import streak as crud_streak
from app.models.user_progress import UserProgress
from app.schemas.dashboard import CalendarDay, DashboardResponse
from app.schemas.day import DayCompletionResult, DayView
from app.schemas.user_progress import DayProgress
from app.schemas.user_streak import UserStreak
from app.services.content_loader import lesson_title, topic_for
from app.services.streak import (
    StreakState,
    apply_completion,
    apply_load_time_reset,
    has_continued_streak,
    parse_timestamp,
)

# 配置日志
logger = logging.getLogger(__name__)


def find_next_day(records: List[UserProgress], total_days: Optional[int] = None) -> int:
    """第一个未完成的天；全部完成后从第1天重新开始"""
    total_days = total_days or settings.TOTAL_DAYS
    completed = {record.day_number for record in records if record.completed}
    for day_number in range(1, total_days + 1):
        if day_number not in completed:
            return day_number
    return 1


def completion_message(day_number: int, streak_continued: bool, current_streak: int) -> str:
    if streak_continued:
        unit = "day" if current_streak == 1 else "days"
        return f"🎉 Day {day_number} completed! Streak: {current_streak} {unit}!"
    return f"🎉 Day {day_number} completed! Keep going!"


def next_path_after(day_number: int) -> str:
    if day_number < settings.TOTAL_DAYS:
        return f"/day/{day_number + 1}"
    return "/dashboard"


class ProgressService:
    """
    Progress ledger operations behind the dashboard and lesson pages.

    Every method takes the request's ``db`` session and ``now`` explicitly,
    so no state lives on the instance.
    """

    @staticmethod
    def _reset_if_lapsed(db: Session, user_id: str, streak_row, now: datetime):
        """已中断的连续记录清零（只改 current_streak），未变化时不写库"""
        state = StreakState.from_record(streak_row)
        decayed = apply_load_time_reset(state, now)
        if decayed == state:
            return streak_row
        logger.info(
            f"ProgressService: streak of user {user_id} lapsed, "
            f"resetting current_streak {state.current_streak} -> 0"
        )
        return crud_streak.update(db, db_obj=streak_row, obj_in={"current_streak": decayed.current_streak})

    def load_dashboard(self, db: Session, user_id: str, now: datetime) -> DashboardResponse:
        """
        读取用户全部进度和连续学习记录。

        没有连续学习记录时创建全零记录；已中断的连续记录在这里清零。
        """
        now = parse_timestamp(now)
        try:
            records = crud_progress.get_by_user(db, user_id=user_id)
            streak_row = crud_streak.get_by_user(db, user_id=user_id)
            if streak_row is None:
                logger.info(f"ProgressService: creating streak record for user {user_id}")
                streak_row = crud_streak.create_initial(db, user_id=user_id, now=now)
            else:
                streak_row = self._reset_if_lapsed(db, user_id, streak_row, now)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"ProgressService: failed to load dashboard for user {user_id}: {e}")
            raise LedgerError(f"Failed to load progress for user {user_id}") from e

        total_days = settings.TOTAL_DAYS
        completed_days = sum(1 for record in records if record.completed)
        completed_set = {record.day_number for record in records if record.completed}
        next_day = find_next_day(records, total_days)
        all_completed = completed_days >= total_days

        if all_completed:
            message = f"🎉 Congratulations! You've completed all {total_days} days!"
        else:
            message = f"You're on Day {next_day}. Keep going!"

        return DashboardResponse(
            progress=[DayProgress.model_validate(record) for record in records],
            streak=UserStreak.model_validate(streak_row),
            completed_days=completed_days,
            total_days=total_days,
            next_day=next_day,
            all_completed=all_completed,
            headline="Start Your Journey" if completed_days == 0 else "Continue Learning",
            message=message,
            calendar=[
                CalendarDay(day_number=day, topic=topic_for(day), completed=day in completed_set)
                for day in range(1, total_days + 1)
            ],
        )

    def open_day(self, db: Session, user_id: str, day_number: int, now: datetime) -> DayView:
        """
        打开某一天的课程：创建或刷新进度记录，并返回当前连续学习记录。
        已中断的连续记录和仪表盘一样在这里清零。
        """
        now = parse_timestamp(now)
        try:
            record = crud_progress.touch(db, user_id=user_id, day_number=day_number, now=now)
            streak_row = crud_streak.get_by_user(db, user_id=user_id)
            if streak_row is not None:
                streak_row = self._reset_if_lapsed(db, user_id, streak_row, now)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"ProgressService: failed to open day {day_number} for user {user_id}: {e}")
            raise LedgerError(f"Failed to open day {day_number}") from e

        return DayView(
            day_number=day_number,
            topic=topic_for(day_number),
            title=lesson_title(day_number),
            completed=record.completed,
            content_url=f"{settings.API_V1_STR}/days/{day_number}/content",
            streak=UserStreak.model_validate(streak_row) if streak_row is not None else None,
        )

    def complete_day(self, db: Session, user_id: str, day_number: int, now: datetime) -> DayCompletionResult:
        """
        标记某一天完成并更新连续学习记录。

        进度记录和连续学习记录在同一个事务里写入，任何一步失败都整体回滚。
        已完成的天再次完成不会重复计数。

        Raises:
            LedgerError: 数据库读写失败，事务已回滚
            ParseError: 已存储的 last_activity_date 无法解析，事务已回滚
        """
        now = parse_timestamp(now)
        try:
            record = crud_progress.get_day(db, user_id=user_id, day_number=day_number, for_update=True)
            streak_row = crud_streak.get_by_user(db, user_id=user_id, for_update=True)

            if record is not None and record.completed:
                if streak_row is None:
                    streak_row = crud_streak.create_initial(db, user_id=user_id, now=now, commit=False)
                db.commit()
                logger.info(f"ProgressService: day {day_number} already completed by user {user_id}")
                return DayCompletionResult(
                    day_number=day_number,
                    already_completed=True,
                    streak_continued=False,
                    streak=UserStreak.model_validate(streak_row),
                    message=f"Day {day_number} is already completed.",
                    next_path=next_path_after(day_number),
                )

            if streak_row is None:
                streak_row = crud_streak.create_initial(db, user_id=user_id, now=now, commit=False)

            before = StreakState.from_record(streak_row)
            streak_continued = has_continued_streak(before.last_activity_date, now)
            after = apply_completion(before, now)

            completion = {"completed": True, "completed_at": now, "last_accessed": now}
            if record is None:
                crud_progress.create(
                    db,
                    obj_in={"user_id": user_id, "day_number": day_number, **completion},
                    commit=False,
                )
            else:
                crud_progress.update(db, db_obj=record, obj_in=completion, commit=False)
            crud_streak.update(db, db_obj=streak_row, obj_in=after.as_patch(), commit=False)

            db.commit()
            db.refresh(streak_row)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"ProgressService: failed to complete day {day_number} for user {user_id}: {e}")
            raise LedgerError(f"Failed to complete day {day_number}") from e
        except Exception:
            db.rollback()
            raise

        logger.info(
            f"ProgressService: user {user_id} completed day {day_number}, "
            f"streak {before.current_streak} -> {after.current_streak} (longest {after.longest_streak})"
        )
        return DayCompletionResult(
            day_number=day_number,
            already_completed=False,
            streak_continued=streak_continued,
            streak=UserStreak.model_validate(streak_row),
            message=completion_message(day_number, streak_continued, after.current_streak),
            next_path=next_path_after(day_number),
        )


progress_service = ProgressService()
