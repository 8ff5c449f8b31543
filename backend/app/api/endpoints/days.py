import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Path
from fastapi.responses import Response
from sqlalchemy.orm import Session

from app.config.dependency_injection import get_current_user, get_db, get_now, get_progress_service
from app.core.config import settings
from app.core.exceptions import ContentNotFound, LedgerError
from app.schemas.auth import AuthUser
from app.schemas.day import DayCompletionResult, DayView
from app.schemas.response import StandardResponse
from app.services.content_loader import is_valid_day, load_lesson
from app.services.progress_service import ProgressService

logger = logging.getLogger(__name__)

router = APIRouter()

COMPLETION_FAILED = "Failed to mark as complete. Please try again."


def valid_day(day_number: int = Path(..., description="Lesson day, 1-30")) -> int:
    if not is_valid_day(day_number):
        raise HTTPException(status_code=404, detail=f"Day {day_number} does not exist")
    return day_number


@router.get("/{day_number}", response_model=StandardResponse[DayView])
def open_day(
    day_number: int = Depends(valid_day),
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
    service: ProgressService = Depends(get_progress_service),
):
    """
    打开某一天的课程，记录访问时间
    """
    try:
        return StandardResponse(data=service.open_day(db, user.id, day_number, now))
    except LedgerError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except Exception as e:
        logger.exception(f"Days: unexpected error opening day {day_number} for user {user.id}")
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")


@router.get("/{day_number}/content")
def get_day_content(day_number: int = Depends(valid_day)):
    """
    课程原文（HTML 或 Markdown），不做渲染
    """
    try:
        lesson = load_lesson(day_number, settings.CONTENT_DIR)
    except ContentNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(content=lesson.body, media_type=lesson.format.media_type)


@router.post("/{day_number}/complete", response_model=StandardResponse[DayCompletionResult])
def complete_day(
    day_number: int = Depends(valid_day),
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
    service: ProgressService = Depends(get_progress_service),
):
    """
    标记完成并更新连续学习记录；失败时不会留下部分写入，用户需要手动重试
    """
    try:
        result = service.complete_day(db, user.id, day_number, now)
    except LedgerError:
        raise HTTPException(status_code=500, detail=COMPLETION_FAILED)
    except Exception:
        logger.exception(f"Days: error completing day {day_number} for user {user.id}")
        raise HTTPException(status_code=500, detail=COMPLETION_FAILED)
    return StandardResponse(message=result.message, data=result)
