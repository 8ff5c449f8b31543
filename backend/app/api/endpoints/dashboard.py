import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.config.dependency_injection import get_current_user, get_db, get_now, get_progress_service
from app.core.exceptions import LedgerError
from app.schemas.auth import AuthUser
from app.schemas.dashboard import DashboardResponse
from app.schemas.response import StandardResponse
from app.services.progress_service import ProgressService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=StandardResponse[DashboardResponse])
def get_dashboard(
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
    service: ProgressService = Depends(get_progress_service),
):
    """
    仪表盘数据：完成天数、当前/最长连续天数、下一天和30天日历
    """
    try:
        data = service.load_dashboard(db, user.id, now)
        return StandardResponse(data=data)
    except LedgerError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except Exception as e:
        logger.exception(f"Dashboard: unexpected error for user {user.id}")
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")
