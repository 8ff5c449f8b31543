from datetime import datetime, UTC
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.exceptions import AuthUnavailableError
from app.db.database import get_db  # noqa: F401  re-exported for endpoints
from app.schemas.auth import AuthUser
from app.services.auth_client import AuthClient, get_auth_client
from app.services.progress_service import ProgressService, progress_service

bearer_scheme = HTTPBearer(auto_error=False)


def get_now() -> datetime:
    """
    当前时间（UTC），测试中可通过 dependency_overrides 固定
    """
    return datetime.now(UTC)


def get_progress_service() -> ProgressService:
    """
    获取进度服务实例
    """
    return progress_service


def get_access_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    return credentials.credentials if credentials else None


def get_current_user(
    access_token: Optional[str] = Depends(get_access_token),
    auth_client: AuthClient = Depends(get_auth_client),
) -> AuthUser:
    """
    解析 Bearer token 得到当前用户；没有会话时返回401，前端据此跳转登录页
    """
    try:
        user = auth_client.get_session(access_token)
    except AuthUnavailableError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user
