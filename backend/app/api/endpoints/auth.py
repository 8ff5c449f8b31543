import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status

from app.config.dependency_injection import get_access_token, get_current_user
from app.core.config import settings
from app.core.exceptions import AuthError
from app.schemas.auth import AuthSession, AuthUser, Credentials, OAuthRedirect, SignUpResult
from app.schemas.response import StandardResponse
from app.services.auth_client import AuthClient, get_auth_client

logger = logging.getLogger(__name__)

router = APIRouter()


def _http_error(e: AuthError) -> HTTPException:
    return HTTPException(status_code=e.status_code, detail=e.message)


@router.post("/login", response_model=StandardResponse[AuthSession])
def login(credentials: Credentials, auth_client: AuthClient = Depends(get_auth_client)):
    """
    邮箱密码登录
    """
    try:
        session = auth_client.sign_in_with_password(credentials.email, credentials.password)
    except AuthError as e:
        raise _http_error(e)
    return StandardResponse(data=session)


@router.post("/signup", response_model=StandardResponse[SignUpResult])
def signup(
    response: Response,
    credentials: Credentials,
    auth_client: AuthClient = Depends(get_auth_client),
):
    """
    邮箱密码注册；需要邮箱确认时返回的 session 为空
    """
    try:
        result = auth_client.sign_up(credentials.email, credentials.password)
    except AuthError as e:
        raise _http_error(e)
    response.status_code = status.HTTP_201_CREATED
    message = "Check your email to confirm your account" if result.confirmation_required else "success"
    return StandardResponse(message=message, data=result)


@router.get("/oauth/{provider}", response_model=StandardResponse[OAuthRedirect])
def oauth_redirect(
    provider: str,
    redirect_to: Optional[str] = None,
    auth_client: AuthClient = Depends(get_auth_client),
):
    """
    获取第三方登录授权地址，默认回调到前端的 /auth/callback
    """
    target = redirect_to or f"{settings.FRONTEND_URL.rstrip('/')}/auth/callback"
    try:
        url = auth_client.sign_in_with_oauth(provider, target)
    except AuthError as e:
        raise _http_error(e)
    return StandardResponse(data=OAuthRedirect(provider=provider, url=url))


@router.get("/session", response_model=StandardResponse[AuthUser])
def get_session(user: AuthUser = Depends(get_current_user)):
    """当前会话对应的用户"""
    return StandardResponse(data=user)


@router.post("/logout", response_model=StandardResponse)
def logout(
    access_token: Optional[str] = Depends(get_access_token),
    auth_client: AuthClient = Depends(get_auth_client),
):
    if not access_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    try:
        auth_client.sign_out(access_token)
    except AuthError as e:
        raise _http_error(e)
    return StandardResponse(message="signed out")
