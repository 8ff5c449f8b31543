# backend/app/services/auth_client.py
import logging
from typing import Any, Dict, Optional
from urllib.parse import urlencode

import httpx

from app.core.config import settings
from app.core.exceptions import AuthError, AuthUnavailableError
from app.schemas.auth import AuthSession, AuthUser, SignUpResult

logger = logging.getLogger(__name__)


class AuthClient:
    """
    身份服务客户端

    Talks to a GoTrue-compatible auth REST API (``/auth/v1/...``). Session
    storage and the OAuth code exchange stay with the provider and the
    browser; this client only forwards credentials and validates tokens.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 10.0,
        http_client: Optional[httpx.Client] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.client = http_client or httpx.Client(timeout=timeout)

    def _headers(self, access_token: Optional[str] = None) -> Dict[str, str]:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {access_token or self.api_key}",
            "Content-Type": "application/json",
        }

    def _request(
        self,
        method: str,
        path: str,
        *,
        access_token: Optional[str] = None,
        params: Optional[Dict[str, str]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        url = f"{self.base_url}/auth/v1/{path}"
        try:
            response = self.client.request(
                method, url, headers=self._headers(access_token), params=params, json=json
            )
        except httpx.RequestError as e:
            logger.error(f"AuthClient: {method} {path} failed: {e}")
            raise AuthUnavailableError(f"Identity provider unreachable: {e}") from e

        if response.status_code >= 500:
            logger.error(f"AuthClient: {method} {path} returned {response.status_code}")
            raise AuthUnavailableError(f"Identity provider error ({response.status_code})")
        if response.status_code >= 400:
            message = self._error_message(response)
            status_code = 401 if response.status_code in (401, 403) else 400
            logger.info(f"AuthClient: {method} {path} rejected ({response.status_code}): {message}")
            raise AuthError(message, status_code=status_code)
        return response

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text or f"Request failed ({response.status_code})"
        if not isinstance(body, dict):
            return f"Request failed ({response.status_code})"
        for key in ("error_description", "msg", "message", "error"):
            if body.get(key):
                return str(body[key])
        return f"Request failed ({response.status_code})"

    @staticmethod
    def _parse_user(data: Dict[str, Any]) -> AuthUser:
        return AuthUser(id=data["id"], email=data.get("email"))

    def _parse_session(self, data: Dict[str, Any]) -> AuthSession:
        return AuthSession(
            access_token=data["access_token"],
            refresh_token=data.get("refresh_token"),
            expires_in=data.get("expires_in"),
            token_type=data.get("token_type", "bearer"),
            user=self._parse_user(data["user"]),
        )

    def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        response = self._request(
            "POST",
            "token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        return self._parse_session(response.json())

    def sign_up(self, email: str, password: str) -> SignUpResult:
        """
        注册新用户。

        开启邮箱确认时身份服务只返回用户，不返回会话。
        """
        data = self._request("POST", "signup", json={"email": email, "password": password}).json()
        if data.get("access_token"):
            session = self._parse_session(data)
            return SignUpResult(user=session.user, session=session)
        user_data = data.get("user") or data
        return SignUpResult(user=self._parse_user(user_data), confirmation_required=True)

    def sign_in_with_oauth(self, provider: str, redirect_to: str) -> str:
        """返回第三方登录的授权地址，浏览器跳转后由身份服务完成回调"""
        if provider not in settings.OAUTH_PROVIDERS:
            raise AuthError(f"Unsupported OAuth provider: {provider}")
        query = urlencode({"provider": provider, "redirect_to": redirect_to})
        return f"{self.base_url}/auth/v1/authorize?{query}"

    def get_session(self, access_token: Optional[str]) -> Optional[AuthUser]:
        """
        校验访问令牌并返回当前用户；令牌缺失、过期或无效时返回 None。
        """
        if not access_token:
            return None
        try:
            response = self._request("GET", "user", access_token=access_token)
        except AuthUnavailableError:
            raise
        except AuthError:
            return None
        return self._parse_user(response.json())

    def sign_out(self, access_token: str) -> None:
        self._request("POST", "logout", access_token=access_token)


_auth_client_instance = None

def get_auth_client() -> AuthClient:
    """
    获取身份服务客户端单例
    """
    global _auth_client_instance
    if _auth_client_instance is None:
        _auth_client_instance = AuthClient(
            base_url=settings.AUTH_API_URL,
            api_key=settings.AUTH_API_KEY,
            timeout=settings.AUTH_TIMEOUT_SECONDS,
        )
    return _auth_client_instance
