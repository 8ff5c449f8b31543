from pydantic import BaseModel, EmailStr, Field
from typing import Optional


class Credentials(BaseModel):
    """邮箱密码登录/注册请求模型"""
    email: EmailStr
    password: str = Field(..., min_length=6, description="Password, at least 6 characters")


class AuthUser(BaseModel):
    """身份服务返回的用户信息"""
    id: str
    email: Optional[str] = None


class AuthSession(BaseModel):
    """身份服务会话

    Attributes:
        access_token: 访问令牌，作为 Bearer token 使用
        refresh_token: 刷新令牌
        expires_in: 访问令牌有效期（秒）
        token_type: 令牌类型，通常为 'bearer'
        user: 当前用户
    """
    access_token: str
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None
    token_type: str = "bearer"
    user: AuthUser


class SignUpResult(BaseModel):
    """注册结果；开启邮箱确认时 session 为空"""
    user: AuthUser
    session: Optional[AuthSession] = None
    confirmation_required: bool = False


class OAuthRedirect(BaseModel):
    """第三方登录跳转地址"""
    provider: str
    url: str
