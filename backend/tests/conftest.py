"""
测试公共夹具

内存SQLite数据库、可控时钟和假的身份服务客户端，通过
FastAPI dependency_overrides 注入到应用中。
"""

import os
import sys
from datetime import datetime, timedelta, UTC
from typing import Dict, Generator, Optional

import pytest

# 将 backend 目录添加到 sys.path 中
backend_path = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if backend_path not in sys.path:
    sys.path.insert(0, backend_path)

# 在导入项目模块前设置测试环境
os.environ.setdefault("AUTH_API_URL", "https://auth.test")
os.environ.setdefault("AUTH_API_KEY", "test-anon-key")
os.environ["DATABASE_URL"] = "sqlite://"

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.config.dependency_injection import get_db, get_now
from app.db.base_class import Base
from app.db.database import make_engine
from app.main import app
from app.schemas.auth import AuthUser
from app.services.auth_client import get_auth_client

T0 = datetime(2026, 3, 1, 9, 0, tzinfo=UTC)

engine = make_engine("sqlite://", poolclass=StaticPool)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class Clock:
    """可手动推进的时钟"""

    def __init__(self, now: datetime):
        self.now = now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


class FakeAuthClient:
    """只认识固定 token 的身份服务替身"""

    def __init__(self, users: Dict[str, AuthUser]):
        self.users = users
        self.signed_out = []

    def get_session(self, access_token: Optional[str]) -> Optional[AuthUser]:
        if not access_token:
            return None
        return self.users.get(access_token)

    def sign_out(self, access_token: str) -> None:
        self.signed_out.append(access_token)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def clock() -> Clock:
    return Clock(T0)


@pytest.fixture
def auth_client() -> FakeAuthClient:
    return FakeAuthClient({
        "token-alice": AuthUser(id="alice", email="alice@example.com"),
        "token-bob": AuthUser(id="bob", email="bob@example.com"),
    })


@pytest.fixture(scope="function")
def client(db: Session, clock: Clock, auth_client: FakeAuthClient) -> Generator[TestClient, None, None]:
    """创建测试客户端"""
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_now] = lambda: clock.now
    app.dependency_overrides[get_auth_client] = lambda: auth_client
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def alice_headers() -> Dict[str, str]:
    return {"Authorization": "Bearer token-alice"}
