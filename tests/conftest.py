"""
pytest の共通設定とフィクスチャ

 - テストごとに独立したインメモリSQLiteデータベース
 - そのデータベースを使う TestClient
 - ユーザー登録・MFA登録・ベアラートークン取得のヘルパー
"""
import os
import tempfile
from pathlib import Path

# 設定はインポート時に読み込まれるため、先に環境変数を設定する
_LOG_DIR = Path(tempfile.mkdtemp(prefix="ems-test-logs-"))
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-pytest-only")
os.environ["LOG_FILE"] = str(_LOG_DIR / "application.log")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401  （メタデータへテーブルを登録）
from app.core.security.jwt import get_token_issuer
from app.core.security.mfa.service import MFAService
from app.db.base_class import Base
from app.db.session import get_db
from app.main import app as fastapi_app


# ============================================
# データベース関連フィクスチャ
# ============================================

@pytest.fixture
def db_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def token_issuer():
    return get_token_issuer()


# ============================================
# APIクライアント関連フィクスチャ
# ============================================

@pytest.fixture
def client(session_factory):
    """テスト用データベースに接続した TestClient"""
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    fastapi_app.dependency_overrides[get_db] = override_get_db
    with TestClient(fastapi_app) as test_client:
        yield test_client
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def register_user(client):
    """APIでユーザーを登録し、ユーザー名とパスワードを返す"""
    def _register(username="alice", password="s3cret-pass"):
        response = client.post("/register", json={"username": username, "password": password})
        assert response.status_code == 200, response.text
        return username, password
    return _register


@pytest.fixture
def enroll_mfa(client):
    """setup → enable を実行し、共有シークレットを返す"""
    def _enroll(username):
        setup = client.post("/mfa/setup", json={"username": username})
        assert setup.status_code == 200, setup.text
        secret = setup.json()["secret"]
        enable = client.post("/mfa/enable", json={"username": username, "code": MFAService.get_current_code(secret)})
        assert enable.status_code == 200, enable.text
        return secret
    return _enroll


@pytest.fixture
def auth_headers(client, register_user):
    """新規登録ユーザーのベアラートークン付きヘッダー"""
    username, password = register_user("admin", "admin-pass")
    response = client.post("/authenticate", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}
