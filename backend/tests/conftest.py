import os
import sys
from pathlib import Path
from typing import Callable, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

ROOT_DIR = Path(__file__).resolve().parents[1]
PROJECT_ROOT = ROOT_DIR.parent
for path in (PROJECT_ROOT, ROOT_DIR):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

# Configure before the application modules read their settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTH_DRIVER"] = "jwt"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["OPENAI_API_KEY"] = ""
os.environ["USE_AZURE_OPENAI"] = "false"
os.environ["SECRET_KEY"] = "test-secret-key"

from app import app  # noqa: E402
from database import get_db, init_database  # noqa: E402
from models.database import User  # noqa: E402
from services.ai.drivers import TextGenerationDriver  # noqa: E402
from services.auth import get_identity_driver  # noqa: E402
from services.chat.routes import get_chat_edit_service  # noqa: E402
from services.chat.service import ChatEditService  # noqa: E402
from services.generation.routes import get_pitch_deck_generator  # noqa: E402
from services.generation.service import PitchDeckGenerator  # noqa: E402
from services.identity import JWTIdentityDriver, create_access_token  # noqa: E402


class ScriptedDriver(TextGenerationDriver):
    """Text generation driver returning queued replies (or raising queued errors)."""

    provider = "scripted"

    def __init__(self) -> None:
        self.replies: list[str | Exception] = []
        self.calls: list[dict] = []

    def queue(self, *replies: str | Exception) -> "ScriptedDriver":
        self.replies.extend(replies)
        return self

    async def complete(self, system_prompt, user_prompt, *, model, temperature=0.7, max_tokens=2000):
        self.calls.append(
            {
                "system_prompt": system_prompt,
                "user_prompt": user_prompt,
                "model": model,
                "temperature": temperature,
                "max_tokens": max_tokens,
            }
        )
        if not self.replies:
            raise RuntimeError("No scripted reply queued")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture
def session_factory(tmp_path: Path) -> Generator[sessionmaker, None, None]:
    """Fresh SQLite database per test."""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'test.db'}", connect_args={"check_same_thread": False}
    )
    init_database(bind=engine)
    try:
        yield sessionmaker(bind=engine, autocommit=False, autoflush=False)
    finally:
        engine.dispose()


@pytest.fixture
def db_session(session_factory: sessionmaker) -> Generator[Session, None, None]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def scripted_driver() -> ScriptedDriver:
    return ScriptedDriver()


@pytest.fixture
def client(session_factory: sessionmaker, scripted_driver: ScriptedDriver) -> Generator[TestClient, None, None]:
    """Test client with database, identity and model dependencies replaced."""

    def _get_test_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    identity_driver = JWTIdentityDriver()
    app.dependency_overrides[get_db] = _get_test_db
    app.dependency_overrides[get_identity_driver] = lambda: identity_driver
    app.dependency_overrides[get_pitch_deck_generator] = lambda: PitchDeckGenerator(driver=scripted_driver)
    app.dependency_overrides[get_chat_edit_service] = lambda: ChatEditService(driver=scripted_driver)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_token() -> Callable[..., str]:
    """Issue identity tokens accepted by the jwt identity driver."""

    def _make_token(email: str | None = "founder@example.com", uid: str = "uid-founder", **claims) -> str:
        data = {"sub": uid, **claims}
        if email is not None:
            data["email"] = email
        return create_access_token(data)

    return _make_token


@pytest.fixture
def auth_headers(make_token: Callable[..., str]) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token()}"}


@pytest.fixture
def other_headers(make_token: Callable[..., str]) -> dict[str, str]:
    """Headers for a second, unrelated user."""
    return {"Authorization": f"Bearer {make_token('rival@example.com', uid='uid-rival')}"}


@pytest.fixture
def create_project(client: TestClient, auth_headers: dict[str, str]) -> Callable[..., dict]:
    def _create_project(title: str = "Acme Deck", headers: dict[str, str] | None = None, **extra) -> dict:
        response = client.post("/projects", json={"title": title, **extra}, headers=headers or auth_headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _create_project


@pytest.fixture
def create_slide(client: TestClient, auth_headers: dict[str, str]) -> Callable[..., dict]:
    def _create_slide(project_id: int, title: str, headers: dict[str, str] | None = None, **extra) -> dict:
        payload = {"projectId": project_id, "title": title, "content": f"{title} body", **extra}
        response = client.post("/slides", json=payload, headers=headers or auth_headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _create_slide


@pytest.fixture
def user(db_session: Session) -> User:
    user = User(email="founder@example.com")
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def unconfigured_model(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> Generator[TestClient, None, None]:
    """Use the real generator and chat factories with no model credential configured."""
    from shared.config import config as service_config

    monkeypatch.setitem(service_config.config, "openai_api_key", None)
    monkeypatch.setitem(service_config.config, "use_azure_openai", False)
    app.dependency_overrides.pop(get_pitch_deck_generator, None)
    app.dependency_overrides.pop(get_chat_edit_service, None)
    get_pitch_deck_generator.cache_clear()
    get_chat_edit_service.cache_clear()
    try:
        yield client
    finally:
        get_pitch_deck_generator.cache_clear()
        get_chat_edit_service.cache_clear()
