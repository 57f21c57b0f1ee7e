import mongomock
import pytest
from fastapi.testclient import TestClient

from main import create_app
from todo_api.connections.mongo import close_mongo, init_mongo
from todo_api.models.todo import Todo
from todo_api.models.user import User
from todo_api.services.auth import AuthService
from todo_api.services.auth.blacklist import MemoryTokenBlacklist
from todo_api.utils.base import Role
from todo_api.utils.config import Settings


@pytest.fixture
def settings() -> Settings:
    return Settings(
        mongo_uri="mongodb://localhost:27017/todo_api_test",
        jwt_secret_key="test-secret",
        blacklist_backend="memory",
        log_level="WARNING",
    )


@pytest.fixture
def mongo(settings):
    init_mongo(settings, mongo_client_class=mongomock.MongoClient)
    Todo.drop_collection()
    User.drop_collection()
    try:
        yield
    finally:
        Todo.drop_collection()
        User.drop_collection()
        close_mongo()


@pytest.fixture
def auth(settings, mongo) -> AuthService:
    return AuthService(settings, MemoryTokenBlacklist())


@pytest.fixture
def app(settings, mongo):
    return create_app(settings)


@pytest.fixture
def client(app) -> TestClient:
    # Not used as a context manager: the lifespan would dial a real server.
    return TestClient(app)


def _token_for(app, username: str, role: Role) -> str:
    service: AuthService = app.state.auth
    service.sign_up(username=username, email=f"{username}@example.com", password="pw-" + username, role=role)
    return service.login(username, "pw-" + username).token


@pytest.fixture
def admin_headers(app) -> dict:
    return {"Authorization": f"Bearer {_token_for(app, 'admin', Role.ADMIN)}"}


@pytest.fixture
def viewer_headers(app) -> dict:
    return {"Authorization": f"Bearer {_token_for(app, 'viewer', Role.VIEWER)}"}


@pytest.fixture
def user_headers(app) -> dict:
    return {"Authorization": f"Bearer {_token_for(app, 'plain', Role.USER)}"}
