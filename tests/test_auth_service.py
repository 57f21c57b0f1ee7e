import pytest
from jose import jwt

from todo_api.models.user import User
from todo_api.services.auth import AuthService, verify_password
from todo_api.services.auth.blacklist import MemoryTokenBlacklist
from todo_api.utils.base import Role
from todo_api.utils.errors import AuthError, DuplicateError, InvalidCredentials


def test_sign_up_stores_only_a_hash(auth):
    user = auth.sign_up("alice", "alice@example.com", "s3cret")

    stored = User.objects(username="alice").first()
    assert stored.id == user.id
    assert stored.password != "s3cret"
    assert verify_password("s3cret", stored.password)
    assert stored.role == Role.USER.value


@pytest.mark.parametrize(
    "username, email",
    [("alice", "other@example.com"), ("other", "alice@example.com")],
)
def test_sign_up_rejects_duplicates(auth, username, email):
    auth.sign_up("alice", "alice@example.com", "s3cret")

    with pytest.raises(DuplicateError):
        auth.sign_up(username, email, "whatever")


def test_login_issues_token_with_role(auth, settings):
    auth.sign_up("boss", "boss@example.com", "pw", role=Role.ADMIN)

    response = auth.login("boss", "pw")

    payload = jwt.decode(response.token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    assert payload["role"] == "admin"
    assert payload["typ"] == "access"
    assert payload["exp"] - payload["iat"] == 3600
    assert response.expires_in == 3600


def test_login_failures_are_indistinguishable(auth):
    auth.sign_up("alice", "alice@example.com", "s3cret")

    with pytest.raises(InvalidCredentials) as wrong_password:
        auth.login("alice", "nope")
    with pytest.raises(InvalidCredentials) as unknown_user:
        auth.login("nobody", "s3cret")

    assert wrong_password.value.message == unknown_user.value.message
    assert wrong_password.value.status_code == unknown_user.value.status_code == 400


def test_verify_returns_claim_without_store_lookup(auth):
    user = auth.sign_up("alice", "alice@example.com", "s3cret")
    token = auth.login("alice", "s3cret").token
    User.drop_collection()

    claim = auth.verify(token)

    assert claim.sub == str(user.id)
    assert claim.role is Role.USER


@pytest.mark.parametrize("token", [None, "", "not-a-jwt", "a.b.c"])
def test_verify_rejects_missing_or_malformed(auth, token):
    with pytest.raises(AuthError):
        auth.verify(token)


def test_verify_rejects_foreign_signature(auth, settings):
    auth.sign_up("alice", "alice@example.com", "s3cret")
    token = auth.login("alice", "s3cret").token
    other = AuthService(settings.model_copy(update={"jwt_secret_key": "other"}), MemoryTokenBlacklist())

    with pytest.raises(AuthError):
        other.verify(token)


def test_verify_rejects_expired(settings, mongo):
    expired = AuthService(settings.model_copy(update={"access_token_expires_minutes": -1}), MemoryTokenBlacklist())
    expired.sign_up("alice", "alice@example.com", "s3cret")
    token = expired.login("alice", "s3cret").token

    with pytest.raises(AuthError):
        expired.verify(token)


def test_verify_rejects_non_access_tokens(auth, settings):
    token = jwt.encode(
        {"sub": "x", "role": "admin", "exp": 9_999_999_999, "typ": "refresh"},
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )
    with pytest.raises(AuthError):
        auth.verify(token)


def test_verify_rejects_unknown_role(auth, settings):
    token = jwt.encode(
        {"sub": "x", "role": "root", "exp": 9_999_999_999, "typ": "access"},
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )
    with pytest.raises(AuthError):
        auth.verify(token)


def test_logout_blacklists_token(auth):
    auth.sign_up("alice", "alice@example.com", "s3cret")
    token = auth.login("alice", "s3cret").token
    claim = auth.verify(token)

    auth.logout(token, claim)
    auth.logout(token, claim)

    for _ in range(3):
        with pytest.raises(AuthError):
            auth.verify(token)
