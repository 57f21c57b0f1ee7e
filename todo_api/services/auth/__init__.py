import logging
from datetime import datetime, timedelta, timezone

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError
from mongoengine import NotUniqueError
from mongoengine.errors import ValidationError as MongoValidationError
from passlib.context import CryptContext
from pydantic import BaseModel
from pymongo.errors import PyMongoError

from todo_api.models.user import User
from todo_api.services.auth.blacklist import MemoryTokenBlacklist, RedisTokenBlacklist, TokenBlacklist
from todo_api.utils.base import Role
from todo_api.utils.config import Settings
from todo_api.utils.errors import AuthError, DuplicateError, InvalidCredentials, StoreError, ValidationError


logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/login", auto_error=False)

ACCESS_TOKEN_TYPE = "access"


class Claim(BaseModel):
    """Verified payload of an access token."""
    sub: str
    role: Role
    exp: int


class TokenResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    expires_in: int


def verify_password(plain: str, hashed: str) -> bool:
    """Verify plaintext password against a bcrypt hash."""
    return pwd_context.verify(plain, hashed)


def hash_password(plain: str) -> str:
    """Hash a plaintext password using bcrypt."""
    return pwd_context.hash(plain)


class AuthService:
    """Sign-up, login and bearer-token verification.

    One instance lives on `app.state` for the lifetime of the application and
    owns the logout blacklist.
    """

    def __init__(self, settings: Settings, blacklist: TokenBlacklist):
        self.settings = settings
        self.blacklist = blacklist
        # Hashed once so unknown usernames cost the same as wrong passwords.
        self._dummy_hash = hash_password("not-a-real-password")

    def create_token(self, user: User) -> str:
        """Create a signed JWT carrying the user id and role."""
        now = datetime.now(timezone.utc)
        expires_delta = timedelta(minutes=self.settings.access_token_expires_minutes)
        payload = {
            "sub": str(user.id),
            "role": user.role,
            "iat": int(now.timestamp()),
            "exp": int((now + expires_delta).timestamp()),
            "typ": ACCESS_TOKEN_TYPE,
        }
        return jwt.encode(payload, self.settings.jwt_secret_key, algorithm=self.settings.jwt_algorithm)

    def sign_up(self, username: str, email: str, password: str, role: Role = Role.USER) -> User:
        # Reject duplicates early; the unique indexes catch concurrent signups.
        if User.objects(username=username).first() or User.objects(email=email).first():
            raise DuplicateError()
        user = User(username=username, email=email, password=hash_password(password), role=role.value)
        try:
            user.save()
        except NotUniqueError:
            raise DuplicateError()
        except MongoValidationError:
            raise ValidationError()
        except PyMongoError as exc:
            logger.exception("Could not store user %s", username)
            raise StoreError() from exc
        logger.info("Signed up user %s (%s)", username, user.role)
        return user

    def login(self, username: str, password: str) -> TokenResponse:
        user = User.objects(username=username).first()
        # Always run one bcrypt check; the response must not reveal which part failed.
        hashed = user.password if user else self._dummy_hash
        if not verify_password(password, hashed) or not user:
            logger.info("Failed login for %s", username)
            raise InvalidCredentials()
        return TokenResponse(
            token=self.create_token(user),
            expires_in=self.settings.access_token_expires_seconds,
        )

    def verify(self, token: str | None) -> Claim:
        """Validate a bearer token and return its claims.

        Rejects missing, malformed, expired, badly signed, non-access and
        blacklisted tokens. Claims are trusted as issued; the user is not
        reloaded.
        """
        if not token:
            raise AuthError()
        try:
            payload = jwt.decode(token, self.settings.jwt_secret_key, algorithms=[self.settings.jwt_algorithm])
        except JWTError:
            raise AuthError()
        if payload.get("typ") != ACCESS_TOKEN_TYPE:
            raise AuthError()
        try:
            claim = Claim(**payload)
        except ValueError:
            raise AuthError()
        if self.blacklist.contains(token):
            raise AuthError()
        return claim

    def logout(self, token: str, claim: Claim) -> None:
        self.blacklist.add(token, float(claim.exp))
        logger.info("Logged out user %s", claim.sub)


def build_blacklist(settings: Settings, redis_client=None) -> TokenBlacklist:
    if settings.blacklist_backend == "redis":
        if redis_client is None:
            raise ValueError("Redis blacklist requires a redis client")
        return RedisTokenBlacklist(redis_client)
    return MemoryTokenBlacklist()


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth


def get_bearer_token(token: str | None = Depends(oauth2_scheme)) -> str:
    if not token:
        raise AuthError()
    return token


def get_current_claim(
    token: str = Depends(get_bearer_token),
    auth: AuthService = Depends(get_auth_service),
) -> Claim:
    """Auth dependency that validates the bearer token and returns its claims."""
    return auth.verify(token)
