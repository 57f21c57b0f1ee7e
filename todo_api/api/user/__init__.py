from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from todo_api.services.auth import (
    AuthService,
    Claim,
    TokenResponse,
    get_auth_service,
    get_bearer_token,
    get_current_claim,
)


router = APIRouter()


class SignupBody(BaseModel):
    username: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=1)


class LoginBody(BaseModel):
    username: str
    password: str


@router.post("/signup", status_code=status.HTTP_201_CREATED)
def signup(body: SignupBody, auth: AuthService = Depends(get_auth_service)) -> dict:
    """PUBLIC: Register a user with the default role."""
    user = auth.sign_up(username=body.username, email=body.email, password=body.password)
    return user.to_public()


@router.post("/login", response_model=TokenResponse)
def login(body: LoginBody, auth: AuthService = Depends(get_auth_service)) -> TokenResponse:
    """PUBLIC: Exchange username and password for a bearer token."""
    return auth.login(username=body.username, password=body.password)


@router.post("/logout")
def logout(
    token: str = Depends(get_bearer_token),
    claim: Claim = Depends(get_current_claim),
    auth: AuthService = Depends(get_auth_service),
) -> dict:
    """PROTECTED: Blacklist the presented token until it expires."""
    auth.logout(token, claim)
    return {"status": True}
