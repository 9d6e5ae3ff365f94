"""FastAPI endpoints for sign-up, login and the current user."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.api.dependencies import authenticated_user_id
from storefront.api.schemas import AuthResponse, LoginRequest, SignUpRequest, UserResponse
from storefront.identity.account import SignUp, authenticate, fetch_user
from storefront.identity.tokens import issue_token

auth_router = APIRouter(prefix="/auth", tags=["auth"])


@auth_router.post("/signup", status_code=201, response_model=AuthResponse)
async def sign_up(body: SignUpRequest) -> AuthResponse:
    command = SignUp(name=body.name, email=body.email, password=body.password)
    user_id = current_domain.process(command, asynchronous=False)
    user = fetch_user(user_id)
    return AuthResponse(token=issue_token(user), user=UserResponse.from_user(user))


@auth_router.post("/login", response_model=AuthResponse)
async def login(body: LoginRequest) -> AuthResponse:
    user = authenticate(body.email, body.password)
    return AuthResponse(token=issue_token(user), user=UserResponse.from_user(user))


@auth_router.get("/me", response_model=UserResponse)
async def me(user_id: str = Depends(authenticated_user_id)) -> UserResponse:
    return UserResponse.from_user(fetch_user(user_id))
