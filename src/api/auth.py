"""Registration and login endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_token_service, get_user_store
from src.exceptions import DuplicateEmailError, InvalidCredentialsError
from src.schemas.auth import LoginResponse, UserLogin, UserRegister
from src.schemas.user import MessageResponse
from src.services.auth import TokenService, verify_password
from src.services.user_store import UserStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post(
    "/register",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Email already registered"}},
)
def register(
    user_data: UserRegister,
    store: Annotated[UserStore, Depends(get_user_store)],
):
    """Register a new user."""
    # Fast path; the unique constraint in create() is the real guard
    if store.find_by_email(user_data.email):
        raise DuplicateEmailError()

    store.create(
        email=user_data.email,
        password=user_data.password,
        display_name=user_data.display_name,
        phone_number=user_data.phone_number,
        address=user_data.address,
    )

    return MessageResponse(message="User registered successfully")


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={401: {"description": "Invalid email or password"}},
)
def login(
    credentials: UserLogin,
    store: Annotated[UserStore, Depends(get_user_store)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
):
    """Login with email and password."""
    user = store.find_by_email(credentials.email)
    if user is None:
        logger.info("Login failed: unknown email")
        raise InvalidCredentialsError()

    if not verify_password(credentials.password, user.password_hash):
        logger.info(f"Login failed: wrong password for user {user.id}")
        raise InvalidCredentialsError()

    return LoginResponse(id=user.id, token=tokens.issue(user.id))
