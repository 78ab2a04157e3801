"""FastAPI dependencies for authentication and database."""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import APIKeyHeader
from sqlalchemy.orm import Session

from src.database import get_db
from src.exceptions import TokenNotProvidedError
from src.services.auth import TokenService
from src.services.user_store import UserStore

# The raw header is read so that a token sent without the "Bearer " prefix is
# still accepted.
authorization_header = APIKeyHeader(
    name="Authorization",
    auto_error=False,
    description="Bearer token returned by /login",
)

BEARER_PREFIX = "Bearer "


def get_token_service(request: Request) -> TokenService:
    """Get the token service configured for this application."""
    return request.app.state.token_service


def get_user_store(
    db: Annotated[Session, Depends(get_db)],
) -> UserStore:
    """Get user store bound to the request's session."""
    return UserStore(db)


def extract_token(header_value: str | None) -> str | None:
    """Strip an optional Bearer prefix. Returns None only when no header was sent.

    Whatever remains, even an empty string, is handed to the token check.
    """
    if not header_value:
        return None
    token = header_value
    if token.startswith(BEARER_PREFIX):
        token = token[len(BEARER_PREFIX) :]
    return token.strip()


def get_current_user_id(
    authorization: Annotated[str | None, Depends(authorization_header)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> int:
    """Get the authenticated user id from the Authorization header.

    Only the token is checked; the user it names may since have been deleted,
    and it is not compared against any id in the path.
    """
    token = extract_token(authorization)
    if token is None:
        raise TokenNotProvidedError()

    return tokens.verify(token)
