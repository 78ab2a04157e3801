"""Authentication service for JWT and password handling."""

import logging
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext

from src.config import Settings
from src.exceptions import InvalidTokenError

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash.

    Returns False both on mismatch and when the stored hash is not a
    recognizable bcrypt digest.
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        logger.warning("Stored password hash could not be identified")
        return False


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


class TokenService:
    """Issues and verifies signed, time-bounded access tokens.

    Tokens are stateless: validity depends only on the signature and the
    ``exp`` claim, so a token cannot be revoked before it expires except by
    rotating the secret.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", expiration_minutes: int = 60):
        self.secret = secret
        self.algorithm = algorithm
        self.lifetime = timedelta(minutes=expiration_minutes)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            expiration_minutes=settings.jwt_expiration_minutes,
        )

    def issue(self, user_id: int, now: datetime | None = None) -> str:
        """Create a token for ``user_id`` that expires one lifetime after ``now``."""
        issued_at = now or datetime.now(UTC)
        claims = {
            "sub": str(user_id),
            "userId": user_id,
            "iat": issued_at,
            "exp": issued_at + self.lifetime,
        }
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> int:
        """Return the user id carried by a valid token.

        Raises InvalidTokenError for a bad signature, a malformed token, a
        missing subject or an expired token. Whether the user still exists is
        not checked here.
        """
        if not token:
            logger.debug("Token rejected: empty")
            raise InvalidTokenError()

        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError as e:
            logger.debug(f"Token rejected: {e}")
            raise InvalidTokenError() from e

        try:
            return int(payload["sub"])
        except (KeyError, TypeError, ValueError) as e:
            logger.debug("Token rejected: missing or malformed subject")
            raise InvalidTokenError() from e
