"""Authentication schemas."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

# bcrypt only looks at the first 72 bytes
MAX_PASSWORD_BYTES = 72


class UserRegister(BaseModel):
    """User registration request."""

    model_config = ConfigDict(populate_by_name=True)

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=8)
    display_name: str = Field(..., alias="UserName", max_length=255)
    phone_number: str = Field(..., alias="phoneNumber", max_length=50)
    address: str = Field(..., max_length=500)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return value


class UserLogin(BaseModel):
    """User login request. Any password is accepted here; a wrong one is a 401."""

    email: EmailStr = Field(..., max_length=255)
    password: str


class LoginResponse(BaseModel):
    """Successful login: the user's id and a bearer token."""

    id: int
    token: str
