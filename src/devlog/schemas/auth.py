from pydantic import BaseModel, EmailStr, Field, field_validator
from zxcvbn import zxcvbn

from src.devlog.core.security import normalize_username, validate_username_format
from src.devlog.schemas.account import AccountRead

# Minimum zxcvbn score (0-4 scale): 3 = "safely unguessable"
MIN_PASSWORD_SCORE = 3


class SignUpRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=100)
    username: str = Field(
        min_length=1,
        max_length=64,
        json_schema_extra={
            "examples": ["ada", "grace-hopper"],
            "description": "Public handle used in profile URLs. Cannot be changed later.",
        },
    )
    display_name: str | None = Field(default=None, max_length=100)

    @field_validator("password")
    @classmethod
    def validate_password_strength(cls, v: str) -> str:
        """Validate password strength using zxcvbn entropy estimation."""
        result = zxcvbn(v)
        if result["score"] < MIN_PASSWORD_SCORE:
            feedback = result.get("feedback", {})
            warning = feedback.get("warning", "")
            suggestions = feedback.get("suggestions", [])

            if warning:
                raise ValueError(f"Weak password: {warning}")
            elif suggestions:
                raise ValueError(f"Weak password: {suggestions[0]}")
            else:
                raise ValueError(
                    "Password is too weak. Use a longer password with a mix of characters."
                )
        return v

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        return validate_username_format(normalize_username(v))


class SignInRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=100)


class SignInResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    account: AccountRead
