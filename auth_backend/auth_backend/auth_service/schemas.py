from pydantic import BaseModel, EmailStr, Field, field_validator

from typing import Optional


def _strip_required(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("must not be blank")
    return v


class RegisterRequest(BaseModel):
    full_name: str = Field(..., min_length=2, max_length=255)
    phone_number: str = Field(..., min_length=10, max_length=32)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72)

    @field_validator("full_name", "phone_number")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return _strip_required(v)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "full_name": "Jane Doe",
                    "phone_number": "+1555000111",
                    "email": "jane@example.com",
                    "password": "Secret123"
                }
            ]
        }
    }


class LoginRequest(BaseModel):
    # At least one identifier is required; AuthService rejects the call otherwise.
    email: Optional[EmailStr] = None
    phone_number: Optional[str] = Field(None, max_length=32)
    password: str = Field(..., min_length=1, max_length=72)

    @field_validator("phone_number")
    @classmethod
    def strip_phone(cls, v: Optional[str]) -> Optional[str]:
        # Stored numbers are stripped at registration, so lookups must match.
        if v is None:
            return v
        return v.strip() or None


class RefreshRequest(BaseModel):
    refresh_token: str = Field(..., min_length=1)
