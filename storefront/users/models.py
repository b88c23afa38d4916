from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from storefront.utils.validators import validate_password_strength


class RegisterRequest(BaseModel):
    # Pas de str_strip_whitespace global: le mot de passe est haché tel que saisi
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=8)
    username: Optional[str] = None
    address: Optional[str] = None
    postcode: Optional[str] = Field(default=None, alias="pinCode")
    country: Optional[str] = None
    phone: Optional[str] = None

    @field_validator("name", "email", "username", "address", "postcode", "country", "phone", mode="before")
    @classmethod
    def strip_text(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("password")
    def password_strength(cls, v: str) -> str:
        return validate_password_strength(v)


class UserOut(BaseModel):
    id: str
    name: str
    email: str
    username: Optional[str] = None
    address: Optional[str] = None
    postcode: Optional[str] = None
    country: Optional[str] = None
    phone: Optional[str] = None
    created_at: Optional[str] = None
