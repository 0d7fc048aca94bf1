from __future__ import annotations

import re
from datetime import datetime
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)
from pydantic_core import PydanticCustomError

from safisha_client.domain.users import User, UserRole

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def _check_email(value: str) -> str:
    value = value.strip()
    if not _EMAIL_RE.match(value):
        raise PydanticCustomError(
            "email_invalid",
            "Please enter a valid email address",
            {},
        )
    return value


class LoginRequestDTO(BaseModel):
    identifier: str = Field(min_length=1, max_length=254)
    password: str = Field(min_length=1, max_length=128)

    @field_validator("identifier")
    @classmethod
    def strip_identifier(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise PydanticCustomError("missing", "Identifier cannot be empty", {})
        return value


class RegisterRequestDTO(BaseModel):
    first_name: str = Field(min_length=2, max_length=64)
    last_name: str = Field(min_length=2, max_length=64)
    email: str
    password: str = Field(min_length=6, max_length=128)
    role: UserRole = UserRole.CUSTOMER
    phone: str | None = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return _check_email(value)

    @field_validator("role", mode="before")
    @classmethod
    def normalize_role(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower().replace("-", "_")
        return value

    @field_validator("role")
    @classmethod
    def reject_admin(cls, value: UserRole) -> UserRole:
        if value is UserRole.ADMIN:
            raise PydanticCustomError(
                "role_not_allowed",
                "Accounts can only register as customer or service_provider",
                {},
            )
        return value

    @field_validator("phone")
    @classmethod
    def blank_phone_is_none(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            return None
        return value


class ForgotPasswordDTO(BaseModel):
    email: str

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return _check_email(value)


class ResetPasswordDTO(BaseModel):
    model_config = ConfigDict(validate_by_name=True)

    token: str = Field(min_length=1)
    new_password: str = Field(min_length=6, max_length=128, alias="newPassword")


class VerifyEmailDTO(BaseModel):
    token: str = Field(min_length=1)


class FederatedCallbackDTO(BaseModel):
    code: str = Field(min_length=1)


class RefreshRequestDTO(BaseModel):
    model_config = ConfigDict(validate_by_name=True)

    refresh_token: str = Field(min_length=1, alias="refreshToken")


class UserDTO(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    email: str = ""
    role: UserRole
    first_name: str = Field("", validation_alias=AliasChoices("first_name", "firstName"))
    last_name: str = Field("", validation_alias=AliasChoices("last_name", "lastName"))
    phone: str | None = None
    is_active: bool = Field(True, validation_alias=AliasChoices("is_active", "isActive"))
    is_verified: bool = Field(
        False, validation_alias=AliasChoices("is_verified", "isVerified")
    )
    created_at: datetime | None = Field(
        None, validation_alias=AliasChoices("created_at", "createdAt")
    )
    updated_at: datetime | None = Field(
        None, validation_alias=AliasChoices("updated_at", "updatedAt")
    )

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("role", mode="before")
    @classmethod
    def normalize_role(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower().replace("-", "_")
        return value

    @field_validator("first_name", "last_name", mode="before")
    @classmethod
    def none_is_blank(cls, value: Any) -> Any:
        return "" if value is None else value

    def to_entity(self) -> User:
        return User(
            id=self.id,
            email=self.email,
            role=self.role,
            first_name=self.first_name,
            last_name=self.last_name,
            phone=self.phone,
            is_active=self.is_active,
            is_verified=self.is_verified,
            created_at=self.created_at,
            updated_at=self.updated_at,
            profile=dict(self.model_extra or {}),
        )


class AuthTokensDTO(BaseModel):
    access_token: str | None = Field(
        None, validation_alias=AliasChoices("accessToken", "access_token", "token")
    )
    refresh_token: str | None = Field(
        None, validation_alias=AliasChoices("refreshToken", "refresh_token")
    )


class AuthResponseDTO(BaseModel):
    token: str | None = Field(
        None, validation_alias=AliasChoices("token", "accessToken", "access_token")
    )
    refresh_token: str | None = Field(
        None, validation_alias=AliasChoices("refreshToken", "refresh_token")
    )
    tokens: AuthTokensDTO | None = None
    user: UserDTO | None = None
    message: str | None = None

    @model_validator(mode="before")
    @classmethod
    def unwrap_data_envelope(cls, value: Any) -> Any:
        if isinstance(value, dict) and "user" not in value and isinstance(value.get("data"), dict):
            return value["data"]
        return value

    @property
    def access_token(self) -> str | None:
        if self.token:
            return self.token
        if self.tokens and self.tokens.access_token:
            return self.tokens.access_token
        return None

    @property
    def resolved_refresh_token(self) -> str | None:
        if self.refresh_token:
            return self.refresh_token
        if self.tokens:
            return self.tokens.refresh_token
        return None


class ProfileResponseDTO(BaseModel):
    user: UserDTO

    @model_validator(mode="before")
    @classmethod
    def wrap_bare_user(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        if isinstance(value.get("user"), dict):
            return {"user": value["user"]}
        data = value.get("data")
        if isinstance(data, dict):
            return {"user": data.get("user") if isinstance(data.get("user"), dict) else data}
        return {"user": value}
