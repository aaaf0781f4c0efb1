# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, EmailStr, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError

from authgate.domain.accounts.entities import AccountSummary
from authgate.shared.errors.validation import raise_validation_error
from authgate.shared.errors.validation_types import ValidationErrorType


def _not_blank(value: str, field: str) -> str:
    if not value.strip():
        raise PydanticCustomError(
            ValidationErrorType.BLANK,
            "{field} must not be blank",
            {"field": field},
        )
    return value


class SignupRequestDTO(BaseModel):
    username: str = Field(min_length=3, max_length=20)
    email: EmailStr = Field(max_length=50)
    password: str = Field(min_length=6, max_length=40)

    @field_validator("username")
    @classmethod
    def validate_username(cls, value: str) -> str:
        return _not_blank(value, "username")


class SigninRequestDTO(BaseModel):
    username: str
    password: str

    @field_validator("username")
    @classmethod
    def validate_username(cls, value: str) -> str:
        return _not_blank(value, "username")

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        return _not_blank(value, "password")


class UserInfoDTO(BaseModel):
    id: int
    username: str
    email: str

    @classmethod
    def from_summary(cls, summary: AccountSummary) -> UserInfoDTO:
        return cls(id=summary.id, username=summary.username, email=summary.email)


class MessageDTO(BaseModel):
    message: str


def parse_signup_request(payload: Any) -> SignupRequestDTO:
    """Validate a sign-up body; raises ``ValidationError`` (400) listing the bad fields."""
    try:
        return SignupRequestDTO.model_validate(payload if payload is not None else {})
    except PydanticValidationError as exc:
        raise_validation_error(exc)


def parse_signin_request(payload: Any) -> SigninRequestDTO:
    try:
        return SigninRequestDTO.model_validate(payload if payload is not None else {})
    except PydanticValidationError as exc:
        raise_validation_error(exc)


__all__ = [
    "MessageDTO",
    "SigninRequestDTO",
    "SignupRequestDTO",
    "UserInfoDTO",
    "parse_signin_request",
    "parse_signup_request",
]
