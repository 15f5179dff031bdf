import re
from typing import Any, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, field_validator

ALPHANUMERIC = re.compile(r"^[A-Za-z0-9]+$")
MOBILE_NUMBER = re.compile(r"^\+?[0-9]{7,15}$")


def _required(value, message):
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError(message)
    return value.strip()


def _check_email(value: str) -> str:
    try:
        return validate_email(value, check_deliverability=False).normalized.lower()
    except EmailNotValidError:
        raise ValueError("Invalid email")


def _check_password(value: str) -> str:
    if not ALPHANUMERIC.match(value):
        raise ValueError("Password must be alphanumeric")
    return value


def _check_mobile(value: str) -> str:
    compact = re.sub(r"[\s()-]", "", value)
    if not MOBILE_NUMBER.match(compact):
        raise ValueError("Invalid mobile number")
    return compact


class UserCreate(BaseModel):
    # Fields default to None so a missing field reports its own message
    name: Optional[str] = Field(default=None, validate_default=True)
    email: Optional[str] = Field(default=None, validate_default=True)
    password: Optional[str] = Field(default=None, validate_default=True)
    mobile: Optional[str] = Field(default=None, validate_default=True)

    @field_validator("name")
    @classmethod
    def name_required(cls, v):
        return _required(v, "Name is required!")

    @field_validator("email")
    @classmethod
    def email_valid(cls, v):
        return _check_email(_required(v, "Email is required!"))

    @field_validator("password")
    @classmethod
    def password_valid(cls, v):
        return _check_password(_required(v, "Password is required!"))

    @field_validator("mobile")
    @classmethod
    def mobile_valid(cls, v):
        return _check_mobile(_required(v, "Mobile is required!"))


class UserUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    mobile: Optional[str] = None
    active: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v):
        return None if v is None else _required(v, "Name is required!")

    @field_validator("email")
    @classmethod
    def email_valid(cls, v):
        return None if v is None else _check_email(_required(v, "Email is required!"))

    @field_validator("password")
    @classmethod
    def password_valid(cls, v):
        return None if v is None else _check_password(_required(v, "Password is required!"))

    @field_validator("mobile")
    @classmethod
    def mobile_valid(cls, v):
        return None if v is None else _check_mobile(_required(v, "Mobile is required!"))


class LoginRequest(BaseModel):
    email: Optional[str] = Field(default=None, validate_default=True)
    password: Optional[str] = Field(default=None, validate_default=True)

    @field_validator("email")
    @classmethod
    def email_required(cls, v):
        return _required(v, "Email is required!").lower()

    @field_validator("password")
    @classmethod
    def password_required(cls, v):
        return _required(v, "Password is required!")


class ApiResponse(BaseModel):
    data: Any = None
    message: str
    success: bool = True


class HealthResponse(BaseModel):
    message: str
    version: str
    pid: int
