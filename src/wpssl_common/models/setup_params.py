"""Operator-supplied setup parameters."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

from wpssl_common.validation import validate_domain, validate_email, validate_site_name


class SetupParameters(BaseModel):
    """Everything a run needs from the operator, gathered once and never mutated."""

    model_config = ConfigDict(frozen=True)

    domain: str
    email: str
    db_user: str = Field(min_length=1)
    db_password: SecretStr
    db_name: str = Field(min_length=1)
    site_name: str = Field(min_length=1)

    @field_validator("domain")
    @classmethod
    def _check_domain(cls, value: str) -> str:
        if not validate_domain(value):
            raise ValueError("Invalid domain name format")
        return value.lower()

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        if not validate_email(value):
            raise ValueError("Invalid email address format")
        return value

    @field_validator("db_password")
    @classmethod
    def _check_password(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value():
            raise ValueError("Database password must not be empty")
        return value

    @field_validator("site_name")
    @classmethod
    def _check_site_name(cls, value: str) -> str:
        if not validate_site_name(value):
            raise ValueError("Site name must be a single directory name")
        return value

    @property
    def www_domain(self) -> str:
        return f"www.{self.domain}"
