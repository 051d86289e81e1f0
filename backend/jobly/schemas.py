"""
Request models for the v1 API.

Field names are snake_case in Python and camelCase on the wire. Update models
are dumped with ``exclude_unset`` so a partial update only carries the keys
the client actually sent. An explicit ``null`` is kept for nullable columns
(numEmployees, logoUrl, salary, equity) and rejected for the others. Search
models are dumped with ``exclude_none`` so an omitted filter is simply absent.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Optional, Type, TypeVar

from flask import request
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from jobly.core.errors import ValidationError

M = TypeVar("M", bound="RequestModel")

_EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

# Upper bound of a PostgreSQL INTEGER column.
_INT_MAX = 2**31 - 1


def _reject_null(value):
    if value is None:
        raise ValueError("may not be null")
    return value


class RequestModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    def payload(self) -> Dict[str, Any]:
        """Fields the client sent, keyed by their camelCase names."""
        return self.model_dump(by_alias=True, exclude_unset=True)

    def criteria(self) -> Dict[str, Any]:
        """Filters that were given a value, keyed by their camelCase names."""
        return self.model_dump(by_alias=True, exclude_none=True)


def parse_body(model: Type[M]) -> M:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return model.model_validate(data)


def parse_args(model: Type[M]) -> M:
    return model.model_validate(request.args.to_dict())


# ---------------------------------------------------------------------------
# Companies
# ---------------------------------------------------------------------------

class CompanyNew(RequestModel):
    handle: str = Field(min_length=1, max_length=25)
    name: str = Field(min_length=1)
    description: str
    num_employees: Optional[int] = Field(default=None, ge=0, le=_INT_MAX)
    logo_url: Optional[str] = None


class CompanyUpdate(RequestModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    num_employees: Optional[int] = Field(default=None, ge=0, le=_INT_MAX)
    logo_url: Optional[str] = None

    reject_nulls = field_validator("name", "description")(_reject_null)


class CompanySearch(RequestModel):
    name: Optional[str] = None
    min_employees: Optional[int] = Field(default=None, ge=0, le=_INT_MAX)
    max_employees: Optional[int] = Field(default=None, ge=0, le=_INT_MAX)


# ---------------------------------------------------------------------------
# Jobs
# ---------------------------------------------------------------------------

class JobNew(RequestModel):
    title: str = Field(min_length=1)
    salary: Optional[int] = Field(default=None, ge=0, le=_INT_MAX)
    equity: Optional[Decimal] = Field(default=None, ge=0, le=1)
    company_handle: str = Field(min_length=1, max_length=25)


class JobUpdate(RequestModel):
    title: Optional[str] = Field(default=None, min_length=1)
    salary: Optional[int] = Field(default=None, ge=0, le=_INT_MAX)
    equity: Optional[Decimal] = Field(default=None, ge=0, le=1)

    reject_nulls = field_validator("title")(_reject_null)


class JobSearch(RequestModel):
    title: Optional[str] = None
    min_salary: Optional[int] = Field(default=None, ge=0, le=_INT_MAX)
    has_equity: Optional[bool] = None


# ---------------------------------------------------------------------------
# Users / auth
# ---------------------------------------------------------------------------

class UserAuth(RequestModel):
    username: str = Field(min_length=1, max_length=25)
    password: str = Field(min_length=1)


class UserRegister(RequestModel):
    username: str = Field(min_length=1, max_length=25)
    password: str = Field(min_length=5, max_length=20)
    first_name: str = Field(min_length=1, max_length=30)
    last_name: str = Field(min_length=1, max_length=30)
    email: str = Field(min_length=6, max_length=60, pattern=_EMAIL_PATTERN)


class UserNew(UserRegister):
    is_admin: bool = False


class UserUpdate(RequestModel):
    password: Optional[str] = Field(default=None, min_length=5, max_length=20)
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=30)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=30)
    email: Optional[str] = Field(default=None, min_length=6, max_length=60, pattern=_EMAIL_PATTERN)

    reject_nulls = field_validator("password", "first_name", "last_name", "email")(_reject_null)
