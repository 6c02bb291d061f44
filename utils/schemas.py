"""
Pydantic Schemas - Data Models

Defines the Pydantic schemas shared by the store, pipeline and API:
- UserRecord: the persisted representation of one created user
- CreateUserResult: the combined create response payload
- ErrorResponse: fixed-message failure body

Usage:
    from utils.schemas import UserRecord

    user = UserRecord.from_payload({"name": "Ann", "email": "a@x.com", "age": 30})
    line = user.to_json_line()
"""

from collections.abc import Mapping
from typing import Any

import orjson
from pydantic import BaseModel, ConfigDict, Field


class UserRecord(BaseModel):
    """User record as received, with no validation.

    Values are stored exactly as the client sent them: a missing field stays
    missing (it is excluded from the serialized line) and a wrong-typed one is
    kept with its original type. Unknown keys are dropped.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: Any = Field(default=None, description="Display name")
    email: Any = Field(default=None, description="Email address")
    age: Any = Field(default=None, description="Age")

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "UserRecord":
        """Extract the record fields from a decoded JSON object."""
        return cls.model_validate(
            {key: payload[key] for key in ("name", "email", "age") if key in payload}
        )

    def to_dict(self) -> dict[str, Any]:
        """Fields that were actually provided, in declaration order."""
        return self.model_dump(exclude_unset=True)

    def to_json_line(self) -> bytes:
        """Serialize as one newline-terminated JSON object."""
        return orjson.dumps(self.to_dict()) + b"\n"


class CreateUserResult(BaseModel):
    """Outcome of a completed create pipeline."""

    model_config = ConfigDict(frozen=True)

    user: UserRecord
    activity: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {"user": self.user.to_dict(), "activity": self.activity}


class ErrorResponse(BaseModel):
    error: str
