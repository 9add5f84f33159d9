"""Request/response schemas for bench record endpoints (camelCase on the wire)."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# Fields a PUT may change; anything else in the body is ignored.
UPDATABLE_FIELDS = ("location", "latitude", "longitude", "notes", "tags")


def _coerce_tags(v: Any) -> Any:
    if v is None or not isinstance(v, list):
        return []
    return v


class BenchRecordCreate(BaseModel):
    """Body for creating a bench record."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        str_strip_whitespace=True,
    )

    timestamp: str = Field(..., min_length=1, max_length=64)
    location: str = Field(..., min_length=1)
    latitude: float
    longitude: float
    accuracy: float | None = None
    notes: str = ""
    tags: list[str] = Field(default_factory=list)
    is_public: bool = False

    @field_validator("notes", mode="before")
    @classmethod
    def default_notes(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("tags", mode="before")
    @classmethod
    def default_tags(cls, v: Any) -> Any:
        return _coerce_tags(v)


class BenchRecordUpdate(BaseModel):
    """Partial update body. Only keys present in the request are applied."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    location: str | None = Field(default=None, min_length=1)
    latitude: float | None = None
    longitude: float | None = None
    notes: str | None = None
    tags: list[str] | None = None

    @field_validator("location", "latitude", "longitude")
    @classmethod
    def reject_null(cls, v: Any) -> Any:
        if v is None:
            raise ValueError("may not be null")
        return v

    @field_validator("notes", mode="before")
    @classmethod
    def default_notes(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("tags", mode="before")
    @classmethod
    def default_tags(cls, v: Any) -> Any:
        return _coerce_tags(v)

    def changes(self) -> dict[str, Any]:
        """Allowlisted fields that were present in the request body."""
        return self.model_dump(exclude_unset=True, include=set(UPDATABLE_FIELDS))


class BenchRecordOut(BaseModel):
    """Bench record as returned by the API."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: str
    timestamp: str
    location: str
    latitude: float
    longitude: float
    date_logged: datetime | None = None
    logged_by: str
    created_at: datetime
    updated_at: datetime
    accuracy: float | None = None
    notes: str = ""
    tags: list[str] = Field(default_factory=list)
    is_public: bool = False
    is_active: bool = True
    version: int


class BenchRecordListResponse(BaseModel):
    """All bench records, newest first."""

    records: list[BenchRecordOut]
    count: int


class BenchRecordDeleteResponse(BaseModel):
    """Confirmation of a hard delete."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    deleted_id: str
