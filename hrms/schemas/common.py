"""Shared request types and response envelopes."""

from datetime import datetime
from typing import Annotated, ClassVar, Generic, TypeVar

from pydantic import AfterValidator, BaseModel, model_validator

from hrms.shared.utils.datetime import ensure_utc

T = TypeVar("T")

# Naive client datetimes are read as UTC.
UtcDatetime = Annotated[datetime, AfterValidator(ensure_utc)]


class PartialUpdate(BaseModel):
    """Base for PATCH bodies.

    Every field is optional, but fields named in ``not_nullable`` back
    NOT NULL columns: they may be omitted, never sent as an explicit null.
    """

    not_nullable: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="after")
    def reject_nulls(self) -> "PartialUpdate":
        nulls = sorted(
            name for name in self.model_fields_set & self.not_nullable
            if getattr(self, name) is None
        )
        if nulls:
            raise ValueError(f"{', '.join(nulls)} cannot be null")
        return self


class PageResponse(BaseModel, Generic[T]):
    """Paginated list response: {items, total, page, limit, pages}."""

    items: list[T]
    total: int
    page: int
    limit: int
    pages: int


def to_page_response(page, item_schema: type[BaseModel]) -> PageResponse:
    """Convert an application Page of DTOs into the list envelope."""
    return PageResponse[item_schema](  # type: ignore[valid-type]
        items=[item_schema.model_validate(item) for item in page.items],
        total=page.total,
        page=page.page,
        limit=page.limit,
        pages=page.pages,
    )
