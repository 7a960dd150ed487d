"""Shared plumbing for server-side actions.

Actions validate form input, call the store and report back the way a
form expects: field-keyed errors plus an optional message.
"""

from __future__ import annotations

import logging
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, TypeVar

import pydantic
from pydantic_core import PydanticCustomError

from warehouse.config import ListingConfig
from warehouse.core.listing import Page, paginate, sort_records
from warehouse.exceptions import ApiError, InvalidEntityStateError, ValidationError
from warehouse.store.base import EntityStore

logger = logging.getLogger(__name__)

GENERAL = "general"

M = TypeVar("M", bound=pydantic.BaseModel)


@dataclass
class FormState:
    """Outcome of a form submission."""

    errors: dict[str, list[str]] = field(default_factory=dict)
    message: str | None = None

    @property
    def ok(self) -> bool:
        return not self.errors

    @classmethod
    def failed(cls, field_name: str, message: str) -> "FormState":
        return cls(errors={field_name: [message]})

    @classmethod
    def from_error(cls, error: ValidationError) -> "FormState":
        return cls(errors={key: list(value) for key, value in error.errors.items()})


@dataclass
class OperationResult:
    """Outcome of a one-shot operation such as a delete."""

    success: bool
    message: str


class CacheInvalidator:
    """Collects dashboard paths whose cached views are stale.

    Subscribers are called with each path as it is revalidated.
    """

    def __init__(self) -> None:
        self.paths: list[str] = []
        self._subscribers: list[Callable[[str], None]] = []

    def subscribe(self, callback: Callable[[str], None]) -> None:
        self._subscribers.append(callback)

    def revalidate(self, *paths: str) -> None:
        for path in paths:
            logger.debug("Revalidating %s", path)
            self.paths.append(path)
            for callback in self._subscribers:
                callback(path)

    def clear(self) -> None:
        self.paths.clear()


def validate_form(schema: type[M], data: Mapping[str, Any]) -> M:
    """Validate ``data`` against ``schema``.

    Raises
    ------
    ValidationError
        With every failing field keyed by its form name.
    """
    try:
        return schema.model_validate(dict(data))
    except pydantic.ValidationError as exc:
        errors: dict[str, list[str]] = {}
        for issue in exc.errors():
            key = _form_field(schema, issue["loc"])
            errors.setdefault(key, []).append(issue["msg"])
        raise ValidationError.from_errors(errors) from exc


def _form_field(schema: type[pydantic.BaseModel], loc: tuple) -> str:
    if not loc:
        return GENERAL
    name = str(loc[0])
    info = schema.model_fields.get(name)
    if info is not None and info.alias:
        return info.alias
    return name


# Validator helpers used by the form schemas


def required_text(value: Any, required: str, max_length: int | None = None, too_long: str | None = None) -> str:
    text = "" if value is None else str(value).strip()
    if not text:
        raise PydanticCustomError("required", required)
    if max_length is not None and len(text) > max_length:
        raise PydanticCustomError("too_long", too_long or required)
    return text


def optional_text(value: Any, max_length: int, too_long: str) -> str:
    text = "" if value is None else str(value).strip()
    if len(text) > max_length:
        raise PydanticCustomError("too_long", too_long)
    return text


def required_uuid(value: Any, required: str, invalid: str) -> str:
    text = required_text(value, required)
    try:
        uuid.UUID(text)
    except ValueError:
        raise PydanticCustomError("uuid", invalid) from None
    return text


def is_constraint_violation(exc: Exception) -> bool:
    """A delete refused because other records still reference the entity."""
    if isinstance(exc, InvalidEntityStateError):
        return True
    return isinstance(exc, ApiError) and "constraint" in str(exc)


class BaseActions(ABC):
    """Common wiring for the per-entity action classes.

    Mutations return field-keyed validation errors and state conflicts in
    their result. ``NotFoundError``, ``BackendUnavailableError`` and other
    ``ApiError``s propagate: the caller shows an unavailability state and
    lets the user retry.

    Parameters
    ----------
    store : EntityStore
        Where entities are read from and written to.
    invalidator : CacheInvalidator | None
        Receives the dashboard paths touched by each mutation.
    listing : ListingConfig | None
        Page size and "recent" list length.
    clock : Callable[[], datetime] | None
        Source of the current time for derived fields.
    """

    def __init__(
        self,
        store: EntityStore,
        invalidator: CacheInvalidator | None = None,
        listing: ListingConfig | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.store = store
        self.invalidator = invalidator or CacheInvalidator()
        self.listing = listing or ListingConfig()
        self._clock = clock

    def now(self) -> datetime:
        return self._clock() if self._clock else datetime.now(timezone.utc)

    @abstractmethod
    def search(self, query: str) -> list:
        """Records matching ``query``, case-insensitively."""

    def page(
        self,
        query: str = "",
        sort_by: str | None = None,
        order: str = "asc",
        limit: int | None = None,
        offset: int = 0,
    ) -> Page:
        """Search, optionally sort, then slice one page of results."""
        records = self.search(query)
        if sort_by:
            records = sort_records(records, sort_by, order)
        return paginate(records, limit or self.listing.page_size, offset)
