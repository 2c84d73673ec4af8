from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, TypeVar

from boostiq.errors import CollectionFieldError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def is_default(self) -> bool:
        return False


@dataclass(frozen=True)
class Default(Generic[T]):
    value: T
    error: CollectionFieldError

    @property
    def is_default(self) -> bool:
        return True


FieldReading = Ok[T] | Default[T]


async def read_field(
    field: str,
    reader: Callable[[], T | None | Awaitable[T | None]],
    default: T,
) -> FieldReading[T]:
    """Run one provider read, substituting ``default`` if it fails or is empty."""
    try:
        value = reader()
        if inspect.isawaitable(value):
            value = await value
    except Exception as exc:
        error = exc if isinstance(exc, CollectionFieldError) else CollectionFieldError(field, str(exc))
        logger.warning("Falling back to default for %s: %s", field, error)
        return Default(default, error)
    if value is None or value == "":
        logger.warning("Falling back to default for %s: no value reported", field)
        return Default(default, CollectionFieldError(field, "no value reported"))
    return Ok(value)
