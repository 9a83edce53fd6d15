from __future__ import annotations

from typing import Any, TypeVar

from placement_engine.core.errors import EngineValidationError

T = TypeVar("T")


def require(value: Any, model: type[T], label: str) -> T:
    if not isinstance(value, model):
        raise EngineValidationError(
            f"{label} must be a normalized {model.__name__}, got {type(value).__name__}",
            code="invalid_record",
        )
    return value
