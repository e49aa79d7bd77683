from __future__ import annotations

from partstream.errors import InvalidArgumentError
from partstream.parts import UNKNOWN_LENGTH, is_source


def validate_int(value: object, name: str) -> int:
    # bool is an int subclass but never a meaningful length
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidArgumentError(f"{name} is incorrectly typed")
    return value


def validate_length(value: object, name: str) -> int:
    validate_int(value, name)
    if value < UNKNOWN_LENGTH:  # type: ignore[operator]
        raise InvalidArgumentError(f"{name} < -1")
    return value  # type: ignore[return-value]


def validate_positive_int(value: object, name: str) -> int:
    validate_int(value, name)
    if value <= 0:  # type: ignore[operator]
        raise InvalidArgumentError(f"{name} <= 0")
    return value  # type: ignore[return-value]


def validate_str(value: object, name: str) -> str:
    if not isinstance(value, str):
        raise InvalidArgumentError(f"{name} is incorrectly typed")
    return value


def validate_non_empty_str(value: object, name: str) -> str:
    validate_str(value, name)
    if not value.strip():  # type: ignore[union-attr]
        raise InvalidArgumentError(f"{name} must be non-empty")
    return value  # type: ignore[return-value]


def validate_source(value: object, name: str) -> None:
    if not is_source(value):
        raise InvalidArgumentError(f"{name} is incorrectly typed")
