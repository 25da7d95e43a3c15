"""
Per-field checks for untrusted payload values.

Each check returns either ``Present(value)`` or the ``MISSING`` marker.
``resolve`` turns that into a concrete value, drawing a default and
recording a warning when the field needs one.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Callable, Generic, List, TypeVar, Union

T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Present(Generic[T]):
    value: T


class _Missing:
    _instance = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()

Checked = Union[Present[T], _Missing]


def check_text(value: Any) -> Checked[str]:
    if isinstance(value, str) and value.strip():
        return Present(value)
    return MISSING


def check_number(value: Any) -> Checked[Union[int, float]]:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return Present(value)
    return MISSING


def check_finite_number(value: Any) -> Checked[Union[int, float]]:
    checked = check_number(value)
    if isinstance(checked, Present) and math.isfinite(checked.value):
        return checked
    return MISSING


def check_truthy(value: Any) -> Checked[Any]:
    """
    Present unless the value is one of the JSON falsy values: None, False,
    zero, NaN or the empty string. Empty lists and dicts count as present.
    """
    if value is None or value is False:
        return MISSING
    if isinstance(value, str):
        return Present(value) if value else MISSING
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if value == 0 or math.isnan(value):
            return MISSING
    return Present(value)


def warn(warnings: List[str], message: str) -> None:
    warnings.append(message)
    logger.debug("defaulted: %s", message)


def value_or(checked: Checked[T], fallback: T) -> T:
    """Unwrap without recording anything (used where the caller warns itself)."""
    return checked.value if isinstance(checked, Present) else fallback


def resolve(
    checked: Checked[T],
    default: Callable[[], T],
    warnings: List[str],
    message: str,
) -> T:
    if isinstance(checked, Present):
        return checked.value

    warn(warnings, message)
    return default()
