"""Shared model configuration and lenient field coercion."""

import math
from typing import Any, Optional

from pydantic import BaseModel


def to_camel(name: str) -> str:
    """Convert a snake_case attribute name to its camelCase wire name.

    Digits are kept as-is, so ``moving_averages_5m`` becomes
    ``movingAverages5m``.
    """
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def _finite(value: Any) -> Optional[float]:
    # Ints beyond float range overflow instead of becoming inf.
    try:
        parsed = float(value)
    except (OverflowError, ValueError):
        return None
    return parsed if math.isfinite(parsed) else None


def to_number(value: Any) -> Optional[float]:
    """Parse a finite number, returning None for anything else.

    Booleans are not numbers here, and blank strings are absent.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return _finite(value)
    if isinstance(value, str) and value.strip():
        return _finite(value)
    return None


def to_text(value: Any) -> Optional[str]:
    """Keep strings, stringify numbers, drop everything else."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return str(value) if _finite(value) is not None else None
    return None


def to_choice(value: Any, choices: tuple[str, ...], default: Optional[str]) -> Optional[str]:
    """Return value if it is one of choices, otherwise default."""
    if isinstance(value, str) and value in choices:
        return value
    return default


class JournalModel(BaseModel):
    """Base for every record that crosses the wire in camelCase."""

    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }

    def to_record(self) -> dict:
        """Dump to the camelCase mapping used for storage and JSON output."""
        return self.model_dump(mode="json", by_alias=True)
