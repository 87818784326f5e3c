"""Shared helper functions for presenting feature data."""

from __future__ import annotations

import json
import logging

logger = logging.getLogger("kml_reader.utils.helpers")

PLACEHOLDER = "-"
MAX_OBJECT_TEXT = 100


def safe_string(value: object) -> str:
    """Render an arbitrary property value as display text.

    ``None`` becomes ``"-"``; strings pass through; numbers and booleans
    use their JSON spelling; other objects are JSON-encoded and truncated
    to 100 characters.
    """
    if value is None:
        return PLACEHOLDER
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int | float):
        return str(value)

    try:
        return json.dumps(value, default=str)[:MAX_OBJECT_TEXT]
    except (TypeError, ValueError) as exc:
        logger.warning("Error converting value to string: %s", exc)
        return "[Error converting value]"


def format_measurement(value: float | None, unit: str = "") -> str:
    """Two-decimal display text for a measurement, ``"-"`` when absent."""
    if value is None:
        return PLACEHOLDER
    text = f"{value:.2f}"
    return f"{text} {unit}" if unit else text
