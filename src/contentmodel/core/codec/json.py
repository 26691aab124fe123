"""Canonical JSON text for encoded payloads."""

from __future__ import annotations

import json
from typing import Any


def dumps(value: Any) -> str:
    """
    Serialize a generic JSON tree compactly, keeping key order.

    This is the byte form the service's consumers compare against, e.g.
    ``{"equals":[{"doc":"sys.type"},"Entry"]}``.
    """
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


def loads(text: str | bytes) -> Any:
    """Parse JSON text into a generic tree (dicts keep document key order)."""
    return json.loads(text)
