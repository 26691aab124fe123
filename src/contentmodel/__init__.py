"""
contentmodel - typed codec for a hosted content-management API.

Converts role constraint trees, content type field validations, and editor
interface control settings between generic JSON and frozen pydantic models.
"""

from __future__ import annotations

# Re-export commonly used types for convenience
from ._version import __version__
from .core import ir
from .core.codec import dumps, loads
from .core.config import CodecConfig, load_config
from .core.errors import (
    CodecError,
    MalformedConstraint,
    MalformedPayload,
    MalformedSettings,
    MalformedValidator,
    RecursionLimitExceeded,
    UnknownDiscriminator,
)

__all__ = [
    "__version__",
    "ir",
    "dumps",
    "loads",
    "CodecConfig",
    "load_config",
    "CodecError",
    "MalformedConstraint",
    "MalformedPayload",
    "MalformedSettings",
    "MalformedValidator",
    "RecursionLimitExceeded",
    "UnknownDiscriminator",
]
