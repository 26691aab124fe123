"""
Error types for contentmodel decoding.

Encoding has no error path: every value that can be constructed through the
public models encodes. Everything here is raised while turning a generic JSON
tree into typed objects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


class CodecError(Exception):
    """Base exception for all contentmodel codec errors."""

    def __init__(self, message: str, context: ErrorContext | None = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}: {self.message}"
        return self.message


class UnknownDiscriminator(CodecError):
    """
    Raised when a JSON node matches no registered variant.

    Fatal for constraint trees, whose vocabulary is closed. Validators and
    control settings fall back to an opaque variant instead of raising.

    Attributes:
        registry: Name of the registry that was consulted
        keys: Object keys seen on the node (key-based dispatch)
        value: The external tag that failed to resolve (tag-based dispatch)
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        registry: str = "",
        keys: tuple[str, ...] = (),
        value: Any = None,
    ):
        self.registry = registry
        self.keys = keys
        self.value = value
        super().__init__(message, context)


class MalformedPayload(CodecError):
    """
    Raised when a node's structure violates the shape of its variant.

    Examples:
    - Two discriminating keys on one object
    - A `not` holding an array instead of one constraint
    - A bound that is not a number
    """

    pass


class MalformedValidator(MalformedPayload):
    """Raised when a field validation object cannot be decoded."""

    pass


class MalformedConstraint(MalformedPayload):
    """Raised when a policy constraint tree cannot be decoded."""

    pass


class RecursionLimitExceeded(MalformedConstraint):
    """
    Raised when a constraint tree nests deeper than the configured limit.

    Attributes:
        limit: The max_depth that was exceeded
    """

    def __init__(self, message: str, context: ErrorContext | None = None, *, limit: int = 0):
        self.limit = limit
        super().__init__(message, context)


class MalformedSettings(MalformedPayload):
    """Raised when editor interface control settings cannot be decoded."""

    pass


@dataclass
class ErrorContext:
    """
    Location of an error inside the JSON tree being decoded.

    Attributes:
        path: Object keys and array indexes leading from the root to the node
    """

    path: tuple[str | int, ...] = field(default_factory=tuple)

    def format(self) -> str:
        """
        Format the location as a JSONPath-like string.

        Returns:
            Formatted string like: "$.policies[1].constraint.and[0]"
        """
        parts = ["$"]
        for segment in self.path:
            if isinstance(segment, int):
                parts.append(f"[{segment}]")
            else:
                parts.append(f".{segment}")
        return "".join(parts)


def make_error(
    error_cls: type[CodecError],
    message: str,
    path: tuple[str | int, ...] = (),
    **kwargs: Any,
) -> CodecError:
    """
    Helper to create a codec error located at a JSON path.

    Args:
        error_cls: Concrete error class to instantiate
        message: Error description
        path: Location of the offending node
        **kwargs: Extra keyword arguments for the error class

    Returns:
        Error instance with context attached
    """
    return error_cls(message, ErrorContext(path=path), **kwargs)
