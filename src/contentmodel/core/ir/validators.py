"""
Field validation types for content type fields.

Each validator kind owns exactly its own parameters. The set of kinds is
open: the service adds new ones over time, and anything the client does not
recognise is kept verbatim as an `OpaqueValidator`.

Numeric bounds are inclusive and either side may be absent (None). None is
an open bound, distinct from a bound of 0.
"""

from __future__ import annotations

import copy
from enum import StrEnum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .constraints import FiniteFloat


class MimetypeGroup(StrEnum):
    """Asset mimetype groups accepted by `linkMimetypeGroup`."""

    ATTACHMENT = "attachment"
    PLAINTEXT = "plaintext"
    IMAGE = "image"
    AUDIO = "audio"
    VIDEO = "video"
    RICHTEXT = "richtext"
    PRESENTATION = "presentation"
    SPREADSHEET = "spreadsheet"
    PDFDOCUMENT = "pdfdocument"
    ARCHIVE = "archive"
    CODE = "code"
    MARKUP = "markup"


class FieldValidator(BaseModel):
    """
    Base class for field validators.

    Attributes:
        message: Custom error message shown by the service when validation fails
    """

    wire_key: ClassVar[str] = ""

    message: str | None = None

    model_config = ConfigDict(frozen=True, extra="forbid")

    @model_validator(mode="before")
    @classmethod
    def reject_abstract(cls, data: Any) -> Any:
        """Only kinds with a wire key, or the opaque passthrough, can be built."""
        if not cls.wire_key and not issubclass(cls, OpaqueValidator):
            raise ValueError(f"{cls.__name__} is abstract; use a concrete validator")
        return data


class _BoundedValidator(FieldValidator):
    """Inclusive min/max pair where at least one side is set."""

    min: int | FiniteFloat | None = None
    max: int | FiniteFloat | None = None

    @model_validator(mode="after")
    def check_bounds(self) -> _BoundedValidator:
        if self.min is None and self.max is None:
            raise ValueError(f"{type(self).__name__} needs at least one of min or max")
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError(f"min ({self.min}) is greater than max ({self.max})")
        return self


class SizeValidator(_BoundedValidator):
    """
    Length of text or number of array items.

    Examples:
        - SizeValidator(min=3, max=100) → {"size": {"min": 3, "max": 100}}
        - SizeValidator(max=8) → {"size": {"max": 8}}
    """

    wire_key: ClassVar[str] = "size"

    min: int | None = Field(default=None, ge=0)
    max: int | None = Field(default=None, ge=0)


class RangeValidator(_BoundedValidator):
    """Numeric value range for Integer and Number fields."""

    wire_key: ClassVar[str] = "range"


class AssetFileSizeValidator(_BoundedValidator):
    """Asset file size in bytes."""

    wire_key: ClassVar[str] = "assetFileSize"

    min: int | None = Field(default=None, ge=0)
    max: int | None = Field(default=None, ge=0)


class DateRangeValidator(FieldValidator):
    """Date range; bounds are ISO 8601 strings as sent by the service."""

    wire_key: ClassVar[str] = "dateRange"

    min: str | None = None
    max: str | None = None

    @model_validator(mode="after")
    def check_bounds(self) -> DateRangeValidator:
        if self.min is None and self.max is None:
            raise ValueError("DateRangeValidator needs at least one of min or max")
        return self


class Bounds(BaseModel):
    """Inclusive pixel bounds for one image dimension."""

    min: int | None = Field(default=None, ge=0)
    max: int | None = Field(default=None, ge=0)

    model_config = ConfigDict(frozen=True, extra="forbid")

    @model_validator(mode="after")
    def check_order(self) -> Bounds:
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError(f"min ({self.min}) is greater than max ({self.max})")
        return self


class AssetImageDimensionsValidator(FieldValidator):
    """Image width/height bounds for linked assets."""

    wire_key: ClassVar[str] = "assetImageDimensions"

    width: Bounds | None = None
    height: Bounds | None = None

    @model_validator(mode="after")
    def check_dimensions(self) -> AssetImageDimensionsValidator:
        if self.width is None and self.height is None:
            raise ValueError("AssetImageDimensionsValidator needs width or height")
        return self


class _PatternValidator(FieldValidator):
    """
    A pattern in JavaScript regular expression syntax, kept as sent.

    Not compiled here: Unicode property escapes, named groups written as
    `(?<name>...)` and `[^]` are valid JS but not valid Python `re`.
    """

    pattern: str = Field(min_length=1)
    flags: str | None = None


class RegExpValidator(_PatternValidator):
    """Text must match `pattern`."""

    wire_key: ClassVar[str] = "regexp"


class ProhibitRegExpValidator(_PatternValidator):
    """Text must not match `pattern`."""

    wire_key: ClassVar[str] = "prohibitRegexp"


class InValidator(FieldValidator):
    """Value must be one of `values`."""

    wire_key: ClassVar[str] = "in"

    values: tuple[str | int | FiniteFloat, ...] = Field(min_length=1)


class LinkContentTypeValidator(FieldValidator):
    """Linked entries must be of one of the given content types."""

    wire_key: ClassVar[str] = "linkContentType"

    content_type_ids: tuple[str, ...] = Field(min_length=1)


class LinkMimetypeGroupValidator(FieldValidator):
    """Linked assets must belong to one of the given mimetype groups."""

    wire_key: ClassVar[str] = "linkMimetypeGroup"

    groups: tuple[MimetypeGroup, ...] = Field(min_length=1)


class UniqueValidator(FieldValidator):
    """Value must be unique across entries of the content type."""

    wire_key: ClassVar[str] = "unique"


class OpaqueValidator(FieldValidator):
    """
    A validator the client does not understand, kept as raw JSON.

    `raw` is the whole validation object, `message` included, and is
    re-emitted unchanged. The `message` attribute mirrors it for display.
    """

    raw: dict[str, Any]

    @model_validator(mode="before")
    @classmethod
    def copy_raw(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("raw"), dict):
            raw = copy.deepcopy(data["raw"])
            message = raw.get("message")
            data = {**data, "raw": raw}
            if isinstance(message, str):
                data.setdefault("message", message)
        return data

    @property
    def kind(self) -> str:
        """The unrecognised key naming this validator."""
        return next((key for key in self.raw if key != "message"), "")
