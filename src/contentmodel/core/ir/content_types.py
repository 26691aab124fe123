"""
Content type schema types.

A content type is the schema of an entry: a list of typed fields, each with
its own validations. Array fields describe their element schema in `items`.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .validators import FieldValidator


class FieldKind(StrEnum):
    """Field types understood by the service."""

    SYMBOL = "Symbol"
    TEXT = "Text"
    RICH_TEXT = "RichText"
    INTEGER = "Integer"
    NUMBER = "Number"
    DATE = "Date"
    BOOLEAN = "Boolean"
    LOCATION = "Location"
    OBJECT = "Object"
    LINK = "Link"
    ARRAY = "Array"


class LinkType(StrEnum):
    """Targets of a Link field."""

    ENTRY = "Entry"
    ASSET = "Asset"


class FieldItems(BaseModel):
    """Element schema of an Array field."""

    type: FieldKind
    link_type: LinkType | None = None
    validations: tuple[FieldValidator, ...] = ()

    model_config = ConfigDict(frozen=True, extra="forbid")


class ContentField(BaseModel):
    """
    A single field of a content type.

    Examples:
        - ContentField(id="title", name="Title", type=FieldKind.SYMBOL, required=True)
        - ContentField(id="image", name="Image", type=FieldKind.LINK, link_type=LinkType.ASSET)
    """

    id: str = Field(min_length=1)
    name: str
    type: FieldKind
    localized: bool = False
    required: bool = False
    disabled: bool = False
    omitted: bool = False
    link_type: LinkType | None = None
    items: FieldItems | None = None
    validations: tuple[FieldValidator, ...] = ()

    model_config = ConfigDict(frozen=True, extra="forbid")

    @model_validator(mode="after")
    def check_kind_specifics(self) -> ContentField:
        if self.type == FieldKind.LINK and self.link_type is None:
            raise ValueError(f"Link field '{self.id}' needs a link_type")
        if self.type != FieldKind.LINK and self.link_type is not None:
            raise ValueError(f"Only Link fields take a link_type (field '{self.id}')")
        if self.type == FieldKind.ARRAY and self.items is None:
            raise ValueError(f"Array field '{self.id}' needs items")
        if self.type != FieldKind.ARRAY and self.items is not None:
            raise ValueError(f"Only Array fields take items (field '{self.id}')")
        return self


class ContentType(BaseModel):
    """
    Schema of an entry.

    Attributes:
        display_field: Id of the field used as the entry title
    """

    id: str | None = None
    version: int | None = None
    name: str = Field(min_length=1)
    description: str | None = None
    display_field: str | None = None
    fields: tuple[ContentField, ...] = ()

    model_config = ConfigDict(frozen=True, extra="forbid")

    @model_validator(mode="after")
    def check_display_field(self) -> ContentType:
        if self.display_field is not None and self.get_field(self.display_field) is None:
            raise ValueError(f"display_field '{self.display_field}' is not a field of '{self.name}'")
        return self

    def get_field(self, field_id: str) -> ContentField | None:
        """Find a field by id."""
        for f in self.fields:
            if f.id == field_id:
                return f
        return None
