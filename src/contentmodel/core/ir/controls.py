"""
Editor interface types.

An editor interface says which UI widget edits each field of a content type.
Widget-specific configuration lives in `settings`, whose shape is chosen by the
control's `widget_id` rather than by anything inside the settings object.
"""

from __future__ import annotations

import copy
from enum import StrEnum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SystemWidgetId(StrEnum):
    """Built-in widget ids provided by the web app."""

    SINGLE_LINE = "singleLine"
    MULTIPLE_LINE = "multipleLine"
    MARKDOWN = "markdown"
    DROPDOWN = "dropdown"
    RADIO = "radio"
    CHECKBOX = "checkbox"
    BOOLEAN = "boolean"
    RATING = "rating"
    DATE_PICKER = "datePicker"
    NUMBER_EDITOR = "numberEditor"
    URL_EDITOR = "urlEditor"
    SLUG_EDITOR = "slugEditor"
    TAG_EDITOR = "tagEditor"
    LIST_INPUT = "listInput"
    LOCATION_EDITOR = "locationEditor"
    OBJECT_EDITOR = "objectEditor"
    RICH_TEXT_EDITOR = "richTextEditor"
    ENTRY_LINK_EDITOR = "entryLinkEditor"
    ENTRY_LINKS_EDITOR = "entryLinksEditor"
    ENTRY_CARD_EDITOR = "entryCardEditor"
    ENTRY_CARDS_EDITOR = "entryCardsEditor"
    ASSET_LINK_EDITOR = "assetLinkEditor"
    ASSET_LINKS_EDITOR = "assetLinksEditor"
    ASSET_GALLERY_EDITOR = "assetGalleryEditor"


class DateFormat(StrEnum):
    """Date picker precision. Closed set: unknown literals fail to decode."""

    DATE_ONLY = "dateonly"
    TIME = "time"
    TIME_Z = "timeZ"


class ClockFormat(StrEnum):
    """Date picker clock style for the time part."""

    H12 = "12"
    H24 = "24"


class ControlSettings(BaseModel):
    """
    Base class for widget settings.

    Attributes:
        help_text: Hint shown under the field; common to every widget
    """

    widget_ids: ClassVar[tuple[str, ...]] = ()

    help_text: str | None = None

    model_config = ConfigDict(frozen=True, extra="forbid")

    @model_validator(mode="before")
    @classmethod
    def reject_abstract(cls, data: Any) -> Any:
        """Only shapes bound to a widget id, or the opaque passthrough, can be built."""
        if not cls.widget_ids and not issubclass(cls, OpaqueSettings):
            raise ValueError(f"{cls.__name__} is abstract; use concrete widget settings")
        return data


class BooleanSettings(ControlSettings):
    """Labels for the two radio buttons of the boolean widget."""

    widget_ids: ClassVar[tuple[str, ...]] = (SystemWidgetId.BOOLEAN,)

    true_label: str | None = None
    false_label: str | None = None


class RatingSettings(ControlSettings):
    """Number of stars shown by the rating widget."""

    widget_ids: ClassVar[tuple[str, ...]] = (SystemWidgetId.RATING,)

    number_of_stars: int | None = Field(default=None, ge=1, le=20)


class DatePickerSettings(ControlSettings):
    """Precision and clock style of the date picker widget."""

    widget_ids: ClassVar[tuple[str, ...]] = (SystemWidgetId.DATE_PICKER,)

    date_format: DateFormat | None = None
    clock: ClockFormat | None = None


class OpaqueSettings(ControlSettings):
    """
    Settings for a widget the client has no shape for.

    `values` holds every key except ``helpText``, in wire order.
    """

    values: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def copy_values(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("values"), dict):
            data = {**data, "values": copy.deepcopy(data["values"])}
        return data

    def get(self, key: str, default: Any = None) -> Any:
        """Read a raw settings value."""
        return self.values.get(key, default)


def settings_shapes() -> dict[str, type[ControlSettings]]:
    """
    Map each widget id to the settings class that declares it.

    Walks every loaded `ControlSettings` subclass, so shapes defined
    outside this module (for an extended settings registry) are included.
    """
    shapes: dict[str, type[ControlSettings]] = {}
    pending = list(ControlSettings.__subclasses__())
    while pending:
        cls = pending.pop(0)
        pending.extend(cls.__subclasses__())
        for widget_id in cls.widget_ids:
            shapes.setdefault(widget_id, cls)
    return shapes


class EditorInterfaceControl(BaseModel):
    """
    One field-to-widget assignment.

    Settings must be a class that declares `widget_id`; `OpaqueSettings` is
    only accepted for widget ids no settings class declares.
    """

    field_id: str = Field(min_length=1)
    widget_id: str = Field(min_length=1)
    settings: ControlSettings | None = None

    model_config = ConfigDict(frozen=True, extra="forbid")

    @model_validator(mode="after")
    def check_settings_shape(self) -> EditorInterfaceControl:
        if self.settings is None:
            return self

        if not isinstance(self.settings, OpaqueSettings):
            if self.widget_id not in self.settings.widget_ids:
                raise ValueError(
                    f"{type(self.settings).__name__} does not apply to widget '{self.widget_id}'"
                )
            return self

        expected = settings_shapes().get(self.widget_id)
        if expected is not None:
            raise ValueError(
                f"widget '{self.widget_id}' takes {expected.__name__}, not OpaqueSettings"
            )
        return self


class EditorInterface(BaseModel):
    """
    Editing UI configuration for one content type.

    Attributes:
        id: System id (usually "default")
        content_type_id: Owning content type, from ``sys.contentType``
        version: System version, needed for updates
        controls: Field controls in wire order
    """

    id: str | None = None
    content_type_id: str | None = None
    version: int | None = None
    controls: tuple[EditorInterfaceControl, ...] = ()

    model_config = ConfigDict(frozen=True, extra="forbid")

    def control_for(self, field_id: str) -> EditorInterfaceControl | None:
        """Find the control for a field."""
        for control in self.controls:
            if control.field_id == field_id:
                return control
        return None
