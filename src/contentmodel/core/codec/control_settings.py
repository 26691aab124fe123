"""
Editor interface control settings codec.

The settings object carries no type tag; its shape is chosen by the
``widgetId`` of the control that owns it::

    {"fieldId": "f", "widgetId": "rating", "settings": {"numberOfStars": 7, "helpText": "..."}}

Unset values are omitted on encode, never sent as null: the service treats a
missing label differently from an empty one. Widgets without a registered
shape decode to `OpaqueSettings`.
"""

from __future__ import annotations

import logging
from typing import Any

from contentmodel.core.config import CodecConfig
from contentmodel.core.dispatch import (
    DecodeContext,
    ExternalTag,
    Variant,
    VariantRegistry,
    omit_unset,
)
from contentmodel.core.errors import MalformedSettings
from contentmodel.core.ir.controls import (
    BooleanSettings,
    ClockFormat,
    ControlSettings,
    DateFormat,
    DatePickerSettings,
    OpaqueSettings,
    RatingSettings,
    SystemWidgetId,
)

from .common import build, optional_number, optional_str

logger = logging.getLogger(__name__)

HELP_TEXT_KEY = "helpText"


def _known_keys(obj: dict[str, Any], keys: tuple[str, ...], ctx: DecodeContext) -> None:
    """Drop (or, in strict mode, reject) keys a registered shape does not define."""
    unknown = [key for key in obj if key not in keys]
    if not unknown:
        return
    if ctx.config.strict_control_settings:
        raise ctx.error(MalformedSettings, f"unexpected settings {', '.join(unknown)}")
    logger.warning("Ignoring unknown control settings %s at %s", ", ".join(unknown), ctx.location)


def _enum(obj: dict[str, Any], key: str, enum_cls: type, ctx: DecodeContext) -> Any:
    raw = optional_str(obj, key, ctx, MalformedSettings)
    if raw is None:
        return None
    try:
        return enum_cls(raw)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ctx.child(key).error(
            MalformedSettings, f"'{raw}' is not one of: {allowed}"
        ) from None


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------

_BOOLEAN_KEYS = ("trueLabel", "falseLabel", HELP_TEXT_KEY)


def _decode_boolean(obj: dict[str, Any], ctx: DecodeContext) -> BooleanSettings:
    _known_keys(obj, _BOOLEAN_KEYS, ctx)
    return build(
        BooleanSettings,
        ctx,
        MalformedSettings,
        help_text=optional_str(obj, HELP_TEXT_KEY, ctx, MalformedSettings),
        true_label=optional_str(obj, "trueLabel", ctx, MalformedSettings),
        false_label=optional_str(obj, "falseLabel", ctx, MalformedSettings),
    )


def _encode_boolean(value: BooleanSettings, registry: VariantRegistry[Any]) -> dict[str, Any]:
    return omit_unset(
        {
            "trueLabel": value.true_label,
            "falseLabel": value.false_label,
            HELP_TEXT_KEY: value.help_text,
        }
    )


_RATING_KEYS = ("numberOfStars", HELP_TEXT_KEY)


def _decode_rating(obj: dict[str, Any], ctx: DecodeContext) -> RatingSettings:
    _known_keys(obj, _RATING_KEYS, ctx)
    return build(
        RatingSettings,
        ctx,
        MalformedSettings,
        help_text=optional_str(obj, HELP_TEXT_KEY, ctx, MalformedSettings),
        number_of_stars=optional_number(obj, "numberOfStars", ctx, MalformedSettings, integral=True),
    )


def _encode_rating(value: RatingSettings, registry: VariantRegistry[Any]) -> dict[str, Any]:
    return omit_unset({"numberOfStars": value.number_of_stars, HELP_TEXT_KEY: value.help_text})


_DATE_PICKER_KEYS = ("format", "ampm", HELP_TEXT_KEY)


def _decode_date_picker(obj: dict[str, Any], ctx: DecodeContext) -> DatePickerSettings:
    _known_keys(obj, _DATE_PICKER_KEYS, ctx)
    return build(
        DatePickerSettings,
        ctx,
        MalformedSettings,
        help_text=optional_str(obj, HELP_TEXT_KEY, ctx, MalformedSettings),
        date_format=_enum(obj, "format", DateFormat, ctx),
        clock=_enum(obj, "ampm", ClockFormat, ctx),
    )


def _encode_date_picker(
    value: DatePickerSettings, registry: VariantRegistry[Any]
) -> dict[str, Any]:
    return omit_unset(
        {
            "format": value.date_format.value if value.date_format else None,
            "ampm": value.clock.value if value.clock else None,
            HELP_TEXT_KEY: value.help_text,
        }
    )


def _decode_opaque(obj: dict[str, Any], ctx: DecodeContext) -> OpaqueSettings:
    return build(
        OpaqueSettings,
        ctx,
        MalformedSettings,
        help_text=optional_str(obj, HELP_TEXT_KEY, ctx, MalformedSettings),
        values={key: value for key, value in obj.items() if key != HELP_TEXT_KEY},
    )


def _encode_opaque(value: OpaqueSettings, registry: VariantRegistry[Any]) -> dict[str, Any]:
    encoded = dict(value.values)
    if value.help_text is not None:
        encoded[HELP_TEXT_KEY] = value.help_text
    return encoded


CONTROL_SETTINGS: VariantRegistry[ControlSettings] = VariantRegistry(
    "control settings",
    [
        Variant(
            SystemWidgetId.BOOLEAN, BooleanSettings, _decode_boolean, _encode_boolean, _BOOLEAN_KEYS
        ),
        Variant(
            SystemWidgetId.RATING, RatingSettings, _decode_rating, _encode_rating, _RATING_KEYS
        ),
        Variant(
            SystemWidgetId.DATE_PICKER,
            DatePickerSettings,
            _decode_date_picker,
            _encode_date_picker,
            _DATE_PICKER_KEYS,
        ),
    ],
    strategy=ExternalTag(),
    fallback=Variant("opaque", OpaqueSettings, _decode_opaque, _encode_opaque),
    malformed=MalformedSettings,
)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def decode_settings(
    widget_id: str,
    node: Any,
    config: CodecConfig | None = None,
    registry: VariantRegistry[ControlSettings] | None = None,
    *,
    ctx: DecodeContext | None = None,
) -> ControlSettings | None:
    """
    Decode the settings of a control using the control's widget id.

    Returns None when `node` is absent (null).

    Raises:
        MalformedSettings: Settings are not an object, a value has the wrong
            type, or an enumerated value is outside its closed set
    """
    if node is None:
        return None
    ctx = ctx or DecodeContext.for_config(config)
    return (registry or CONTROL_SETTINGS).decode(node, ctx, tag=widget_id)


def encode_settings(
    settings: ControlSettings, registry: VariantRegistry[ControlSettings] | None = None
) -> dict[str, Any]:
    """Encode settings, omitting every unset value."""
    return (registry or CONTROL_SETTINGS).encode(settings)
