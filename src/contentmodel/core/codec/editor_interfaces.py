"""
Editor interface codec.

Each control names its field and widget; the widget id selects how the
sibling ``settings`` object is decoded::

    {"controls": [
        {"fieldId": "field1", "widgetId": "singleLine"},
        {"fieldId": "field2", "widgetId": "boolean",
         "settings": {"trueLabel": "Truthy", "falseLabel": "Falsy", "helpText": "Help me here!"}}
    ]}
"""

from __future__ import annotations

from typing import Any

from contentmodel.core.config import CodecConfig
from contentmodel.core.dispatch import DecodeContext, VariantRegistry
from contentmodel.core.errors import MalformedPayload
from contentmodel.core.ir.controls import ControlSettings, EditorInterface, EditorInterfaceControl

from .common import build, expect_list, expect_object, expect_str, sys_link_id, sys_value
from .control_settings import decode_settings, encode_settings


def decode_control(
    node: Any,
    config: CodecConfig | None = None,
    *,
    settings: VariantRegistry[ControlSettings] | None = None,
    ctx: DecodeContext | None = None,
) -> EditorInterfaceControl:
    ctx = ctx or DecodeContext.for_config(config)
    obj = expect_object(node, ctx, MalformedPayload)

    field_id = expect_str(obj.get("fieldId"), ctx.child("fieldId"), MalformedPayload)
    widget_id = expect_str(obj.get("widgetId"), ctx.child("widgetId"), MalformedPayload)
    decoded = decode_settings(
        widget_id, obj.get("settings"), registry=settings, ctx=ctx.child("settings")
    )

    return build(
        EditorInterfaceControl,
        ctx,
        MalformedPayload,
        field_id=field_id,
        widget_id=widget_id,
        settings=decoded,
    )


def encode_control(
    control: EditorInterfaceControl, *, settings: VariantRegistry[ControlSettings] | None = None
) -> dict[str, Any]:
    encoded: dict[str, Any] = {"fieldId": control.field_id, "widgetId": control.widget_id}
    if control.settings is not None:
        encoded["settings"] = encode_settings(control.settings, settings)
    return encoded


def decode_editor_interface(
    node: Any,
    config: CodecConfig | None = None,
    *,
    settings: VariantRegistry[ControlSettings] | None = None,
) -> EditorInterface:
    """
    Decode an editor interface as returned by the service.

    Unknown widgets keep their settings as `OpaqueSettings`. `settings`
    replaces the default settings registry, e.g. to add an app widget shape.

    Raises:
        MalformedPayload: Missing field or widget ids
        MalformedSettings: Invalid settings for a known widget
    """
    ctx = DecodeContext.for_config(config)
    obj = expect_object(node, ctx, MalformedPayload)

    controls_ctx = ctx.child("controls")
    controls = expect_list(obj.get("controls", []), controls_ctx, MalformedPayload)
    return build(
        EditorInterface,
        ctx,
        MalformedPayload,
        id=sys_value(obj, "id"),
        version=sys_value(obj, "version"),
        content_type_id=sys_link_id(obj, "contentType"),
        controls=tuple(
            decode_control(control, settings=settings, ctx=controls_ctx.child(i))
            for i, control in enumerate(controls)
        ),
    )


def encode_editor_interface(
    editor_interface: EditorInterface,
    *,
    settings: VariantRegistry[ControlSettings] | None = None,
) -> dict[str, Any]:
    """Encode an editor interface as an update request body."""
    return {
        "controls": [
            encode_control(control, settings=settings) for control in editor_interface.controls
        ]
    }
