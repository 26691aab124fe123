"""Tests for editor interface decoding and encoding."""

from __future__ import annotations

from typing import Any, ClassVar

import pytest
from pydantic import ValidationError

from contentmodel.core.codec import (
    CONTROL_SETTINGS,
    decode_control,
    decode_editor_interface,
    dumps,
    encode_control,
    encode_editor_interface,
    loads,
)
from contentmodel.core.errors import MalformedPayload, MalformedSettings
from contentmodel.core.ir import (
    BooleanSettings,
    ControlSettings,
    DateFormat,
    DatePickerSettings,
    EditorInterface,
    EditorInterfaceControl,
    OpaqueSettings,
    RatingSettings,
    settings_shapes,
)
from contentmodel.core.dispatch import Variant

CONTROLS_LITERAL = (
    '{"controls":[{"fieldId":"field1","widgetId":"singleLine"},'
    '{"fieldId":"field2","widgetId":"boolean","settings":'
    '{"trueLabel":"Truthy","falseLabel":"Falsy","helpText":"Help me here!"}}]}'
)


class TestEncodeEditorInterface:
    def test_controls_literal(self):
        editor_interface = EditorInterface(
            controls=(
                EditorInterfaceControl(field_id="field1", widget_id="singleLine"),
                EditorInterfaceControl(
                    field_id="field2",
                    widget_id="boolean",
                    settings=BooleanSettings(
                        help_text="Help me here!", true_label="Truthy", false_label="Falsy"
                    ),
                ),
            )
        )

        assert dumps(encode_editor_interface(editor_interface)) == CONTROLS_LITERAL

    def test_literal_round_trip(self):
        decoded = decode_editor_interface(loads(CONTROLS_LITERAL))

        assert dumps(encode_editor_interface(decoded)) == CONTROLS_LITERAL

    def test_control_without_settings(self):
        control = EditorInterfaceControl(field_id="title", widget_id="singleLine")

        assert encode_control(control) == {"fieldId": "title", "widgetId": "singleLine"}


class TestDecodeEditorInterface:
    def test_metadata(self, editor_interface_payload):
        editor_interface = decode_editor_interface(editor_interface_payload)

        assert editor_interface.id == "default"
        assert editor_interface.version == 4
        assert editor_interface.content_type_id == "blogPost"
        assert len(editor_interface.controls) == 7

    def test_typed_settings(self, editor_interface_payload):
        controls = decode_editor_interface(editor_interface_payload).controls

        assert isinstance(controls[4].settings, BooleanSettings)
        assert controls[5].settings == RatingSettings(
            number_of_stars=7, help_text="How many do you likez?"
        )
        assert isinstance(controls[6].settings, DatePickerSettings)
        assert controls[6].settings.date_format == DateFormat.TIME

    def test_controls_without_settings(self, editor_interface_payload):
        controls = decode_editor_interface(editor_interface_payload).controls

        assert controls[0].settings is None
        assert controls[3].settings is None

    def test_builtin_widget_settings_are_opaque(self, editor_interface_payload):
        slug = decode_editor_interface(editor_interface_payload).control_for("slug")

        assert slug.settings == OpaqueSettings(help_text="Generated from the title")

    def test_control_for_missing_field(self, editor_interface_payload):
        assert decode_editor_interface(editor_interface_payload).control_for("nope") is None

    def test_round_trip_controls(self, editor_interface_payload):
        encoded = encode_editor_interface(decode_editor_interface(editor_interface_payload))

        assert encoded == {"controls": editor_interface_payload["controls"]}


class TestDecodeErrors:
    def test_settings_error_path(self, editor_interface_payload):
        editor_interface_payload["controls"][6]["settings"]["format"] = "fortnightly"

        with pytest.raises(MalformedSettings, match=r"\$\.controls\[6\]\.settings\.format"):
            decode_editor_interface(editor_interface_payload)

    def test_missing_widget_id(self):
        with pytest.raises(MalformedPayload, match=r"\$\.widgetId: expected a string"):
            decode_control({"fieldId": "title"})

    def test_controls_must_be_array(self):
        with pytest.raises(MalformedPayload, match=r"\$\.controls: expected an array"):
            decode_editor_interface({"controls": {}})

    def test_unknown_widget_keeps_settings(self):
        control = decode_control(
            {"fieldId": "colour", "widgetId": "app:colorPicker", "settings": {"palette": "warm"}}
        )

        assert control.settings == OpaqueSettings(values={"palette": "warm"})


class TestControlModel:
    def test_settings_must_match_widget(self):
        with pytest.raises(ValidationError, match="does not apply to widget 'rating'"):
            EditorInterfaceControl(
                field_id="f", widget_id="rating", settings=BooleanSettings(true_label="Y")
            )

    def test_opaque_rejected_for_registered_widget(self):
        with pytest.raises(ValidationError, match="takes RatingSettings"):
            EditorInterfaceControl(field_id="f", widget_id="rating", settings=OpaqueSettings())

    def test_opaque_accepted_for_unregistered_widget(self):
        control = EditorInterfaceControl(
            field_id="f", widget_id="markdown", settings=OpaqueSettings(values={"x": 1})
        )

        assert control.settings.get("x") == 1

    def test_settings_shapes_cover_builtin_widgets(self):
        shapes = settings_shapes()

        assert shapes["rating"] is RatingSettings
        assert shapes["boolean"] is BooleanSettings
        assert "markdown" not in shapes


class SwatchSettings(ControlSettings):
    widget_ids: ClassVar[tuple[str, ...]] = ("app:swatch",)

    colours: tuple[str, ...] = ()


def _decode_swatch(obj: dict[str, Any], ctx) -> SwatchSettings:
    return SwatchSettings(help_text=obj.get("helpText"), colours=tuple(obj.get("colours", ())))


def _encode_swatch(value: SwatchSettings, registry) -> dict[str, Any]:
    encoded: dict[str, Any] = {"colours": list(value.colours)}
    if value.help_text is not None:
        encoded["helpText"] = value.help_text
    return encoded


class TestCustomWidgetSettings:
    @pytest.fixture
    def settings(self):
        return CONTROL_SETTINGS.extend(
            Variant("app:swatch", SwatchSettings, _decode_swatch, _encode_swatch)
        )

    @pytest.fixture
    def payload(self):
        return {
            "controls": [
                {"fieldId": "title", "widgetId": "singleLine"},
                {
                    "fieldId": "accent",
                    "widgetId": "app:swatch",
                    "settings": {"colours": ["#fff", "#000"], "helpText": "Pick one"},
                },
            ]
        }

    def test_decode_with_extended_registry(self, settings, payload):
        editor_interface = decode_editor_interface(payload, settings=settings)

        assert editor_interface.control_for("accent").settings == SwatchSettings(
            help_text="Pick one", colours=("#fff", "#000")
        )

    def test_round_trip_with_extended_registry(self, settings, payload):
        editor_interface = decode_editor_interface(payload, settings=settings)

        assert encode_editor_interface(editor_interface, settings=settings) == payload

    def test_single_control_with_extended_registry(self, settings, payload):
        control = decode_control(payload["controls"][1], settings=settings)

        assert encode_control(control, settings=settings) == payload["controls"][1]

    def test_custom_shape_rejects_opaque_settings(self):
        with pytest.raises(ValidationError, match="takes SwatchSettings"):
            EditorInterfaceControl(field_id="f", widget_id="app:swatch", settings=OpaqueSettings())
