"""Tests for content type decoding and encoding."""

from __future__ import annotations

from typing import ClassVar

import pytest
from pydantic import ValidationError

from contentmodel.core.codec import (
    VALIDATORS,
    decode_content_type,
    decode_field,
    encode_content_type,
    encode_field,
)
from contentmodel.core.dispatch import Variant
from contentmodel.core.config import CodecConfig
from contentmodel.core.errors import MalformedPayload, MalformedValidator, UnknownDiscriminator
from contentmodel.core.ir import (
    ContentField,
    ContentType,
    FieldItems,
    FieldKind,
    FieldValidator,
    InValidator,
    LinkType,
    OpaqueValidator,
    SizeValidator,
    UniqueValidator,
)


class TestDecodeContentType:
    def test_metadata(self, content_type_payload):
        content_type = decode_content_type(content_type_payload)

        assert content_type.id == "blogPost"
        assert content_type.version == 7
        assert content_type.name == "Blog post"
        assert content_type.display_field == "title"
        assert len(content_type.fields) == 8

    def test_first_field_size(self, content_type_payload):
        title = decode_content_type(content_type_payload).fields[0]

        assert title.localized and title.required
        assert title.validations == (SizeValidator(max=8, message="Keep it short"),)

    def test_array_items(self, content_type_payload):
        tags = decode_content_type(content_type_payload).get_field("tags")

        assert tags.type == FieldKind.ARRAY
        assert tags.items == FieldItems(
            type=FieldKind.SYMBOL,
            validations=(InValidator(values=("news", "howto", "release")),),
        )
        assert tags.validations == (SizeValidator(min=1),)

    def test_link_field(self, content_type_payload):
        hero = decode_content_type(content_type_payload).get_field("hero")

        assert hero.link_type == LinkType.ASSET
        assert len(hero.validations) == 3

    def test_unknown_validation_kept(self, content_type_payload):
        author = decode_content_type(content_type_payload).get_field("author")

        opaque = author.validations[1]
        assert isinstance(opaque, OpaqueValidator)
        assert opaque.kind == "enabledNodeTypes"
        assert opaque.message == "Only headings and paragraphs"

    def test_missing_field_lookup(self, content_type_payload):
        assert decode_content_type(content_type_payload).get_field("nope") is None


class TestEncodeContentType:
    def test_round_trip(self, content_type_payload):
        content_type = decode_content_type(content_type_payload)

        assert decode_content_type(encode_content_type(content_type)) == content_type.model_copy(
            update={"id": None, "version": None}
        )

    def test_sys_not_sent(self, content_type_payload):
        encoded = encode_content_type(decode_content_type(content_type_payload))

        assert "sys" not in encoded
        assert list(encoded) == ["name", "description", "displayField", "fields"]

    def test_field_encoding(self):
        field = ContentField(
            id="slug",
            name="Slug",
            type=FieldKind.SYMBOL,
            required=True,
            validations=(UniqueValidator(),),
        )

        assert encode_field(field) == {
            "id": "slug",
            "name": "Slug",
            "type": "Symbol",
            "localized": False,
            "required": True,
            "disabled": False,
            "omitted": False,
            "validations": [{"unique": True}],
        }

    def test_link_array_encoding(self):
        field = ContentField(
            id="related",
            name="Related",
            type=FieldKind.ARRAY,
            items=FieldItems(type=FieldKind.LINK, link_type=LinkType.ENTRY),
        )

        encoded = encode_field(field)

        assert encoded["items"] == {"type": "Link", "linkType": "Entry"}
        assert "validations" not in encoded


class TestFieldErrors:
    def test_validation_error_path(self, content_type_payload):
        content_type_payload["fields"][2]["validations"][0] = {"range": {"min": "one"}}

        with pytest.raises(MalformedValidator, match=r"\$\.fields\[2\]\.validations\[0\]\.range\.min"):
            decode_content_type(content_type_payload)

    def test_link_field_needs_link_type(self):
        with pytest.raises(MalformedPayload, match="needs a link_type"):
            decode_field({"id": "x", "name": "X", "type": "Link"})

    def test_array_field_needs_items(self):
        with pytest.raises(MalformedPayload, match="needs items"):
            decode_field({"id": "x", "name": "X", "type": "Array"})

    def test_unknown_field_type(self):
        with pytest.raises(MalformedPayload, match="invalid ContentField"):
            decode_field({"id": "x", "name": "X", "type": "Hologram"})

    def test_flag_must_be_boolean(self):
        with pytest.raises(MalformedPayload, match=r"\$\.required: expected a boolean"):
            decode_field({"id": "x", "name": "X", "type": "Symbol", "required": "yes"})

    def test_unknown_validation_rejected_when_not_preserved(self, content_type_payload):
        config = CodecConfig(preserve_unknown_validators=False)

        with pytest.raises(UnknownDiscriminator, match=r"\$\.fields\[5\]\.validations\[1\]"):
            decode_content_type(content_type_payload, config)


class EnabledMarksValidator(FieldValidator):
    wire_key: ClassVar[str] = "enabledMarks"

    marks: tuple[str, ...]


class TestCustomValidators:
    @pytest.fixture
    def validators(self):
        return VALIDATORS.extend(
            Variant(
                EnabledMarksValidator.wire_key,
                EnabledMarksValidator,
                lambda p, ctx: EnabledMarksValidator(marks=tuple(p)),
                lambda v, r: list(v.marks),
            )
        )

    @pytest.fixture
    def payload(self):
        return {
            "name": "Page",
            "fields": [
                {
                    "id": "body",
                    "name": "Body",
                    "type": "RichText",
                    "validations": [{"enabledMarks": ["bold"], "message": "Bold only"}],
                },
                {
                    "id": "notes",
                    "name": "Notes",
                    "type": "Array",
                    "items": {"type": "RichText", "validations": [{"enabledMarks": ["code"]}]},
                },
            ],
        }

    def test_fields_and_items_use_extended_registry(self, validators, payload):
        config = CodecConfig(preserve_unknown_validators=False)

        content_type = decode_content_type(payload, config, validators=validators)

        assert content_type.get_field("body").validations == (
            EnabledMarksValidator(marks=("bold",), message="Bold only"),
        )
        assert content_type.get_field("notes").items.validations == (
            EnabledMarksValidator(marks=("code",)),
        )

    def test_encode_with_extended_registry(self, validators, payload):
        content_type = decode_content_type(payload, validators=validators)

        encoded = encode_content_type(content_type, validators=validators)

        assert encoded["fields"][0]["validations"] == payload["fields"][0]["validations"]
        assert encoded["fields"][1]["items"] == payload["fields"][1]["items"]

    def test_single_field_with_extended_registry(self, validators, payload):
        field = decode_field(payload["fields"][0], validators=validators)

        assert encode_field(field, validators=validators)["validations"] == [
            {"enabledMarks": ["bold"], "message": "Bold only"}
        ]


class TestContentTypeModel:
    def test_display_field_must_exist(self):
        with pytest.raises(ValidationError, match="display_field 'title'"):
            ContentType(name="Post", display_field="title")

    def test_non_link_field_rejects_link_type(self):
        with pytest.raises(ValidationError, match="Only Link fields"):
            ContentField(id="a", name="A", type=FieldKind.SYMBOL, link_type=LinkType.ENTRY)
