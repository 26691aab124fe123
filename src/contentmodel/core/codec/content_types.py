"""
Content type codec.

Fields carry their validations, and Array fields carry an ``items`` element
schema with validations of its own::

    {
      "name": "Blog post",
      "displayField": "title",
      "fields": [
        {"id": "title", "name": "Title", "type": "Symbol", "required": true,
         "validations": [{"size": {"max": 100}}]},
        {"id": "tags", "name": "Tags", "type": "Array",
         "items": {"type": "Symbol", "validations": [{"in": ["news", "howto"]}]}}
      ]
    }
"""

from __future__ import annotations

from typing import Any

from contentmodel.core.config import CodecConfig
from contentmodel.core.dispatch import DecodeContext, VariantRegistry
from contentmodel.core.errors import MalformedPayload
from contentmodel.core.ir.content_types import ContentField, ContentType, FieldItems
from contentmodel.core.ir.validators import FieldValidator

from .common import build, expect_list, expect_object, optional_str, sys_value
from .validators import decode_validators, encode_validators

_FLAGS = ("localized", "required", "disabled", "omitted")


def _flag(obj: dict[str, Any], key: str, ctx: DecodeContext) -> bool:
    value = obj.get(key, False)
    if not isinstance(value, bool):
        raise ctx.child(key).error(MalformedPayload, f"expected a boolean, got {value!r}")
    return value


def decode_items(
    node: Any, ctx: DecodeContext, validators: VariantRegistry[FieldValidator] | None = None
) -> FieldItems:
    obj = expect_object(node, ctx, MalformedPayload)
    return build(
        FieldItems,
        ctx,
        MalformedPayload,
        type=optional_str(obj, "type", ctx, MalformedPayload),
        link_type=optional_str(obj, "linkType", ctx, MalformedPayload),
        validations=decode_validators(
            obj.get("validations"), registry=validators, ctx=ctx.child("validations")
        ),
    )


def encode_items(
    items: FieldItems, validators: VariantRegistry[FieldValidator] | None = None
) -> dict[str, Any]:
    encoded: dict[str, Any] = {"type": items.type.value}
    if items.link_type is not None:
        encoded["linkType"] = items.link_type.value
    if items.validations:
        encoded["validations"] = encode_validators(items.validations, validators)
    return encoded


def decode_field(
    node: Any,
    config: CodecConfig | None = None,
    *,
    validators: VariantRegistry[FieldValidator] | None = None,
    ctx: DecodeContext | None = None,
) -> ContentField:
    """Decode one content type field with its validations."""
    ctx = ctx or DecodeContext.for_config(config)
    obj = expect_object(node, ctx, MalformedPayload)

    items = None
    if obj.get("items") is not None:
        items = decode_items(obj["items"], ctx.child("items"), validators)

    return build(
        ContentField,
        ctx,
        MalformedPayload,
        id=optional_str(obj, "id", ctx, MalformedPayload),
        name=optional_str(obj, "name", ctx, MalformedPayload) or "",
        type=optional_str(obj, "type", ctx, MalformedPayload),
        link_type=optional_str(obj, "linkType", ctx, MalformedPayload),
        items=items,
        validations=decode_validators(
            obj.get("validations"), registry=validators, ctx=ctx.child("validations")
        ),
        **{flag: _flag(obj, flag, ctx) for flag in _FLAGS},
    )


def encode_field(
    field: ContentField, *, validators: VariantRegistry[FieldValidator] | None = None
) -> dict[str, Any]:
    encoded: dict[str, Any] = {"id": field.id, "name": field.name, "type": field.type.value}
    if field.link_type is not None:
        encoded["linkType"] = field.link_type.value
    if field.items is not None:
        encoded["items"] = encode_items(field.items, validators)
    for flag in _FLAGS:
        encoded[flag] = getattr(field, flag)
    if field.validations:
        encoded["validations"] = encode_validators(field.validations, validators)
    return encoded


def decode_content_type(
    node: Any,
    config: CodecConfig | None = None,
    *,
    validators: VariantRegistry[FieldValidator] | None = None,
) -> ContentType:
    """
    Decode a content type as returned by the service.

    `validators` replaces the default validator registry for every field
    and array item.

    Raises:
        MalformedPayload: Invalid field definitions
        MalformedValidator: Invalid validation objects
    """
    ctx = DecodeContext.for_config(config)
    obj = expect_object(node, ctx, MalformedPayload)

    fields_ctx = ctx.child("fields")
    fields = expect_list(obj.get("fields", []), fields_ctx, MalformedPayload)
    return build(
        ContentType,
        ctx,
        MalformedPayload,
        id=sys_value(obj, "id"),
        version=sys_value(obj, "version"),
        name=optional_str(obj, "name", ctx, MalformedPayload),
        description=optional_str(obj, "description", ctx, MalformedPayload),
        display_field=optional_str(obj, "displayField", ctx, MalformedPayload),
        fields=tuple(
            decode_field(f, validators=validators, ctx=fields_ctx.child(i))
            for i, f in enumerate(fields)
        ),
    )


def encode_content_type(
    content_type: ContentType, *, validators: VariantRegistry[FieldValidator] | None = None
) -> dict[str, Any]:
    """Encode a content type as a create/update request body."""
    encoded: dict[str, Any] = {"name": content_type.name}
    if content_type.description is not None:
        encoded["description"] = content_type.description
    if content_type.display_field is not None:
        encoded["displayField"] = content_type.display_field
    encoded["fields"] = [encode_field(f, validators=validators) for f in content_type.fields]
    return encoded
