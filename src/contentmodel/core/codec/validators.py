"""
Field validator codec.

A validation object carries exactly one key naming its kind, plus an
optional ``message``::

    {"size": {"min": 3, "max": 100}, "message": "3 to 100 characters"}
    {"linkContentType": ["author", "editor"]}
    {"unique": true}

Kinds the client does not know decode to `OpaqueValidator` and re-encode
unchanged, so fields keep loading as the service grows new validations.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable
from typing import Any

from contentmodel.core.config import CodecConfig
from contentmodel.core.dispatch import (
    DecodeContext,
    KeyPresence,
    Variant,
    VariantRegistry,
    omit_unset,
)
from contentmodel.core.errors import MalformedValidator
from contentmodel.core.ir.validators import (
    AssetFileSizeValidator,
    AssetImageDimensionsValidator,
    Bounds,
    DateRangeValidator,
    FieldValidator,
    InValidator,
    LinkContentTypeValidator,
    LinkMimetypeGroupValidator,
    OpaqueValidator,
    ProhibitRegExpValidator,
    RangeValidator,
    RegExpValidator,
    SizeValidator,
    UniqueValidator,
)

from .common import build, expect_list, expect_object, optional_number, optional_str, string_list

logger = logging.getLogger(__name__)

MESSAGE_KEY = "message"
_BOUND_KEYS = ("min", "max")


# ---------------------------------------------------------------------------
# Parameter shapes
# ---------------------------------------------------------------------------


def _bounded(model: type[FieldValidator], *, integral: bool):
    def decode(payload: Any, ctx: DecodeContext) -> FieldValidator:
        obj = _params(payload, ctx, _BOUND_KEYS)
        return build(
            model,
            ctx,
            MalformedValidator,
            min=optional_number(obj, "min", ctx, MalformedValidator, integral=integral),
            max=optional_number(obj, "max", ctx, MalformedValidator, integral=integral),
        )

    return decode


def _encode_bounds(value: Any, registry: VariantRegistry[Any]) -> dict[str, Any]:
    return omit_unset({"min": value.min, "max": value.max})


def _decode_date_range(payload: Any, ctx: DecodeContext) -> DateRangeValidator:
    obj = _params(payload, ctx, _BOUND_KEYS)
    return build(
        DateRangeValidator,
        ctx,
        MalformedValidator,
        min=optional_str(obj, "min", ctx, MalformedValidator),
        max=optional_str(obj, "max", ctx, MalformedValidator),
    )


def _decode_dimensions(payload: Any, ctx: DecodeContext) -> AssetImageDimensionsValidator:
    obj = _params(payload, ctx, ("width", "height"))
    dims: dict[str, Bounds | None] = {}
    for key in ("width", "height"):
        if obj.get(key) is None:
            dims[key] = None
            continue
        sub_ctx = ctx.child(key)
        bounds = _params(obj[key], sub_ctx, _BOUND_KEYS)
        dims[key] = build(
            Bounds,
            sub_ctx,
            MalformedValidator,
            min=optional_number(bounds, "min", sub_ctx, MalformedValidator, integral=True),
            max=optional_number(bounds, "max", sub_ctx, MalformedValidator, integral=True),
        )
    return build(AssetImageDimensionsValidator, ctx, MalformedValidator, **dims)


def _encode_dimensions(
    value: AssetImageDimensionsValidator, registry: VariantRegistry[Any]
) -> dict[str, Any]:
    return omit_unset(
        {
            "width": _encode_bounds(value.width, registry) if value.width else None,
            "height": _encode_bounds(value.height, registry) if value.height else None,
        }
    )


def _pattern(model: type[FieldValidator]):
    def decode(payload: Any, ctx: DecodeContext) -> FieldValidator:
        obj = _params(payload, ctx, ("pattern", "flags"))
        pattern = optional_str(obj, "pattern", ctx, MalformedValidator)
        if pattern is None:
            raise ctx.error(MalformedValidator, "missing 'pattern'")
        return build(
            model,
            ctx,
            MalformedValidator,
            pattern=pattern,
            flags=optional_str(obj, "flags", ctx, MalformedValidator),
        )

    return decode


def _encode_pattern(value: Any, registry: VariantRegistry[Any]) -> dict[str, Any]:
    return omit_unset({"pattern": value.pattern, "flags": value.flags})


def _decode_in(payload: Any, ctx: DecodeContext) -> InValidator:
    items = expect_list(payload, ctx, MalformedValidator)
    for i, item in enumerate(items):
        if isinstance(item, bool) or not isinstance(item, str | int | float):
            raise ctx.child(i).error(MalformedValidator, "allowed values must be strings or numbers")
    return build(InValidator, ctx, MalformedValidator, values=tuple(items))


def _decode_link_content_type(payload: Any, ctx: DecodeContext) -> LinkContentTypeValidator:
    return build(
        LinkContentTypeValidator,
        ctx,
        MalformedValidator,
        content_type_ids=string_list(payload, ctx, MalformedValidator),
    )


def _decode_mimetype_group(payload: Any, ctx: DecodeContext) -> LinkMimetypeGroupValidator:
    return build(
        LinkMimetypeGroupValidator,
        ctx,
        MalformedValidator,
        groups=string_list(payload, ctx, MalformedValidator),
    )


def _decode_unique(payload: Any, ctx: DecodeContext) -> UniqueValidator:
    if payload is not True:
        raise ctx.error(MalformedValidator, f"'unique' must be true, got {payload!r}")
    return UniqueValidator()


def _decode_opaque(payload: Any, ctx: DecodeContext) -> OpaqueValidator:
    logger.debug("Keeping unknown validation %s at %s", list(payload), ctx.location)
    return OpaqueValidator(raw=payload)


def _encode_opaque(value: OpaqueValidator, registry: VariantRegistry[Any]) -> dict[str, Any]:
    return copy.deepcopy(value.raw)


def _params(payload: Any, ctx: DecodeContext, allowed: tuple[str, ...]) -> dict[str, Any]:
    obj = expect_object(payload, ctx, MalformedValidator)
    unexpected = [key for key in obj if key not in allowed]
    if unexpected:
        raise ctx.error(
            MalformedValidator,
            f"unexpected parameters {', '.join(unexpected)}; allowed: {', '.join(allowed)}",
        )
    return obj


VALIDATORS: VariantRegistry[FieldValidator] = VariantRegistry(
    "validator",
    [
        Variant(
            SizeValidator.wire_key,
            SizeValidator,
            _bounded(SizeValidator, integral=True),
            _encode_bounds,
            _BOUND_KEYS,
        ),
        Variant(
            RangeValidator.wire_key,
            RangeValidator,
            _bounded(RangeValidator, integral=False),
            _encode_bounds,
            _BOUND_KEYS,
        ),
        Variant(
            DateRangeValidator.wire_key,
            DateRangeValidator,
            _decode_date_range,
            _encode_bounds,
            _BOUND_KEYS,
        ),
        Variant(
            AssetFileSizeValidator.wire_key,
            AssetFileSizeValidator,
            _bounded(AssetFileSizeValidator, integral=True),
            _encode_bounds,
            _BOUND_KEYS,
        ),
        Variant(
            AssetImageDimensionsValidator.wire_key,
            AssetImageDimensionsValidator,
            _decode_dimensions,
            _encode_dimensions,
            ("width", "height"),
        ),
        Variant(
            RegExpValidator.wire_key,
            RegExpValidator,
            _pattern(RegExpValidator),
            _encode_pattern,
            ("pattern", "flags"),
        ),
        Variant(
            ProhibitRegExpValidator.wire_key,
            ProhibitRegExpValidator,
            _pattern(ProhibitRegExpValidator),
            _encode_pattern,
            ("pattern", "flags"),
        ),
        Variant(InValidator.wire_key, InValidator, _decode_in, lambda v, r: list(v.values)),
        Variant(
            LinkContentTypeValidator.wire_key,
            LinkContentTypeValidator,
            _decode_link_content_type,
            lambda v, r: list(v.content_type_ids),
        ),
        Variant(
            LinkMimetypeGroupValidator.wire_key,
            LinkMimetypeGroupValidator,
            _decode_mimetype_group,
            lambda v, r: [str(group) for group in v.groups],
        ),
        Variant(UniqueValidator.wire_key, UniqueValidator, _decode_unique, lambda v, r: True),
    ],
    strategy=KeyPresence(ignored=frozenset({MESSAGE_KEY})),
    fallback=Variant("opaque", OpaqueValidator, _decode_opaque, _encode_opaque),
    malformed=MalformedValidator,
)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def decode_validator(
    node: Any,
    config: CodecConfig | None = None,
    registry: VariantRegistry[FieldValidator] | None = None,
    *,
    ctx: DecodeContext | None = None,
) -> FieldValidator:
    """
    Decode one validation object.

    Raises:
        MalformedValidator: Zero or several recognised keys, a recognised key
            next to unknown ones, or bad parameters
        UnknownDiscriminator: Unknown kind while
            ``config.preserve_unknown_validators`` is False
    """
    ctx = ctx or DecodeContext.for_config(config)
    registry = registry or VALIDATORS
    validator = registry.decode(
        node, ctx, allow_fallback=ctx.config.preserve_unknown_validators
    )
    if isinstance(validator, OpaqueValidator):
        return validator

    message = optional_str(node, MESSAGE_KEY, ctx, MalformedValidator)
    if message is None:
        return validator
    return validator.model_copy(update={"message": message})


def decode_validators(
    nodes: Any,
    config: CodecConfig | None = None,
    registry: VariantRegistry[FieldValidator] | None = None,
    *,
    ctx: DecodeContext | None = None,
) -> tuple[FieldValidator, ...]:
    """Decode a ``validations`` array, keeping input order."""
    ctx = ctx or DecodeContext.for_config(config)
    if nodes is None:
        return ()
    items = expect_list(nodes, ctx, MalformedValidator)
    return tuple(
        decode_validator(item, registry=registry, ctx=ctx.child(i)) for i, item in enumerate(items)
    )


def encode_validator(
    validator: FieldValidator, registry: VariantRegistry[FieldValidator] | None = None
) -> dict[str, Any]:
    """Encode one validator; the kind key comes first, then ``message`` if set."""
    encoded = (registry or VALIDATORS).encode(validator)
    if isinstance(validator, OpaqueValidator) or validator.message is None:
        return encoded
    return {**encoded, MESSAGE_KEY: validator.message}


def encode_validators(
    validators: Iterable[FieldValidator],
    registry: VariantRegistry[FieldValidator] | None = None,
) -> list[dict[str, Any]]:
    return [encode_validator(v, registry) for v in validators]
