"""
Constraint tree codec.

Wire shapes::

    {"equals": [{"doc": "sys.type"}, "Entry"]}
    {"in": [{"doc": "sys.id"}, ["a", "b"]]}
    {"paths": [{"doc": "fields.title.%"}]}
    {"not": <constraint>}
    {"and": [<constraint>, ...]}
    {"or": [<constraint>, ...]}

The variant is named by the single key present on each object. The
vocabulary is closed: an unknown key is a fatal `UnknownDiscriminator`.
Property references are wrapped in a ``{"doc": ...}`` object while compared
values stay bare; that asymmetry is part of the wire contract.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from contentmodel.core.config import CodecConfig
from contentmodel.core.dispatch import DecodeContext, KeyPresence, Variant, VariantRegistry
from contentmodel.core.errors import MalformedConstraint, RecursionLimitExceeded
from contentmodel.core.ir.constraints import And, Constraint, Equals, In, Not, Or, Paths

from .common import build, expect_list, expect_object, expect_str

_SCALARS = (str, int, float, bool)


# ---------------------------------------------------------------------------
# Recursion
# ---------------------------------------------------------------------------


def _decode_child(node: Any, ctx: DecodeContext) -> Constraint:
    """Decode a nested constraint through the registry driving this decode."""
    if ctx.depth >= ctx.config.max_depth:
        raise ctx.error(
            RecursionLimitExceeded,
            f"constraint nesting exceeds max_depth={ctx.config.max_depth}",
            limit=ctx.config.max_depth,
        )
    registry = ctx.registry if ctx.registry is not None else CONSTRAINTS
    return registry.decode(node, ctx)


# ---------------------------------------------------------------------------
# Document references
# ---------------------------------------------------------------------------


def _decode_doc(node: Any, ctx: DecodeContext) -> str:
    obj = expect_object(node, ctx, MalformedConstraint)
    if list(obj) != ["doc"]:
        raise ctx.error(MalformedConstraint, f"expected {{\"doc\": <property>}}, got keys {list(obj)}")
    return expect_str(obj["doc"], ctx.child("doc"), MalformedConstraint)


def _decode_scalar(node: Any, ctx: DecodeContext) -> Any:
    if node is not None and not isinstance(node, _SCALARS):
        raise ctx.error(MalformedConstraint, "compared value must be a scalar, not an array or object")
    return node


def _operands(payload: Any, ctx: DecodeContext, name: str) -> tuple[str, Any, DecodeContext]:
    """Split a ``[{"doc": p}, v]`` pair."""
    pair = expect_list(payload, ctx, MalformedConstraint)
    if len(pair) != 2:
        raise ctx.error(MalformedConstraint, f"'{name}' takes exactly 2 operands, got {len(pair)}")
    return _decode_doc(pair[0], ctx.child(0)), pair[1], ctx.child(1)


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------


def _decode_equals(payload: Any, ctx: DecodeContext) -> Equals:
    prop, value, value_ctx = _operands(payload, ctx, "equals")
    return build(
        Equals, ctx, MalformedConstraint, property=prop, value=_decode_scalar(value, value_ctx)
    )


def _encode_equals(value: Equals, registry: VariantRegistry[Any]) -> list[Any]:
    return [{"doc": value.property}, value.value]


def _decode_in(payload: Any, ctx: DecodeContext) -> In:
    prop, values, values_ctx = _operands(payload, ctx, "in")
    items = expect_list(values, values_ctx, MalformedConstraint)
    return build(
        In,
        ctx,
        MalformedConstraint,
        property=prop,
        values=tuple(_decode_scalar(v, values_ctx.child(i)) for i, v in enumerate(items)),
    )


def _encode_in(value: In, registry: VariantRegistry[Any]) -> list[Any]:
    return [{"doc": value.property}, list(value.values)]


def _decode_paths(payload: Any, ctx: DecodeContext) -> Paths:
    docs = expect_list(payload, ctx, MalformedConstraint)
    return build(
        Paths,
        ctx,
        MalformedConstraint,
        paths=tuple(_decode_doc(doc, ctx.child(i)) for i, doc in enumerate(docs)),
    )


def _encode_paths(value: Paths, registry: VariantRegistry[Any]) -> list[Any]:
    return [{"doc": path} for path in value.paths]


def _decode_not(payload: Any, ctx: DecodeContext) -> Not:
    if not isinstance(payload, dict):
        raise ctx.error(MalformedConstraint, "'not' wraps exactly one constraint object")
    return Not(inner=_decode_child(payload, ctx.deeper()))


def _encode_not(value: Not, registry: VariantRegistry[Any]) -> Any:
    return registry.encode(value.inner)


def _decode_compound(model: type[And] | type[Or]):
    def decode(payload: Any, ctx: DecodeContext) -> And | Or:
        items = expect_list(payload, ctx, MalformedConstraint)
        deeper = ctx.deeper()
        children = tuple(_decode_child(item, deeper.child(i)) for i, item in enumerate(items))
        return model(children=children)

    return decode


def _encode_compound(value: And | Or, registry: VariantRegistry[Any]) -> list[Any]:
    return [registry.encode(child) for child in value.children]


CONSTRAINTS: VariantRegistry[Constraint] = VariantRegistry(
    "constraint",
    [
        Variant(Equals.wire_key, Equals, _decode_equals, _encode_equals),
        Variant(In.wire_key, In, _decode_in, _encode_in),
        Variant(Paths.wire_key, Paths, _decode_paths, _encode_paths),
        Variant(Not.wire_key, Not, _decode_not, _encode_not),
        Variant(And.wire_key, And, _decode_compound(And), _encode_compound),
        Variant(Or.wire_key, Or, _decode_compound(Or), _encode_compound),
    ],
    strategy=KeyPresence(),
    malformed=MalformedConstraint,
)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def decode_constraint(
    node: Any,
    config: CodecConfig | None = None,
    registry: VariantRegistry[Constraint] | None = None,
    *,
    ctx: DecodeContext | None = None,
) -> Constraint:
    """
    Decode a constraint tree.

    Args:
        node: Generic JSON value, e.g. ``{"and": [...]}``
        config: Decode limits (max_depth)
        registry: Replacement registry, e.g. ``CONSTRAINTS.extend(...)``
        ctx: Context when called from an owning codec; overrides `config`

    Raises:
        UnknownDiscriminator: An object uses an unknown constraint key
        MalformedConstraint: Shape or arity violation
        RecursionLimitExceeded: Nesting deeper than ``config.max_depth``
    """
    base = ctx or DecodeContext.for_config(config)
    return _decode_child(node, replace(base, registry=registry or CONSTRAINTS))


def encode_constraint(
    constraint: Constraint, registry: VariantRegistry[Constraint] | None = None
) -> dict[str, Any]:
    """Encode a constraint tree to its canonical JSON object."""
    return (registry or CONSTRAINTS).encode(constraint)
