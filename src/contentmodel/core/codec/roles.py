"""
Role and policy codec.

Wire shape of a role::

    {
      "name": "Editor",
      "description": "...",
      "permissions": {"ContentDelivery": "all", "ContentModel": ["read"], "Settings": []},
      "policies": [
        {"effect": "allow", "actions": ["create", "delete"], "constraint": {"and": [...]}}
      ],
      "sys": {"id": "...", "version": 3}
    }

An unset policy constraint is omitted entirely on encode, not sent as null.
"""

from __future__ import annotations

from typing import Any

from contentmodel.core.config import CodecConfig
from contentmodel.core.dispatch import DecodeContext, VariantRegistry
from contentmodel.core.errors import MalformedPayload
from contentmodel.core.ir.constraints import Constraint
from contentmodel.core.ir.roles import Effect, Permissions, Policy, Role

from .common import (
    actions_or_all,
    build,
    encode_actions,
    expect_list,
    expect_object,
    optional_str,
    sys_value,
)
from .constraints import decode_constraint, encode_constraint

_PERMISSION_KEYS = (
    ("ContentDelivery", "content_delivery"),
    ("ContentModel", "content_model"),
    ("Settings", "settings"),
)


def decode_policy(
    node: Any,
    config: CodecConfig | None = None,
    *,
    constraints: VariantRegistry[Constraint] | None = None,
    ctx: DecodeContext | None = None,
) -> Policy:
    """
    Decode one policy.

    `constraints` replaces the default constraint registry, e.g.
    ``CONSTRAINTS.extend(...)`` for a custom constraint kind.

    Raises:
        MalformedPayload: Missing or invalid effect/actions
        UnknownDiscriminator, MalformedConstraint: From the constraint tree
    """
    ctx = ctx or DecodeContext.for_config(config)
    obj = expect_object(node, ctx, MalformedPayload)

    effect = optional_str(obj, "effect", ctx, MalformedPayload)
    if effect not in {e.value for e in Effect}:
        raise ctx.child("effect").error(MalformedPayload, f"effect must be allow or deny, got {effect!r}")

    constraint = None
    if obj.get("constraint") is not None:
        constraint = decode_constraint(
            obj["constraint"], registry=constraints, ctx=ctx.child("constraint")
        )

    return build(
        Policy,
        ctx,
        MalformedPayload,
        effect=Effect(effect),
        actions=actions_or_all(obj.get("actions"), ctx.child("actions"), MalformedPayload),
        constraint=constraint,
    )


def encode_policy(
    policy: Policy, *, constraints: VariantRegistry[Constraint] | None = None
) -> dict[str, Any]:
    encoded: dict[str, Any] = {
        "effect": policy.effect.value,
        "actions": encode_actions(policy.actions),
    }
    if policy.constraint is not None:
        encoded["constraint"] = encode_constraint(policy.constraint, constraints)
    return encoded


def decode_permissions(node: Any, ctx: DecodeContext) -> Permissions:
    if node is None:
        return Permissions()
    obj = expect_object(node, ctx, MalformedPayload)
    return build(
        Permissions,
        ctx,
        MalformedPayload,
        **{
            attr: actions_or_all(obj.get(key), ctx.child(key), MalformedPayload)
            for key, attr in _PERMISSION_KEYS
        },
    )


def encode_permissions(permissions: Permissions) -> dict[str, Any]:
    return {key: encode_actions(getattr(permissions, attr)) for key, attr in _PERMISSION_KEYS}


def decode_role(
    node: Any,
    config: CodecConfig | None = None,
    *,
    constraints: VariantRegistry[Constraint] | None = None,
) -> Role:
    """
    Decode a role as returned by the service.

    The id and version are read from ``sys``; nothing else in ``sys`` is kept.
    """
    ctx = DecodeContext.for_config(config)
    obj = expect_object(node, ctx, MalformedPayload)

    policies = expect_list(obj.get("policies", []), ctx.child("policies"), MalformedPayload)
    return build(
        Role,
        ctx,
        MalformedPayload,
        id=sys_value(obj, "id"),
        version=sys_value(obj, "version"),
        name=optional_str(obj, "name", ctx, MalformedPayload),
        description=optional_str(obj, "description", ctx, MalformedPayload),
        permissions=decode_permissions(obj.get("permissions"), ctx.child("permissions")),
        policies=tuple(
            decode_policy(policy, constraints=constraints, ctx=ctx.child("policies").child(i))
            for i, policy in enumerate(policies)
        ),
    )


def encode_role(
    role: Role, *, constraints: VariantRegistry[Constraint] | None = None
) -> dict[str, Any]:
    """
    Encode a role as a create/update request body.

    ``sys`` is not sent: the id travels in the URL and the version in a header.
    """
    encoded: dict[str, Any] = {"name": role.name}
    if role.description is not None:
        encoded["description"] = role.description
    encoded["permissions"] = encode_permissions(role.permissions)
    encoded["policies"] = [encode_policy(policy, constraints=constraints) for policy in role.policies]
    return encoded
