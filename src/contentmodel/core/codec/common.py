"""
Shape checks shared by the codecs.

Each helper takes the current `DecodeContext` and the error class to raise,
so every failure is reported at the right JSON path with the right kind.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from contentmodel.core.dispatch import DecodeContext
from contentmodel.core.errors import MalformedPayload

M = TypeVar("M", bound=BaseModel)


def build(
    model: type[M], ctx: DecodeContext, error_cls: type[MalformedPayload], **kwargs: Any
) -> M:
    """Construct a model, reporting construction failures as decode errors."""
    try:
        return model(**kwargs)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or model.__name__}: {err['msg']}"
            for err in e.errors()
        )
        raise ctx.error(error_cls, f"invalid {model.__name__}: {problems}") from e


def expect_object(node: Any, ctx: DecodeContext, error_cls: type[MalformedPayload]) -> dict[str, Any]:
    if not isinstance(node, dict):
        raise ctx.error(error_cls, f"expected an object, got {_kind(node)}")
    return node


def expect_list(node: Any, ctx: DecodeContext, error_cls: type[MalformedPayload]) -> list[Any]:
    if not isinstance(node, list):
        raise ctx.error(error_cls, f"expected an array, got {_kind(node)}")
    return node


def expect_str(node: Any, ctx: DecodeContext, error_cls: type[MalformedPayload]) -> str:
    if not isinstance(node, str):
        raise ctx.error(error_cls, f"expected a string, got {_kind(node)}")
    return node


def optional_str(
    obj: dict[str, Any], key: str, ctx: DecodeContext, error_cls: type[MalformedPayload]
) -> str | None:
    """Read an optional string member; absent and null both mean unset."""
    value = obj.get(key)
    if value is None:
        return None
    return expect_str(value, ctx.child(key), error_cls)


def optional_number(
    obj: dict[str, Any],
    key: str,
    ctx: DecodeContext,
    error_cls: type[MalformedPayload],
    *,
    integral: bool = False,
) -> int | float | None:
    """Read an optional numeric member. Booleans are not numbers here."""
    value = obj.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ctx.child(key).error(error_cls, f"expected a number, got {_kind(value)}")
    if integral and not isinstance(value, int):
        if not float(value).is_integer():
            raise ctx.child(key).error(error_cls, f"expected an integer, got {value}")
        value = int(value)
    return value


def string_list(node: Any, ctx: DecodeContext, error_cls: type[MalformedPayload]) -> tuple[str, ...]:
    items = expect_list(node, ctx, error_cls)
    return tuple(expect_str(item, ctx.child(i), error_cls) for i, item in enumerate(items))


def actions_or_all(node: Any, ctx: DecodeContext, error_cls: type[MalformedPayload]) -> Any:
    """Decode an action list that the service may abbreviate as the string "all"."""
    if node is None:
        return ()
    if node == "all":
        return "all"
    return string_list(node, ctx, error_cls)


def encode_actions(actions: tuple[str, ...] | str) -> list[str] | str:
    if isinstance(actions, str):
        return actions
    return list(actions)


def sys_value(obj: dict[str, Any], key: str) -> Any:
    """Read ``sys.<key>`` from an entity payload, tolerating a missing sys block."""
    sys = obj.get("sys")
    if not isinstance(sys, dict):
        return None
    return sys.get(key)


def sys_link_id(obj: dict[str, Any], key: str) -> str | None:
    """Read the id of a link stored at ``sys.<key>.sys.id``."""
    link = sys_value(obj, key)
    if not isinstance(link, dict):
        return None
    inner = link.get("sys")
    if not isinstance(inner, dict):
        return None
    value = inner.get("id")
    return value if isinstance(value, str) else None


def _kind(node: Any) -> str:
    if node is None:
        return "null"
    if isinstance(node, bool):
        return "boolean"
    if isinstance(node, int | float):
        return "number"
    if isinstance(node, str):
        return "string"
    if isinstance(node, list):
        return "array"
    if isinstance(node, dict):
        return "object"
    return type(node).__name__
