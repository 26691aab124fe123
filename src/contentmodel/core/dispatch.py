"""
Discriminator dispatch for polymorphic JSON payloads.

A `VariantRegistry` maps a discriminator to the decode/encode pair of one
concrete variant. The discriminator is found by a strategy:

- `KeyPresence`: the variant is named by the single recognised key of the
  object, e.g. ``{"equals": [...]}`` or ``{"size": {...}}``.
- `ExternalTag`: the variant is named by a value supplied alongside the
  object, e.g. the ``widgetId`` next to editor control ``settings``.

Registries hold no domain knowledge and are immutable once built. Codecs build
their default registry at import time and accept a replacement for extension.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Any, Generic, Protocol, TypeVar

from .config import DEFAULT_CONFIG, CodecConfig
from .errors import CodecError, ErrorContext, MalformedPayload, UnknownDiscriminator, make_error

logger = logging.getLogger(__name__)

T = TypeVar("T")

JsonScalar = str | int | float | bool | None
JsonValue = JsonScalar | list["JsonValue"] | dict[str, "JsonValue"]


@dataclass(frozen=True)
class DecodeContext:
    """
    Per-call decode state.

    Attributes:
        config: Limits and strictness switches
        path: Location of the current node, used in error messages
        depth: Nesting level of recursive variants (constraint trees)
        registry: Registry driving the current decode, used for recursive children
    """

    config: CodecConfig = DEFAULT_CONFIG
    path: tuple[str | int, ...] = ()
    depth: int = 0
    registry: VariantRegistry[Any] | None = None

    @classmethod
    def for_config(cls, config: CodecConfig | None = None) -> DecodeContext:
        """Root context for a top-level decode call."""
        return cls(config=config or DEFAULT_CONFIG)

    def child(self, segment: str | int) -> DecodeContext:
        """Context for a child node at the same nesting level."""
        return replace(self, path=(*self.path, segment))

    def deeper(self) -> DecodeContext:
        """Context one recursion level down, at the same path."""
        return replace(self, depth=self.depth + 1)

    @property
    def location(self) -> str:
        """JSONPath-like location of the current node."""
        return ErrorContext(path=self.path).format()

    def error(self, error_cls: type[CodecError], message: str, **kwargs: Any) -> CodecError:
        """Build an error located at the current node."""
        return make_error(error_cls, message, self.path, **kwargs)


@dataclass(frozen=True)
class Variant(Generic[T]):
    """
    One concrete shape a registry can decode and encode.

    Attributes:
        tag: Discriminator value (object key or external tag)
        model: Python type produced by `decode`
        decode: Builds the model from the variant's payload
        encode: Emits the variant's payload for a model value; receives the
            registry doing the encoding so nested values use the same table
        keys: Canonical order of keys when the payload is an object
    """

    tag: str
    model: type[T]
    decode: Callable[[Any, DecodeContext], T]
    encode: Callable[[T, VariantRegistry[Any]], Any]
    keys: tuple[str, ...] = ()

    def emit(self, value: T, registry: VariantRegistry[Any]) -> Any:
        """Encode `value` and put object keys in canonical order."""
        payload = self.encode(value, registry)
        if self.keys and isinstance(payload, dict):
            return order_keys(payload, self.keys)
        return payload


class Strategy(Protocol):
    """How a registry locates the discriminator for a node."""

    def resolve(
        self, registry: VariantRegistry[Any], node: Any, ctx: DecodeContext, tag: str | None
    ) -> tuple[Variant[Any] | None, Any, DecodeContext]:
        """Return the matched variant (None for fallback), its payload, and its context."""
        ...

    def wrap(self, variant: Variant[Any], payload: Any) -> Any:
        """Place an encoded payload back into its discriminated container."""
        ...


@dataclass(frozen=True)
class KeyPresence:
    """
    Resolve the variant from the one recognised key present on an object.

    Attributes:
        ignored: Keys shared by every variant that never discriminate (e.g. ``message``)
    """

    ignored: frozenset[str] = frozenset()

    def resolve(
        self, registry: VariantRegistry[Any], node: Any, ctx: DecodeContext, tag: str | None
    ) -> tuple[Variant[Any] | None, Any, DecodeContext]:
        if not isinstance(node, dict):
            raise ctx.error(
                registry.malformed,
                f"{registry.name}: expected an object, got {type(node).__name__}",
            )

        keys = tuple(key for key in node if key not in self.ignored)
        known = [key for key in keys if key in registry.variants]

        if len(known) > 1:
            raise ctx.error(
                registry.malformed,
                f"{registry.name}: ambiguous object, found keys {', '.join(known)}",
            )
        if known:
            key = known[0]
            if len(keys) > 1:
                extra = [k for k in keys if k != key]
                raise ctx.error(
                    registry.malformed,
                    f"{registry.name}: unexpected keys {', '.join(extra)} alongside '{key}'",
                )
            return registry.variants[key], node[key], ctx.child(key)
        if not keys:
            raise ctx.error(registry.malformed, f"{registry.name}: object has no discriminating key")
        if registry.fallback is None:
            raise ctx.error(
                UnknownDiscriminator,
                f"{registry.name}: unknown key {', '.join(keys)}",
                registry=registry.name,
                keys=keys,
            )
        return None, node, ctx

    def wrap(self, variant: Variant[Any], payload: Any) -> Any:
        return {variant.tag: payload}


@dataclass(frozen=True)
class ExternalTag:
    """Resolve the variant from a tag supplied next to the object."""

    def resolve(
        self, registry: VariantRegistry[Any], node: Any, ctx: DecodeContext, tag: str | None
    ) -> tuple[Variant[Any] | None, Any, DecodeContext]:
        if not isinstance(node, dict):
            raise ctx.error(
                registry.malformed,
                f"{registry.name}: expected an object, got {type(node).__name__}",
            )
        if tag is not None and tag in registry.variants:
            return registry.variants[tag], node, ctx
        if registry.fallback is None:
            raise ctx.error(
                UnknownDiscriminator,
                f"{registry.name}: unknown tag {tag!r}",
                registry=registry.name,
                value=tag,
            )
        return None, node, ctx

    def wrap(self, variant: Variant[Any], payload: Any) -> Any:
        return payload


class VariantRegistry(Generic[T]):
    """
    Immutable discriminator -> variant table.

    Args:
        name: Human-readable name used in error messages
        variants: Registered variants; tags must be unique
        strategy: How the discriminator is located on a node
        fallback: Variant used for unrecognised shapes (None: unknown is fatal)
        malformed: Error class raised for shape violations
    """

    __slots__ = ("name", "variants", "strategy", "fallback", "malformed", "_by_model")

    name: str
    variants: Mapping[str, Variant[T]]
    strategy: Strategy
    fallback: Variant[T] | None
    malformed: type[MalformedPayload]

    def __init__(
        self,
        name: str,
        variants: Iterable[Variant[T]],
        *,
        strategy: Strategy,
        fallback: Variant[T] | None = None,
        malformed: type[MalformedPayload] = MalformedPayload,
    ):
        table: dict[str, Variant[T]] = {}
        for variant in variants:
            if variant.tag in table:
                raise ValueError(f"{name}: duplicate variant tag '{variant.tag}'")
            table[variant.tag] = variant

        by_model = {variant.model: variant for variant in table.values()}
        if fallback is not None:
            by_model[fallback.model] = fallback

        object.__setattr__(self, "name", name)
        object.__setattr__(self, "variants", MappingProxyType(table))
        object.__setattr__(self, "strategy", strategy)
        object.__setattr__(self, "fallback", fallback)
        object.__setattr__(self, "malformed", malformed)
        object.__setattr__(self, "_by_model", MappingProxyType(by_model))
        logger.debug("Built %s registry with tags: %s", name, ", ".join(table))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __contains__(self, tag: object) -> bool:
        return tag in self.variants

    def __repr__(self) -> str:
        return f"VariantRegistry({self.name!r}, tags={list(self.variants)!r})"

    def extend(self, *variants: Variant[T]) -> VariantRegistry[T]:
        """Return a new registry with extra variants; replacing a tag is an error."""
        return VariantRegistry(
            self.name,
            [*self.variants.values(), *variants],
            strategy=self.strategy,
            fallback=self.fallback,
            malformed=self.malformed,
        )

    def for_value(self, value: T) -> Variant[T]:
        """
        Find the variant that encodes `value`.

        Exact type match wins; otherwise the nearest registered base class
        in the value's MRO is used.

        Raises:
            TypeError: If the value's type is not registered
        """
        for cls in type(value).__mro__:
            variant = self._by_model.get(cls)
            if variant is not None:
                return variant
        raise TypeError(f"{self.name}: no variant registered for {type(value).__name__}")

    def decode(
        self,
        node: Any,
        ctx: DecodeContext | None = None,
        *,
        tag: str | None = None,
        allow_fallback: bool = True,
    ) -> T:
        """
        Decode one node into its typed variant.

        Args:
            node: Generic JSON value
            ctx: Decode context (defaults to a root context)
            tag: External discriminator for `ExternalTag` registries
            allow_fallback: If False, unrecognised shapes raise even when a
                fallback variant is registered

        Raises:
            UnknownDiscriminator: If nothing matches and no fallback applies
            MalformedPayload: If the node's shape is invalid
        """
        ctx = replace(ctx or DecodeContext(), registry=self)
        variant, payload, inner_ctx = self.strategy.resolve(self, node, ctx, tag)
        if variant is not None:
            return variant.decode(payload, inner_ctx)

        fallback = self.fallback
        if fallback is None or not allow_fallback:
            keys = tuple(payload) if isinstance(payload, dict) else ()
            raise ctx.error(
                UnknownDiscriminator,
                f"{self.name}: unrecognised shape (keys: {', '.join(keys) or 'none'}, tag: {tag!r})",
                registry=self.name,
                keys=keys,
                value=tag,
            )
        logger.debug("%s: no variant at %s, using %s", self.name, ctx.location, fallback.tag)
        return fallback.decode(payload, inner_ctx)

    def encode(self, value: T) -> Any:
        """Encode a typed variant to its canonical JSON value."""
        variant = self.for_value(value)
        if variant is self.fallback:
            return variant.emit(value, self)
        return self.strategy.wrap(variant, variant.emit(value, self))


def order_keys(payload: dict[str, Any], keys: tuple[str, ...]) -> dict[str, Any]:
    """Reorder `payload` so `keys` come first in the given order; others keep theirs."""
    ordered = {key: payload[key] for key in keys if key in payload}
    for key, value in payload.items():
        if key not in ordered:
            ordered[key] = value
    return ordered


def omit_unset(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Drop keys whose value is None; the remote API treats absence as meaningful."""
    return {key: value for key, value in payload.items() if value is not None}
