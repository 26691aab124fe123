"""
Constraint tree types for role policies.

A constraint is a boolean expression that narrows which documents a policy
applies to. Leaves compare a document property (`Equals`, `In`) or select
fields (`Paths`); `Not` wraps exactly one constraint; `And`/`Or` own an
ordered tuple of child constraints.

Examples:
    - Equals(property="sys.type", value="Entry")
    - Not(inner=Equals(property="sys.contentType.sys.id", value="123"))
    - And(children=(Equals(...), Or(children=(...))))
"""

from __future__ import annotations

from typing import Annotated, Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

# NaN and infinities have no JSON form
FiniteFloat = Annotated[float, Field(allow_inf_nan=False)]

Scalar = str | int | FiniteFloat | bool | None


class Constraint(BaseModel):
    """
    Base class for every constraint node.

    Subclasses set `wire_key` to the JSON key that names them. New kinds of
    constraint are added by subclassing and registering a variant with the
    constraint codec; existing nodes need no change.
    """

    wire_key: ClassVar[str] = ""

    model_config = ConfigDict(frozen=True, extra="forbid")

    @model_validator(mode="before")
    @classmethod
    def reject_abstract(cls, data: Any) -> Any:
        """Only concrete node kinds (those with a wire key) can be built."""
        if not cls.wire_key:
            raise ValueError(f"{cls.__name__} is abstract; use a concrete constraint")
        return data


class Equals(Constraint):
    """Document property equals a scalar value."""

    wire_key: ClassVar[str] = "equals"

    property: str = Field(min_length=1, description="Dotted document path, e.g. sys.type")
    value: Scalar = Field(description="Scalar to compare against")

    def __str__(self) -> str:
        return f"{self.property} == {self.value!r}"


class In(Constraint):
    """Document property is one of a set of scalar values."""

    wire_key: ClassVar[str] = "in"

    property: str = Field(min_length=1)
    values: tuple[Scalar, ...] = Field(description="Allowed values, in wire order")

    def __str__(self) -> str:
        return f"{self.property} in {list(self.values)!r}"


class Paths(Constraint):
    """Restricts a policy to the given field paths, e.g. ``fields.title.%``."""

    wire_key: ClassVar[str] = "paths"

    paths: tuple[str, ...] = Field(min_length=1)

    def __str__(self) -> str:
        return f"paths({', '.join(self.paths)})"


class Not(Constraint):
    """Negation of exactly one constraint."""

    wire_key: ClassVar[str] = "not"

    inner: Constraint

    def __str__(self) -> str:
        return f"not ({self.inner})"


class _Compound(Constraint):
    """Shared shape of `And` and `Or`: an ordered tuple of children."""

    children: tuple[Constraint, ...] = ()

    def __len__(self) -> int:
        return len(self.children)

    def __getitem__(self, index: int) -> Constraint:
        return self.children[index]

    def __str__(self) -> str:
        joined = f" {self.wire_key} ".join(str(child) for child in self.children)
        return f"({joined})"


class And(_Compound):
    """All children must hold."""

    wire_key: ClassVar[str] = "and"


class Or(_Compound):
    """At least one child must hold."""

    wire_key: ClassVar[str] = "or"


def depth(constraint: Constraint) -> int:
    """Nesting depth of a constraint tree; a leaf has depth 1."""
    if isinstance(constraint, Not):
        return 1 + depth(constraint.inner)
    if isinstance(constraint, _Compound):
        return 1 + max((depth(child) for child in constraint.children), default=0)
    return 1
