"""
Role and policy types for space access control.

A role grants coarse permissions per area and a list of fine-grained policies.
Each policy allows or denies a set of actions, optionally scoped by a
constraint tree.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .constraints import Constraint

ALL: Literal["all"] = "all"

ActionList = tuple[str, ...] | Literal["all"]


class Effect(StrEnum):
    """Whether a policy grants or revokes its actions."""

    ALLOW = "allow"
    DENY = "deny"


class PolicyAction(StrEnum):
    """Actions a policy can name."""

    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    PUBLISH = "publish"
    UNPUBLISH = "unpublish"
    ARCHIVE = "archive"
    UNARCHIVE = "unarchive"


class Policy(BaseModel):
    """
    One allow/deny rule.

    Attributes:
        effect: allow or deny
        actions: Actions in wire order, or "all"
        constraint: Optional scope; None means the policy is unscoped
    """

    effect: Effect
    actions: ActionList = ()
    constraint: Constraint | None = None

    model_config = ConfigDict(frozen=True, extra="forbid")


class Permissions(BaseModel):
    """Coarse per-area permissions; each area is a list of actions or "all"."""

    content_delivery: ActionList = ()
    content_model: ActionList = ()
    settings: ActionList = ()

    model_config = ConfigDict(frozen=True, extra="forbid")


class Role(BaseModel):
    """
    A named set of permissions and policies.

    Attributes:
        id: System id; None for roles not yet created
        version: System version, needed for updates
    """

    id: str | None = None
    version: int | None = None
    name: str = Field(min_length=1)
    description: str | None = None
    permissions: Permissions = Field(default_factory=Permissions)
    policies: tuple[Policy, ...] = ()

    model_config = ConfigDict(frozen=True, extra="forbid")
