"""
contentmodel typed object graph.

Frozen pydantic models for the polymorphic parts of the content model
(constraints, field validators, control settings) and the entities that own
them (roles, content types, editor interfaces).

All types are re-exported from this package.
"""

# Constraints
from .constraints import (
    And,
    Constraint,
    Equals,
    FiniteFloat,
    In,
    Not,
    Or,
    Paths,
    Scalar,
    depth,
)

# Content Types
from .content_types import (
    ContentField,
    ContentType,
    FieldItems,
    FieldKind,
    LinkType,
)

# Editor Interfaces
from .controls import (
    BooleanSettings,
    ClockFormat,
    ControlSettings,
    DateFormat,
    DatePickerSettings,
    EditorInterface,
    EditorInterfaceControl,
    OpaqueSettings,
    RatingSettings,
    SystemWidgetId,
    settings_shapes,
)

# Roles
from .roles import (
    ALL,
    ActionList,
    Effect,
    Permissions,
    Policy,
    PolicyAction,
    Role,
)

# Validators
from .validators import (
    AssetFileSizeValidator,
    AssetImageDimensionsValidator,
    Bounds,
    DateRangeValidator,
    FieldValidator,
    InValidator,
    LinkContentTypeValidator,
    LinkMimetypeGroupValidator,
    MimetypeGroup,
    OpaqueValidator,
    ProhibitRegExpValidator,
    RangeValidator,
    RegExpValidator,
    SizeValidator,
    UniqueValidator,
)

__all__ = [
    # Constraints
    "And",
    "Constraint",
    "Equals",
    "FiniteFloat",
    "In",
    "Not",
    "Or",
    "Paths",
    "Scalar",
    "depth",
    # Content Types
    "ContentField",
    "ContentType",
    "FieldItems",
    "FieldKind",
    "LinkType",
    # Editor Interfaces
    "BooleanSettings",
    "ClockFormat",
    "ControlSettings",
    "DateFormat",
    "DatePickerSettings",
    "EditorInterface",
    "EditorInterfaceControl",
    "OpaqueSettings",
    "RatingSettings",
    "SystemWidgetId",
    "settings_shapes",
    # Roles
    "ALL",
    "ActionList",
    "Effect",
    "Permissions",
    "Policy",
    "PolicyAction",
    "Role",
    # Validators
    "AssetFileSizeValidator",
    "AssetImageDimensionsValidator",
    "Bounds",
    "DateRangeValidator",
    "FieldValidator",
    "InValidator",
    "LinkContentTypeValidator",
    "LinkMimetypeGroupValidator",
    "MimetypeGroup",
    "OpaqueValidator",
    "ProhibitRegExpValidator",
    "RangeValidator",
    "RegExpValidator",
    "SizeValidator",
    "UniqueValidator",
]
