"""
Codecs between generic JSON trees and the typed content model.

Every ``decode_*`` takes a parsed JSON value (``dict``/``list``/scalar) and
returns a frozen model or raises a `CodecError`. Every ``encode_*`` returns a
JSON value ready for `dumps` and never fails for a constructible model.
"""

from .constraints import CONSTRAINTS, decode_constraint, encode_constraint
from .content_types import (
    decode_content_type,
    decode_field,
    encode_content_type,
    encode_field,
)
from .control_settings import CONTROL_SETTINGS, decode_settings, encode_settings
from .editor_interfaces import (
    decode_control,
    decode_editor_interface,
    encode_control,
    encode_editor_interface,
)
from .json import dumps, loads
from .roles import decode_policy, decode_role, encode_policy, encode_role
from .validators import (
    VALIDATORS,
    decode_validator,
    decode_validators,
    encode_validator,
    encode_validators,
)

__all__ = [
    # Registries
    "CONSTRAINTS",
    "CONTROL_SETTINGS",
    "VALIDATORS",
    # Constraints
    "decode_constraint",
    "encode_constraint",
    # Validators
    "decode_validator",
    "decode_validators",
    "encode_validator",
    "encode_validators",
    # Control settings
    "decode_settings",
    "encode_settings",
    # Entities
    "decode_content_type",
    "decode_control",
    "decode_editor_interface",
    "decode_field",
    "decode_policy",
    "decode_role",
    "encode_content_type",
    "encode_control",
    "encode_editor_interface",
    "encode_field",
    "encode_policy",
    "encode_role",
    # JSON text
    "dumps",
    "loads",
]
