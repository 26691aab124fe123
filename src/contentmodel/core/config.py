import tomllib
from dataclasses import dataclass
from pathlib import Path

# Each constraint level costs a handful of Python frames; stay well under the interpreter limit
MAX_DEPTH_CEILING = 256


@dataclass(frozen=True)
class CodecConfig:
    """Decoder limits and strictness switches.

    Examples in contentmodel.toml:

        [codec]
        max_depth = 32
        strict_control_settings = true
        preserve_unknown_validators = false
    """

    max_depth: int = 64  # deepest constraint nesting accepted on decode
    strict_control_settings: bool = False  # unknown keys in known widget settings raise
    preserve_unknown_validators: bool = True  # False: unknown validator keys raise

    def __post_init__(self) -> None:
        if not 1 <= self.max_depth <= MAX_DEPTH_CEILING:
            raise ValueError(
                f"max_depth must be between 1 and {MAX_DEPTH_CEILING}, got {self.max_depth}"
            )


DEFAULT_CONFIG = CodecConfig()


def load_config(path: Path) -> CodecConfig:
    data = tomllib.loads(path.read_text(encoding="utf-8"))
    codec = data.get("codec", {})

    return CodecConfig(
        max_depth=codec.get("max_depth", DEFAULT_CONFIG.max_depth),
        strict_control_settings=codec.get(
            "strict_control_settings", DEFAULT_CONFIG.strict_control_settings
        ),
        preserve_unknown_validators=codec.get(
            "preserve_unknown_validators", DEFAULT_CONFIG.preserve_unknown_validators
        ),
    )
