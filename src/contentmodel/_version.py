"""Installed contentmodel version, with a fallback for source checkouts."""

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def get_version() -> str:
    """Distribution metadata when installed, else ``[project].version`` from pyproject.toml."""
    try:
        return version("contentmodel")
    except PackageNotFoundError:
        pass
    try:
        with _PYPROJECT.open("rb") as f:
            return tomllib.load(f)["project"]["version"]
    except (OSError, tomllib.TOMLDecodeError, KeyError):
        return "0.0.0"


__version__ = get_version()
