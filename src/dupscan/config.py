"""Configuration loading and merging."""

from __future__ import annotations

from dupscan.hasher import CHUNK_SIZE
from dupscan.pool import default_workers

import logging
import os
import pathlib
import tomllib


logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.toml"

_BOOL_KEYS = {"verbose", "quiet"}
_POSITIVE_INT_KEYS = {"workers", "chunk_size"}


def _defaults() -> dict[str, object]:
    return {
        "workers": default_workers(),
        "chunk_size": CHUNK_SIZE,
        "verbose": False,
        "quiet": False,
    }


def _config_dir() -> pathlib.Path:
    """Return the dupscan config directory."""
    base = pathlib.Path(os.environ.get("XDG_CONFIG_HOME", "~/.config")).expanduser()
    return base / "dupscan"


def load_config(config_dir: pathlib.Path | None = None) -> dict:
    """Load config.toml and return its contents as a dict.

    Returns {} if no file exists or on parse error.
    """
    if config_dir is None:
        config_dir = _config_dir()
    path = config_dir / CONFIG_FILENAME
    if not path.exists():
        return {}
    try:
        return tomllib.loads(path.read_text())
    except (OSError, tomllib.TOMLDecodeError) as exc:
        logger.warning(f"ignoring unreadable config {path}: {exc}")
        return {}


def _is_positive_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def merge_config_into_args(args, config: dict) -> None:
    """Three-layer merge: CLI > config > hardcoded defaults.

    Mutates *args* in place.
    """
    defaults = _defaults()

    for key in _POSITIVE_INT_KEYS:
        if getattr(args, key, None) is not None:
            continue
        cfg_val = config.get(key)
        if _is_positive_int(cfg_val):
            setattr(args, key, cfg_val)
        else:
            if cfg_val is not None:
                logger.warning(f"ignoring invalid {key} in config: {cfg_val!r}")
            setattr(args, key, defaults[key])

    # -v and -q are exclusive; either on the CLI overrides both in config.
    source = {} if any(getattr(args, k, None) is not None for k in _BOOL_KEYS) else config
    for key in _BOOL_KEYS:
        if getattr(args, key, None) is not None:
            continue
        cfg_val = source.get(key)
        if cfg_val is not None:
            setattr(args, key, bool(cfg_val))
        else:
            setattr(args, key, defaults[key])
