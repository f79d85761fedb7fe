"""Recovery settings loaded from YAML/JSON files and the environment.

Precedence, lowest first: dataclass defaults, config file, SHAMIRVOTE_*
environment variables. Command-line flags are applied on top by the CLI.
"""

import json
import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

ENV_PREFIX = "SHAMIRVOTE_"
DEFAULT_MAX_COMBINATIONS = 1_000_000


@dataclass(frozen=True)
class RecoveryConfig:
    max_combinations: int = DEFAULT_MAX_COMBINATIONS  # None or 0 disables the cap
    strict_majority: bool = False
    workers: int = 1
    chunk_size: int = 256
    log_level: str = "INFO"

    def __post_init__(self):
        if self.max_combinations == 0:
            object.__setattr__(self, "max_combinations", None)
        if self.max_combinations is not None and self.max_combinations < 0:
            raise ValueError(f"max_combinations must be >= 0, got {self.max_combinations}")
        if self.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")
        if self.chunk_size < 1:
            raise ValueError(f"chunk_size must be >= 1, got {self.chunk_size}")


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"Not a boolean: {value!r}")


def _parse_limit(value: str):
    lowered = value.strip().lower()
    if lowered in ("", "0", "none"):
        return None
    return int(lowered)


_ENV_PARSERS = {
    "max_combinations": _parse_limit,
    "strict_majority": _parse_bool,
    "workers": int,
    "chunk_size": int,
    "log_level": str.strip,
}


def read_config_file(path) -> dict:
    """Load a mapping from a .yaml/.yml or .json file."""
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        if path.suffix.lower() in (".yaml", ".yml"):
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"{path}: invalid YAML ({e})") from e
        elif path.suffix.lower() == ".json":
            data = json.load(f)
        else:
            raise ValueError(f"Unsupported config format: {path.suffix}")
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: config must be a mapping")
    return data


def env_overrides(environ=None) -> dict:
    """SHAMIRVOTE_* variables parsed into config field values."""
    environ = os.environ if environ is None else environ
    out = {}
    for name, parse in _ENV_PARSERS.items():
        raw = environ.get(ENV_PREFIX + name.upper())
        if raw is not None:
            out[name] = parse(raw)
    return out


def load_config(path=None, environ=None) -> RecoveryConfig:
    """Build a RecoveryConfig from an optional file plus the environment.

    Unknown keys in the file raise ValueError.
    """
    values = {}
    if path is not None:
        values.update(read_config_file(path))
        logger.debug("Loaded config from %s", path)

    known = {f.name for f in fields(RecoveryConfig)}
    unknown = set(values) - known
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}")

    values.update(env_overrides(environ))
    return RecoveryConfig(**values)


def with_overrides(config: RecoveryConfig, **overrides) -> RecoveryConfig:
    """Copy of `config` with every non-None override applied."""
    return replace(config, **{k: v for k, v in overrides.items() if v is not None})
