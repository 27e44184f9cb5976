"""
Protocol configuration.

Every tunable constant of the protocol lives in :class:`ProtocolConfig`. The
defaults are the production values; a YAML file can override any subset of
them. The process-wide configuration is initialised once and is immutable
afterwards.

Environment
-----------
Set ``POI_PROTOCOL_CONFIG`` to the path of a YAML file to override the
defaults for the whole process.
"""

from __future__ import annotations

import hashlib
import logging
import os
from dataclasses import dataclass, fields, replace
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Union

import yaml

__all__ = [
    "ConfigError",
    "ProtocolConfig",
    "DEFAULT_CONFIG",
    "CONFIG_ENV_VAR",
    "config_from_mapping",
    "load_config",
    "get_config",
]

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "POI_PROTOCOL_CONFIG"

# 3 decimals on every token amount
_TOKEN_UNIT = 1_000


class ConfigError(ValueError):
    """Raised when a protocol configuration is missing, malformed or inconsistent."""


@dataclass(frozen=True)
class ProtocolConfig:
    """Immutable protocol constants."""

    # Emission
    max_supply: int = 2_100_000_000_000_000 * _TOKEN_UNIT
    initial_reward: int = 5_000_000_000 * _TOKEN_UNIT
    halving_interval: int = 210_000

    # Epochs and difficulty
    epoch_duration: int = 600
    target_solutions: int = 50
    initial_difficulty: int = 8
    min_difficulty: int = 4
    max_difficulty: int = 250
    max_difficulty_adjustment: int = 5
    claim_expiry_epochs: int = 500

    # Text constraints
    min_text_length: int = 256
    max_text_length: int = 800
    required_word_gap: int = 40
    min_sentence_words: int = 5
    max_sentence_words: int = 35
    short_sentence_words: int = 10
    long_sentence_words: int = 20
    min_sentences: int = 2
    tracked_bigrams: Tuple[str, ...] = ("th", "he", "in", "er", "an")
    min_bigram_count: int = 2
    vowel_percent_band: Tuple[int, int] = (30, 48)
    space_percent_band: Tuple[int, int] = (12, 22)
    max_consonant_run: int = 5
    # average run length cap, in tenths (25 -> 2.5)
    max_consonant_average_tenths: int = 25
    min_distinct_bytes: int = 28
    fingerprint_capacity: int = 50

    # Hash primitive (any hashlib constructor with a 32-byte digest)
    hash_algorithm: str = "sha3_256"

    def validate(self) -> None:
        """Validate structural invariants, raising :class:`ConfigError`."""
        for name in (
            "max_supply",
            "initial_reward",
            "halving_interval",
            "epoch_duration",
            "target_solutions",
            "max_difficulty_adjustment",
            "claim_expiry_epochs",
            "min_text_length",
            "min_sentence_words",
            "fingerprint_capacity",
        ):
            value = getattr(self, name)
            if not isinstance(value, int) or value <= 0:
                raise ConfigError(f"{name} must be a positive integer, got {value!r}")

        if not 0 <= self.min_difficulty <= self.max_difficulty <= 256:
            raise ConfigError(
                f"difficulty bounds must satisfy 0 <= min <= max <= 256, "
                f"got [{self.min_difficulty}, {self.max_difficulty}]"
            )
        if not self.min_difficulty <= self.initial_difficulty <= self.max_difficulty:
            raise ConfigError(
                f"initial_difficulty {self.initial_difficulty} outside "
                f"[{self.min_difficulty}, {self.max_difficulty}]"
            )
        if self.initial_reward > self.max_supply:
            raise ConfigError("initial_reward must not exceed max_supply")
        if self.max_text_length < self.min_text_length:
            raise ConfigError("max_text_length must be >= min_text_length")
        if self.max_sentence_words < self.min_sentence_words:
            raise ConfigError("max_sentence_words must be >= min_sentence_words")
        if self.required_word_gap < 0:
            raise ConfigError("required_word_gap must be >= 0")

        for name in ("vowel_percent_band", "space_percent_band"):
            band = getattr(self, name)
            if len(band) != 2 or not 0 <= band[0] <= band[1] <= 100:
                raise ConfigError(f"{name} must be [low, high] with 0 <= low <= high <= 100")

        for bigram in self.tracked_bigrams:
            if len(bigram) != 2 or not bigram.isascii() or not bigram.isalpha():
                raise ConfigError(f"tracked bigram {bigram!r} must be two ASCII letters")

        try:
            digest_size = hashlib.new(self.hash_algorithm).digest_size
        except (ValueError, TypeError) as exc:
            raise ConfigError(f"unknown hash_algorithm {self.hash_algorithm!r}") from exc
        if digest_size != 32:
            raise ConfigError(
                f"hash_algorithm {self.hash_algorithm!r} produces {digest_size}-byte "
                "digests; 32 bytes are required"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a YAML/JSON friendly dictionary."""
        out: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            out[f.name] = list(value) if isinstance(value, tuple) else value
        return out


DEFAULT_CONFIG = ProtocolConfig()

_TUPLE_FIELDS = {"tracked_bigrams", "vowel_percent_band", "space_percent_band"}


def config_from_mapping(
    data: Mapping[str, Any],
    base: ProtocolConfig = DEFAULT_CONFIG,
) -> ProtocolConfig:
    """Overlay ``data`` on ``base`` and validate the result."""
    known = {f.name for f in fields(ProtocolConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown protocol config keys: {', '.join(unknown)}")

    overrides: Dict[str, Any] = {}
    for key, value in data.items():
        if key in _TUPLE_FIELDS:
            if not isinstance(value, (list, tuple)):
                raise ConfigError(f"{key} must be a list, got {type(value).__name__}")
            value = tuple(value)
        overrides[key] = value

    config = replace(base, **overrides)
    config.validate()
    return config


def load_config(path: Union[str, Path]) -> ProtocolConfig:
    """
    Load a protocol configuration from a YAML file.

    Args:
        path: Path to a YAML mapping of field overrides.

    Returns:
        Validated ProtocolConfig.

    Raises:
        ConfigError: If the file is missing, malformed or inconsistent.
    """
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigError(f"Protocol config file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Error parsing YAML file: {config_path}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Malformed protocol config: expected a mapping in {config_path}")

    # Allow the settings to be nested under a top-level "protocol" key.
    if set(data) == {"protocol"} and isinstance(data["protocol"], dict):
        data = data["protocol"]

    config = config_from_mapping(data)
    logger.debug("Loaded protocol config from %s", config_path)
    return config


@lru_cache(maxsize=1)
def get_config() -> ProtocolConfig:
    """Return the process-wide protocol configuration."""
    path: Optional[str] = os.getenv(CONFIG_ENV_VAR, "").strip() or None
    if path is None:
        return DEFAULT_CONFIG
    logger.info("Using protocol config from %s=%s", CONFIG_ENV_VAR, path)
    return load_config(path)
