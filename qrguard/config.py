"""Config loading for QRGuard.

Reads `.qrguard/config.yaml` (or `~/.qrguard/config.yaml`).
Raises SystemExit on parse errors or missing `version` field.
If no config file is found, returns default values (safe to run without config).

Config search order:
  1. `config_path` argument (if provided, for testing or explicit override)
  2. QRGUARD_CONFIG environment variable (if set)
  3. `.qrguard/config.yaml` (working directory)
  4. `~/.qrguard/config.yaml` (home directory)

Environment variable overrides:
  QRGUARD_LOG_LEVEL overrides logging.level
  QRGUARD_TRACE     overrides scanner.trace ("1", "true", "yes" enable it)
  QRGUARD_CONFIG    sets an explicit config file path to try first
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from typing import NoReturn, Optional

import yaml

from qrguard.utils.logger import get_logger

logger = get_logger(__name__)

# ─── Version constants ────────────────────────────────────────────────────────

SUPPORTED_CONFIG_VERSION = 1

SUPPORTED_VERSIONS: frozenset[int] = frozenset({1})

# ─── Validation sets ─────────────────────────────────────────────────────────

VALID_LOG_LEVELS: frozenset[str] = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

_TRUTHY: frozenset[str] = frozenset({"1", "true", "yes", "on"})

DEFAULT_CONFIG_PATHS = [
    ".qrguard/config.yaml",
    os.path.expanduser("~/.qrguard/config.yaml"),
]


# ─── Dataclasses ─────────────────────────────────────────────────────────────


@dataclass
class LoggingConfig:
    """structlog output settings."""

    level: str = "INFO"
    json: bool = True


@dataclass
class ScannerConfig:
    """Classifier settings.

    trace: Log every signature decision and the final verdict at DEBUG.
    """

    trace: bool = False


@dataclass
class Config:
    """Root configuration object populated from .qrguard/config.yaml.

    All fields have safe defaults; QRGuard runs without any config file.
    """

    version: int = SUPPORTED_CONFIG_VERSION
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    scanner: ScannerConfig = field(default_factory=ScannerConfig)
    path: Optional[str] = None  # Path to the loaded config file

    @classmethod
    def defaults(cls) -> "Config":
        """Return a fully-default Config (no file required)."""
        return cls()

    @classmethod
    def from_dict(cls, raw: dict, path: Optional[str] = None) -> "Config":
        """Construct Config from a parsed YAML dict.

        Merges user-supplied values onto defaults; unknown keys are silently ignored.

        Raises:
            SystemExit(1): On an invalid logging.level.
        """
        # ── Logging ───────────────────────────────────────────────────────────
        logging_raw = raw.get("logging") or {}
        level = str(logging_raw.get("level", "INFO")).upper()
        _validate_log_level(level, source="logging.level")
        logging_config = LoggingConfig(
            level=level,
            json=bool(logging_raw.get("json", True)),
        )

        # ── Scanner ───────────────────────────────────────────────────────────
        scanner_raw = raw.get("scanner") or {}
        scanner = ScannerConfig(trace=bool(scanner_raw.get("trace", False)))

        return cls(
            version=raw.get("version", SUPPORTED_CONFIG_VERSION),
            logging=logging_config,
            scanner=scanner,
            path=path,
        )


# ─── Config loading ───────────────────────────────────────────────────────────


def load_config(config_path: Optional[str] = None) -> Config:
    """Load and validate QRGuard configuration.

    If no file is found at any search path, returns default Config (not an error).
    If a file is found but invalid, writes error to stderr and raises SystemExit(1).

    Environment overrides are applied last, whether or not a file was found.

    Raises:
        SystemExit(1): On YAML parse error, non-mapping document, missing
                       ``version`` field, unsupported version, or invalid values.
    """
    search_paths: list[str] = []
    if config_path:
        search_paths.append(config_path)
    env_config = os.environ.get("QRGUARD_CONFIG")
    if env_config:
        search_paths.append(env_config)
    search_paths.extend(DEFAULT_CONFIG_PATHS)

    found_path: Optional[str] = None
    for candidate in search_paths:
        expanded = os.path.expanduser(candidate)
        if os.path.isfile(expanded):
            found_path = expanded
            break

    # ── No config file found ─────────────────────────────────────────────────
    if found_path is None:
        logger.debug("No config file found, using defaults", searched=search_paths)
        config = Config.defaults()
        _apply_env_overrides(config)
        return config

    # ── Parse config file ─────────────────────────────────────────────────────
    logger.debug("Loading config", path=found_path)

    try:
        with open(found_path) as fh:
            raw = yaml.safe_load(fh)
    except yaml.YAMLError as exc:
        _fail(f"CONFIG ERROR: Failed to parse {found_path}: {exc}")
    except OSError as exc:
        _fail(f"CONFIG ERROR: Could not read {found_path}: {exc}")

    if not isinstance(raw, dict):
        if raw is None:
            _fail(
                f"CONFIG ERROR: {found_path} is missing the required 'version' field.\n"
                "Add 'version: 1' to the top of your config file."
            )
        _fail(
            f"CONFIG ERROR: {found_path} is not a valid YAML mapping.\n"
            "The config file must be a YAML dictionary at the top level."
        )

    # ── Version validation ────────────────────────────────────────────────────
    version = raw.get("version")
    if version is None:
        _fail(
            f"CONFIG ERROR: {found_path} is missing the required 'version' field.\n"
            "Add 'version: 1' to the top of your config file."
        )
    if version not in SUPPORTED_VERSIONS:
        _fail(
            f"CONFIG ERROR: Unsupported config version: {version}. "
            f"Supported versions: {sorted(SUPPORTED_VERSIONS)}."
        )

    config = Config.from_dict(raw, path=found_path)
    _apply_env_overrides(config)

    logger.debug(
        "Config loaded",
        path=found_path,
        version=config.version,
        log_level=config.logging.level,
        trace=config.scanner.trace,
    )
    return config


def _apply_env_overrides(config: Config) -> None:
    """Apply QRGUARD_LOG_LEVEL and QRGUARD_TRACE to ``config`` in-place.

    Raises:
        SystemExit(1): If QRGUARD_LOG_LEVEL is not a known level name.
    """
    env_level = os.environ.get("QRGUARD_LOG_LEVEL")
    if env_level is not None:
        level = env_level.strip().upper()
        _validate_log_level(level, source="QRGUARD_LOG_LEVEL")
        config.logging.level = level

    env_trace = os.environ.get("QRGUARD_TRACE")
    if env_trace is not None:
        config.scanner.trace = env_trace.strip().lower() in _TRUTHY


def _validate_log_level(level: str, source: str) -> None:
    if level not in VALID_LOG_LEVELS:
        _fail(
            f"CONFIG ERROR: Invalid {source}: '{level}'. "
            f"Supported values: {sorted(VALID_LOG_LEVELS)}."
        )


def _fail(msg: str) -> NoReturn:
    print(msg, file=sys.stderr)
    raise SystemExit(1)
