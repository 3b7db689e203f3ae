"""
bootstrap/config.py - Application configuration

Provides configuration loading from files, environment variables, and defaults.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from pathlib import Path
import os
import json
import logging

from cabinkit.core.constants import DEFAULT_HISTORY_LIMIT
from cabinkit.errors.exceptions import ConfigurationError
from cabinkit.phases.classifier import resolve_policy
from cabinkit.phases.rules import StatusPolicy

logger = logging.getLogger(__name__)

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = DEFAULT_LOG_FORMAT
    log_file: Optional[str] = None
    json_logs: bool = False

    @classmethod
    def from_env(cls) -> "LoggingConfig":
        return cls(
            level=os.getenv("CABINKIT_LOG_LEVEL", "INFO"),
            format=os.getenv("CABINKIT_LOG_FORMAT", DEFAULT_LOG_FORMAT),
            log_file=os.getenv("CABINKIT_LOG_FILE"),
            json_logs=os.getenv("CABINKIT_JSON_LOGS", "false").lower() == "true",
        )


@dataclass
class PricingConfig:
    """Cost estimate configuration."""

    currency: str = "USD"
    rates_file: Optional[str] = None  # JSON overrides of the built-in rate table

    @classmethod
    def from_env(cls) -> "PricingConfig":
        return cls(
            currency=os.getenv("CABINKIT_CURRENCY", "USD"),
            rates_file=os.getenv("CABINKIT_RATES_FILE"),
        )


@dataclass
class TimelineConfig:
    """Phase timeline configuration."""

    status_policy: str = StatusPolicy.STATIC.value

    @classmethod
    def from_env(cls) -> "TimelineConfig":
        return cls(
            status_policy=os.getenv("CABINKIT_STATUS_POLICY", StatusPolicy.STATIC.value),
        )


@dataclass
class CatalogConfig:
    """Template and material catalog configuration."""

    templates_file: Optional[str] = None  # None uses the built-in presets
    materials_file: Optional[str] = None  # None uses the built-in material library

    @classmethod
    def from_env(cls) -> "CatalogConfig":
        return cls(
            templates_file=os.getenv("CABINKIT_TEMPLATES_FILE"),
            materials_file=os.getenv("CABINKIT_MATERIALS_FILE"),
        )


@dataclass
class StoreConfig:
    """Project store configuration."""

    history_limit: int = DEFAULT_HISTORY_LIMIT

    @classmethod
    def from_env(cls) -> "StoreConfig":
        return cls(
            history_limit=int(os.getenv("CABINKIT_HISTORY_LIMIT", str(DEFAULT_HISTORY_LIMIT))),
        )


@dataclass
class CabinKitConfig:
    """Root configuration for CabinKit."""

    environment: str = "development"
    debug: bool = False

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    pricing: PricingConfig = field(default_factory=PricingConfig)
    timeline: TimelineConfig = field(default_factory=TimelineConfig)
    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    store: StoreConfig = field(default_factory=StoreConfig)

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """
        Check values that would otherwise fail later.

        Raises:
            ConfigurationError: On an unknown status policy or a bad
                history limit
        """
        try:
            resolve_policy(self.timeline.status_policy)
        except ConfigurationError:
            logger.warning(f"Invalid status policy: {self.timeline.status_policy}")
            raise
        if not isinstance(self.store.history_limit, int) or self.store.history_limit < 1:
            logger.warning(f"Invalid history limit: {self.store.history_limit}")
            raise ConfigurationError(
                f"history_limit must be a positive integer, got {self.store.history_limit!r}"
            )

    @classmethod
    def from_env(cls) -> "CabinKitConfig":
        """Create configuration from environment variables."""
        return cls(**cls._env_sections())

    @staticmethod
    def _env_sections() -> Dict[str, Any]:
        """Constructor arguments read from the environment, not yet validated."""
        try:
            store = StoreConfig.from_env()
        except ValueError as e:
            raise ConfigurationError(f"Invalid CABINKIT_HISTORY_LIMIT: {e}") from e

        return {
            "environment": os.getenv("CABINKIT_ENVIRONMENT", "development"),
            "debug": os.getenv("CABINKIT_DEBUG", "false").lower() == "true",
            "logging": LoggingConfig.from_env(),
            "pricing": PricingConfig.from_env(),
            "timeline": TimelineConfig.from_env(),
            "catalog": CatalogConfig.from_env(),
            "store": store,
        }

    @classmethod
    def from_file(cls, filepath: str) -> "CabinKitConfig":
        """Load configuration from JSON file."""
        path = Path(filepath)
        if not path.exists():
            logger.warning(f"Config file not found: {filepath}, using defaults")
            return cls.from_env()

        try:
            with open(path) as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in config file {filepath}: {e}") from e

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> "CabinKitConfig":
        """
        Create config from dictionary, on top of the environment.

        File values override environment values before anything is
        validated, so a bad environment setting the file replaces is fine.
        """
        kwargs = cls._env_sections()

        for key in ("environment", "debug"):
            if key in data:
                kwargs[key] = data[key]

        for section in ("logging", "pricing", "timeline", "catalog", "store"):
            if section in data:
                target = kwargs[section]
                for key, value in data[section].items():
                    if hasattr(target, key):
                        setattr(target, key, value)

        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize config to dictionary."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "logging": {
                "level": self.logging.level,
                "log_file": self.logging.log_file,
                "json_logs": self.logging.json_logs,
            },
            "pricing": {
                "currency": self.pricing.currency,
                "rates_file": self.pricing.rates_file,
            },
            "timeline": {
                "status_policy": self.timeline.status_policy,
            },
            "catalog": {
                "templates_file": self.catalog.templates_file,
                "materials_file": self.catalog.materials_file,
            },
            "store": {
                "history_limit": self.store.history_limit,
            },
        }


# Global config instance
_config: Optional[CabinKitConfig] = None


def load_config(filepath: str = None) -> CabinKitConfig:
    """
    Load configuration from file or environment.

    Args:
        filepath: Optional path to JSON config file

    Returns:
        CabinKitConfig instance
    """
    global _config

    if filepath:
        _config = CabinKitConfig.from_file(filepath)
    else:
        default_paths = [
            "./cabinkit.json",
            "./config/cabinkit.json",
            os.path.expanduser("~/.cabinkit/config.json"),
        ]

        for path in default_paths:
            if Path(path).exists():
                logger.info(f"Loading config from: {path}")
                _config = CabinKitConfig.from_file(path)
                return _config

        _config = CabinKitConfig.from_env()

    logger.info(f"Configuration loaded: environment={_config.environment}")
    return _config


def get_config() -> CabinKitConfig:
    """Get current configuration, loading if needed."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Forget the loaded configuration."""
    global _config
    _config = None
