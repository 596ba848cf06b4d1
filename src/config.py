"""
Configuration management for LearnStyle.

This module centralizes all configuration settings following 12-factor app principles:
- Settings loaded from environment variables (and a local .env file)
- Sensible defaults for development
- Type hints for IDE support
- Single source of truth for all settings
- Validation that reports problems instead of raising
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


PERSISTENCE_BACKENDS = ("json", "memory")
LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


@dataclass
class PathConfig:
    """File system paths - single source of truth for all directories."""

    # Base paths
    project_root: Path = field(default_factory=lambda: Path(__file__).parent.parent)
    data_dir: Path = field(
        default_factory=lambda: Path(
            os.getenv("LEARNSTYLE_DATA_DIR", str(Path(__file__).parent.parent / "data"))
        ).resolve()
    )

    # Data subdirectories (computed from data_dir)
    classifications_dir: Path = field(init=False)
    logs_dir: Path = field(init=False)

    # Schema
    schemas_dir: Path = field(init=False)
    classification_schema: Path = field(init=False)

    def __post_init__(self):
        """Initialize computed paths."""
        self.classifications_dir = self.data_dir / "classifications"
        self.logs_dir = self.data_dir / "logs"
        # Shipped inside the package so installed copies can find it
        self.schemas_dir = Path(__file__).parent / "schemas"
        self.classification_schema = self.schemas_dir / "learner_classification.schema.json"

    def prepare_filesystem(self):
        """
        Create directories if they don't exist.

        Separated from __post_init__ to avoid side-effects on import.
        Call this explicitly from your app entrypoint.
        """
        for directory in [self.data_dir, self.classifications_dir, self.logs_dir]:
            directory.mkdir(parents=True, exist_ok=True)


@dataclass
class ClassificationConfig:
    """Learner classification and persistence settings."""

    default_age_band: str = field(
        default_factory=lambda: os.getenv("LEARNSTYLE_DEFAULT_AGE_BAND", "primary")
    )
    persistence_backend: str = field(
        default_factory=lambda: os.getenv("LEARNSTYLE_PERSISTENCE", "json")
    )
    # Learner context used when the caller does not name one
    default_learner_id: str = "default"


@dataclass
class LoggingConfig:
    """Logging configuration (loguru sinks)."""

    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
    log_to_file: bool = field(
        default_factory=lambda: os.getenv("LOG_TO_FILE", "false").lower() in ("1", "true", "yes")
    )
    log_format: str = "<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {name} | {message}"
    rotation: str = "10 MB"


class Config:
    """
    Main configuration class. Singleton pattern.

    Usage:
        from src.config import config

        # Access settings
        data_dir = config.paths.data_dir
        backend = config.classification.persistence_backend

        # Prepare filesystem (call once at startup)
        config.prepare_fs()
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance.paths = PathConfig()
            cls._instance.classification = ClassificationConfig()
            cls._instance.logging = LoggingConfig()

        return cls._instance

    def prepare_fs(self):
        """Prepare filesystem (create directories). Call once at startup."""
        self.paths.prepare_filesystem()

    def validate(self) -> list[str]:
        """
        Validate configuration and return list of errors.

        Returns:
            List of error messages (empty if valid)
        """
        errors = []

        try:
            from .models.learning_style import AgeBand
        except ImportError:
            from src.models.learning_style import AgeBand

        valid_bands = [band.value for band in AgeBand]
        if self.classification.default_age_band not in valid_bands:
            errors.append(
                f"default_age_band must be one of {valid_bands}, "
                f"got {self.classification.default_age_band!r}"
            )

        if self.classification.persistence_backend not in PERSISTENCE_BACKENDS:
            errors.append(
                f"persistence_backend must be one of {list(PERSISTENCE_BACKENDS)}, "
                f"got {self.classification.persistence_backend!r}"
            )

        if not self.classification.default_learner_id:
            errors.append("default_learner_id cannot be empty")

        if self.logging.log_level not in LOG_LEVELS:
            errors.append(f"log_level must be one of {list(LOG_LEVELS)}, got {self.logging.log_level!r}")

        if not self.paths.classification_schema.exists():
            errors.append(f"Classification schema not found: {self.paths.classification_schema}")

        return errors


# Global config instance
config = Config()
