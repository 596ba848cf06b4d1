"""
Learner classification persistence.

ClassificationStore is the single source of truth for one learner context's
classification record. The storage medium sits behind a backend so it can be
swapped (JSON file, in-memory) without touching resolution or adaptation code.

Storage failures never reach the caller: backend I/O failures are logged and
the store continues in memory for the rest of the process lifetime. Unreadable
or invalid payloads are logged and replaced by the default record.
"""

from __future__ import annotations

import json
import os
import re
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional

from loguru import logger

try:
    from ..config import config
    from ..models.exceptions import PersistenceUnavailable
    from ..models.learning_style import AgeBand, LearnerClassificationRecord, StyleCategory
    from .validation import ClassificationRecordValidator
except ImportError:
    from src.config import config
    from src.models.exceptions import PersistenceUnavailable
    from src.models.learning_style import AgeBand, LearnerClassificationRecord, StyleCategory
    from src.utils.validation import ClassificationRecordValidator


LEARNER_ID_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class ClassificationBackend(ABC):
    """
    Storage medium for a single serialized record.

    Implementations raise PersistenceUnavailable when the medium cannot be
    read or written.
    """

    @abstractmethod
    def read(self) -> Optional[Dict[str, Any]]:
        """Return the stored payload, or None if nothing has been stored."""

    @abstractmethod
    def write(self, payload: Dict[str, Any]) -> None:
        """Replace the stored payload."""

    @abstractmethod
    def clear(self) -> None:
        """Remove the stored payload (no-op if absent)."""


class InMemoryBackend(ClassificationBackend):
    """Backend that keeps the payload in process memory."""

    def __init__(self):
        self._payload: Optional[Dict[str, Any]] = None

    def read(self) -> Optional[Dict[str, Any]]:
        return dict(self._payload) if self._payload is not None else None

    def write(self, payload: Dict[str, Any]) -> None:
        self._payload = dict(payload)

    def clear(self) -> None:
        self._payload = None


class JsonFileBackend(ClassificationBackend):
    """
    One JSON file per learner context.

    Writes go to a temporary file in the same directory which then replaces the
    target, so a reader sees either the previous record or the new one.
    """

    def __init__(self, learner_id: str, directory: Optional[Path | str] = None):
        """
        Initialize file backend.

        Args:
            learner_id: Learner context identifier (used as file name)
            directory: Directory for record files (default: config.paths.classifications_dir)

        Raises:
            ValueError: If learner_id is not a safe file name
        """
        if not learner_id or not LEARNER_ID_PATTERN.match(learner_id):
            raise ValueError(f"Invalid learner id for file storage: {learner_id!r}")

        self.learner_id = learner_id
        self.directory = Path(directory) if directory else config.paths.classifications_dir
        self.filepath = self.directory / f"{learner_id}.json"

    def read(self) -> Optional[Dict[str, Any]]:
        if not self.filepath.exists():
            return None

        try:
            with open(self.filepath, "r", encoding="utf-8") as f:
                return json.load(f)
        except OSError as e:
            raise PersistenceUnavailable(f"Failed to read {self.filepath}: {e}") from e

    def write(self, payload: Dict[str, Any]) -> None:
        tmp_path: Optional[str] = None
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self.directory, prefix=f".{self.learner_id}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.filepath)
            tmp_path = None
        except OSError as e:
            raise PersistenceUnavailable(f"Failed to write {self.filepath}: {e}") from e
        finally:
            if tmp_path is not None:
                Path(tmp_path).unlink(missing_ok=True)

    def clear(self) -> None:
        try:
            self.filepath.unlink(missing_ok=True)
        except OSError as e:
            raise PersistenceUnavailable(f"Failed to remove {self.filepath}: {e}") from e


class ClassificationStore:
    """
    Holds the current (style, age band, confidence) record for one learner context.

    Lifecycle:
    - load(): last persisted record, or the default (Unset, default band, 0)
    - save(record): overwrite the record
    - reset(): restore the default and clear the persisted copy

    Features:
    - Payloads validated against learner_classification.schema.json (with repair)
    - Corrupt payloads ignored with a warning
    - Backend failures switch the store to in-memory mode; nothing is raised
    """

    # One validator per schema file, so a changed config path is picked up
    _validators: Dict[Path, ClassificationRecordValidator] = {}

    def __init__(
        self,
        backend: Optional[ClassificationBackend] = None,
        default_age_band: Optional[AgeBand | str] = None,
    ):
        """
        Initialize store.

        Args:
            backend: Storage medium (default: in-memory)
            default_age_band: Age band of the initial record
                (default: config.classification.default_age_band)
        """
        self._backend = backend if backend is not None else InMemoryBackend()
        self._default_age_band = AgeBand(default_age_band or config.classification.default_age_band)
        self._record: Optional[LearnerClassificationRecord] = None
        self._persistent = True

    @classmethod
    def _get_validator(cls) -> ClassificationRecordValidator:
        """
        Get the cached validator for the configured schema.

        Raises:
            OSError: If the schema file cannot be read
        """
        schema_path = Path(config.paths.classification_schema)
        if schema_path not in cls._validators:
            cls._validators[schema_path] = ClassificationRecordValidator(schema_path)
        return cls._validators[schema_path]

    @property
    def persistent(self) -> bool:
        """Whether changes still reach the backend."""
        return self._persistent

    @property
    def backend(self) -> ClassificationBackend:
        return self._backend

    def default_record(self) -> LearnerClassificationRecord:
        return LearnerClassificationRecord.default(self._default_age_band)

    def load(self) -> LearnerClassificationRecord:
        """
        Return the current record.

        Never raises: missing state yields the default record.
        """
        if self._persistent:
            try:
                payload = self._backend.read()
            except PersistenceUnavailable as e:
                self._degrade("load", e)
            except ValueError as e:
                # Unparseable payload; the next save overwrites it
                logger.warning(f"Ignoring unreadable classification record: {e}")
                self._record = self.default_record()
            else:
                self._record = self._record_from_payload(payload)

        if self._record is None:
            self._record = self.default_record()
        return self._record

    def save(self, record: LearnerClassificationRecord) -> None:
        """
        Overwrite the record. Later load() calls return it until the next save/reset.

        Args:
            record: Record to persist
        """
        self._record = record

        if self._persistent:
            try:
                self._backend.write(record.to_dict())
            except PersistenceUnavailable as e:
                self._degrade("save", e)

        logger.debug(
            f"Saved classification style={record.style.value} "
            f"age_band={record.age_band.value} confidence={record.confidence}"
        )

    def reset(self) -> None:
        """Restore the default record and clear the persisted copy."""
        self._record = self.default_record()

        if self._persistent:
            try:
                self._backend.clear()
            except PersistenceUnavailable as e:
                self._degrade("reset", e)

    def update_preferences(
        self,
        style: Optional[StyleCategory | str] = None,
        age_band: Optional[AgeBand | str] = None,
    ) -> LearnerClassificationRecord:
        """
        Direct preference edit without running the questionnaire.

        Confidence is left at its last computed value (0 if never computed).

        Args:
            style: New style, or None to keep the current one
            age_band: New age band, or None to keep the current one

        Returns:
            The saved record
        """
        changes: Dict[str, Any] = {}
        if style is not None:
            changes["style"] = StyleCategory(style)
        if age_band is not None:
            changes["age_band"] = AgeBand(age_band)

        record = self.load().with_changes(**changes)
        self.save(record)
        return record

    def _record_from_payload(self, payload: Optional[Dict[str, Any]]) -> LearnerClassificationRecord:
        if payload is None:
            return self.default_record()

        try:
            validator = self._get_validator()
        except (OSError, ValueError) as e:
            logger.warning(f"Classification schema unavailable, checking stored record without it: {e}")
            return self._record_without_schema(payload)

        result = validator.validate(payload, auto_repair=True)
        if not result.valid:
            logger.warning(
                f"Stored classification record failed validation, using defaults: {'; '.join(result.errors)}"
            )
            return self.default_record()

        if result.repairs:
            logger.info(f"Repaired stored classification record: {'; '.join(result.repairs)}")

        return LearnerClassificationRecord.from_dict(result.data)

    def _record_without_schema(self, payload: Any) -> LearnerClassificationRecord:
        """Build the record directly; its own checks reject malformed payloads."""
        try:
            return LearnerClassificationRecord.from_dict(payload)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Stored classification record is malformed, using defaults: {e!r}")
            return self.default_record()

    def _degrade(self, operation: str, error: Exception) -> None:
        """Switch to in-memory mode after a storage failure."""
        self._persistent = False
        logger.warning(
            f"Classification storage unavailable during {operation}; "
            f"continuing in memory for this process: {error}"
        )


def create_classification_store(
    learner_id: Optional[str] = None,
    backend: Optional[str] = None,
    directory: Optional[Path | str] = None,
) -> ClassificationStore:
    """
    Build a store for a learner context from configuration.

    Args:
        learner_id: Learner context (default: config.classification.default_learner_id)
        backend: "json" or "memory" (default: config.classification.persistence_backend)
        directory: Directory for JSON records (default: config.paths.classifications_dir)

    Returns:
        A new ClassificationStore

    Raises:
        ValueError: If the backend name is unknown

    Example:
        >>> store = create_classification_store("learner-42", backend="memory")
        >>> store.load().style
        <StyleCategory.UNSET: 'unset'>
    """
    learner_id = learner_id or config.classification.default_learner_id
    backend = backend or config.classification.persistence_backend

    if backend == "json":
        return ClassificationStore(JsonFileBackend(learner_id, directory))
    if backend == "memory":
        return ClassificationStore(InMemoryBackend())

    raise ValueError(f"Unknown persistence backend: {backend!r}")
