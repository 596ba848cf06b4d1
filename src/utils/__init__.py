"""
Utility modules for LearnStyle.

This module contains utility functions:
- validation: JSON Schema validation of stored records with auto-repair
- classification: resolve questionnaire responses into a learning style
- adaptation: map (style, age band) to content adaptation directives
- persistence: ClassificationStore and its storage backends
- logging_utils: loguru sink configuration
"""

from .validation import (
    SchemaValidator,
    ClassificationRecordValidator,
    validate_classification_record,
)
from .classification import (
    tally_votes,
    confidence_percent,
    resolve_classification,
)
from .adaptation import (
    AdaptationDirective,
    AdaptedContent,
    ComplexityLevel,
    StyleFlag,
    adapt,
    adapt_for_record,
    directive_for,
)
from .persistence import (
    ClassificationBackend,
    ClassificationStore,
    InMemoryBackend,
    JsonFileBackend,
    create_classification_store,
)
from .logging_utils import configure_logging

__all__ = [
    # Validation
    "SchemaValidator",
    "ClassificationRecordValidator",
    "validate_classification_record",
    # Resolution
    "tally_votes",
    "confidence_percent",
    "resolve_classification",
    # Adaptation
    "AdaptationDirective",
    "AdaptedContent",
    "ComplexityLevel",
    "StyleFlag",
    "adapt",
    "adapt_for_record",
    "directive_for",
    # Persistence
    "ClassificationBackend",
    "ClassificationStore",
    "InMemoryBackend",
    "JsonFileBackend",
    "create_classification_store",
    # Logging
    "configure_logging",
]
