"""
Data models for learner classification.

This module contains core data models:
- StyleCategory / AgeBand: closed value sets for style and developmental stage
- ClassificationResult: resolved style with confidence
- LearnerClassificationRecord: persisted (style, age band, confidence)
- QuestionnaireEngine: item bank and answer collection
- Error kinds raised by the engine

The session state machine lives in models.classification_session and is
imported from there directly (it depends on utils).
"""

from .exceptions import (
    IncompleteResponses,
    InvalidAnswer,
    LearnStyleError,
    PersistenceUnavailable,
    SessionStateError,
)
from .learning_style import (
    AgeBand,
    ClassificationResult,
    LearnerClassificationRecord,
    StyleCategory,
)
from .questionnaire import (
    REFERENCE_ITEM_BANK,
    QuestionnaireEngine,
    QuestionnaireItem,
    QuestionOption,
)

__all__ = [
    "AgeBand",
    "StyleCategory",
    "ClassificationResult",
    "LearnerClassificationRecord",
    "QuestionnaireEngine",
    "QuestionnaireItem",
    "QuestionOption",
    "REFERENCE_ITEM_BANK",
    "LearnStyleError",
    "InvalidAnswer",
    "IncompleteResponses",
    "PersistenceUnavailable",
    "SessionStateError",
]
