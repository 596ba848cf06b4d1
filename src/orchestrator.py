"""
Learner Classification Service

Connects the classification pipeline for one learner context:
1. Questionnaire session (start, answer, go back, cancel)
2. Automatic resolution on completion
3. Age band selection and confirmation
4. Persistence through ClassificationStore
5. Content adaptation with the stored classification

This is the entry point the rest of the platform calls.
"""

from typing import Any, Dict, Optional, Tuple, TypeVar

from loguru import logger

from .config import config
from .models.classification_session import ClassificationSession, SessionState
from .models.learning_style import (
    AgeBand,
    ClassificationResult,
    LearnerClassificationRecord,
    StyleCategory,
)
from .models.questionnaire import QuestionnaireEngine, QuestionnaireItem, QuestionnaireResponseSet
from .utils.adaptation import AdaptedContent, adapt_for_record
from .utils.persistence import ClassificationStore, create_classification_store


T = TypeVar("T")


class LearnerClassificationService:
    """
    Classification and adaptation API for a single learner context.

    Manages:
    - The questionnaire session state machine
    - The persisted classification record
    - Direct preference edits
    - Content adaptation for the stored record
    """

    def __init__(
        self,
        store: Optional[ClassificationStore] = None,
        questionnaire: Optional[QuestionnaireEngine] = None,
        learner_id: Optional[str] = None,
    ):
        """
        Initialize the service.

        Args:
            store: Classification store (default: built from config for learner_id)
            questionnaire: Questionnaire engine (default: reference item bank)
            learner_id: Learner context used when no store is given
        """
        self.learner_id = learner_id or config.classification.default_learner_id
        self.store = store if store is not None else create_classification_store(self.learner_id)
        self.session = ClassificationSession(self.store, questionnaire)

    # ==================== Classification API ====================

    def start_session(self) -> str:
        """Begin a questionnaire session; returns its id."""
        session_id = self.session.start()
        logger.debug(f"Learner {self.learner_id}: started session {session_id}")
        return session_id

    def record_answer(self, item_id: str, option_id: str) -> QuestionnaireResponseSet:
        """Record an answer for the active session."""
        return self.session.record_answer(item_id, option_id)

    def get_resolved(self) -> Optional[ClassificationResult]:
        """Resolved result, or None until the questionnaire is complete."""
        return self.session.get_resolved()

    def select_age_band(self, age_band: AgeBand) -> AgeBand:
        return self.session.select_age_band(age_band)

    def back_to_questions(self) -> None:
        self.session.back_to_questions()

    def confirm(self, age_band: Optional[AgeBand] = None) -> LearnerClassificationRecord:
        """Persist the resolved classification and return the saved record."""
        return self.session.confirm(age_band)

    def cancel(self) -> None:
        """Abandon the active session without touching the stored record."""
        self.session.cancel()

    def reset(self) -> None:
        """Forget the learner's classification and abandon any active session."""
        self.session.cancel()
        self.store.reset()
        logger.info(f"Learner {self.learner_id}: classification reset")

    @property
    def state(self) -> SessionState:
        return self.session.state

    def item_bank(self) -> Tuple[QuestionnaireItem, ...]:
        return self.session.questionnaire.item_bank()

    def progress(self) -> Tuple[int, int]:
        """(answered, total) for the active session."""
        return self.session.progress()

    def current_record(self) -> LearnerClassificationRecord:
        return self.store.load()

    # ==================== Preference edits ====================

    def set_learning_style(self, style: StyleCategory) -> LearnerClassificationRecord:
        """
        Set the style directly, without the questionnaire.

        Confidence keeps its last computed value.
        """
        record = self.store.update_preferences(style=style)
        logger.info(f"Learner {self.learner_id}: style set to {record.style.value}")
        return record

    def set_age_band(self, age_band: AgeBand) -> LearnerClassificationRecord:
        record = self.store.update_preferences(age_band=age_band)
        logger.info(f"Learner {self.learner_id}: age band set to {record.age_band.value}")
        return record

    # ==================== Adaptation API ====================

    def adapt(self, content: T) -> AdaptedContent[T]:
        """Adapt content for the currently stored classification."""
        return adapt_for_record(self.store.load(), content)

    def describe(self, record: Optional[LearnerClassificationRecord] = None) -> Dict[str, Any]:
        """
        Display summary of a classification record.

        Args:
            record: Record to describe (default: the stored record)

        Returns:
            Dict with style label/description, age band label/range and confidence
        """
        record = record or self.store.load()
        return {
            "style": record.style.value,
            "style_label": record.style.label,
            "description": record.style.description,
            "age_band": record.age_band.value,
            "age_band_label": record.age_band.label,
            "age_range": record.age_band.age_range,
            "confidence": record.confidence,
            "classified": record.is_classified,
        }
