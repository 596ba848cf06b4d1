"""
Classification Session - State machine driving one questionnaire run.

States: idle -> collecting -> resolved -> confirmed (-> idle)
- collecting -> idle: cancel
- resolved -> collecting: go back and re-answer
Completion is detected, not requested: the answer that completes the response
set resolves the classification immediately.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from loguru import logger

try:
    from .exceptions import SessionStateError
    from .learning_style import AgeBand, ClassificationResult, LearnerClassificationRecord
    from .questionnaire import QuestionnaireEngine, QuestionnaireResponseSet
    from ..utils.classification import resolve_classification
    from ..utils.persistence import ClassificationStore
except ImportError:
    from src.models.exceptions import SessionStateError
    from src.models.learning_style import AgeBand, ClassificationResult, LearnerClassificationRecord
    from src.models.questionnaire import QuestionnaireEngine, QuestionnaireResponseSet
    from src.utils.classification import resolve_classification
    from src.utils.persistence import ClassificationStore


class SessionState(str, Enum):
    IDLE = "idle"
    COLLECTING = "collecting"
    RESOLVED = "resolved"
    CONFIRMED = "confirmed"


class ClassificationSession:
    """
    Questionnaire session for a single learner context.

    Only one session is active at a time: start() is refused while a session is
    collecting or resolved. Cancelling never touches the persisted record.
    """

    def __init__(
        self,
        store: ClassificationStore,
        questionnaire: Optional[QuestionnaireEngine] = None,
    ):
        """
        Initialize session controller.

        Args:
            store: Store receiving the confirmed record
            questionnaire: Questionnaire engine (default: reference item bank)
        """
        self.store = store
        self.questionnaire = questionnaire or QuestionnaireEngine()

        self.session_id: Optional[str] = None
        self.started_at: Optional[str] = None
        self.resolved_at: Optional[str] = None

        self._state = SessionState.IDLE
        self._result: Optional[ClassificationResult] = None
        self._selected_age_band: Optional[AgeBand] = None
        self.last_confirmed: Optional[LearnerClassificationRecord] = None

    @staticmethod
    def _utc_now() -> str:
        return datetime.now(timezone.utc).isoformat()

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_active(self) -> bool:
        return self._state in (SessionState.COLLECTING, SessionState.RESOLVED)

    @property
    def responses(self) -> QuestionnaireResponseSet:
        return self.questionnaire.responses

    @property
    def selected_age_band(self) -> Optional[AgeBand]:
        """Age band chosen in the resolved state (None outside it)."""
        return self._selected_age_band

    def _require(self, operation: str, *allowed: SessionState) -> None:
        if self._state not in allowed:
            raise SessionStateError(operation, self._state.value)

    def _transition(self, new_state: SessionState) -> None:
        logger.debug(f"Session {self.session_id}: {self._state.value} -> {new_state.value}")
        self._state = new_state

    def _enter_idle(self) -> None:
        self._transition(SessionState.IDLE)
        self.questionnaire.clear()
        self._result = None
        self._selected_age_band = None
        self.resolved_at = None

    # ==================== Transitions ====================

    def start(self) -> str:
        """
        Begin collecting answers.

        Returns:
            New session id

        Raises:
            SessionStateError: If a session is already collecting or resolved
        """
        self._require("start a session", SessionState.IDLE)

        self.questionnaire.clear()
        self.session_id = f"cs-{uuid.uuid4()}"
        self.started_at = self._utc_now()
        self._transition(SessionState.COLLECTING)
        return self.session_id

    def record_answer(self, item_id: str, option_id: str) -> QuestionnaireResponseSet:
        """
        Record an answer; resolves automatically once every item is answered.

        Raises:
            SessionStateError: If not collecting
            InvalidAnswer: If the item or option is unknown
        """
        self._require("record an answer", SessionState.COLLECTING)

        responses = self.questionnaire.record_answer(item_id, option_id)

        if self.questionnaire.is_complete(responses):
            self._resolve(responses)

        return responses

    def _resolve(self, responses: QuestionnaireResponseSet) -> None:
        self._result = resolve_classification(responses, self.questionnaire.item_bank())
        self._selected_age_band = self.store.load().age_band
        self.resolved_at = self._utc_now()
        self._transition(SessionState.RESOLVED)

    def get_resolved(self) -> Optional[ClassificationResult]:
        """The computed result while resolved, otherwise None."""
        return self._result if self._state is SessionState.RESOLVED else None

    def select_age_band(self, age_band: AgeBand | str) -> AgeBand:
        """
        Choose the age band to confirm with.

        Raises:
            SessionStateError: If not resolved
        """
        self._require("select an age band", SessionState.RESOLVED)
        self._selected_age_band = AgeBand(age_band)
        return self._selected_age_band

    def back_to_questions(self) -> None:
        """
        Return from resolved to collecting, keeping the current answers.

        The next answer re-completes the set and resolves again.
        """
        self._require("go back to the questions", SessionState.RESOLVED)
        self._result = None
        self._selected_age_band = None
        self.resolved_at = None
        self._transition(SessionState.COLLECTING)

    def confirm(self, age_band: Optional[AgeBand | str] = None) -> LearnerClassificationRecord:
        """
        Persist the resolved classification and end the session.

        Args:
            age_band: Age band to save (default: the selected band)

        Returns:
            The saved record

        Raises:
            SessionStateError: If not resolved
        """
        self._require("confirm", SessionState.RESOLVED)

        if age_band is not None:
            self._selected_age_band = AgeBand(age_band)

        record = LearnerClassificationRecord(
            style=self._result.style,
            age_band=self._selected_age_band,
            confidence=self._result.confidence,
        )

        self._transition(SessionState.CONFIRMED)
        self.store.save(record)
        self.last_confirmed = record
        logger.info(
            f"Confirmed classification {record.style.value} ({record.confidence}%) "
            f"for age band {record.age_band.value}"
        )

        self._enter_idle()
        return record

    def cancel(self) -> None:
        """
        Abandon the session and discard in-progress answers.

        No-op when idle. The persisted record is untouched.
        """
        if self._state is SessionState.IDLE:
            return
        self._enter_idle()

    # ==================== Reporting ====================

    def progress(self) -> tuple[int, int]:
        return self.questionnaire.progress()

    def to_dict(self) -> Dict[str, Any]:
        """Snapshot of the session for logging and debugging."""
        answered, total = self.progress()
        return {
            "session_id": self.session_id,
            "state": self._state.value,
            "started_at": self.started_at,
            "resolved_at": self.resolved_at,
            "answered_items": answered,
            "total_items": total,
            "responses": {item_id: style.value for item_id, style in self.responses.items()},
            "result": self._result.to_dict() if self._result else None,
            "selected_age_band": self._selected_age_band.value if self._selected_age_band else None,
        }
