"""
Unit tests for the classification session state machine.

Tests transitions, automatic resolution, confirmation and cancellation.
"""

import unittest

from src.models.exceptions import InvalidAnswer, SessionStateError
from src.models.classification_session import ClassificationSession, SessionState
from src.models.learning_style import (
    AgeBand,
    ClassificationResult,
    LearnerClassificationRecord,
    StyleCategory,
)
from src.utils.persistence import ClassificationStore, InMemoryBackend


class TestClassificationSession(unittest.TestCase):
    """Test ClassificationSession transitions."""

    def setUp(self):
        """Set up test fixtures."""
        self.store = ClassificationStore(InMemoryBackend())
        self.session = ClassificationSession(self.store)

    def answer_all(self, options):
        for item, option in zip(self.session.questionnaire.item_bank(), options):
            self.session.record_answer(item.id, option)

    def test_initial_state_idle(self):
        self.assertEqual(self.session.state, SessionState.IDLE)
        self.assertFalse(self.session.is_active)
        self.assertIsNone(self.session.get_resolved())

    def test_start_enters_collecting(self):
        session_id = self.session.start()

        self.assertTrue(session_id.startswith("cs-"))
        self.assertEqual(self.session.state, SessionState.COLLECTING)
        self.assertIsNotNone(self.session.started_at)

    def test_answer_requires_session(self):
        with self.assertRaises(SessionStateError):
            self.session.record_answer("q1", "visual")

    def test_partial_answers_stay_collecting(self):
        self.session.start()
        self.answer_all(["visual", "visual", "auditory"])

        self.assertEqual(self.session.state, SessionState.COLLECTING)
        self.assertIsNone(self.session.get_resolved())
        self.assertEqual(self.session.progress(), (3, 5))

    def test_completion_resolves_automatically(self):
        self.session.start()
        self.answer_all(["visual", "visual", "visual", "auditory", "reading"])

        self.assertEqual(self.session.state, SessionState.RESOLVED)
        self.assertEqual(
            self.session.get_resolved(),
            ClassificationResult(StyleCategory.VISUAL, 60),
        )

    def test_tie_resolves_multimodal(self):
        self.session.start()
        self.answer_all(["visual", "visual", "auditory", "auditory", "kinesthetic"])

        self.assertEqual(
            self.session.get_resolved(),
            ClassificationResult(StyleCategory.MULTIMODAL, 40),
        )

    def test_invalid_answer_keeps_collecting(self):
        self.session.start()

        with self.assertRaises(InvalidAnswer):
            self.session.record_answer("q99", "visual")

        self.assertEqual(self.session.state, SessionState.COLLECTING)
        self.assertEqual(self.session.responses, {})

    def test_resolved_defaults_to_store_age_band(self):
        self.store.save(LearnerClassificationRecord(StyleCategory.UNSET, AgeBand.SECONDARY, 0))
        self.session.start()
        self.answer_all(["kinesthetic"] * 5)

        self.assertEqual(self.session.selected_age_band, AgeBand.SECONDARY)

    def test_confirm_saves_and_returns_to_idle(self):
        self.session.start()
        self.answer_all(["visual", "visual", "visual", "auditory", "reading"])
        self.session.select_age_band(AgeBand.EARLY_YEARS)

        record = self.session.confirm()

        expected = LearnerClassificationRecord(StyleCategory.VISUAL, AgeBand.EARLY_YEARS, 60)
        self.assertEqual(record, expected)
        self.assertEqual(self.store.load(), expected)
        self.assertEqual(self.session.state, SessionState.IDLE)
        self.assertEqual(self.session.responses, {})
        self.assertEqual(self.session.last_confirmed, expected)

    def test_confirm_with_explicit_age_band(self):
        self.session.start()
        self.answer_all(["auditory"] * 5)

        record = self.session.confirm(AgeBand.ADULT)

        self.assertEqual(record.age_band, AgeBand.ADULT)
        self.assertEqual(record.confidence, 100)

    def test_confirm_requires_resolved(self):
        self.session.start()
        with self.assertRaises(SessionStateError):
            self.session.confirm()
        self.assertEqual(self.store.load().style, StyleCategory.UNSET)

    def test_select_age_band_requires_resolved(self):
        with self.assertRaises(SessionStateError):
            self.session.select_age_band(AgeBand.ADULT)

    def test_cancel_discards_answers(self):
        self.session.start()
        self.answer_all(["visual", "auditory"])

        self.session.cancel()

        self.assertEqual(self.session.state, SessionState.IDLE)
        self.assertEqual(self.session.responses, {})

    def test_cancel_leaves_store_untouched(self):
        saved = LearnerClassificationRecord(StyleCategory.KINESTHETIC, AgeBand.ADULT, 80)
        self.store.save(saved)
        self.session.start()
        self.answer_all(["visual"] * 5)

        self.session.cancel()

        self.assertEqual(self.store.load(), saved)

    def test_cancel_when_idle_is_noop(self):
        self.session.cancel()
        self.assertEqual(self.session.state, SessionState.IDLE)

    def test_single_active_session(self):
        self.session.start()
        with self.assertRaises(SessionStateError):
            self.session.start()

        self.answer_all(["visual"] * 5)
        with self.assertRaises(SessionStateError):
            self.session.start()

    def test_new_session_after_confirm(self):
        self.session.start()
        self.answer_all(["visual"] * 5)
        first_id = self.session.session_id
        self.session.confirm()

        second_id = self.session.start()

        self.assertNotEqual(first_id, second_id)
        self.assertEqual(self.session.progress(), (0, 5))

    def test_back_to_questions_and_reanswer(self):
        self.session.start()
        self.answer_all(["visual", "visual", "visual", "auditory", "reading"])

        self.session.back_to_questions()
        self.assertEqual(self.session.state, SessionState.COLLECTING)
        self.assertIsNone(self.session.get_resolved())
        self.assertEqual(self.session.progress(), (5, 5))

        self.session.record_answer("q1", "auditory")

        self.assertEqual(self.session.state, SessionState.RESOLVED)
        self.assertEqual(
            self.session.get_resolved(),
            ClassificationResult(StyleCategory.MULTIMODAL, 40),
        )

    def test_answers_refused_while_resolved(self):
        self.session.start()
        self.answer_all(["visual"] * 5)

        with self.assertRaises(SessionStateError):
            self.session.record_answer("q1", "auditory")

    def test_to_dict(self):
        self.session.start()
        self.answer_all(["visual"] * 5)

        data = self.session.to_dict()

        self.assertEqual(data["state"], "resolved")
        self.assertEqual(data["answered_items"], 5)
        self.assertEqual(data["result"]["style"], "visual")
        self.assertEqual(data["result"]["tally"]["visual"], 5)
        self.assertEqual(data["selected_age_band"], "primary")


if __name__ == "__main__":
    unittest.main()
