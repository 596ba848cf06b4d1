"""
Unit tests for learning style resolution: tallying, tie handling and confidence.
"""

import itertools

import pytest

from src.models.exceptions import IncompleteResponses
from src.models.learning_style import ClassificationResult, StyleCategory
from src.utils.classification import confidence_percent, resolve_classification, tally_votes

V = StyleCategory.VISUAL
A = StyleCategory.AUDITORY
R = StyleCategory.READING_WRITING
K = StyleCategory.KINESTHETIC


class TestTallyVotes:
    """Test vote counting."""

    def test_counts_every_selectable_style(self, answers):
        counts = tally_votes(answers([V, V, K]))

        assert counts == {V: 2, A: 0, R: 0, K: 1}

    def test_accepts_string_values(self):
        counts = tally_votes({"q1": "visual", "q2": "reading_writing"})

        assert counts[V] == 1
        assert counts[R] == 1

    @pytest.mark.parametrize("composite", ["multimodal", "unset"])
    def test_rejects_composite_votes(self, composite):
        with pytest.raises(ValueError):
            tally_votes({"q1": composite})

    def test_rejects_unknown_style(self):
        with pytest.raises(ValueError):
            tally_votes({"q1": "telepathic"})


class TestConfidencePercent:
    """Test confidence rounding."""

    @pytest.mark.parametrize(
        "max_count,total,expected",
        [(3, 5, 60), (2, 5, 40), (5, 5, 100), (1, 3, 33), (2, 3, 67), (1, 8, 13), (0, 4, 0)],
    )
    def test_rounds_half_up(self, max_count, total, expected):
        assert confidence_percent(max_count, total) == expected

    def test_rejects_empty_bank(self):
        with pytest.raises(ValueError):
            confidence_percent(0, 0)


class TestResolveClassification:
    """Test resolution of complete response sets."""

    def test_dominant_style_scenario(self, answers, five_item_bank):
        result = resolve_classification(answers([V, V, V, A, R]), five_item_bank)

        assert result.style is V
        assert result.confidence == 60

    def test_tie_scenario_is_multimodal(self, answers, five_item_bank):
        result = resolve_classification(answers([V, V, A, A, K]), five_item_bank)

        assert result.style is StyleCategory.MULTIMODAL
        assert result.confidence == 40

    def test_unanimous_answers(self, answers, five_item_bank):
        result = resolve_classification(answers([K] * 5), five_item_bank)

        assert result == ClassificationResult(K, 100)

    def test_tally_reported(self, answers, five_item_bank):
        result = resolve_classification(answers([V, V, V, A, R]), five_item_bank)

        assert result.tally == {V: 3, A: 1, R: 1, K: 0}

    def test_four_way_tie(self, answers):
        result = resolve_classification(answers([V, A, R, K]), ["q1", "q2", "q3", "q4"])

        assert result.style is StyleCategory.MULTIMODAL
        assert result.confidence == 25

    def test_every_complete_set_matches_rule(self, five_item_bank):
        """Exhaustive check over all 4^5 response sets."""
        for combo in itertools.product([V, A, R, K], repeat=5):
            responses = {f"q{i}": style for i, style in enumerate(combo, start=1)}
            result = resolve_classification(responses, five_item_bank)

            counts = {style: combo.count(style) for style in (V, A, R, K)}
            max_count = max(counts.values())
            winners = [s for s, c in counts.items() if c == max_count]

            expected_style = winners[0] if len(winners) == 1 else StyleCategory.MULTIMODAL
            assert result.style is expected_style
            assert result.confidence == int(100 * max_count / 5 + 0.5)

    def test_partial_responses_rejected(self, answers, five_item_bank):
        with pytest.raises(IncompleteResponses) as exc_info:
            resolve_classification(answers([V, V, V]), five_item_bank)

        assert exc_info.value.missing == ["q4", "q5"]

    def test_empty_responses_rejected(self, five_item_bank):
        with pytest.raises(IncompleteResponses):
            resolve_classification({}, five_item_bank)

    def test_responses_outside_bank_ignored(self, answers):
        responses = {**answers([V, V]), "extra": A}

        result = resolve_classification(responses, ["q1", "q2"])

        assert result == ClassificationResult(V, 100)

    def test_pure_and_reproducible(self, answers, five_item_bank):
        responses = answers([V, A, A, R, K])
        snapshot = dict(responses)

        first = resolve_classification(responses, five_item_bank)
        second = resolve_classification(responses, five_item_bank)

        assert first == second
        assert responses == snapshot

    def test_empty_bank_rejected(self):
        with pytest.raises(ValueError):
            resolve_classification({}, [])
