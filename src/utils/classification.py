"""
Learning style resolution from questionnaire responses.

Pure functions, no hidden state:
- tally_votes: count votes per selectable style
- confidence_percent: integer percentage with half-up rounding
- resolve_classification: dominant style (or Multimodal on ties) with confidence
"""

from __future__ import annotations

from typing import Dict, Mapping, Sequence, Union

from loguru import logger

try:
    from ..models.exceptions import IncompleteResponses
    from ..models.learning_style import ClassificationResult, StyleCategory
    from ..models.questionnaire import QuestionnaireItem
except ImportError:
    from src.models.exceptions import IncompleteResponses
    from src.models.learning_style import ClassificationResult, StyleCategory
    from src.models.questionnaire import QuestionnaireItem


def tally_votes(responses: Mapping[str, Union[StyleCategory, str]]) -> Dict[StyleCategory, int]:
    """
    Count votes per selectable style.

    Args:
        responses: Mapping of item id to implied style

    Returns:
        Dict with a count for every selectable style (zero if no votes)

    Raises:
        ValueError: If a response names a composite or unknown style

    Example:
        >>> tally_votes({"q1": "visual", "q2": "visual", "q3": "auditory"})[StyleCategory.VISUAL]
        2
    """
    counts: Dict[StyleCategory, int] = {style: 0 for style in StyleCategory.selectable()}

    for item_id, value in responses.items():
        style = StyleCategory(value)
        if not style.is_selectable:
            raise ValueError(f"Response for {item_id} cannot vote for {style.value}")
        counts[style] += 1

    return counts


def confidence_percent(max_count: int, total_items: int) -> int:
    """
    Percentage of items that voted for the winning style, rounded half-up.

    Example:
        >>> confidence_percent(3, 5)
        60
        >>> confidence_percent(1, 8)
        13
    """
    if total_items <= 0:
        raise ValueError(f"total_items must be > 0, got {total_items}")
    # Integer form of floor(100 * max / total + 0.5), free of float error
    return (200 * max_count + total_items) // (2 * total_items)


def resolve_classification(
    responses: Mapping[str, Union[StyleCategory, str]],
    item_bank: Sequence[Union[QuestionnaireItem, str]],
) -> ClassificationResult:
    """
    Resolve a complete response set into a classification.

    Algorithm:
    1. Tally votes per selectable style
    2. max_count = highest tally
    3. Winners = styles reaching max_count
    4. One winner -> that style, otherwise MULTIMODAL
    5. confidence = round(100 * max_count / total_items)

    Args:
        responses: Mapping of item id to implied style
        item_bank: Items (or item ids) the responses must cover

    Returns:
        ClassificationResult with style, confidence and the vote tally

    Raises:
        IncompleteResponses: If any bank item has no response
    """
    item_ids = [item if isinstance(item, str) else item.id for item in item_bank]
    if not item_ids:
        raise ValueError("Item bank cannot be empty")

    missing = [item_id for item_id in item_ids if item_id not in responses]
    if missing:
        raise IncompleteResponses(missing)

    # Responses outside the bank do not vote
    counts = tally_votes({item_id: responses[item_id] for item_id in item_ids})

    max_count = max(counts.values())
    winners = [style for style, count in counts.items() if count == max_count]

    style = winners[0] if len(winners) == 1 else StyleCategory.MULTIMODAL
    confidence = confidence_percent(max_count, len(item_ids))

    logger.debug(
        f"Resolved {style.value} at {confidence}% "
        f"(winners={[w.value for w in winners]}, max_count={max_count}/{len(item_ids)})"
    )

    return ClassificationResult(style=style, confidence=confidence, tally=counts)
