"""
Learning style questionnaire: item bank and answer collection.

Every item offers exactly one option per selectable style, so each answer casts
exactly one vote. The bank order is fixed; answering an item again replaces the
earlier vote instead of adding a new one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

from loguru import logger

try:
    from .exceptions import InvalidAnswer
    from .learning_style import StyleCategory
except ImportError:
    from src.models.exceptions import InvalidAnswer
    from src.models.learning_style import StyleCategory


# item id -> implied style of the chosen option
QuestionnaireResponseSet = Dict[str, StyleCategory]


@dataclass(frozen=True)
class QuestionOption:
    """One answer choice; choosing it votes for implied_style."""

    option_id: str
    text: str
    implied_style: StyleCategory


@dataclass(frozen=True)
class QuestionnaireItem:
    """A single questionnaire prompt with one option per selectable style."""

    id: str
    prompt: str
    options: Tuple[QuestionOption, ...]

    def option(self, option_id: str) -> Optional[QuestionOption]:
        """Find an option by id, or None."""
        return next((opt for opt in self.options if opt.option_id == option_id), None)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "prompt": self.prompt,
            "options": [
                {
                    "option_id": opt.option_id,
                    "text": opt.text,
                    "implied_style": opt.implied_style.value,
                }
                for opt in self.options
            ],
        }


def _item(item_id: str, prompt: str, visual: str, auditory: str, reading: str, kinesthetic: str) -> QuestionnaireItem:
    return QuestionnaireItem(
        id=item_id,
        prompt=prompt,
        options=(
            QuestionOption("visual", visual, StyleCategory.VISUAL),
            QuestionOption("auditory", auditory, StyleCategory.AUDITORY),
            QuestionOption("reading", reading, StyleCategory.READING_WRITING),
            QuestionOption("kinesthetic", kinesthetic, StyleCategory.KINESTHETIC),
        ),
    )


REFERENCE_ITEM_BANK: Tuple[QuestionnaireItem, ...] = (
    _item(
        "q1",
        "When learning something new, I prefer to:",
        "See diagrams, charts, or demonstrations",
        "Listen to explanations and discuss ideas",
        "Read detailed instructions or explanations",
        "Try it out hands-on and learn by doing",
    ),
    _item(
        "q2",
        "When trying to remember information, I most easily recall:",
        "Images, diagrams, and how things looked",
        "What was said and the discussions we had",
        "Notes I wrote or text I read",
        "Activities I did or how something felt",
    ),
    _item(
        "q3",
        "When explaining something to someone else, I tend to:",
        "Draw a picture or diagram to show them",
        "Explain verbally with detailed descriptions",
        "Write it down or refer to written materials",
        "Demonstrate and let them try it themselves",
    ),
    _item(
        "q4",
        "In my free time, I most enjoy:",
        "Watching videos or looking at images",
        "Listening to music, podcasts, or conversations",
        "Reading books, articles, or browsing text online",
        "Physical activities, crafts, or building things",
    ),
    _item(
        "q5",
        "When I'm trying to concentrate:",
        "I need a tidy, visually organized environment",
        "I prefer quiet or specific background sounds",
        "I focus best when I can take notes or highlight text",
        "I fidget, move around, or hold something in my hands",
    ),
)


def validate_item_bank(items: Sequence[QuestionnaireItem]) -> None:
    """
    Check item bank integrity.

    Raises:
        ValueError: If the bank is empty, ids repeat, or an item does not offer
            exactly one option per selectable style
    """
    if not items:
        raise ValueError("Item bank cannot be empty")

    seen_ids = set()
    expected_styles = sorted(s.value for s in StyleCategory.selectable())

    for item in items:
        if item.id in seen_ids:
            raise ValueError(f"Duplicate item id in bank: {item.id}")
        seen_ids.add(item.id)

        option_ids = [opt.option_id for opt in item.options]
        if len(option_ids) != len(set(option_ids)):
            raise ValueError(f"Duplicate option id in item {item.id}")

        styles = sorted(opt.implied_style.value for opt in item.options)
        if styles != expected_styles:
            raise ValueError(
                f"Item {item.id} must offer exactly one option per style "
                f"{expected_styles}, got {styles}"
            )


class QuestionnaireEngine:
    """
    Collects one categorical answer per item over a fixed item bank.

    Usage:
        engine = QuestionnaireEngine()
        engine.record_answer("q1", "visual")
        if engine.is_complete():
            ...
    """

    def __init__(self, items: Optional[Sequence[QuestionnaireItem]] = None):
        """
        Initialize the engine.

        Args:
            items: Ordered item bank (defaults to REFERENCE_ITEM_BANK)

        Raises:
            ValueError: If the item bank fails integrity checks
        """
        self._items: Tuple[QuestionnaireItem, ...] = tuple(items) if items is not None else REFERENCE_ITEM_BANK
        validate_item_bank(self._items)
        self._by_id = {item.id: item for item in self._items}
        self._responses: QuestionnaireResponseSet = {}

    def item_bank(self) -> Tuple[QuestionnaireItem, ...]:
        """Items in presentation order (same sequence every session)."""
        return self._items

    def get_item(self, item_id: str) -> Optional[QuestionnaireItem]:
        return self._by_id.get(item_id)

    @property
    def responses(self) -> QuestionnaireResponseSet:
        """Copy of the in-progress response set."""
        return dict(self._responses)

    def record_answer(self, item_id: str, option_id: str) -> QuestionnaireResponseSet:
        """
        Record the learner's choice for an item.

        Args:
            item_id: Questionnaire item identifier
            option_id: Chosen option identifier

        Returns:
            Updated response set (copy)

        Raises:
            InvalidAnswer: If the item is unknown or the option is not one of its options
        """
        item = self._by_id.get(item_id)
        if item is None:
            raise InvalidAnswer(item_id, option_id, "item not in item bank")

        option = item.option(option_id)
        if option is None:
            raise InvalidAnswer(item_id, option_id, "option does not belong to item")

        if item_id in self._responses:
            logger.debug(f"Overwriting answer for {item_id} with {option.implied_style.value}")
        self._responses[item_id] = option.implied_style
        return self.responses

    def is_complete(self, responses: Optional[QuestionnaireResponseSet] = None) -> bool:
        """True iff every item in the bank has a recorded answer."""
        answered = self._responses if responses is None else responses
        return all(item.id in answered for item in self._items)

    def missing_items(self, responses: Optional[QuestionnaireResponseSet] = None) -> list[str]:
        """Ids of unanswered items, in bank order."""
        answered = self._responses if responses is None else responses
        return [item.id for item in self._items if item.id not in answered]

    def progress(self) -> tuple[int, int]:
        """(answered, total) counts for progress display."""
        answered = sum(1 for item in self._items if item.id in self._responses)
        return answered, len(self._items)

    def progress_percent(self) -> float:
        answered, total = self.progress()
        return round(100 * answered / total, 2)

    def clear(self) -> None:
        """Discard the in-progress response set."""
        self._responses = {}

    def __len__(self) -> int:
        return len(self._items)
