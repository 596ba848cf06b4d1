"""
Learning style vocabulary: style categories, age bands and classification records.

This module defines the closed value sets shared by every part of the engine:
- StyleCategory: VARK categories plus the computed Multimodal composite and Unset
- AgeBand: developmental stage driving content complexity
- ClassificationResult: output of resolving a completed questionnaire
- LearnerClassificationRecord: the persisted (style, age band, confidence) triple
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Mapping, Optional


class StyleCategory(str, Enum):
    """Learner style tags. MULTIMODAL is only produced by tie resolution."""

    VISUAL = "visual"
    AUDITORY = "auditory"
    READING_WRITING = "reading_writing"
    KINESTHETIC = "kinesthetic"
    MULTIMODAL = "multimodal"
    UNSET = "unset"

    @classmethod
    def selectable(cls) -> tuple[StyleCategory, ...]:
        """Styles a questionnaire option may imply (no composite, no Unset)."""
        return (cls.VISUAL, cls.AUDITORY, cls.READING_WRITING, cls.KINESTHETIC)

    @property
    def is_selectable(self) -> bool:
        return self in StyleCategory.selectable()

    @property
    def label(self) -> str:
        return STYLE_LABELS[self]

    @property
    def description(self) -> str:
        return STYLE_DESCRIPTIONS[self]


class AgeBand(str, Enum):
    """Developmental stage of the learner."""

    EARLY_YEARS = "early_years"
    PRIMARY = "primary"
    SECONDARY = "secondary"
    ADULT = "adult"

    @property
    def label(self) -> str:
        return AGE_BAND_INFO[self]["label"]

    @property
    def age_range(self) -> str:
        return AGE_BAND_INFO[self]["age_range"]


STYLE_LABELS: Dict[StyleCategory, str] = {
    StyleCategory.VISUAL: "Visual Learner",
    StyleCategory.AUDITORY: "Auditory Learner",
    StyleCategory.READING_WRITING: "Reading/Writing Learner",
    StyleCategory.KINESTHETIC: "Kinesthetic Learner",
    StyleCategory.MULTIMODAL: "Multimodal Learner",
    StyleCategory.UNSET: "Not yet assessed",
}

STYLE_DESCRIPTIONS: Dict[StyleCategory, str] = {
    StyleCategory.VISUAL: (
        "You learn best through seeing and visualizing information. Images, diagrams, "
        "and visual demonstrations help you understand and remember concepts."
    ),
    StyleCategory.AUDITORY: (
        "You learn best through listening and discussing. Verbal explanations, "
        "discussions, and audio content are most effective for your learning."
    ),
    StyleCategory.READING_WRITING: (
        "You learn best through reading and writing. Text-based materials and "
        "note-taking help you process and retain information."
    ),
    StyleCategory.KINESTHETIC: (
        "You learn best through hands-on experiences. Physical activities, practice, "
        "and interactive learning help you understand concepts."
    ),
    StyleCategory.MULTIMODAL: (
        "You have a balanced learning approach that uses multiple styles. You can adapt "
        "to different teaching methods and benefit from varied content formats."
    ),
    StyleCategory.UNSET: "Your learning style has not been determined yet.",
}

AGE_BAND_INFO: Dict[AgeBand, Dict[str, str]] = {
    AgeBand.EARLY_YEARS: {"label": "Early Years", "age_range": "3-5"},
    AgeBand.PRIMARY: {"label": "Primary", "age_range": "5-11"},
    AgeBand.SECONDARY: {"label": "Secondary", "age_range": "11-18"},
    AgeBand.ADULT: {"label": "Adult", "age_range": "18+"},
}

DEFAULT_AGE_BAND = AgeBand.PRIMARY


@dataclass(frozen=True)
class ClassificationResult:
    """
    Outcome of resolving a completed questionnaire.

    Attributes:
        style: Dominant style, or MULTIMODAL when several styles tie
        confidence: round(100 * winning vote count / total items), 0-100
        tally: Votes per selectable style (informational, not compared)
    """

    style: StyleCategory
    confidence: int
    tally: Mapping[StyleCategory, int] = field(default_factory=dict, compare=False)

    def __post_init__(self):
        if not 0 <= self.confidence <= 100:
            raise ValueError(f"confidence must be in [0, 100], got {self.confidence}")
        if self.style is StyleCategory.UNSET:
            raise ValueError("A classification result cannot be UNSET")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "style": self.style.value,
            "confidence": self.confidence,
            "tally": {style.value: count for style, count in self.tally.items()},
        }


@dataclass(frozen=True)
class LearnerClassificationRecord:
    """
    Persisted classification for one learner context.

    The persisted shape is exactly the (style, age_band, confidence) triple.
    """

    style: StyleCategory = StyleCategory.UNSET
    age_band: AgeBand = DEFAULT_AGE_BAND
    confidence: int = 0

    def __post_init__(self):
        # Accept raw strings from storage or callers, store enum members
        object.__setattr__(self, "style", StyleCategory(self.style))
        object.__setattr__(self, "age_band", AgeBand(self.age_band))
        if isinstance(self.confidence, bool) or not isinstance(self.confidence, int):
            raise ValueError(f"confidence must be an integer, got {self.confidence!r}")
        if not 0 <= self.confidence <= 100:
            raise ValueError(f"confidence must be in [0, 100], got {self.confidence}")

    @classmethod
    def default(cls, age_band: Optional[AgeBand] = None) -> LearnerClassificationRecord:
        """Initial record: Unset style, zero confidence."""
        return cls(
            style=StyleCategory.UNSET,
            age_band=age_band or DEFAULT_AGE_BAND,
            confidence=0,
        )

    @property
    def is_classified(self) -> bool:
        return self.style is not StyleCategory.UNSET

    def with_changes(self, **changes: Any) -> LearnerClassificationRecord:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the persisted dictionary shape."""
        return {
            "style": self.style.value,
            "age_band": self.age_band.value,
            "confidence": self.confidence,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LearnerClassificationRecord:
        """Create from the persisted dictionary shape."""
        confidence = data["confidence"]
        # JSON has no int/float distinction; 60.0 is a valid stored integer
        if isinstance(confidence, float) and confidence.is_integer():
            confidence = int(confidence)
        return cls(
            style=StyleCategory(data["style"]),
            age_band=AgeBand(data["age_band"]),
            confidence=confidence,
        )
