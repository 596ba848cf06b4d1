"""
Content adaptation directives.

Maps a (style, age band) pair to the directive a renderer uses to shape content:
style flags from the learning style, complexity level and visual ratio from the
age band. Directives are derived on every request and never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, FrozenSet, Generic, Mapping, Tuple, TypeVar

try:
    from ..models.learning_style import AgeBand, LearnerClassificationRecord, StyleCategory
except ImportError:
    from src.models.learning_style import AgeBand, LearnerClassificationRecord, StyleCategory


T = TypeVar("T")


class StyleFlag(str, Enum):
    VISUAL_ENHANCED = "visual_enhanced"
    AUDIO_ENHANCED = "audio_enhanced"
    TEXT_ENHANCED = "text_enhanced"
    INTERACTIVE_ENHANCED = "interactive_enhanced"
    MULTIMODAL_ENHANCED = "multimodal_enhanced"


class ComplexityLevel(str, Enum):
    VERY_SIMPLE = "very_simple"
    SIMPLE = "simple"
    MODERATE = "moderate"
    ADVANCED = "advanced"


STYLE_FLAGS: Dict[StyleCategory, FrozenSet[StyleFlag]] = {
    StyleCategory.VISUAL: frozenset({StyleFlag.VISUAL_ENHANCED}),
    StyleCategory.AUDITORY: frozenset({StyleFlag.AUDIO_ENHANCED}),
    StyleCategory.READING_WRITING: frozenset({StyleFlag.TEXT_ENHANCED}),
    StyleCategory.KINESTHETIC: frozenset({StyleFlag.INTERACTIVE_ENHANCED}),
    StyleCategory.MULTIMODAL: frozenset({StyleFlag.MULTIMODAL_ENHANCED}),
    StyleCategory.UNSET: frozenset(),
}

# visual_ratio: fraction of the presentation given to non-textual elements
AGE_BAND_PRESENTATION: Dict[AgeBand, Tuple[ComplexityLevel, float]] = {
    AgeBand.EARLY_YEARS: (ComplexityLevel.VERY_SIMPLE, 0.8),
    AgeBand.PRIMARY: (ComplexityLevel.SIMPLE, 0.6),
    AgeBand.SECONDARY: (ComplexityLevel.MODERATE, 0.4),
    AgeBand.ADULT: (ComplexityLevel.ADVANCED, 0.3),
}


def _check_total(mapping: Mapping, enum_cls: type, name: str) -> None:
    missing = set(enum_cls) - set(mapping)
    if missing:
        raise RuntimeError(f"{name} is missing entries for {sorted(m.value for m in missing)}")


_check_total(STYLE_FLAGS, StyleCategory, "STYLE_FLAGS")
_check_total(AGE_BAND_PRESENTATION, AgeBand, "AGE_BAND_PRESENTATION")


@dataclass(frozen=True)
class AdaptationDirective:
    """
    Presentation instructions for a renderer.

    Attributes:
        style_flags: Enhancements to apply (empty for an unclassified learner)
        complexity_level: Language and structure complexity
        visual_ratio: Share of non-textual elements, 0-1
    """

    style_flags: FrozenSet[StyleFlag]
    complexity_level: ComplexityLevel
    visual_ratio: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "style_flags": sorted(flag.value for flag in self.style_flags),
            "complexity_level": self.complexity_level.value,
            "visual_ratio": self.visual_ratio,
        }


@dataclass(frozen=True)
class AdaptedContent(Generic[T]):
    """
    Content paired with the directive computed for it.

    adapted is False when the learner has no classification yet; the content
    is then passed through unmodified.
    """

    content: T
    directive: AdaptationDirective
    adapted: bool

    def to_dict(self) -> Dict[str, Any]:
        """Merge the directive into dict content, or wrap other content."""
        payload = dict(self.content) if isinstance(self.content, Mapping) else {"content": self.content}
        payload["adaptation"] = {**self.directive.to_dict(), "adapted": self.adapted}
        return payload


def directive_for(style: StyleCategory, age_band: AgeBand) -> AdaptationDirective:
    """
    Compute the directive for a (style, age band) pair.

    Raises:
        ValueError: If style or age_band is not a member of its enum
    """
    style = StyleCategory(style)
    age_band = AgeBand(age_band)
    complexity, visual_ratio = AGE_BAND_PRESENTATION[age_band]
    return AdaptationDirective(
        style_flags=STYLE_FLAGS[style],
        complexity_level=complexity,
        visual_ratio=visual_ratio,
    )


def adapt(style: StyleCategory, age_band: AgeBand, content: T) -> AdaptedContent[T]:
    """
    Pair content with its adaptation directive.

    With style UNSET the content comes back unmodified and the directive has no
    style flags; complexity and visual ratio still follow the age band.

    Example:
        >>> adapted = adapt(StyleCategory.VISUAL, AgeBand.EARLY_YEARS, {"title": "Shapes"})
        >>> adapted.directive.visual_ratio
        0.8
    """
    directive = directive_for(style, age_band)
    return AdaptedContent(
        content=content,
        directive=directive,
        adapted=StyleCategory(style) is not StyleCategory.UNSET,
    )


def adapt_for_record(record: LearnerClassificationRecord, content: T) -> AdaptedContent[T]:
    """Adaptation API entry point: adapt content for a stored classification."""
    return adapt(record.style, record.age_band, content)
