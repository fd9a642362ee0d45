"""
Annotation data models.

Reviewer ratings are immutable values: every edit produces a new
annotation object, so a rating and its timestamp always change together.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .sample import Sample


class Rating(str, Enum):
    """Three-point quality scale used for translations and standards."""

    WORST = "Worst"
    MIDDLE = "Middle"
    BEST = "Best"

    @classmethod
    def parse(cls, value: Any) -> Optional["Rating"]:
        """Convert a stored value to a Rating; None stays None."""
        if value is None or isinstance(value, cls):
            return value
        return cls(value)


class AnnotationStatus(Enum):
    """Completion status of a sample's annotations."""

    NOT_STARTED = "not-started"
    PARTIAL = "partial"
    DONE = "done"

    @property
    def label(self) -> str:
        return _STATUS_DISPLAY[self][0]

    @property
    def background(self) -> str:
        return _STATUS_DISPLAY[self][1]

    @property
    def color(self) -> str:
        return _STATUS_DISPLAY[self][2]

    @property
    def marker(self) -> str:
        return _STATUS_DISPLAY[self][3]


# label, background, text color, list marker
_STATUS_DISPLAY = {
    AnnotationStatus.NOT_STARTED: ("Not Started", "#e5e7eb", "#4b5563", "⭕"),
    AnnotationStatus.PARTIAL: ("Partial", "#fef08a", "#854d0e", "🟡"),
    AnnotationStatus.DONE: ("Done", "#bbf7d0", "#166534", "✅"),
}


@dataclass(frozen=True)
class TranslationAnnotation:
    """
    Reviewer judgement of the Spanish translation.

    Attributes:
        rating: Selected rating, None until the reviewer picks one
        comment: Free-text comment
        annotated_at: ISO-8601 timestamp of the last rating change
    """

    rating: Optional[Rating] = None
    comment: str = ""
    annotated_at: Optional[str] = None

    def with_rating(self, rating: Rating, timestamp: str):
        return replace(self, rating=rating, annotated_at=timestamp)

    def with_comment(self, comment: str):
        return replace(self, comment=comment)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TranslationAnnotation":
        return cls(
            rating=Rating.parse(data.get('rating')),
            comment=str(data.get('comment') or ''),
            annotated_at=data.get('annotated_at'),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rating": self.rating.value if self.rating else None,
            "comment": self.comment,
            "annotated_at": self.annotated_at,
        }


@dataclass(frozen=True)
class StandardAlignmentAnnotation(TranslationAnnotation):
    """Reviewer judgement of how well one matched standard fits the sample."""

    standard_code: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StandardAlignmentAnnotation":
        return cls(
            standard_code=str(data.get('standard_code') or ''),
            rating=Rating.parse(data.get('rating')),
            comment=str(data.get('comment') or ''),
            annotated_at=data.get('annotated_at'),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"standard_code": self.standard_code, **super().to_dict()}


@dataclass(frozen=True)
class Annotations:
    """
    All reviewer annotations for one sample.

    `standards_alignment` corresponds to the sample's matched standards by
    position only.
    """

    spanish_translation_quality: TranslationAnnotation = TranslationAnnotation()
    standards_alignment: Tuple[StandardAlignmentAnnotation, ...] = ()

    @classmethod
    def default_for(cls, sample: Sample) -> "Annotations":
        """Empty annotations with one standards slot per matched standard."""
        return cls(
            spanish_translation_quality=TranslationAnnotation(),
            standards_alignment=tuple(
                StandardAlignmentAnnotation(standard_code=s.standard_code)
                for s in sample.matched_standards
            ),
        )

    def aligned_to(self, sample: Sample) -> "Annotations":
        """
        Pad or truncate the standards slots to the sample's standard count.

        Existing slots keep their position; nothing is matched by code.
        """
        slots = list(self.standards_alignment[:sample.standards_count])
        for standard in sample.matched_standards[len(slots):]:
            slots.append(StandardAlignmentAnnotation(standard_code=standard.standard_code))
        if len(slots) == len(self.standards_alignment):
            return self
        return replace(self, standards_alignment=tuple(slots))

    def with_translation(self, annotation: TranslationAnnotation) -> "Annotations":
        return replace(self, spanish_translation_quality=annotation)

    def with_standard(self, index: int, annotation: StandardAlignmentAnnotation) -> "Annotations":
        if not 0 <= index < len(self.standards_alignment):
            raise IndexError(f"Standard index {index} out of range ({len(self.standards_alignment)} standards)")
        slots = list(self.standards_alignment)
        slots[index] = annotation
        return replace(self, standards_alignment=tuple(slots))

    def rated_standards(self, standards_count: int) -> int:
        """Count rated slots among the first `standards_count` standards."""
        return sum(1 for slot in self.standards_alignment[:standards_count] if slot.rating is not None)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Annotations":
        """
        Parse a stored annotations object.

        Raises:
            ValueError: If a rating is not one of Worst/Middle/Best
            TypeError/AttributeError: If the structure is not a mapping
        """
        return cls(
            spanish_translation_quality=TranslationAnnotation.from_dict(
                data.get('spanish_translation_quality') or {}
            ),
            standards_alignment=tuple(
                StandardAlignmentAnnotation.from_dict(s) for s in data.get('standards_alignment') or ()
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "spanish_translation_quality": self.spanish_translation_quality.to_dict(),
            "standards_alignment": [s.to_dict() for s in self.standards_alignment],
        }
