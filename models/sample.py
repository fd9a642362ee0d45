"""
Sample data model for the Translation Review annotation tool.

Represents one English/Spanish translation pair together with its
readability metrics and the curriculum standards matched to it. Samples
are loaded once and never mutated.
"""

import copy
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Tuple


def _flag(value: Any) -> bool:
    """Dataset boolean; missing values count as True."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip().lower() not in ("false", "0", "no", "")
    return bool(value)


@dataclass(frozen=True)
class MatchedStandard:
    """
    A curriculum standard associated with a sample.

    Attributes:
        standard_code: Standard identifier (e.g. "MS-LS1-2")
        description: Full standard text
        academic_subject: Subject the standard belongs to
        grade_levels: Grades the standard applies to
        jurisdiction: Issuing body of the standard
        similarity_score: Match score between the sample and the standard
    """

    standard_code: str
    description: str = ""
    academic_subject: str = ""
    grade_levels: Tuple[str, ...] = ()
    jurisdiction: str = ""
    similarity_score: float = 0.0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchedStandard":
        return cls(
            standard_code=str(data.get('standard_code') or ''),
            description=str(data.get('description') or ''),
            academic_subject=str(data.get('academic_subject') or ''),
            grade_levels=tuple(str(g) for g in data.get('grade_levels') or ()),
            jurisdiction=str(data.get('jurisdiction') or ''),
            similarity_score=float(data.get('similarity_score') or 0.0),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['grade_levels'] = list(self.grade_levels)
        return data


@dataclass(frozen=True)
class Sample:
    """
    Represents a single translation sample.

    Attributes:
        id: Sample identifier (not guaranteed unique across a dataset)
        english_text: Source text
        spanish_translation: Generated translation under review
        valid_translation: Whether the pipeline accepted the translation
        validation_reason: Why the translation was rejected, if it was
        fernandez_huerta_*: Spanish readability metrics
        flesh_grade: English readability grade
        matched_standards: Ordered standards matched to the sample
        raw: The dataset record as loaded, exported unchanged
    """

    id: str
    english_text: str
    spanish_translation: str
    textbook_grade: str = ""
    target_grade: str = ""
    target_age: str = ""
    domain: str = ""
    subject: str = ""
    valid_translation: bool = True
    validation_reason: str = ""
    tokens: int = 0
    attempts: int = 0
    success: bool = True
    final_status: str = ""
    flesh_grade: float = 0.0
    fernandez_huerta_score: float = 0.0
    fernandez_huerta_grade: float = 0.0
    fernandez_huerta_age: str = ""
    model: str = ""
    matched_standards: Tuple[MatchedStandard, ...] = field(default_factory=tuple)
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def standards_count(self) -> int:
        """Number of standard ratings this sample expects."""
        return len(self.matched_standards)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Sample":
        """
        Build a Sample from a dataset record.

        Raises:
            KeyError: If id, english_text or spanish_translation is missing
        """
        return cls(
            id=str(data['id']),
            english_text=str(data['english_text']),
            spanish_translation=str(data['spanish_translation']),
            textbook_grade=str(data.get('textbook_grade') or ''),
            target_grade=str(data.get('target_grade') or ''),
            target_age=str(data.get('target_age') or ''),
            domain=str(data.get('domain') or ''),
            subject=str(data.get('subject') or ''),
            valid_translation=_flag(data.get('valid_translation')),
            validation_reason=str(data.get('validation_reason') or ''),
            tokens=int(data.get('tokens') or 0),
            attempts=int(data.get('attempts') or 0),
            success=_flag(data.get('success')),
            final_status=str(data.get('final_status') or ''),
            flesh_grade=float(data.get('flesh_grade') or 0.0),
            fernandez_huerta_score=float(data.get('fernandez_huerta_score') or 0.0),
            fernandez_huerta_grade=float(data.get('fernandez_huerta_grade') or 0.0),
            fernandez_huerta_age=str(data.get('fernandez_huerta_age') or ''),
            model=str(data.get('model') or ''),
            matched_standards=tuple(
                MatchedStandard.from_dict(s) for s in data.get('matched_standards') or ()
            ),
            raw=copy.deepcopy(dict(data)),
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize back to the dataset record shape.

        Samples loaded from a record return a copy of that record, so null
        metrics and extra columns survive export.
        """
        if self.raw:
            return copy.deepcopy(self.raw)
        data = asdict(self)
        data.pop('raw')
        data['matched_standards'] = [s.to_dict() for s in self.matched_standards]
        return data
