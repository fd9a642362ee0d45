"""
Completion status of a sample's annotations.
"""

from typing import Optional

from models import Annotations, AnnotationStatus


def classify(annotations: Optional[Annotations], standards_count: int) -> AnnotationStatus:
    """
    Classify how far a sample's annotation has progressed.

    A sample needs 1 + standards_count ratings: one for translation
    quality and one per matched standard. Missing standard slots count as
    unrated.

    Args:
        annotations: The sample's annotations, or None if never touched
        standards_count: Number of matched standards of the sample

    Returns:
        NOT_STARTED, PARTIAL or DONE
    """
    if annotations is None:
        return AnnotationStatus.NOT_STARTED

    standards_count = max(standards_count, 0)
    translation_rated = annotations.spanish_translation_quality.rating is not None
    rated_standards = annotations.rated_standards(standards_count)

    if not translation_rated and rated_standards == 0:
        return AnnotationStatus.NOT_STARTED
    if translation_rated and rated_standards == standards_count:
        return AnnotationStatus.DONE
    return AnnotationStatus.PARTIAL
