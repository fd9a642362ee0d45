"""Data models for the Translation Review annotation tool."""

from .sample import Sample, MatchedStandard
from .annotation import (
    Rating,
    AnnotationStatus,
    TranslationAnnotation,
    StandardAlignmentAnnotation,
    Annotations,
)
from .annotation_map import AnnotationsMap
from .application_state import ApplicationState

__all__ = [
    "Sample",
    "MatchedStandard",
    "Rating",
    "AnnotationStatus",
    "TranslationAnnotation",
    "StandardAlignmentAnnotation",
    "Annotations",
    "AnnotationsMap",
    "ApplicationState",
]
