"""UI components for the Translation Review annotation tool."""

from .layout import (
    create_review_layout,
    get_global_css,
    RATING_CHOICES,
)
from .event_handlers import (
    sample_view_length,
    render_sample_view,
    handle_navigation,
    handle_jump,
    handle_translation_rating,
    handle_translation_comment,
    handle_standard_rating,
    handle_standard_comment,
    handle_manual_save,
    poll_save_status,
    handle_export,
    handle_login,
    handle_logout,
    handle_startup,
)

__all__ = [
    "create_review_layout",
    "get_global_css",
    "RATING_CHOICES",
    "sample_view_length",
    "render_sample_view",
    "handle_navigation",
    "handle_jump",
    "handle_translation_rating",
    "handle_translation_comment",
    "handle_standard_rating",
    "handle_standard_comment",
    "handle_manual_save",
    "poll_save_status",
    "handle_export",
    "handle_login",
    "handle_logout",
    "handle_startup",
]
