"""
Event handlers for UI components.

Handlers translate UI events into AnnotationController calls and return
the values for the affected components. Rating and comment handlers are
coroutines so the remote autosave timer lands on Gradio's event loop.
"""

from typing import Any, List, Optional, Tuple

import gradio as gr

from models import ApplicationState, Rating
from services import AnnotationController, LoginGate, RenderEngine, SaveStatus
from utils.validation import (
    validate_password_input,
    validate_rating,
    validate_standard_index,
)


def sample_view_length(max_standards: int) -> int:
    """Number of values returned by render_sample_view."""
    return 9 + 4 * max_standards


def render_sample_view(
    controller: AnnotationController,
    app_state: ApplicationState,
    max_standards: int,
) -> Tuple:
    """
    Build every component value for the current sample.

    Returns:
        Tuple of (app_state, position_md, translation_card, standards_card,
        status_badge, sample_list, stats, translation_rating,
        translation_comment, then per standard row: row, label, rating,
        comment)
    """
    render_engine = RenderEngine()
    samples = controller.samples
    sample = app_state.get_current_sample(samples)

    statuses = [controller.status_for(s) for s in samples]
    sample_list_html = render_engine.render_sample_list(samples, statuses, app_state.current_index)
    stats_html = render_engine.render_stats(controller.progress())

    if sample is None:
        hidden_rows: List[Any] = []
        for _ in range(max_standards):
            hidden_rows.extend([gr.update(visible=False), gr.update(), gr.update(value=None), gr.update(visible=False)])
        return (
            app_state,
            "Sample - / -",
            render_engine.render_translation_card(None),
            render_engine.render_standards_card(None),
            "",
            sample_list_html,
            stats_html,
            gr.update(value=None),
            gr.update(value="", visible=False),
            *hidden_rows,
        )

    entry = controller.get_annotations(sample.id)
    entry = entry.aligned_to(sample) if entry is not None else None
    translation = entry.spanish_translation_quality if entry else None

    standard_values: List[Any] = []
    for i in range(max_standards):
        if i < sample.standards_count:
            standard = sample.matched_standards[i]
            slot = entry.standards_alignment[i] if entry else None
            rating = slot.rating.value if slot and slot.rating else None
            standard_values.extend([
                gr.update(visible=True),
                gr.update(value=f"**{standard.standard_code}**"),
                gr.update(value=rating),
                gr.update(value=slot.comment if slot else "", visible=rating is not None),
            ])
        else:
            standard_values.extend([
                gr.update(visible=False),
                gr.update(),
                gr.update(value=None),
                gr.update(value="", visible=False),
            ])

    if sample.standards_count > max_standards:
        gr.Warning(f"Only the first {max_standards} of {sample.standards_count} standards can be rated here")

    translation_rating = translation.rating.value if translation and translation.rating else None
    return (
        app_state,
        f"Sample **{app_state.current_index + 1}** / {len(samples)}",
        render_engine.render_translation_card(sample),
        render_engine.render_standards_card(sample),
        render_engine.render_status_badge(controller.status_for(sample)),
        sample_list_html,
        stats_html,
        gr.update(value=translation_rating),
        gr.update(value=translation.comment if translation else "", visible=translation_rating is not None),
        *standard_values,
    )


def _annotation_feedback(controller: AnnotationController, app_state: ApplicationState) -> Tuple[str, str, str]:
    """Status badge, sample list and stats after an annotation change."""
    render_engine = RenderEngine()
    samples = controller.samples
    sample = app_state.get_current_sample(samples)
    statuses = [controller.status_for(s) for s in samples]
    badge = render_engine.render_status_badge(controller.status_for(sample)) if sample else ""
    return (
        badge,
        render_engine.render_sample_list(samples, statuses, app_state.current_index),
        render_engine.render_stats(controller.progress()),
    )


def handle_navigation(
    direction: str,
    app_state: ApplicationState,
    controller: AnnotationController,
    max_standards: int,
) -> Tuple:
    """
    Handle previous/next navigation.

    Args:
        direction: "prev" or "next"
    """
    if not controller.samples:
        gr.Warning("No samples to navigate", duration=1.0)
        return render_sample_view(controller, app_state, max_standards)

    if direction not in ["prev", "next"]:
        gr.Warning(f"Invalid navigation direction: {direction}", duration=1.0)
        return render_sample_view(controller, app_state, max_standards)

    step = -1 if direction == "prev" else 1
    if not app_state.move(step, len(controller.samples)):
        gr.Info("Already at the first sample" if step < 0 else "Already at the last sample", duration=1.0)

    return render_sample_view(controller, app_state, max_standards)


def handle_jump(
    number: Optional[float],
    app_state: ApplicationState,
    controller: AnnotationController,
    max_standards: int,
) -> Tuple:
    """Jump to a 1-based sample number."""
    total = len(controller.samples)
    if number is None or not 1 <= int(number) <= total:
        gr.Warning(f"Enter a sample number between 1 and {total}", duration=2.0)
        return render_sample_view(controller, app_state, max_standards)

    app_state.current_index = int(number) - 1
    return render_sample_view(controller, app_state, max_standards)


async def handle_translation_rating(
    rating: Optional[str],
    app_state: ApplicationState,
    controller: AnnotationController,
) -> Tuple[Any, str, str, str]:
    """
    Record a translation quality rating.

    Returns:
        Tuple of (comment_box_update, status_badge, sample_list, stats)
    """
    sample = app_state.get_current_sample(controller.samples)
    is_valid, error_msg = validate_rating(rating)
    if sample is None or not is_valid:
        if sample is not None:
            gr.Warning(error_msg, duration=2.0)
        return (gr.update(), *_annotation_feedback(controller, app_state))

    try:
        controller.rate_translation(sample.id, Rating(rating))
    except (ValueError, IndexError) as e:
        gr.Warning(f"Failed to save rating: {str(e)}", duration=2.0)
        return (gr.update(), *_annotation_feedback(controller, app_state))

    return (gr.update(visible=True), *_annotation_feedback(controller, app_state))


async def handle_translation_comment(
    comment: str,
    app_state: ApplicationState,
    controller: AnnotationController,
) -> None:
    """Record the translation quality comment."""
    sample = app_state.get_current_sample(controller.samples)
    if sample is None:
        return
    try:
        controller.comment_translation(sample.id, comment)
    except ValueError as e:
        gr.Warning(f"Failed to save comment: {str(e)}", duration=2.0)


async def handle_standard_rating(
    index: int,
    rating: Optional[str],
    app_state: ApplicationState,
    controller: AnnotationController,
) -> Tuple[Any, str, str, str]:
    """
    Record a standards alignment rating for standard `index`.

    Returns:
        Tuple of (comment_box_update, status_badge, sample_list, stats)
    """
    sample = app_state.get_current_sample(controller.samples)
    if sample is None:
        return (gr.update(), *_annotation_feedback(controller, app_state))

    for is_valid, error_msg in (
        validate_rating(rating),
        validate_standard_index(index, sample.standards_count),
    ):
        if not is_valid:
            gr.Warning(error_msg, duration=2.0)
            return (gr.update(), *_annotation_feedback(controller, app_state))

    try:
        controller.rate_standard(sample.id, index, Rating(rating))
    except (ValueError, IndexError) as e:
        gr.Warning(f"Failed to save rating: {str(e)}", duration=2.0)
        return (gr.update(), *_annotation_feedback(controller, app_state))

    return (gr.update(visible=True), *_annotation_feedback(controller, app_state))


async def handle_standard_comment(
    index: int,
    comment: str,
    app_state: ApplicationState,
    controller: AnnotationController,
) -> None:
    """Record the comment for standard `index`."""
    sample = app_state.get_current_sample(controller.samples)
    if sample is None:
        return
    try:
        controller.comment_standard(sample.id, index, comment)
    except (ValueError, IndexError) as e:
        gr.Warning(f"Failed to save comment: {str(e)}", duration=2.0)


async def handle_manual_save(controller: AnnotationController) -> str:
    """
    Upload the snapshot now.

    On failure a persistent warning tells the reviewer their work is still
    stored locally.
    """
    render_engine = RenderEngine()
    sync_enabled = controller.remote_sync is not None
    if not sync_enabled:
        gr.Warning("Cloud sync is not configured. Annotations are saved locally.", duration=3.0)
        return render_engine.render_save_status(SaveStatus.IDLE, sync_enabled=False)

    if controller.remote_sync.manual_save_in_flight:
        return render_engine.render_save_status(controller.remote_sync.status)

    saved = await controller.manual_save()
    if saved:
        gr.Info("Annotations saved to cloud", duration=2.0)
    else:
        gr.Warning(
            "Saving to the cloud failed. Your annotations are still saved locally; "
            "try again later or export a JSON backup.",
            duration=None
        )
    return render_engine.render_save_status(controller.remote_sync.status)


def poll_save_status(controller: AnnotationController) -> str:
    """Current save indicator, refreshed by a timer."""
    sync = controller.remote_sync
    if sync is None:
        return RenderEngine.render_save_status(SaveStatus.IDLE, sync_enabled=False)
    return RenderEngine.render_save_status(sync.status)


def handle_export(controller: AnnotationController, export_dir) -> Any:
    """
    Write the annotated snapshot for download.

    Returns:
        Update for the download component (file path and visibility)
    """
    try:
        path = controller.export(export_dir)
    except Exception as e:
        gr.Warning(f"Export failed: {str(e)}", duration=2.0)
        return gr.update(value=None, visible=False)

    gr.Info(f"Exported {len(controller.samples)} samples", duration=2.0)
    return gr.update(value=str(path), visible=True)


def handle_login(
    password: str,
    reviewer: str,
    app_state: ApplicationState,
    gate: LoginGate,
) -> Tuple[ApplicationState, Any, Any, str]:
    """
    Check the shared password.

    Returns:
        Tuple of (app_state, login_group_update, main_group_update, message)
    """
    is_valid, error_msg = validate_password_input(password)
    if not is_valid:
        return app_state, gr.update(visible=True), gr.update(visible=False), f"⚠️ {error_msg}"

    if not gate.login(password, reviewer or ""):
        return app_state, gr.update(visible=True), gr.update(visible=False), "❌ Incorrect password"

    app_state.authenticated = True
    app_state.reviewer = (reviewer or "").strip()
    return app_state, gr.update(visible=False), gr.update(visible=True), ""


def handle_logout(app_state: ApplicationState, gate: LoginGate) -> Tuple[ApplicationState, Any, Any]:
    gate.logout()
    app_state.authenticated = False
    app_state.reviewer = ""
    return app_state, gr.update(visible=True), gr.update(visible=False)


async def handle_startup(
    app_state: ApplicationState,
    controller: AnnotationController,
    gate: LoginGate,
    max_standards: int,
) -> Tuple:
    """
    Page load: restore the login flag and annotations.

    Returns:
        Tuple of (login_group_update, main_group_update, *render_sample_view)
    """
    await controller.startup()

    app_state.authenticated = gate.is_authenticated()
    app_state.reviewer = gate.reviewer()
    authenticated = app_state.authenticated

    return (
        gr.update(visible=not authenticated),
        gr.update(visible=authenticated),
        *render_sample_view(controller, app_state, max_standards),
    )
