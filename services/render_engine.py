"""
RenderEngine for the review cards.

Produces the HTML fragments shown by the Gradio UI: translation card,
standards card, status badge, sample list, progress stats and the
remote save indicator.
"""

import html
from typing import Dict, Optional, Sequence

import markdown

from models import AnnotationStatus, Sample
from .remote_sync import SaveStatus


# label, color; None means nothing is shown
_SAVE_STATUS_DISPLAY = {
    SaveStatus.IDLE: None,
    SaveStatus.SAVING: ("☁️ Saving...", "#1976d2"),
    SaveStatus.SAVED: ("✅ Saved to cloud", "#166534"),
    SaveStatus.ERROR: ("❌ Cloud save failed", "#b91c1c"),
}


class RenderEngine:
    """
    Rendering engine for sample cards and status widgets.

    Free text goes through Markdown after HTML escaping, so dataset
    content can't inject markup.
    """

    def __init__(self):
        """Initialize RenderEngine with Markdown processor."""
        self.md = markdown.Markdown(extensions=['extra', 'nl2br', 'sane_lists'])

    def render_text(self, text: str) -> str:
        """Render dataset text (escaped) through Markdown."""
        if not text:
            return ""
        self.md.reset()
        return self.md.convert(html.escape(text))

    def render_translation_card(self, sample: Optional[Sample]) -> str:
        if sample is None:
            return '<div class="card">No sample loaded</div>'

        warning = ""
        if not sample.valid_translation and sample.validation_reason:
            warning = (
                f'<div class="validation-warning">⚠️ {html.escape(sample.validation_reason)}</div>'
            )

        metrics = "".join(
            f'<div class="metric"><div class="metric-label">{label}</div>'
            f'<div class="metric-value">{html.escape(str(value))}</div></div>'
            for label, value in (
                ("FH Score", f"{sample.fernandez_huerta_score:.1f}"),
                ("FH Grade", f"{sample.fernandez_huerta_grade:g}"),
                ("FH Age", sample.fernandez_huerta_age),
                ("Flesch Grade", f"{sample.flesh_grade:.1f}"),
            )
        )

        return f'''
        <div class="card translation-card">
            <div class="card-header">
                <div><b>ID:</b> {html.escape(sample.id)}</div>
                <div>Textbook: <b>{html.escape(sample.textbook_grade)}</b> |
                     Target Grade: <span class="pill">{html.escape(sample.target_grade)}</span></div>
                <div>Domain: <b>{html.escape(sample.domain)}</b> |
                     Target Age: <span class="pill secondary">{html.escape(sample.target_age)} years</span></div>
                <div>Subject: {html.escape(sample.subject)}</div>
            </div>
            <div class="section-label">English (Source)</div>
            <div class="text-box source-text">{self.render_text(sample.english_text)}</div>
            <div class="section-label">Spanish (Translation)</div>
            <div class="text-box translation-text">{self.render_text(sample.spanish_translation)}</div>
            {warning}
            <div class="metrics">{metrics}</div>
        </div>
        '''

    def render_standards_card(self, sample: Optional[Sample]) -> str:
        if sample is None or not sample.matched_standards:
            return '<div class="card standards-card">No matched standards</div>'

        parts = ['<div class="card standards-card">']
        for index, standard in enumerate(sample.matched_standards, start=1):
            grades = ""
            if standard.grade_levels:
                grades = f'<span class="grades">Applicable Grades: Grade {html.escape(", ".join(standard.grade_levels))}</span>'
            parts.append(f'''
            <div class="standard">
                <div><b>{index}. Standard Code:</b> <span class="pill">{html.escape(standard.standard_code)}</span>
                     <span class="similarity">similarity {standard.similarity_score:.2f}</span></div>
                <div><span class="pill secondary">Subject: {html.escape(standard.academic_subject)}</span> {grades}</div>
                <div class="standard-description">{self.render_text(standard.description)}</div>
            </div>
            ''')
        parts.append('</div>')
        return "".join(parts)

    @staticmethod
    def render_status_badge(status: AnnotationStatus) -> str:
        return (
            f'<span class="status-badge" style="background-color: {status.background}; '
            f'color: {status.color}; padding: 4px 10px; border-radius: 999px; font-size: 14px;">'
            f'{status.label}</span>'
        )

    @staticmethod
    def render_sample_list(
        samples: Sequence[Sample],
        statuses: Sequence[AnnotationStatus],
        current_index: int,
    ) -> str:
        """
        Sample list with one status marker per sample.

        Args:
            samples: Samples in display order
            statuses: Status of each sample, same order
            current_index: Highlighted sample
        """
        if not samples:
            return '<div class="sample-list-container">No data</div>'

        html_parts = ['<div class="sample-list-container">']
        for i, (sample, status) in enumerate(zip(samples, statuses)):
            current = i == current_index
            preview = sample.english_text[:40] + "..." if len(sample.english_text) > 40 else sample.english_text
            html_parts.append(f'''
            <div class="sample-item{' current' if current else ''}"
                 style="border-left: {'4px' if current else '3px'} solid {status.color};"
                 data-sample-index="{i}">
                <div class="sample-item-header">
                    <span>{status.marker}</span>
                    <span>#{i + 1} · {html.escape(sample.id)} · {html.escape(sample.target_grade)}</span>
                    <span style="color: {status.color};">{status.label}</span>
                </div>
                <div class="sample-preview">{html.escape(preview)}</div>
            </div>
            ''')
        html_parts.append("</div>")
        return "".join(html_parts)

    @staticmethod
    def render_stats(progress: Dict[str, int]) -> str:
        total = progress.get('total', 0)
        done = progress.get(AnnotationStatus.DONE.value, 0)
        percentage = (done / total * 100) if total > 0 else 0
        return (
            f'<div class="progress-bar" style="background: linear-gradient(90deg, #bbf7d0 {percentage}%, '
            f'#f5f5f5 {percentage}%);">'
            f'📊 Done <b>{done}</b> | Partial <b>{progress.get(AnnotationStatus.PARTIAL.value, 0)}</b> | '
            f'Not Started <b>{progress.get(AnnotationStatus.NOT_STARTED.value, 0)}</b> '
            f'of {total} ({percentage:.1f}%)</div>'
        )

    @staticmethod
    def render_save_status(status: SaveStatus, sync_enabled: bool = True) -> str:
        if not sync_enabled:
            return '<div class="save-status" style="color: #6b7280;">Cloud sync off (local only)</div>'
        display = _SAVE_STATUS_DISPLAY[status]
        if display is None:
            return '<div class="save-status"></div>'
        label, color = display
        return f'<div class="save-status" style="color: {color};">{label}</div>'
