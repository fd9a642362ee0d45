"""
UI layout components for the Translation Review annotation tool.

Defines the Gradio layout: login gate, header row, and the three columns
(sample navigation, translation card, standards and annotation section).
"""

import html

import gradio as gr
from typing import Dict, Any

from models import Rating


RATING_CHOICES = [r.value for r in Rating]


GLOBAL_CSS = """
<style>
.gradio-container { font-size: 16px !important; }

.column-title {
    background: #e3f2fd;
    padding: 8px 12px;
    border-radius: 6px;
    border-left: 4px solid #1976d2;
    font-size: 18px !important;
    font-weight: bold;
    margin-bottom: 8px;
}

.card {
    border: 2px solid #e5e7eb;
    border-radius: 8px;
    padding: 12px;
    background: #ffffff;
}

.standards-card { border-color: #e9d5ff; }

.card-header {
    background: #f9fafb;
    border-radius: 6px;
    padding: 8px;
    margin-bottom: 10px;
    line-height: 1.8;
}

.pill {
    background: #1976d2;
    color: white;
    border-radius: 999px;
    padding: 2px 10px;
    font-size: 14px;
}

.pill.secondary { background: #e5e7eb; color: #374151; }

.section-label {
    font-size: 12px;
    text-transform: uppercase;
    letter-spacing: 0.05em;
    color: #6b7280;
    margin: 8px 0 4px 0;
}

.text-box {
    border: 1px solid #e5e7eb;
    border-radius: 8px;
    padding: 12px;
    max-height: 220px;
    overflow-y: auto;
    line-height: 1.6;
}

.translation-text { background: #eff6ff; border-color: #bfdbfe; font-size: 17px; }

.validation-warning {
    background: #fef2f2;
    border: 1px solid #fecaca;
    color: #b91c1c;
    border-radius: 8px;
    padding: 8px;
    margin-top: 8px;
    font-size: 14px;
}

.metrics { display: grid; grid-template-columns: repeat(4, 1fr); gap: 8px; margin-top: 10px; }
.metric { text-align: center; background: #f9fafb; border-radius: 6px; padding: 6px; }
.metric-label { font-size: 12px; color: #6b7280; }
.metric-value { font-size: 18px; }

.standard { border-bottom: 1px solid #e5e7eb; padding-bottom: 10px; margin-bottom: 10px; }
.standard:last-child { border-bottom: none; }
.similarity, .grades { font-size: 13px; color: #6b7280; }
.standard-description { font-size: 14px; color: #374151; }

.sample-list-container {
    max-height: 600px;
    overflow-y: auto;
    border: 1px solid #1976d2;
    border-radius: 8px;
    padding: 8px;
    font-size: 14px;
}

.sample-item { padding: 8px; margin: 4px 0; border-radius: 0 5px 5px 0; background: #ffffff; }
.sample-item.current { background: #e3f2fd; font-weight: bold; }
.sample-item-header { display: flex; justify-content: space-between; align-items: center; }
.sample-preview { margin-top: 4px; color: #333; }

.progress-bar {
    padding: 8px 12px;
    border-radius: 6px;
    border: 1px solid #1976d2;
    text-align: center;
    font-size: 15px;
}

.load-status {
    background: #fef2f2;
    border: 1px solid #fecaca;
    color: #b91c1c;
    border-radius: 6px;
    padding: 8px 12px;
    margin-bottom: 6px;
}

.save-status { font-weight: bold; min-height: 24px; padding: 6px 0; }

.annotation-section { border: 2px solid #bfdbfe !important; border-radius: 8px !important; }
</style>
"""


def get_global_css() -> str:
    """Return the global CSS block."""
    return GLOBAL_CSS


def create_login_gate(components: Dict[str, Any]) -> None:
    """Password form shown before the review UI."""
    with gr.Group(visible=True) as login_group:
        components['login_group'] = login_group
        gr.Markdown("## 🔒 Translation Review - Sign in")
        components['reviewer_input'] = gr.Textbox(label="Your name", placeholder="Reviewer name")
        components['password_input'] = gr.Textbox(label="Access password", type="password")
        components['login_btn'] = gr.Button("Sign in", variant="primary")
        components['login_message'] = gr.Markdown("")


def create_header(components: Dict[str, Any], load_message: str = "") -> None:
    """Title, progress, cloud save status and export controls."""
    with gr.Row():
        with gr.Column(scale=3):
            gr.Markdown("# Translation Review - Annotation Tool")
            components['load_status'] = gr.HTML(
                f'<div class="load-status">{html.escape(load_message)}</div>' if load_message else ""
            )
            components['stats_display'] = gr.HTML('<div class="progress-bar">No data</div>')
        with gr.Column(scale=2):
            components['save_status'] = gr.HTML('<div class="save-status"></div>')
            with gr.Row():
                components['save_btn'] = gr.Button("☁️ Save to cloud", variant="primary")
                components['export_btn'] = gr.Button("💾 Export JSON")
            components['export_file'] = gr.File(
                label="📥 Export download",
                interactive=False,
                visible=False
            )
            components['logout_btn'] = gr.Button("Sign out", size="sm")

    gr.HTML('<hr style="border: 2px solid #1976d2; margin: 3px 0;">')


def create_left_column(components: Dict[str, Any]) -> None:
    """Navigation buttons and sample list."""
    gr.HTML('<div class="column-title">📋 Samples</div>')
    with gr.Row():
        components['prev_btn'] = gr.Button("⬅️ Previous", size="sm")
        components['next_btn'] = gr.Button("Next ➡️", size="sm")
    components['position_display'] = gr.Markdown("Sample - / -")
    with gr.Row():
        components['jump_input'] = gr.Number(label="Go to #", precision=0, minimum=1)
        components['jump_btn'] = gr.Button("Go", size="sm")
    components['sample_list'] = gr.HTML('<div class="sample-list-container">No data</div>')


def create_center_column(components: Dict[str, Any]) -> None:
    """Translation card."""
    gr.HTML('<div class="column-title">📝 Translation</div>')
    components['translation_card'] = gr.HTML('<div class="card">No sample loaded</div>')


def create_right_column(components: Dict[str, Any], max_standards: int) -> None:
    """Standards card and annotation controls."""
    gr.HTML('<div class="column-title">📚 Matched Standards</div>')
    components['standards_card'] = gr.HTML('<div class="card standards-card">No matched standards</div>')

    with gr.Group(elem_classes=["annotation-section"]):
        with gr.Row():
            gr.Markdown("### Annotation")
            components['status_badge'] = gr.HTML("")

        components['translation_rating'] = gr.Radio(
            choices=RATING_CHOICES,
            label="Spanish Translation Quality",
            value=None
        )
        components['translation_comment'] = gr.Textbox(
            label="Comment",
            placeholder="Add comment for translation quality...",
            lines=2,
            visible=False
        )

        gr.Markdown("**Standards Alignment**")
        components['standard_rows'] = []
        components['standard_labels'] = []
        components['standard_ratings'] = []
        components['standard_comments'] = []
        # Fixed pool of rows; rows beyond a sample's standards are hidden.
        for i in range(max_standards):
            with gr.Group(visible=False) as row:
                label = gr.Markdown(f"Standard {i + 1}")
                rating = gr.Radio(choices=RATING_CHOICES, show_label=False, value=None)
                comment = gr.Textbox(
                    show_label=False,
                    placeholder="Add comment...",
                    lines=2,
                    visible=False
                )
            components['standard_rows'].append(row)
            components['standard_labels'].append(label)
            components['standard_ratings'].append(rating)
            components['standard_comments'].append(comment)


def create_review_layout(max_standards: int, load_message: str = "") -> Dict[str, Any]:
    """
    Build the complete layout.

    Args:
        max_standards: Number of standard annotation rows to create
        load_message: Dataset loading problem to show in the header

    Returns:
        Dictionary of all UI components
    """
    components: Dict[str, Any] = {}

    gr.HTML(get_global_css())

    create_login_gate(components)

    with gr.Group(visible=False) as main_group:
        components['main_group'] = main_group
        create_header(components, load_message)
        with gr.Row():
            with gr.Column(scale=1):
                create_left_column(components)
            with gr.Column(scale=3):
                create_center_column(components)
            with gr.Column(scale=3):
                create_right_column(components, max_standards)

    return components
