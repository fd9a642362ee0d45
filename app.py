"""
Translation Review - Annotation Tool

Main entry point for the Gradio application.
"""

import logging

import gradio as gr

import config
from models import ApplicationState
from services import (
    AnnotationController,
    AnnotationPersistence,
    AzureBlobStore,
    DataManager,
    ExportManager,
    LocalStorage,
    LoginGate,
    RemoteSyncManager,
)
from ui.layout import create_review_layout
from ui.event_handlers import (
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

logger = logging.getLogger(__name__)


def build_controller(dataset_path=None) -> AnnotationController:
    """Wire the dataset, local storage and (optional) remote sync together."""
    data_manager = DataManager(dataset_path or config.DATASET_PATH)

    storage = LocalStorage(config.LOCAL_STORAGE_DIR)
    blob_store = AzureBlobStore.from_config()
    remote_sync = RemoteSyncManager(blob_store) if blob_store is not None else None

    return AnnotationController(
        data_manager.samples,
        AnnotationPersistence(storage),
        remote_sync=remote_sync,
        export_manager=ExportManager(config.DATASET_NAME),
    )


def main(dataset_path=None):
    """Main application entry point."""
    load_message = ""
    try:
        controller = build_controller(dataset_path)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Failed to load dataset: {e}")
        load_message = f"⚠️ Failed to load dataset: {e}"
        controller = AnnotationController([], AnnotationPersistence(LocalStorage(config.LOCAL_STORAGE_DIR)))

    gate = LoginGate(LocalStorage(config.LOCAL_STORAGE_DIR))
    max_standards = config.MAX_STANDARDS_SHOWN

    with gr.Blocks(title="Translation Review - Annotation Tool", theme=gr.themes.Soft()) as app:

        # Per-session state; annotations live in the controller
        app_state = gr.State(ApplicationState())

        components = create_review_layout(max_standards, load_message)

        view_outputs = [
            app_state,
            components['position_display'],
            components['translation_card'],
            components['standards_card'],
            components['status_badge'],
            components['sample_list'],
            components['stats_display'],
            components['translation_rating'],
            components['translation_comment'],
        ]
        for i in range(max_standards):
            view_outputs.extend([
                components['standard_rows'][i],
                components['standard_labels'][i],
                components['standard_ratings'][i],
                components['standard_comments'][i],
            ])

        feedback_outputs = [
            components['status_badge'],
            components['sample_list'],
            components['stats_display'],
        ]

        # ========== Event Handlers ==========

        # Startup: login flag, local annotations, one-time recovery
        async def on_load(state):
            return await handle_startup(state, controller, gate, max_standards)

        app.load(
            fn=on_load,
            inputs=[app_state],
            outputs=[components['login_group'], components['main_group'], *view_outputs]
        )

        # Login / logout
        def on_login(password, reviewer, state):
            state, login_vis, main_vis, message = handle_login(password, reviewer, state, gate)
            return (state, login_vis, main_vis, message, *render_sample_view(controller, state, max_standards)[1:])

        components['login_btn'].click(
            fn=on_login,
            inputs=[components['password_input'], components['reviewer_input'], app_state],
            outputs=[
                app_state,
                components['login_group'],
                components['main_group'],
                components['login_message'],
                *view_outputs[1:]
            ]
        )

        components['logout_btn'].click(
            fn=lambda state: handle_logout(state, gate),
            inputs=[app_state],
            outputs=[app_state, components['login_group'], components['main_group']]
        )

        # Navigation
        components['prev_btn'].click(
            fn=lambda state: handle_navigation("prev", state, controller, max_standards),
            inputs=[app_state],
            outputs=view_outputs
        )

        components['next_btn'].click(
            fn=lambda state: handle_navigation("next", state, controller, max_standards),
            inputs=[app_state],
            outputs=view_outputs
        )

        components['jump_btn'].click(
            fn=lambda number, state: handle_jump(number, state, controller, max_standards),
            inputs=[components['jump_input'], app_state],
            outputs=view_outputs
        )

        # Translation quality
        async def on_translation_rating(rating, state):
            return await handle_translation_rating(rating, state, controller)

        components['translation_rating'].input(
            fn=on_translation_rating,
            inputs=[components['translation_rating'], app_state],
            outputs=[components['translation_comment'], *feedback_outputs]
        )

        async def on_translation_comment(comment, state):
            await handle_translation_comment(comment, state, controller)

        components['translation_comment'].input(
            fn=on_translation_comment,
            inputs=[components['translation_comment'], app_state],
            outputs=None
        )

        # Standards alignment, one handler pair per row
        def make_standard_handlers(index):
            async def on_rating(rating, state):
                return await handle_standard_rating(index, rating, state, controller)

            async def on_comment(comment, state):
                await handle_standard_comment(index, comment, state, controller)

            return on_rating, on_comment

        for i in range(max_standards):
            on_rating, on_comment = make_standard_handlers(i)
            components['standard_ratings'][i].input(
                fn=on_rating,
                inputs=[components['standard_ratings'][i], app_state],
                outputs=[components['standard_comments'][i], *feedback_outputs]
            )
            components['standard_comments'][i].input(
                fn=on_comment,
                inputs=[components['standard_comments'][i], app_state],
                outputs=None
            )

        # Manual save: button disabled while the upload is in flight
        async def on_manual_save():
            return await handle_manual_save(controller)

        components['save_btn'].click(
            fn=lambda: gr.update(interactive=False),
            outputs=[components['save_btn']]
        ).then(
            fn=on_manual_save,
            outputs=[components['save_status']]
        ).then(
            fn=lambda: gr.update(interactive=True),
            outputs=[components['save_btn']]
        )

        # Export
        components['export_btn'].click(
            fn=lambda: handle_export(controller, config.EXPORT_DIR),
            outputs=[components['export_file']]
        )

        # Save indicator refresh
        status_timer = gr.Timer(config.STATUS_POLL_SECONDS)
        status_timer.tick(
            fn=lambda: poll_save_status(controller),
            outputs=[components['save_status']],
            show_progress="hidden"
        )

    return app


if __name__ == "__main__":
    app = main()
    app.launch(
        show_error=True,
        quiet=False,
        allowed_paths=[str(config.EXPORT_DIR)]
    )
