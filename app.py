import logging
from functools import partial

import gradio as gr

from data_viewer.config import load_config
from data_viewer.handlers import (
    handle_column_selection,
    handle_file_upload,
    handle_flatten_toggle,
    handle_items_per_page,
    handle_page_step,
    handle_paste,
    handle_search,
)
from data_viewer.view_state import ITEMS_PER_PAGE_CHOICES, initial_state

config = load_config()

# Forwards clipboard pastes made outside any input field into the paste box.
PASTE_LISTENER_JS = """
() => {
    const onPaste = (event) => {
        const target = event.target;
        if (target && (target.tagName === 'TEXTAREA' || target.tagName === 'INPUT' || target.isContentEditable)) {
            return;
        }
        const text = event.clipboardData ? event.clipboardData.getData('text') : '';
        const box = document.querySelector('#paste-input textarea');
        const button = document.querySelector('#paste-load');
        if (!text || !box || !button) {
            return;
        }
        event.preventDefault();
        box.value = text;
        box.dispatchEvent(new Event('input', { bubbles: true }));
        button.click();
    };
    document.addEventListener('paste', onPaste);
    window.addEventListener('pagehide', () => document.removeEventListener('paste', onPaste), { once: true });
}
"""

# --- UI Definition ---
with gr.Blocks(title="Data Viewer", js=PASTE_LISTENER_JS) as demo:
    gr.Markdown("# Data Viewer")
    gr.Markdown("View your data files, big or small, in an easy to use table.")

    # State
    view_state = gr.State(value=initial_state(config.items_per_page, config.max_flatten_depth))

    with gr.Row():
        with gr.Column(scale=2):
            file_input = gr.File(
                label="Click to upload or drag and drop (CSV, JSON, NDJSON supported)",
                file_types=[".csv", ".json", ".ndjson"],
                type="filepath",
            )
        with gr.Column(scale=1):
            with gr.Accordion("Paste JSON", open=False):
                paste_input = gr.Textbox(
                    label="JSON array (or paste anywhere on the page)",
                    lines=4,
                    elem_id="paste-input",
                )
                paste_btn = gr.Button("Load Pasted Data", elem_id="paste-load")
            status_msg = gr.Textbox(label="Status", interactive=False)

    with gr.Column(visible=False) as data_panel:
        with gr.Row():
            search_box = gr.Textbox(placeholder="Search in all columns...", show_label=False, scale=4)
            flatten_toggle = gr.Checkbox(label="Flatten JSON", value=False, visible=False, scale=1)
            row_count = gr.Textbox(label="Row Count", interactive=False, scale=1)

        with gr.Accordion("Columns", open=False):
            column_selector = gr.CheckboxGroup(label="Visible Columns", choices=[], value=[])

        data_table = gr.Dataframe(interactive=False, wrap=True)

        with gr.Row():
            items_per_page = gr.Dropdown(
                label="Rows per page",
                choices=list(ITEMS_PER_PAGE_CHOICES),
                value=config.items_per_page,
                interactive=True,
            )
            prev_btn = gr.Button("Previous", interactive=False)
            page_label = gr.Markdown()
            next_btn = gr.Button("Next", interactive=False)

    view_outputs = [
        view_state,
        data_panel,
        data_table,
        column_selector,
        flatten_toggle,
        page_label,
        prev_btn,
        next_btn,
        row_count,
        status_msg,
    ]

    file_input.upload(
        fn=handle_file_upload,
        inputs=[view_state, file_input],
        outputs=view_outputs,
        trigger_mode="always_last",
        concurrency_id="load",
        concurrency_limit=1,
    )

    paste_btn.click(
        fn=handle_paste,
        inputs=[view_state, paste_input],
        outputs=view_outputs,
        trigger_mode="always_last",
        concurrency_id="load",
        concurrency_limit=1,
    )

    search_box.input(
        fn=handle_search,
        inputs=[view_state, search_box],
        outputs=view_outputs,
        trigger_mode="always_last",
    )

    flatten_toggle.input(
        fn=handle_flatten_toggle,
        inputs=[view_state, flatten_toggle],
        outputs=view_outputs,
    )

    column_selector.input(
        fn=handle_column_selection,
        inputs=[view_state, column_selector],
        outputs=view_outputs,
    )

    items_per_page.input(
        fn=handle_items_per_page,
        inputs=[view_state, items_per_page],
        outputs=view_outputs,
    )

    prev_btn.click(fn=partial(handle_page_step, -1), inputs=[view_state], outputs=view_outputs)
    next_btn.click(fn=partial(handle_page_step, 1), inputs=[view_state], outputs=view_outputs)

if __name__ == "__main__":
    logging.basicConfig(
        level=config.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )
    demo.launch(server_name=config.server_name, server_port=config.server_port)
