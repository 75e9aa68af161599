import logging
from functools import partial

import gradio as gr

from json_slice_explorer.cascade import cascade_root, levels, set_path
from json_slice_explorer.config import get_log_level, load_category_table, DEFAULT_CATEGORY_PATHS
from json_slice_explorer.handlers_explore import (
    current_raw,
    handle_add_category,
    handle_add_selection,
    handle_back,
    handle_clear_categories,
    handle_clear_selection,
    handle_cursor_change,
    handle_dataset_change,
    handle_dataset_upload,
    handle_level_change,
    handle_remove_selection,
    handle_selection_change,
    handle_submit,
    handle_submit_category,
    handle_view_full,
    load_datasets_handler,
)
from json_slice_explorer.handlers_search import handle_reset_search, handle_search

logging.basicConfig(level=get_log_level(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

try:
    CATEGORY_TABLE = load_category_table()
except (OSError, ValueError) as e:
    logger.error("Falling back to built-in categories: %s", e)
    CATEGORY_TABLE = {k: [list(p) for p in v] for k, v in DEFAULT_CATEGORY_PATHS.items()}

# --- UI Definition ---
with gr.Blocks(title="JSON Slice Explorer") as demo:
    gr.Markdown("# Interactive data explorer")
    gr.Markdown(
        "Pick a dataset, drill into nested keys/indices, add selections, or submit a whole category. "
        "Selecting a parent includes **all of its children**."
    )

    # State
    datasets_state = gr.State(value=[])
    cursor_path_state = gr.State(value=[])
    selected_paths_state = gr.State(value=[])
    categories_state = gr.State(value=[])
    category_table_state = gr.State(value=CATEGORY_TABLE)

    with gr.Tab("Explore"):
        with gr.Row():
            # Left Panel: dataset + cascade
            with gr.Column(scale=1):
                gr.Markdown("### 1. Dataset")
                dataset_selector = gr.Dropdown(label="Select a dataset", choices=[], interactive=True)
                load_status = gr.Textbox(label="Status", interactive=False)
                reload_btn = gr.Button("Reload datasets")
                upload_input = gr.File(label="Upload JSON File", file_types=[".json"])

                gr.Markdown("### 2. Drill down")
                cursor_status = gr.Textbox(label="Cursor", interactive=False)

                @gr.render(inputs=[datasets_state, dataset_selector, cursor_path_state])
                def render_cascade(datasets, file_name, cursor_path):
                    raw = current_raw(datasets, file_name)
                    if raw is None:
                        gr.Markdown("No data loaded.")
                        return

                    root = cascade_root(raw)
                    state = set_path(root, cursor_path or [])
                    for i, (_, opts) in enumerate(levels(root, state)):
                        label = "Level 0 (root) keys / indices" if i == 0 else f"Level {i} keys / indices"
                        placeholder = "Choose…" if opts else "(no keys here)"
                        selected = state.path[i] if i < len(state.path) else ""
                        dd = gr.Dropdown(
                            label=label,
                            choices=[(placeholder, "")] + [(o, o) for o in opts],
                            value=selected,
                            interactive=bool(opts),
                            key=f"level-{i}",
                        )
                        dd.input(
                            fn=partial(handle_level_change, i),
                            inputs=[dd, datasets_state, dataset_selector, cursor_path_state],
                            outputs=[cursor_path_state],
                        )

                with gr.Row():
                    back_btn = gr.Button("⬅ Back")
                    add_btn = gr.Button("➕ Add selection", variant="primary")
                current_node = gr.JSON(label="Current node")

            # Right Panel: selection, categories, output
            with gr.Column(scale=1):
                gr.Markdown("### 3. Selections")
                selection_count = gr.Textbox(label="Selection", interactive=False)
                remove_selector = gr.Dropdown(label="Selected paths", choices=[], interactive=True)
                with gr.Row():
                    remove_btn = gr.Button("Remove")
                    clear_btn = gr.Button("Clear all")
                include_current = gr.Checkbox(label="Include current path on submit", value=True)
                preview = gr.JSON(label="Preview")

                gr.Markdown("### 4. Categories")
                category_choice = gr.Dropdown(
                    label="Category (combine all paths under one key)",
                    choices=list(CATEGORY_TABLE.keys()),
                    value=None,
                    interactive=True,
                )
                with gr.Row():
                    add_category_btn = gr.Button("Add category")
                    submit_category_btn = gr.Button("Submit")
                    view_full_btn = gr.Button("View full dataset here")
                    clear_categories_btn = gr.Button("Clear")
                categories_display = gr.Textbox(label="Added categories", interactive=False)
                category_result = gr.JSON(label="Category result")

                gr.Markdown("### 5. Submit")
                output_filename = gr.Textbox(label="Output Filename (optional)", placeholder="result")
                submit_btn = gr.Button("Submit", variant="primary")
                submit_status = gr.Textbox(label="Submit Status", interactive=False)
                download_output = gr.File(label="Download Result")
                final_output = gr.JSON(label="Final Output")

    with gr.Tab("Search"):
        with gr.Row():
            search_query = gr.Textbox(label="Search", placeholder='Search e.g. "jordan.kim"')
            search_scope = gr.Dropdown(label="Scope", choices=["ALL"], value="ALL", interactive=True)
        with gr.Row():
            search_btn = gr.Button("Search", variant="primary")
            reset_btn = gr.Button("Reset")
        search_status = gr.Markdown()
        search_results = gr.JSON(label="Results")

    dataset_outputs = [datasets_state, dataset_selector, load_status, search_scope]
    demo.load(fn=load_datasets_handler, inputs=None, outputs=dataset_outputs)
    reload_btn.click(fn=load_datasets_handler, inputs=None, outputs=dataset_outputs)
    upload_input.upload(
        fn=handle_dataset_upload,
        inputs=[upload_input, datasets_state],
        outputs=dataset_outputs,
    )

    dataset_selector.change(
        fn=handle_dataset_change,
        inputs=[datasets_state, dataset_selector],
        outputs=[
            cursor_path_state,
            selected_paths_state,
            categories_state,
            categories_display,
            category_result,
            final_output,
            download_output,
            submit_status,
        ],
    )

    cursor_inputs = [datasets_state, dataset_selector, cursor_path_state, selected_paths_state, include_current]
    cursor_path_state.change(
        fn=handle_cursor_change,
        inputs=cursor_inputs,
        outputs=[cursor_status, current_node, preview],
    )
    include_current.change(
        fn=handle_cursor_change,
        inputs=cursor_inputs,
        outputs=[cursor_status, current_node, preview],
    )

    back_btn.click(
        fn=handle_back,
        inputs=[datasets_state, dataset_selector, cursor_path_state],
        outputs=[cursor_path_state],
    )
    add_btn.click(
        fn=handle_add_selection,
        inputs=[cursor_path_state, selected_paths_state],
        outputs=[selected_paths_state],
    )

    selected_paths_state.change(
        fn=handle_selection_change,
        inputs=[datasets_state, dataset_selector, selected_paths_state, cursor_path_state, include_current],
        outputs=[remove_selector, selection_count, preview],
    )
    remove_btn.click(
        fn=handle_remove_selection,
        inputs=[selected_paths_state, remove_selector],
        outputs=[selected_paths_state],
    )
    clear_btn.click(fn=handle_clear_selection, inputs=None, outputs=[selected_paths_state])

    add_category_btn.click(
        fn=handle_add_category,
        inputs=[category_choice, categories_state],
        outputs=[categories_state, categories_display],
    )
    clear_categories_btn.click(
        fn=handle_clear_categories,
        inputs=None,
        outputs=[categories_state, categories_display],
    )
    submit_category_btn.click(
        fn=handle_submit_category,
        inputs=[datasets_state, dataset_selector, category_choice, category_table_state],
        outputs=[category_result],
    )
    view_full_btn.click(
        fn=handle_view_full,
        inputs=[datasets_state, dataset_selector],
        outputs=[category_result],
    )

    submit_btn.click(
        fn=handle_submit,
        inputs=[
            datasets_state,
            dataset_selector,
            selected_paths_state,
            cursor_path_state,
            include_current,
            categories_state,
            category_table_state,
            output_filename,
        ],
        outputs=[final_output, download_output, submit_status],
        api_name="submit",
    )

    search_btn.click(
        fn=handle_search,
        inputs=[datasets_state, search_query, search_scope],
        outputs=[search_results, search_status],
        api_name="search",
    )
    search_query.submit(
        fn=handle_search,
        inputs=[datasets_state, search_query, search_scope],
        outputs=[search_results, search_status],
    )
    reset_btn.click(
        fn=handle_reset_search,
        inputs=None,
        outputs=[search_query, search_scope, search_results, search_status],
    )

if __name__ == "__main__":
    demo.launch()
