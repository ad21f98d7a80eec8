import gradio as gr
from functools import partial

from llm_output_format.config import configure_logging, load_settings
from llm_output_format.fields import DEFAULT_TOP_LEVEL_KEY
from llm_output_format.handlers import (
    KIND_CHOICES,
    generate_schema_handler,
    handle_add_field,
    handle_add_option,
    handle_delete_field,
    handle_delete_option,
    handle_description_change,
    handle_duplicate_field,
    handle_key_change,
    handle_kind_change,
    handle_move_field,
    handle_option_change,
    load_fields_from_request,
)

settings = load_settings()
configure_logging(settings)

# --- UI Definition ---
with gr.Blocks(title="JSON Schema generator for LLM JSON formatted output") as demo:
    gr.Markdown("# LLM Output Format Generator")
    gr.Markdown("Define the items an LLM should return, then generate a JSON Schema and a shareable link.")

    # State
    fields_state = gr.State(value=[])
    # Bumped by structural edits only; text edits must not re-render the editor.
    revision_state = gr.State(value=0)

    gr.Markdown("## Item Definitions")

    @gr.render(inputs=[fields_state], triggers=[revision_state.change])
    def render_fields(fields):
        if not fields:
            gr.Markdown("No items yet.")
            return

        for index, field in enumerate(fields):
            with gr.Group():
                gr.Markdown(f"### Item {index + 1}")
                with gr.Row():
                    key_box = gr.Textbox(label="Key", value=field.key)
                    kind_dropdown = gr.Dropdown(label="Type", choices=KIND_CHOICES, value=field.kind.value, interactive=True)

                key_box.input(fn=partial(handle_key_change, index), inputs=[key_box, fields_state], outputs=[fields_state])
                kind_dropdown.input(
                    fn=partial(handle_kind_change, index),
                    inputs=[kind_dropdown, fields_state, revision_state],
                    outputs=[fields_state, revision_state],
                )

                if field.kind.has_options:
                    gr.Markdown("Options:")
                    for option_index, option in enumerate(field.options or ()):
                        with gr.Row():
                            option_box = gr.Textbox(value=option, show_label=False, scale=4)
                            delete_option_btn = gr.Button("Delete", variant="stop", scale=1)
                        option_box.input(
                            fn=partial(handle_option_change, index, option_index),
                            inputs=[option_box, fields_state],
                            outputs=[fields_state],
                        )
                        delete_option_btn.click(
                            fn=partial(handle_delete_option, index, option_index),
                            inputs=[fields_state, revision_state],
                            outputs=[fields_state, revision_state],
                        )
                    add_option_btn = gr.Button("Add Option")
                    add_option_btn.click(
                        fn=partial(handle_add_option, index),
                        inputs=[fields_state, revision_state],
                        outputs=[fields_state, revision_state],
                    )

                description_box = gr.Textbox(label="Description", value=field.description, lines=3)
                description_box.input(
                    fn=partial(handle_description_change, index),
                    inputs=[description_box, fields_state],
                    outputs=[fields_state],
                )

                with gr.Row():
                    delete_btn = gr.Button("Delete", variant="stop")
                    duplicate_btn = gr.Button("Duplicate")
                    up_btn = gr.Button("Move Up", interactive=index > 0)
                    down_btn = gr.Button("Move Down", interactive=index < len(fields) - 1)

                delete_btn.click(
                    fn=partial(handle_delete_field, index),
                    inputs=[fields_state, revision_state],
                    outputs=[fields_state, revision_state],
                )
                duplicate_btn.click(
                    fn=partial(handle_duplicate_field, index),
                    inputs=[fields_state, revision_state],
                    outputs=[fields_state, revision_state],
                )
                up_btn.click(
                    fn=partial(handle_move_field, index, -1),
                    inputs=[fields_state, revision_state],
                    outputs=[fields_state, revision_state],
                )
                down_btn.click(
                    fn=partial(handle_move_field, index, 1),
                    inputs=[fields_state, revision_state],
                    outputs=[fields_state, revision_state],
                )

    add_field_btn = gr.Button("Add Item", variant="primary")

    gr.Markdown("## Generate Options")
    top_level_key_box = gr.Textbox(label="Top Level Key", value=DEFAULT_TOP_LEVEL_KEY)

    gr.Markdown("## Generated JSON Schema")
    generate_btn = gr.Button("Generate Schema", variant="primary")
    status_msg = gr.Textbox(label="Status", interactive=False)
    share_url_box = gr.Textbox(label="Share URL", interactive=False, show_copy_button=True)
    schema_output = gr.Code(label="JSON Schema", language="json", interactive=False)

    demo.load(
        fn=load_fields_from_request,
        inputs=[revision_state],
        outputs=[fields_state, top_level_key_box, revision_state],
    )

    add_field_btn.click(
        fn=handle_add_field,
        inputs=[fields_state, revision_state],
        outputs=[fields_state, revision_state],
    )

    generate_btn.click(
        fn=generate_schema_handler,
        inputs=[fields_state, top_level_key_box],
        outputs=[schema_output, share_url_box, status_msg],
    )

if __name__ == "__main__":
    demo.launch()
