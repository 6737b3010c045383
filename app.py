import logging
from functools import partial

import gradio as gr

from frontmatter_infobox.handlers import (
    carousel_step_handler,
    edit_table_handler,
    export_document_handler,
    load_document_handler,
    update_settings_handler,
)
from frontmatter_infobox.settings import load_settings

initial_settings = load_settings()

# --- UI Definition ---
with gr.Blocks(title="Frontmatter Infobox") as demo:
    gr.Markdown("# Frontmatter Infobox")
    gr.Markdown("Upload a markdown document to see its frontmatter as a table and edit values in place.")

    # State
    document_state = gr.State()
    settings_state = gr.State(value=initial_settings)
    image_index_state = gr.State(value=0)

    with gr.Row():
        # Left Panel: Document & Settings
        with gr.Column(scale=1):
            gr.Markdown("### 1. Document")
            file_input = gr.File(label="Upload Markdown File", file_types=[".md", ".markdown", ".txt"])
            status_msg = gr.Textbox(label="Status", interactive=False)

            with gr.Accordion("Settings", open=False):
                max_height_input = gr.Number(
                    label="Maximum Image Height",
                    info="Value in pixels. Set to zero for no maximum.",
                    value=initial_settings.max_image_height,
                    precision=0,
                )
                image_property_input = gr.Textbox(
                    label="Image Property",
                    info="Frontmatter property holding the main image file name.",
                    value=initial_settings.image_property,
                )
                images_property_input = gr.Textbox(
                    label="Images Property",
                    info="Array property holding additional image file names.",
                    value=initial_settings.images_property,
                )
                exclude_input = gr.Textbox(
                    label="Excluded Properties",
                    info="Comma-separated property names to hide from the table.",
                    value=initial_settings.exclude_properties,
                    lines=2,
                )
                sort_input = gr.Checkbox(label="Sort Properties", value=initial_settings.sort_properties)
                capitalize_input = gr.Checkbox(
                    label="Capitalize Property Names",
                    value=initial_settings.capitalize_property_name,
                )
                separator_input = gr.Textbox(
                    label="Nested Property Separator",
                    info="Joins nested property names in the table.",
                    value=initial_settings.nested_separator,
                    max_lines=1,
                )
                image_folder_input = gr.Textbox(
                    label="Image Folder",
                    info="Folder searched for image files.",
                    value=initial_settings.image_folder,
                )
                save_settings_btn = gr.Button("Apply Settings")

            gr.Markdown("### 3. Export")
            output_filename = gr.Textbox(label="Output Filename (optional)", placeholder="document")
            export_btn = gr.Button("Download Document", variant="primary")
            download_output = gr.File(label="Download Result")

        # Right Panel: Infobox
        with gr.Column(scale=1):
            gr.Markdown("### 2. Infobox")
            main_image = gr.Image(
                label="Image",
                type="filepath",
                interactive=False,
                height=None if initial_settings.max_image_height == 0 else initial_settings.max_image_height,
            )
            with gr.Row(visible=False) as image_nav:
                prev_btn = gr.Button("Previous")
                next_btn = gr.Button("Next")

            properties_table = gr.Dataframe(
                headers=["Stat", "Value"],
                datatype=["str", "str"],
                col_count=(2, "fixed"),
                interactive=True,
                label="Properties",
            )

    file_input.upload(
        fn=load_document_handler,
        inputs=[file_input, settings_state],
        outputs=[document_state, properties_table, main_image, image_index_state, image_nav, status_msg],
    )

    properties_table.input(
        fn=edit_table_handler,
        inputs=[document_state, properties_table, settings_state],
        outputs=[document_state, properties_table, status_msg],
        trigger_mode="always_last",
    )

    prev_btn.click(
        fn=partial(carousel_step_handler, step=-1),
        inputs=[document_state, image_index_state, settings_state],
        outputs=[main_image, image_index_state],
    )

    next_btn.click(
        fn=partial(carousel_step_handler, step=1),
        inputs=[document_state, image_index_state, settings_state],
        outputs=[main_image, image_index_state],
    )

    save_settings_btn.click(
        fn=update_settings_handler,
        inputs=[
            document_state,
            image_property_input,
            images_property_input,
            exclude_input,
            max_height_input,
            sort_input,
            capitalize_input,
            separator_input,
            image_folder_input,
        ],
        outputs=[settings_state, properties_table, main_image, image_index_state, image_nav, status_msg],
    )

    export_btn.click(
        fn=export_document_handler,
        inputs=[document_state, output_filename],
        outputs=[download_output, status_msg],
    )

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    demo.launch()
