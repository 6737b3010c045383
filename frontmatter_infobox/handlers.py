from __future__ import annotations

import logging
import math
import os
import tempfile
from typing import Any, List, Optional

import gradio as gr

from .document import FrontmatterDocument, process_frontmatter, read_document, render_document
from .infobox import ImageCarousel, apply_cell_edits, build_infobox, resolve_image
from .settings import InfoboxSettings, save_settings

logger = logging.getLogger(__name__)

NO_CONTENT_MESSAGE = "Nothing to display."


def _cell_to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    return str(value)


def table_values(table) -> List[str]:
    """Return the edited Value column from a Dataframe payload."""
    if table is None:
        return []
    if hasattr(table, 'values') and hasattr(table, 'empty'):
        rows = [] if table.empty else table.values.tolist()
    else:
        rows = list(table)
    return [_cell_to_text(row[1]) if len(row) > 1 else "" for row in rows]


def current_image(images: List[str], index: int, settings: InfoboxSettings) -> Optional[str]:
    carousel = ImageCarousel(images, index)
    if carousel.current is None:
        return None
    return resolve_image(carousel.current, settings.image_folder)


def render_panel(doc: Optional[FrontmatterDocument], settings: InfoboxSettings):
    """Build (table, image, carousel index, navigation update, status) for a document."""
    if doc is None or not doc.metadata:
        return [], None, 0, gr.update(visible=False), NO_CONTENT_MESSAGE

    infobox = build_infobox(doc.metadata, settings)
    carousel = ImageCarousel(infobox.images)
    image = current_image(infobox.images, 0, settings)
    return (
        infobox.to_table(),
        image,
        0,
        gr.update(visible=carousel.has_navigation),
        f"Showing {len(infobox.rows)} properties and {len(infobox.images)} images.",
    )


def load_document_handler(file_obj, settings: InfoboxSettings):
    if file_obj is None:
        return (None,) + render_panel(None, settings)

    try:
        doc = read_document(file_obj)
    except (OSError, UnicodeDecodeError, ValueError) as e:
        logger.warning("Could not read document: %s", e)
        table, image, index, nav, _ = render_panel(None, settings)
        return None, table, image, index, nav, f"Error reading document: {str(e)}"

    return (doc,) + render_panel(doc, settings)


def edit_table_handler(doc: Optional[FrontmatterDocument], table, settings: InfoboxSettings):
    """Write edited Value cells back into the document's frontmatter."""
    if doc is None or not doc.metadata:
        return doc, [], NO_CONTENT_MESSAGE

    rows = build_infobox(doc.metadata, settings).rows
    values = table_values(table)
    written: List[str] = []

    def mutate(frontmatter):
        written.extend(apply_cell_edits(frontmatter, rows, values, settings.nested_separator or "."))

    if not process_frontmatter(doc, mutate):
        status = "Update failed; document left unchanged."
    elif written:
        status = f"Updated: {', '.join(written)}"
    else:
        status = "No changes."

    return doc, build_infobox(doc.metadata, settings).to_table(), status


def carousel_step_handler(doc: Optional[FrontmatterDocument], index: int, settings: InfoboxSettings, step: int = 1):
    if doc is None:
        return None, 0
    images = build_infobox(doc.metadata, settings).images
    carousel = ImageCarousel(images, int(index or 0))
    if step < 0:
        carousel.step_back()
    else:
        carousel.step_forward()
    return current_image(images, carousel.index, settings), carousel.index


def update_settings_handler(
    doc: Optional[FrontmatterDocument],
    image_property,
    images_property,
    exclude_properties,
    max_image_height,
    sort_properties,
    capitalize_property_name,
    nested_separator,
    image_folder,
):
    defaults = InfoboxSettings()
    try:
        height = int(max_image_height) if max_image_height not in (None, "") else defaults.max_image_height
    except (TypeError, ValueError):
        height = defaults.max_image_height

    settings = InfoboxSettings(
        image_property=image_property or defaults.image_property,
        images_property=images_property or defaults.images_property,
        exclude_properties=exclude_properties or "",
        max_image_height=height,
        sort_properties=bool(sort_properties),
        capitalize_property_name=bool(capitalize_property_name),
        nested_separator=nested_separator or defaults.nested_separator,
        image_folder=image_folder or defaults.image_folder,
    )

    try:
        save_settings(settings)
    except OSError as e:
        logger.warning("Could not save settings: %s", e)

    table, image, index, nav, status = render_panel(doc, settings)
    return settings, table, gr.update(value=image, height=_image_height(settings)), index, nav, status


def _image_height(settings: InfoboxSettings) -> Optional[int]:
    css = settings.image_max_height_css()
    return None if css == "none" else int(css[:-2])


def export_document_handler(doc: Optional[FrontmatterDocument], file_name):
    if doc is None:
        return None, "No document loaded."

    if not file_name or not file_name.strip():
        file_name = "document"
    if not file_name.lower().endswith(".md"):
        file_name += ".md"

    path = os.path.join(tempfile.gettempdir(), file_name)
    try:
        with open(path, 'w', encoding='utf-8') as f:
            f.write(render_document(doc))
        return path, f"Export successful! Saved to {path}"
    except OSError as e:
        return None, f"Error during export: {str(e)}"
