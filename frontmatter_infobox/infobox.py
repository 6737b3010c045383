from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from .accessors import set_value_by_path
from .flattening import flatten_properties, flatten_to_mapping
from .settings import InfoboxSettings

logger = logging.getLogger(__name__)

URL_PATTERN = re.compile(r'^(https?://).+', re.IGNORECASE)
LINK_PATTERN = re.compile(r'!?\[\[(?P<filename>.+)\]\]')


def is_url(value: Any) -> bool:
    return isinstance(value, str) and URL_PATTERN.match(value) is not None


def extract_link_target(value: Any) -> str:
    """Return the file name from `[[name]]` / `![[name]]`, or the value itself."""
    if value is None:
        return ""
    if not isinstance(value, str):
        value = str(value)
    if "[[" in value:
        m = LINK_PATTERN.search(value)
        return m.group('filename') if m else ""
    return value


def capitalize_label(text: str) -> str:
    # Upper-cases the first letter of each word and leaves the rest alone.
    return re.sub(r'(^|\s)(\S)', lambda m: m.group(1) + m.group(2).upper(), text)


@dataclass
class InfoboxRow:
    path: str
    label: str
    value: Any
    is_link: bool = False
    editable: bool = True

    @property
    def cell_text(self) -> str:
        if self.value is None:
            return ""
        if self.is_link:
            return self.value.rstrip('/').split('/')[-1] or self.value
        return str(self.value)


@dataclass
class Infobox:
    rows: List[InfoboxRow] = field(default_factory=list)
    images: List[str] = field(default_factory=list)

    def to_table(self) -> List[List[str]]:
        return [[row.label, row.cell_text] for row in self.rows]


def _gallery_images(metadata: Dict[str, Any], images_property: str) -> List[str]:
    """Scalar file names under the gallery property, in order.

    Unquoted wiki-links (`- [[a.png]]`) load as nested lists, so scalars are
    collected through any list nesting. Values inside dict elements get a
    longer path and are left out.
    """
    if not images_property or not isinstance(metadata, dict):
        return []
    raw = metadata.get(images_property)
    if isinstance(raw, str):
        return [raw] if raw else []
    if not isinstance(raw, list):
        return []
    entries = flatten_properties({images_property: raw})
    return [str(v) for path, v in entries if path == images_property and v is not None]


def build_infobox(metadata: Dict[str, Any], settings: InfoboxSettings) -> Infobox:
    """Build the table rows and image list shown in the panel.

    The main image is always first, followed by the gallery images. The
    gallery is read from the unflattened metadata because flattening
    collapses a list of file names to its last entry.
    """
    sep = settings.nested_separator or "."
    properties = list(flatten_to_mapping(metadata, sep).items())
    if settings.sort_properties:
        properties.sort(key=lambda item: item[0])

    excluded = settings.excluded_properties()
    images = _gallery_images(metadata, settings.images_property)
    rows: List[InfoboxRow] = []

    for path, value in properties:
        if settings.image_property and path == settings.image_property:
            if value:
                images.insert(0, str(value))
            continue
        if path in excluded:
            continue

        label = capitalize_label(path) if settings.capitalize_property_name else path
        link = is_url(value)
        rows.append(InfoboxRow(path=path, label=label, value=value, is_link=link, editable=not link))

    return Infobox(rows=rows, images=images)


def resolve_image(file_name: str, vault_dir: str) -> Optional[str]:
    """Find an image by file name anywhere under `vault_dir`."""
    name = extract_link_target(file_name)
    if not name or not vault_dir or not os.path.isdir(vault_dir):
        return None

    for root, _dirs, files in os.walk(vault_dir):
        if name in files:
            return os.path.join(root, name)

    logger.info("Can't locate image file %r under %s", name, vault_dir)
    return None


class ImageCarousel:
    """Cycles through image links; Previous/Next wrap around at the ends."""

    def __init__(self, images: Sequence[str], index: int = 0):
        self.images = list(images)
        self.index = index if 0 <= index < len(self.images) else 0

    @property
    def current(self) -> Optional[str]:
        if not self.images:
            return None
        return self.images[self.index]

    @property
    def has_navigation(self) -> bool:
        return len(self.images) > 1

    def step_forward(self) -> Optional[str]:
        if self.images:
            self.index = self.index + 1 if self.index < len(self.images) - 1 else 0
        return self.current

    def step_back(self) -> Optional[str]:
        if self.images:
            self.index = self.index - 1 if self.index > 0 else len(self.images) - 1
        return self.current


def apply_cell_edits(
    metadata: Dict[str, Any],
    rows: Sequence[InfoboxRow],
    new_values: Sequence[Any],
    sep: str = ".",
) -> List[str]:
    """Write changed table cells back into `metadata`.

    Link cells are read-only and blank edits are skipped. Returns the paths
    that were written.
    """
    written: List[str] = []
    for row, new in zip(rows, new_values):
        if not row.editable:
            continue
        new_text = "" if new is None else str(new)
        if new_text == row.cell_text:
            continue
        if not new_text:
            logger.debug("Skipping blank edit for %s", row.path)
            continue
        if set_value_by_path(metadata, row.path, new_text, sep):
            written.append(row.path)
    return written
