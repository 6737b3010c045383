from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, fields
from typing import List, Optional

logger = logging.getLogger(__name__)

SETTINGS_ENV_VAR = "INFOBOX_SETTINGS"
DEFAULT_SETTINGS_FILE = "infobox_settings.json"


@dataclass
class InfoboxSettings:
    image_property: str = "image"
    images_property: str = "images"
    exclude_properties: str = ""
    max_image_height: Optional[int] = 500
    sort_properties: bool = False
    capitalize_property_name: bool = False
    nested_separator: str = "."
    image_folder: str = "."

    def excluded_properties(self) -> List[str]:
        """Paths hidden from the table, including the image properties."""
        excluded = [p.strip() for p in (self.exclude_properties or "").split(",")]
        excluded = [p for p in excluded if p]
        if self.image_property:
            excluded.append(self.image_property)
        if self.images_property:
            excluded.append(self.images_property)
        return excluded

    def image_max_height_css(self) -> str:
        if self.max_image_height == 0:
            return "none"
        if self.max_image_height is None or self.max_image_height < 0:
            return f"{InfoboxSettings.max_image_height}px"
        return f"{self.max_image_height}px"


def settings_path() -> str:
    return os.environ.get(SETTINGS_ENV_VAR) or DEFAULT_SETTINGS_FILE


def load_settings(path: Optional[str] = None) -> InfoboxSettings:
    """Load stored settings merged over the defaults."""
    path = path or settings_path()
    if not os.path.exists(path):
        return InfoboxSettings()

    try:
        with open(path, 'r', encoding='utf-8') as f:
            stored = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Could not read settings from %s: %s", path, e)
        return InfoboxSettings()

    if not isinstance(stored, dict):
        logger.warning("Ignoring settings in %s: expected an object.", path)
        return InfoboxSettings()

    known = {f.name for f in fields(InfoboxSettings)}
    return InfoboxSettings(**{k: v for k, v in stored.items() if k in known})


def save_settings(settings: InfoboxSettings, path: Optional[str] = None) -> str:
    path = path or settings_path()
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(asdict(settings), f, indent=2)
    return path
