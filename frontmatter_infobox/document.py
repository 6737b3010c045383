from __future__ import annotations

import logging
import threading
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any, Callable, Dict

import yaml

logger = logging.getLogger(__name__)

FRONTMATTER_DELIM = "---"

_write_lock = threading.RLock()


@dataclass
class FrontmatterDocument:
    """A markdown document split into its frontmatter and body."""

    metadata: Dict[str, Any] = field(default_factory=dict)
    body: str = ""


def parse_document(raw: str) -> FrontmatterDocument:
    lines = raw.splitlines(keepends=True)
    if not lines or lines[0].strip() != FRONTMATTER_DELIM:
        return FrontmatterDocument(metadata={}, body=raw)

    closing_index = None
    for i in range(1, len(lines)):
        if lines[i].strip() == FRONTMATTER_DELIM:
            closing_index = i
            break
    if closing_index is None:
        logger.info("Frontmatter block is not closed; treating document as body only.")
        return FrontmatterDocument(metadata={}, body=raw)

    metadata_block = "".join(lines[1:closing_index])
    body = "".join(lines[closing_index + 1:])

    try:
        loaded = yaml.safe_load(metadata_block) or {}
    except yaml.YAMLError as e:
        logger.warning("Could not parse frontmatter: %s", e)
        return FrontmatterDocument(metadata={}, body=raw)

    if not isinstance(loaded, dict):
        logger.info("Frontmatter is not a mapping (%s); ignoring it.", type(loaded).__name__)
        return FrontmatterDocument(metadata={}, body=raw)

    return FrontmatterDocument(metadata=loaded, body=body)


def render_document(doc: FrontmatterDocument) -> str:
    if not doc.metadata:
        return doc.body
    payload = yaml.safe_dump(doc.metadata, sort_keys=False, allow_unicode=True).strip()
    return f"{FRONTMATTER_DELIM}\n{payload}\n{FRONTMATTER_DELIM}\n{doc.body}"


def read_document(file_obj) -> FrontmatterDocument:
    """Read a markdown document from an uploaded file or file path."""
    if file_obj is None:
        raise ValueError("No file uploaded.")

    if hasattr(file_obj, 'read'):
        if hasattr(file_obj, 'seek'):
            file_obj.seek(0)
        content = file_obj.read()
        if isinstance(content, bytes):
            content = content.decode('utf-8')
        return parse_document(content)

    path = file_obj.name if hasattr(file_obj, 'name') else file_obj
    with open(path, 'r', encoding='utf-8') as f:
        return parse_document(f.read())


def process_frontmatter(doc: FrontmatterDocument, fn: Callable[[Dict[str, Any]], Any]) -> bool:
    """Apply `fn` to the document's frontmatter as a single transaction.

    `fn` mutates a copy of the metadata; the copy replaces the original only
    if `fn` returns without raising. Calls are serialized so two edits never
    interleave on the same metadata.
    """
    with _write_lock:
        staged = deepcopy(doc.metadata)
        try:
            fn(staged)
        except Exception:
            logger.exception("Frontmatter update failed; document left unchanged.")
            return False
        doc.metadata = staged
        return True
