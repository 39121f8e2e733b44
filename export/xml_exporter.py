"""
Export the resolved statute as XML.

One ``<paragraph>`` element per final paragraph, carrying its structural
prefix and change status, followed by a ``<history>`` entry for the applied
changes. Text goes through lxml, so reserved markup characters in statute
text are escaped on serialization.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence, Union

from lxml import etree

from comparison.markers import extract_prefix
from comparison.models import Decision, PairKind, ResolutionResult
from comparison.resolution import history_entry
from utils.logging import logger


def _status(kind: PairKind, decision: Decision) -> str:
    if decision is Decision.APPROVED and kind is PairKind.MODIFIED:
        return "amended"
    if decision is Decision.APPROVED and kind is PairKind.ADDED:
        return "added"
    return "unchanged"


def build_xml(
    source: Union[ResolutionResult, Sequence[str]],
    title: Optional[str] = None,
    bill: Optional[str] = None,
) -> bytes:
    """
    Serialize a resolved statute (or a plain list of paragraphs) to XML bytes.

    Args:
        source: A ResolutionResult, or final paragraphs in order
        title: Optional statute title, written as the ``title`` attribute
        bill: Bill identifier appended to the history note
    """
    root = etree.Element("statute")
    if title:
        root.set("title", title)
    if bill:
        root.set("bill", bill)

    if isinstance(source, ResolutionResult):
        entries = [
            (view.resolved, _status(view.kind, view.decision))
            for view in source.views
            if view.included and view.resolved
        ]
        history = history_entry(source.views, bill)
    else:
        entries = [(text, None) for text in source if text and text.strip()]
        history = ""

    for text, status in entries:
        node = etree.SubElement(root, "paragraph")
        prefix = extract_prefix(text)
        if prefix:
            node.set("prefix", prefix)
        if status:
            node.set("status", status)
        node.text = text

    if history:
        etree.SubElement(root, "history").text = history

    return etree.tostring(root, xml_declaration=True, encoding="UTF-8", pretty_print=True)


def export_xml(
    source: Union[ResolutionResult, Sequence[str]],
    output_path: str | Path,
    title: Optional[str] = None,
    bill: Optional[str] = None,
) -> Path:
    output = Path(output_path)
    logger.info("Writing XML statute to %s", output)
    output.write_bytes(build_xml(source, title=title, bill=bill))
    return output
