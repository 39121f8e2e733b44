"""Compare two versions of a statute and write the resolved text.

Usage:
    python scripts/compare_statutes.py --original current.txt --updated bill.txt
    python scripts/compare_statutes.py --original current.txt --updated bill.txt \
        --decisions decisions.json --bill HB25-1001 --output-xml out.xml

``--decisions`` is a JSON object mapping pair index to ``approved``,
``rejected`` or ``pending``; ``--edits`` maps pair index to override text.

Exit code:
    0 when every change has a decision, else 1.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from comparison.models import HighlightMode, PairKind
from comparison.resolution import history_entry
from config.settings import settings
from export.json_exporter import export_json
from export.xml_exporter import export_xml
from pipeline.compare_statutes import ComparisonPipeline
from utils.logging import configure_logging


def _load_mapping(path: Optional[str]) -> Dict[str, Any]:
    if not path:
        return {}
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise SystemExit(f"{path}: expected a JSON object keyed by pair index")
    return payload


def main() -> int:
    parser = argparse.ArgumentParser(description="Compare two statute versions")
    parser.add_argument("--original", required=True, help="path to the statute text in force")
    parser.add_argument("--updated", required=True, help="path to the proposed statute text")
    parser.add_argument("--decisions", help="JSON file of {pair index: decision}")
    parser.add_argument("--edits", help="JSON file of {pair index: override text}")
    parser.add_argument(
        "--highlight",
        action="store_true",
        help="include word-level diffs in the JSON export",
    )
    parser.add_argument("--bill", help="bill identifier for the history note, e.g. HB25-1001")
    parser.add_argument("--output-json", help="write the full review as JSON")
    parser.add_argument("--output-xml", help="write the resolved statute as XML")
    parser.add_argument("--output-text", help="write the resolved statute as plain text")
    parser.add_argument("--log-level", default=settings.log_level)
    args = parser.parse_args()

    configure_logging(args.log_level)

    original_raw = Path(args.original).read_text(encoding="utf-8")
    updated_raw = Path(args.updated).read_text(encoding="utf-8")

    pipeline = ComparisonPipeline()
    comparison = pipeline.run(args.bill or args.original, original_raw, updated_raw)
    mode = HighlightMode.HIGHLIGHT if args.highlight else None
    result = pipeline.review(
        comparison,
        decisions=_load_mapping(args.decisions),
        edits=_load_mapping(args.edits),
        mode=mode,
    )

    print(f"original: {args.original} ({len(comparison.original_paragraphs)} paragraphs)")
    print(f"updated: {args.updated} ({len(comparison.updated_paragraphs)} paragraphs)")
    print(f"pairs: {len(comparison.pairs)}")
    for kind in PairKind:
        print(f"  {kind.value}: {comparison.summary['by_kind'][kind.value]}")
    tally = result.tally
    print(f"reviewed: {tally.approved} approved, {tally.rejected} rejected, {tally.pending} pending")
    history = history_entry(result.views, args.bill)
    if history:
        print(f"history: {history}")

    if args.output_text:
        Path(args.output_text).write_text(result.final_text + "\n", encoding="utf-8")
    if args.output_json:
        export_json(comparison, result, args.output_json, metadata={"bill": args.bill})
    if args.output_xml:
        export_xml(result, args.output_xml, bill=args.bill)
    if not args.output_text and not args.output_json and not args.output_xml:
        print()
        print(result.final_text)

    return 0 if tally.all_reviewed else 1


if __name__ == "__main__":
    raise SystemExit(main())
