"""
json_exporter.py
Structured JSON exporter for built FamilyNode forests.

This exporter:
- Converts nodes to nested dictionaries (NOT strings)
- Emits the spouse as a flat member dict, so the back-link never recurses
- Is deterministic: child order is the builder's order
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from family_tree.logging import get_logger
from family_tree.models import FamilyNode

log = get_logger(__name__)


def node_to_dict(node: FamilyNode) -> Dict[str, Any]:
    """
    Convert one couple node (and its descendants) into a JSON-safe dict.

    Shape:
        {**member fields, "spouse": {**member fields} | None, "children": [...]}
    """
    out = node.member.to_dict()
    out["spouse"] = node.spouse.member.to_dict() if node.spouse is not None else None
    out["children"] = [node_to_dict(child) for child in node.children]
    return out


def forest_to_dicts(forest: Iterable[FamilyNode]) -> List[Dict[str, Any]]:
    return [node_to_dict(root) for root in forest]


def serialize_forest_to_json_string(
    forest: Iterable[FamilyNode],
    indent: Optional[int] = 2,
) -> str:
    if indent is None:
        return json.dumps(forest_to_dicts(forest), separators=(",", ":"), ensure_ascii=False)
    return json.dumps(forest_to_dicts(forest), indent=indent, ensure_ascii=False)


def export_forest_json(
    forest: List[FamilyNode],
    output_path: str | Path,
    indent: Optional[int] = 2,
) -> None:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    log.info("Exporting forest JSON to: %s (roots=%d)", output_path, len(forest))

    json_str = serialize_forest_to_json_string(forest, indent=indent)

    with output_path.open("w", encoding="utf-8") as f:
        f.write(json_str)

    size_bytes = output_path.stat().st_size
    log.info("JSON export complete. size=%d bytes", size_bytes)
