"""
Exporter package.

Re-exports the forest JSON entry points used by the CLI.
"""

from __future__ import annotations

from .json_exporter import (
    export_forest_json,
    forest_to_dicts,
    node_to_dict,
    serialize_forest_to_json_string,
)

__all__ = [
    "export_forest_json",
    "forest_to_dicts",
    "node_to_dict",
    "serialize_forest_to_json_string",
]
