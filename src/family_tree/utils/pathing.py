# src/family_tree/utils/pathing.py

from __future__ import annotations

from pathlib import Path
from typing import Union

from family_tree.config import get_config


# This file lives at:
#   <project_root>/src/family_tree/utils/pathing.py
#
# Path(__file__).resolve().parents gives:
#   [0] .../src/family_tree/utils
#   [1] .../src/family_tree
#   [2] .../src
#   [3] .../ (project root)
_PROJECT_ROOT = Path(__file__).resolve().parents[3]


def project_root() -> Path:
    """
    Return the absolute path to the project root directory.

    The project root is defined as the directory that contains:
      - src/
      - tests/
      - config/
    """
    return _PROJECT_ROOT


def resolve_project_path(relative: Union[str, Path]) -> Path:
    """
    Resolve a path relative to the project root.

    Absolute paths are returned unchanged.
    """
    path = Path(relative)
    if path.is_absolute():
        return path
    return project_root() / path


def default_data_file() -> Path:
    """
    Return the member file named by ``paths.data_file`` in the config.
    """
    cfg = get_config()
    return resolve_project_path(cfg.paths.get("data_file") or "data/family.json")


def tests_data_path(*parts: Union[str, Path]) -> Path:
    """
    Return the absolute path to a file under tests/data/.

    Examples:
        tests_data_path("sample_family.json")
    """
    return resolve_project_path(Path("tests") / "data" / Path(*parts))
