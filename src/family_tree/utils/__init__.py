# src/family_tree/utils/__init__.py

from .pathing import (
    default_data_file,
    project_root,
    resolve_project_path,
    tests_data_path,
)

__all__ = [
    "default_data_file",
    "project_root",
    "resolve_project_path",
    "tests_data_path",
]
