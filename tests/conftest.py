import json
import sys
from pathlib import Path

import pytest

# Ensure the project src directory is on sys.path for test imports
PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))


@pytest.fixture
def sample_records():
    from family_tree.utils import tests_data_path

    with tests_data_path("sample_family.json").open(encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def sample_file(tmp_path, sample_records):
    path = tmp_path / "family.json"
    path.write_text(json.dumps(sample_records), encoding="utf-8")
    return path
