from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Callable

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT / "src") not in sys.path:
    sys.path.insert(0, str(ROOT / "src"))
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


import pytest

from jsondts.json_types import JSONValue


@pytest.fixture
def write_documents(tmp_path: Path) -> Callable[[dict[str, JSONValue]], Path]:
    def _write(documents: dict[str, JSONValue]) -> Path:
        input_dir = tmp_path / "input"
        for relative, value in documents.items():
            path = input_dir / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(value), encoding="utf-8")
        input_dir.mkdir(parents=True, exist_ok=True)
        return input_dir

    return _write


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    return tmp_path / "output"
