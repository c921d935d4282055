from __future__ import annotations
import importlib.util
import json
from pathlib import Path

import pandas as pd
import pytest

ROOT = Path(__file__).resolve().parents[1]


def load_module(name: str, path: Path):
    spec = importlib.util.spec_from_file_location(name, path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


data_tool = load_module("happiness_data_tool", ROOT / "src" / "data" / "data.py")
validator = load_module("validate_happiness_data", ROOT / "scripts" / "validate_happiness_data.py")


def test_build_dataset_sorts_and_keeps_text_scores():
    df = pd.DataFrame({
        "Country name": ["Denmark", "Finland", "Atlantis", "Finland"],
        "Ladder score": [7.646, 7.809, None, 7.0],
    })
    out = data_tool.build_dataset(df)
    assert out == {"data": [
        {"name": "Finland", "happinessScore": "7.809"},
        {"name": "Denmark", "happinessScore": "7.646"},
    ]}


def test_build_dataset_needs_known_columns():
    with pytest.raises(ValueError):
        data_tool.build_dataset(pd.DataFrame({"foo": [1]}))


def test_main_writes_json(tmp_path):
    src = tmp_path / "whr.csv"
    pd.DataFrame({"Country": ["Norway"], "Score": ["7.488"]}).to_csv(src, index=False)
    out = tmp_path / "static" / "happiest_countries.json"
    assert data_tool.main([str(src), str(out)]) == 0
    assert json.loads(out.read_text(encoding="utf-8")) == {"data": [{"name": "Norway", "happinessScore": "7.488"}]}


def test_shipped_dataset_is_valid():
    path = ROOT / "src" / "app" / "static" / "data" / "happiest_countries.json"
    meta = validator.summarize(json.loads(path.read_text(encoding="utf-8")))
    assert meta["countries"] == meta["rows"] > 0
    assert meta["dropped_rows"] == 0
    assert meta["duplicate_names"] == []
    assert meta["out_of_range"] == []


def test_validator_flags_problems(tmp_path, capsys):
    path = tmp_path / "h.json"
    path.write_text(json.dumps({"data": [
        {"name": "A", "happinessScore": "7"},
        {"name": "A", "happinessScore": "6"},
        {"name": "B", "happinessScore": "x"},
    ]}), encoding="utf-8")
    assert validator.main(["--in_json", str(path)]) == 0
    printed = capsys.readouterr().out
    assert '"duplicate_names": [\n    "A"\n  ]' in printed
    assert "[WARN]" in printed


def test_validator_fails_on_empty_dataset(tmp_path):
    path = tmp_path / "h.json"
    path.write_text(json.dumps({"data": []}), encoding="utf-8")
    assert validator.main(["--in_json", str(path)]) == 1


@pytest.mark.parametrize("content", ["[]", '"just text"', '{"rows": []}'])
def test_validator_exits_with_message_on_wrong_shape(tmp_path, content):
    path = tmp_path / "h.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(SystemExit) as info:
        validator.main(["--in_json", str(path)])
    assert "[ERROR]" in str(info.value.code)
