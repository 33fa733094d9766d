from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from docfetch.config import CONFIG_ENV_VAR, load_config, resolve_config_path


def test_load_config_without_file_uses_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    config = load_config()
    assert config.workers == 10


def test_load_config_reads_yaml_and_applies_overrides(tmp_path: Path) -> None:
    path = tmp_path / "docfetch.yaml"
    path.write_text(
        yaml.safe_dump({"workers": 4, "output_dir": "out", "proxy": None, "timeout": 12}),
        encoding="utf-8",
    )
    config = load_config(path, workers=2, output_dir=None)
    assert config.workers == 2
    assert config.output_dir == Path("out")
    assert config.proxy is None
    assert config.timeout == 12


def test_load_config_reads_json(tmp_path: Path) -> None:
    path = tmp_path / "docfetch.json"
    path.write_text(json.dumps({"endpoint_root": "https://example.org/doc?id="}), encoding="utf-8")
    assert load_config(path).endpoint_root == "https://example.org/doc?id="


def test_load_config_uses_environment_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "env.yml"
    path.write_text("workers: 7\n", encoding="utf-8")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
    assert resolve_config_path() == path
    assert load_config().workers == 7


def test_load_config_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "absent.yaml")


def test_load_config_rejects_non_mapping(tmp_path: Path) -> None:
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)


def test_load_config_rejects_unknown_format(tmp_path: Path) -> None:
    path = tmp_path / "docfetch.toml"
    path.write_text("workers = 3\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)


def test_load_config_validates_values(tmp_path: Path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("workers: 0\n", encoding="utf-8")
    with pytest.raises(ValidationError):
        load_config(path)


def test_load_config_malformed_yaml_is_value_error(tmp_path: Path) -> None:
    path = tmp_path / "broken.yaml"
    path.write_text("workers: [1, 2\n", encoding="utf-8")
    with pytest.raises(ValueError, match="broken.yaml"):
        load_config(path)


def test_load_config_rejects_null_paths(tmp_path: Path) -> None:
    path = tmp_path / "nulls.yaml"
    path.write_text("input_path: null\n", encoding="utf-8")
    with pytest.raises(ValidationError):
        load_config(path)
