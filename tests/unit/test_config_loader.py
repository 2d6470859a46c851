import yaml
import pytest

from src.syslogstream.config import load_yaml


def test_config__loads_valid_yaml_to_dict(tmp_path):
    p = tmp_path / "config.yaml"
    p.write_text("host: logs.example.net\nport: 6514\nfacility: local0\ntag: app\n", encoding="utf-8")
    data = load_yaml(str(p))
    assert isinstance(data, dict)
    assert data["host"] == "logs.example.net"
    assert data["port"] == 6514
    assert data["facility"] == "local0"
    assert data["tag"] == "app"


def test_config__empty_file_is_empty_mapping(tmp_path):
    p = tmp_path / "empty.yaml"
    p.write_text("", encoding="utf-8")
    assert load_yaml(str(p)) == {}


def test_config__malformed_yaml_raises_clear_error(tmp_path):
    p = tmp_path / "bad.yaml"
    p.write_text("host: x\nport: [broken\n", encoding="utf-8")  # missing closing bracket
    with pytest.raises(yaml.YAMLError):
        _ = load_yaml(str(p))


def test_config__non_mapping_document_raises_value_error(tmp_path):
    p = tmp_path / "list.yaml"
    p.write_text("- host\n- port\n", encoding="utf-8")
    with pytest.raises(ValueError):
        _ = load_yaml(str(p))


def test_config__missing_config_file_raises_clear_error(tmp_path):
    missing = tmp_path / "nope.yaml"
    with pytest.raises(FileNotFoundError):
        _ = load_yaml(str(missing))
