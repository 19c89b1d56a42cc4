import json
import logging
from pathlib import Path

import pytest

from utils import DEFAULT_SECTIONS, get_section, load_config, setup_logging


def test_load_config(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"effect": {"piece_count": 12}}))
    assert load_config(str(path)) == {"effect": {"piece_count": 12}}


def test_missing_config_is_reraised(tmp_path, caplog):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "nope.json"))
    assert "not found" in caplog.text


def test_malformed_config_is_reraised(tmp_path, caplog):
    path = tmp_path / "config.json"
    path.write_text("{ not json")
    with pytest.raises(json.JSONDecodeError):
        load_config(str(path))
    assert "decoding" in caplog.text


def test_get_section_fills_defaults():
    effect = get_section({"effect": {"style": "pink"}}, "effect")
    assert effect["style"] == "pink"
    assert effect["piece_count"] == DEFAULT_SECTIONS["effect"]["piece_count"]
    assert effect["fall_duration"] == 3.0
    assert DEFAULT_SECTIONS["effect"]["style"] == "mixed"


def test_get_section_ignores_non_object(caplog):
    with caplog.at_level(logging.WARNING):
        section = get_section({"run_control": [1, 2]}, "run_control")
    assert section == DEFAULT_SECTIONS["run_control"]
    assert "run_control" in caplog.text


def test_shipped_config_matches_defaults():
    config = load_config(str(Path(__file__).resolve().parent.parent / "config.json"))
    for name in ("effect", "visualization", "run_control"):
        assert get_section(config, name) == DEFAULT_SECTIONS[name]


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)


def test_setup_logging_creates_handlers(tmp_path, restore_root_logger):
    log_file = tmp_path / "logs" / "confetti.log"
    setup_logging({"logging": {"level": "debug", "log_file": str(log_file)}})
    root = restore_root_logger
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 2
    assert log_file.parent.is_dir()
    assert "Logging system initialized." in log_file.read_text()
