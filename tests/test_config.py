import json
import logging
from pathlib import Path

from questlang.core import config
from questlang.core.config import QuestLangConfig, load_config, save_config
from questlang.core.logging_config import configure_logging, configure_logging_from_config


def test_load_config_defaults_when_missing(tmp_path: Path) -> None:
    assert load_config(tmp_path / "missing.json") == QuestLangConfig()


def test_load_config_defaults_on_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")

    assert load_config(path) == QuestLangConfig()


def test_load_config_defaults_on_non_object(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("[1, 2]", encoding="utf-8")

    assert load_config(path) == QuestLangConfig()


def test_load_config_normalizes_values(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps({"max_paths": 50, "max_path_depth": -1, "log_level": "debug"}),
        encoding="utf-8",
    )

    loaded = load_config(path)

    assert loaded.max_paths == 50
    assert loaded.max_path_depth is None
    assert loaded.log_level == "DEBUG"


def test_invalid_guard_types_become_unbounded() -> None:
    loaded = config.config_from_mapping({"max_paths": True, "max_path_depth": "3", "log_level": "loud"})

    assert loaded == QuestLangConfig()


def test_save_and_reload_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "config.json"
    original = QuestLangConfig(max_paths=10, max_path_depth=20, log_level="INFO")

    save_config(original, path)

    assert load_config(path) == original


def test_default_config_path_under_user_dir(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setattr(config, "get_user_data_dir", lambda: tmp_path)

    assert config.get_default_config_path() == tmp_path / "config.json"


def test_configure_logging_installs_handlers(tmp_path: Path) -> None:
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    log_file = tmp_path / "questlang.log"
    try:
        configure_logging("DEBUG", str(log_file))
        logging.getLogger("questlang.test").debug("hello from test")
        for handler in root.handlers:
            handler.flush()

        assert root.level == logging.DEBUG
        assert len(root.handlers) == 2
        assert "hello from test" in log_file.read_text(encoding="utf-8")
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers = saved_handlers
        root.setLevel(saved_level)


def test_constructor_normalizes_guards_and_level() -> None:
    built = QuestLangConfig(max_paths=0, max_path_depth=-5, log_level="info")

    assert built.max_paths is None
    assert built.max_path_depth is None
    assert built.log_level == "INFO"


def test_configure_logging_from_config_uses_stored_level() -> None:
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    try:
        configure_logging_from_config(QuestLangConfig(log_level="error"))

        assert root.level == logging.ERROR
        assert len(root.handlers) == 1
    finally:
        root.handlers = saved_handlers
        root.setLevel(saved_level)
