from __future__ import annotations

from pathlib import Path

from daynotes.core.config import AppConfig, load_config
from daynotes.core.dates import CalendarDate


def test_defaults_match_classic_layout() -> None:
    config = AppConfig()
    catalog = config.daily.section_catalog()

    assert config.daily.notes_dir == Path.home() / "daily_notes"
    assert config.general.notes_dir == Path.home() / "notes"
    assert catalog.carryover == ("To do", "Tomorrow", "Reminder", "Keep")
    assert catalog.non_carryover == ("Journal",)
    assert config.daily.horizon() == CalendarDate(1970, 1, 1)


def test_load_from_toml(tmp_path: Path) -> None:
    cfg = tmp_path / "notes.toml"
    cfg.write_text(
        '[daily]\nnotes_dir = "/srv/daily"\ncarryover_sections = ["Tasks"]\n'
        'done_marker = "DONE"\nscan_horizon = "2020-01-01"\n'
        '[user]\neditor = "nano"\n',
        encoding="utf-8",
    )

    config, meta = load_config(config_path=cfg)

    assert meta.error is None
    assert meta.file_loaded
    assert config.daily.notes_dir == Path("/srv/daily")
    assert config.daily.section_catalog().carryover == ("Tasks",)
    assert config.daily.section_catalog().done_marker == "DONE"
    assert config.daily.horizon() == CalendarDate(2020, 1, 1)
    assert config.user.editor == "nano"


def test_load_from_json(tmp_path: Path) -> None:
    cfg = tmp_path / "notes.json"
    cfg.write_text('{"general": {"notes_dir": "/srv/notes"}}', encoding="utf-8")

    config, meta = load_config(config_path=cfg)

    assert meta.error is None
    assert config.general.notes_dir == Path("/srv/notes")


def test_env_overrides_file(tmp_path: Path) -> None:
    cfg = tmp_path / "notes.toml"
    cfg.write_text('[user]\neditor = "nano"\n', encoding="utf-8")

    config, meta = load_config(config_path=cfg, env={"NOTES_USER__EDITOR": "hx"})

    assert config.user.editor == "hx"
    assert "user.editor" in meta.env_overrides


def test_broken_file_falls_back_to_defaults(tmp_path: Path) -> None:
    cfg = tmp_path / "notes.toml"
    cfg.write_text("[daily\nnotes_dir = ", encoding="utf-8")

    config, meta = load_config(config_path=cfg)

    assert meta.error is not None
    assert "Syntax error" in meta.error
    assert config.daily.section_catalog().carryover[0] == "To do"


def test_invalid_horizon_is_reported(tmp_path: Path) -> None:
    cfg = tmp_path / "notes.toml"
    cfg.write_text('[daily]\nscan_horizon = "long ago"\n', encoding="utf-8")

    config, meta = load_config(config_path=cfg)

    assert meta.error is not None
    assert config.daily.horizon() == CalendarDate(1970, 1, 1)


def test_missing_file_is_not_an_error(tmp_path: Path) -> None:
    config, meta = load_config(config_path=tmp_path / "absent.toml")
    assert meta.error is None
    assert not meta.file_loaded
    assert isinstance(config, AppConfig)
