"""Tests for parser configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from stream_parser.config import (
    CONFIG_ENV_VAR,
    ParserConfig,
    ParserConfigError,
    default_config_path,
    load_parser_config,
)


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults_without_file() -> None:
    config = load_parser_config(None)

    assert config == ParserConfig(agent_id="unknown", format_hint=None, max_line_length=None)


def test_missing_file_uses_defaults(tmp_path: Path) -> None:
    assert load_parser_config(tmp_path / "absent.yaml") == ParserConfig()


def test_loads_section(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "parser.yaml",
        "stream_parser:\n"
        "  agent_id: worker-2\n"
        "  format: claude\n"
        "  max_line_length: 4096\n",
    )

    assert load_parser_config(path) == ParserConfig(
        agent_id="worker-2",
        format_hint="claude",
        max_line_length=4096,
    )


def test_file_without_section(tmp_path: Path) -> None:
    path = _write(tmp_path / "other.yaml", "dashboard:\n  port: 9000\n")

    assert load_parser_config(path) == ParserConfig()


def test_empty_file(tmp_path: Path) -> None:
    assert load_parser_config(_write(tmp_path / "empty.yaml", "")) == ParserConfig()


def test_zero_limit_means_unlimited(tmp_path: Path) -> None:
    path = _write(tmp_path / "p.yaml", "stream_parser:\n  max_line_length: 0\n")

    assert load_parser_config(path).max_line_length is None


@pytest.mark.parametrize(
    "text",
    [
        "stream_parser: [1, 2]\n",
        "stream_parser:\n  agent_id: 12\n",
        "stream_parser:\n  format: [python]\n",
        "stream_parser:\n  max_line_length: -1\n",
        "stream_parser:\n  max_line_length: lots\n",
        "stream_parser:\n  max_line_length: true\n",
        "- just\n- a list\n",
        "stream_parser: {agent_id: [unclosed\n",
    ],
)
def test_invalid_config_raises(tmp_path: Path, text: str) -> None:
    path = _write(tmp_path / "bad.yaml", text)

    with pytest.raises(ParserConfigError):
        load_parser_config(path)


# --- overrides ---


def test_merged_overrides_only_given_values() -> None:
    base = ParserConfig(agent_id="from-file", format_hint="python", max_line_length=100)

    merged = base.merged(agent_id="from-cli")

    assert merged == ParserConfig(agent_id="from-cli", format_hint="python", max_line_length=100)
    assert base.agent_id == "from-file"


def test_merged_zero_limit_disables() -> None:
    assert ParserConfig(max_line_length=100).merged(max_line_length=0).max_line_length is None


# --- default path ---


def test_default_path_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    target = tmp_path / "custom.yaml"
    monkeypatch.setenv(CONFIG_ENV_VAR, str(target))

    assert default_config_path() == target


def test_default_path_in_home(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.setattr(Path, "home", lambda: tmp_path)

    assert default_config_path() is None

    config_file = tmp_path / ".mission-control" / "stream-parser.yaml"
    config_file.parent.mkdir()
    config_file.write_text("stream_parser: {}\n", encoding="utf-8")

    assert default_config_path() == config_file
