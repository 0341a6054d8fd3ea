from pathlib import Path

import pytest

from acl_policy.config_loader import ParserSettings, load_parser_settings
from acl_policy.exceptions import ConfigLoadError


def test_defaults_without_path() -> None:
    settings = load_parser_settings(None)
    assert settings == ParserSettings()
    assert settings.suggestion_cutoff == 0.6
    assert settings.warn_on_extra_policy_blocks is True
    assert settings.encoding == "utf-8"


def test_load_from_yaml(tmp_path: Path) -> None:
    path = tmp_path / "settings.yaml"
    path.write_text("suggestion_cutoff: 0.8\nwarn_on_extra_policy_blocks: false\nencoding: latin-1\n")
    settings = load_parser_settings(path)
    assert settings.suggestion_cutoff == 0.8
    assert settings.warn_on_extra_policy_blocks is False
    assert settings.encoding == "latin-1"


def test_empty_file_gives_defaults(tmp_path: Path) -> None:
    path = tmp_path / "settings.yaml"
    path.write_text("")
    assert load_parser_settings(path) == ParserSettings()


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigLoadError) as exc_info:
        load_parser_settings(tmp_path / "nope.yaml")
    assert exc_info.value.file_name == "nope.yaml"
    assert exc_info.value.reason == "File not found"


def test_invalid_yaml(tmp_path: Path) -> None:
    path = tmp_path / "settings.yaml"
    path.write_text("suggestion_cutoff: [0.5\n")
    with pytest.raises(ConfigLoadError, match="Invalid YAML"):
        load_parser_settings(path)


def test_non_mapping(tmp_path: Path) -> None:
    path = tmp_path / "settings.yaml"
    path.write_text("- 1\n- 2\n")
    with pytest.raises(ConfigLoadError, match="Expected a mapping"):
        load_parser_settings(path)


@pytest.mark.parametrize(
    "content",
    [
        "suggestion_cutoff: 1.5\n",
        "unknown_setting: true\n",
        "encoding: not-a-codec\n",
    ],
)
def test_invalid_values(tmp_path: Path, content: str) -> None:
    path = tmp_path / "settings.yaml"
    path.write_text(content)
    with pytest.raises(ConfigLoadError):
        load_parser_settings(path)
