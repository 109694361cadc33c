import pytest

from backseat.config import BackseatConfig, load_config
from backseat.core.errors import ConfigError


def test_no_path_gives_defaults():
    config = load_config()
    assert config == BackseatConfig()
    assert config.suffix_length == 9
    assert config.separator == "; "


def test_load_yaml(tmp_path):
    path = tmp_path / "backseat.yaml"
    path.write_text(
        'channel: "#backseat"\n'
        "nick: streamer\n"
        "password: hunter2\n"
        'glyph: "*"\n'
        "suffix_length: 0\n"
        "log_level: debug\n",
        encoding="utf-8",
    )
    config = load_config(path)
    assert config.channel == "#backseat"
    assert config.nick == "streamer"
    assert config.glyph == "*"
    assert config.suffix_length == 0
    assert config.log_level == "DEBUG"


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == BackseatConfig()


@pytest.mark.parametrize("body", [
    "unknown_key: 1\n",
    "suffix_length: nine\n",
    "suffix_length: true\n",
    "suffix_length: -1\n",
    "glyph: 5\n",
    'glyph: ""\n',
    "log_level: LOUD\n",
    "- just\n- a list\n",
    "glyph: [unclosed\n",
])
def test_invalid_config(tmp_path, body):
    path = tmp_path / "bad.yaml"
    path.write_text(body, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(path)


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "nope.yaml")
