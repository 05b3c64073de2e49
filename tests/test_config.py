"""Tests for board configuration loading."""
import pytest

from pkg.board.config import BoardConfig, ConfigError
from pkg.board.markup import DEFAULT_MARKUP


class TestBoardConfig:

    def test_defaults_when_missing(self, tmp_path):
        cfg = BoardConfig.load(str(tmp_path / "absent.yaml"))
        assert cfg.host == "127.0.0.1"
        assert cfg.port == 3000
        assert cfg.load_markup() == DEFAULT_MARKUP

    def test_loads_yaml(self, tmp_path):
        path = tmp_path / "board.yaml"
        path.write_text("port: '8080'\nlog_level: debug\nunknown_key: 1\n")
        cfg = BoardConfig.load(str(path))
        assert cfg.port == 8080
        assert cfg.log_level == "DEBUG"
        assert not hasattr(cfg, "unknown_key")

    def test_env_var_points_at_config(self, tmp_path, monkeypatch):
        path = tmp_path / "other.yaml"
        path.write_text("host: 0.0.0.0\n")
        monkeypatch.setenv("BOARD_CONFIG", str(path))
        assert BoardConfig.load().host == "0.0.0.0"

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "board.yaml"
        path.write_text("")
        assert BoardConfig.load(str(path)).port == 3000

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "board.yaml"
        path.write_text("port: [unclosed\n")
        with pytest.raises(ConfigError):
            BoardConfig.load(str(path))

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "board.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            BoardConfig.load(str(path))

    def test_bad_port(self, tmp_path):
        path = tmp_path / "board.yaml"
        path.write_text("port: lots\n")
        with pytest.raises(ConfigError, match="port"):
            BoardConfig.load(str(path))

    def test_api_secret_from_env(self, monkeypatch):
        cfg = BoardConfig(api_secret_env="MY_BOARD_KEY")
        monkeypatch.delenv("MY_BOARD_KEY", raising=False)
        assert cfg.api_secret == ""
        monkeypatch.setenv("MY_BOARD_KEY", " s3cret ")
        assert cfg.api_secret == "s3cret"

    def test_custom_markup_file(self, tmp_path):
        markup = tmp_path / "board.html"
        markup.write_text("<div id='app'></div>")
        assert BoardConfig(markup_path=str(markup)).load_markup() == "<div id='app'></div>"

    def test_unreadable_markup(self, tmp_path):
        with pytest.raises(ConfigError):
            BoardConfig(markup_path=str(tmp_path / "missing.html")).load_markup()
