"""Unit tests for cli.config module."""

import pytest
import yaml

from src.cli.config import ConfigLoader
from src.cli.errors import ConfigError, ConfigNotFoundError
from src.models.mirror_config import MirrorConfig


def _write(tmp_path, content: str) -> str:
    path = tmp_path / "config.yaml"
    path.write_text(content, encoding="utf-8")
    return str(path)


class TestLoad:
    """Test cases for ConfigLoader.load."""

    def test_minimal_config_gets_defaults(self, tmp_path):
        config = ConfigLoader.load(_write(tmp_path, "owner: octo\nrepo: blog\n"))

        assert config == MirrorConfig(owner="octo", repo="blog")

    def test_all_fields(self, tmp_path):
        config = ConfigLoader.load(_write(tmp_path, """
owner: octo
repo: blog
branch: release
content_dir: /posts/
sync_interval: 60
excerpt_length: 200
mirror_dir: /var/lib/mirror
api_base_url: https://ghe.example.com/api/v3
request_timeout: 10
host: 0.0.0.0
port: 9000
"""))

        assert config.branch == "release"
        assert config.content_dir == "posts"
        assert config.sync_interval == 60
        assert config.port == 9000

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigNotFoundError):
            ConfigLoader.load(str(tmp_path / "absent.yaml"))

    def test_missing_required_field(self, tmp_path):
        with pytest.raises(ConfigError) as exc_info:
            ConfigLoader.load(_write(tmp_path, "owner: octo\n"))

        assert "repo" in str(exc_info.value)

    def test_empty_file(self, tmp_path):
        with pytest.raises(ConfigError):
            ConfigLoader.load(_write(tmp_path, ""))

    def test_not_a_mapping(self, tmp_path):
        with pytest.raises(ConfigError):
            ConfigLoader.load(_write(tmp_path, "- owner\n- repo\n"))

    def test_invalid_yaml(self, tmp_path):
        with pytest.raises(ConfigError):
            ConfigLoader.load(_write(tmp_path, "owner: [unclosed\n"))

    def test_unknown_field(self, tmp_path):
        with pytest.raises(ConfigError):
            ConfigLoader.load(_write(tmp_path, "owner: o\nrepo: r\ntoken: secret\n"))

    @pytest.mark.parametrize("line,field", [
        ("sync_interval: soon", "sync_interval"),
        ("sync_interval: 0", "sync_interval"),
        ("excerpt_length: -5", "excerpt_length"),
        ("request_timeout: true", "request_timeout"),
        ("port: 70000", "port"),
        ("branch: ''", "branch"),
        ("host: 127", "host"),
    ])
    def test_invalid_values(self, tmp_path, line, field):
        with pytest.raises(ConfigError) as exc_info:
            ConfigLoader.load(_write(tmp_path, f"owner: o\nrepo: r\n{line}\n"))

        assert exc_info.value.config_field == field

    def test_empty_content_dir_allowed(self, tmp_path):
        config = ConfigLoader.load(_write(tmp_path, "owner: o\nrepo: r\ncontent_dir: ''\n"))
        assert config.content_dir == ""


class TestSave:
    """Test cases for ConfigLoader.save."""

    def test_round_trip(self, tmp_path):
        path = str(tmp_path / ".markdown-mirror" / "config.yaml")
        original = MirrorConfig(owner="octo", repo="blog", branch="dev", sync_interval=42)

        ConfigLoader.save(path, original)

        assert ConfigLoader.load(path) == original

    def test_token_never_written(self, tmp_path):
        path = tmp_path / "config.yaml"

        ConfigLoader.save(str(path), MirrorConfig(owner="octo", repo="blog"))

        data = yaml.safe_load(path.read_text(encoding="utf-8"))
        assert "token" not in data
        assert data["owner"] == "octo"
