"""Unit tests for main CLI entry point (main.py).

Tests the Typer CLI application using CliRunner.
"""

import logging
from unittest.mock import MagicMock, Mock, patch

from typer.testing import CliRunner

from src.cache.snapshot_cache import SnapshotCache
from src.cli.config import ConfigLoader
from src.cli.main import GETTING_STARTED_MESSAGE, _configure_logging, app
from src.cli.models import ExitCode
from src.github_client.errors import (
    APIUnreachableError,
    InvalidCredentialsError,
    ListFailedError,
)
from src.models.mirror_config import MirrorConfig
from src.models.post import Post
from src.models.sync_result import SyncResult
from src.sync.errors import NothingRenderedError

runner = CliRunner()


def _config_file(tmp_path) -> str:
    path = str(tmp_path / "config.yaml")
    ConfigLoader.save(path, MirrorConfig(owner="octo", repo="blog"))
    return path


def _mock_service(result: SyncResult) -> Mock:
    service = Mock()
    service.run_sync.return_value = result
    service.bootstrap_from_disk.return_value = False
    service.cache = SnapshotCache()
    return service


class TestConfigureLogging:
    """Test cases for _configure_logging function."""

    def test_verbosity_0_sets_warning_level(self):
        with patch('logging.getLogger') as mock_get_logger:
            mock_logger = MagicMock()
            mock_get_logger.return_value = mock_logger

            _configure_logging(0)

            mock_get_logger.assert_called_with("src")
            mock_logger.setLevel.assert_called_with(logging.WARNING)

    def test_verbosity_2_sets_debug_level(self):
        with patch('logging.getLogger') as mock_get_logger:
            mock_logger = MagicMock()
            mock_get_logger.return_value = mock_logger

            _configure_logging(2)

            mock_logger.setLevel.assert_called_with(logging.DEBUG)

    def test_logdir_creates_log_file(self, tmp_path):
        with patch('logging.getLogger') as mock_get_logger:
            mock_get_logger.return_value = MagicMock()

            _configure_logging(1, str(tmp_path / "logs"))

        assert list((tmp_path / "logs").glob("markdown-mirror_*.log"))


class TestVersionAndHelp:
    """Test cases for informational options."""

    def test_version(self):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "markdown-mirror version" in result.output

    def test_missing_config_shows_getting_started(self, tmp_path):
        result = runner.invoke(app, ["--config", str(tmp_path / "absent.yaml")])

        assert result.exit_code == ExitCode.GENERAL_ERROR
        assert GETTING_STARTED_MESSAGE.splitlines()[0] in result.output


class TestInit:
    """Test cases for --init."""

    def test_init_writes_config(self, tmp_path):
        path = tmp_path / ".markdown-mirror" / "config.yaml"

        result = runner.invoke(app, [
            "--init", "--owner", "octo", "--repo", "blog",
            "--branch", "dev", "--content-dir", "posts/",
            "--config", str(path),
        ])

        assert result.exit_code == ExitCode.SUCCESS
        config = ConfigLoader.load(str(path))
        assert config.repository_label == "octo/blog@dev"
        assert config.content_dir == "posts"

    def test_init_requires_repo(self, tmp_path):
        result = runner.invoke(app, [
            "--init", "--owner", "octo", "--config", str(tmp_path / "c.yaml"),
        ])

        assert result.exit_code == ExitCode.GENERAL_ERROR
        assert "--repo" in result.output
        assert not (tmp_path / "c.yaml").exists()

    def test_owner_without_init(self, tmp_path):
        result = runner.invoke(app, [
            "--owner", "octo", "--repo", "blog", "--config", str(tmp_path / "c.yaml"),
        ])

        assert result.exit_code == ExitCode.GENERAL_ERROR
        assert "--init" in result.output


class TestOnce:
    """Test cases for --once."""

    @patch('src.cli.main._build_service')
    def test_success(self, mock_build, tmp_path):
        post = Post(slug="b", title="Hello", excerpt="World", html="<p>World</p>", source_path="data/b.md")
        service = _mock_service(SyncResult(posts=[post], candidate_count=1))
        mock_build.return_value = service

        result = runner.invoke(app, ["--once", "--config", _config_file(tmp_path)])

        assert result.exit_code == ExitCode.SUCCESS
        assert "Sync completed successfully" in result.output
        service.run_sync.assert_called_once()
        service.client.close.assert_called_once()

    @patch('src.cli.main._build_service')
    def test_failed_pass(self, mock_build, tmp_path):
        mock_build.return_value = _mock_service(SyncResult(error=NothingRenderedError(2)))

        result = runner.invoke(app, ["--once", "--config", _config_file(tmp_path)])

        assert result.exit_code == ExitCode.SYNC_FAILED

    @patch('src.cli.main._build_service')
    def test_auth_failure(self, mock_build, tmp_path):
        error = ListFailedError("octo", "blog", "main", "bad credentials")
        error.__cause__ = InvalidCredentialsError("/repos/octo/blog/git/trees/main")
        mock_build.return_value = _mock_service(SyncResult(error=error))

        result = runner.invoke(app, ["--once", "--config", _config_file(tmp_path)])

        assert result.exit_code == ExitCode.AUTH_ERROR

    def test_invalid_config(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("owner: octo\n", encoding="utf-8")

        result = runner.invoke(app, ["--once", "--config", str(path)])

        assert result.exit_code == ExitCode.GENERAL_ERROR
        assert "repo" in result.output


class TestServe:
    """Test cases for the default sync-and-serve mode."""

    @patch('src.cli.main.uvicorn.run')
    @patch('src.cli.main.SyncScheduler')
    @patch('src.cli.main._build_service')
    def test_serve_wires_scheduler_and_server(self, mock_build, mock_scheduler_cls, mock_run, tmp_path):
        service = _mock_service(SyncResult())
        mock_build.return_value = service
        scheduler = mock_scheduler_cls.return_value

        result = runner.invoke(app, [
            "--config", _config_file(tmp_path), "--host", "0.0.0.0", "--port", "9001",
        ])

        assert result.exit_code == 0
        service.bootstrap_from_disk.assert_called_once()
        mock_scheduler_cls.assert_called_once()
        assert mock_scheduler_cls.call_args.args[1] == 300
        scheduler.start.assert_called_once()
        scheduler.stop.assert_called_once()
        assert mock_run.call_args.kwargs['host'] == "0.0.0.0"
        assert mock_run.call_args.kwargs['port'] == 9001
        assert mock_run.call_args.args[0].state.cache is service.cache

    @patch('src.cli.main.uvicorn.run', side_effect=KeyboardInterrupt)
    @patch('src.cli.main.SyncScheduler')
    @patch('src.cli.main._build_service')
    def test_scheduler_stopped_when_server_exits(self, mock_build, mock_scheduler_cls, mock_run, tmp_path):
        mock_build.return_value = _mock_service(SyncResult())

        runner.invoke(app, ["--config", _config_file(tmp_path)])

        mock_scheduler_cls.return_value.stop.assert_called_once()


class TestExitCodeMapping:
    """Test cases for ExitCode.for_error."""

    def test_network_error(self):
        error = ListFailedError("o", "r", "b", "unreachable")
        error.__cause__ = APIUnreachableError("https://api.github.com", "timed out")

        assert ExitCode.for_error(error) == ExitCode.NETWORK_ERROR

    def test_plain_pass_error(self):
        assert ExitCode.for_error(NothingRenderedError(1)) == ExitCode.SYNC_FAILED
