"""Tests for builds/service.py module.

Runs the whole pipeline with mocked subprocess calls.
"""

import io
import os
from unittest.mock import MagicMock, patch

import pytest
from rich.console import Console

from xgo.builds.paths import PathResolutionError
from xgo.builds.service import BuildFailedError, CompileResult, cross_compile
from xgo.docker import DockerUnavailableError, ImagePullError, ImageQueryError
from xgo.types import BuildRequest

LISTING = "karalabe/xgo-latest   latest   sha256:0123\n"


def ok(stdout: str = "") -> MagicMock:
    return MagicMock(returncode=0, stdout=stdout, stderr="")


def commands(mock_run: MagicMock) -> list[list[str]]:
    return [c[0][0] for c in mock_run.call_args_list]


class TestCrossCompile:
    """Tests for cross_compile."""

    def test_image_present(self, settings):
        """Should probe, query and run without pulling."""
        request = BuildRequest(import_path="github.com/me/proj")

        with patch("subprocess.run") as mock_run:
            mock_run.side_effect = [ok(), ok(LISTING), ok()]
            result = cross_compile(request, settings, workdir="/work")

        cmds = commands(mock_run)
        assert cmds[0] == ["docker", "version"]
        assert cmds[1] == ["docker", "images", "--no-trunc"]
        assert cmds[2][:2] == ["docker", "run"]
        assert not any(c[1] == "pull" for c in cmds)

        assert isinstance(result, CompileResult)
        assert result.pulled is False
        assert result.image == "karalabe/xgo-latest"
        assert result.import_path == "github.com/me/proj"
        assert result.command == cmds[2]

    def test_image_pulled(self, settings):
        """Should pull a missing image before building."""
        request = BuildRequest(import_path="github.com/me/proj", go_version="1.5.1")

        with patch("subprocess.run") as mock_run:
            mock_run.side_effect = [ok(), ok(LISTING), ok(), ok()]
            result = cross_compile(request, settings, workdir="/work")

        cmds = commands(mock_run)
        assert cmds[2] == ["docker", "pull", "karalabe/xgo-1.5.1"]
        assert cmds[3][-2:] == ["karalabe/xgo-1.5.1", "github.com/me/proj"]
        assert result.pulled is True

    def test_custom_image(self, settings):
        request = BuildRequest(import_path="x", image="me/xgo:dev")

        with patch("subprocess.run") as mock_run:
            mock_run.side_effect = [ok(), ok("me/xgo:dev"), ok()]
            result = cross_compile(request, settings, workdir="/work")

        assert result.image == "me/xgo:dev"
        assert commands(mock_run)[2][-2] == "me/xgo:dev"

    def test_local_package(self, settings, gopath):
        """A local directory is resolved and its GOPATH mounted."""
        pkg = gopath / "src" / "github.com" / "me" / "proj"
        pkg.mkdir(parents=True)
        request = BuildRequest(import_path=str(pkg))

        with patch("subprocess.run") as mock_run:
            mock_run.side_effect = [ok(), ok(LISTING), ok()]
            result = cross_compile(request, settings, workdir="/work")

        run_cmd = commands(mock_run)[2]
        assert run_cmd[-1] == "github.com/me/proj"
        assert f"{gopath / 'src'}:/ext-go/0/src:ro" in run_cmd
        assert "EXT_GOPATH=/ext-go/0" in run_cmd
        assert len(result.mounts) == 1

    def test_defaults_to_cwd(self, settings, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        request = BuildRequest(import_path="x")

        with patch("subprocess.run") as mock_run:
            mock_run.side_effect = [ok(), ok(LISTING), ok()]
            result = cross_compile(request, settings)

        assert f"{os.getcwd()}:/build" in result.command

    def test_build_failure(self, settings):
        """A failing build propagates its exit status."""
        request = BuildRequest(import_path="github.com/me/proj")

        with patch("subprocess.run") as mock_run:
            mock_run.side_effect = [ok(), ok(LISTING), MagicMock(returncode=2)]

            with pytest.raises(BuildFailedError) as exc_info:
                cross_compile(request, settings, workdir="/work")

        assert exc_info.value.code == "build_failed"
        assert exc_info.value.exit_code == 2

    def test_killed_build_exits_one(self, settings):
        """A signal-terminated build still fails with a positive status."""
        request = BuildRequest(import_path="x")

        with patch("subprocess.run") as mock_run:
            mock_run.side_effect = [ok(), ok(LISTING), MagicMock(returncode=-9)]

            with pytest.raises(BuildFailedError) as exc_info:
                cross_compile(request, settings, workdir="/work")

        assert exc_info.value.exit_code == 1

    def test_docker_missing_stops_pipeline(self, settings):
        request = BuildRequest(import_path="x")

        with patch("subprocess.run") as mock_run:
            mock_run.side_effect = FileNotFoundError("docker")

            with pytest.raises(DockerUnavailableError):
                cross_compile(request, settings, workdir="/work")

        assert mock_run.call_count == 1

    def test_image_query_failure(self, settings):
        request = BuildRequest(import_path="x")

        with patch("subprocess.run") as mock_run:
            mock_run.side_effect = [ok(), MagicMock(returncode=1, stdout="", stderr="")]

            with pytest.raises(ImageQueryError):
                cross_compile(request, settings, workdir="/work")

    def test_image_pull_failure(self, settings):
        request = BuildRequest(import_path="x")

        with patch("subprocess.run") as mock_run:
            mock_run.side_effect = [ok(), ok(""), MagicMock(returncode=1)]

            with pytest.raises(ImagePullError):
                cross_compile(request, settings, workdir="/work")

        assert mock_run.call_count == 3

    def test_bad_local_path_never_runs(self, settings, tmp_path):
        """Path resolution failures abort before the build starts."""
        request = BuildRequest(import_path=str(tmp_path / "missing"))

        with patch("subprocess.run") as mock_run:
            mock_run.side_effect = [ok(), ok(LISTING)]

            with pytest.raises(PathResolutionError):
                cross_compile(request, settings, workdir="/work")

        assert mock_run.call_count == 2

    def test_progress_output(self, settings):
        console = Console(file=io.StringIO(), record=True, width=200)
        request = BuildRequest(import_path="github.com/me/proj")

        with patch("subprocess.run") as mock_run:
            mock_run.side_effect = [ok(), ok(LISTING), ok()]
            cross_compile(request, settings, console=console, workdir="/work")

        text = console.export_text()
        assert "Checking docker installation..." in text
        assert "found." in text
        assert "Cross compiling github.com/me/proj..." in text

    def test_progress_shows_brackets_literally(self, settings):
        """Import paths are printed verbatim, not as console markup."""
        console = Console(file=io.StringIO(), record=True, width=200)
        request = BuildRequest(import_path="me/[bold]x")

        with patch("subprocess.run") as mock_run:
            mock_run.side_effect = [ok(), ok(LISTING), ok()]
            cross_compile(request, settings, console=console, workdir="/work")

        assert "Cross compiling me/[bold]x..." in console.export_text()
