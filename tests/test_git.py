"""Tests for git configuration handling."""

import subprocess
from pathlib import Path

import pytest

from gex.exceptions import GitCommandError, GitNotInstalledError, NotARepositoryError
from gex.git import ConfigScope, GitConfig, run_git
from gex.profile import Profile


class FakeGit:
    """Records git invocations and answers from an in-memory config."""

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self.values: dict[tuple[str, str], str] = {}
        self.fail_on: str | None = None

    def __call__(self, cmd, *args, **kwargs) -> subprocess.CompletedProcess:
        self.calls.append(cmd)
        if cmd[1:] == ["--version"]:
            return subprocess.CompletedProcess(cmd, 0, stdout="git version 2.43.0\n", stderr="")
        _, _, flag, key, *value = cmd
        if key == self.fail_on:
            return subprocess.CompletedProcess(cmd, 255, stdout="", stderr="error: could not lock config file")
        if value:
            self.values[(flag, key)] = value[0]
            return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")
        if (flag, key) in self.values:
            return subprocess.CompletedProcess(cmd, 0, stdout=self.values[(flag, key)] + "\n", stderr="")
        return subprocess.CompletedProcess(cmd, 1, stdout="", stderr="")


@pytest.fixture
def fake_git(monkeypatch) -> FakeGit:
    fake = FakeGit()
    monkeypatch.setattr("gex.git.subprocess.run", fake)
    return fake


@pytest.fixture
def repo_dir(tmp_path: Path) -> Path:
    repo = tmp_path / "repo"
    (repo / ".git").mkdir(parents=True)
    return repo


def test_config_scope_flags() -> None:
    assert ConfigScope.GLOBAL.flag == "--global"
    assert ConfigScope.LOCAL.flag == "--local"
    assert str(ConfigScope.LOCAL) == "local"


def test_run_git_returns_stripped_stdout(fake_git: FakeGit) -> None:
    assert run_git(["--version"]) == "git version 2.43.0"


def test_run_git_not_installed(monkeypatch) -> None:
    """Test that a missing executable maps to GitNotInstalledError."""
    def mock_run(*args, **kwargs):
        raise FileNotFoundError()

    monkeypatch.setattr("gex.git.subprocess.run", mock_run)

    with pytest.raises(GitNotInstalledError, match="Git is not installed"):
        run_git(["--version"])
    assert not GitConfig().is_installed()


def test_run_git_other_os_errors_propagate(monkeypatch) -> None:
    def mock_run(*args, **kwargs):
        raise PermissionError("not executable")

    monkeypatch.setattr("gex.git.subprocess.run", mock_run)

    with pytest.raises(PermissionError):
        run_git(["--version"])


def test_run_git_failure_carries_stderr(monkeypatch) -> None:
    def mock_run(cmd, *args, **kwargs):
        return subprocess.CompletedProcess(cmd, 128, stdout="", stderr="fatal: bad config\n")

    monkeypatch.setattr("gex.git.subprocess.run", mock_run)

    with pytest.raises(GitCommandError, match="fatal: bad config") as exc_info:
        run_git(["config", "--global", "user.name"])
    assert exc_info.value.returncode == 128
    assert exc_info.value.details == "fatal: bad config"


def test_set_and_get(fake_git: FakeGit, repo_dir: Path) -> None:
    git_config = GitConfig(repo_dir)

    git_config.set(ConfigScope.GLOBAL, "gex.test.value", "test123")

    assert git_config.get(ConfigScope.GLOBAL, "gex.test.value") == "test123"
    assert fake_git.calls[0] == ["git", "config", "--global", "gex.test.value", "test123"]


def test_get_missing_key_returns_none(fake_git: FakeGit, repo_dir: Path) -> None:
    assert GitConfig(repo_dir).get(ConfigScope.GLOBAL, "gex.missing") is None


def test_get_propagates_other_failures(fake_git: FakeGit, repo_dir: Path) -> None:
    fake_git.fail_on = "user.name"

    with pytest.raises(GitCommandError):
        GitConfig(repo_dir).get(ConfigScope.GLOBAL, "user.name")


def test_is_repository(tmp_path: Path, repo_dir: Path) -> None:
    assert GitConfig(repo_dir).is_repository()
    assert not GitConfig(tmp_path).is_repository()


def test_is_repository_defaults_to_cwd(repo_dir: Path, monkeypatch) -> None:
    monkeypatch.chdir(repo_dir)
    assert GitConfig().is_repository()


def test_get_identity_requires_both_values(fake_git: FakeGit, repo_dir: Path) -> None:
    git_config = GitConfig(repo_dir)
    git_config.set(ConfigScope.LOCAL, "user.name", "jdoe")

    assert git_config.get_identity(ConfigScope.LOCAL) is None

    git_config.set(ConfigScope.LOCAL, "user.email", "j@co.com")
    assert git_config.get_identity(ConfigScope.LOCAL) == ("jdoe", "j@co.com")
    assert git_config.get_identity(ConfigScope.GLOBAL) is None


def test_apply_sets_name_then_email(fake_git: FakeGit, repo_dir: Path) -> None:
    profile = Profile("work", "jdoe", "j@co.com", "id_rsa_work")

    GitConfig(repo_dir).apply(profile, ConfigScope.LOCAL)

    assert fake_git.calls == [
        ["git", "config", "--local", "user.name", "jdoe"],
        ["git", "config", "--local", "user.email", "j@co.com"],
    ]


def test_apply_local_outside_repository(fake_git: FakeGit, tmp_path: Path) -> None:
    profile = Profile("work", "jdoe", "j@co.com", "id_rsa_work")

    with pytest.raises(NotARepositoryError):
        GitConfig(tmp_path).apply(profile, ConfigScope.LOCAL)
    assert fake_git.calls == []


def test_apply_partial_failure_is_not_rolled_back(fake_git: FakeGit, repo_dir: Path) -> None:
    """Test that a failing email write leaves the username applied."""
    fake_git.fail_on = "user.email"
    profile = Profile("work", "jdoe", "j@co.com", "id_rsa_work")

    with pytest.raises(GitCommandError):
        GitConfig(repo_dir).apply(profile, ConfigScope.GLOBAL)

    assert fake_git.values == {("--global", "user.name"): "jdoe"}


def test_version(fake_git: FakeGit) -> None:
    git_config = GitConfig()
    assert git_config.version() == "git version 2.43.0"
    assert git_config.is_installed()


def test_run_git_has_no_timeout(monkeypatch) -> None:
    """Test that git calls block until git exits."""
    seen: dict = {}

    def mock_run(cmd, *args, **kwargs):
        seen.update(kwargs)
        return subprocess.CompletedProcess(cmd, 0, stdout="git version 2.43.0\n", stderr="")

    monkeypatch.setattr("gex.git.subprocess.run", mock_run)

    run_git(["--version"])

    assert "timeout" not in seen
    assert seen["capture_output"] is True
    assert seen["text"] is True
