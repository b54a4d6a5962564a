"""Git configuration management."""

import logging
import subprocess
from enum import Enum
from pathlib import Path

from .exceptions import GitCommandError, GitNotInstalledError, NotARepositoryError
from .profile import Profile

logger = logging.getLogger(__name__)

# `git config <key>` exits with 1 when the key is not set
KEY_NOT_SET_EXIT_CODE = 1


class ConfigScope(Enum):
    """Where a git setting applies."""
    GLOBAL = "global"
    LOCAL = "local"

    @property
    def flag(self) -> str:
        return f"--{self.value}"

    def __str__(self) -> str:
        return self.value


def run_git(args: list[str], cwd: Path | None = None) -> str:
    """Run git and return its stripped stdout.

    Blocks until git exits; there is no timeout.

    Raises:
        GitNotInstalledError: If the git executable is missing
        GitCommandError: If git exits with a non-zero status
    """
    cmd = ["git", *args]
    logger.debug(f"Running {' '.join(cmd)}")
    try:
        result = subprocess.run(
            cmd,
            cwd=cwd,
            capture_output=True,
            text=True,
        )
    except FileNotFoundError:
        logger.error("Git not found")
        raise GitNotInstalledError() from None

    if result.returncode != 0:
        stderr = result.stderr.strip()
        logger.debug(f"git exited with {result.returncode}: {stderr}")
        raise GitCommandError(
            f"Git command failed: {stderr}" if stderr else "Git command failed",
            details=stderr or None,
            returncode=result.returncode,
        )
    return result.stdout.strip()


class GitConfig:
    """Reads and writes scoped git configuration.

    Local-scope operations run against ``repo_dir``, which defaults to the
    current working directory at call time.
    """

    def __init__(self, repo_dir: Path | None = None) -> None:
        self.repo_dir = Path(repo_dir) if repo_dir is not None else None

    @property
    def cwd(self) -> Path:
        return self.repo_dir if self.repo_dir is not None else Path.cwd()

    def set(self, scope: ConfigScope, key: str, value: str) -> None:
        run_git(["config", scope.flag, key, value], cwd=self.cwd)
        logger.debug(f"Set {scope} {key}={value}")

    def get(self, scope: ConfigScope, key: str) -> str | None:
        """Get a config value, or None if the key is not set."""
        try:
            return run_git(["config", scope.flag, key], cwd=self.cwd)
        except GitCommandError as e:
            if e.returncode == KEY_NOT_SET_EXIT_CODE:
                return None
            raise

    def is_repository(self) -> bool:
        """Check for a .git entry in the working directory."""
        return (self.cwd / ".git").exists()

    def get_identity(self, scope: ConfigScope) -> tuple[str, str] | None:
        """Get the (username, email) pair if both are set for the scope."""
        username = self.get(scope, "user.name")
        email = self.get(scope, "user.email")
        if username is None or email is None:
            return None
        return username, email

    def apply(self, profile: Profile, scope: ConfigScope) -> None:
        """Set user.name and user.email for the scope.

        A failure on the second key leaves the first one applied.

        Raises:
            NotARepositoryError: If scope is LOCAL outside a repository
        """
        if scope is ConfigScope.LOCAL and not self.is_repository():
            raise NotARepositoryError(details=str(self.cwd))

        self.set(scope, "user.name", profile.username)
        self.set(scope, "user.email", profile.email)
        logger.info(f"Applied {profile.name} identity to {scope} git config")

    def is_installed(self) -> bool:
        try:
            run_git(["--version"])
        except (GitNotInstalledError, GitCommandError):
            return False
        return True

    def version(self) -> str:
        """Get the installed git version string."""
        return run_git(["--version"])
