"""SSH config management for profile host aliases.

Each profile owns at most one block in the SSH config file::

    # Profile: work
    Host github.com-work
      HostName github.com
      User git
      IdentityFile /home/me/.ssh/id_ed25519_work
      IdentitiesOnly yes

Blocks are found by their marker comment and removed with a small line
scanner; everything else in the file is left alone. The file is never
parsed as a whole, so a tracked block edited by hand into a different
shape may not be recognised correctly.
"""

import logging
import shutil
from collections.abc import Iterable
from enum import Enum, auto
from pathlib import Path

from . import config
from .exceptions import PermissionDeniedError
from .profile import Profile

logger = logging.getLogger(__name__)

MARKER_PREFIX = "# Profile: "
INDENT = "  "


class ScanState(Enum):
    """Where the block scanner is relative to a tracked block."""
    OUTSIDE = auto()
    IN_MARKED_BLOCK = auto()
    IN_HOST_STANZA = auto()


def marker_line(profile_name: str) -> str:
    return f"{MARKER_PREFIX}{profile_name}"


def _is_host_line(line: str) -> bool:
    return line.startswith("Host ")


def _is_blank(line: str) -> bool:
    return not line.strip()


def _is_indented(line: str) -> bool:
    return line[:1] in (" ", "\t")


def strip_block(lines: Iterable[str], profile_name: str) -> list[str]:
    """Return ``lines`` without the block tagged with ``profile_name``.

    After the marker, blank lines are dropped until the ``Host`` line; after
    the ``Host`` line, indented and blank lines are dropped. Any other line,
    comments included, ends the block and is then kept or treated as a new
    marker like any line outside a block. Repeated markers for the same name
    are all removed.
    """
    marker = marker_line(profile_name)
    kept: list[str] = []
    state = ScanState.OUTSIDE

    for line in lines:
        if state is ScanState.IN_MARKED_BLOCK:
            if _is_host_line(line):
                state = ScanState.IN_HOST_STANZA
                continue
            if _is_blank(line):
                continue
            state = ScanState.OUTSIDE
        elif state is ScanState.IN_HOST_STANZA:
            if _is_indented(line) or _is_blank(line):
                continue
            state = ScanState.OUTSIDE

        # OUTSIDE, including a line that just ended a block
        if line.rstrip("\r") == marker:
            state = ScanState.IN_MARKED_BLOCK
            continue
        kept.append(line)

    return kept


def split_lines(content: str) -> list[str]:
    """Split on newlines only, dropping the empty tail after a final newline."""
    if not content:
        return []
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def join_lines(lines: Iterable[str]) -> str:
    return "".join(f"{line}\n" for line in lines)


class SSHConfig:
    """Manages profile host blocks in an SSH config file."""

    def __init__(
        self,
        config_path: Path,
        ssh_dir: Path | None = None,
        base_host: str = config.DEFAULT_SSH_HOST,
    ) -> None:
        """Initialize SSH config manager.

        Args:
            config_path: Path to the SSH config file
            ssh_dir: Directory SSH key names are resolved against
                (defaults to the config file's directory)
            base_host: Real host name the profile aliases point at
        """
        self.config_path = Path(config_path)
        self.ssh_dir = Path(ssh_dir) if ssh_dir is not None else self.config_path.parent
        self.base_host = base_host

    @classmethod
    def default(cls) -> "SSHConfig":
        return cls(
            config.get_ssh_config_path(),
            ssh_dir=config.get_ssh_dir(),
            base_host=config.get_ssh_host(),
        )

    @property
    def backup_path(self) -> Path:
        return self.config_path.with_name(f"{self.config_path.name}.bak")

    def key_path(self, key_name: str) -> Path:
        """Full path of an SSH key; existence is not checked."""
        return self.ssh_dir / key_name

    def key_exists(self, key_name: str) -> bool:
        return self.key_path(key_name).exists()

    def host_alias(self, profile: Profile) -> str:
        return profile.ssh_host(self.base_host)

    def render_block(self, profile: Profile) -> str:
        """Build the host block for a profile."""
        lines = [
            marker_line(profile.name),
            f"Host {self.host_alias(profile)}",
            f"{INDENT}HostName {self.base_host}",
            f"{INDENT}User git",
            f"{INDENT}IdentityFile {self.key_path(profile.ssh_key_name)}",
            f"{INDENT}IdentitiesOnly yes",
        ]
        return join_lines(lines)

    def ensure_exists(self) -> None:
        """Create the SSH directory and an empty config file if missing."""
        try:
            self.config_path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
            if not self.config_path.exists():
                self.config_path.touch(mode=0o600)
                logger.debug(f"Created empty SSH config at {self.config_path}")
        except OSError as e:
            raise PermissionDeniedError(
                f"Failed to create SSH config {self.config_path}", details=str(e)
            ) from e

    def backup(self) -> Path | None:
        """Copy the config file to its .bak sibling, replacing any older backup."""
        if not self.config_path.exists():
            return None
        try:
            shutil.copy2(self.config_path, self.backup_path)
        except OSError as e:
            raise PermissionDeniedError(
                f"Failed to back up SSH config to {self.backup_path}", details=str(e)
            ) from e
        logger.debug(f"SSH config backed up to {self.backup_path}")
        return self.backup_path

    def _read(self) -> str:
        try:
            return self.config_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise PermissionDeniedError(
                f"Failed to read SSH config {self.config_path}", details=str(e)
            ) from e

    def _write(self, content: str) -> None:
        try:
            self.config_path.write_text(content, encoding="utf-8")
            self.config_path.chmod(0o600)
        except OSError as e:
            raise PermissionDeniedError(
                f"Failed to write SSH config {self.config_path}", details=str(e)
            ) from e

    def merge(self, content: str, profile: Profile) -> str:
        """Replace or append the profile's block in ``content``."""
        result = join_lines(strip_block(split_lines(content), profile.name))
        if result and not result.endswith("\n\n"):
            result += "\n"
        return result + self.render_block(profile)

    def upsert(self, profile: Profile) -> None:
        """Add or update the host block for a profile."""
        self.ensure_exists()
        self.backup()
        self._write(self.merge(self._read(), profile))
        logger.info(f"Updated SSH host {self.host_alias(profile)} in {self.config_path}")

    def remove(self, profile_name: str) -> None:
        """Remove the host block for a profile; a missing file is not an error."""
        if not self.config_path.exists():
            logger.debug(f"No SSH config at {self.config_path}, nothing to remove")
            return
        self.backup()
        content = self._read()
        self._write(join_lines(strip_block(split_lines(content), profile_name)))
        logger.info(f"Removed SSH host block for {profile_name} from {self.config_path}")
