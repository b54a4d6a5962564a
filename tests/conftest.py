"""Test configuration and fixtures."""

from collections.abc import Generator
from pathlib import Path
from unittest.mock import Mock

import pytest

from gex.git import GitConfig
from gex.manager import ProfileManager
from gex.profile import Profile
from gex.ssh import SSHConfig
from gex.storage import ProfileStore
from gex.switcher import ProfileSwitcher


@pytest.fixture
def temp_home(tmp_path: Path, monkeypatch) -> Generator[Path, None, None]:
    """Create a temporary home directory for testing."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("GEX_HOME", str(home))
    monkeypatch.delenv("GEX_SSH_HOST", raising=False)
    yield home


@pytest.fixture
def make_profile():
    """Build a valid profile named after its argument."""
    def _make(name: str = "work", **overrides: str) -> Profile:
        fields = {
            "name": name,
            "username": f"{name}-user",
            "email": f"{name}@example.com",
            "ssh_key_name": f"id_ed25519_{name}",
        }
        fields.update(overrides)
        return Profile(**fields)
    return _make


@pytest.fixture
def store(tmp_path: Path) -> ProfileStore:
    return ProfileStore(tmp_path / "gex" / "profiles.json")


@pytest.fixture
def profile_manager(store: ProfileStore) -> ProfileManager:
    return ProfileManager(store)


@pytest.fixture
def ssh_dir(tmp_path: Path) -> Path:
    return tmp_path / ".ssh"


@pytest.fixture
def ssh_config(ssh_dir: Path) -> SSHConfig:
    return SSHConfig(ssh_dir / "config", ssh_dir=ssh_dir)


@pytest.fixture
def mock_git_config() -> Mock:
    """GitConfig double with no identity set and no repository."""
    git_config = Mock(spec=GitConfig)
    git_config.is_repository.return_value = False
    git_config.get_identity.return_value = None
    return git_config


@pytest.fixture
def switcher(
    profile_manager: ProfileManager, mock_git_config: Mock, ssh_config: SSHConfig
) -> ProfileSwitcher:
    return ProfileSwitcher(profile_manager, mock_git_config, ssh_config)

