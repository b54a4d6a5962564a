"""Profile switching and status lookup."""

import logging
from dataclasses import dataclass
from pathlib import Path

from .exceptions import GexError, ProfileNotFoundError, SSHKeyNotFoundError
from .git import ConfigScope, GitConfig
from .manager import ProfileManager
from .profile import Profile
from .ssh import SSHConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SwitchResult:
    """What a successful switch applied."""
    profile: Profile
    scope: ConfigScope
    key_path: Path

    @property
    def username(self) -> str:
        return self.profile.username

    @property
    def email(self) -> str:
        return self.profile.email

    @property
    def ssh_key_name(self) -> str:
        return self.profile.ssh_key_name


@dataclass(frozen=True)
class ProfileStatus:
    """Stored profiles matching the current global and local git identity."""
    global_profile: Profile | None = None
    local_profile: Profile | None = None


class ProfileSwitcher:
    """Applies profiles to git and SSH configuration."""

    def __init__(
        self,
        manager: ProfileManager,
        git_config: GitConfig,
        ssh_config: SSHConfig,
    ) -> None:
        self.manager = manager
        self.git_config = git_config
        self.ssh_config = ssh_config

    @classmethod
    def default(cls) -> "ProfileSwitcher":
        return cls(ProfileManager.default(), GitConfig(), SSHConfig.default())

    def switch(self, name: str, scope: ConfigScope) -> SwitchResult:
        """Switch git identity and SSH host block to a profile.

        Steps run in order: look up the profile, check its SSH key, set the
        git identity, then update the SSH config. Nothing is changed if one
        of the first two steps fails. If the SSH step fails the git identity
        stays applied.

        Raises:
            ProfileNotFoundError: If the profile does not exist
            SSHKeyNotFoundError: If the profile's key file is missing
            NotARepositoryError: If scope is LOCAL outside a repository
        """
        logger.debug(f"Switching to profile {name} ({scope})")
        profile = self.manager.get(name)
        if profile is None:
            raise ProfileNotFoundError(name)

        key_path = self.ssh_config.key_path(profile.ssh_key_name)
        if not self.ssh_config.key_exists(profile.ssh_key_name):
            raise SSHKeyNotFoundError(str(key_path))

        self.git_config.apply(profile, scope)

        try:
            self.ssh_config.upsert(profile)
        except (GexError, OSError):
            logger.warning(
                f"{scope} git identity was set to {profile.username} <{profile.email}> "
                f"but the SSH config update for {name} failed; git config was not reverted"
            )
            raise

        logger.info(f"Switched to profile {name} ({scope})")
        return SwitchResult(profile=profile, scope=scope, key_path=key_path)

    def status(self) -> ProfileStatus:
        """Find the stored profiles matching the current git identities."""
        global_profile = self._match_identity(ConfigScope.GLOBAL)
        local_profile = None
        if self.git_config.is_repository():
            local_profile = self._match_identity(ConfigScope.LOCAL)
        return ProfileStatus(global_profile=global_profile, local_profile=local_profile)

    def delete(self, name: str) -> None:
        """Delete a profile and its SSH host block."""
        self.manager.delete(name)
        self.ssh_config.remove(name)

    def _match_identity(self, scope: ConfigScope) -> Profile | None:
        identity = self.git_config.get_identity(scope)
        if identity is None:
            logger.debug(f"No {scope} git identity set")
            return None
        return self.find_by_identity(*identity)

    def find_by_identity(self, username: str, email: str) -> Profile | None:
        """First stored profile with exactly this username and email."""
        for profile in self.manager.get_all():
            if profile.username == username and profile.email == email:
                return profile
        return None
