"""Profile data model."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from .exceptions import ConfigCorruptedError

STORE_VERSION = "1.0.0"
PROFILE_FIELDS = ("name", "username", "email", "ssh_key_name")


def utc_timestamp() -> str:
    """Current time as an RFC 3339 string."""
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class Profile:
    """A named git identity."""
    name: str
    username: str
    email: str
    ssh_key_name: str

    def ssh_host(self, base_host: str) -> str:
        """Host alias used for this profile in the SSH config."""
        return f"{base_host}-{self.name}"

    def to_dict(self) -> dict[str, Any]:
        """Convert profile to dictionary for serialization."""
        return {
            "name": self.name,
            "username": self.username,
            "email": self.email,
            "ssh_key_name": self.ssh_key_name,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Profile":
        """Create profile from dictionary.

        Raises:
            ConfigCorruptedError: If a field is missing or not a string
        """
        if not isinstance(data, dict):
            raise ConfigCorruptedError("Profile entry is not an object")
        values = {}
        for key in PROFILE_FIELDS:
            value = data.get(key)
            if not isinstance(value, str):
                raise ConfigCorruptedError(f"Profile field '{key}' is missing or invalid")
            values[key] = value
        return cls(**values)


@dataclass
class ProfileCollection:
    """Everything persisted in the profile store."""
    version: str = STORE_VERSION
    profiles: list[Profile] = field(default_factory=list)
    last_modified: str = field(default_factory=utc_timestamp)

    def touch(self) -> None:
        """Refresh the modification timestamp."""
        self.last_modified = utc_timestamp()

    def index_of(self, name: str) -> int | None:
        for index, profile in enumerate(self.profiles):
            if profile.name == name:
                return index
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "profiles": [profile.to_dict() for profile in self.profiles],
            "last_modified": self.last_modified,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "ProfileCollection":
        """Create collection from parsed JSON.

        Raises:
            ConfigCorruptedError: If the structure does not match
        """
        if not isinstance(data, dict):
            raise ConfigCorruptedError("Profile store is not a JSON object")
        version = data.get("version")
        profiles = data.get("profiles")
        last_modified = data.get("last_modified")
        if not isinstance(version, str) or not isinstance(last_modified, str):
            raise ConfigCorruptedError("Profile store header is missing or invalid")
        if not isinstance(profiles, list):
            raise ConfigCorruptedError("Profile store has no profile list")
        loaded = [Profile.from_dict(item) for item in profiles]
        names = [profile.name for profile in loaded]
        if len(set(names)) != len(names):
            raise ConfigCorruptedError("Profile store has duplicate profile names")
        return cls(
            version=version,
            profiles=loaded,
            last_modified=last_modified,
        )
