"""JSON persistence for the profile collection."""

import json
import logging
from pathlib import Path

from . import config
from .exceptions import ConfigCorruptedError, PermissionDeniedError
from .profile import ProfileCollection

logger = logging.getLogger(__name__)


class ProfileStore:
    """Reads and writes the profile collection file.

    There is no cache: every ``load`` goes back to disk, and ``save`` replaces
    the whole file.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    @classmethod
    def default(cls) -> "ProfileStore":
        return cls(config.get_profiles_file())

    def ensure_exists(self) -> None:
        """Create the store directory and an empty collection if missing."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PermissionDeniedError(
                f"Failed to create config directory {self.path.parent}", details=str(e)
            ) from e

        if not self.path.exists():
            logger.debug(f"Creating empty profile store at {self.path}")
            self.save(ProfileCollection())

    def load(self) -> ProfileCollection:
        """Load the collection from disk.

        Raises:
            ConfigCorruptedError: If the file is not a valid collection
            PermissionDeniedError: If the file cannot be read
        """
        self.ensure_exists()

        try:
            content = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise PermissionDeniedError(
                f"Failed to read config file {self.path}", details=str(e)
            ) from e
        except UnicodeDecodeError as e:
            logger.error(f"Profile store {self.path} is not valid UTF-8: {e}")
            raise ConfigCorruptedError(
                "Configuration file is corrupted", details=str(e)
            ) from e

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            logger.error(f"Profile store {self.path} is not valid JSON: {e}")
            raise ConfigCorruptedError(
                "Configuration file is corrupted", details=str(e)
            ) from e

        try:
            return ProfileCollection.from_dict(data)
        except ConfigCorruptedError as e:
            logger.error(f"Profile store {self.path} has an invalid structure: {e}")
            raise ConfigCorruptedError(
                "Configuration file is corrupted", details=e.message
            ) from e

    def save(self, collection: ProfileCollection) -> None:
        """Write the collection as indented JSON."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                json.dumps(collection.to_dict(), indent=2) + "\n", encoding="utf-8"
            )
        except OSError as e:
            raise PermissionDeniedError(
                f"Failed to write config file {self.path}", details=str(e)
            ) from e
        logger.debug(f"Saved {len(collection.profiles)} profile(s) to {self.path}")

    def validate_config(self) -> bool:
        """Check that the store exists and parses."""
        if not self.path.exists():
            return False
        try:
            self.load()
        except ConfigCorruptedError:
            return False
        return True
