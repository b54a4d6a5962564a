"""Profile management on top of the profile store."""

import logging

from .exceptions import ProfileExistsError, ProfileNotFoundError
from .profile import Profile
from .storage import ProfileStore
from .validator import validate_profile

logger = logging.getLogger(__name__)


class ProfileManager:
    """Create, read, update and delete profiles.

    Each mutating call reloads the collection, changes it and writes it back.
    Concurrent writers are not detected; the last one wins.
    """

    def __init__(self, store: ProfileStore) -> None:
        self.store = store

    @classmethod
    def default(cls) -> "ProfileManager":
        return cls(ProfileStore.default())

    def create(self, profile: Profile) -> Profile:
        """Add a new profile.

        Raises:
            InvalidInputError: If a field fails validation
            ProfileExistsError: If the name is already taken
        """
        validate_profile(profile)
        data = self.store.load()
        if data.index_of(profile.name) is not None:
            raise ProfileExistsError(profile.name)

        data.profiles.append(profile)
        data.touch()
        self.store.save(data)
        logger.info(f"Created profile {profile.name}")
        return profile

    def get(self, name: str) -> Profile | None:
        data = self.store.load()
        index = data.index_of(name)
        return None if index is None else data.profiles[index]

    def get_all(self) -> list[Profile]:
        return list(self.store.load().profiles)

    def update(self, name: str, profile: Profile) -> Profile:
        """Replace a profile in place, keeping its position.

        Raises:
            InvalidInputError: If a field fails validation
            ProfileNotFoundError: If no profile is named ``name``
            ProfileExistsError: If renaming onto another existing profile
        """
        validate_profile(profile)
        data = self.store.load()
        index = data.index_of(name)
        if index is None:
            raise ProfileNotFoundError(name)
        if profile.name != name and data.index_of(profile.name) is not None:
            raise ProfileExistsError(profile.name)

        data.profiles[index] = profile
        data.touch()
        self.store.save(data)
        logger.info(f"Updated profile {name}")
        return profile

    def delete(self, name: str) -> None:
        """Remove a profile from the store.

        Raises:
            ProfileNotFoundError: If no profile is named ``name``
        """
        data = self.store.load()
        index = data.index_of(name)
        if index is None:
            raise ProfileNotFoundError(name)

        del data.profiles[index]
        data.touch()
        self.store.save(data)
        logger.info(f"Deleted profile {name}")

    def exists(self, name: str) -> bool:
        return self.store.load().index_of(name) is not None
