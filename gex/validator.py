"""Input validation for profile fields.

All checks are pure and total: they never raise, they only answer whether a
string is acceptable. ``validate_profile`` is the one exception and turns the
first failing field into an :class:`InvalidInputError`.
"""

import re

from .exceptions import InvalidInputError
from .profile import Profile

PROFILE_NAME_RE = re.compile(r"[A-Za-z0-9_-]{1,50}")
USERNAME_RE = re.compile(r"[A-Za-z0-9-]{1,39}")
EMAIL_RE = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")

MAX_SSH_KEY_NAME = 255
INVALID_KEY_CHARS = frozenset('/\\\0<>:"|?*')


def validate_profile_name(name: str) -> bool:
    """Letters, digits, hyphens and underscores; 1 to 50 characters."""
    return PROFILE_NAME_RE.fullmatch(name) is not None


def validate_username(username: str) -> bool:
    """GitHub-style username: letters, digits and inner hyphens, at most 39 characters."""
    if username.startswith("-") or username.endswith("-"):
        return False
    return USERNAME_RE.fullmatch(username) is not None


def validate_email(email: str) -> bool:
    return EMAIL_RE.fullmatch(email) is not None


def validate_ssh_key_name(key_name: str) -> bool:
    """Check that a key name is a plain file name inside the SSH directory."""
    if not key_name or len(key_name) > MAX_SSH_KEY_NAME:
        return False
    if any(ch in INVALID_KEY_CHARS for ch in key_name):
        return False
    return key_name.strip() == key_name


def validate_profile(profile: Profile) -> None:
    """Raise InvalidInputError for the first invalid field of a profile."""
    if not validate_profile_name(profile.name):
        raise InvalidInputError(
            "Profile name must be 1-50 letters, digits, hyphens or underscores"
        )
    if not validate_username(profile.username):
        raise InvalidInputError("Invalid GitHub username format")
    if not validate_email(profile.email):
        raise InvalidInputError("Invalid email format")
    if not validate_ssh_key_name(profile.ssh_key_name):
        raise InvalidInputError("Invalid SSH key name")
