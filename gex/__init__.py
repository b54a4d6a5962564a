"""gex - Switch between git identities and their SSH keys."""

from gex.git import ConfigScope, GitConfig
from gex.manager import ProfileManager
from gex.profile import Profile
from gex.ssh import SSHConfig
from gex.storage import ProfileStore
from gex.switcher import ProfileStatus, ProfileSwitcher, SwitchResult
from gex.version import __version__

__all__ = [
    "ConfigScope",
    "GitConfig",
    "Profile",
    "ProfileManager",
    "ProfileStatus",
    "ProfileStore",
    "ProfileSwitcher",
    "SSHConfig",
    "SwitchResult",
    "__version__",
]
