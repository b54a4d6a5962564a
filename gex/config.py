"""Filesystem locations and environment-driven settings."""

import os
from pathlib import Path

APP_DIR_NAME = ".gex"
PROFILES_FILE_NAME = "profiles.json"
LOG_FILE_NAME = "gex.log"
DEFAULT_SSH_HOST = "github.com"

HOME_ENV = "GEX_HOME"
SSH_HOST_ENV = "GEX_SSH_HOST"


def get_home_dir() -> Path:
    """Get the user's home directory, honouring GEX_HOME."""
    override = os.environ.get(HOME_ENV)
    if override:
        return Path(override)
    return Path.home()


def get_app_dir() -> Path:
    return get_home_dir() / APP_DIR_NAME


def get_profiles_file() -> Path:
    return get_app_dir() / PROFILES_FILE_NAME


def get_log_file() -> Path:
    return get_app_dir() / LOG_FILE_NAME


def get_ssh_dir() -> Path:
    return get_home_dir() / ".ssh"


def get_ssh_config_path() -> Path:
    return get_ssh_dir() / "config"


def get_ssh_host() -> str:
    """Base host that profile host aliases are derived from."""
    return os.environ.get(SSH_HOST_ENV) or DEFAULT_SSH_HOST
