"""Custom exceptions for gex."""


class GexError(Exception):
    """Base exception for gex."""

    hint: str | None = None

    def __init__(self, message: str, details: str | None = None) -> None:
        self.message = message
        self.details = details
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class ProfileNotFoundError(GexError):
    """Raised when a profile name is not in the store."""

    def __init__(self, name: str) -> None:
        self.profile_name = name
        self.hint = (
            "Run 'gex list' to see available profiles, or create it with: "
            f"gex add {name} --username <user> --email <email> --ssh-key <key>"
        )
        super().__init__(f"Profile '{name}' not found")


class ProfileExistsError(GexError):
    """Raised when creating a profile whose name is taken."""

    def __init__(self, name: str) -> None:
        self.profile_name = name
        self.hint = f"Use 'gex edit {name}' to modify it or choose a different name"
        super().__init__(f"Profile '{name}' already exists")


class SSHKeyNotFoundError(GexError):
    """Raised when a profile's SSH key file is missing."""

    def __init__(self, path: str) -> None:
        self.path = path
        self.hint = (
            "Generate the key with 'ssh-keygen -t ed25519 -f ~/.ssh/<key_name>' "
            "or point the profile at an existing key with 'gex edit <profile>'"
        )
        super().__init__(f"SSH key not found: {path}")


class NotARepositoryError(GexError):
    """Raised when a local-scope operation runs outside a git repository."""

    hint = "Use --global to apply the profile machine-wide, or run inside a git repository"

    def __init__(self, details: str | None = None) -> None:
        super().__init__("Not a git repository", details=details)


class GitNotInstalledError(GexError):
    """Raised when the git executable cannot be found."""

    hint = "Install git from https://git-scm.com/downloads and restart your terminal"

    def __init__(self) -> None:
        super().__init__("Git is not installed or not found in PATH")


class GitCommandError(GexError):
    """Raised when git exits with a non-zero status."""

    def __init__(self, message: str, details: str | None = None, returncode: int | None = None) -> None:
        self.returncode = returncode
        super().__init__(message, details=details)


class ConfigCorruptedError(GexError):
    """Raised when the profile store cannot be parsed."""

    hint = "Fix the JSON in the profile store or delete it to start fresh"


class PermissionDeniedError(GexError):
    """Raised when a config file cannot be read or written."""

    hint = "Check file permissions and make sure the directory is writable"

    def __init__(self, context: str, details: str | None = None) -> None:
        self.context = context
        super().__init__(f"Permission denied: {context}", details=details)


class InvalidInputError(GexError):
    """Raised when a profile field fails validation."""

    hint = "Use 'gex <command> --help' for usage information"

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid input: {reason}")
