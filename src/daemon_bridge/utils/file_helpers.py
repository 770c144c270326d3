"""Shared file utilities for daemon-bridge.

Provides:
- get_app_dir: OS-appropriate application directory
- set_secure_permissions: Owner-only file/directory permissions
- load_validated_json: JSON file loading with Pydantic validation
"""

from __future__ import annotations

__all__ = [
    "get_app_dir",
    "load_validated_json",
    "set_secure_permissions",
]

import json
import sys
from pathlib import Path
from typing import TypeVar

import click
from pydantic import BaseModel, ValidationError

from daemon_bridge.constants import APP_NAME

T = TypeVar("T", bound=BaseModel)


def get_app_dir() -> Path:
    """Get the OS-appropriate application directory.

    Uses click.get_app_dir() which returns:
    - macOS: ~/Library/Application Support/daemon-bridge
    - Linux: ~/.config/daemon-bridge (XDG compliant)
    - Windows: C:\\Users\\<user>\\AppData\\Roaming\\daemon-bridge

    Returns:
        Path to the application directory.
    """
    return Path(click.get_app_dir(APP_NAME))


def set_secure_permissions(path: Path, *, is_directory: bool = False) -> None:
    """Set owner-only permissions (0o700 for directories, 0o600 for files).

    Does nothing on Windows. Silently ignores permission errors
    (some systems don't allow permission changes).

    Args:
        path: Path to file or directory.
        is_directory: If True, use directory permissions (0o700).
    """
    if sys.platform == "win32":
        return

    try:
        path.chmod(0o700 if is_directory else 0o600)
    except OSError:
        pass  # Permission changes might fail on some systems


def load_validated_json(
    file_path: Path,
    model_class: type[T],
    file_type: str = "file",
) -> T:
    """Load JSON file and validate against Pydantic model.

    Args:
        file_path: Path to JSON file.
        model_class: Pydantic model class to validate against.
        file_type: Description for error messages (e.g., "config").

    Returns:
        Validated Pydantic model instance.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If JSON is invalid or validation fails.
    """
    if not file_path.exists():
        raise FileNotFoundError(f"{file_type.capitalize()} file not found at {file_path}")

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {file_type} file {file_path}: {e}") from e
    except OSError as e:
        raise ValueError(f"Could not read {file_type} file {file_path}: {e}") from e

    try:
        return model_class.model_validate(data)
    except ValidationError as e:
        errors = []
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            errors.append(f"  - {loc}: {error['msg']}" if loc else f"  - {error['msg']}")
        raise ValueError(f"Invalid {file_type} file {file_path}:\n" + "\n".join(errors)) from e
