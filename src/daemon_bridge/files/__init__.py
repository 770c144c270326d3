"""File browsing: path normalization and daemon-backed file operations."""

from daemon_bridge.files.browser import FileBrowser
from daemon_bridge.files.paths import ROOT, Breadcrumb, PathSpec, breadcrumb, normalize, normalize_file_path

__all__ = [
    "ROOT",
    "Breadcrumb",
    "FileBrowser",
    "PathSpec",
    "breadcrumb",
    "normalize",
    "normalize_file_path",
]
