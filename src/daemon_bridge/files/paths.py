"""Path normalization for the file browser.

Every path sent to a daemon is built here. Rules, applied after a single
percent-decode of the caller's input:

- ".." segments are rejected (root confinement)
- NUL bytes are rejected
- Residual percent-escapes are rejected, so double-encoded input such as
  "%252e%252e" cannot turn into ".." on a later decode
- Empty and "." segments are dropped
- The result always starts with "/" and has no trailing slash (root is "/")

Because of the last three rules, normalize(str(p)) == p for every PathSpec p.
"""

from __future__ import annotations

__all__ = [
    "Breadcrumb",
    "PathSpec",
    "ROOT",
    "breadcrumb",
    "normalize",
    "normalize_file_path",
]

import re
from dataclasses import dataclass
from urllib.parse import quote, unquote

from pydantic import BaseModel

from daemon_bridge.exceptions import InvalidPathError

_ESCAPE_SEQUENCE = re.compile(r"%[0-9A-Fa-f]{2}")


@dataclass(frozen=True)
class PathSpec:
    """A normalized path below a server's file root.

    Only normalize() and normalize_file_path() should create instances.
    """

    segments: tuple[str, ...] = ()

    def __str__(self) -> str:
        return "/" + "/".join(self.segments)

    @property
    def path(self) -> str:
        return str(self)

    @property
    def is_root(self) -> bool:
        return not self.segments

    @property
    def name(self) -> str:
        """Last segment ("" for the root)."""
        return self.segments[-1] if self.segments else ""

    @property
    def parent(self) -> "PathSpec | None":
        """Back-link target: the path minus its last segment.

        Only offered when the path is more than one segment below the root.
        """
        if len(self.segments) < 2:
            return None
        return PathSpec(self.segments[:-1])

    def url_path(self) -> str:
        """Path without leading slash, percent-encoded for a daemon URL."""
        return quote("/".join(self.segments), safe="/")


ROOT = PathSpec()


def normalize(raw_path: str | PathSpec | None) -> PathSpec:
    """Canonicalize a caller-supplied directory path.

    An existing PathSpec is already canonical and is returned unchanged,
    so input is never decoded twice.

    Args:
        raw_path: Path as received from the panel (may be percent-encoded).

    Returns:
        The normalized PathSpec.

    Raises:
        InvalidPathError: If the path contains traversal or illegal input.
    """
    if isinstance(raw_path, PathSpec):
        return raw_path

    raw = raw_path or ""
    decoded = unquote(raw)

    if "\x00" in decoded:
        raise InvalidPathError(raw, "path contains a NUL byte")
    if _ESCAPE_SEQUENCE.search(decoded):
        raise InvalidPathError(raw, "path is encoded more than once")

    segments: list[str] = []
    for segment in decoded.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            raise InvalidPathError(raw, "path may not contain '..' segments")
        segments.append(segment)

    return PathSpec(tuple(segments))


def normalize_file_path(raw_path: str | PathSpec | None) -> PathSpec:
    """Canonicalize a path that must name a file.

    Same traversal policy as normalize(); the root itself is rejected.

    Raises:
        InvalidPathError: If the path is invalid or names the root.
    """
    path = normalize(raw_path)
    if path.is_root:
        raise InvalidPathError(str(raw_path or ""), "a file path is required")
    return path


class Breadcrumb(BaseModel):
    """Navigation metadata shown above a directory listing.

    Attributes:
        header: Current directory, "" at the root.
        first: True when below the root (link back to the root is shown).
        show_back: True when a parent link is offered.
        back_link: Parent directory path, if offered.
        back_link_display: back_link without leading/trailing slashes.
    """

    header: str = ""
    first: bool = False
    show_back: bool = False
    back_link: str | None = None
    back_link_display: str | None = None


def breadcrumb(path: PathSpec) -> Breadcrumb:
    """Build the listing breadcrumb for an already normalized path."""
    if path.is_root:
        return Breadcrumb()

    parent = path.parent
    if parent is None:
        return Breadcrumb(header=str(path), first=True)

    return Breadcrumb(
        header=str(path),
        first=True,
        show_back=True,
        back_link=str(parent),
        back_link_display=str(parent).strip("/"),
    )
