"""Unit tests for file browser path normalization.

Tests use the AAA pattern (Arrange-Act-Assert) for clarity.
"""

from __future__ import annotations

import pytest

from daemon_bridge.exceptions import InvalidPathError
from daemon_bridge.files.paths import ROOT, PathSpec, breadcrumb, normalize, normalize_file_path


class TestNormalize:
    """Tests for normalize()."""

    @pytest.mark.parametrize("raw", [None, "", "/", "//", "./", "/./."])
    def test_empty_forms_are_root(self, raw: str | None) -> None:
        """Given any spelling of the root, returns ROOT."""
        assert normalize(raw) == ROOT
        assert str(normalize(raw)) == "/"

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("plugins", "/plugins"),
            ("/plugins/", "/plugins"),
            ("//plugins///config//", "/plugins/config"),
            ("/plugins/./config", "/plugins/config"),
            ("%2Fplugins%2Fconfig", "/plugins/config"),
            ("/my%20world/level.dat", "/my world/level.dat"),
            ("/a+b", "/a+b"),
        ],
    )
    def test_canonical_form(self, raw: str, expected: str) -> None:
        """Given a valid path, returns the canonical absolute form."""
        assert str(normalize(raw)) == expected

    @pytest.mark.parametrize(
        "raw",
        [
            "..",
            "../etc",
            "/plugins/../../etc/passwd",
            "/plugins/..",
            "%2e%2e/etc",
            "/plugins%2F..%2F..",
        ],
    )
    def test_rejects_traversal(self, raw: str) -> None:
        """Given a path with a '..' segment (raw or encoded), raises InvalidPathError."""
        with pytest.raises(InvalidPathError, match="'..'"):
            normalize(raw)

    @pytest.mark.parametrize("raw", ["%252e%252e/etc", "/plugins/%252F", "/a%2541"])
    def test_rejects_double_encoding(self, raw: str) -> None:
        """Given input that still contains escapes after one decode, raises."""
        with pytest.raises(InvalidPathError, match="encoded more than once"):
            normalize(raw)

    @pytest.mark.parametrize("raw", ["/a\x00b", "/a%00b"])
    def test_rejects_nul_byte(self, raw: str) -> None:
        """Given a NUL byte, raw or encoded, raises."""
        with pytest.raises(InvalidPathError, match="NUL"):
            normalize(raw)

    def test_error_keeps_raw_input(self) -> None:
        """InvalidPathError carries the rejected input for logging."""
        with pytest.raises(InvalidPathError) as exc_info:
            normalize("/x/../..")

        assert exc_info.value.raw_path == "/x/../.."
        assert str(exc_info.value).startswith("Invalid path:")

    @pytest.mark.parametrize(
        "raw",
        ["", "/", "plugins", "/plugins/config/", "%2Fa%2Fb", "/my%20world", "/100%", "/a+b/c d"],
    )
    def test_idempotent(self, raw: str) -> None:
        """Normalizing the canonical form again yields the same path."""
        once = normalize(raw)

        assert normalize(str(once)) == once

    def test_path_spec_returned_unchanged(self) -> None:
        """Given an existing PathSpec, returns it without decoding again."""
        path = PathSpec(("100%41",))

        assert normalize(path) is path

    @pytest.mark.parametrize("raw", ["/plugins/config", "/a/./b//c", "%2Fx%2Fy"])
    def test_result_is_never_outside_root(self, raw: str) -> None:
        """Every accepted path is absolute with no '..' segment."""
        result = normalize(raw)

        assert str(result).startswith("/")
        assert ".." not in result.segments


class TestNormalizeFilePath:
    """Tests for normalize_file_path()."""

    def test_accepts_file(self) -> None:
        assert str(normalize_file_path("server.properties")) == "/server.properties"

    @pytest.mark.parametrize("raw", [None, "", "/", "/./"])
    def test_rejects_root(self, raw: str | None) -> None:
        """Given the root, raises because a file path is required."""
        with pytest.raises(InvalidPathError, match="file path is required"):
            normalize_file_path(raw)

    def test_rejects_traversal(self) -> None:
        with pytest.raises(InvalidPathError):
            normalize_file_path("/../secret.txt")

    def test_rejects_root_path_spec(self) -> None:
        with pytest.raises(InvalidPathError):
            normalize_file_path(ROOT)


class TestPathSpec:
    """Tests for PathSpec helpers."""

    def test_url_path_percent_encodes_segments(self) -> None:
        """Segments are percent-encoded but the separator is kept."""
        path = PathSpec(("my world", "a#b?.txt"))

        assert path.url_path() == "my%20world/a%23b%3F.txt"

    def test_root_url_path_is_empty(self) -> None:
        assert ROOT.url_path() == ""

    def test_name_and_parent(self) -> None:
        path = normalize("/plugins/config/settings.yml")

        assert path.name == "settings.yml"
        assert str(path.parent) == "/plugins/config"

    def test_single_segment_has_no_parent(self) -> None:
        assert normalize("/plugins").parent is None
        assert ROOT.parent is None


class TestBreadcrumb:
    """Tests for breadcrumb()."""

    def test_root(self) -> None:
        """At the root there is no header and no back link."""
        crumb = breadcrumb(ROOT)

        assert crumb.header == ""
        assert crumb.first is False
        assert crumb.show_back is False
        assert crumb.back_link is None

    def test_one_level_deep(self) -> None:
        """One level below the root links to the root only."""
        crumb = breadcrumb(normalize("/plugins"))

        assert crumb.header == "/plugins"
        assert crumb.first is True
        assert crumb.show_back is False
        assert crumb.back_link is None

    def test_nested(self) -> None:
        """Deeper paths offer a back link to the parent."""
        crumb = breadcrumb(normalize("/plugins/essentials/config"))

        assert crumb.header == "/plugins/essentials/config"
        assert crumb.first is True
        assert crumb.show_back is True
        assert crumb.back_link == "/plugins/essentials"
        assert crumb.back_link_display == "plugins/essentials"
