from __future__ import annotations

"""
Unit tests for Path Normalization.

Verifies:
1. Canonicalization rules (drives, separators, relative forms, trailing '/').
2. Emission back into Unix and Windows conventions.
3. Windows round trip stability.
4. POSIX resolution against a working directory.
"""

import pytest

from scriptdeps.core.paths.normalizer import (
    PathConvention,
    from_canonical,
    is_absolute_reference,
    is_canonical_source,
    is_unix_style,
    is_windows_style,
    resolve_canonical,
    to_canonical,
)


@pytest.mark.parametrize("raw, expected", [
    ("", "/"),
    ("/", "/"),
    ("C:", "/c"),
    ("C:\\Users\\dev", "/c/Users/dev"),
    ("c:/data/file.txt", "/c/data/file.txt"),
    ("D:\\logs\\", "/d/logs/"),
    ("C:foo", "/c/foo"),
    ("./scripts/run.sh", "/scripts/run.sh"),
    ("scripts/run.sh", "/scripts/run.sh"),
    ("/a//b///c", "/a/b/c"),
    ("/a\\b/c", "/a/b/c"),
    ("\\\\server\\share\\x", "/server/share/x"),
    ("/opt/app/", "/opt/app/"),
])
def test_to_canonical_rules(raw: str, expected: str) -> None:
    """TC-01: Each canonicalization rule produces the documented form."""
    assert to_canonical(raw) == expected


def test_canonical_form_invariants() -> None:
    """TC-02: Output starts with '/', has no backslash and no '//'."""
    samples = ["C:\\a\\\\b", "x\\y", "//a//b", "Z:", "./q", "/"]
    for s in samples:
        c = to_canonical(s)
        assert c.startswith("/")
        assert "\\" not in c
        assert "//" not in c


def test_trailing_separator_is_never_invented() -> None:
    assert to_canonical("/opt/app") == "/opt/app"
    assert to_canonical("C:\\dir") == "/c/dir"


def test_drive_letter_is_lowercased_only_in_first_segment() -> None:
    assert to_canonical("E:\\Data\\Sub") == "/e/Data/Sub"


@pytest.mark.parametrize("canonical, expected", [
    ("/c/Users/dev", "C:\\Users\\dev"),
    ("/d/logs/", "D:\\logs\\"),
    ("/opt/app/x", ".\\opt\\app\\x"),
    ("", "."),
])
def test_from_canonical_windows(canonical: str, expected: str) -> None:
    assert from_canonical(canonical, PathConvention.WINDOWS) == expected


def test_from_canonical_unix_is_identity() -> None:
    assert from_canonical("/c/Users/dev", PathConvention.UNIX) == "/c/Users/dev"


def test_from_canonical_keeps_native_windows_input() -> None:
    assert from_canonical("C:\\already", PathConvention.WINDOWS) == "C:\\already"


@pytest.mark.parametrize("raw", [
    "C:\\Users\\dev\\script.bat",
    "/c/data/file.txt",
    "D:/a/b/",
    "/opt/app/x",
    "C:",
    "relative\\path.txt",
])
def test_windows_round_trip(raw: str) -> None:
    """TC-03: to_canonical(from_canonical(to_canonical(p), WINDOWS)) == to_canonical(p)."""
    canonical = to_canonical(raw)
    assert to_canonical(from_canonical(canonical, PathConvention.WINDOWS)) == canonical


def test_style_classifiers() -> None:
    assert is_windows_style("C:\\x")
    assert is_windows_style("dir\\file")
    assert is_windows_style("\\\\srv\\share")
    assert not is_windows_style("/a/b")

    assert is_unix_style("/a/b")
    assert not is_unix_style("a/b")
    assert not is_unix_style("/a\\b")
    assert not is_unix_style("C:/a")


def test_is_absolute_reference() -> None:
    assert is_absolute_reference("/x")
    assert is_absolute_reference("C:\\x")
    assert is_absolute_reference("\\\\srv\\x")
    assert not is_absolute_reference("x/y")
    assert not is_absolute_reference("../y")


@pytest.mark.parametrize("pwd, path, expected", [
    ("/home/u", "../x", "/home/x"),
    ("/home/u", "./bin/run.sh", "/home/u/bin/run.sh"),
    ("/a", "/b/c", "/b/c"),
    ("C:\\work", "sub\\f.bat", "/c/work/sub/f.bat"),
    ("/a", "D:\\x", "/d/x"),
    ("", "x", "/x"),
    ("/", "../../x", "/x"),
    ("/home/u", "logs/", "/home/u/logs/"),
    ("/home/u", "../", "/home/"),
    ("/a", "C:\\data\\", "/c/data/"),
    ("/a", "/", "/"),
])
def test_resolve_canonical(pwd: str, path: str, expected: str) -> None:
    """TC-04: Relative references are joined and collapsed with POSIX rules."""
    assert resolve_canonical(pwd, path) == expected


@pytest.mark.parametrize("path, expected", [
    ("/opt/app", True),
    ("/opt/app/", True),
    ("/", True),
    ("/opt//app", False),
    ("//srv", False),
    ("/a\\b", False),
    ("C:/data", False),
    ("opt/app", False),
])
def test_is_canonical_source(path: str, expected: bool) -> None:
    assert is_canonical_source(path) is expected
