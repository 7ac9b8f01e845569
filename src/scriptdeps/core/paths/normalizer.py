from __future__ import annotations

"""
Path Normalization.

Converts paths written in any host convention (Unix, Windows drive paths,
UNC shares, mixed separators, relative forms) into one canonical Unix-style
representation used for every comparison, and back into a target
convention for emission.

Canonical form:
- always starts with '/';
- a Windows drive becomes a lowercase first segment ('C:\\a' -> '/c/a');
- never contains a backslash;
- no repeated separators;
- a trailing separator is kept only when the input had one.
"""

import os
import posixpath
import re
from enum import Enum

_DRIVE_PREFIX_RX = re.compile(r"^[A-Za-z]:")
_DRIVE_SEGMENT_RX = re.compile(r"^/([a-z])/")
_REPEATED_SLASH_RX = re.compile(r"/+")


class PathConvention(str, Enum):
    UNIX = "unix"
    WINDOWS = "windows"
    NATIVE = "native"

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def to_canonical(path: str) -> str:
    """
    Canonicalize a path written in any convention.

    Args:
        path: Raw path string.

    Returns:
        str: Canonical Unix-style path.
    """
    if not path:
        return "/"

    normalized = path.replace("\\", "/")

    if _DRIVE_PREFIX_RX.match(normalized):
        drive = normalized[0].lower()
        rest = normalized[2:]
        # Drive-relative form ('C:foo') still needs a segment boundary
        if rest and not rest.startswith("/"):
            rest = "/" + rest
        normalized = "/" + drive + rest
    elif normalized.startswith("./"):
        normalized = normalized[1:]
    elif not normalized.startswith("/"):
        normalized = "/" + normalized

    normalized = _REPEATED_SLASH_RX.sub("/", normalized)

    had_trailing = path.endswith("/") or path.endswith("\\")
    if len(normalized) > 1 and normalized.endswith("/") and not had_trailing:
        normalized = normalized.rstrip("/") or "/"

    return normalized


def from_canonical(path: str, convention: PathConvention = PathConvention.NATIVE) -> str:
    """
    Emit a canonical path in the requested convention.

    Unix targets receive the path unchanged. Windows targets get the drive
    segment turned back into a drive letter; paths without a drive segment
    are kept relative ('.\\...') rather than guessing a drive.

    Args:
        path: Canonical path.
        convention: Target convention.

    Returns:
        str: Path in the target convention.
    """
    if not path:
        return "."

    if convention == PathConvention.NATIVE:
        convention = PathConvention.WINDOWS if os.name == "nt" else PathConvention.UNIX

    if convention == PathConvention.UNIX:
        return path

    if _DRIVE_PREFIX_RX.match(path) or path.startswith("\\\\"):
        return path

    match = _DRIVE_SEGMENT_RX.match(path)
    if match:
        drive = match.group(1).upper()
        return drive + ":" + path[2:].replace("/", "\\")

    windows_path = path.replace("/", "\\")
    if windows_path.startswith("\\"):
        windows_path = "." + windows_path
    return windows_path


def is_windows_style(path: str) -> bool:
    """Check for a drive letter prefix, any backslash, or a UNC prefix."""
    return bool(_DRIVE_PREFIX_RX.match(path)) or "\\" in path or path.startswith("\\\\")


def is_unix_style(path: str) -> bool:
    """Check for a leading '/' with neither backslashes nor a drive prefix."""
    return path.startswith("/") and "\\" not in path and not _DRIVE_PREFIX_RX.match(path)


def is_canonical_source(path: str) -> bool:
    """
    Check that a mapping source is already in canonical form.

    A trailing separator is tolerated. A source that canonicalization would
    rewrite (repeated separators, backslashes, drive letters) never matches
    a canonical path.
    """
    return is_unix_style(path) and path.rstrip("/") == to_canonical(path).rstrip("/")


def is_absolute_reference(path: str) -> bool:
    """
    Check whether a path is absolute in either convention.

    Relative references need a working directory to be resolved; absolute
    ones ignore it.
    """
    return path.startswith("/") or path.startswith("\\") or bool(_DRIVE_PREFIX_RX.match(path))


def resolve_canonical(pwd: str, path: str) -> str:
    """
    Resolve a path against a working directory using POSIX semantics.

    Applies independently of the host OS: the analyzed files usually come
    from a different machine than the one running the analysis.

    Args:
        pwd: Working directory the path was referenced from.
        path: Path as written.

    Returns:
        str: Canonical absolute path with '.' and '..' collapsed. A trailing
             separator on the input is kept.
    """
    if is_absolute_reference(path):
        joined = to_canonical(path)
    else:
        relative = path.replace("\\", "/")
        joined = posixpath.join(to_canonical(pwd), relative)

    resolved = posixpath.normpath(_REPEATED_SLASH_RX.sub("/", joined))
    # normpath keeps a leading '//' pair as-is
    if resolved.startswith("//"):
        resolved = "/" + resolved.lstrip("/")
    if path.endswith(("/", "\\")) and resolved != "/":
        resolved += "/"
    return resolved
