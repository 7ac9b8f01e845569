from __future__ import annotations

"""
Domain Error Types.

Only configuration problems are fatal for a run. Per-file failures are
recorded as FileError entries on the traversal result instead of raised.
"""


class ConfigurationError(ValueError):
    """
    Raised when the run configuration is malformed.

    Signaled at load/construction time, before any traversal starts.
    """
