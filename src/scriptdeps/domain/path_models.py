from __future__ import annotations

"""
Path Translation Data Models.
"""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class PathMapping:
    """
    One translation rule from a canonical (production) prefix to a local path.

    Attributes:
        source: Canonical Unix-style prefix, the 'from' key in config files.
        target: Local path in either convention, the 'to' key in config files.
    """
    source: str
    target: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PathMapping":
        return cls(source=str(data["from"]), target=str(data["to"]))
