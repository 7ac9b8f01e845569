from __future__ import annotations

"""
Path Mapping Engine.

Rewrites canonical production paths into local filesystem paths using an
ordered list of translation rules. Rules are evaluated in configuration
order and the first match wins; a more specific rule listed later never
overrides an earlier, broader one.
"""

import logging
import os
from typing import Any, Dict, List, Sequence

from scriptdeps.core.paths.normalizer import (
    is_canonical_source,
    is_windows_style,
    resolve_canonical,
    to_canonical,
)
from scriptdeps.domain.errors import ConfigurationError
from scriptdeps.domain.path_models import PathMapping

logger = logging.getLogger(__name__)


class PathMapper:
    """
    Ordered, first-match-wins translator from canonical to local paths.

    Args:
        mappings: Translation rules. Every source must be canonical.

    Raises:
        ConfigurationError: If a rule source is not a canonical Unix-style path.
    """

    def __init__(self, mappings: Sequence[PathMapping]) -> None:
        self._mappings: List[PathMapping] = []
        for index, rule in enumerate(mappings):
            if not is_canonical_source(rule.source):
                raise ConfigurationError(
                    f"pathMappings[{index}].from must be a canonical Unix-style path "
                    f"(e.g. '/c/data'), got '{rule.source}'."
                )
            if not rule.target:
                raise ConfigurationError(f"pathMappings[{index}].to must not be empty.")
            self._mappings.append(rule)

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "PathMapper":
        """Build a mapper from a validated configuration dictionary."""
        return cls([PathMapping.from_dict(m) for m in cfg.get("pathMappings", [])])

    @property
    def mappings(self) -> List[PathMapping]:
        return list(self._mappings)

    # -------------------------------------------------------------------------
    # PUBLIC API
    # -------------------------------------------------------------------------

    def map(self, path: str) -> str:
        """
        Translate a path through the first matching rule.

        Args:
            path: Path in any convention.

        Returns:
            str: The mapped local path, or the original input untouched when
                 no rule matches.
        """
        canonical = to_canonical(path)

        for rule in self._mappings:
            # A rule source is matched without its trailing separator
            base = rule.source.rstrip("/")
            if canonical != (base or "/") and not canonical.startswith(base + "/"):
                continue

            relative = canonical[len(base):] if canonical != "/" else ""

            if is_windows_style(rule.target):
                joined = rule.target.replace("\\", "/") + relative
                return joined.replace("/", "\\")
            return rule.target + relative

        return path

    def resolve_local(self, pwd: str, path: str) -> str:
        """
        Resolve a referenced file to a path readable on this machine.

        Args:
            pwd: Working directory the file was referenced from.
            path: Path as written.

        Returns:
            str: Local path; mapped relative targets are made absolute
                 against the current working directory.
        """
        absolute = resolve_canonical(pwd, path)
        mapped = self.map(absolute)

        if mapped.startswith(("./", "../")):
            local = os.path.abspath(mapped)
        elif mapped.startswith((".\\", "..\\")):
            local = os.path.abspath(mapped.replace("\\", os.sep))
        else:
            return mapped

        # abspath drops the trailing separator of a directory reference
        if absolute.endswith("/") and not local.endswith(os.sep):
            local += os.sep
        return local
