from __future__ import annotations

"""
Single File Analyzer.

Glue between the graph builder and the oracle: resolves the local copy of a
worklist unit through the path mapping, reads its content and asks the
oracle for its references. Every failure becomes a FileError on the unit so
the traversal can continue.
"""

import logging

from scriptdeps.core.analysis.oracle.base import AnalysisOracle, OracleRequest
from scriptdeps.core.paths.mapper import PathMapper
from scriptdeps.core.paths.normalizer import resolve_canonical, to_canonical
from scriptdeps.domain.analysis_models import (
    AnalysisOutcome,
    outcome_failure,
    outcome_success,
)
from scriptdeps.domain.graph_models import FileUnit

logger = logging.getLogger(__name__)


class FileAnalyzer:
    """
    Analyze worklist units with an oracle.

    Args:
        mapper: Mapper translating production paths to local paths.
        oracle: Backend extracting references from file content.
    """

    def __init__(self, mapper: PathMapper, oracle: AnalysisOracle) -> None:
        self._mapper = mapper
        self._oracle = oracle

    def __call__(self, unit: FileUnit) -> AnalysisOutcome:
        return self.analyze(unit)

    def analyze(self, unit: FileUnit) -> AnalysisOutcome:
        """
        Analyze one unit.

        Args:
            unit: Worklist entry.

        Returns:
            AnalysisOutcome: The record, or a failure carrying one FileError.
        """
        pwd = to_canonical(unit.pwd) if unit.pwd else "/"
        file_path = resolve_canonical(pwd, unit.path)
        local_path = self._mapper.resolve_local(pwd, unit.path)

        logger.info(f"Analyzing {file_path}")
        logger.debug(f"Reading local copy {local_path}")

        try:
            with open(local_path, "r", encoding="utf-8", errors="replace") as f:
                content = f.read()
        except OSError as e:
            logger.error(f"Cannot read {file_path} ({local_path}): {e}")
            return outcome_failure(file_path, pwd, f"Failed to read file {local_path}: {e}")

        request = OracleRequest(
            pwd=pwd,
            file_path=file_path,
            local_path=local_path,
            content=content,
            file_type=unit.file_type,
            args=tuple(unit.args),
        )

        try:
            result = self._oracle.analyze(request)
        except Exception as e:
            logger.error(f"Oracle call failed for {file_path}: {e}")
            return outcome_failure(file_path, pwd, f"Oracle failure: {e}")

        if not result.ok or result.record is None:
            logger.error(f"Unusable oracle reply for {file_path}: {result.error}")
            return outcome_failure(file_path, pwd, result.error or "Oracle returned no result.")

        return outcome_success(result.record)
