from __future__ import annotations

"""
Base Definitions for Analysis Oracles.

An oracle receives the content of one file together with the context it runs
in and answers with the files that content reads, writes and executes.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Tuple

from scriptdeps.domain.analysis_models import ParseResult


@dataclass(frozen=True)
class OracleRequest:
    """
    Everything the oracle needs to analyze one file.

    Attributes:
        pwd: Canonical working directory of the file.
        file_path: Canonical absolute path of the file.
        local_path: Path the content was read from on this machine.
        content: File content.
        file_type: Optional type hint.
        args: Arguments the file is invoked with.
    """
    pwd: str
    file_path: str
    local_path: str
    content: str
    file_type: Optional[str] = None
    args: Tuple[str, ...] = ()


class AnalysisOracle(ABC):
    """
    Abstract base class for dependency extraction backends.
    """

    @abstractmethod
    def analyze(self, request: OracleRequest) -> ParseResult:
        """
        Extract read/write/execute references from one file.

        Args:
            request: File content and context.

        Returns:
            ParseResult: Tagged result holding the AnalysisRecord.
        """
        pass
