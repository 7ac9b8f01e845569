from __future__ import annotations

from .anthropic import (
    ANTHROPIC_AVAILABLE,
    AnthropicOracle,
    bedrock_configured,
    credentials_configured,
)
from .base import AnalysisOracle, OracleRequest

__all__ = [
    "AnalysisOracle",
    "OracleRequest",
    "AnthropicOracle",
    "ANTHROPIC_AVAILABLE",
    "bedrock_configured",
    "credentials_configured",
]
