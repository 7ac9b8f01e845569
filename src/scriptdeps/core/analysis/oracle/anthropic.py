from __future__ import annotations

"""
Anthropic Claude Analysis Oracle.

Uses the Anthropic SDK to extract file references from script content. When
AWS credentials are present the request goes through Amazon Bedrock,
otherwise through the Anthropic API with ANTHROPIC_API_KEY. The model may
call the read_file tool for files the script loads directly; the tool loop
is bounded by MAX_TOOL_STEPS.
"""

import json
import logging
import os
from typing import Any, Dict, List, Optional

from scriptdeps.core.analysis.oracle.base import AnalysisOracle, OracleRequest
from scriptdeps.core.analysis.prompts import build_system_prompt, build_user_prompt
from scriptdeps.core.analysis.response_parser import parse_analysis_response
from scriptdeps.core.analysis.tools import READ_FILE_TOOL_NAME, ReadFileTool
from scriptdeps.domain.analysis_models import ParseResult, parse_failure
from scriptdeps.domain.constants import (
    DEFAULT_ANTHROPIC_MODEL,
    DEFAULT_BEDROCK_MODEL,
    MAX_OUTPUT_TOKENS,
    MAX_TOOL_STEPS,
)

logger = logging.getLogger(__name__)

# --- Dynamic Dependency Check ---
ANTHROPIC_AVAILABLE = False
try:
    import anthropic
    ANTHROPIC_AVAILABLE = True
except ImportError:
    pass

_BEDROCK_ENV_VARS = ("AWS_REGION", "AWS_ACCESS_KEY_ID", "AWS_SECRET_ACCESS_KEY")


def bedrock_configured() -> bool:
    """Check whether every variable needed for Bedrock is set."""
    return all(os.environ.get(name) for name in _BEDROCK_ENV_VARS)


def credentials_configured() -> bool:
    """Check whether either Bedrock or Anthropic API credentials are set."""
    return bedrock_configured() or bool(os.environ.get("ANTHROPIC_API_KEY"))


class AnthropicOracle(AnalysisOracle):
    """
    Oracle backed by a Claude model.

    Args:
        read_tool: Tool exposed to the model for direct file loads.
        client: Pre-built SDK client. Built from the environment when None.
        model: Model identifier. Resolved from the environment when None.

    Raises:
        ImportError: If the 'anthropic' package is not installed.
    """

    def __init__(
            self,
            read_tool: ReadFileTool,
            client: Optional[Any] = None,
            model: Optional[str] = None,
    ) -> None:
        if client is None and not ANTHROPIC_AVAILABLE:
            raise ImportError("Library 'anthropic' is not installed.")

        self._read_tool = read_tool
        self._system_prompt = build_system_prompt()

        if client is not None:
            self._client = client
            self._model = model or os.environ.get("SCRIPTDEPS_MODEL", DEFAULT_ANTHROPIC_MODEL)
        elif bedrock_configured():
            self._client = anthropic.AnthropicBedrock(aws_region=os.environ["AWS_REGION"])
            self._model = model or os.environ.get("AWS_MODEL", DEFAULT_BEDROCK_MODEL)
            logger.debug(f"Using Amazon Bedrock with model {self._model}")
        else:
            self._client = anthropic.Anthropic(api_key=os.environ.get("ANTHROPIC_API_KEY"))
            self._model = model or os.environ.get("SCRIPTDEPS_MODEL", DEFAULT_ANTHROPIC_MODEL)
            logger.debug(f"Using Anthropic API with model {self._model}")

    @property
    def model(self) -> str:
        return self._model

    def analyze(self, request: OracleRequest) -> ParseResult:
        """
        Run the tool loop for one file and parse the final reply.

        SDK errors propagate to the caller.
        """
        messages: List[Dict[str, Any]] = [
            {
                "role": "user",
                "content": build_user_prompt(
                    pwd=request.pwd,
                    file_path=request.file_path,
                    content=request.content,
                    args=request.args,
                    file_type=request.file_type,
                ),
            }
        ]

        for step in range(1, MAX_TOOL_STEPS + 1):
            response = self._client.messages.create(
                model=self._model,
                max_tokens=MAX_OUTPUT_TOKENS,
                temperature=0,
                system=self._system_prompt,
                tools=[self._read_tool.definition],
                messages=messages,
            )

            if response.stop_reason != "tool_use":
                return parse_analysis_response(_reply_text(response))

            logger.debug(f"Oracle step {step} for {request.file_path} requested tools")
            messages.append({"role": "assistant", "content": response.content})
            messages.append({"role": "user", "content": self._run_tools(response, request.pwd)})

        logger.warning(f"Oracle exceeded {MAX_TOOL_STEPS} tool steps for {request.file_path}")
        return parse_failure(f"Tool step limit of {MAX_TOOL_STEPS} reached without a final answer.")

    def _run_tools(self, response: Any, pwd: str) -> List[Dict[str, Any]]:
        results: List[Dict[str, Any]] = []
        for block in response.content:
            if getattr(block, "type", None) != "tool_use":
                continue

            if block.name == READ_FILE_TOOL_NAME:
                params = dict(block.input or {})
                outcome = self._read_tool.execute(
                    filepath=str(params.get("filepath", "")),
                    pwd=str(params.get("pwd") or pwd),
                    encoding=str(params.get("encoding", "utf8")),
                )
            else:
                outcome = {"success": False, "error": f"Unknown tool '{block.name}'"}

            results.append({
                "type": "tool_result",
                "tool_use_id": block.id,
                "content": json.dumps(outcome),
                "is_error": not outcome.get("success", False),
            })
        return results


def _reply_text(response: Any) -> str:
    return "".join(
        block.text for block in response.content
        if getattr(block, "type", None) == "text"
    )
