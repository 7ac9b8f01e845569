from __future__ import annotations

"""
Oracle Reply Parser.

Turns the free-text reply of the oracle into an AnalysisRecord. The reply is
expected to hold a single JSON object, usually inside a fenced code block.
Every failure (missing JSON, invalid JSON, schema mismatch) is reported as a
failed ParseResult; no exception leaves this module.
"""

import json
import logging
import re
from typing import Any, Dict, List, Optional, Tuple

from scriptdeps.domain.analysis_models import (
    AnalysisRecord,
    ExecutableEntry,
    FileEntry,
    FileError,
    ParseResult,
    parse_failure,
    parse_success,
)

logger = logging.getLogger(__name__)

_FENCED_BLOCK_RX = re.compile(r"```(?:json)?\s*\n?(.*?)```", re.DOTALL | re.IGNORECASE)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def parse_analysis_response(text: str) -> ParseResult:
    """
    Extract and validate the analysis record contained in an oracle reply.

    Args:
        text: Raw reply text.

    Returns:
        ParseResult: ok with the record, or a failure with a description.
    """
    if not text or not text.strip():
        return parse_failure("Empty response from oracle.", raw=text)

    candidate = extract_json_text(text)
    try:
        payload = json.loads(candidate)
    except json.JSONDecodeError as e:
        logger.debug(f"Oracle reply is not valid JSON: {e}")
        return parse_failure(f"Failed to parse JSON response: {e}", raw=text)

    return parse_analysis_payload(payload)


def parse_analysis_payload(payload: Any) -> ParseResult:
    """
    Validate an already decoded payload against the reply schema.

    Args:
        payload: Decoded JSON value.

    Returns:
        ParseResult: ok with the record, or a failure naming the first
                     offending field.
    """
    if not isinstance(payload, dict):
        return parse_failure("Response is not a JSON object.", raw=payload)

    try:
        record = AnalysisRecord(
            read_files=_file_entries(payload, "readFiles"),
            write_files=_file_entries(payload, "writeFiles"),
            execute_files=_executable_entries(payload),
            errors=_error_entries(payload),
        )
    except ValueError as e:
        return parse_failure(f"Schema validation failed: {e}", raw=payload)

    return parse_success(record, raw=payload)


def extract_json_text(text: str) -> str:
    """
    Locate the JSON document inside a reply.

    Lookup order: first fenced code block, then the outermost '{...}' span,
    then the raw text.
    """
    match = _FENCED_BLOCK_RX.search(text)
    if match:
        return match.group(1).strip()

    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end > start:
        return text[start:end + 1]

    return text.strip()

# -----------------------------------------------------------------------------
# SCHEMA HELPERS
# -----------------------------------------------------------------------------

def _require_list(payload: Dict[str, Any], key: str) -> List[Any]:
    if key not in payload:
        raise ValueError(f"missing required field '{key}'")
    value = payload[key]
    if not isinstance(value, list):
        raise ValueError(f"'{key}' must be an array")
    return value


def _require_str(item: Any, key: str, where: str) -> str:
    if not isinstance(item, dict):
        raise ValueError(f"{where} must be an object")
    value = item.get(key)
    if not isinstance(value, str):
        raise ValueError(f"{where}.{key} must be a string")
    return value


def _optional_str(item: Dict[str, Any], key: str, where: str) -> str:
    value = item.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"{where}.{key} must be a string")
    return value


def _file_entries(payload: Dict[str, Any], key: str) -> List[FileEntry]:
    entries: List[FileEntry] = []
    for i, item in enumerate(_require_list(payload, key)):
        where = f"{key}[{i}]"
        path = _require_str(item, "path", where)
        entries.append(FileEntry(path=path, description=_optional_str(item, "description", where)))
    return entries


def _executable_entries(payload: Dict[str, Any]) -> List[ExecutableEntry]:
    entries: List[ExecutableEntry] = []
    for i, item in enumerate(_require_list(payload, "executeFiles")):
        where = f"executeFiles[{i}]"
        path = _require_str(item, "path", where)
        pwd = _require_str(item, "pwd", where)
        args = _string_tuple(item.get("args"), f"{where}.args")
        entries.append(
            ExecutableEntry(
                path=path,
                pwd=pwd,
                args=args,
                description=_optional_str(item, "description", where),
            )
        )
    return entries


def _error_entries(payload: Dict[str, Any]) -> List[FileError]:
    entries: List[FileError] = []
    for i, item in enumerate(_require_list(payload, "errors")):
        where = f"errors[{i}]"
        entries.append(
            FileError(
                path=_require_str(item, "path", where),
                pwd=_require_str(item, "pwd", where),
                error=_require_str(item, "error", where),
            )
        )
    return entries


def _string_tuple(value: Optional[Any], where: str) -> Tuple[str, ...]:
    if value is None:
        raise ValueError(f"{where} is required")
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"{where} must be an array of strings")
    return tuple(value)
