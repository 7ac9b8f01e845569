from __future__ import annotations

"""
Configuration Validator.

Acts as a gatekeeper between the raw JSON configuration and the engine.
Scalar fields are coerced leniently (collecting warnings) unless strict mode
is requested; structural problems in entry points and path mappings are
always fatal since the traversal cannot start from a broken description.
"""

import logging
from typing import Any, Dict, List, Tuple

from scriptdeps.core.paths.normalizer import is_canonical_source
from scriptdeps.domain.config import get_default_config
from scriptdeps.domain.errors import ConfigurationError

logger = logging.getLogger(__name__)


def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the configuration dictionary.

    Args:
        config: The raw configuration dictionary (or untrusted input).
        strict: If True, raises TypeError/ValueError on invalid scalar data.

    Returns:
        Tuple[Dict, List[str]]: (Normalized Config, List of Warnings).

    Raises:
        ConfigurationError: On malformed entry points or path mappings, or a
                            non-positive 'maxIterations'.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    for field in ("pwd", "outDir"):
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    merged["maxIterations"] = _as_positive_int(
        merged.get("maxIterations"), defaults["maxIterations"], "maxIterations", warnings, strict
    )
    merged["entryPoints"] = _validate_entry_points(merged.get("entryPoints"), merged["pwd"])
    merged["pathMappings"] = _validate_mappings(merged.get("pathMappings"))

    for w in warnings:
        logger.warning(w)

    return merged, warnings

# -----------------------------------------------------------------------------
# SCALAR COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Ensure value is a string."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback
    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_positive_int(value: Any, fallback: int, field: str, warnings: List[str], strict: bool) -> int:
    """
    Coerce value to a strictly positive integer.

    Wrongly typed values fall back leniently. A zero or negative count is
    always fatal: a run with no iterations cannot start.
    """
    if value is None:
        return fallback
    if isinstance(value, bool):
        pass
    elif isinstance(value, int):
        if value > 0:
            return value
        raise ConfigurationError(f"Field '{field}' must be a positive integer, received {value}.")
    elif isinstance(value, str) and not strict:
        s = value.strip()
        if s.isdigit():
            if int(s) <= 0:
                raise ConfigurationError(f"Field '{field}' must be a positive integer, received '{value}'.")
            warnings.append(f"Field '{field}' converted from '{value}' to {int(s)}.")
            return int(s)

    msg = f"Invalid field '{field}': expected positive int, received {value!r}."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback

# -----------------------------------------------------------------------------
# STRUCTURAL VALIDATION
# -----------------------------------------------------------------------------

def _validate_entry_points(value: Any, default_pwd: str) -> List[Dict[str, Any]]:
    """Normalize entry points; a missing pwd inherits the top-level one."""
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigurationError(
            f"'entryPoints' must be a list, received {type(value).__name__}."
        )

    out: List[Dict[str, Any]] = []
    for i, item in enumerate(value):
        if not isinstance(item, dict):
            raise ConfigurationError(f"entryPoints[{i}] must be an object.")

        path = item.get("path")
        if not isinstance(path, str) or not path.strip():
            raise ConfigurationError(f"entryPoints[{i}].path must be a non-empty string.")

        pwd = item.get("pwd") or default_pwd
        if not isinstance(pwd, str):
            raise ConfigurationError(f"entryPoints[{i}].pwd must be a string.")

        args = item.get("args") or []
        if not isinstance(args, list) or not all(isinstance(a, str) for a in args):
            raise ConfigurationError(f"entryPoints[{i}].args must be a list of strings.")

        out.append({"pwd": pwd, "path": path.strip(), "args": list(args)})
    return out


def _validate_mappings(value: Any) -> List[Dict[str, str]]:
    """Check mapping shape; order is kept since the first match wins."""
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigurationError(
            f"'pathMappings' must be a list, received {type(value).__name__}."
        )

    out: List[Dict[str, str]] = []
    for i, item in enumerate(value):
        if not isinstance(item, dict):
            raise ConfigurationError(f"pathMappings[{i}] must be an object with 'from' and 'to'.")

        source = item.get("from")
        target = item.get("to")
        if not isinstance(source, str) or not is_canonical_source(source):
            raise ConfigurationError(
                f"pathMappings[{i}].from must be a canonical Unix-style path (e.g. '/c/data'), got {source!r}."
            )
        if not isinstance(target, str) or not target.strip():
            raise ConfigurationError(f"pathMappings[{i}].to must be a non-empty string.")

        out.append({"from": source, "to": target})
    return out
