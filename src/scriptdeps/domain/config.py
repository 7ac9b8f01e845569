from __future__ import annotations

"""
Configuration Domain Management.

Loads the JSON analysis configuration: the default working directory, the
entry points to start the traversal from and the ordered path mappings used
to locate production files on this machine.
"""

import json
import logging
import os
from typing import Any, Dict

from scriptdeps.domain.constants import DEFAULT_MAX_ITERATIONS, DEFAULT_OUTPUT_DIR
from scriptdeps.domain.errors import ConfigurationError

logger = logging.getLogger(__name__)


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        "pwd": "/",
        "entryPoints": [],
        "pathMappings": [],
        "outDir": DEFAULT_OUTPUT_DIR,
        "maxIterations": DEFAULT_MAX_ITERATIONS,
    }


def load_config(path: str) -> Dict[str, Any]:
    """
    Read a configuration file from disk.

    Args:
        path: Location of the JSON configuration.

    Returns:
        Dict[str, Any]: Raw, unvalidated configuration.

    Raises:
        ConfigurationError: If the file is missing, unreadable or not JSON.
    """
    abs_path = os.path.abspath(path)
    if not os.path.isfile(abs_path):
        raise ConfigurationError(f"Configuration file not found: {abs_path}")

    try:
        with open(abs_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Configuration file is not valid JSON ({abs_path}): {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration file {abs_path}: {e}") from e

    logger.debug(f"Configuration loaded from {abs_path}")
    return data
