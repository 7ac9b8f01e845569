from __future__ import annotations

"""
Oracle Tools.

Implements the read_file tool the oracle may call while analyzing a script
that directly loads other files (config files, sourced shell fragments).
Paths are resolved through the PathMapper, so the oracle keeps reasoning in
production paths while the content is read from the local copy.
"""

import base64
import logging
from typing import Any, Dict

from scriptdeps.core.paths.mapper import PathMapper

logger = logging.getLogger(__name__)

READ_FILE_TOOL_NAME = "read_file"


class ReadFileTool:
    """
    Read a file referenced by the analyzed script.

    Args:
        mapper: Mapper translating production paths to local paths.
    """

    def __init__(self, mapper: PathMapper) -> None:
        self._mapper = mapper

    @property
    def definition(self) -> Dict[str, Any]:
        """Tool declaration in the Anthropic Messages API format."""
        return {
            "name": READ_FILE_TOOL_NAME,
            "description": (
                "Read the contents of a file from the filesystem. "
                "Only use this for files the script loads directly."
            ),
            "input_schema": {
                "type": "object",
                "properties": {
                    "filepath": {
                        "type": "string",
                        "description": "The path to the file to read.",
                    },
                    "pwd": {
                        "type": "string",
                        "description": "Working directory used to resolve relative paths.",
                    },
                    "encoding": {
                        "type": "string",
                        "enum": ["utf8", "base64"],
                        "description": "The encoding to use when reading the file.",
                    },
                },
                "required": ["filepath"],
            },
        }

    def execute(self, filepath: str, pwd: str = "", encoding: str = "utf8") -> Dict[str, Any]:
        """
        Read the mapped file.

        Args:
            filepath: Path as written in the analyzed script.
            pwd: Working directory for relative paths.
            encoding: 'utf8' for text, 'base64' for raw bytes.

        Returns:
            Dict[str, Any]: {'success', 'content', 'filepath'} or
                            {'success', 'error', 'filepath'}.
        """
        local_path = self._mapper.resolve_local(pwd or "/", filepath)
        logger.debug(f"read_file tool: {filepath} -> {local_path}")

        try:
            with open(local_path, "rb") as f:
                data = f.read()
        except OSError as e:
            logger.warning(f"read_file tool could not read {local_path}: {e}")
            return {"success": False, "error": str(e), "filepath": filepath}

        if encoding == "base64":
            content = base64.b64encode(data).decode("ascii")
        else:
            content = data.decode("utf-8", errors="replace")

        return {"success": True, "content": content, "filepath": filepath}
