from __future__ import annotations

"""
Domain Constants.

Centralizes defaults shared by the engine, the oracle layer and the
interfaces: traversal limits, model identifiers, report file naming and
tree markers.
"""

from typing import Dict

# -----------------------------------------------------------------------------
# TRAVERSAL
# -----------------------------------------------------------------------------
DEFAULT_MAX_ITERATIONS = 100
DEFAULT_CONFIG_FILE = "./config.json"
DEFAULT_OUTPUT_DIR = "./output"

# -----------------------------------------------------------------------------
# ORACLE (LLM PROVIDER)
# -----------------------------------------------------------------------------
DEFAULT_BEDROCK_MODEL = "eu.anthropic.claude-sonnet-4-20250514-v1:0"
DEFAULT_ANTHROPIC_MODEL = "claude-sonnet-4-20250514"
MAX_TOOL_STEPS = 10
MAX_OUTPUT_TOKENS = 8192

# Bytes inspected when sniffing a file's type
FILE_TYPE_HEADER_BYTES = 8192

# -----------------------------------------------------------------------------
# REPORTING
# -----------------------------------------------------------------------------
REPORT_FILE_PREFIX = "analysis"
REPORT_TIMESTAMP_FORMAT = "%Y%m%d-%H%M%S"

SECTION_READ = "Read Files"
SECTION_WRITE = "Written Files"
SECTION_EXECUTABLES = "Executables"
SECTION_BINARIES = "Binaries"
SECTION_ERRORS = "Errors"

TREE_MARKERS: Dict[str, str] = {
    "read": "[R]",
    "write": "[W]",
    "execute": "[E]",
    "binary": "[B]",
}
CIRCULAR_MARKER = "[CIRCULAR]"
SEE_ABOVE_MARKER = "[SEE ABOVE]"
