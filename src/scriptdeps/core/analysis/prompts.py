from __future__ import annotations

"""
Oracle Prompt Definitions.

Holds the system prompt, the JSON schema the oracle must answer with, and
the per-file user prompt builder.
"""

import json
from typing import Any, Dict, Optional, Sequence

_PATH_ENTRY: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "path": {
            "type": "string",
            "description": (
                "The absolute path to the file. Use the current pwd to "
                "determine the absolute file path."
            ),
        },
        "description": {"type": "string"},
    },
    "required": ["path"],
}

ANALYSIS_RESULT_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "readFiles": {
            "type": "array",
            "items": _PATH_ENTRY,
            "description": (
                "Files read or sourced by the analyzed file but NOT executed. "
                "These files cannot pull in transitive dependencies."
            ),
        },
        "writeFiles": {
            "type": "array",
            "items": _PATH_ENTRY,
            "description": "Files the analyzed file writes to, e.g. log files or task queue files.",
        },
        "executeFiles": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "path": {
                        "type": "string",
                        "description": "The absolute path of the file being executed or imported.",
                    },
                    "pwd": {
                        "type": "string",
                        "description": "The absolute pwd when the file is imported or executed.",
                    },
                    "args": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "Arguments passed to the file when executed.",
                    },
                    "description": {"type": "string"},
                },
                "required": ["path", "pwd", "args"],
            },
            "description": (
                "Files the analyzed file executes or imports: external scripts, "
                "binaries or libraries that can have transitive dependencies. "
                "System commands (grep, date, ls, ...) are excluded."
            ),
        },
        "errors": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "path": {"type": "string"},
                    "pwd": {"type": "string"},
                    "error": {"type": "string"},
                },
                "required": ["path", "pwd", "error"],
            },
            "description": "Errors that occurred during file read operations.",
        },
    },
    "required": ["readFiles", "writeFiles", "executeFiles", "errors"],
}

SYSTEM_PROMPT_TEMPLATE = """You are an expert code dependency analyzer. Your task is to analyze source code and script files and identify all file operations.
The files you find will be used to build a dependency graph of the files a software system depends on.

WE DIFFERENTIATE 3 TYPES OF FILES:
1. Read-Files: files DIRECTLY loaded into memory BY THE CURRENT SCRIPT, mostly config files. They cannot have transitive dependencies.
2. Write-Files: files that are written to, such as log files or file-based job queues. They cannot have transitive dependencies.
3. Execute-Files: files that are executed (external scripts or binaries) or libraries that are imported. These CAN have transitive dependencies.

TOOL USE:
- Use the read_file tool ONLY when the current script directly opens or sources a file (open('config.json'), source config.sh).
- Do NOT use it for executed files, imported modules, standard library or package imports, system commands or remote resources.
- Do NOT use it for files passed as command-line arguments to OTHER programs. Those files belong to the called program:
    ./scripts/monitor.pl -c ./config/settings.ini   -> monitor.pl is an Execute-File, settings.ini is NOT a Read-File
    java example.jar -f /path/to/that.ini           -> example.jar is an Execute-File, that.ini is NOT a Read-File
- When read_file returns an error, include it in the `errors` field of your answer.

OUTPUT:
Answer with a single JSON object matching this JSON schema:

```
{schema}
```

RULES:
- Substitute variables and environment variables with the surrounding context whenever possible.
- Infer file paths from library imports (e.g. perl `use mailsenden;` implies a file `mailsenden.pm`).
- Do NOT analyze the files you find; only collect them.
- Identify all arguments passed to executed files.
- Track working directory changes (cd, chdir, process.chdir).
- Ignore code that has been commented out.
- Output absolute paths, resolved against the known working directory."""


def build_system_prompt() -> str:
    """Return the system prompt with the reply schema embedded."""
    return SYSTEM_PROMPT_TEMPLATE.replace("{schema}", json.dumps(ANALYSIS_RESULT_SCHEMA))


def build_user_prompt(
        pwd: str,
        file_path: str,
        content: str,
        args: Sequence[str] = (),
        file_type: Optional[str] = None,
) -> str:
    """
    Build the per-file analysis request.

    Args:
        pwd: Working directory of the analyzed file.
        file_path: Canonical absolute path of the analyzed file.
        content: File content.
        args: Arguments the file is invoked with.
        file_type: Optional type hint used as the code fence language.

    Returns:
        str: The user prompt.
    """
    kind = f"{file_type} file" if file_type else "file"
    cli_args = " ".join(args) or "none"
    return (
        f"Analyze this {kind} for ALL file operations.\n\n"
        f"Current Working Directory: {pwd}\n"
        f"Main File: {file_path}\n"
        f"CLI Arguments: {cli_args}\n\n"
        f"Main File Content:\n"
        f"```{file_type or ''}\n{content}\n```"
    )
