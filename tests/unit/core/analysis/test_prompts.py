from __future__ import annotations

"""
Unit tests for oracle prompt construction.
"""

import json

from scriptdeps.core.analysis.prompts import (
    ANALYSIS_RESULT_SCHEMA,
    build_system_prompt,
    build_user_prompt,
)


def test_system_prompt_embeds_schema() -> None:
    prompt = build_system_prompt()

    assert "{schema}" not in prompt
    assert json.dumps(ANALYSIS_RESULT_SCHEMA) in prompt
    assert "read_file" in prompt


def test_schema_requires_all_record_fields() -> None:
    assert ANALYSIS_RESULT_SCHEMA["required"] == ["readFiles", "writeFiles", "executeFiles", "errors"]


def test_user_prompt_contains_context() -> None:
    prompt = build_user_prompt("/opt/app", "/opt/app/run.sh", "echo hi", args=("-v", "now"))

    assert "Current Working Directory: /opt/app" in prompt
    assert "Main File: /opt/app/run.sh" in prompt
    assert "CLI Arguments: -v now" in prompt
    assert "```\necho hi\n```" in prompt


def test_user_prompt_without_args_and_with_type() -> None:
    prompt = build_user_prompt("/", "/x.pl", "print 1;", file_type="perl")

    assert "CLI Arguments: none" in prompt
    assert "Analyze this perl file" in prompt
    assert "```perl\n" in prompt
