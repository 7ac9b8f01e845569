from __future__ import annotations

"""
Unit tests for configuration validation.
"""

import pytest

from scriptdeps.core.pipeline.validator import validate_config
from scriptdeps.domain.constants import DEFAULT_MAX_ITERATIONS
from scriptdeps.domain.errors import ConfigurationError


def test_valid_config_passes(mock_config_dict) -> None:
    """TC-01: A well-formed configuration is returned without warnings."""
    cfg, warnings = validate_config(mock_config_dict)

    assert warnings == []
    assert cfg["entryPoints"] == [{"pwd": "/opt/app", "path": "main.sh", "args": []}]
    assert cfg["pathMappings"] == [{"from": "/opt/app", "to": "./app"}]


def test_entry_point_inherits_top_level_pwd() -> None:
    cfg, _ = validate_config({"pwd": "/srv", "entryPoints": [{"path": "run.sh"}]})

    assert cfg["entryPoints"][0]["pwd"] == "/srv"


def test_defaults_fill_missing_fields() -> None:
    cfg, _ = validate_config({})

    assert cfg["pwd"] == "/"
    assert cfg["maxIterations"] == DEFAULT_MAX_ITERATIONS
    assert cfg["entryPoints"] == []


@pytest.mark.parametrize("value", ["abc", "-3", True, 2.5])
def test_invalid_max_iterations_falls_back(value) -> None:
    """TC-02: Wrongly typed scalars are replaced and reported in lenient mode."""
    cfg, warnings = validate_config({"maxIterations": value})

    assert cfg["maxIterations"] == DEFAULT_MAX_ITERATIONS
    assert warnings


@pytest.mark.parametrize("value", [0, -3, "0"])
def test_non_positive_max_iterations_is_fatal(value) -> None:
    """TC-04: A zero or negative iteration cap cannot start a run."""
    with pytest.raises(ConfigurationError, match="maxIterations"):
        validate_config({"maxIterations": value})


def test_numeric_string_is_converted() -> None:
    cfg, warnings = validate_config({"maxIterations": "25"})

    assert cfg["maxIterations"] == 25
    assert len(warnings) == 1


def test_strict_mode_raises() -> None:
    with pytest.raises(ValueError):
        validate_config({"maxIterations": 0}, strict=True)
    with pytest.raises(TypeError):
        validate_config({"pwd": 42}, strict=True)
    with pytest.raises(TypeError):
        validate_config(["not", "a", "dict"], strict=True)


def test_non_dict_uses_defaults() -> None:
    cfg, warnings = validate_config(None)

    assert cfg["pwd"] == "/"
    assert warnings


@pytest.mark.parametrize("config", [
    {"entryPoints": "main.sh"},
    {"entryPoints": [{"pwd": "/"}]},
    {"entryPoints": [{"path": "a.sh", "args": "x"}]},
    {"pathMappings": {"from": "/a", "to": "b"}},
    {"pathMappings": [{"from": "C:\\data", "to": "./data"}]},
    {"pathMappings": [{"from": "/data", "to": ""}]},
    {"pathMappings": [{"from": "/opt//app", "to": "./app"}]},
])
def test_structural_errors_are_fatal(config) -> None:
    """TC-03: Broken entry points or mappings raise ConfigurationError."""
    with pytest.raises(ConfigurationError):
        validate_config(config)
