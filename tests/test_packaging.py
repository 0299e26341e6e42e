"""
Tests for the declared dependency sets.
"""

import os

import pytest

tomllib = pytest.importorskip("tomllib")

PYPROJECT = os.path.join(os.path.dirname(__file__), "..", "pyproject.toml")


@pytest.fixture(scope="module")
def project():
    with open(PYPROJECT, "rb") as f:
        return tomllib.load(f)["project"]


def _names(requirements):
    return {req.split(">")[0].split("=")[0].strip() for req in requirements}


def test_script_only_libraries_stay_out_of_runtime(project):
    runtime = _names(project["dependencies"])

    assert "python-dotenv" not in runtime
    assert "requests" not in runtime


def test_examples_extra_covers_smoke_script(project):
    examples = _names(project["optional-dependencies"]["examples"])

    assert {"requests", "python-dotenv"} <= examples
