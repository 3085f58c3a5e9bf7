"""Shared fixtures for deploykit tests."""

import json
import os
import sys

import pytest

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from deploykit.loader import load_config  # noqa: E402

DEVKEY = "deadbeef" * 8


@pytest.fixture
def devkey_file(tmp_path):
    """A one-line signing key file."""
    path = tmp_path / ".devkey"
    path.write_text(DEVKEY + "\n")
    return path


@pytest.fixture
def secrets_file(tmp_path):
    """A secrets file with both Infura credentials."""
    path = tmp_path / ".secrets.json"
    path.write_text(json.dumps({"infuraProjectId": "abc123", "infuraSecret": "s3cr3t-value"}))
    return path


@pytest.fixture
def env():
    """An empty environment accessor."""
    return {}.get


@pytest.fixture
def deployment(devkey_file, secrets_file, env):
    """A configuration backed by the temporary secret files."""
    return load_config(devkey_file, secrets_file, env)
