"""Pytest configuration and fixtures for decaf-jsr tests"""
import json
import tempfile
from pathlib import Path

import pytest

from decaf_jsr.config import DID_ALREADY_DEPLOY_ENV, IS_DENO_INSTALLED_ENV, LOG_LEVEL_ENV


@pytest.fixture
def temp_dir():
    """Provide a temporary directory for test files"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep overrides from the outer environment out of the tests"""
    for var in ("DATA_FILE_PATH", DID_ALREADY_DEPLOY_ENV, IS_DENO_INSTALLED_ENV, LOG_LEVEL_ENV):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def make_package(temp_dir):
    """Create a package directory with one config file and a module to publish"""

    def _make(config_file="deno.json", name="@test/test-package", version="1.0.0"):
        pkg_dir = temp_dir / "pkg"
        pkg_dir.mkdir(exist_ok=True)
        config = {
            "name": name,
            "version": version,
            "description": "Test package",
            "license": "MIT",
            "exports": "./index.ts",
        }
        (pkg_dir / config_file).write_text(json.dumps(config, indent=2))
        (pkg_dir / "index.ts").write_text("export const test = true;")
        return pkg_dir

    return _make


@pytest.fixture
def make_data_file(temp_dir):
    """Write the deploy step input decaf would provide"""

    def _make(next_version_name="1.2.3", test_mode=True):
        data_file = temp_dir / "input.json"
        data_file.write_text(json.dumps({"nextVersionName": next_version_name, "testMode": test_mode}))
        return data_file

    return _make


@pytest.fixture
def executed_commands(monkeypatch):
    """Record publish commands instead of running them"""
    from decaf_jsr.step import CommandStep

    commands = []

    def fake_run(self):
        cmd = list(self.config["cmd"])
        commands.append(cmd)
        return {"status": "success", "returncode": 0, "duration": 0.0, "cmd": cmd}

    monkeypatch.setattr(CommandStep, "run", fake_run)
    return commands
