"""Tests for the deployment checker and tool probe"""
import subprocess
from pathlib import Path
from unittest.mock import patch

from decaf_jsr.checker import (
    FixedDeploymentChecker,
    IsItDeployedChecker,
    deployment_checker_from_settings,
)
from decaf_jsr.config import Settings
from decaf_jsr.tools import FixedToolProbe, PathToolProbe, tool_probe_from_settings


class TestIsItDeployedChecker:
    """Test the subprocess-backed checker"""

    def test_command(self):
        """Test the is-it-deployed invocation"""
        checker = IsItDeployedChecker()
        assert checker.build_command("@test/pkg", "1.2.3") == [
            "npx",
            "is-it-deployed",
            "--package-manager",
            "jsr",
            "--package-name",
            "@test/pkg",
            "--package-version",
            "1.2.3",
        ]

    @patch("decaf_jsr.checker.subprocess.run")
    def test_exit_zero_means_deployed(self, mock_run, temp_dir):
        """Test exit code 0 is read as already deployed"""
        mock_run.return_value = subprocess.CompletedProcess(args=[], returncode=0)

        assert IsItDeployedChecker().is_deployed("@test/pkg", "1.2.3", temp_dir) is True
        args, kwargs = mock_run.call_args
        assert args[0][1] == "is-it-deployed"
        assert kwargs["cwd"] == str(temp_dir)

    @patch("decaf_jsr.checker.subprocess.run")
    def test_non_zero_means_not_deployed(self, mock_run, temp_dir):
        """Test any other exit code is read as not deployed"""
        mock_run.return_value = subprocess.CompletedProcess(args=[], returncode=1)
        assert IsItDeployedChecker().is_deployed("@test/pkg", "1.2.3", temp_dir) is False

    @patch("decaf_jsr.checker.subprocess.run", side_effect=FileNotFoundError("npx"))
    def test_start_failure_fails_open(self, mock_run, temp_dir):
        """Test a checker that cannot start reports not deployed"""
        assert IsItDeployedChecker().is_deployed("@test/pkg", "1.2.3", temp_dir) is False


class TestCheckerFromSettings:
    """Test deployment_checker_from_settings()"""

    @patch("decaf_jsr.checker.subprocess.run")
    def test_override_true_skips_subprocess(self, mock_run):
        """Test the "true" override answers without running anything"""
        checker = deployment_checker_from_settings(Settings({"DECAF_SCRIPT_JSR_DID_ALREADY_DEPLOY": "true"}))

        assert isinstance(checker, FixedDeploymentChecker)
        assert checker.is_deployed("@test/pkg", "1.0.0", Path(".")) is True
        mock_run.assert_not_called()

    def test_override_false(self):
        """Test the "false" override"""
        checker = deployment_checker_from_settings(Settings({"DECAF_SCRIPT_JSR_DID_ALREADY_DEPLOY": "false"}))
        assert checker.is_deployed("@test/pkg", "1.0.0", Path(".")) is False

    def test_override_is_idempotent(self):
        """Test asking twice gives the same answer"""
        checker = deployment_checker_from_settings(Settings({"DECAF_SCRIPT_JSR_DID_ALREADY_DEPLOY": "true"}))
        first = checker.is_deployed("@test/pkg", "1.0.0", Path("."))
        second = checker.is_deployed("@test/pkg", "1.0.0", Path("."))
        assert first is second is True

    def test_no_override_uses_subprocess_checker(self):
        """Test unrecognised override values fall back to the real check"""
        for env in ({}, {"DECAF_SCRIPT_JSR_DID_ALREADY_DEPLOY": "yes"}):
            assert isinstance(deployment_checker_from_settings(Settings(env)), IsItDeployedChecker)


class TestToolProbe:
    """Test tool presence probes"""

    @patch("decaf_jsr.tools.shutil.which")
    def test_path_probe(self, mock_which):
        """Test PATH lookup result drives the answer"""
        mock_which.return_value = "/usr/local/bin/deno"
        assert PathToolProbe().is_installed("deno") is True

        mock_which.return_value = None
        assert PathToolProbe().is_installed("deno") is False

    def test_fixed_probe(self):
        """Test FixedToolProbe ignores the tool name"""
        assert FixedToolProbe(True).is_installed("deno") is True
        assert FixedToolProbe(False).is_installed("anything") is False

    def test_probe_from_settings(self):
        """Test the deno override selects a fixed probe"""
        probe = tool_probe_from_settings(Settings({"DECAF_SCRIPT_JSR_IS_DENO_INSTALLED": "false"}))
        assert isinstance(probe, FixedToolProbe)
        assert probe.is_installed("deno") is False

        assert isinstance(tool_probe_from_settings(Settings({})), PathToolProbe)
