"""Decide whether a package version is already live on jsr."""
from __future__ import annotations

import logging
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from .config import DID_ALREADY_DEPLOY_ENV, Settings

logger = logging.getLogger(__name__)


class DeploymentChecker(ABC):
    """Strategy for answering "is <name>@<version> already published?"."""

    @abstractmethod
    def is_deployed(self, package_name: str, version: str, cwd: Path) -> bool:
        """Return True when the version is already published."""


class IsItDeployedChecker(DeploymentChecker):
    """Ask the ``is-it-deployed`` npm tool, run through npx.

    Only the exit code matters: 0 means the version exists. Any other code, or
    a failure to start the process at all, counts as not deployed so that the
    publish attempt runs and reports the real problem.
    """

    package_manager = "jsr"

    def __init__(self, runner: str = "npx") -> None:
        self.runner = runner

    def build_command(self, package_name: str, version: str) -> List[str]:
        return [
            self.runner,
            "is-it-deployed",
            "--package-manager",
            self.package_manager,
            "--package-name",
            package_name,
            "--package-version",
            version,
        ]

    def is_deployed(self, package_name: str, version: str, cwd: Path) -> bool:
        cmd = self.build_command(package_name, version)
        try:
            cp = subprocess.run(cmd, cwd=str(cwd), check=False)
        except OSError as e:
            logger.warning("Could not run %s, assuming %s@%s is not deployed: %s", self.runner, package_name, version, e)
            return False
        logger.debug("is-it-deployed exited with code %s", cp.returncode)
        return cp.returncode == 0


class FixedDeploymentChecker(DeploymentChecker):
    """Return a preset answer without touching the network."""

    def __init__(self, deployed: bool) -> None:
        self.deployed = deployed

    def is_deployed(self, package_name: str, version: str, cwd: Path) -> bool:
        return self.deployed


def deployment_checker_from_settings(settings: Optional[Settings] = None) -> DeploymentChecker:
    settings = settings or Settings()
    override = settings.did_already_deploy_override
    if override is not None:
        logger.debug("%s=%s, skipping the registry check", DID_ALREADY_DEPLOY_ENV, str(override).lower())
        return FixedDeploymentChecker(override)
    return IsItDeployedChecker()
