from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Sequence

from rich.console import Console
from rich.markup import escape

from .checker import DeploymentChecker, deployment_checker_from_settings
from .config import Settings
from .deploy_input import read_deploy_input
from .errors import ConfigNotFoundError
from .package_config import CONFIG_FILENAMES, find_config_file, load_package_config
from .publish import JsrPublishStep
from .tools import ToolProbe, tool_probe_from_settings

logger = logging.getLogger(__name__)

console = Console(soft_wrap=True, highlight=False)


class JsrDeployment:
    """One run of the jsr deploy step.

    Locates the package config, reads decaf's input, checks whether the
    version is already on jsr and publishes it if not. ``run()`` returns the
    process exit code.

    The deployment checker and tool probe default to the environment-driven
    strategies; pass fixed ones to run without network or PATH lookups.
    """

    def __init__(
        self,
        package_path: Path,
        extra_args: Optional[Sequence[str]] = None,
        settings: Optional[Settings] = None,
        checker: Optional[DeploymentChecker] = None,
        tool_probe: Optional[ToolProbe] = None,
    ) -> None:
        self.package_path = Path(package_path)
        self.extra_args: List[str] = list(extra_args or [])
        self.settings = settings or Settings()
        self.checker = checker or deployment_checker_from_settings(self.settings)
        self.tool_probe = tool_probe or tool_probe_from_settings(self.settings)

    def locate_config(self) -> str:
        config_file = find_config_file(self.package_path)
        if config_file is None:
            raise ConfigNotFoundError(self.package_path, CONFIG_FILENAMES)
        logger.debug("Using %s", self.package_path / config_file)
        return config_file

    def run(self) -> int:
        try:
            config_file = self.locate_config()
        except ConfigNotFoundError as e:
            console.print(escape(str(e)))
            return 1

        deploy_input = read_deploy_input(self.settings)
        version = deploy_input.next_version_name

        console.print("Time to deploy to jsr!")
        console.print("")

        package_name = load_package_config(self.package_path, config_file).name

        console.print(f"Checking if version {escape(version)} of {escape(package_name)} is already deployed...")
        if self.checker.is_deployed(package_name, version, self.package_path):
            console.print(f"[green]✓[/green] Version {escape(version)} of {escape(package_name)} is already deployed to jsr")
            console.print("Therefore, I'm going to skip publishing to jsr right now. Deploying to jsr complete!")
            return 0
        console.print(f"[green]✓[/green] Version {escape(version)} has not yet been deployed to jsr. Proceeding to publish...")

        console.print("Publishing to jsr...")
        step = JsrPublishStep(
            id="jsr_publish",
            config={
                "version": version,
                "test_mode": deploy_input.test_mode,
                "extra_args": self.extra_args,
                "cwd": str(self.package_path),
            },
            tool_probe=self.tool_probe,
        )
        result = step.run()
        if result.get("status") != "success":
            rc = result.get("returncode")
            logger.error("Publishing to jsr failed: %s", result.get("error"))
            return rc if isinstance(rc, int) and rc > 0 else 1

        console.print(f"[green]✓[/green] Successfully published {escape(package_name)}@{escape(version)} to jsr!")
        if deploy_input.test_mode:
            console.print("Note: You were in test mode, so no real publishing occurred. 😉")
        return 0
