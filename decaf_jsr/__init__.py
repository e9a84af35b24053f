"""
decaf_jsr: decaf deploy step that publishes a package to jsr.

This package provides:
- Settings: environment-driven configuration (input file, test overrides).
- DeployInput: the version and test-mode flag decaf hands to a deploy step.
- Config lookup: jsr.json, deno.jsonc or deno.json, first match wins.
- DeploymentChecker: is the version already on jsr?
- JsrPublishStep: `deno publish` or `npx jsr publish` with the right flags.
- JsrDeployment: the whole run, returning a process exit code.
"""

from .config import Settings
from .errors import DecafJsrError, ConfigNotFoundError, PackageConfigError, InputUnavailableError
from .deploy_input import DeployInput, read_deploy_input
from .package_config import CONFIG_FILENAMES, PackageConfig, find_config_file, load_package_config
from .checker import DeploymentChecker, IsItDeployedChecker, FixedDeploymentChecker, deployment_checker_from_settings
from .tools import ToolProbe, PathToolProbe, FixedToolProbe, tool_probe_from_settings
from .step import Step, CommandStep
from .publish import JsrPublishStep
from .deploy import JsrDeployment

__version__ = "0.1.0"

__all__ = [
    "Settings",
    # Errors
    "DecafJsrError",
    "ConfigNotFoundError",
    "PackageConfigError",
    "InputUnavailableError",
    # Input
    "DeployInput",
    "read_deploy_input",
    # Package config
    "CONFIG_FILENAMES",
    "PackageConfig",
    "find_config_file",
    "load_package_config",
    # Deployment check
    "DeploymentChecker",
    "IsItDeployedChecker",
    "FixedDeploymentChecker",
    "deployment_checker_from_settings",
    # Tool probe
    "ToolProbe",
    "PathToolProbe",
    "FixedToolProbe",
    "tool_probe_from_settings",
    # Steps
    "Step",
    "CommandStep",
    "JsrPublishStep",
    "JsrDeployment",
]
