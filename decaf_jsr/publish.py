from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from .step import CommandStep, Step
from .tools import ToolProbe, tool_probe_from_settings

logger = logging.getLogger(__name__)

NATIVE_TOOL = "deno"
FALLBACK_RUNNER = "npx"
FALLBACK_PACKAGE = "jsr"


class JsrPublishStep(Step):
    """Publish the package in ``cwd`` to jsr.

    Uses ``deno publish`` when deno is installed, otherwise ``npx jsr publish``.

    Config:
    - version: str – Required. Version written into the published package.
    - test_mode: bool – append ``--dry-run`` (default False).
    - extra_args: List[str] – passed to the publish command as given.
    - cwd: str – package directory.
    - env: dict – optional full environment for the publish process.
    """

    def __init__(self, id: str, config: Optional[Dict[str, Any]] = None, tool_probe: Optional[ToolProbe] = None) -> None:
        super().__init__(id, config)
        self.tool_probe = tool_probe or tool_probe_from_settings()

    def validate(self) -> bool:
        version = self.config.get("version")
        return isinstance(version, str) and bool(version)

    def build_args(self) -> List[str]:
        cfg = self.config
        args: List[str] = ["publish", "--set-version", str(cfg["version"])]
        args += [str(a) for a in (cfg.get("extra_args") or [])]
        if cfg.get("test_mode", False):
            args.append("--dry-run")
        return args

    def build_command(self) -> List[str]:
        args = self.build_args()
        if self.tool_probe.is_installed(NATIVE_TOOL):
            return [NATIVE_TOOL] + args
        logger.info("%s not found, publishing through %s %s", NATIVE_TOOL, FALLBACK_RUNNER, FALLBACK_PACKAGE)
        return [FALLBACK_RUNNER, FALLBACK_PACKAGE] + args

    def run(self) -> Dict[str, Any]:
        if not self.validate():
            return {"status": "error", "error": "JsrPublishStep requires config['version']", "returncode": None}
        cwd = self.config.get("cwd")
        _cs = CommandStep(
            id=f"{self.id}__jsrpublish",
            config={
                "cmd": self.build_command(),
                "cwd": str(Path(cwd)) if cwd else None,
                "env": self.config.get("env"),
            },
        )
        return _cs.run()
