from __future__ import annotations

import logging
import shlex
import subprocess
import sys
import threading
import time
from abc import ABC, abstractmethod
from typing import IO, Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class Step(ABC):
    """A granular unit of work in the deploy run.

    Steps return a structured dict that is JSON-serializable, with at least a
    ``status`` key of ``success``, ``error`` or ``skipped``.
    """

    def __init__(self, id: str, config: Optional[Dict[str, Any]] = None) -> None:
        self.id = id
        self.config = config or {}

    @abstractmethod
    def run(self) -> Dict[str, Any]:
        """Execute the step and return structured output."""

    def validate(self) -> bool:
        """Optional pre-run validation hook."""
        return True


def format_command(cmd: List[str]) -> str:
    return shlex.join(cmd)


class CommandStep(Step):
    """Run a command, streaming its output through to ours.

    Config:
    - cmd: list[str] – Required. Command to execute.
    - cwd: str – optional working directory.
    - env: dict[str, str] – optional full environment for the child.
    - echo: bool – print ``> <command>`` to stderr before running (default True).

    There is no timeout and no retry: the step waits for the process however
    long it takes and reports the first result.
    """

    def run(self) -> Dict[str, Any]:
        cmd = self.config.get("cmd") or []
        if not isinstance(cmd, list) or not cmd:
            return {"status": "error", "error": "CommandStep requires config['cmd'] as non-empty list", "returncode": None}
        cmd = [str(c) for c in cmd]
        cwd = self.config.get("cwd")
        env = self.config.get("env")

        if self.config.get("echo", True):
            print(f"> {format_command(cmd)}", file=sys.stderr, flush=True)

        start = time.time()
        try:
            proc = subprocess.Popen(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                errors="replace",
                bufsize=1,  # line-buffered
                env=env,
                cwd=cwd,
            )
        except OSError as e:
            logger.warning("Could not start %s: %s", cmd[0], e)
            return {
                "status": "error",
                "error": str(e),
                "returncode": None,
                "duration": time.time() - start,
                "cmd": cmd,
            }

        readers = [
            threading.Thread(target=_forward_stream, args=(proc.stdout, False), daemon=True),
            threading.Thread(target=_forward_stream, args=(proc.stderr, True), daemon=True),
        ]
        for t in readers:
            t.start()
        rc = proc.wait()
        for t in readers:
            t.join()

        duration = time.time() - start
        logger.debug("%s exited with code %s after %.2fs", cmd[0], rc, duration)
        result: Dict[str, Any] = {
            "status": "success" if rc == 0 else "error",
            "returncode": rc,
            "duration": duration,
            "cmd": cmd,
        }
        if rc != 0:
            result["error"] = f"Process exited with code {rc}"
        return result


def _forward_stream(stream: Optional[IO[str]], is_err: bool) -> None:
    if stream is None:
        return
    try:
        for line in iter(stream.readline, ""):
            print(line, end="", file=sys.stderr if is_err else sys.stdout, flush=True)
    finally:
        stream.close()
