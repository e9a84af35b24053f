from __future__ import annotations

import logging
import shutil
from abc import ABC, abstractmethod
from typing import Optional

from .config import IS_DENO_INSTALLED_ENV, Settings

logger = logging.getLogger(__name__)


class ToolProbe(ABC):
    """Answers whether a CLI tool can be run on this host."""

    @abstractmethod
    def is_installed(self, name: str) -> bool:
        """Return True when ``name`` is available."""


class PathToolProbe(ToolProbe):
    """Look the executable up on PATH."""

    def is_installed(self, name: str) -> bool:
        exe = shutil.which(name)
        logger.debug("Tool %s resolved to %s", name, exe)
        return exe is not None


class FixedToolProbe(ToolProbe):
    """Always gives the same answer, whatever the tool."""

    def __init__(self, installed: bool) -> None:
        self.installed = installed

    def is_installed(self, name: str) -> bool:
        return self.installed


def tool_probe_from_settings(settings: Optional[Settings] = None) -> ToolProbe:
    settings = settings or Settings()
    override = settings.is_deno_installed_override
    if override is not None:
        logger.debug("%s=%s, skipping the PATH lookup", IS_DENO_INSTALLED_ENV, str(override).lower())
        return FixedToolProbe(override)
    return PathToolProbe()
