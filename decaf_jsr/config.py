"""Environment-driven settings for the JSR deploy step."""
from __future__ import annotations

import logging
import os
from typing import Mapping, Optional


DATA_FILE_PATH_ENV = "DATA_FILE_PATH"
DID_ALREADY_DEPLOY_ENV = "DECAF_SCRIPT_JSR_DID_ALREADY_DEPLOY"
IS_DENO_INSTALLED_ENV = "DECAF_SCRIPT_JSR_IS_DENO_INSTALLED"
LOG_LEVEL_ENV = "DECAF_SCRIPT_JSR_LOG_LEVEL"

DEFAULT_LOG_LEVEL = "WARNING"


def parse_bool_override(value: Optional[str]) -> Optional[bool]:
    """Map the literal strings "true"/"false" to a bool, anything else to None."""
    if value == "true":
        return True
    if value == "false":
        return False
    return None


class Settings:
    """Read-only view of the environment variables the deploy step honours.

    decaf passes the step input through ``DATA_FILE_PATH``. The two
    ``DECAF_SCRIPT_JSR_*`` overrides replace the network check and the tool
    lookup with fixed answers so the step can be exercised offline.
    """

    def __init__(self, environ: Optional[Mapping[str, str]] = None) -> None:
        self._environ = os.environ if environ is None else environ

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._environ.get(key, default)

    @property
    def data_file_path(self) -> Optional[str]:
        """Path of the JSON file holding the step input."""
        value = self.get(DATA_FILE_PATH_ENV)
        return value or None

    @property
    def did_already_deploy_override(self) -> Optional[bool]:
        return parse_bool_override(self.get(DID_ALREADY_DEPLOY_ENV))

    @property
    def is_deno_installed_override(self) -> Optional[bool]:
        return parse_bool_override(self.get(IS_DENO_INSTALLED_ENV))

    @property
    def log_level(self) -> int:
        """Logging level from the environment; unknown names fall back to WARNING."""
        name = (self.get(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).strip().upper()
        level = logging.getLevelName(name)
        if isinstance(level, int):
            return level
        return logging.WARNING
