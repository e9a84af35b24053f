from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from .config import DATA_FILE_PATH_ENV, Settings
from .errors import InputUnavailableError


@dataclass(frozen=True)
class DeployInput:
    """Input decaf hands to a deploy step: the version to publish and the run mode."""

    next_version_name: str
    test_mode: bool = False

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> DeployInput:
        version = payload.get("nextVersionName")
        if not isinstance(version, str) or not version:
            raise InputUnavailableError("Deploy step input is missing a 'nextVersionName' string")
        test_mode = payload.get("testMode", False)
        if not isinstance(test_mode, bool):
            raise InputUnavailableError("Deploy step input field 'testMode' must be a boolean")
        return cls(next_version_name=version, test_mode=test_mode)


def read_deploy_input(settings: Optional[Settings] = None) -> DeployInput:
    """Load the deploy step input from the file named by DATA_FILE_PATH."""
    settings = settings or Settings()
    data_file = settings.data_file_path
    if not data_file:
        raise InputUnavailableError(f"Environment variable {DATA_FILE_PATH_ENV} is not set")

    path = Path(data_file)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise InputUnavailableError(f"Cannot read deploy step input from {path}: {e}") from e

    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as e:
        raise InputUnavailableError(f"Deploy step input at {path} is not valid JSON: {e}") from e
    if not isinstance(payload, dict):
        raise InputUnavailableError(f"Deploy step input at {path} must be a JSON object")
    return DeployInput.from_dict(payload)
