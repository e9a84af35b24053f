from __future__ import annotations

from pathlib import Path
from typing import Sequence


class DecafJsrError(Exception):
    """Base class for failures that end a deploy run with exit code 1."""


class ConfigNotFoundError(DecafJsrError):
    """None of the JSR config file candidates exist in the package directory."""

    def __init__(self, directory: Path, candidates: Sequence[str]) -> None:
        self.directory = directory
        self.candidates = tuple(candidates)
        super().__init__(f"No {', '.join(self.candidates)} file found at {directory}. Exiting.")


class PackageConfigError(DecafJsrError):
    """The selected config file could not be parsed or has no package name."""


class InputUnavailableError(DecafJsrError):
    """The deploy step input from decaf is missing or malformed."""
