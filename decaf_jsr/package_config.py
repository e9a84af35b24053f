"""Locate and read the JSR config file of a package.

jsr accepts three config file names (https://jsr.io/docs/introduction#publishing-jsr-packages).
The first one present, in ``CONFIG_FILENAMES`` order, is the one that counts.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from .errors import PackageConfigError


CONFIG_FILENAMES = ("jsr.json", "deno.jsonc", "deno.json")


@dataclass(frozen=True)
class PackageConfig:
    path: Path
    name: str


def find_config_file(directory: Path, candidates: Sequence[str] = CONFIG_FILENAMES) -> Optional[str]:
    """Return the name of the first candidate that is a regular file in ``directory``."""
    for filename in candidates:
        if (Path(directory) / filename).is_file():
            return filename
    return None


def strip_jsonc(text: str) -> str:
    """Remove comments and trailing commas so JSONC text parses as JSON.

    String literals are copied untouched, including any ``//`` inside URLs.
    """
    out: List[str] = []
    i = 0
    n = len(text)
    in_string = False
    while i < n:
        ch = text[i]
        if in_string:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                out.append(text[i + 1])
                i += 2
                continue
            if ch == '"':
                in_string = False
            i += 1
            continue
        if ch == '"':
            in_string = True
            out.append(ch)
            i += 1
            continue
        if text.startswith("//", i):
            end = text.find("\n", i)
            i = n if end == -1 else end
            continue
        if text.startswith("/*", i):
            end = text.find("*/", i + 2)
            i = n if end == -1 else end + 2
            continue
        out.append(ch)
        i += 1
    return _drop_trailing_commas("".join(out))


def _drop_trailing_commas(text: str) -> str:
    out: List[str] = []
    in_string = False
    escaped = False
    for i, ch in enumerate(text):
        if in_string:
            out.append(ch)
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == ",":
            rest = text[i + 1:].lstrip()
            if rest[:1] in ("}", "]"):
                continue
        out.append(ch)
    return "".join(out)


def load_package_config(directory: Path, filename: str) -> PackageConfig:
    """Parse ``directory/filename`` and return the package metadata jsr publishes under."""
    path = Path(directory) / filename
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise PackageConfigError(f"Cannot read {path}: {e}") from e

    if filename.endswith(".jsonc"):
        text = strip_jsonc(text)
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise PackageConfigError(f"{path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise PackageConfigError(f"{path} must contain a JSON object")
    name = data.get("name")
    if not isinstance(name, str) or not name:
        raise PackageConfigError(f"{path} has no 'name' field")
    return PackageConfig(path=path, name=name)
