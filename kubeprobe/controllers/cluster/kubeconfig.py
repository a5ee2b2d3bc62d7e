"""Kubeconfig context discovery."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from kubeprobe.constants.defaults import KUBECONFIG_PATH_DEFAULT
from kubeprobe.errors import ConfigLoadError

logger = logging.getLogger(__name__)


def kubeconfig_paths(explicit_path: str = "") -> list[Path]:
    """Resolve kubeconfig files: explicit path, then $KUBECONFIG, then the default."""
    if explicit_path:
        return [Path(explicit_path).expanduser()]
    env_value = os.environ.get("KUBECONFIG", "")
    if env_value:
        return [Path(part).expanduser() for part in env_value.split(os.pathsep) if part]
    return [Path(KUBECONFIG_PATH_DEFAULT).expanduser()]


def _load_file(path: Path) -> dict[str, Any]:
    try:
        with path.open(encoding="utf-8") as handle:
            content = yaml.safe_load(handle)
    except FileNotFoundError:
        logger.debug("Kubeconfig %s does not exist", path)
        return {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigLoadError(f"failed to read kubeconfig {path}: {exc}") from exc
    return content if isinstance(content, dict) else {}


def load_kubeconfig_contexts(explicit_path: str = "") -> tuple[list[str], str]:
    """Return sorted context names and the current context.

    Files are merged kubectl-style: the first file that sets
    ``current-context`` wins and duplicate context names keep their first
    definition.
    """
    names: list[str] = []
    current = ""
    for path in kubeconfig_paths(explicit_path):
        content = _load_file(path)
        for entry in content.get("contexts") or []:
            name = entry.get("name") if isinstance(entry, dict) else None
            if name and name not in names:
                names.append(name)
        if not current:
            current = content.get("current-context") or ""
    return sorted(names), current
