"""
Project configuration loader.

Reads the list of whitelist files from .cyclefinder/config.yaml:
```yaml
whitelist:
  - whitelists/jre.txt
  - whitelists/project.txt
encoding: utf-8
```

Relative paths are resolved against the directory holding the config file.
Keys may be written in camelCase or snake_case.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from cyclefinder.shared.domain.exceptions import ConfigurationError
from cyclefinder.shared.infrastructure.config import settings
from cyclefinder.shared.infrastructure.logging import get_logger
from cyclefinder.whitelist.loader import load_whitelist
from cyclefinder.whitelist.registry import Whitelist

logger = get_logger(__name__)

CONFIG_FILE_NAME = "config.yaml"


@dataclass
class ProjectConfig:
    """Whitelist settings of a project."""

    whitelist_files: list[Path] = field(default_factory=list)
    encoding: str | None = None

    def load_whitelist(self) -> Whitelist:
        """Load the configured whitelist files."""
        return load_whitelist(self.whitelist_files, encoding=self.encoding)


def _to_snake_case(name: str) -> str:
    """Convert camelCase to snake_case."""
    result = []
    for i, char in enumerate(name):
        if char.isupper() and i > 0:
            result.append('_')
        result.append(char.lower())
    return ''.join(result)


def default_config_path(project_root: Path) -> Path:
    return project_root / settings.config_dir / CONFIG_FILE_NAME


def load_project_config(
    config_path: Path | None = None,
    project_root: Path | None = None,
) -> ProjectConfig:
    """
    Load project configuration from a YAML file.

    Args:
        config_path: Path to the config file
        project_root: Project root directory (uses .cyclefinder/config.yaml)

    Returns:
        ProjectConfig loaded from file, or an empty config if the file
        does not exist

    Raises:
        ConfigurationError: If the YAML is invalid or has wrongly typed keys
    """
    if config_path is None:
        if project_root is None:
            raise ConfigurationError("Either config_path or project_root must be provided")
        config_path = default_config_path(project_root)

    if not config_path.exists():
        logger.debug("project_config_not_found", path=str(config_path))
        return ProjectConfig()

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read {config_path}: {e}") from e

    if data is None:
        return ProjectConfig()
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"{config_path}: expected a mapping at the top level, got {type(data).__name__}"
        )

    data = {_to_snake_case(str(key)): value for key, value in data.items()}
    config = ProjectConfig(
        whitelist_files=_parse_whitelist_files(data.get("whitelist"), config_path),
        encoding=_parse_encoding(data.get("encoding"), config_path),
    )
    logger.debug(
        "project_config_loaded",
        path=str(config_path),
        whitelist_files=len(config.whitelist_files),
    )
    return config


def _parse_whitelist_files(raw: Any, config_path: Path) -> list[Path]:
    if raw is None:
        return []
    if isinstance(raw, str):
        raw = [raw]
    if not isinstance(raw, list) or not all(isinstance(item, str) for item in raw):
        raise ConfigurationError(f"{config_path}: 'whitelist' must be a path or a list of paths")

    base_dir = config_path.parent
    files = []
    for item in raw:
        path = Path(item).expanduser()
        files.append(path if path.is_absolute() else base_dir / path)
    return files


def _parse_encoding(raw: Any, config_path: Path) -> str | None:
    if raw is None:
        return None
    if not isinstance(raw, str) or not raw.strip():
        raise ConfigurationError(f"{config_path}: 'encoding' must be a non-empty string")
    return raw.strip()
