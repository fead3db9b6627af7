import os
import re
import yaml
from pathlib import Path
from typing import Any, Dict

from seqdeploy.utils.diagnostics import ConfigurationError

ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::([^}]+))?\}")

ALLOWED_SECTIONS = {"seqdeploy", "paths", "repository", "build", "service"}

def interpolate_env_vars(content: str) -> str:
    """Replace ${VAR} or ${VAR:default} with environment variables."""
    def replace_match(match: re.Match) -> str:
        var_name = match.group(1)
        default_value = match.group(2) if match.group(2) is not None else ""
        return os.environ.get(var_name, default_value)

    return ENV_VAR_PATTERN.sub(replace_match, content)

def load_config(path: Path) -> Dict[str, Any]:
    """
    Load seqdeploy.yaml with environment variable interpolation.

    Keeps only the known sections: seqdeploy, paths, repository, build, service.
    A missing file yields an empty dict so that the built-in layout applies.
    """
    if not path.exists():
        return {}

    try:
        content = path.read_text()
        interpolated_content = interpolate_env_vars(content)
        full_config = yaml.safe_load(interpolated_content) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Unable to read configuration: {exc}", path=str(path)) from exc

    if not isinstance(full_config, dict):
        raise ConfigurationError("Top-level YAML document must be a mapping.", path=str(path))

    filtered_config = {k: v for k, v in full_config.items() if k in ALLOWED_SECTIONS}

    return filtered_config
