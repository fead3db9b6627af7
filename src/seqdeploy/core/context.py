from pathlib import Path
from typing import Any, Dict, Optional
from pydantic import BaseModel, Field, ValidationError
from seqdeploy.core.models import (
    BuildSettings,
    DeployPaths,
    FrameworkSettings,
    RepositorySettings,
    ServiceSettings,
)
from seqdeploy.utils.diagnostics import ConfigurationError


class DeployContext(BaseModel):
    """
    Resolved configuration shared by every deploy step.
    """

    # Tool Settings (Maps to 'seqdeploy' section)
    settings: FrameworkSettings = Field(default_factory=FrameworkSettings)

    # Host Layout (Maps to 'paths' section)
    paths: DeployPaths = Field(default_factory=DeployPaths)

    # Source Checkout (Maps to 'repository' section)
    repository: RepositorySettings = Field(default_factory=RepositorySettings)

    # Toolchain (Maps to 'build' section)
    build: BuildSettings = Field(default_factory=BuildSettings)

    # Launched Service (Maps to 'service' section)
    service: ServiceSettings = Field(default_factory=ServiceSettings)

    def __init__(self, config_dict: Optional[Dict[str, Any]] = None, **data: Any):
        """
        Initialize the context, optionally with a configuration dictionary.
        """
        if config_dict:
            if 'settings' not in data:
                data['settings'] = FrameworkSettings(**(config_dict.get('seqdeploy') or {}))
            if 'paths' not in data:
                data['paths'] = DeployPaths(**(config_dict.get('paths') or {}))
            if 'repository' not in data:
                data['repository'] = RepositorySettings(**(config_dict.get('repository') or {}))
            if 'build' not in data:
                data['build'] = BuildSettings(**(config_dict.get('build') or {}))
            if 'service' not in data:
                data['service'] = ServiceSettings(**(config_dict.get('service') or {}))

        super().__init__(**data)

    @classmethod
    def from_config(cls, config_dict: Dict[str, Any], path: Optional[Path] = None) -> "DeployContext":
        """Build a context, converting validation failures into ConfigurationError."""
        try:
            return cls(config_dict=config_dict)
        except (ValidationError, TypeError) as exc:
            raise ConfigurationError(str(exc), path=str(path) if path else None) from exc

    def binary_path(self, name: str) -> Path:
        """Return the built binary location, relative to the working directory."""
        return self.paths.code_dir / self.build.target_dir / name

    @property
    def runner_binary(self) -> Path:
        return self.binary_path(self.service.runner)

    @property
    def client_binary(self) -> Path:
        return self.binary_path(self.service.client)
