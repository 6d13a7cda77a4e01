import copy
import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from omegaconf import OmegaConf
from omegaconf.errors import InterpolationResolutionError

from eaws.constants import DEFAULT_CONFIG_PATH, DEFAULT_SHELL
from eaws.providers.aws.constants import SESSION_DOCUMENT_NAME

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Load and merge YAML configuration with defaults."""

    def __init__(self) -> None:
        """Initialize ConfigLoader with built-in defaults."""
        self.BUILT_IN_DEFAULTS = {
            "profile": None,
            "region": None,
            "shell": DEFAULT_SHELL,
            "document_name": SESSION_DOCUMENT_NAME,
        }

    def config_path(self) -> Path:
        return Path(os.environ.get("EAWS_CONFIG", DEFAULT_CONFIG_PATH)).expanduser()

    def load_config(self, config_path: str | None = None) -> dict[str, Any]:
        """Load configuration from YAML file.

        Parameters
        ----------
        config_path : str | None
            Path to YAML config file. If None, checks EAWS_CONFIG env var,
            then falls back to ~/.config/eaws/eaws.yaml

        Returns
        -------
        dict[str, Any]
            Parsed configuration with a defaults section, with all variable
            interpolations resolved

        Raises
        ------
        ValueError
            If the file is not valid YAML or a variable cannot be resolved
        RuntimeError
            If the file exists but cannot be read
        """
        config_file = Path(config_path).expanduser() if config_path else self.config_path()

        if not config_file.exists():
            return {"defaults": {}}

        try:
            cfg = OmegaConf.load(config_file)
        except yaml.YAMLError as e:
            logger.error("Failed to parse YAML config file %s: %s", config_file, e)
            raise ValueError(f"Invalid YAML in {config_file}: {e}") from e
        except OSError as e:
            logger.error("Failed to read config file %s: %s", config_file, e)
            raise RuntimeError(f"Failed to read config file {config_file}: {e}") from e

        if cfg is None:
            return {"defaults": {}}

        try:
            config = OmegaConf.to_container(cfg, resolve=True, throw_on_missing=True)
        except InterpolationResolutionError as e:
            logger.error("Failed to resolve configuration variables: %s", e)
            raise ValueError(f"Configuration variable resolution error: {e}") from e
        except (ValueError, KeyError, AttributeError) as e:
            logger.error("Failed to resolve configuration variables: %s", e)
            raise ValueError(f"Configuration variable resolution error: {e}") from e

        if not isinstance(config, dict):
            raise ValueError(f"Configuration in {config_file} must be a mapping")

        config.setdefault("defaults", {})
        return config

    def get_settings(
        self, config: dict[str, Any], overrides: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """Merge built-in defaults, YAML defaults and command line overrides.

        Parameters
        ----------
        config : dict[str, Any]
            Full configuration from YAML
        overrides : dict[str, Any] | None
            Values from the command line; None values are ignored

        Returns
        -------
        dict[str, Any]
            Merged and validated settings
        """
        merged = copy.deepcopy(self.BUILT_IN_DEFAULTS)

        for key, value in (config.get("defaults") or {}).items():
            merged[key] = value

        for key, value in (overrides or {}).items():
            if value is not None:
                merged[key] = value

        self.validate_settings(merged)
        return merged

    def validate_settings(self, settings: dict[str, Any]) -> None:
        """Validate merged settings.

        Parameters
        ----------
        settings : dict[str, Any]
            Settings to validate

        Raises
        ------
        ValueError
            If a setting has the wrong type or an invalid value
        """
        for field in ("profile", "region", "shell", "document_name"):
            value = settings.get(field)
            if value is not None and not isinstance(value, str):
                raise ValueError(f"{field} must be a string")

        region = settings.get("region")
        if region and not re.match(r"^[a-z]{2}(-[a-z]+)+-\d$", region):
            raise ValueError(f"Invalid region '{region}'")

        shell = settings.get("shell")
        if not shell or not re.match(r"^[\w./-]+$", shell):
            raise ValueError(
                f"Invalid shell '{shell}'. Must be a single command such as sh or bash."
            )
