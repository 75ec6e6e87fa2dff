import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from apexdoc_formatter.errors import ConfigurationError

from .models import FormatSettings


class FormatConfig:
    """Handles loading and validation of .apexdoc-format.toml configuration"""

    def __init__(self, config_path: Path | None = None):
        self.data: dict[str, Any] = {}

        if config_path and config_path.exists():
            self._load_from_file(config_path)

    def _load_from_file(self, path: Path):
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigurationError(f"Cannot read configuration {path}: {e}") from e

        section = data.get("tool", {}).get("apexdoc-format", {})
        if not isinstance(section, dict):
            raise ConfigurationError(f"[tool.apexdoc-format] in {path} must be a table")
        # TOML keys use dashes, settings fields use underscores
        self.data = {key.replace("-", "_"): value for key, value in section.items()}

    def settings(self, **overrides: Any) -> FormatSettings:
        """Settings from the file with any non-None `overrides` applied on top."""
        values = dict(self.data)
        values.update({key: value for key, value in overrides.items() if value is not None})
        try:
            return FormatSettings.model_validate(values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e
