"""Config loader for YAML flow definitions."""

from pathlib import Path
from typing import Any

import yaml

from nestflow.config.models import NestflowConfig

MERGED_SECTIONS = ("nodes", "flows", "settings")


class ConfigLoader:
    """Load NestflowConfig from YAML files."""

    @staticmethod
    def load(path: Path | str) -> NestflowConfig:
        """Load configuration from YAML file.

        Args:
            path: Path to config directory or nestflow.yaml file

        Returns:
            Parsed NestflowConfig instance
        """
        config_path = Path(path)

        data: dict[str, Any] = {section: {} for section in MERGED_SECTIONS}

        # Handle directory
        if config_path.is_dir():
            yaml_file = config_path / "nestflow.yaml"

            # If explicit master file exists, use it
            if yaml_file.exists():
                with open(yaml_file, encoding="utf-8") as f:
                    data = yaml.safe_load(f) or {}
            else:
                # Merge all .yaml files in directory
                files = sorted(config_path.glob("*.yaml"))
                if not files:
                    raise FileNotFoundError(f"No config files found in {config_path}")

                for fpath in files:
                    with open(fpath, encoding="utf-8") as f:
                        chunk = yaml.safe_load(f) or {}

                    for section in MERGED_SECTIONS:
                        if isinstance(chunk.get(section), dict):
                            data[section].update(chunk[section])

                    # Overwrite other top-level keys (e.g. version, root)
                    for k, v in chunk.items():
                        if k not in MERGED_SECTIONS:
                            data[k] = v

        else:
            # Handle single file
            yaml_file = config_path
            if not yaml_file.exists():
                raise FileNotFoundError(f"Config file not found: {yaml_file}")

            with open(yaml_file, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}

        return NestflowConfig.model_validate(data)
