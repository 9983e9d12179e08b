"""
Configuration management for the MetaMorpheus adapter.

Loads a YAML file describing the engine installation, the input files and the
search parameters, plus optional extra modification catalog entries.
"""

import yaml
import logging
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass

from pydantic import ValidationError

from .catalog import ModificationCatalog
from .models import SearchParameters

logger = logging.getLogger(__name__)


@dataclass
class SearchConfiguration:
    """Complete configuration for one MetaMorpheus search."""
    install_dir: Path
    search: SearchParameters
    catalog: ModificationCatalog
    fasta: Optional[Path] = None
    spectrum: Optional[Path] = None


class ConfigurationLoader:
    """YAML configuration file loader and validator."""

    def __init__(self, config_path: Path):
        """Initialize configuration loader."""
        self.config_path = Path(config_path)
        self.config_dir = self.config_path.parent

    def load_configuration(self) -> SearchConfiguration:
        """Load and validate YAML configuration."""
        logger.info(f"Loading configuration from {self.config_path}")

        with open(self.config_path, 'r') as f:
            raw_config = yaml.safe_load(f) or {}

        self._validate_configuration(raw_config)

        try:
            search = SearchParameters.model_validate(raw_config['search'] or {})
        except ValidationError as e:
            raise ValueError(f"Invalid search section in {self.config_path}: {e}") from e

        catalog = ModificationCatalog.default()
        extra = raw_config.get('modifications') or []
        if extra:
            try:
                catalog = ModificationCatalog.from_dicts(extra, base=catalog)
            except ValidationError as e:
                raise ValueError(f"Invalid modifications section in {self.config_path}: {e}") from e

        inputs = raw_config.get('inputs') or {}
        config = SearchConfiguration(
            install_dir=self._resolve_path(raw_config['engine']['install_dir']),
            search=search,
            catalog=catalog,
            fasta=self._resolve_path(inputs['fasta']) if inputs.get('fasta') else None,
            spectrum=self._resolve_path(inputs['spectrum']) if inputs.get('spectrum') else None,
        )

        self._validate_cross_references(config)

        logger.info(f"Configuration loaded: MetaMorpheus at {config.install_dir}")
        return config

    def _resolve_path(self, value: str) -> Path:
        """Resolve a path relative to the configuration directory."""
        path = Path(value).expanduser()
        if not path.is_absolute():
            path = self.config_dir / path
        return path.absolute()

    def _validate_configuration(self, config: Dict[str, Any]) -> None:
        """Validate required configuration sections."""
        if not isinstance(config, dict):
            raise ValueError("Configuration must be a mapping")

        for section in ('engine', 'search'):
            if section not in config:
                raise ValueError(f"Missing required section: {section}")

        if not isinstance(config['engine'], dict) or not config['engine'].get('install_dir'):
            raise ValueError("engine: missing required field 'install_dir'")

    def _validate_cross_references(self, config: SearchConfiguration) -> None:
        """Every referenced modification must exist in the catalog."""
        mods = config.search.modifications
        for name in list(mods.fixed) + list(mods.variable):
            if name not in config.catalog:
                raise ValueError(f"Modification '{name}' is not defined in the modification catalog")
