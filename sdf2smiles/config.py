"""
Configuration management for SDF to SMILES conversion.

This module handles loading, validation and saving of the converter
configuration. Without a configuration file the converter uses the fixed
layout of the console program: SDF files are read from ``sdf/`` and SMILES
files written to ``out/`` under the base directory.
"""

import json
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from .toolkits import TOOLKITS


@dataclass
class ConverterConfig:
    """
    Configuration for SDF to SMILES conversion.

    Relative directories are resolved against the base directory passed to
    resolve_paths.
    """

    # Directory layout
    input_dir: str = "sdf"
    output_dir: str = "out"
    input_extension: str = ".sdf"
    output_extension: str = ".txt"

    # Toolkit and SMILES options
    toolkit: str = "rdkit"
    canonical: bool = True
    isomeric_smiles: bool = True
    sanitize: bool = True
    remove_hs: bool = True

    # Console behaviour
    confirm: bool = True  # Ask before processing
    pause_on_exit: bool = True  # Wait for Enter before exiting

    # Extra reports
    write_summary: bool = False  # summary.csv in the output directory
    write_failures: bool = False  # <name>.failed.tsv next to each output file

    def __post_init__(self):
        """Validate parameters after initialization."""
        self.validate()

    def validate(self) -> None:
        """Validate that all parameters are within acceptable ranges."""
        for name in ('input_dir', 'output_dir'):
            value = getattr(self, name)
            if not isinstance(value, str) or not value:
                raise ValueError(f"{name} must be a non-empty path, got {value!r}")

        for name in ('input_extension', 'output_extension'):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.startswith('.') or len(value) < 2:
                raise ValueError(f"{name} must start with '.', got {value!r}")

        if not isinstance(self.toolkit, str) or self.toolkit not in TOOLKITS:
            raise ValueError(
                f"toolkit must be one of {', '.join(sorted(TOOLKITS))}, got {self.toolkit!r}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Convert the configuration to a dictionary."""
        return asdict(self)

    def toolkit_options(self) -> Dict[str, bool]:
        """Keyword arguments for get_toolkit."""
        return {
            'sanitize': self.sanitize,
            'remove_hs': self.remove_hs,
            'canonical': self.canonical,
            'isomeric_smiles': self.isomeric_smiles
        }

    def resolve_paths(self, base_dir: Union[str, Path, None] = None) -> Tuple[Path, Path]:
        """
        Resolve the input and output directories.

        Args:
            base_dir: Directory relative paths are resolved against (default: cwd)

        Returns:
            Tuple[Path, Path]: (input directory, output directory)
        """
        base = Path(base_dir) if base_dir is not None else Path.cwd()
        return base / self.input_dir, base / self.output_dir

    def save_to_file(self, filename: str = "sdf2smiles.json") -> None:
        """
        Save the configuration to a JSON file.

        Args:
            filename: Path to save the configuration file
        """
        filepath = Path(filename)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=4)

    @classmethod
    def load_from_file(cls, filename: str = "sdf2smiles.json") -> "ConverterConfig":
        """
        Load configuration from a JSON file.

        Keys that are not configuration fields are ignored; missing keys keep
        their defaults.

        Args:
            filename: Path to the configuration file

        Returns:
            ConverterConfig: Loaded configuration object

        Raises:
            FileNotFoundError: If the configuration file doesn't exist
            ValueError: If the configuration file is invalid
        """
        filepath = Path(filename)
        if not filepath.exists():
            raise FileNotFoundError(f"Configuration file not found: {filename}")

        try:
            with open(filepath, "r") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in configuration file: {e}")

        if not isinstance(data, dict):
            raise ValueError("Configuration file must contain a JSON object")

        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    @classmethod
    def default_config(cls) -> "ConverterConfig":
        """Create a default configuration."""
        return cls()

    def get_summary(self) -> Dict[str, Any]:
        """
        Get a summary of the current configuration.

        Returns:
            Dict[str, Any]: Configuration summary
        """
        return {
            'layout': {
                'input_dir': self.input_dir,
                'output_dir': self.output_dir,
                'pattern': f"*{self.input_extension} -> *{self.output_extension}"
            },
            'toolkit': self.toolkit,
            'smiles': {
                'canonical': self.canonical,
                'isomeric': self.isomeric_smiles
            },
            'reports': [name for name, enabled in (('summary', self.write_summary),
                                                   ('failures', self.write_failures))
                        if enabled]
        }


def load_config(config_path: Optional[str] = None) -> ConverterConfig:
    """
    Load configuration from a file, or return the defaults.

    Args:
        config_path: Path to a JSON configuration file (optional)

    Returns:
        ConverterConfig: Loaded or default configuration
    """
    if config_path is None:
        return ConverterConfig.default_config()
    return ConverterConfig.load_from_file(config_path)
