#!/usr/bin/env python3
"""
Settings loader for Mosaic static site generator.
Supports configuration from mosaic.yml, mosaic.yaml, or mosaic.json files.
"""

import os
import json
import yaml
from typing import Dict, Any, Optional


class MosaicSettings:
    """Load and manage Mosaic configuration settings."""

    # Default configuration
    DEFAULT_SETTINGS = {
        'data_path': 'data',
        'build_path': 'build',
        'web_root': '/',
        'site_title': '',
        'site_title_separator': '|',
        'replace_file_extension': False,
        'minify': False,
        'markdown_posts': False,
    }

    # Config file names to look for (in order of preference)
    CONFIG_FILES = ['mosaic.yml', 'mosaic.yaml', 'mosaic.json']

    def __init__(self, config_dir: str = None, config_path: str = None):
        """
        Initialize settings loader.

        Args:
            config_dir: Directory to look for config files. Defaults to current directory.
            config_path: Explicit config file; skips the directory lookup when given.
        """
        self.config_dir = config_dir or os.getcwd()
        self.config_path = config_path
        self.settings = self.DEFAULT_SETTINGS.copy()
        self.config_file_path = None

    def load_settings(self) -> Dict[str, Any]:
        """
        Load settings from configuration file if it exists.

        Returns:
            Dictionary of configuration settings

        Raises:
            FileNotFoundError: if an explicit config path does not exist
        """
        if self.config_path:
            if not os.path.exists(self.config_path):
                raise FileNotFoundError(f"Configuration file not found: {self.config_path}")
            config_file = self.config_path
        else:
            config_file = self._find_config_file()

        if config_file:
            self.config_file_path = config_file
            try:
                loaded_settings = self._load_config_file(config_file)
                if loaded_settings:
                    # Merge with defaults, giving preference to loaded settings
                    self.settings.update(loaded_settings)
                    print(f"Loaded configuration from: {os.path.relpath(config_file)}")
            except (ValueError, IOError) as e:
                print(f"Warning: Failed to load config file {config_file}: {e}")

        return self.settings.copy()

    def _find_config_file(self) -> Optional[str]:
        """
        Find the first available configuration file.

        Returns:
            Path to config file or None if not found
        """
        for filename in self.CONFIG_FILES:
            config_path = os.path.join(self.config_dir, filename)
            if os.path.exists(config_path):
                return config_path
        return None

    def _load_config_file(self, config_path: str) -> Dict[str, Any]:
        """
        Load configuration from a file.

        Args:
            config_path: Path to the configuration file

        Returns:
            Dictionary of configuration settings
        """
        file_ext = os.path.splitext(config_path)[1].lower()
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                if file_ext in ['.yml', '.yaml']:
                    loaded = yaml.safe_load(f) or {}
                elif file_ext == '.json':
                    loaded = json.load(f) or {}
                else:
                    raise ValueError(f"Unsupported config file format: {file_ext}")
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file {config_path}: {e}")
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in configuration file {config_path}: {e}")
        except (IOError, OSError) as e:
            raise IOError(f"Error reading configuration file {config_path}: {e}")

        if not isinstance(loaded, dict):
            raise ValueError(f"Configuration file {config_path} must contain a mapping")
        return loaded

    def create_sample_config(self, file_format: str = 'yml') -> str:
        """
        Create a sample configuration file.

        Args:
            file_format: Format for config file ('yml', 'yaml', or 'json')

        Returns:
            Path to created sample config file
        """
        sample_config = {
            'data_path': 'data',
            'build_path': 'build',
            'web_root': '/',
            'site_title': 'My Mosaic Site',
            'site_title_separator': '|',
            'replace_file_extension': False,
            'minify': False,
            'markdown_posts': False,
        }

        filename = f'mosaic.{file_format}'
        config_path = os.path.join(self.config_dir, filename)

        try:
            with open(config_path, 'w', encoding='utf-8') as f:
                if file_format in ['yml', 'yaml']:
                    # Custom YAML output with comments
                    f.write("# Mosaic Configuration File\n")
                    f.write("# Configure your static site generator settings here\n\n")
                    f.write("# Site information\n")
                    f.write("site_title: My Mosaic Site\n")
                    f.write("site_title_separator: '|'\n")
                    f.write("web_root: /\n\n")
                    f.write("# Build settings\n")
                    f.write("data_path: data\n")
                    f.write("build_path: build\n\n")
                    f.write("# Client-side routing drops .html from links when true\n")
                    f.write("replace_file_extension: false\n\n")
                    f.write("# Extras\n")
                    f.write("minify: false  # write .min.css/.min.js next to copied assets\n")
                    f.write("markdown_posts: false  # render .md post files to HTML\n")
                elif file_format == 'json':
                    json.dump(sample_config, f, indent=2)
        except PermissionError:
            raise PermissionError(f"Permission denied creating configuration file: {config_path}")
        except (IOError, OSError) as e:
            raise IOError(f"Error writing configuration file {config_path}: {e}")

        return config_path

    def merge_with_args(self, args_dict: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merge configuration settings with command-line arguments.
        Command-line arguments take precedence over config file settings.

        Args:
            args_dict: Dictionary of command-line arguments

        Returns:
            Merged configuration dictionary
        """
        merged = self.settings.copy()

        # Override with non-None command line arguments
        for key, value in args_dict.items():
            if value is not None:
                merged[key] = value

        return merged
