"""
Configuration management for ilrbrowse.
"""
import os
import copy
import json
import logging
import yaml
from pathlib import Path
from typing import Any, Dict, Optional
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

ENV_PREFIX = 'ILRBROWSE_'

# Default configuration
DEFAULT_CONFIG = {
    "data": {
        "manifest": "available_files.json"
    },
    "pagination": {
        "page_size": 50
    },
    "search": {
        "debounce_seconds": 0.3
    },
    "http": {
        "timeout_seconds": 30
    },
    "preferences": {
        "path": "~/.ilrbrowse/preferences.json"
    },
    "logging": {
        "level": "INFO",
        "directory": None
    }
}

class Config:
    """
    Configuration manager for ilrbrowse.
    """
    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the Config.
        
        Args:
            config_path: Path to a YAML or JSON configuration file
        """
        self.config_path = config_path
        self.config = self._load_config()
    
    def _load_config(self) -> Dict:
        """
        Load configuration from file, environment, or defaults.
        
        Returns:
            Configuration dictionary
        """
        config = copy.deepcopy(DEFAULT_CONFIG)
        
        if self.config_path:
            path = Path(self.config_path)
            try:
                if path.exists():
                    if path.suffix.lower() in ['.yaml', '.yml']:
                        with open(path, 'r', encoding='utf-8') as f:
                            user_config = yaml.safe_load(f) or {}
                    elif path.suffix.lower() == '.json':
                        with open(path, 'r', encoding='utf-8') as f:
                            user_config = json.load(f)
                    else:
                        raise ValueError(f"Unsupported config file format: {path.suffix}")
                    
                    # Update config with user settings
                    self._update_dict(config, user_config)
                else:
                    logger.warning(f"Config file {self.config_path} not found")
            except (OSError, ValueError, yaml.YAMLError) as e:
                logger.error(f"Error loading config from {self.config_path}: {e}")
                logger.warning("Using default configuration")
        
        # Override with environment variables
        self._override_from_env(config)
        
        return config
    
    def _update_dict(self, target: Dict, source: Dict) -> None:
        """
        Recursively update a dictionary.
        
        Args:
            target: Target dictionary to update
            source: Source dictionary with new values
        """
        for key, value in source.items():
            if key in target and isinstance(target[key], dict) and isinstance(value, dict):
                self._update_dict(target[key], value)
            else:
                target[key] = value
    
    def _override_from_env(self, config: Dict, prefix: str = ENV_PREFIX) -> None:
        """
        Override configuration with environment variables.

        ``ILRBROWSE_PAGINATION__PAGE_SIZE=20`` sets ``pagination.page_size``;
        sections are separated by a double underscore so that keys may
        contain single underscores.
        
        Args:
            config: Configuration dictionary to update
            prefix: Prefix for environment variables
        """
        for key, value in os.environ.items():
            if not key.startswith(prefix) or key == f"{prefix}CONFIG_PATH":
                continue

            parts = key[len(prefix):].lower().split('__')
            
            # Navigate to the right place in the config
            current = config
            for part in parts[:-1]:
                if not isinstance(current.get(part), dict):
                    current[part] = {}
                current = current[part]
            
            try:
                # Try to parse as JSON
                current[parts[-1]] = json.loads(value)
            except json.JSONDecodeError:
                # If not valid JSON, use as string
                current[parts[-1]] = value
    
    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.
        
        Args:
            key: Dot-separated key path (e.g., 'pagination.page_size')
            default: Default value if key not found
            
        Returns:
            Configuration value
        """
        current = self.config
        
        for part in key.split('.'):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]
        
        return current


def load_config(config_path: Optional[str] = None) -> Config:
    """
    Build a Config from an explicit path or ILRBROWSE_CONFIG_PATH.
    """
    return Config(config_path or os.getenv(f'{ENV_PREFIX}CONFIG_PATH'))
