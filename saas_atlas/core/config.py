"""Configuration management for SaaS Atlas."""

import copy
import logging
import os
import yaml
from typing import Dict, Any, Optional
from dotenv import load_dotenv

from saas_atlas.core.exceptions import ConfigurationError


logger = logging.getLogger('saas_atlas')


DEFAULT_CONFIG: Dict[str, Any] = {
    'store': {
        'provider': 'supabase',
        'url': '${SUPABASE_URL}',
        'api_key': '${SUPABASE_ANON_KEY}',
        'table': 'companies',
        'timeout': 30,
        'csv_path': 'data/companies.csv'
    },
    'directory': {
        'ranking_enabled': True,
        'group_by_category': True,
        'intent_filters': False,
        'related_limit': 5
    },
    'links': {
        'logo_service': 'logo.clearbit.com',
        'resource_paths': {
            'knowledge_base': ['/docs', '/help', '/support', '/kb'],
            'community': ['/community', '/forum', '/forums'],
            'academy': ['/academy', '/learn', '/training'],
            'developer_docs': ['/developers', '/api', '/docs/api'],
            'support_contact': ['/contact', '/support/contact', '/contact-us']
        }
    },
    'history': {
        'file': 'data/recent_searches.json',
        'limit': 5
    },
    'logging': {
        'level': 'INFO',
        'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        'file': 'logs/saas_atlas.log'
    }
}


class Config:
    """Configuration manager for the application."""

    def __init__(self, config_path: str = "config/config.yaml",
                 overrides: Optional[Dict[str, Dict[str, Any]]] = None):
        """
        Initialize configuration.

        Args:
            config_path: Path to YAML configuration file
            overrides: Per-section values applied on top of the file
        """
        load_dotenv()  # Load environment variables from .env file
        self.config_path = config_path
        self._config = self._load_config(overrides)

    @classmethod
    def from_dict(cls, data: Dict[str, Any],
                  overrides: Optional[Dict[str, Dict[str, Any]]] = None) -> 'Config':
        """Build a configuration from an in-memory dictionary.

        Args:
            data: Raw configuration (placeholders are resolved)
            overrides: Per-section values applied on top of data

        Returns:
            Config instance
        """
        load_dotenv()
        config = cls.__new__(cls)
        config.config_path = None
        raw = _apply_overrides(copy.deepcopy(data), overrides)
        config._config = config._process_env_variables(raw)
        return config

    def _load_config(self, overrides: Optional[Dict[str, Dict[str, Any]]] = None) -> Dict[str, Any]:
        """Load configuration from YAML file."""
        try:
            with open(self.config_path, 'r') as file:
                config = yaml.safe_load(file) or {}
            return self._process_env_variables(_apply_overrides(config, overrides))
        except FileNotFoundError:
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML configuration: {e}")

    def _process_env_variables(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Process environment variable placeholders in configuration."""
        def process_value(value):
            if isinstance(value, str) and value.startswith("${") and value.endswith("}"):
                env_var = value[2:-1]
                env_value = os.getenv(env_var)
                if env_value is None:
                    raise ConfigurationError(f"Environment variable not set: {env_var}")
                return env_value
            elif isinstance(value, dict):
                return {k: process_value(v) for k, v in value.items()}
            elif isinstance(value, list):
                return [process_value(item) for item in value]
            return value

        # Placeholders of the unused store provider are left unresolved
        store = config.get('store', {})
        provider = store.get('provider', 'supabase')
        if provider != 'supabase':
            config = dict(config)
            config['store'] = {
                k: v for k, v in store.items() if k not in ('url', 'api_key')
            }

        processed_config = process_value(config)

        if provider == 'supabase':
            store_config = processed_config.get('store', {})
            if not str(store_config.get('url', '')).strip():
                raise ConfigurationError(
                    "Supabase URL is required. Please set the SUPABASE_URL environment variable."
                )
            if not str(store_config.get('api_key', '')).strip():
                raise ConfigurationError(
                    "Supabase API key is required. Please set the SUPABASE_ANON_KEY environment variable."
                )
            logger.debug(f"Using Supabase store at {store_config['url']}")

        return processed_config

    def get(self, key_path: str, default: Any = None) -> Any:
        """Get configuration value using dot notation.

        Args:
            key_path: Dot-separated key path (e.g., 'directory.ranking_enabled')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        keys = key_path.split('.')
        value = self._config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    @property
    def store_config(self) -> Dict[str, Any]:
        """Get store configuration section."""
        return self._config.get('store', {})

    @property
    def directory_config(self) -> Dict[str, Any]:
        """Get directory view configuration section."""
        return self._config.get('directory', {})

    @property
    def links_config(self) -> Dict[str, Any]:
        """Get link construction configuration section."""
        return self._config.get('links', {})

    @property
    def history_config(self) -> Dict[str, Any]:
        """Get recent searches configuration section."""
        return self._config.get('history', {})

    @property
    def logging_config(self) -> Dict[str, Any]:
        """Get logging configuration section."""
        return self._config.get('logging', {})

    def get_all(self) -> Dict[str, Any]:
        """Get entire configuration as dictionary.

        Returns:
            Complete configuration dictionary
        """
        return copy.deepcopy(self._config)

    def validate(self) -> bool:
        """Validate configuration completeness.

        Returns:
            True if configuration is valid

        Raises:
            ValueError: If configuration is invalid
        """
        required_sections = ['store', 'directory', 'links', 'history', 'logging']

        for section in required_sections:
            if section not in self._config:
                raise ValueError(f"Missing configuration section: {section}")

        store = self.store_config
        provider = store.get('provider')
        if provider not in ('supabase', 'csv'):
            raise ValueError(f"Unknown store provider: {provider}")
        if provider == 'csv' and not store.get('csv_path'):
            raise ValueError("CSV store requires csv_path")
        if 'timeout' in store and store['timeout'] <= 0:
            raise ValueError("Store timeout must be positive")

        directory = self.directory_config
        for flag in ('ranking_enabled', 'group_by_category', 'intent_filters'):
            if flag in directory and not isinstance(directory[flag], bool):
                raise ValueError(f"directory.{flag} must be true or false")
        if not (0 <= directory.get('related_limit', 5) <= 5):
            raise ValueError("Related limit must be between 0 and 5")

        resource_paths = self.links_config.get('resource_paths', {})
        for intent, paths in resource_paths.items():
            if not paths:
                raise ValueError(f"Resource intent '{intent}' needs at least one candidate path")
            for path in paths:
                if not str(path).startswith('/'):
                    raise ValueError(f"Resource path must start with '/': {path}")

        history = self.history_config
        if history.get('limit', 5) <= 0:
            raise ValueError("History limit must be positive")

        return True


def _apply_overrides(config: Dict[str, Any],
                     overrides: Optional[Dict[str, Dict[str, Any]]]) -> Dict[str, Any]:
    """Merge per-section overrides into a raw configuration."""
    if not overrides:
        return config
    merged = dict(config)
    for section, values in overrides.items():
        merged[section] = {**merged.get(section, {}), **values}
    return merged


def load_config(config_path: Optional[str] = None,
                overrides: Optional[Dict[str, Dict[str, Any]]] = None) -> Config:
    """Load configuration from a file, falling back to DEFAULT_CONFIG.

    Args:
        config_path: Path to YAML configuration file
        overrides: Per-section values applied on top of the loaded configuration

    Returns:
        Config instance
    """
    if config_path and os.path.exists(config_path):
        return Config(config_path, overrides=overrides)
    logger.warning(f"Configuration file not found: {config_path}, using defaults")
    return Config.from_dict(DEFAULT_CONFIG, overrides=overrides)
