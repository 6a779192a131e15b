"""
Application Configuration

Aggregates the per-component configuration sections of the config file:

    gemini:         GeminiConfig (API key, models, timeout, retry)
    transcription:  TranscriptionConfig (size limit, download retries)
    logging:        level and optional log file
    prompts:        custom_dir overriding the bundled prompt templates

Configuration precedence (highest to lowest):
1. Environment variables
2. Config file values (.blogcast/config.yaml)
3. Default values

Usage:
    >>> from blogcast.config import AppConfig
    >>> app_config = AppConfig.load_from_yaml()
    >>> print(app_config.gemini.blog_model)
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from blogcast.llm.config import GeminiConfig
from blogcast.transcription.config import TranscriptionConfig


DEFAULT_CONFIG_PATH = '.blogcast/config.yaml'


@dataclass
class AppConfig:
    """Top-level configuration.

    Attributes:
        gemini: Generation client settings
        transcription: Transcription workflow settings
        log_level: Logging level name (debug, info, warning, error)
        log_file: Optional log file path
        prompts_dir: Optional directory whose templates replace the bundled ones
    """
    gemini: GeminiConfig = field(default_factory=GeminiConfig)
    transcription: TranscriptionConfig = field(default_factory=TranscriptionConfig)
    log_level: str = "info"
    log_file: Optional[str] = None
    prompts_dir: Optional[str] = None

    @classmethod
    def load_from_yaml(cls, config_path: Optional[str] = None) -> 'AppConfig':
        """Load configuration from a YAML file.

        A missing file is not an error; defaults and environment variables
        are used instead.

        Args:
            config_path: Path to config YAML file (default: .blogcast/config.yaml)

        Returns:
            AppConfig with environment overrides applied
        """
        config_data: Dict[str, Any] = {}
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH

        config_file = Path(config_path)
        if config_file.exists():
            with open(config_file, 'r') as f:
                config_data = yaml.safe_load(f) or {}

        return cls.load_from_dict(config_data)

    @classmethod
    def load_from_dict(cls, config_data: Dict[str, Any]) -> 'AppConfig':
        """Build configuration from an already parsed config dictionary."""
        logging_section = config_data.get('logging', {}) or {}
        prompts_section = config_data.get('prompts', {}) or {}

        return cls(
            gemini=GeminiConfig.load_from_dict(config_data.get('gemini')),
            transcription=TranscriptionConfig.load_from_dict(config_data.get('transcription')),
            log_level=os.getenv('BLOGCAST_LOG_LEVEL') or logging_section.get('level') or "info",
            log_file=os.getenv('BLOGCAST_LOG_FILE') or logging_section.get('file'),
            prompts_dir=os.getenv('BLOGCAST_PROMPTS_DIR') or prompts_section.get('custom_dir'),
        )
