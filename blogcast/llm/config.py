"""
Gemini Configuration Management

Configuration for the Gemini generation client and its retry policy.
Values are resolved with the following precedence:
1. Environment variables (highest priority)
2. Config file values (gemini section of .blogcast/config.yaml)
3. Default values (lowest priority)

The client receives a GeminiConfig at construction time and never reads the
environment itself, so tests can pass fixtures directly.

Usage:
    >>> from blogcast.llm.config import GeminiConfig
    >>>
    >>> gemini_config = GeminiConfig.load_from_dict({'blog_model': 'gemini-2.0-flash'})
    >>> print(gemini_config.transcribe_model)
"""

from dataclasses import dataclass, field
from typing import Optional, Any, Dict
import os


DEFAULT_MODEL = "gemini-2.0-flash"
DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


@dataclass
class RetryConfig:
    """Retry settings for generation API calls.

    Attributes:
        max_retries: Total number of attempts per call
        base_delay_ms: Delay before the second attempt, in milliseconds
        max_delay_ms: Upper bound for any single delay
        backoff_factor: Multiplier applied per attempt
        max_total_seconds: Optional ceiling on the whole retry sequence;
            None leaves it bounded only by attempts and delays
    """
    max_retries: int = 6
    base_delay_ms: int = 1000
    max_delay_ms: int = 30000
    backoff_factor: float = 2.0
    max_total_seconds: Optional[float] = None


@dataclass
class GeminiConfig:
    """Configuration for the Gemini generation client.

    Attributes:
        api_key: Gemini API key (required before any call is made)
        base_url: API root, without the /models suffix
        transcribe_model: Model used for transcription requests
        blog_model: Model used for blog generation requests
        timeout: Per-attempt timeout in seconds
        retry: Retry policy settings
    """
    api_key: str = ""
    base_url: str = DEFAULT_BASE_URL
    transcribe_model: str = DEFAULT_MODEL
    blog_model: str = DEFAULT_MODEL
    timeout: float = 60.0
    retry: RetryConfig = field(default_factory=RetryConfig)

    @classmethod
    def load_from_dict(cls, section: Optional[Dict[str, Any]] = None) -> 'GeminiConfig':
        """Load Gemini configuration from a config dictionary.

        Args:
            section: The ``gemini`` section of the config file (may be None)

        Returns:
            GeminiConfig with environment overrides applied

        Example:
            >>> config = GeminiConfig.load_from_dict({'timeout': 30})
        """
        section = section or {}
        retry_section = section.get('retry', {}) or {}

        max_total = cls._resolve_value(
            retry_section.get('max_total_seconds'),
            'GEMINI_MAX_TOTAL_SECONDS',
            None
        )

        retry_config = RetryConfig(
            max_retries=int(cls._resolve_value(
                retry_section.get('max_retries'),
                'GEMINI_MAX_RETRIES',
                6
            )),
            base_delay_ms=int(cls._resolve_value(
                retry_section.get('base_delay_ms'),
                'GEMINI_BASE_DELAY_MS',
                1000
            )),
            max_delay_ms=int(cls._resolve_value(
                retry_section.get('max_delay_ms'),
                'GEMINI_MAX_DELAY_MS',
                30000
            )),
            backoff_factor=float(cls._resolve_value(
                retry_section.get('backoff_factor'),
                'GEMINI_BACKOFF_FACTOR',
                2.0
            )),
            max_total_seconds=float(max_total) if max_total not in (None, "") else None
        )

        return cls(
            api_key=cls._resolve_value(
                section.get('api_key'),
                'GEMINI_API_KEY',
                ''
            ),
            base_url=cls._resolve_value(
                section.get('base_url'),
                'GEMINI_BASE_URL',
                DEFAULT_BASE_URL
            ),
            transcribe_model=cls._resolve_value(
                section.get('transcribe_model'),
                'GEMINI_TRANSCRIBE_MODEL',
                DEFAULT_MODEL
            ),
            blog_model=cls._resolve_value(
                section.get('blog_model'),
                'GEMINI_BLOG_MODEL',
                DEFAULT_MODEL
            ),
            timeout=float(cls._resolve_value(
                section.get('timeout'),
                'GEMINI_TIMEOUT',
                60.0
            )),
            retry=retry_config
        )

    @staticmethod
    def _resolve_value(config_value: Any, env_var: str, default: Any) -> Any:
        """Resolve configuration value with precedence: ENV > Config > Default.

        Empty environment variables are treated as unset so that an exported
        but blank GEMINI_TRANSCRIBE_MODEL still falls back to the default.

        Args:
            config_value: Value from config file (may be None)
            env_var: Environment variable name to check
            default: Default value to use if neither env nor config is set

        Returns:
            Resolved configuration value
        """
        env_value = os.getenv(env_var)
        if env_value:
            return env_value

        if config_value is not None:
            return config_value

        return default
