"""
Command Runtime Setup

Configuration loading and logging setup shared by the subcommands.
"""

import logging
from dataclasses import asdict
from typing import Optional

from blogcast.config import AppConfig
from blogcast.utils.logging_config import logging_config


def prepare_runtime(config_path: Optional[str], log_level: Optional[str]) -> AppConfig:
    """Load configuration and configure logging for one command run.

    ``--log-level`` wins over the config file and BLOGCAST_LOG_LEVEL.
    """
    app_config = AppConfig.load_from_yaml(config_path)
    logging_config.configure_logging(
        level=(log_level or app_config.log_level).lower(),
        log_file=app_config.log_file,
    )

    if logging_config.is_debug_enabled():
        gemini = asdict(app_config.gemini)
        retry = gemini.pop('retry')
        logging_config.log_configuration_details({
            **{f"gemini.{key}": value for key, value in gemini.items()},
            **{f"gemini.retry.{key}": value for key, value in retry.items()},
            **{f"transcription.{key}": value for key, value in asdict(app_config.transcription).items()},
        })

    logging.getLogger(__name__).debug(f"Configuration loaded from {config_path or 'defaults'}")
    return app_config
