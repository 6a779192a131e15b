"""
Transcribe Subcommand Module

Downloads an uploaded file, transcribes it with Gemini and writes the
transcript to a file or standard output.
"""

import asyncio
import logging
import sys
from pathlib import Path
from urllib.parse import unquote, urlparse

import click

from blogcast.orchestrator import ContentOrchestrator
from blogcast.transcription.models import UploadDescriptor

from .help_texts import (
    TRANSCRIBE_HELP, TRANSCRIBE_URL_HELP, TRANSCRIBE_FILE_NAME_HELP,
    TRANSCRIBE_OUTPUT_HELP, USER_ID_HELP, CONFIG_HELP, LOG_LEVEL_HELP, ExitCodes
)
from .runtime import prepare_runtime
from .shared_options import user_id_option, output_option, config_option, log_level_option


def _file_name_from_url(url: str) -> str:
    """Last path segment of ``url``, used when --file-name is not given."""
    return unquote(Path(urlparse(url).path).name)


@click.command(help=TRANSCRIBE_HELP)
@click.option('--url', required=True, help=TRANSCRIBE_URL_HELP)
@user_id_option(help=USER_ID_HELP)
@click.option('--file-name', default=None, help=TRANSCRIBE_FILE_NAME_HELP)
@output_option(help=TRANSCRIBE_OUTPUT_HELP)
@config_option(help=CONFIG_HELP)
@log_level_option(help=LOG_LEVEL_HELP)
def transcribe(url, user_id, file_name, output, config, log_level):
    """Transcribe an uploaded file."""
    app_config = prepare_runtime(config, log_level)
    logger = logging.getLogger(__name__)

    upload = UploadDescriptor(
        user_id=user_id,
        file_url=url,
        file_name=file_name or _file_name_from_url(url) or None,
    )
    logger.debug(f"Upload descriptor: {upload.model_dump(by_alias=True)}")

    orchestrator = ContentOrchestrator.from_config(app_config)
    result = asyncio.run(orchestrator.transcribe([upload]))

    if not result.success:
        click.echo(f"Error: {result.message}", err=True)
        sys.exit(ExitCodes.GENERAL_ERROR)

    transcript = result.data.transcription
    info = result.data.file_info
    if output:
        Path(output).write_text(transcript + "\n", encoding="utf-8")
        click.echo(f"Transcript saved to: {output}")
    else:
        click.echo(transcript)

    click.echo(f"{result.message} ({info.file_name}, {info.file_size}, {info.mime_type})", err=True)
