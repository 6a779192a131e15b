"""
Generate Subcommand Module

Generates a blog post from a transcript file. Earlier posts passed with
--prior-post are loaded into a scratch repository so the style reference
is built exactly as it is for stored posts.
"""

import asyncio
import logging
import sys
from pathlib import Path

import click

from blogcast.orchestrator import ContentOrchestrator, PostCreated
from blogcast.posts import InMemoryPostRepository

from .help_texts import (
    GENERATE_HELP, GENERATE_TRANSCRIPT_HELP, GENERATE_PRIOR_POST_HELP,
    GENERATE_OUTPUT_HELP, USER_ID_HELP, CONFIG_HELP, LOG_LEVEL_HELP, ExitCodes
)
from .runtime import prepare_runtime
from .shared_options import user_id_option, output_option, config_option, log_level_option


async def _generate(orchestrator: ContentOrchestrator, transcript: str, user_id: str, prior_posts):
    repository = orchestrator.repository
    # Stored oldest first so the first --prior-post is the newest
    for content in reversed(prior_posts):
        await repository.save_post(user_id, "Prior post", content)

    outcome = await orchestrator.generate_post(transcript, user_id)
    if not isinstance(outcome, PostCreated):
        return outcome, None
    post = await repository.get_post(user_id, outcome.post_id)
    return outcome, post


@click.command(help=GENERATE_HELP)
@click.option('--transcript', '-t', required=True,
              type=click.Path(exists=True, dir_okay=False), help=GENERATE_TRANSCRIPT_HELP)
@click.option('--prior-post', '-p', 'prior_posts', multiple=True,
              type=click.Path(exists=True, dir_okay=False), help=GENERATE_PRIOR_POST_HELP)
@user_id_option(help=USER_ID_HELP, required=False)
@output_option(help=GENERATE_OUTPUT_HELP)
@config_option(help=CONFIG_HELP)
@log_level_option(help=LOG_LEVEL_HELP)
def generate(transcript, prior_posts, user_id, output, config, log_level):
    """Generate a blog post from a transcript file."""
    app_config = prepare_runtime(config, log_level)
    logger = logging.getLogger(__name__)

    transcript_text = Path(transcript).read_text(encoding="utf-8")
    prior_contents = [Path(path).read_text(encoding="utf-8") for path in prior_posts]
    logger.info(f"Loaded transcript ({len(transcript_text)} characters) and {len(prior_contents)} prior posts")

    orchestrator = ContentOrchestrator.from_config(app_config, repository=InMemoryPostRepository())
    outcome, post = asyncio.run(_generate(orchestrator, transcript_text, user_id, prior_contents))

    if post is None:
        click.echo(f"Error: {outcome.message}", err=True)
        sys.exit(ExitCodes.GENERAL_ERROR)

    if output:
        Path(output).write_text(post.content, encoding="utf-8")
        click.echo(f"Blog post '{post.title}' saved to: {output}")
    else:
        click.echo(post.content)
