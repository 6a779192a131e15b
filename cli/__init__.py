"""
CLI Package for blogcast

Click group with one module per subcommand:
    transcribe  - transcribe an uploaded audio/video file
    generate    - turn a transcript into a Markdown blog post

The cli() function serves as the console script entry point for setup.py.
"""

import os
import click
from dotenv import load_dotenv

from blogcast import __version__

# Load environment variables from .env files
# Priority: .env.dev (if exists) overrides .env
if os.path.exists('.env.dev'):
    load_dotenv('.env.dev')
elif os.path.exists('.env'):
    load_dotenv('.env')
from .transcribe import transcribe
from .generate import generate


@click.group()
@click.version_option(version=__version__, prog_name='blogcast')
def main():
    """blogcast CLI - Transcribe recordings with Gemini and turn them into blog posts."""
    pass

# Register subcommands
main.add_command(transcribe)
main.add_command(generate)

# Entry point for setup.py console script
def cli():
    """Console script entry point."""
    main()
