"""
Shared CLI Option Decorators

Reusable Click decorators for options common to several subcommands.
"""

import click


def user_id_option(help=None, required=True):
    """Decorator for the owning user id."""
    def decorator(f):
        return click.option(
            '--user-id', '-u',
            required=required,
            default=None if required else 'cli-user',
            help=help or 'User id'
        )(f)
    return decorator


def output_option(help=None):
    """Decorator for output file options."""
    def decorator(f):
        return click.option(
            '--output', '-o',
            default=None,
            type=click.Path(dir_okay=False, writable=True),
            help=help or 'Output file path'
        )(f)
    return decorator


def config_option(help=None):
    """Decorator for configuration file options."""
    def decorator(f):
        return click.option(
            '--config',
            default=None,
            type=click.Path(dir_okay=False),
            help=help or 'Path to configuration file'
        )(f)
    return decorator


def log_level_option(help=None):
    """Decorator for logging level options."""
    def decorator(f):
        return click.option(
            '--log-level',
            default=None,
            type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
            help=help or 'Logging level'
        )(f)
    return decorator
