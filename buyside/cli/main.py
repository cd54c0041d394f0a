"""
Main CLI entry point for Buyside
"""

import click

from ..core.config import Config
from ..core.observability import setup_logging
from .campaign import campaign_group


@click.group()
@click.version_option(version='1.0.0')
@click.option('--log-level', default=None, help='Logging level (default: LOG_LEVEL env or INFO)')
def cli(log_level):
    """
    Buyside - AI-assisted ad campaign management

    Create campaigns with Gemini keyword extraction, automated policy
    review and semantic descriptions, stored in Supabase.
    """
    setup_logging(log_level)
    Config.validate()


cli.add_command(campaign_group)


def main():
    cli()


if __name__ == '__main__':
    main()
