"""
Main CLI entry point for SaaS Atlas (Click implementation).
"""

import click

from saas_atlas import __version__
from saas_atlas.cli.commands_click import (
    browse, search, show, categories, recent, export, config_commands
)


@click.group()
@click.version_option(version=__version__, message='SaaS Atlas v%(version)s')
@click.option('--config', '-c', 'config_path', default='config/config.yaml',
              help='Path to configuration file (default: config/config.yaml)')
@click.option('--csv', 'csv_path', default=None, type=click.Path(exists=True, dir_okay=False),
              help='Read companies from a CSV snapshot instead of the store')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.pass_context
def main(ctx: click.Context, config_path: str, csv_path: str, verbose: bool):
    """SaaS Atlas - Browse and search SaaS products and their support resources."""
    ctx.ensure_object(dict)
    ctx.obj.update(config_path=config_path, csv_path=csv_path, verbose=verbose, config=None)


# Add commands
main.add_command(browse)
main.add_command(search)
main.add_command(show)
main.add_command(categories)
main.add_command(recent)
main.add_command(export)
main.add_command(config_commands)


if __name__ == '__main__':
    main()
