# sponsored_farm/cli/__main__.py

"""
Sponsored Farm CLI

Usage: python -m sponsored_farm.cli [command] [options]

Administration of the farm ledger: storage layout, farms, positions and
harvest vouchers.
"""

import click

from sponsored_farm.cli.context import CLIContext
from sponsored_farm.core.logging import FarmLogger
from sponsored_farm.types import LoggingConfig


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--config', 'config_path', type=click.Path(dir_okay=False),
              envvar='FARM_CONFIG_PATH', help='YAML configuration file')
@click.option('--log-dir', type=click.Path(file_okay=False), help='Also write log files here')
@click.pass_context
def cli(ctx, verbose, config_path, log_dir):
    """Sponsored Farm CLI - ledger administration tool

    \b
    - Storage layout (init, check, upgrade)
    - Farm registry administration
    - Position inspection
    - Harvest voucher signing and verification
    """
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose

    FarmLogger.configure(LoggingConfig(
        level="DEBUG" if verbose else "WARNING",
        log_dir=log_dir,
        structured_format=False,
    ))

    cli_context = CLIContext(config_path)
    ctx.obj['cli_context'] = cli_context
    ctx.call_on_close(cli_context.shutdown)
    ctx.call_on_close(FarmLogger.reset)


from sponsored_farm.cli.commands.db import db
from sponsored_farm.cli.commands.farm import farm
from sponsored_farm.cli.commands.position import position
from sponsored_farm.cli.commands.voucher import voucher

cli.add_command(db)
cli.add_command(farm)
cli.add_command(position)
cli.add_command(voucher)


if __name__ == '__main__':
    cli()
