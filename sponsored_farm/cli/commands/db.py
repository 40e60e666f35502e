# sponsored_farm/cli/commands/db.py

"""
Storage Layout CLI Commands

Create, check and extend the ledger tables. Columns are only ever appended.
"""

import click

from ..context import CLI_ERRORS


@click.group()
def db():
    """Manage the ledger database layout"""
    pass


@db.command('init')
@click.option('--position-manager', help='Position manager address; also initializes the ledger')
@click.option('--owner', help='Administrator address (defaults to --caller)')
@click.option('--caller', envvar='FARM_CALLER', help='Account performing the initialization')
@click.pass_context
def init(ctx, position_manager, owner, caller):
    """Create the ledger tables and optionally initialize the ledger

    Examples:
        # Tables only
        db init

        # Tables plus one-time initialization
        db init --position-manager 0xC36442b4... --caller 0x1234...
    """
    cli_context = ctx.obj['cli_context']

    try:
        ledger = cli_context.ledger
        click.echo("✅ Ledger tables ready")

        if position_manager:
            if not caller:
                raise click.UsageError("--caller is required to initialize the ledger")
            ledger.initialize(caller, position_manager, owner)
            click.echo("✅ Ledger initialized")
            click.echo(f"   Owner: {ledger.owner()}")
            click.echo(f"   Position manager: {ledger.position_manager_address()}")

    except CLI_ERRORS as e:
        raise click.ClickException(f"Failed to initialize database: {e}")


@db.command('check')
@click.pass_context
def check(ctx):
    """Compare the stored layout with the current model"""
    cli_context = ctx.obj['cli_context']

    try:
        if not cli_context.db_manager.health_check():
            raise click.ClickException("Database is not reachable")
        pending = cli_context.layout.check_database(cli_context.db_manager.engine)
    except CLI_ERRORS as e:
        raise click.ClickException(f"Layout check failed: {e}")

    if not pending:
        click.echo("✅ Storage layout is up to date")
        return

    click.echo("⚠️  Columns pending append")
    for table_name, columns in pending.items():
        click.echo(f"   {table_name}: {', '.join(columns)}")


@db.command('upgrade')
@click.pass_context
def upgrade(ctx):
    """Create missing tables and append missing trailing columns"""
    cli_context = ctx.obj['cli_context']

    try:
        appended = cli_context.layout.sync(cli_context.db_manager.engine)
    except CLI_ERRORS as e:
        raise click.ClickException(f"Layout upgrade failed: {e}")

    if not appended:
        click.echo("✅ Nothing to upgrade")
        return

    click.echo("✅ Storage layout upgraded")
    for table_name, columns in appended.items():
        click.echo(f"   {table_name}: +{', '.join(columns)}")
