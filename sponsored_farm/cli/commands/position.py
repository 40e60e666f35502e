# sponsored_farm/cli/commands/position.py

import click

from ..context import CLI_ERRORS


@click.group()
def position():
    """Inspect staked positions"""
    pass


@position.command('show')
@click.argument('token_id', type=int)
@click.pass_context
def show(ctx, token_id):
    """Show custody and per-farm claims of a position"""
    cli_context = ctx.obj['cli_context']

    try:
        ledger = cli_context.ledger
        staked = ledger.get_position(token_id)
        claims = ledger.position_claims(token_id)
    except CLI_ERRORS as e:
        raise click.ClickException(f"Failed to show position: {e}")

    click.echo(f"🎫 Position {token_id}")
    if staked is None:
        click.echo("   Not staked")
    else:
        click.echo(f"   Custodian: {staked.owner}")
        click.echo(f"   Staked at block: {staked.staked_block}")

    for farm_id, amount in claims.items():
        click.echo(f"   Farm {farm_id} claimed: {amount}")
