# sponsored_farm/cli/commands/farm.py

"""
Farm Registry CLI Commands
"""

import click

from ..context import CLI_ERRORS


caller_option = click.option('--caller', envvar='FARM_CALLER', required=True,
                             help='Administrator account (or FARM_CALLER)')


def _echo_farm(farm) -> None:
    status = "active" if farm.active else "inactive"
    click.echo(f"🌾 Farm {farm.farm_id} ({status})")
    click.echo(f"   Reward token: {farm.reward_token}")
    click.echo(f"   Signer: {farm.signer}")
    click.echo(f"   Pool: {farm.pool}")
    click.echo(f"   Reward per block: {farm.reward_per_block}")
    click.echo(f"   Deposited: {farm.total_claimable}")
    click.echo(f"   Claimed: {farm.total_claimed}")
    click.echo(f"   Balance: {farm.balance}")


@click.group()
def farm():
    """Manage farms"""
    pass


@farm.command('add')
@click.option('--reward-token', required=True, help='ERC20 reward token address')
@click.option('--signer', required=True, help='Voucher signer address')
@click.option('--pool', required=True, help='Sponsored pool address')
@click.option('--reward-per-block', type=int, default=0, show_default=True,
              help='Informational reward rate')
@caller_option
@click.pass_context
def add(ctx, reward_token, signer, pool, reward_per_block, caller):
    """Register a new farm

    Examples:
        farm add --reward-token 0xA0b8... --signer 0x9f3c... --pool 0x88e6... --caller 0x1234...
    """
    cli_context = ctx.obj['cli_context']

    try:
        farm_id = cli_context.ledger.register_farm(caller, reward_token, signer, pool, reward_per_block)
    except CLI_ERRORS as e:
        raise click.ClickException(f"Failed to add farm: {e}")

    click.echo(f"✅ Farm {farm_id} registered")


@farm.command('list')
@click.option('--active-only', is_flag=True, help='Only show active farms')
@click.pass_context
def list_farms(ctx, active_only):
    """List all farms"""
    cli_context = ctx.obj['cli_context']

    try:
        farms = cli_context.ledger.farms()
    except CLI_ERRORS as e:
        raise click.ClickException(f"Failed to list farms: {e}")

    if active_only:
        farms = [f for f in farms if f.active]

    if not farms:
        click.echo("No farms found")
        return

    click.echo("🌾 Farms")
    click.echo("=" * 80)
    for f in farms:
        _echo_farm(f)
        click.echo()


@farm.command('show')
@click.argument('farm_id', type=int)
@click.pass_context
def show(ctx, farm_id):
    """Show one farm"""
    cli_context = ctx.obj['cli_context']

    try:
        _echo_farm(cli_context.ledger.get_farm(farm_id))
    except CLI_ERRORS as e:
        raise click.ClickException(f"Failed to show farm: {e}")


@farm.command('activate')
@click.argument('farm_id', type=int)
@caller_option
@click.pass_context
def activate(ctx, farm_id, caller):
    """Re-enable harvesting for a farm"""
    try:
        ctx.obj['cli_context'].ledger.activate_farm(caller, farm_id)
    except CLI_ERRORS as e:
        raise click.ClickException(f"Failed to activate farm: {e}")

    click.echo(f"✅ Farm {farm_id} activated")


@farm.command('deactivate')
@click.argument('farm_id', type=int)
@caller_option
@click.pass_context
def deactivate(ctx, farm_id, caller):
    """Stop harvesting for a farm (staking and deposits stay open)"""
    try:
        ctx.obj['cli_context'].ledger.deactivate_farm(caller, farm_id)
    except CLI_ERRORS as e:
        raise click.ClickException(f"Failed to deactivate farm: {e}")

    click.echo(f"✅ Farm {farm_id} deactivated")


@farm.command('set-signer')
@click.argument('farm_id', type=int)
@click.argument('signer')
@caller_option
@click.pass_context
def set_signer(ctx, farm_id, signer, caller):
    """Replace the voucher signer of a farm"""
    try:
        ctx.obj['cli_context'].ledger.set_signer(caller, farm_id, signer)
    except CLI_ERRORS as e:
        raise click.ClickException(f"Failed to set signer: {e}")

    click.echo(f"✅ Farm {farm_id} signer set to {signer.lower()}")


@farm.command('set-reward')
@click.argument('farm_id', type=int)
@click.argument('reward_per_block', type=int)
@caller_option
@click.pass_context
def set_reward(ctx, farm_id, reward_per_block, caller):
    """Update the informational reward rate of a farm"""
    try:
        ctx.obj['cli_context'].ledger.set_reward_per_block(caller, farm_id, reward_per_block)
    except CLI_ERRORS as e:
        raise click.ClickException(f"Failed to set reward rate: {e}")

    click.echo(f"✅ Farm {farm_id} reward per block set to {reward_per_block}")
