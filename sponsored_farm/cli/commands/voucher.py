# sponsored_farm/cli/commands/voucher.py

"""
Harvest Voucher CLI Commands

Vouchers are printed and read as JSON objects with the fields token_id,
farm_id, total_claimable, block_number and signature.
"""

import click
import msgspec

from ...signing.voucher import VoucherSigner, recover_voucher_signer
from ...types.model.rewards import HarvestParams
from ...utils.addresses import same_address
from ..context import CLI_ERRORS


@click.group()
def voucher():
    """Sign and verify harvest vouchers"""
    pass


@voucher.command('sign')
@click.option('--token-id', type=int, required=True, help='Position token id')
@click.option('--farm-id', type=int, required=True, help='Farm id')
@click.option('--total-claimable', type=int, required=True, help='Cumulative claimable amount')
@click.option('--block-number', type=int, required=True, help='Block the amount was computed at')
@click.option('--private-key', envvar='FARM_SIGNER_KEY', required=True,
              help='Signer private key (or FARM_SIGNER_KEY)')
@click.pass_context
def sign(ctx, token_id, farm_id, total_claimable, block_number, private_key):
    """Sign a cumulative harvest voucher

    Examples:
        FARM_SIGNER_KEY=0x... voucher sign --token-id 7 --farm-id 0 \\
            --total-claimable 1000000000000000000 --block-number 19000000
    """
    cli_context = ctx.obj['cli_context']

    try:
        domain = cli_context.voucher_domain()
    except CLI_ERRORS as e:
        raise click.ClickException(f"Failed to sign voucher: {e}")

    try:
        signer = VoucherSigner(private_key, domain)
    except ValueError as e:
        raise click.ClickException(f"Failed to load signer key: {e}")

    signed = signer.sign(token_id, farm_id, total_claimable, block_number)
    click.echo(msgspec.json.encode(signed).decode('utf-8'))


@voucher.command('verify')
@click.argument('voucher_json')
@click.option('--signer', required=True, help='Expected signer address')
@click.pass_context
def verify(ctx, voucher_json, signer):
    """Check that a voucher was signed by SIGNER"""
    cli_context = ctx.obj['cli_context']

    try:
        params = msgspec.json.decode(voucher_json, type=HarvestParams)
    except msgspec.DecodeError as e:
        raise click.ClickException(f"Invalid voucher JSON: {e}")

    try:
        recovered = recover_voucher_signer(cli_context.voucher_domain(), params)
    except CLI_ERRORS as e:
        raise click.ClickException(f"Failed to verify voucher: {e}")

    if not same_address(recovered, signer):
        raise click.ClickException(f"Invalid signature (recovered {recovered})")

    click.echo(f"✅ Valid voucher signed by {recovered}")
