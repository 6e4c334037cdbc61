#!/usr/bin/env python3
"""
solcli - Solana wallet CLI entry point.
"""

import logging
from decimal import Decimal

import click
from rich.console import Console
from rich.markup import escape

from .. import __version__
from ..core.config import Config
from ..core.exceptions import SolcliError
from ..utils.units import sol_to_lamports, to_decimal
from ..utils.wallet.provider import EnvKeyProvider
from .router import CommandRouter

logger = logging.getLogger(__name__)


class SolAmountType(click.ParamType):
    """Positive SOL amount parsed as Decimal"""

    name = "amount"

    def convert(self, value, param, ctx):
        if isinstance(value, Decimal):
            amount = value
        else:
            try:
                amount = to_decimal(value)
            except ValueError:
                self.fail(f"{value!r} is not a valid SOL amount", param, ctx)
        if amount <= 0:
            self.fail(f"amount must be positive, got {value}", param, ctx)
        try:
            lamports = sol_to_lamports(amount)
        except ValueError as e:
            self.fail(str(e), param, ctx)
        if lamports == 0:
            self.fail(f"{value} SOL is less than one lamport", param, ctx)
        return amount


SOL_AMOUNT = SolAmountType()


def _build_router(ctx: click.Context) -> CommandRouter:
    """Router for this invocation, honouring environ and ledger overrides in ctx.obj"""
    obj = ctx.obj
    environ = obj.get("environ")
    config = Config.from_env(environ=environ, endpoint=obj.get("url"))
    return CommandRouter(
        config,
        provider=EnvKeyProvider(config.credential_var, environ=environ),
        ledger=obj.get("ledger"),
    )


def _run(ctx: click.Context, command: str, *args):
    """Run a router command, turning solcli errors into exit status 1"""
    try:
        router = _build_router(ctx)
        return getattr(router, command)(*args)
    except SolcliError as e:
        logger.debug(f"{command} failed", exc_info=True)
        Console(stderr=True, soft_wrap=True, highlight=False).print(f"[red]Error:[/red] {escape(str(e))}")
        ctx.exit(1)


@click.group()
@click.version_option(__version__, prog_name="solcli")
@click.option("--url", help="RPC endpoint (default: SOLANA_RPC_URL or the SOLANA_NETWORK cluster)")
@click.option("-v", "--verbose", is_flag=True, help="Enable info logging")
@click.pass_context
def cli(ctx, url, verbose):
    """Solana wallet tool: keypairs, balances and devnet airdrops"""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s"
    )
    ctx.ensure_object(dict)
    if url:
        ctx.obj["url"] = url


@cli.command()
@click.pass_context
def generate(ctx):
    """Generate a new keypair"""
    _run(ctx, "generate")


@cli.command(name="show-public-key")
@click.pass_context
def show_public_key(ctx):
    """Show the public key of the wallet in PRIVATE_KEY"""
    _run(ctx, "show_public_key")


@cli.command(name="show-balance")
@click.pass_context
def show_balance(ctx):
    """Show the SOL balance of the wallet in PRIVATE_KEY"""
    _run(ctx, "show_balance")


@cli.command()
@click.argument("amount", type=SOL_AMOUNT)
@click.pass_context
def airdrop(ctx, amount):
    """Request an airdrop of AMOUNT SOL and wait for confirmation"""
    _run(ctx, "airdrop", amount)


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
