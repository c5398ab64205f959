"""CLI helpers for account resolution and error handling."""

from __future__ import annotations

import click
from ledgerlens.domain.account import AccountService
from ledgerlens.utils.account_resolver import resolve_account


def resolve_account_or_exit(
    ctx: click.Context,
    account_service: AccountService,
    account: str,
    allow_wallets: bool = True,
) -> str:
    """Resolve account name, ID or wallet alias, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_account(account_service, account, allow_wallets=allow_wallets)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
