"""Utility for resolving account names to IDs."""

from ledgerlens.domain.account import AccountService
from ledgerlens.domain.entities import CASH_WALLET_ID, DIGITAL_WALLET_ID

WALLET_ALIASES = {
    "cash": CASH_WALLET_ID,
    "cash wallet": CASH_WALLET_ID,
    CASH_WALLET_ID: CASH_WALLET_ID,
    "digital": DIGITAL_WALLET_ID,
    "digital wallet": DIGITAL_WALLET_ID,
    DIGITAL_WALLET_ID: DIGITAL_WALLET_ID,
}


def resolve_account(
    account_service: AccountService, account: str, allow_wallets: bool = True
) -> str:
    """Resolve an account name, account ID or wallet alias to an ID.

    Args:
        account_service: AccountService instance
        account: Account name, account ID, or "cash"/"digital"
        allow_wallets: Whether wallet aliases are accepted

    Returns:
        Account ID, or a wallet id

    Raises:
        ValueError: If account is not found
    """
    key = account.strip()
    wallet_id = WALLET_ALIASES.get(key.lower())
    if wallet_id is not None:
        if not allow_wallets:
            raise ValueError(f"'{account}' is a wallet, not an account")
        return wallet_id

    if account_service.get_account(key) is not None:
        return key

    # Names are matched exactly first, then ignoring case
    accounts = account_service.list_accounts()
    for acc in accounts:
        if acc.name == key:
            return acc.id
    for acc in accounts:
        if acc.name.lower() == key.lower():
            return acc.id

    raise ValueError(f"Account '{account}' not found")
