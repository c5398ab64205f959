"""Ledgerlens: balances, views and reconciliation for a personal ledger."""

__version__ = "0.1.0"


# Import main lazily to avoid circular dependencies
def __getattr__(name):
    if name == "main":
        from ledgerlens.cli.main import main

        return main
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
