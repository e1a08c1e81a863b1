"""
Base exception for the budget ledger.

Each layer defines its own errors next to the code that raises them
(storage, validation, queries, config). They all derive from
LedgerError so the command surface can report any of them uniformly.
"""


class LedgerError(Exception):
    """Base class for every error reported to the user."""
    pass
