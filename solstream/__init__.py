"""Event types, object pools, subscription filters and sessions for Solana update streams."""

__version__ = "0.5.0"
__all__ = ["types", "pool", "shred_pool", "filters", "session", "system"]