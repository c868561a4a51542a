"""
Retail Bank Ledger

An in-memory account ledger for a small retail bank: typed accounts with
per-product interest and fee rules, an account database with identity and
ordering invariants, and a line-oriented transaction manager.
"""

__version__ = "1.0.0"
