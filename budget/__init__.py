"""
Budget - Source Package

A minimal personal budgeting ledger: planned monthly categories,
recorded expenses, and an actual-versus-planned report for the
current month.

DESIGN PRINCIPLES:
1. Reporting logic is pure and storage-agnostic
2. Fail early, fail visibly
3. Validate before writing, never after
4. Storage layer is swappable
"""

__version__ = "1.0.0"
