"""
Core domain models, mathematical primitives, and invariants.

This module contains the bonding curve formulas and value types, independent
of any ledger or contract runtime that persists the curve state.
"""
