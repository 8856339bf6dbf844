"""
Test suite for bonding curve pricer

Contains:
- tests/unit/          : Unit tests for individual modules
"""
