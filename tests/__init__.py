"""
Test suite for the Lebesgue outer measure construction

Contains:
- tests/unit/          : Unit tests for individual modules
"""
