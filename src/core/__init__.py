"""
Core domain models, mathematical primitives, and contracts.

This module contains the foundational building blocks of the measure
construction: exact reals, sets of reals, covers and their JSON contracts.
"""
