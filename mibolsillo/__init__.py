"""
MiBolsillo - Source Package

A small personal finance tracker: record income and expenses, browse
them with filters and watch the balance and the last week's trend.

DESIGN PRINCIPLES:
1. Validate at the form, trust inside the store
2. One store, passed explicitly to every screen
3. Every persisted write goes through a versioned envelope
4. Storage failures are logged, never shown as crashes
"""

__version__ = "1.0.0"
__author__ = "MiBolsillo Team"
