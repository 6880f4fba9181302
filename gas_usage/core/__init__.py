"""
Core modules for the gas usage calculator.

This package contains timestamp parsing, entry validation errors,
daily usage accumulation, and export formatting.
"""
