"""
Gas usage calculator.

Converts logged flow changes into liters of oxygen and nitrogen per day.
"""

__version__ = "0.1.0"
