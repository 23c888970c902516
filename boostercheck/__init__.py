"""
boostercheck - validation and auditing for booster pack contents data.
"""

__version__ = "0.1.0"
