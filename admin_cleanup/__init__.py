"""
Admin dashboard cleanup tool
"""

__version__ = "1.0.0"
