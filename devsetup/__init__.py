"""
devsetup — cross-platform development environment setup.
"""

__version__ = "0.1.0"
