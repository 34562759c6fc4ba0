"""
Script support for sidechain entries.
"""

from .script import OP_DRIVECHAIN, OP_RETURN, OP_TRUE, Script

__all__ = ["Script", "OP_DRIVECHAIN", "OP_RETURN", "OP_TRUE"]
