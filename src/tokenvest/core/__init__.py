"""
tokenvest core: configuration, exceptions and structured logging shared by
the vesting engine.
"""

__all__ = []
