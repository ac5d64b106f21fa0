"""
Learning Package

Error-driven ranking learning (MRCD).
"""

from .mrcd import Mrcd

__all__ = ['Mrcd']
