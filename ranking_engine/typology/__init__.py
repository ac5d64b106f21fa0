"""
Typology Package

Factorial typology over competition lists.
"""

from .factorial_typology import FactorialTypology

__all__ = ['FactorialTypology']
