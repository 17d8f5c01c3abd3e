"""
Calculation backends.

Available backends:
    CPUCalculateBackend: CPU reference implementation
"""

from pyinfer.calculate.backends.cpu import CPUCalculateBackend

__all__ = [
    "CPUCalculateBackend",
]
