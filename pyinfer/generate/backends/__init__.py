"""
Generation backends.

Available backends:
    CPUGenerateBackend: CPU reference implementation (optionally joblib-parallel)
"""

from pyinfer.generate.backends.cpu import CPUGenerateBackend

__all__ = [
    "CPUGenerateBackend",
]
