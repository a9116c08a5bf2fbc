"""
Computational backends for regression.

Each backend takes a Design and returns Result[LinearParams].
"""

from pyols.regression.backends.cpu import CPUGaussBackend

__all__ = [
    "CPUGaussBackend",
]
