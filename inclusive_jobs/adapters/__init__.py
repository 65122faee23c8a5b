"""
Adapters module - I/O surfaces.

Adapters are thin wrappers over the stores and effectors. They hold no
feature logic, only argument parsing and printing.
"""

from inclusive_jobs.adapters.cli import main

__all__ = [
    "main",
]
