"""
Capabilities are pluggable modules loaded at runtime.

Each capability exposes a build_capability factory in its capability module.
"""

__all__ = [
    "file_read",
    "file_tail",
]
