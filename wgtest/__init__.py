# wgtest/__init__.py
from __future__ import annotations

"""
Marks `wgtest` as a Python package.

Configuration lives in wgtest/config, the test workflow in wgtest/services,
the CLI entrypoint in wgtest/main.py.
"""

__version__ = "0.1.0"
