# wgtest/services/reports/__init__.py
from __future__ import annotations

"""
Reporting utilities for batch runs.

High-level helpers exposed:

- build_batch_markdown(batch) -> str
"""

from .markdown_builder import build_batch_markdown  # noqa: F401
