# wgtest/services/__init__.py
from __future__ import annotations

"""
Service layer: tool adapters, diagnostics, the tester workflow and reports.
"""
