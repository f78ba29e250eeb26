from __future__ import annotations

"""
Diagnostics utilities.

This package currently provides:
- error_classifier: tag failed activations with stable, machine-readable
  categories based on the captured command output.
- config_linter: the per-config debug section (permissions, redacted
  contents, line endings, structure warnings).

The goal is to keep text-matching logic centralized and deterministic.
"""
