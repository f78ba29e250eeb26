from __future__ import annotations

"""wgtest/services/diagnostics/error_classifier.py

Centralized classification of failed interface activations.

This module looks at the text captured from a failed `wg-quick up` and
assigns zero or more DiagnosticTag values. The classification is:
- deterministic (no randomness)
- text-based (pattern matching against known error signatures)
- data-driven (an ordered rule table, each rule evaluated independently)

Tags are hints, not root causes. An activation that matches no rule is
still a failure; it simply carries no tags.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Pattern, Sequence

from wgtest.models import DiagnosticTag

_IPV4_CIDR = r"(?:[0-9]{1,3}\.){3}[0-9]{1,3}/[0-9]{1,2}"
_IPV6_ADDR = r"[0-9a-fA-F]{0,4}(?::[0-9a-fA-F]{0,4}){2,7}(?:/[0-9]{1,3})?"

# `ip` reports rejected addresses as: Error: <reason> "10.0.0.300/24".
# Older wg-quick builds quote the token in backticks instead.
_INVALID_ADDRESS = (
    r"Error: [^\n]*?[`\"'](?:" + _IPV4_CIDR + r"|" + _IPV6_ADDR + r")[`\"']"
)


@dataclass(frozen=True)
class DiagnosticRule:
    """One (pattern, tag) entry of the classifier table."""

    tag: DiagnosticTag
    pattern: Pattern[str]
    hint: str

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None


DEFAULT_RULES: tuple[DiagnosticRule, ...] = (
    DiagnosticRule(
        tag=DiagnosticTag.INVALID_ADDRESS,
        pattern=re.compile(_INVALID_ADDRESS),
        hint="Invalid IP address format in config",
    ),
    DiagnosticRule(
        tag=DiagnosticTag.NETWORK_INTERFACE_ERROR,
        pattern=re.compile(re.escape("RTNETLINK")),
        hint="Network interface problem (RTNETLINK error)",
    ),
    DiagnosticRule(
        tag=DiagnosticTag.PERMISSION_ERROR,
        pattern=re.compile(re.escape("Permission denied")),
        hint="Permission problem",
    ),
)


def _text(value: Optional[str]) -> str:
    return value or ""


def classify_activation_failure(
    text: Optional[str],
    rules: Sequence[DiagnosticRule] = DEFAULT_RULES,
) -> List[DiagnosticTag]:
    """Return every tag whose rule matches `text`, in rule-table order.

    Matching is case-sensitive. Each tag appears at most once.
    """
    haystack = _text(text)
    tags: List[DiagnosticTag] = []
    for rule in rules:
        if rule.tag not in tags and rule.matches(haystack):
            tags.append(rule.tag)
    return tags


def describe_tag(
    tag: DiagnosticTag,
    rules: Sequence[DiagnosticRule] = DEFAULT_RULES,
) -> str:
    """Human-readable hint printed as `Issue detected: <hint>`."""
    for rule in rules:
        if rule.tag is tag:
            return rule.hint
    return tag.value
