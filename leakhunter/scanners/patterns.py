"""
LeakHunter Pattern Catalog

Named detection rules. Catalog entries are plain regular expressions;
structural rules are dedicated functions for kinds that need more than a
single token shape (credential assignments, routes, deletion calls).
Both sets are enumerable from this module through detector_kinds().
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Optional

from leakhunter.core.finding import SecretKind, Severity

# Rule tiers
CORE = "core"
DEEP = "deep"
EXTENDED = "extended"


@dataclass(frozen=True)
class Pattern:
    name: SecretKind
    regex: "re.Pattern[str]"
    severity: Severity
    auto_fixable: bool = False
    tier: str = CORE

    def matches(self, line: str) -> bool:
        return self.regex.search(line) is not None


@dataclass(frozen=True)
class StructuralRule:
    name: SecretKind
    predicate: Callable[[str], bool]
    severity: Severity
    tier: str = CORE

    def matches(self, line: str) -> bool:
        return self.predicate(line)


PATTERNS: tuple[Pattern, ...] = (
    # ── Bot / platform tokens ──
    # Modern Discord tokens are [24-26].[6].[27+]; the ranges leave some slack
    Pattern(
        SecretKind.DISCORD,
        re.compile(r"[a-zA-Z0-9_-]{23,28}\.[a-zA-Z0-9_-]{6,7}\.[a-zA-Z0-9_-]{27,}"),
        Severity.CRITICAL,
        auto_fixable=True,
    ),
    Pattern(
        SecretKind.GITHUB,
        re.compile(r"gh[pous]_[a-zA-Z0-9]{36,}"),
        Severity.CRITICAL,
        auto_fixable=True,
    ),
    # ── Assignments ──
    Pattern(
        SecretKind.GENERIC_API,
        re.compile(r"(api[_-]?key|secret|token)[\s:=]['\"][a-zA-Z0-9]{20,}['\"]", re.IGNORECASE),
        Severity.HIGH,
        auto_fixable=True,
    ),
    # ── Extended tier ──
    Pattern(
        SecretKind.TELEGRAM,
        re.compile(r"\d{8,12}:[0-9A-Za-z_-]{35}"),
        Severity.HIGH,
        tier=EXTENDED,
    ),
    Pattern(
        SecretKind.ENV_VAR,
        re.compile(r"[A-Z0-9_]+=[a-zA-Z0-9/+=]{32,}"),
        Severity.HIGH,
        tier=EXTENDED,
    ),
    Pattern(
        SecretKind.PRIVATE_KEY,
        re.compile(r"-----BEGIN [A-Z ]*PRIVATE KEY-----"),
        Severity.CRITICAL,
        tier=EXTENDED,
    ),
    Pattern(
        SecretKind.SUSPICIOUS_COMMENT,
        re.compile(r"TODO.*password|FIXME.*credential|HACK.*admin", re.IGNORECASE),
        Severity.MEDIUM,
        tier=EXTENDED,
    ),
)


# Explicit sensitive file names (matched by equality, containment or suffix)
SENSITIVE_FILES: tuple[str, ...] = (
    ".env",
    ".env.local",
    ".env.dev",
    "config.json",
    "credentials",
    "credentials.json",
    "backup.zip",
    "database.sql",
    "key.pem",
    "id_rsa",
    "id_ed25519",
    ".aws/credentials",
    "secret.txt",
)

SENSITIVE_KEYWORDS: tuple[str, ...] = (
    ".env", ".key", ".pem", ".secret", ".credential",
    "password", "token", "database", "backup", "dump",
)


# ── Structural rules ──

_CREDENTIAL_ASSIGNMENT = re.compile(
    r"(email|user|username|password|passwd)[\s:=]['\"][^'\"]+['\"]", re.IGNORECASE
)
_JWT_SECRET = re.compile(r"JWT_SECRET\s*=\s*['\"][^'\"]{10,}['\"]")
_BACKDOOR_ROUTE = re.compile(
    r"router\.(get|post|put|delete).*['\"]/?(force-reset|backdoor|recovery)['\"]"
)
_MASS_DELETION = ("deleteMany", "dropDatabase", "remove({})")


def hardcoded_credentials(line: str) -> bool:
    return _CREDENTIAL_ASSIGNMENT.search(line) is not None


def jwt_secret(line: str) -> bool:
    return _JWT_SECRET.search(line) is not None


def backdoor_endpoint(line: str) -> bool:
    return _BACKDOOR_ROUTE.search(line) is not None


def mass_deletion(line: str) -> bool:
    return any(call in line for call in _MASS_DELETION)


STRUCTURAL_RULES: tuple[StructuralRule, ...] = (
    StructuralRule(SecretKind.HARDCODED_CREDENTIALS, hardcoded_credentials, Severity.CRITICAL),
    StructuralRule(SecretKind.JWT_SECRET, jwt_secret, Severity.CRITICAL, tier=DEEP),
    StructuralRule(SecretKind.BACKDOOR_ENDPOINT, backdoor_endpoint, Severity.CRITICAL, tier=DEEP),
    StructuralRule(SecretKind.MASS_DELETION, mass_deletion, Severity.HIGH, tier=DEEP),
)

# Kinds produced from the file name rather than from a line
NAME_KINDS: frozenset[SecretKind] = frozenset({SecretKind.SENSITIVE_FILE})

STRUCTURAL_KINDS: frozenset[SecretKind] = NAME_KINDS | frozenset(
    rule.name for rule in STRUCTURAL_RULES
)


def detector_kinds() -> frozenset[SecretKind]:
    """Every kind a scan can report, catalog and structural rules together."""
    return frozenset(p.name for p in PATTERNS) | STRUCTURAL_KINDS


def pattern_for(kind: SecretKind) -> Optional[Pattern]:
    for pattern in PATTERNS:
        if pattern.name is kind:
            return pattern
    return None


def default_severity(kind: SecretKind) -> Severity:
    """Severity a finding of ``kind`` is reported with."""
    if kind in NAME_KINDS:
        return Severity.HIGH
    for rule in PATTERNS + STRUCTURAL_RULES:
        if rule.name is kind:
            return rule.severity
    raise KeyError(kind)
