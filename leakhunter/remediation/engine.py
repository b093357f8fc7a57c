"""
LeakHunter Risk & Remediation Engine

Stateless helpers that turn a Finding into remediation guidance:
- analyze():          structured remediation plan
- risk_score():       additive, saturating 0-100 urgency score
- is_auto_fixable():  fixed allow-list of kinds
- estimate_fix_time(), fix_command(), enrich()

Plans are rebuilt on every call; a lookup is one dict access plus
string formatting.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Union

from leakhunter.core.finding import Finding, Severity
from leakhunter.remediation.knowledge_base import (
    AUTO_FIXABLE,
    KNOWLEDGE_BASE,
    CodeExamples,
    Priority,
    RemediationPlan,
)

SEVERITY_PRIORITY = {
    Severity.CRITICAL: Priority.IMMEDIATE,
    Severity.HIGH: Priority.HIGH,
    Severity.MEDIUM: Priority.MEDIUM,
    Severity.LOW: Priority.LOW,
}

SEVERITY_BASE_SCORE = {
    Severity.CRITICAL: 100,
    Severity.HIGH: 75,
    Severity.MEDIUM: 40,
    Severity.LOW: 15,
}
UNKNOWN_SEVERITY_SCORE = 20

# (substring of the type name, bonus)
TYPE_BONUSES = (
    ("Hardcoded", 20),
    ("Token", 15),
    ("Password", 25),
    ("Secret", 30),
)
ENV_FILE_BONUS = 35
CRITICAL_BONUS = 40


def general_fix(finding: Finding) -> RemediationPlan:
    """Fallback plan for kinds without a dedicated entry."""
    return RemediationPlan(
        title=f"Fix {finding.kind.value}",
        priority=SEVERITY_PRIORITY.get(finding.severity, Priority.MEDIUM),
        steps=(
            "Review the code for sensitive information",
            "Remove hardcoded values",
            "Use environment variables",
            "Add to .gitignore if applicable",
            "Document the changes",
            "Test the fix thoroughly",
        ),
        code_examples=CodeExamples(
            bad=finding.snippet or "Sensitive data found in code",
            good=(
                "// Use environment variables:\nconst value = process.env.YOUR_VARIABLE;\n\n"
                "// Add to .gitignore if file-based"
            ),
        ),
    )


def analyze(finding: Finding) -> RemediationPlan:
    builder = KNOWLEDGE_BASE.get(finding.kind)
    if builder is None:
        return general_fix(finding)
    return builder(finding.file_path, finding.snippet)


def score_indicators(
    type_name: str,
    severity: Union[Severity, str, None],
    file_path: str = "",
) -> int:
    """
    Compute the risk score from raw indicators.

    Args:
        type_name: Display name of the finding type.
        severity: Severity member or its string value.
        file_path: Path of the file the finding came from.

    Returns:
        Score clamped to [0, 100].
    """
    if isinstance(severity, str):
        try:
            severity = Severity.from_string(severity)
        except KeyError:
            severity = None

    score = SEVERITY_BASE_SCORE.get(severity, UNKNOWN_SEVERITY_SCORE)

    for marker, bonus in TYPE_BONUSES:
        if marker in type_name:
            score += bonus
    if ".env" in file_path:
        score += ENV_FILE_BONUS
    if "Critical" in type_name or severity is Severity.CRITICAL:
        score += CRITICAL_BONUS

    return max(0, min(100, score))


def risk_score(finding: Finding) -> int:
    return score_indicators(finding.kind.value, finding.severity, finding.file_path)


def is_auto_fixable(finding: Finding) -> bool:
    return AUTO_FIXABLE.get(finding.kind, False)


def estimate_fix_time(finding: Finding) -> str:
    score = risk_score(finding)
    if score >= 80:
        return "Immediate (within 1 hour)"
    if score >= 60:
        return "Urgent (within 4 hours)"
    if score >= 40:
        return "High priority (within 24 hours)"
    if score >= 20:
        return "Medium priority (within 3 days)"
    return "Low priority (within 1 week)"


def fix_command(finding: Finding) -> Optional[str]:
    """Shell snippet for kinds with an automation script, else None."""
    plan = analyze(finding)
    if plan.automation:
        return f"# {plan.automation.command}\n{plan.automation.script}"
    return None


@dataclass(frozen=True)
class EnrichedFinding:
    finding: Finding
    plan: RemediationPlan
    risk_score: int
    auto_fixable: bool
    fix_time: str

    def to_dict(self) -> dict[str, Any]:
        result = self.finding.to_dict()
        result["riskScore"] = self.risk_score
        result["autoFixable"] = self.auto_fixable
        result["fixTime"] = self.fix_time
        result["remediation"] = self.plan.to_dict()
        return result


def enrich(finding: Finding) -> EnrichedFinding:
    return EnrichedFinding(
        finding=finding,
        plan=analyze(finding),
        risk_score=risk_score(finding),
        auto_fixable=is_auto_fixable(finding),
        fix_time=estimate_fix_time(finding),
    )
