"""
Tests for the Risk & Remediation Engine
"""

import pytest

from leakhunter.core.finding import Finding, SecretKind, Severity
from leakhunter.remediation.engine import (
    analyze,
    enrich,
    estimate_fix_time,
    fix_command,
    is_auto_fixable,
    risk_score,
    score_indicators,
)
from leakhunter.remediation.knowledge_base import AUTO_FIXABLE, KNOWLEDGE_BASE, Priority
from leakhunter.scanners.patterns import PATTERNS, default_severity


def _finding(kind: SecretKind, file_path: str = "src/app.js", **kwargs) -> Finding:
    kwargs.setdefault("severity", default_severity(kind))
    return Finding(kind=kind, file_path=file_path, **kwargs)


class TestKnowledgeBase:
    """The lookup tables cover every kind."""

    def test_knowledge_base_is_exhaustive(self):
        assert set(KNOWLEDGE_BASE) == set(SecretKind)

    def test_auto_fixable_is_exhaustive(self):
        assert set(AUTO_FIXABLE) == set(SecretKind)

    def test_catalog_flags_agree(self):
        for pattern in PATTERNS:
            assert pattern.auto_fixable == AUTO_FIXABLE[pattern.name]

    @pytest.mark.parametrize("kind", list(SecretKind))
    def test_every_kind_has_a_plan(self, kind):
        plan = analyze(_finding(kind, snippet="x = 1"))
        assert plan.title
        assert plan.steps
        assert isinstance(plan.priority, Priority)


class TestAnalyze:
    """Tests for analyze()."""

    def test_sensitive_file_plan_uses_file_name(self):
        plan = analyze(_finding(SecretKind.SENSITIVE_FILE, file_path="project/.env"))

        assert plan.title == "Secure .env File"
        assert plan.priority == Priority.IMMEDIATE
        assert plan.steps[0] == 'Add ".env" to .gitignore'
        assert "echo \".env\" >> .gitignore" in plan.automation.script

    def test_generic_api_key_bad_example_is_snippet(self):
        plan = analyze(_finding(SecretKind.GENERIC_API, snippet='API_KEY="abcdefghijklmnopqrst"'))
        assert plan.code_examples.bad == 'API_KEY="abcdefghijklmnopqrst"'
        assert plan.priority == Priority.HIGH

    def test_github_priority_is_immediate(self):
        assert analyze(_finding(SecretKind.GITHUB)).priority == Priority.IMMEDIATE

    def test_discord_script_targets_file(self):
        plan = analyze(_finding(SecretKind.DISCORD, file_path="bot/index.js"))
        assert '"bot/index.js"' in plan.automation.script

    def test_hardcoded_credentials_has_no_automation(self):
        assert analyze(_finding(SecretKind.HARDCODED_CREDENTIALS)).automation is None

    @pytest.mark.parametrize(
        "severity, priority",
        [
            (Severity.CRITICAL, Priority.IMMEDIATE),
            (Severity.HIGH, Priority.HIGH),
            (Severity.MEDIUM, Priority.MEDIUM),
            (Severity.LOW, Priority.LOW),
        ],
    )
    def test_generic_fallback_priority(self, severity, priority):
        plan = analyze(_finding(SecretKind.ENV_VAR, severity=severity))
        assert plan.title == "Fix Environment Configuration"
        assert plan.priority == priority
        assert len(plan.steps) == 6
        assert plan.automation is None

    def test_generic_fallback_bad_example(self):
        plan = analyze(_finding(SecretKind.ENV_VAR, snippet="SESSION=abc"))
        assert plan.code_examples.bad == "SESSION=abc"
        assert analyze(_finding(SecretKind.ENV_VAR)).code_examples.bad == "Sensitive data found in code"

    def test_plans_are_recomputed(self):
        finding = _finding(SecretKind.GITHUB)
        assert analyze(finding) == analyze(finding)
        assert analyze(finding) is not analyze(finding)

    def test_plan_to_dict(self):
        data = analyze(_finding(SecretKind.JWT_SECRET)).to_dict()
        assert data["priority"] == "immediate"
        assert set(data["codeExamples"]) == {"bad", "good"}
        assert data["automation"]["command"] == "Generate secure JWT secret"


class TestRiskScore:
    """Tests for risk scoring."""

    def test_severity_base(self):
        assert score_indicators("Plain", Severity.LOW) == 15
        assert score_indicators("Plain", Severity.MEDIUM) == 40
        assert score_indicators("Plain", Severity.HIGH) == 75
        assert score_indicators("Plain", Severity.CRITICAL) == 100

    def test_unknown_severity(self):
        assert score_indicators("Plain", "bogus") == 20
        assert score_indicators("Plain", None) == 20

    def test_bonuses(self):
        assert score_indicators("Hardcoded Thing", Severity.LOW) == 35
        assert score_indicators("Some Token", Severity.LOW) == 30
        assert score_indicators("Password Thing", Severity.LOW) == 40
        assert score_indicators("Secret Thing", Severity.LOW) == 45
        assert score_indicators("Plain", Severity.LOW, "app/.env.local") == 50
        assert score_indicators("Critical Thing", Severity.LOW) == 55

    def test_clamped(self):
        assert score_indicators("Hardcoded Secret Token Password", Severity.CRITICAL, ".env") == 100

    def test_findings(self):
        assert risk_score(_finding(SecretKind.GENERIC_API)) == 75
        assert risk_score(_finding(SecretKind.GENERIC_API, file_path="config.env")) == 100
        assert risk_score(_finding(SecretKind.MASS_DELETION)) == 75
        assert risk_score(_finding(SecretKind.SUSPICIOUS_COMMENT)) == 40

    @pytest.mark.parametrize("marker", ["Hardcoded", "Token", "Password", "Secret", "Critical"])
    @pytest.mark.parametrize("severity", list(Severity) + ["unknown"])
    @pytest.mark.parametrize("kind", list(SecretKind))
    def test_monotonic(self, kind, severity, marker):
        """Adding a risk marker to the type name never lowers the score."""
        before = score_indicators(kind.value, severity)
        after = score_indicators(f"{kind.value} {marker}", severity)
        assert 0 <= before <= after <= 100


class TestAutoFix:
    """Tests for auto-fix classification and helpers."""

    def test_auto_fixable_kinds(self):
        fixable = {kind for kind in SecretKind if is_auto_fixable(_finding(kind))}
        assert fixable == {
            SecretKind.SENSITIVE_FILE,
            SecretKind.DISCORD,
            SecretKind.GITHUB,
            SecretKind.GENERIC_API,
            SecretKind.JWT_SECRET,
        }

    def test_auto_fix_independent_of_score(self):
        finding = _finding(SecretKind.GENERIC_API, severity=Severity.LOW)
        assert risk_score(finding) == 15
        assert is_auto_fixable(finding)

    def test_fix_command(self):
        command = fix_command(_finding(SecretKind.GITHUB))
        assert command == '# Move to environment variable\necho "GITHUB_TOKEN=your_new_token_here" >> .env'

    def test_fix_command_without_automation(self):
        assert fix_command(_finding(SecretKind.BACKDOOR_ENDPOINT)) is None

    @pytest.mark.parametrize(
        "finding, expected",
        [
            (_finding(SecretKind.GITHUB), "Immediate (within 1 hour)"),
            (_finding(SecretKind.GENERIC_API), "Urgent (within 4 hours)"),
            (_finding(SecretKind.SUSPICIOUS_COMMENT), "High priority (within 24 hours)"),
            (_finding(SecretKind.MASS_DELETION, severity=Severity.LOW), "Low priority (within 1 week)"),
            (_finding(SecretKind.GITHUB, severity=Severity.LOW), "Medium priority (within 3 days)"),
        ],
    )
    def test_estimate_fix_time(self, finding, expected):
        assert estimate_fix_time(finding) == expected

    def test_enrich(self):
        finding = _finding(SecretKind.GITHUB, line_number=3, snippet="t = 1")
        enriched = enrich(finding)

        assert enriched.finding is finding
        assert enriched.risk_score == 100
        assert enriched.auto_fixable is True

        data = enriched.to_dict()
        assert data["riskScore"] == 100
        assert data["lineNumber"] == 3
        assert data["remediation"]["title"] == "Secure GitHub Token"
