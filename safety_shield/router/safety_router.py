# safety_shield/router/safety_router.py
# Purpose: Input and output rails over the static rule table.
# • SafetyRouter holds the tables (swappable in tests)
# • Module-level run_input_rail / run_output_rail use a shared default router
# • Neither rail raises: every string maps to a SafetyCheckResult
# ─────────────────────────────────────────────
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Pattern, Sequence

from ..answer.compose import render_template, safety_explanation
from .redirects import resolve_redirect
from .rules import (
    INTENT_RULES,
    OUTPUT_PATTERNS,
    YOUNG_LEARNER_GRADES,
    YOUNG_LEARNER_RULE,
    GradeLevel,
    RiskCategory,
    SafetyLevel,
    SafetyRule,
    Severity,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InputRailConfig:
    grade_level: GradeLevel | str | int
    subject: Optional[str] = None
    strict_mode: bool = False

    def __post_init__(self):
        # accept the bare grade tokens ("K", "8", 8) as well as GradeLevel
        object.__setattr__(self, "grade_level", GradeLevel.parse(self.grade_level))

    @property
    def is_young_learner(self) -> bool:
        return self.grade_level in YOUNG_LEARNER_GRADES

    @classmethod
    def for_grade(
        cls,
        grade: GradeLevel | str | int,
        subject: str | None = None,
        strict_mode: bool | None = None,
    ) -> "InputRailConfig":
        """Build a config; strict mode defaults to on for grades K-5."""
        level = GradeLevel.parse(grade)
        if strict_mode is None:
            strict_mode = level in YOUNG_LEARNER_GRADES
        return cls(grade_level=level, subject=subject, strict_mode=bool(strict_mode))


@dataclass
class SafetyCheckResult:
    level: SafetyLevel
    risk_categories: List[RiskCategory] = field(default_factory=list)
    explanation: str = ""
    redirect_suggestion: Optional[str] = None
    safe_alternative: Optional[str] = None

    @property
    def is_blocked(self) -> bool:
        return self.level == SafetyLevel.BLOCKED

    def unique_categories(self) -> List[RiskCategory]:
        """Categories without repeats, first occurrence order."""
        return list(dict.fromkeys(self.risk_categories))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "level": self.level.value,
            "risk_categories": [c.value for c in self.risk_categories],
            "explanation": self.explanation,
            "redirect_suggestion": self.redirect_suggestion,
            "safe_alternative": self.safe_alternative,
        }


_LEVEL_FOR_SEVERITY = {
    Severity.HIGH: SafetyLevel.BLOCKED,
    Severity.MEDIUM: SafetyLevel.CAUTION,
}


class SafetyRouter:
    def __init__(
        self,
        rules: Sequence[SafetyRule] | None = None,
        young_learner_rule: SafetyRule | None = None,
        output_patterns: Sequence[Pattern[str]] | None = None,
    ):
        self.rules = tuple(INTENT_RULES if rules is None else rules)
        self.young_learner_rule = young_learner_rule or YOUNG_LEARNER_RULE
        self.output_patterns = tuple(OUTPUT_PATTERNS if output_patterns is None else output_patterns)

    # -------------------------
    # Input rail
    # -------------------------
    def check_input(self, query: str, config: InputRailConfig) -> SafetyCheckResult:
        text = query or ""
        detected: List[RiskCategory] = []
        highest = Severity.LOW
        safe_alternative: Optional[str] = None

        for rule in self.rules:
            if not rule.matches(text):
                continue
            if rule.severity < Severity.MEDIUM:
                logger.debug("Low-severity match ignored (category=%s)", rule.category.value)
                continue
            detected.append(rule.category)
            highest = max(highest, rule.severity)
            if safe_alternative is None and rule.safe_redirect:
                safe_alternative = rule.safe_redirect

        # Young learners in strict mode get one extra pass
        if config.is_young_learner and config.strict_mode:
            extra = self.young_learner_rule
            if extra.severity >= Severity.MEDIUM and extra.matches(text):
                detected.append(extra.category)
                highest = max(highest, extra.severity)

        if not detected:
            return SafetyCheckResult(
                level=SafetyLevel.SAFE,
                risk_categories=[],
                explanation=render_template("input_safe"),
            )

        level = _LEVEL_FOR_SEVERITY[highest]

        redirect_suggestion: Optional[str] = None
        if RiskCategory.DANGEROUS_ACTIVITY in detected:
            redirect_suggestion = resolve_redirect(text, safe_alternative)

        logger.info(
            "Input rail: level=%s categories=%s grade=%s",
            level.value,
            [c.value for c in detected],
            config.grade_level.value,
        )
        return SafetyCheckResult(
            level=level,
            risk_categories=detected,
            explanation=safety_explanation(detected, level),
            redirect_suggestion=redirect_suggestion,
            safe_alternative=safe_alternative,
        )

    # -------------------------
    # Output rail
    # -------------------------
    def check_output(self, response: str) -> SafetyCheckResult:
        text = response or ""
        for pat in self.output_patterns:
            if pat.search(text):
                logger.warning("Output rail blocked an AI response")
                return SafetyCheckResult(
                    level=SafetyLevel.BLOCKED,
                    risk_categories=[RiskCategory.DANGEROUS_ACTIVITY],
                    explanation=render_template("output_blocked"),
                    redirect_suggestion=render_template("output_redirect"),
                )
        return SafetyCheckResult(
            level=SafetyLevel.SAFE,
            risk_categories=[],
            explanation=render_template("output_safe"),
        )


# Functional API for callers that don't need a custom rule set
_default_router = SafetyRouter()


def run_input_rail(query: str, config: InputRailConfig) -> SafetyCheckResult:
    return _default_router.check_input(query, config)


def run_output_rail(response: str) -> SafetyCheckResult:
    return _default_router.check_output(response)
