# safety_shield/router/rules.py
# Purpose: The static rule table for the Safety Shield.
# Intent rules are evaluated in declaration order by the input rail; the
# young-learner rule and output patterns are kept apart because they only
# apply in specific situations.

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Optional, Pattern, Tuple


class RiskCategory(str, Enum):
    VIOLENCE = "violence"
    SELF_HARM = "self_harm"
    DANGEROUS_ACTIVITY = "dangerous_activity"
    INAPPROPRIATE_CONTENT = "inappropriate_content"
    PRIVACY_VIOLATION = "privacy_violation"
    JAILBREAK_ATTEMPT = "jailbreak_attempt"
    DEEPFAKE_REQUEST = "deepfake_request"
    PERSONAL_DATA = "personal_data"


class _Ranked(str, Enum):
    """str-valued enum whose members compare by declaration order."""

    @property
    def rank(self) -> int:
        return list(type(self)).index(self)

    def __lt__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.rank >= other.rank


class SafetyLevel(_Ranked):
    SAFE = "safe"
    CAUTION = "caution"
    BLOCKED = "blocked"


class Severity(_Ranked):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class GradeLevel(str, Enum):
    K = "K"
    G1 = "1"
    G2 = "2"
    G3 = "3"
    G4 = "4"
    G5 = "5"
    G6 = "6"
    G7 = "7"
    G8 = "8"
    G9 = "9"
    G10 = "10"
    G11 = "11"
    G12 = "12"

    @classmethod
    def parse(cls, value: "GradeLevel | str | int") -> "GradeLevel":
        """Accept 'K', 'k', '3', 3 or a GradeLevel; raise ValueError otherwise."""
        if isinstance(value, cls):
            return value
        token = str(value).strip().upper()
        try:
            return cls(token)
        except ValueError:
            raise ValueError(f"Unknown grade level: {value!r} (expected K or 1-12)") from None


YOUNG_LEARNER_GRADES: FrozenSet[GradeLevel] = frozenset(
    {GradeLevel.K, GradeLevel.G1, GradeLevel.G2, GradeLevel.G3, GradeLevel.G4, GradeLevel.G5}
)


@dataclass(frozen=True)
class SafetyRule:
    pattern: Pattern[str]
    category: RiskCategory
    severity: Severity
    safe_redirect: Optional[str] = None

    def matches(self, text: str) -> bool:
        return bool(self.pattern.search(text or ""))


# ---------------------------------------
# Pattern helpers
# ASCII word boundaries keep "\b" behaving the same for accented input.
# A "line" ends at \n, \r, U+2028 or U+2029; _ANY never crosses one.
# ---------------------------------------
_FLAGS = re.IGNORECASE | re.ASCII
_ANY = r"[^\n\r\u2028\u2029]"
_LINE_START = r"(?:^|(?<=[\r\u2028\u2029]))"


def _words(*terms: str) -> str:
    """Whole-word alternation: \\b(a|b|c)\\b"""
    return r"\b(" + "|".join(terms) + r")\b"


def _sequence(*groups: Tuple[str, ...]) -> Pattern[str]:
    """Groups that must appear in this order on one line."""
    return re.compile((_ANY + "*").join(_words(*g) for g in groups), _FLAGS)


def _co_occurs(*groups: Tuple[str, ...]) -> Pattern[str]:
    """Groups that must all appear on one line, in any order."""
    looks = "".join(f"(?={_ANY}*{_words(*g)})" for g in groups)
    return re.compile(_LINE_START + looks, _FLAGS | re.MULTILINE)


# ---------------------------------------
# Term groups
# ---------------------------------------
_REACTION_TRIGGERS = ("pressure", "explosion", "ignite", "combust", "detonate")
_REACTION_FUELS = ("chemical", "gas", "fuel", "powder", "compound")

BAKING_SODA_REDIRECT = "baking soda and vinegar reaction experiment"


# ---------------------------------------
# Primary intent rules (order matters for safe_redirect capture)
# ---------------------------------------
INTENT_RULES: Tuple[SafetyRule, ...] = (
    # Dangerous chemistry/physics combinations
    SafetyRule(
        _co_occurs(_REACTION_TRIGGERS, _REACTION_FUELS),
        RiskCategory.DANGEROUS_ACTIVITY,
        Severity.HIGH,
        safe_redirect=BAKING_SODA_REDIRECT,
    ),
    SafetyRule(
        _sequence(
            ("make", "create", "build", "synthesize"),
            ("bomb", "weapon", "explosive", "poison", "toxin"),
        ),
        RiskCategory.DANGEROUS_ACTIVITY,
        Severity.HIGH,
    ),
    # Self-harm
    SafetyRule(
        _sequence(("hurt", "harm", "kill", "end"), ("myself", "yourself", "self")),
        RiskCategory.SELF_HARM,
        Severity.HIGH,
    ),
    # Privacy
    SafetyRule(
        _sequence(
            ("find", "locate", "track", "stalk"),
            ("address", "phone", "location", "home"),
            ("person", "someone", "student", "teacher"),
        ),
        RiskCategory.PRIVACY_VIOLATION,
        Severity.HIGH,
    ),
    # Deepfake / identity manipulation
    SafetyRule(
        _sequence(
            ("deepfake", "face" + _ANY + "?swap", "impersonate", "fake" + _ANY + "?video"),
            ("classmate", "teacher", "celebrity", "person"),
        ),
        RiskCategory.DEEPFAKE_REQUEST,
        Severity.HIGH,
    ),
    # Jailbreak
    SafetyRule(
        _sequence(
            ("ignore", "forget", "override", "bypass", "pretend", "act as",
             "you are now", "DAN", "jailbreak"),
            ("rules", "instructions", "guidelines", "safety", "filter"),
        ),
        RiskCategory.JAILBREAK_ATTEMPT,
        Severity.HIGH,
    ),
    # Violence
    SafetyRule(
        _sequence(
            ("how to", "ways to", "best way to"),
            ("fight", "attack", "hurt", "injure", "assault"),
            ("person", "someone", "people", "student"),
        ),
        RiskCategory.VIOLENCE,
        Severity.HIGH,
    ),
    # Inappropriate for minors
    SafetyRule(
        re.compile(_words("explicit", "graphic", "adult", "nsfw", r"18\+", "sexual"), _FLAGS),
        RiskCategory.INAPPROPRIATE_CONTENT,
        Severity.HIGH,
    ),
)

# Only active for young-learner grades in strict mode
YOUNG_LEARNER_RULE = SafetyRule(
    re.compile(_words("violence", "war", "death", "kill", "blood", "gore"), _FLAGS),
    RiskCategory.VIOLENCE,
    Severity.MEDIUM,
)

# ---------------------------------------
# Output rail: dangerous content in AI responses
# ---------------------------------------
def _gap(limit: int) -> str:
    return f"{_ANY}{{0,{limit}}}"


OUTPUT_PATTERNS: Tuple[Pattern[str], ...] = (
    re.compile(
        "step" + _gap(20) + "(1|one|first)" + _gap(50) + "(mix|combine|add)"
        + _gap(100) + "(chemical|compound|substance)",
        _FLAGS,
    ),
    re.compile(
        r"\b(instructions|steps|guide|tutorial)\b" + _gap(50) + r"\b(make|create|build)\b"
        + _gap(50) + r"\b(weapon|explosive|bomb)\b",
        _FLAGS,
    ),
    re.compile(
        r"\b(password|credentials|login|hack|exploit)\b" + _gap(100) + r"\b(bypass|override|access)\b",
        _FLAGS,
    ),
)
