# safety_shield/answer/compose.py
from __future__ import annotations

from typing import Iterable

from ..router.rules import RiskCategory, SafetyLevel

# --- Templates ---
TEMPLATES = {
    "blocked": (
        "This question touches on topics that aren't safe to explore here. "
        "Let's find a better way to learn about this!"
    ),
    "science_redirect": (
        "That's an interesting science question! For safety, let's explore this "
        "through a safe experiment instead."
    ),
    "rephrase": (
        "I noticed something in your question. Let's rephrase it to make sure we "
        "stay on track with your learning."
    ),
    "input_safe": "Query passed all safety checks.",
    "output_safe": "Response passed output safety check.",
    "output_blocked": "The AI response was flagged as potentially unsafe and has been blocked.",
    "output_redirect": "Let me find a safer way to explore this topic with you.",
    "pipeline_safe": "All checks passed.",
    "blocked_fallback": (
        "I can't help with that, but let's explore something amazing instead! "
        "What else are you curious about?"
    ),
    "apology": "I'm having trouble connecting right now. Let's try again in a moment!",
}

# Prepended to cautioned queries so the tutor answers conservatively
CAUTION_MARKER = "[SAFETY CONTEXT: Respond with extra care for a young learner]"

# --- Banner for the CLI (printed once) ---
DISCLAIMER_TEXT = (
    "Safety Shield is active. Questions are screened before they reach the tutor, "
    "and answers are screened before you see them."
)


def render_template(key: str) -> str:
    return TEMPLATES.get(key, TEMPLATES["rephrase"])


def safety_explanation(categories: Iterable[RiskCategory], level: SafetyLevel) -> str:
    """Student-facing sentence for a flagged query."""
    if level == SafetyLevel.BLOCKED:
        return render_template("blocked")
    if RiskCategory.DANGEROUS_ACTIVITY in set(categories):
        return render_template("science_redirect")
    return render_template("rephrase")


def annotate_caution(query: str) -> str:
    return f"{CAUTION_MARKER} {query}"


def disclaimer() -> str:
    return DISCLAIMER_TEXT
