# tests/test_output_rail.py
import pytest

from safety_shield.router.rules import RiskCategory, SafetyLevel
from safety_shield.router.safety_router import run_output_rail


def test_benign_response_is_safe():
    r = run_output_rail("Photosynthesis converts sunlight into energy.")
    assert r.level == SafetyLevel.SAFE
    assert r.risk_categories == []
    assert r.explanation == "Response passed output safety check."


@pytest.mark.parametrize("text", [
    "Here are step-by-step instructions to make a bomb at home.",
    "Step 1: mix the two chemicals in a closed jar.",
    "You can hack the login and bypass the school filter.",
])
def test_dangerous_response_is_blocked(text):
    r = run_output_rail(text)
    assert r.level == SafetyLevel.BLOCKED
    assert r.risk_categories == [RiskCategory.DANGEROUS_ACTIVITY]
    assert r.explanation == "The AI response was flagged as potentially unsafe and has been blocked."
    assert "safer way to explore this topic" in r.redirect_suggestion


def test_empty_response_is_safe():
    assert run_output_rail("").level == SafetyLevel.SAFE


def test_chemistry_talk_without_instructions_is_safe():
    r = run_output_rail("Chemicals react when their molecules collide. What do you predict?")
    assert r.level == SafetyLevel.SAFE


@pytest.mark.parametrize("sep", ["\n", "\r", "\u2028"])
def test_instructions_split_across_lines_are_not_combined(sep):
    assert run_output_rail(f"Here are instructions{sep}to make a bomb").level == SafetyLevel.SAFE
    assert run_output_rail("Here are instructions to make a bomb").level == SafetyLevel.BLOCKED
