# tests/test_redirects.py
from safety_shield.router.redirects import (
    GENERIC_SCIENCE_REDIRECT,
    SAFE_SCIENCE_REDIRECTS,
    match_redirect,
    resolve_redirect,
    split_key,
)


def test_split_key():
    assert split_key("pressure + chemicals") == ("pressure", "chemicals")
    assert split_key("solo") == ("solo",)


def test_all_keywords_required():
    assert match_redirect("why does water conduct electricity?") == SAFE_SCIENCE_REDIRECTS["electricity + water"]
    assert match_redirect("why does water boil?") is None


def test_substring_match_is_case_insensitive():
    out = match_redirect("FIRE experiments in CHEMISTRY class")
    assert "candle" in out


def test_first_full_match_wins():
    q = "pressure and chemicals cause an explosion in science"
    assert match_redirect(q) == SAFE_SCIENCE_REDIRECTS["pressure + chemicals"]


def test_fallback_order():
    assert resolve_redirect("nothing relevant", "use a balloon") == "use a balloon"
    assert resolve_redirect("nothing relevant") == GENERIC_SCIENCE_REDIRECT


def test_custom_table():
    table = {"volcano + lava": "Build a clay volcano."}
    assert resolve_redirect("lava from a volcano", table=table) == "Build a clay volcano."
