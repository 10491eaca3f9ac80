from __future__ import annotations
"""
Safety Shield CLI
- Screens each question, asks the mock tutor, screens the answer.
- Imposes the tutor timeout and turns tutor failures into an apology
  (the pipeline itself lets them propagate).
- Prints a short banner once.
- Keeps audit logging minimal and PII-free.

Run:  python -m safety_shield.ui.cli
"""

import asyncio
import logging
import os
import sys

from dotenv import load_dotenv

from safety_shield.agent.mock_tutor import MockTutor, tutor_from_env
from safety_shield.agent.pipeline import AIResponder, SafetyPipeline
from safety_shield.answer.compose import disclaimer, render_template
from safety_shield.router.safety_router import InputRailConfig
from safety_shield.ui.audit import log

logger = logging.getLogger(__name__)

_PIPELINE = SafetyPipeline()


def _env_flag(name: str) -> bool | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def config_from_env() -> InputRailConfig:
    """
    SHIELD_GRADE_LEVEL (default 6), SHIELD_SUBJECT, SHIELD_STRICT_MODE.
    Strict mode follows the grade (K-5) unless set explicitly.
    Raises ValueError on an unknown grade.
    """
    return InputRailConfig.for_grade(
        os.getenv("SHIELD_GRADE_LEVEL", "6"),
        subject=os.getenv("SHIELD_SUBJECT") or None,
        strict_mode=_env_flag("SHIELD_STRICT_MODE"),
    )


def _timeout_seconds() -> float:
    return float(os.getenv("SHIELD_AI_TIMEOUT_SECONDS", "10.0"))


class TutorUnavailable(RuntimeError):
    """The tutor timed out or raised; the original error is the __cause__."""


def _with_timeout(responder: AIResponder, timeout_s: float) -> AIResponder:
    async def _call(query: str) -> str:
        try:
            return await asyncio.wait_for(responder(query), timeout=timeout_s)
        except Exception as e:
            raise TutorUnavailable(str(e)) from e
    return _call


def respond(
    msg: str,
    config: InputRailConfig | None = None,
    tutor: AIResponder | None = None,
    *,
    debug_trace: bool = False,
) -> str:
    """
    Stable entrypoint: run the pipeline once and return student-facing text.
    Never raises for tutor problems; those become the apology message.
    Anything else (a rail bug, a running event loop) propagates.
    """
    config = config or config_from_env()
    responder = _with_timeout(tutor or tutor_from_env(), _timeout_seconds())

    try:
        out = asyncio.run(_PIPELINE.run(msg, config, responder))
    except TutorUnavailable as e:
        logger.warning("Tutor call failed (%s); returning apology", e.__cause__.__class__.__name__)
        log("tutor_error", None)
        return render_template("apology")

    if debug_trace and out.trace:
        print("[trace]", out.trace, file=sys.stderr)

    result = out.safety_result
    log("pipeline", result.level.value, result.risk_categories)
    return out.response


def main() -> None:
    load_dotenv()
    try:
        config = config_from_env()
        _timeout_seconds()
        tutor: MockTutor = tutor_from_env()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        raise SystemExit(2)

    debug_trace = os.getenv("SHIELD_DEBUG_TRACE") == "1"

    print(disclaimer())
    print(
        f"Grade {config.grade_level.value}"
        f"{' (strict)' if config.strict_mode else ''}"
        " - type 'exit' to quit\n"
    )
    while True:
        try:
            q = input("> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nbye!")
            break
        if q.lower() in {"exit", "quit"}:
            break
        if not q:
            continue
        print(respond(q, config, tutor, debug_trace=debug_trace), "\n")


if __name__ == "__main__":
    main()
