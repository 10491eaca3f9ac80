from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List

from ..answer.compose import annotate_caution, render_template
from ..router.rules import SafetyLevel
from ..router.safety_router import (
    InputRailConfig,
    SafetyCheckResult,
    SafetyRouter,
)

logger = logging.getLogger(__name__)

# The tutor backend: takes the (possibly annotated) query, returns its answer.
AIResponder = Callable[[str], Awaitable[str]]


@dataclass
class PipelineResult:
    response: str
    safety_result: SafetyCheckResult
    trace: List[Dict[str, Any]] = field(default_factory=list)


# ============================================================
# Pipeline
# ============================================================
class SafetyPipeline:
    """
    Input rail -> tutor -> output rail.

    Stateless: each run() builds its own trace, so one instance can serve
    concurrent requests. Errors raised by the responder are not caught here.
    """

    def __init__(self, router: SafetyRouter | None = None):
        self.router = router or SafetyRouter()

    async def run(
        self,
        query: str,
        config: InputRailConfig,
        get_ai_response: AIResponder,
    ) -> PipelineResult:
        trace: List[Dict[str, Any]] = []

        # 1) INPUT RAIL
        input_check = self.router.check_input(query, config)
        trace.append({
            "event": "input_rail",
            "level": input_check.level.value,
            "categories": [c.value for c in input_check.risk_categories],
        })

        if input_check.level == SafetyLevel.BLOCKED:
            trace.append({"event": "short_circuit"})
            return PipelineResult(
                response=input_check.redirect_suggestion or render_template("blocked_fallback"),
                safety_result=input_check,
                trace=trace,
            )

        # 2) ANNOTATE
        if input_check.level == SafetyLevel.CAUTION:
            forwarded = annotate_caution(query)
        else:
            forwarded = query

        # 3) TUTOR CALL
        trace.append({"event": "ai_call", "annotated": forwarded != query})
        ai_response = await get_ai_response(forwarded)

        # 4) OUTPUT RAIL
        output_check = self.router.check_output(ai_response)
        trace.append({"event": "output_rail", "level": output_check.level.value})

        if output_check.level == SafetyLevel.BLOCKED:
            logger.warning("Discarded tutor response after output rail block")
            return PipelineResult(
                response=output_check.redirect_suggestion or render_template("output_redirect"),
                safety_result=output_check,
                trace=trace,
            )

        # 5) PASS THROUGH
        return PipelineResult(
            response=ai_response,
            safety_result=SafetyCheckResult(
                level=SafetyLevel.SAFE,
                risk_categories=[],
                explanation=render_template("pipeline_safe"),
            ),
            trace=trace,
        )


_default_pipeline = SafetyPipeline()


async def run_safety_pipeline(
    query: str,
    config: InputRailConfig,
    get_ai_response: AIResponder,
) -> PipelineResult:
    return await _default_pipeline.run(query, config, get_ai_response)
