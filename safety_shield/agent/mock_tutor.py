from __future__ import annotations
"""
Mock tutor: the AI collaborator used by the CLI and tests.
- No network; answers come from a small table of pedagogical replies
- Awaitable: `text = await MockTutor(ctx)(query)`
- Optional simulated latency (SHIELD_MOCK_LATENCY_SECONDS)
"""

import asyncio
import logging
import os
from typing import Optional

from ..router.rules import GradeLevel
from .pedagogy import PedagogicalContext, PedagogicalMode, build_pedagogical_prompt

logger = logging.getLogger(__name__)

MOCK_RESPONSES = {
    "fraction": (
        "That's a wonderful question to explore!\n\n"
        "Before I tell you anything, let me ask you something first:\n\n"
        "If you had a whole pizza and you cut it into 2 equal pieces, what would you call each piece?\n\n"
        "Take a moment to think about it. What do you notice about the size of each piece "
        "compared to the whole pizza?"
    ),
    "photosynthesis": (
        "Ooh, you're asking about one of nature's most amazing processes!\n\n"
        'Here\'s my question for you: Have you ever noticed that plants seem to "need" sunlight to survive?\n\n'
        "What do YOU think is happening inside a leaf when sunlight hits it?\n\n"
        "Think about what a plant needs to grow. What ingredients might it be collecting?"
    ),
    "default": (
        "That's a fascinating question! Let me help you discover the answer rather than just tell you.\n\n"
        "First, tell me: what do you already know about this topic? Even a small guess is a great "
        "starting point!\n\n"
        "What have you observed or experienced that might give you a clue?"
    ),
}

_FRACTION_MARKERS = ("fraction", "1/2", "half")
_PLANT_MARKERS = ("photosynthesis", "plant", "chlorophyll")


def _direct_answer(query: str) -> str:
    return (
        "Great question! Here's a clear explanation:\n\n"
        f"**{query}** is a concept that involves several key ideas:\n\n"
        "1. **Definition**: The core meaning of this concept\n"
        "2. **Example**: A real-world instance you can observe\n"
        "3. **Application**: How this shows up in everyday life"
    )


def mock_response(query: str, system_prompt: str = "") -> str:
    lower = (query or "").lower()
    if any(m in lower for m in _FRACTION_MARKERS):
        return MOCK_RESPONSES["fraction"]
    if any(m in lower for m in _PLANT_MARKERS):
        return MOCK_RESPONSES["photosynthesis"]
    if "direct, accurate" in (system_prompt or "").lower():
        return _direct_answer(query)
    return MOCK_RESPONSES["default"]


class MockTutor:
    """
    Create with:
        tutor = MockTutor(PedagogicalContext(mode=PedagogicalMode.SOCRATIC))
    and pass `tutor` wherever an AI responder is expected.
    """

    def __init__(self, context: PedagogicalContext | None = None, *, latency_seconds: float | None = None):
        self.context = context or PedagogicalContext()
        if latency_seconds is None:
            latency_seconds = float(os.getenv("SHIELD_MOCK_LATENCY_SECONDS", "0"))
        self.latency_seconds = max(0.0, latency_seconds)
        self.calls = 0
        self.last_query: Optional[str] = None
        self.last_system_prompt: Optional[str] = None

    async def __call__(self, query: str) -> str:
        self.calls += 1
        self.last_query = query
        prompt = build_pedagogical_prompt(query, self.context)
        self.last_system_prompt = prompt.system_prompt

        if self.latency_seconds:
            await asyncio.sleep(self.latency_seconds)

        logger.debug("MockTutor answering in %s mode", self.context.mode.value)
        return mock_response(query, prompt.system_prompt)


def tutor_from_env() -> MockTutor:
    """MockTutor configured from SHIELD_PEDAGOGY_MODE / SHIELD_GRADE_LEVEL / SHIELD_SUBJECT."""
    ctx = PedagogicalContext(
        mode=PedagogicalMode.parse(os.getenv("SHIELD_PEDAGOGY_MODE", "socratic")),
        grade_level=GradeLevel.parse(os.getenv("SHIELD_GRADE_LEVEL", "6")),
        subject=os.getenv("SHIELD_SUBJECT", "science"),
    )
    return MockTutor(ctx)
