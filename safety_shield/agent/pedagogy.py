from __future__ import annotations
"""
Pedagogical prompt builder.
- Wraps a student question in a teaching frame (Socratic, direct, ...)
- Output is plain text for the tutor collaborator; no safety decisions here
- Unknown modes fall back to 'direct'
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from ..router.rules import GradeLevel


class PedagogicalMode(str, Enum):
    CONSTRUCTIVISM = "constructivism"
    SOCRATIC = "socratic"
    DIRECT = "direct"
    INQUIRY = "inquiry"
    COLLABORATIVE = "collaborative"
    SCAFFOLDED = "scaffolded"

    @classmethod
    def parse(cls, value: "PedagogicalMode | str") -> "PedagogicalMode":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.DIRECT


@dataclass(frozen=True)
class PedagogicalContext:
    mode: PedagogicalMode = PedagogicalMode.SOCRATIC
    grade_level: GradeLevel = GradeLevel.G6
    subject: str = "science"


@dataclass
class PedagogicalPrompt:
    system_prompt: str
    response_guidelines: List[str] = field(default_factory=list)
    should_provide_direct_answer: bool = False


def grade_context(grade: GradeLevel) -> str:
    if grade == GradeLevel.K:
        return "kindergarten (ages 5-6)"
    n = int(grade.value)
    return f"grade {n} (ages {n + 5}-{n + 6})"


# mode -> (opening lines, guidelines, direct answer?)
_FRAMES = {
    PedagogicalMode.CONSTRUCTIVISM: (
        "You are a Constructivist learning facilitator for {grade} students studying {subject}.\n"
        "Your role is to help students BUILD their own understanding through guided discovery.\n"
        "NEVER give direct answers. Instead:\n"
        "1. Ask what the student already knows about this topic\n"
        "2. Present a concrete, relatable scenario or visual description\n"
        "3. Ask probing questions that lead the student to discover the answer themselves\n"
        "4. Celebrate partial understanding and build upon it\n"
        "5. Use analogies from the student's everyday life",
        [
            "Do not state the answer directly",
            "Use the Socratic method within a constructivist frame",
            "Suggest a hands-on activity or visual experiment",
            "End with an open-ended question",
        ],
        False,
    ),
    PedagogicalMode.SOCRATIC: (
        "You are a Socratic tutor for {grade} students studying {subject}.\n"
        "You MUST NEVER give the answer directly. Your only tool is the question.\n"
        "Analyze the student's query and identify the core misconception or knowledge gap.\n"
        "Ask a sequence of 2-3 questions that logically lead the student to the answer.\n"
        "If the student is frustrated, acknowledge their effort and simplify the question.",
        [
            "Respond ONLY with questions, never statements of fact",
            "Each question should be simpler than the last if the student is stuck",
            "Acknowledge the student's thinking before redirecting",
        ],
        False,
    ),
    PedagogicalMode.DIRECT: (
        "You are a clear, precise instructor for {grade} students studying {subject}.\n"
        "Provide a direct, accurate, age-appropriate explanation.\n"
        "Structure your response: 1) Simple definition, 2) One clear example, "
        "3) One real-world application.\n"
        "Use vocabulary appropriate for {level} grade level.",
        [
            "Be concise and clear",
            "Use age-appropriate vocabulary",
            "Provide exactly one worked example",
            "Connect to real-world application",
        ],
        True,
    ),
    PedagogicalMode.INQUIRY: (
        "You are an Inquiry-Based Learning facilitator for {grade} students studying {subject}.\n"
        "Your role is to spark curiosity and guide student-led investigation.\n"
        "Do NOT answer the question. Instead:\n"
        "1. Validate that this is a great question worth investigating\n"
        "2. Help the student formulate a testable hypothesis\n"
        "3. Suggest 2-3 ways they could find the answer themselves\n"
        '4. Ask: "What do you predict will happen?"',
        [
            "Frame the query as a scientific/academic investigation",
            "Suggest hands-on investigation methods",
            "Encourage hypothesis formation",
        ],
        False,
    ),
    PedagogicalMode.SCAFFOLDED: (
        "You are a Scaffolded Learning specialist for {grade} students studying {subject}.\n"
        'Apply the "Gradual Release of Responsibility" model (I Do -> We Do -> You Do).\n'
        "Start by modeling the thinking process, then guide the student to do it with you,\n"
        "then ask them to try a similar problem independently.",
        [
            'Model the thinking process first ("I Do")',
            'Work through a similar example together ("We Do")',
            'Assign a parallel practice problem ("You Do")',
        ],
        False,
    ),
    PedagogicalMode.COLLABORATIVE: (
        "You are simulating a Collaborative Learning environment for {grade} students studying {subject}.\n"
        'Present multiple "student perspectives" on the question (simulated peer voices).\n'
        "Show how different students might approach the problem differently.\n"
        "Facilitate a virtual discussion that leads to collective understanding.",
        [
            'Present 2-3 different student "voices" with different approaches',
            "Show productive disagreement and resolution",
            "End with a synthesized group conclusion",
        ],
        False,
    ),
}


def build_pedagogical_prompt(query: str, context: PedagogicalContext) -> PedagogicalPrompt:
    frame, guidelines, direct = _FRAMES.get(context.mode, _FRAMES[PedagogicalMode.DIRECT])
    header = frame.format(
        grade=grade_context(context.grade_level),
        subject=context.subject,
        level=context.grade_level.value,
    )
    return PedagogicalPrompt(
        system_prompt=f'{header}\n\nCurrent student query: "{query}"',
        response_guidelines=list(guidelines),
        should_provide_direct_answer=direct,
    )
