"""
Safety Shield - input/output rails for a student tutoring assistant
Core principle: "Screen the question, screen the answer, redirect instead of refusing"
"""

import logging

# Configure logging only if no handlers are already configured
if not logging.getLogger().handlers:
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler()]
    )

# Create logger for this module
logger = logging.getLogger(__name__)

__version__ = "0.1.0"

from .router.rules import GradeLevel, RiskCategory, SafetyLevel, Severity  # noqa: E402
from .router.safety_router import (  # noqa: E402
    InputRailConfig,
    SafetyCheckResult,
    SafetyRouter,
    run_input_rail,
    run_output_rail,
)
from .agent.pipeline import PipelineResult, SafetyPipeline, run_safety_pipeline  # noqa: E402
