"""
Environment & layout sanity.

Confirms:
- project imports work
- the public API is exposed from the package root
- the core rails still classify the reference queries
"""

import pathlib
import importlib


def test_project_layout_exists():
    root = pathlib.Path(__file__).resolve().parents[1]
    assert (root / "safety_shield").exists()
    assert (root / "tests").exists()
    assert (root / "pyproject.toml").exists()


def test_import_key_components():
    importlib.import_module("safety_shield.router.rules")
    importlib.import_module("safety_shield.router.redirects")
    importlib.import_module("safety_shield.router.safety_router")
    importlib.import_module("safety_shield.agent.pipeline")
    importlib.import_module("safety_shield.agent.pedagogy")
    importlib.import_module("safety_shield.agent.mock_tutor")
    importlib.import_module("safety_shield.answer.compose")
    importlib.import_module("safety_shield.ui.audit")
    importlib.import_module("safety_shield.ui.cli")


def test_public_api():
    import safety_shield as ss

    cfg = ss.InputRailConfig.for_grade("6")
    assert ss.run_input_rail("explain photosynthesis", cfg).level == ss.SafetyLevel.SAFE
    assert ss.run_output_rail("Photosynthesis converts sunlight into energy.").level == "safe"
    assert callable(ss.run_safety_pipeline)
