"""
Pytest configuration for Safety Shield
- Ensures project root is on sys.path
- Optionally loads .env if present
- Sets safe defaults so tests never depend on the caller's shell
"""

import os
import sys
import pathlib
import logging

from dotenv import load_dotenv

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

env_path = ROOT / ".env"
if env_path.exists():
    load_dotenv(dotenv_path=env_path)

# Defaults: no simulated latency, generous tutor timeout
os.environ.setdefault("SHIELD_MOCK_LATENCY_SECONDS", "0")
os.environ.setdefault("SHIELD_AI_TIMEOUT_SECONDS", "10.0")
os.environ.setdefault("PYTHONHASHSEED", "0")

# Keep test logs calm
logging.basicConfig(level=logging.WARNING)
logging.getLogger("asyncio").setLevel(logging.WARNING)

import pytest  # noqa: E402


@pytest.fixture(autouse=True)
def _audit_to_tmp(tmp_path, monkeypatch):
    """Never write audit lines into the working tree during tests."""
    monkeypatch.setenv("SHIELD_AUDIT_LOG", str(tmp_path / "audit.jsonl"))
    return tmp_path / "audit.jsonl"
