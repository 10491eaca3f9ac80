from pathlib import Path
import json, os, time

DEFAULT_LOG = "logs/audit.jsonl"


def log_path() -> Path:
    return Path(os.getenv("SHIELD_AUDIT_LOG") or DEFAULT_LOG)


def log(event: str, level: str | None, categories=None):
    # Levels and categories only; query text is never written.
    path = log_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    entry = {
        "ts": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
        "event": event,
        "level": level,
        "categories": [getattr(c, "value", c) for c in (categories or [])],
        "version": "shield1",
    }
    with path.open("a", encoding="utf-8") as f:
        f.write(json.dumps(entry) + "\n")
