"""Canonical JSON helpers for deterministic action plans."""

from __future__ import annotations

import hashlib
import json
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pathlib import Path

    from oneversion.types import SpawnAction


def canonical_dumps(obj: Any) -> str:
    """Serialize a JSON-compatible object with stable canonical formatting."""
    return json.dumps(
        obj,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )


def write_json(path: Path, obj: Any) -> None:
    """Write canonical JSON as UTF-8."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(canonical_dumps(obj), encoding="utf-8")


def sha256_text(text: str) -> str:
    """Compute SHA-256 for UTF-8 text."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def action_to_dict(action: SpawnAction) -> dict[str, Any]:
    """Plan payload for a registered action, including its fingerprint."""
    payload = action.to_dict()
    payload["fingerprint"] = action_fingerprint(action)
    return payload


def action_fingerprint(action: SpawnAction) -> str:
    """SHA-256 over the canonical form of the action; equal actions hash equal."""
    return sha256_text(canonical_dumps(action.to_dict()))
