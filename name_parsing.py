"""Extract candidate names from raw model output."""

from __future__ import annotations

import json
from typing import Iterable

from errors import GenerationError, GenerationErrorKind

MAX_NAME_LENGTH = 32


def sanitize_names(names: Iterable[object], max_length: int = MAX_NAME_LENGTH) -> list[str]:
    """Trim, drop empty or over-long entries and dedupe while keeping order."""
    seen: set[str] = set()
    result: list[str] = []
    for raw in names:
        if not isinstance(raw, str):
            continue
        name = raw.strip()
        if not name or len(name) > max_length or name in seen:
            continue
        seen.add(name)
        result.append(name)
    return result


def _names_from_payload(payload: object) -> list[object] | None:
    """Accept either {"names": [...]} or a bare JSON array."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        names = payload.get("names")
        if isinstance(names, list):
            return names
    return None


def _fenced_blocks(text: str) -> list[str]:
    blocks: list[str] = []
    if "```" not in text:
        return blocks
    for marker in ("```json", "```JSON", "```"):
        start = 0
        while True:
            open_idx = text.find(marker, start)
            if open_idx == -1:
                break
            content_start = open_idx + len(marker)
            if content_start < len(text) and text[content_start] == "\n":
                content_start += 1
            close_idx = text.find("```", content_start)
            if close_idx == -1:
                break
            block = text[content_start:close_idx].strip()
            if block:
                blocks.append(block)
            start = close_idx + 3
    return blocks


def parse_names(text: str) -> list[str]:
    """
    Parse a names list out of model output.

    Stages: direct JSON parse, fenced code blocks, then a raw_decode scan from
    every '{' or '[' position. The first payload that carries a names list wins.

    Raises:
        GenerationError: EMPTY_RESPONSE for blank text or a list with no usable
            names, MALFORMED_RESPONSE when no stage finds a names payload.
    """
    cleaned = text.strip()
    if not cleaned:
        raise GenerationError(GenerationErrorKind.EMPTY_RESPONSE, "Backend returned no text")

    errors: list[str] = []
    candidates: list[str] = [cleaned, *_fenced_blocks(cleaned)]

    for i, candidate in enumerate(candidates):
        try:
            payload = json.loads(candidate)
        except json.JSONDecodeError as exc:
            errors.append(f"stage {i}: {exc.msg} at pos {exc.pos}")
            continue
        names = _names_from_payload(payload)
        if names is not None:
            return _require_names(names)
        errors.append(f"stage {i}: no names list")

    decoder = json.JSONDecoder()
    for idx, char in enumerate(cleaned):
        if char not in "{[":
            continue
        try:
            payload, _ = decoder.raw_decode(cleaned[idx:])
        except json.JSONDecodeError:
            continue
        names = _names_from_payload(payload)
        if names is not None:
            return _require_names(names)

    preview = cleaned[:120]
    raise GenerationError(
        GenerationErrorKind.MALFORMED_RESPONSE,
        f"Could not find a names list ({' | '.join(errors[:4])}); output starts: {preview!r}",
    )


def _require_names(names: list[object]) -> list[str]:
    result = sanitize_names(names)
    if not result:
        raise GenerationError(GenerationErrorKind.EMPTY_RESPONSE, "No valid names after parsing")
    return result


def fallback_names(text: str, count: int, max_length: int = MAX_NAME_LENGTH) -> list[str]:
    """Treat each non-empty line as a name, stripping bullets and numbering. Over-long lines are skipped."""
    seen: set[str] = set()
    result: list[str] = []
    for line in text.splitlines():
        if len(result) >= count:
            break
        name = line.strip().lstrip("-*0123456789.) ").strip().strip("`\"'")
        if not name or len(name) > max_length or name in seen:
            continue
        seen.add(name)
        result.append(name)
    return result
