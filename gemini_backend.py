"""Gemini naming backend built on the google-genai SDK."""

from __future__ import annotations

import threading
from typing import Any

from google import genai
from google.genai import errors as genai_errors
from google.genai import types as genai_types

from backends import BackendDescriptor
from config import AppConfig, BackendSettings
from errors import BackendInitError, GenerationError, GenerationErrorKind
from name_parsing import MAX_NAME_LENGTH, fallback_names, parse_names
from naming import NameRequest

DEFAULT_MODEL = "models/gemini-1.5-pro"
DEFAULT_TEMPERATURE = 0.7
DEFAULT_COUNT = 5
MAX_COUNT = 12


def clamp_count(count: int) -> int:
    if count <= 0:
        return DEFAULT_COUNT
    return min(count, MAX_COUNT)


def build_prompt(req: NameRequest, count: int) -> str:
    """Render the naming instructions sent to the model."""
    lines = [
        "You are an experienced naming consultant. Generate high-quality names "
        "from the context the user provides.",
        "Follow these rules:",
        '- Reply with a JSON object shaped like {"names": ["name1", "name2", ...]}.',
        "- Every name must fit the requested kind and stay easy to read and remember.",
        "- Do not add explanations or Markdown.",
        "",
        "Naming task:",
        f"- Kind: {req.kind_label or req.kind.value}",
        f"- Number of names: {count}",
    ]
    if req.naming_style_label:
        lines.append(f"- Naming style: {req.naming_style_label}")
    elif req.naming_style:
        lines.append(f"- Naming style: {req.naming_style.value}")
    if req.description:
        lines.append(f"- Description: {req.description}")
    if req.kind_prompt.strip():
        lines += ["", "Kind requirements:", req.kind_prompt.strip()]
    if req.naming_style_prompt.strip():
        lines += ["", "Style requirements:", req.naming_style_prompt.strip()]
    lines += [
        "",
        f"Return JSON only, remove duplicates, and keep every name at most "
        f"{MAX_NAME_LENGTH} characters long.",
    ]
    return "\n".join(lines)


def collect_text(resp: Any) -> str:
    """Join the text parts of every candidate, skipping thought parts."""
    if resp is None:
        return ""
    chunks: list[str] = []
    for cand in getattr(resp, "candidates", None) or []:
        content = getattr(cand, "content", None)
        if content is None:
            continue
        for part in getattr(content, "parts", None) or []:
            if part is None or getattr(part, "thought", False):
                continue
            text = getattr(part, "text", None)
            if text:
                chunks.append(text)
    return "\n".join(chunks).strip()


def _block_reason(resp: Any) -> str:
    feedback = getattr(resp, "prompt_feedback", None)
    reason = getattr(feedback, "block_reason", None) if feedback is not None else None
    if not reason:
        return ""
    return str(getattr(reason, "value", reason))


class GeminiBackend:
    """Lazily creates one genai client and reuses it across generations."""

    def __init__(
        self,
        name: str,
        api_key: str,
        model: str = DEFAULT_MODEL,
        temperature: float = DEFAULT_TEMPERATURE,
        top_k: float | None = None,
        fallback_line_split: bool = True,
    ) -> None:
        self.name = name
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.top_k = top_k
        self.fallback_line_split = fallback_line_split
        self._client: genai.Client | None = None
        self._init_error: Exception | None = None
        self._lock = threading.Lock()

    def ensure_client(self) -> genai.Client:
        with self._lock:
            if self._client is not None:
                return self._client
            if self._init_error is not None:
                raise self._init_error
            try:
                self._client = genai.Client(api_key=self.api_key)
            except Exception as exc:
                self._init_error = BackendInitError(f"Failed to create Gemini client: {exc}")
                raise self._init_error from exc
            return self._client

    def warmup(self, deadline: float) -> None:
        self.ensure_client()

    def generate_names(self, req: NameRequest, deadline: float) -> list[str]:
        try:
            client = self.ensure_client()
        except BackendInitError as exc:
            raise GenerationError(GenerationErrorKind.TRANSPORT_ERROR, str(exc)) from exc

        count = clamp_count(req.count)
        config_kwargs: dict[str, Any] = {
            "temperature": self.temperature,
            "response_mime_type": "application/json",
            "http_options": genai_types.HttpOptions(timeout=int(deadline * 1000)),
        }
        if self.top_k is not None:
            config_kwargs["top_k"] = self.top_k

        try:
            resp = client.models.generate_content(
                model=self.model,
                contents=build_prompt(req, count),
                config=genai_types.GenerateContentConfig(**config_kwargs),
            )
        except genai_errors.APIError as exc:
            raise GenerationError(
                GenerationErrorKind.TRANSPORT_ERROR, f"Gemini API call failed: {exc}"
            ) from exc
        except Exception as exc:
            raise GenerationError(
                GenerationErrorKind.TRANSPORT_ERROR, f"Gemini request failed: {exc}"
            ) from exc

        reason = _block_reason(resp)
        if reason:
            raise GenerationError(
                GenerationErrorKind.BACKEND_REJECTED, f"Gemini rejected the request: {reason}"
            )

        text = collect_text(resp)
        if not text:
            raise GenerationError(GenerationErrorKind.EMPTY_RESPONSE, "Gemini returned an empty reply")

        try:
            return parse_names(text)[:count]
        except GenerationError as exc:
            if exc.kind is not GenerationErrorKind.MALFORMED_RESPONSE or not self.fallback_line_split:
                raise
            names = fallback_names(text, count)
            if not names:
                raise
            return names

    def describe(self) -> BackendDescriptor:
        return BackendDescriptor(
            name=self.name,
            type="gemini",
            display_name="Google Gemini",
            generate_names=self.generate_names,
            model_identifier=self.model,
            warmup=self.warmup,
        )


def create_gemini_backend(name: str, settings: BackendSettings, cfg: AppConfig) -> BackendDescriptor:
    api_key = settings.resolved_api_key()
    if not api_key:
        raise BackendInitError(
            f"Backend {name!r} needs an api_key (or GEMINI_API_KEY / GOOGLE_API_KEY)"
        )
    if settings.top_k is not None and settings.top_k <= 0:
        raise BackendInitError(f"Backend {name!r}: top_k must be greater than 0")

    backend = GeminiBackend(
        name=name,
        api_key=api_key,
        model=settings.model or DEFAULT_MODEL,
        temperature=settings.temperature if settings.temperature is not None else DEFAULT_TEMPERATURE,
        top_k=settings.top_k,
        fallback_line_split=cfg.app.fallback_line_split,
    )
    return backend.describe()
