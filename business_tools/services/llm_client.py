from __future__ import annotations

import enum
import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Optional, Protocol

import openai
from json_repair import repair_json

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*\n(.*?)\n?```$", re.DOTALL)


class UnparseableResponse(ValueError):
    """The model reply could not be coerced into a JSON object."""


class CompletionErrorKind(str, enum.Enum):
    QUOTA = "quota"
    RATE_LIMITED = "rate_limited"
    OTHER = "other"


class CompletionError(Exception):
    def __init__(self, kind: CompletionErrorKind, message: str = ""):
        super().__init__(message or kind.value)
        self.kind = kind


def _reject_constant(name: str):
    # NaN and Infinity are not JSON and cannot be rendered back to the caller
    raise ValueError(f"Non-standard JSON constant: {name}")


def _loads(text: str) -> Any:
    return json.loads(text, parse_constant=_reject_constant)


def _strip_code_fence(text: str) -> str:
    m = _FENCE_RE.match(text)
    return m.group(1).strip() if m else text


def _scan_for_object(text: str) -> Optional[dict[str, Any]]:
    decoder = json.JSONDecoder(parse_constant=_reject_constant)
    start = text.find("{")
    while start != -1:
        try:
            obj, _ = decoder.raw_decode(text, start)
        except ValueError:
            obj = None
        if isinstance(obj, dict):
            return obj
        start = text.find("{", start + 1)
    return None


def parse_model_json(text: str) -> dict[str, Any]:
    """
    Strict parse → outermost {...} → first decodable {...} → repair → parse.

    Best effort only: replies holding several objects, or braces inside
    string literals, can still fail or recover the wrong object.
    """
    text = _strip_code_fence((text or "").strip())

    try:
        parsed = _loads(text)
        if isinstance(parsed, dict):
            return parsed
    except ValueError as e:
        logger.error("JSON parsing error: %s", e)
        logger.error("Raw response: %s", text)

    first, last = text.find("{"), text.rfind("}")
    if first == -1 or last <= first:
        raise UnparseableResponse("Could not parse AI response as JSON")
    candidate = text[first:last + 1]

    try:
        parsed = _loads(candidate)
        if isinstance(parsed, dict):
            return parsed
    except ValueError:
        pass

    scanned = _scan_for_object(text)
    if scanned is not None:
        return scanned

    # Repair malformed JSON (missing commas, trailing commas, etc.)
    try:
        repaired = _loads(repair_json(candidate))
    except ValueError as e:
        raise UnparseableResponse(
            f"Model returned invalid JSON even after repair: {type(e).__name__}: {e}"
        ) from e
    if not isinstance(repaired, dict) or not repaired:
        raise UnparseableResponse("Could not parse AI response as JSON")
    return repaired


class CompletionClient(Protocol):
    model: str

    def complete(self, system: str, user: str, *, max_tokens: int, temperature: float) -> str:
        ...


@dataclass
class LLMConfig:
    provider: str
    model: str
    openai_api_key: Optional[str] = None
    gemini_api_key: Optional[str] = None


def _openai_error_kind(exc: openai.OpenAIError) -> CompletionErrorKind:
    code = getattr(exc, "code", None)
    if code == "insufficient_quota":
        return CompletionErrorKind.QUOTA
    if code == "rate_limit_exceeded" or isinstance(exc, openai.RateLimitError):
        return CompletionErrorKind.RATE_LIMITED
    return CompletionErrorKind.OTHER


class OpenAILLM:
    def __init__(self, api_key: str, model: str, client: Any = None):
        self.client = client or openai.OpenAI(api_key=api_key, max_retries=0)
        self.model = model

    def complete(self, system: str, user: str, *, max_tokens: int, temperature: float) -> str:
        try:
            resp = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": user},
                ],
                max_tokens=max_tokens,
                temperature=temperature,
            )
        except openai.OpenAIError as e:
            raise CompletionError(_openai_error_kind(e), str(e)) from e

        return (resp.choices[0].message.content or "").strip()


class GeminiLLM:
    def __init__(self, api_key: str, model: str, client: Any = None):
        from google import genai
        from google.genai import errors, types

        self._types = types
        self._errors = errors
        self.client = client or genai.Client(api_key=api_key)
        self.model = model

    def complete(self, system: str, user: str, *, max_tokens: int, temperature: float) -> str:
        try:
            resp = self.client.models.generate_content(
                model=self.model,
                contents=user,
                config=self._types.GenerateContentConfig(
                    system_instruction=[system],
                    temperature=temperature,
                    max_output_tokens=max_tokens,
                ),
            )
        except self._errors.APIError as e:
            kind = CompletionErrorKind.RATE_LIMITED if e.code == 429 else CompletionErrorKind.OTHER
            raise CompletionError(kind, str(e)) from e

        return (resp.text or "").strip()


def build_llm(cfg: LLMConfig) -> CompletionClient:
    provider = (cfg.provider or "").lower().strip()

    if provider == "openai":
        if not cfg.openai_api_key:
            raise ValueError("OPENAI_API_KEY is missing. Add it to .env")
        return OpenAILLM(api_key=cfg.openai_api_key, model=cfg.model)

    if provider == "gemini":
        if not cfg.gemini_api_key:
            raise ValueError("GEMINI_API_KEY is missing. Add it to .env")
        return GeminiLLM(api_key=cfg.gemini_api_key, model=cfg.model)

    raise ValueError(f"Unsupported llm provider: {cfg.provider}. Use provider: openai or gemini")
