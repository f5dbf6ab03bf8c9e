from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional, Type

from pydantic import BaseModel

from business_tools.core.settings import Settings
from business_tools.schemas.analysis import MessagingFramework, SwotAnalysis
from business_tools.schemas.inputs import (
    AnalysisRequest,
    MessagingRequest,
    RequestRejected,
    SwotRequest,
    parse_request,
)
from business_tools.services.llm_client import (
    CompletionClient,
    CompletionError,
    CompletionErrorKind,
    parse_model_json,
)
from business_tools.services.prompts import (
    PromptSpec,
    build_messaging_prompt,
    build_swot_prompt,
)

logger = logging.getLogger(__name__)


class AnalysisError(Exception):
    """A pipeline failure already mapped to an HTTP status and error body."""

    def __init__(self, status_code: int, error: str, code: Optional[str] = None):
        super().__init__(error)
        self.status_code = status_code
        self.error = error
        self.code = code

    def body(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"error": self.error}
        if self.code:
            out["code"] = self.code
        return out


# Classification is keyed on the collaborator's error kind, never its message.
_COMPLETION_ERRORS = {
    CompletionErrorKind.QUOTA: ("API quota exceeded. Please try again later.", "QUOTA_EXCEEDED"),
    CompletionErrorKind.RATE_LIMITED: (
        "Rate limit exceeded. Please wait before making another request.",
        "RATE_LIMITED",
    ),
}


@dataclass(frozen=True)
class AnalysisKind:
    """Everything that differs between two analysis endpoints."""

    name: str
    label: str
    request_model: Type[AnalysisRequest]
    build_prompt: Callable[[Any], PromptSpec]
    response_model: Type[BaseModel]
    failure_code: str
    failure_message: str
    describe: Callable[[Any], str]
    echo_inputs: Optional[Callable[[Any], Dict[str, Any]]] = None


SWOT = AnalysisKind(
    name="swot",
    label="SWOT Analysis",
    request_model=SwotRequest,
    build_prompt=build_swot_prompt,
    response_model=SwotAnalysis,
    failure_code="ANALYSIS_FAILED",
    failure_message="Failed to generate SWOT analysis. Please try again.",
    describe=lambda req: req.company,
)


def _echo_messaging(req: MessagingRequest) -> Dict[str, Any]:
    return {
        "company": req.company,
        "product": req.product,
        "targetAudience": req.target_audience or None,
        "tonePreference": req.tone_preference or None,
    }


MESSAGING = AnalysisKind(
    name="messaging",
    label="Messaging Framework",
    request_model=MessagingRequest,
    build_prompt=build_messaging_prompt,
    response_model=MessagingFramework,
    failure_code="MESSAGING_FAILED",
    failure_message="Failed to generate messaging framework. Please try again.",
    describe=lambda req: f"{req.company} - {req.product}",
    echo_inputs=_echo_messaging,
)


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class AnalysisAgent:
    def __init__(self, settings: Settings, llm: CompletionClient):
        self.settings = settings
        self.llm = llm

    def run(self, kind: AnalysisKind, payload: Any) -> Dict[str, Any]:
        """validate → synthesize → complete → recover → check shape → enrich."""
        try:
            req = parse_request(kind.request_model, payload, self.settings.max_field_length)
        except RequestRejected as e:
            raise AnalysisError(400, str(e)) from e

        logger.info("%s request for: %s", kind.label, kind.describe(req))
        prompt = kind.build_prompt(req)

        try:
            raw = self.llm.complete(
                prompt.system,
                prompt.user,
                max_tokens=prompt.max_tokens,
                temperature=prompt.temperature,
            )
            result = parse_model_json(raw)
            kind.response_model.model_validate(result)
        except CompletionError as e:
            logger.error("%s Error: %s", kind.label, e, exc_info=True)
            if e.kind in _COMPLETION_ERRORS:
                message, code = _COMPLETION_ERRORS[e.kind]
                raise AnalysisError(429, message, code) from e
            raise AnalysisError(500, kind.failure_message, kind.failure_code) from e
        except Exception as e:
            logger.exception("%s Error: %s", kind.label, e)
            raise AnalysisError(500, kind.failure_message, kind.failure_code) from e

        result["metadata"] = self._metadata(kind, req)
        return result

    def _metadata(self, kind: AnalysisKind, req: AnalysisRequest) -> Dict[str, Any]:
        meta: Dict[str, Any] = {
            "generatedAt": _utc_timestamp(),
            "model": self.llm.model,
            "version": self.settings.schema_version,
        }
        if kind.echo_inputs is not None:
            meta["inputParams"] = kind.echo_inputs(req)
        return meta
