from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Request
from fastapi.responses import JSONResponse

from business_tools.services.agent import MESSAGING, SWOT, AnalysisAgent, AnalysisError, AnalysisKind

router = APIRouter(tags=["analysis"])


def get_agent(request: Request) -> AnalysisAgent:
    return request.app.state.agent


def _run(agent: AnalysisAgent, kind: AnalysisKind, payload: Any):
    try:
        return agent.run(kind, {} if payload is None else payload)
    except AnalysisError as e:
        return JSONResponse(content=e.body(), status_code=e.status_code)


@router.post("/swot")
def swot_analysis(payload: Any = Body(None), agent: AnalysisAgent = Depends(get_agent)):
    return _run(agent, SWOT, payload)


@router.post("/messaging")
def messaging_framework(payload: Any = Body(None), agent: AnalysisAgent = Depends(get_agent)):
    return _run(agent, MESSAGING, payload)
