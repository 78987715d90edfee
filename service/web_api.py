"""FastAPI application exposing the chat action parser over HTTP."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from chat_actions.nlu_service import ActionExtractionService
from chat_actions.parser_payloads import serialize_result
from chat_actions.parsers.types import ChatMember
from service.main import build_service

logger = logging.getLogger(__name__)


class MemberModel(BaseModel):
    id: str
    name: str


class ParsePayload(BaseModel):
    message: str
    members: List[MemberModel] = Field(default_factory=list)
    project_id: Optional[str] = None


def _format_response(
    service: ActionExtractionService,
    payload: ParsePayload,
    members: List[ChatMember],
) -> Dict[str, Any]:
    """Serialized ``ParseResult`` plus the follow-up hint when nothing was found."""
    result = service.parse(payload.message, members, payload.project_id)
    formatted = serialize_result(result)
    formatted["follow_up_hint"] = None if result.has_action else service.follow_up_hint(payload.message, members)
    formatted["needs_review"] = [
        index for index, action in enumerate(result.actions) if service.needs_review(action)
    ]
    return formatted


def create_app(service: Optional[ActionExtractionService] = None) -> FastAPI:
    """WHAT: instantiate FastAPI around one shared ``ActionExtractionService``.

    WHY: tests inject a service with a frozen clock and no disk logging, while
    production uses the same wiring as the CLI.
    HOW: keep the service on ``app.state`` and register the parse and health
    routes.
    """
    app = FastAPI(title="Chat Action Parser")
    app.state.service = service or build_service()

    @app.get("/api/health")
    def health_check() -> Dict[str, Any]:
        return {
            "status": "ok",
            "timestamp": datetime.now(tz=timezone.utc).isoformat(),
        }

    @app.post("/api/parse")
    def parse(payload: ParsePayload) -> Dict[str, Any]:
        if not payload.message.strip():
            raise HTTPException(status_code=400, detail="Message is required.")
        members = [ChatMember(id=member.id, name=member.name) for member in payload.members]
        formatted = _format_response(app.state.service, payload, members)
        logger.info(
            "Parsed message for project %s: %d action(s).",
            payload.project_id or "-",
            len(formatted["actions"]),
        )
        return formatted

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    from service.config import get_web_api_host, get_web_api_port

    uvicorn.run(
        "service.web_api:app",
        host=get_web_api_host(),
        port=get_web_api_port(),
        reload=False,
    )
