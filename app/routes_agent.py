"""Agent console routes: conversation log and collection stats."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.deps import get_session
from app.session import AgentSession

router = APIRouter(tags=["agent"])


class AskRequest(BaseModel):
    question: str


@router.get("/messages")
async def list_messages(session: AgentSession = Depends(get_session)):
    """Full conversation, oldest first."""
    messages = [m.model_dump() for m in session.conversation.messages]
    return JSONResponse({"messages": messages})


@router.post("/messages")
async def ask(body: AskRequest, session: AgentSession = Depends(get_session)):
    """Append the question and the agent's answer."""
    turn = session.ask(body.question)
    if turn is None:
        raise HTTPException(status_code=400, detail="Question is empty")
    user_message, agent_message = turn
    return JSONResponse(
        {"messages": [user_message.model_dump(), agent_message.model_dump()]}
    )


@router.get("/stats")
async def stats(session: AgentSession = Depends(get_session)):
    """Runtime loaded, disk footprint and dominant moods."""
    return JSONResponse(session.stats().model_dump())
