from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from aurora_oracle.chat import ChatRegistry, ChatSession
from aurora_oracle.errors import SessionNotFound
from aurora_oracle.models import ChatMessage

from ..deps import get_api_key, get_chat_registry


router = APIRouter(dependencies=[Depends(get_api_key)])


class SessionResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    session_id: str
    messages: List[ChatMessage]


class SendRequest(BaseModel):
    message: str


def _lookup(registry: ChatRegistry, session_id: str) -> ChatSession:
    try:
        return registry.get(session_id)
    except SessionNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("/sessions", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def create_session(registry: ChatRegistry = Depends(get_chat_registry)) -> SessionResponse:
    session_id, session = registry.create()
    return SessionResponse(session_id=session_id, messages=list(session.transcript))


@router.get("/sessions/{session_id}", response_model=SessionResponse)
async def get_session(session_id: str, registry: ChatRegistry = Depends(get_chat_registry)) -> SessionResponse:
    session = _lookup(registry, session_id)
    return SessionResponse(session_id=session_id, messages=list(session.transcript))


@router.post("/sessions/{session_id}/messages", response_model=ChatMessage)
async def send_message(
    session_id: str,
    req: SendRequest,
    registry: ChatRegistry = Depends(get_chat_registry),
) -> ChatMessage:
    session = _lookup(registry, session_id)
    try:
        return await session.send(req.message)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))


@router.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(session_id: str, registry: ChatRegistry = Depends(get_chat_registry)) -> None:
    try:
        registry.discard(session_id)
    except SessionNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
