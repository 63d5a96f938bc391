# chat router: conversations with the scripted companion
# transcripts are stored per user in the ai_sessions collection

import logging
from fastapi import APIRouter, Depends, HTTPException, status

from hopeocd.dependencies import get_store
from hopeocd.models.chat import (
    ChatMessageCreate,
    ChatSessionCreate,
    ChatSessionResponse,
    ConversationStarter,
)
from hopeocd.services.backend import AI
from hopeocd.services.chat_service import CONVERSATION_STARTERS, ChatService, get_chat_service
from hopeocd.services.entity_store import EntityStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/chat", tags=["chat"])


@router.get("/starters", response_model=list[ConversationStarter])
async def list_conversation_starters():
    return [ConversationStarter(**s) for s in CONVERSATION_STARTERS]


@router.get("/sessions", response_model=list[ChatSessionResponse])
async def list_chat_sessions(store: EntityStore = Depends(get_store)):
    return [ChatSessionResponse(**row) for row in store.collections[AI]]


@router.post("/sessions", response_model=ChatSessionResponse, status_code=status.HTTP_201_CREATED)
async def start_chat_session(
    body: ChatSessionCreate,
    store: EntityStore = Depends(get_store),
    chat: ChatService = Depends(get_chat_service),
):
    """open a conversation with a time-of-day greeting"""
    session = await chat.start_session(store, body.session_type)
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Could not start chat session",
        )
    return ChatSessionResponse(**session)


@router.get("/sessions/{session_id}", response_model=ChatSessionResponse)
async def get_chat_session(session_id: str, store: EntityStore = Depends(get_store)):
    session = store.find(AI, session_id)
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Chat session not found",
        )
    return ChatSessionResponse(**session)


@router.post("/sessions/{session_id}/messages", response_model=ChatSessionResponse)
async def send_chat_message(
    session_id: str,
    body: ChatMessageCreate,
    store: EntityStore = Depends(get_store),
    chat: ChatService = Depends(get_chat_service),
):
    """send a message and get the companion's reply appended to the transcript"""
    if store.find(AI, session_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Chat session not found",
        )

    try:
        session = await chat.send_message(store, session_id, body.content, body.category)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))

    if session is None:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Could not save chat session",
        )
    return ChatSessionResponse(**session)
