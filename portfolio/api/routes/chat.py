"""Visitor chat endpoints."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from portfolio.agents.chat import ChatHistory, ChatMessageParams, ChatReply, ChatTask, get_chat_history
from portfolio.api.deps import get_llm
from portfolio.api.limiter import limiter
from portfolio.config import settings
from portfolio.db import get_db
from portfolio.llm import LanguageModelClient

router = APIRouter()


@router.post("", response_model=ChatReply)
@limiter.limit(settings.chat_rate_limit)
async def send_message(
    request: Request,
    data: ChatMessageParams,
    db: Session = Depends(get_db),
    llm: LanguageModelClient = Depends(get_llm),
):
    """Send a visitor message and get the assistant's reply."""
    return await ChatTask(db, llm).run(data)


@router.get("/{chat_id}", response_model=ChatHistory)
def read_history(chat_id: str, db: Session = Depends(get_db)):
    """Get a chat session with its messages."""
    return get_chat_history(chat_id, db)
