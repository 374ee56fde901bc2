"""
Chat Agent.

Answers portfolio visitors on the owner's behalf. The system prompt is built
from the owner's profile and cached per owner for a short TTL.
"""

import logging
from datetime import datetime, timedelta

from cachetools import TTLCache
from langchain_core.prompts import PromptTemplate
from pydantic import BaseModel, ConfigDict, Field

from portfolio.agents.base import EMAIL_PATTERN, AgentTask
from portfolio.config import settings
from portfolio.db.repository import PortfolioRepository
from portfolio.db.tables import ChatInteraction, ChatMessage, User, generate_uuid, utcnow
from portfolio.errors import NotFoundError
from portfolio.utils.formatting import format_years

logger = logging.getLogger(__name__)

FALLBACK_SYSTEM_PROMPT = "You are a helpful assistant for a portfolio website."

OWNER_PROMPT = PromptTemplate.from_template(
    """You are an AI assistant representing {name}, a professional in the tech industry.

About {name}:
{bio}

Skills: {skills}

Education: {education}

Experience: {experience}

Notable Projects: {projects}

Your role is to engage with visitors to {name}'s portfolio website and answer questions about {name}'s background, skills, experience, and projects.
You can also discuss potential collaborations, job opportunities, or freelance work.

Be professional, friendly, and helpful. If you don't know specific details that weren't provided above,
suggest the visitor contact {name} directly for more information.

You should NOT make up information about {name} that wasn't provided to you.
If asked about something not covered above, politely explain that you don't have that specific information.
"""
)

CHAT_PROMPT = PromptTemplate.from_template(
    """{system_prompt}

Chat History:
{chat_history}

Visitor: {user_message}

Assistant:"""
)

# owner id -> rendered system prompt
_owner_prompts: TTLCache = TTLCache(maxsize=8, ttl=max(settings.owner_prompt_cache_ttl, 1))


class ChatMessageParams(BaseModel):
    content: str = Field(min_length=1)
    chat_id: str | None = None
    visitor_name: str | None = None
    visitor_email: str | None = Field(default=None, pattern=EMAIL_PATTERN)


class ChatReply(BaseModel):
    content: str
    chat_id: str
    message_id: str


class ChatMessageRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    sender: str
    content: str
    timestamp: datetime


class ChatSessionRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    visitor_name: str
    visitor_email: str | None
    created_at: datetime
    updated_at: datetime


class ChatHistory(BaseModel):
    chat: ChatSessionRecord
    messages: list[ChatMessageRecord]


def build_owner_prompt(owner: User | None) -> str:
    """Render the system prompt describing the owner."""
    if owner is None:
        return FALLBACK_SYSTEM_PROMPT

    return OWNER_PROMPT.format(
        name=owner.name,
        bio=owner.bio or "",
        skills=", ".join(
            f"{s.name} ({s.proficiency}% proficiency, {s.years_of_experience:g} years)" for s in owner.skills
        ),
        education="; ".join(
            f"{e.degree} in {e.field_of_study} from {e.institution} ({format_years(e.start_date, e.end_date)})"
            for e in owner.education
        ),
        experience="; ".join(
            f"{e.position} at {e.company} ({format_years(e.start_date, e.end_date)})" for e in owner.experiences
        ),
        projects="; ".join(f"{p.title}: {p.description}" for p in owner.projects),
    )


def format_history(messages: list[ChatMessage]) -> str:
    return "\n".join(
        f"{'Visitor' if m.sender == 'visitor' else 'Assistant'}: {m.content}" for m in messages
    )


class ChatTask(AgentTask[ChatMessageParams, ChatReply]):
    """Reply to one visitor message and store both sides of the exchange."""

    name = "process chat message"
    temperature = 0.7
    params_model = ChatMessageParams

    def __init__(self, db, llm, notifier=None, prompt_cache: TTLCache | None = None):
        super().__init__(db, llm, notifier)
        self.prompt_cache = _owner_prompts if prompt_cache is None else prompt_cache

    def system_prompt(self) -> str:
        owner = self.repo.get_owner()
        if owner is None:
            return FALLBACK_SYSTEM_PROMPT
        if settings.owner_prompt_cache_ttl <= 0:
            return build_owner_prompt(owner)

        prompt = self.prompt_cache.get(owner.id)
        if prompt is None:
            prompt = build_owner_prompt(owner)
            self.prompt_cache[owner.id] = prompt
        return prompt

    async def execute(self, params: ChatMessageParams) -> ChatReply:
        received_at = utcnow()
        if params.chat_id:
            chat = self.repo.get_chat(params.chat_id)
            if not chat:
                raise NotFoundError(f"Chat session not found: {params.chat_id}")
            history = self.repo.list_chat_messages(chat.id)
        else:
            chat = ChatInteraction(
                id=generate_uuid(),
                visitor_name=params.visitor_name or "Anonymous",
                visitor_email=params.visitor_email,
            )
            history = []

        reply = await self.infer(
            CHAT_PROMPT,
            system_prompt=self.system_prompt(),
            chat_history=format_history(history),
            user_message=params.content,
        )

        # Reply must sort after the visitor message
        replied_at = max(utcnow(), received_at + timedelta(microseconds=1))
        visitor_msg = ChatMessage(chat_id=chat.id, sender="visitor", content=params.content, timestamp=received_at)
        assistant_msg = ChatMessage(
            id=generate_uuid(),
            chat_id=chat.id,
            sender="assistant",
            content=reply.strip(),
            timestamp=replied_at,
        )
        chat.updated_at = replied_at
        self.repo.add_all([chat, visitor_msg, assistant_msg])

        return ChatReply(content=assistant_msg.content, chat_id=chat.id, message_id=assistant_msg.id)


def get_chat_history(chat_id: str, db) -> ChatHistory:
    """Return a chat session and its messages in order."""
    repo = PortfolioRepository(db)
    chat = repo.get_chat(chat_id)
    if not chat:
        raise NotFoundError(f"Chat session not found: {chat_id}")

    messages = repo.list_chat_messages(chat_id)
    return ChatHistory(
        chat=ChatSessionRecord.model_validate(chat),
        messages=[ChatMessageRecord.model_validate(m) for m in messages],
    )


async def process_chat_message(params: ChatMessageParams | dict, db, llm, prompt_cache: TTLCache | None = None):
    """Reply to a visitor message."""
    return await ChatTask(db, llm, prompt_cache=prompt_cache).run(params)
