"""Tests for the visitor chat agent."""

import asyncio

import pytest
from cachetools import TTLCache

from portfolio.agents.chat import FALLBACK_SYSTEM_PROMPT, ChatTask, get_chat_history, process_chat_message
from portfolio.config import settings
from portfolio.db import ChatInteraction, ChatMessage, Skill
from portfolio.errors import NotFoundError, ValidationError
from tests.conftest import StubLLM


@pytest.fixture
def prompt_cache() -> TTLCache:
    return TTLCache(maxsize=8, ttl=300)


def chat(db, llm, prompt_cache, **params):
    return asyncio.run(process_chat_message(params, db, llm, prompt_cache=prompt_cache))


class TestProcessChatMessage:
    def test_new_chat_stores_both_messages(self, db, owner, prompt_cache):
        llm = StubLLM("  Jane has six years of Python experience.  ")

        reply = chat(db, llm, prompt_cache, content="How much Python does Jane know?", visitor_name="Sam")

        assert reply.content == "Jane has six years of Python experience."
        session = db.get(ChatInteraction, reply.chat_id)
        assert session.visitor_name == "Sam"

        messages = db.query(ChatMessage).filter(ChatMessage.chat_id == reply.chat_id).all()
        assert sorted(m.sender for m in messages) == ["assistant", "visitor"]

    def test_system_prompt_describes_owner(self, db, owner, prompt_cache):
        llm = StubLLM("Hi!")
        chat(db, llm, prompt_cache, content="Hello")

        prompt, temperature = llm.calls[0]
        assert temperature == 0.7
        assert "representing Jane Doe" in prompt
        assert "Python (90% proficiency, 6 years)" in prompt
        assert "Senior Engineer at Acme (2021-Present)" in prompt
        assert prompt.rstrip().endswith("Visitor: Hello\n\nAssistant:")

    def test_follow_up_includes_history(self, db, owner, prompt_cache):
        llm = StubLLM("Hello Sam!", "Yes, she is open to remote roles.")
        first = chat(db, llm, prompt_cache, content="Hi, I'm Sam")

        second = chat(db, llm, prompt_cache, content="Is she open to remote work?", chat_id=first.chat_id)

        assert second.chat_id == first.chat_id
        prompt, _ = llm.calls[1]
        assert "Visitor: Hi, I'm Sam\nAssistant: Hello Sam!" in prompt

        history = get_chat_history(first.chat_id, db)
        assert [m.sender for m in history.messages] == ["visitor", "assistant", "visitor", "assistant"]
        assert history.messages[-1].content == "Yes, she is open to remote roles."

    def test_owner_prompt_is_cached(self, db, owner, prompt_cache):
        llm = StubLLM("One", "Two")
        first = chat(db, llm, prompt_cache, content="Hello")

        db.add(Skill(user_id=owner.id, name="Rust", category="backend", proficiency=40))
        db.commit()
        chat(db, llm, prompt_cache, content="Anything new?", chat_id=first.chat_id)

        assert owner.id in prompt_cache
        assert "Rust" not in llm.calls[1][0]

    def test_cache_disabled_rebuilds_prompt(self, db, owner, prompt_cache, monkeypatch):
        monkeypatch.setattr(settings, "owner_prompt_cache_ttl", 0)
        llm = StubLLM("One", "Two")
        first = chat(db, llm, prompt_cache, content="Hello")

        db.add(Skill(user_id=owner.id, name="Rust", category="backend", proficiency=40))
        db.commit()
        chat(db, llm, prompt_cache, content="Anything new?", chat_id=first.chat_id)

        assert "Rust" in llm.calls[1][0]

    def test_without_owner_uses_fallback_prompt(self, db, prompt_cache):
        llm = StubLLM("Hello!")
        chat(db, llm, prompt_cache, content="Hello")
        assert llm.calls[0][0].startswith(FALLBACK_SYSTEM_PROMPT)


class TestChatFailures:
    def test_unknown_chat_id(self, db, owner, prompt_cache):
        llm = StubLLM()
        with pytest.raises(NotFoundError):
            chat(db, llm, prompt_cache, content="Hello", chat_id="missing")
        assert llm.calls == []
        assert db.query(ChatMessage).count() == 0

    def test_empty_message(self, db, owner, prompt_cache):
        llm = StubLLM()
        with pytest.raises(ValidationError):
            asyncio.run(ChatTask(db, llm, prompt_cache=prompt_cache).run({"content": ""}))
        assert llm.calls == []

    def test_history_of_unknown_chat(self, db):
        with pytest.raises(NotFoundError):
            get_chat_history("missing", db)
