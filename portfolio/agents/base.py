"""
Agent task base class.

One task run is a linear chain: validate params → fetch records → fill a
prompt template → call the model → parse and validate the reply → persist →
notify the owner. Subclasses implement ``execute``; ``run`` is the error
boundary every caller goes through.
"""

import logging
from typing import ClassVar, Generic, TypeVar

from langchain_core.prompts import PromptTemplate
from pydantic import BaseModel
from pydantic import ValidationError as SchemaError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from portfolio.db.repository import PortfolioRepository
from portfolio.errors import AgentTaskError, PersistenceError, ValidationError
from portfolio.llm import LanguageModelClient
from portfolio.notifications import Notifier

logger = logging.getLogger(__name__)

P = TypeVar("P", bound=BaseModel)
R = TypeVar("R")

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class AgentTask(Generic[P, R]):
    """Base class for the fetch → prompt → infer → persist → notify cycle."""

    name: ClassVar[str] = "agent task"
    temperature: ClassVar[float] = 0.7
    params_model: ClassVar[type[BaseModel]]

    def __init__(self, db: Session, llm: LanguageModelClient, notifier: Notifier | None = None):
        self.repo = PortfolioRepository(db)
        self.llm = llm
        self.notifier = notifier or Notifier.from_settings()

    def validate(self, params: P | dict) -> P:
        """Coerce raw input into the task's parameter model."""
        if isinstance(params, self.params_model):
            return params
        try:
            return self.params_model.model_validate(params)
        except SchemaError as e:
            fields = ", ".join(".".join(str(p) for p in err["loc"]) or "input" for err in e.errors())
            raise ValidationError(f"Invalid {self.name} input: {fields}") from e

    async def run(self, params: P | dict) -> R:
        """Validate and execute, re-raising every failure as an AgentTaskError."""
        try:
            return await self.execute(self.validate(params))
        except AgentTaskError as e:
            logger.error("%s failed (%s): %s", self.name, type(e).__name__, e)
            raise
        except SQLAlchemyError as e:
            logger.exception("%s failed on a store operation", self.name)
            raise PersistenceError(f"Failed to {self.name}: {e}") from e
        except Exception as e:
            logger.exception("%s failed unexpectedly", self.name)
            raise AgentTaskError(f"Failed to {self.name}: {e}") from e

    async def execute(self, params: P) -> R:
        raise NotImplementedError

    async def infer(self, prompt: PromptTemplate, **variables: str) -> str:
        """Fill the template and send it to the model."""
        text = prompt.format(**variables)
        logger.debug("%s prompt (%d chars, temperature=%s)", self.name, len(text), self.temperature)
        reply = await self.llm.complete(text, self.temperature)
        logger.debug("%s reply (%d chars)", self.name, len(reply))
        return reply
