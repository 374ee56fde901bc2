"""
Portfolio Agents - CLI Entry Point.

Usage:
    python main.py chat        Chat with the portfolio assistant
    python main.py due-check   Notify the owner about reminders due soon (run from cron)
    python main.py init-db     Create database tables
"""

import asyncio
import logging
import sys

from dotenv import load_dotenv

load_dotenv()

from portfolio.agents.chat import ChatTask
from portfolio.agents.portfolio_manager import send_reminder_notifications
from portfolio.config import settings
from portfolio.db.base import init_db, open_session
from portfolio.errors import AgentTaskError
from portfolio.llm import LanguageModelClient


async def chat_loop() -> None:
    """Run an interactive visitor chat."""
    print("Portfolio Assistant")
    print("=" * 40)

    print("Commands: /quit")
    print("-" * 40)

    with open_session() as db:
        task = ChatTask(db, LanguageModelClient())
        chat_id = None

        while True:
            try:
                user_input = (await asyncio.to_thread(input, "You: ")).strip()
            except (KeyboardInterrupt, EOFError):
                break

            if not user_input:
                continue
            if user_input.lower() == "/quit":
                break

            try:
                reply = await task.run({"content": user_input, "chat_id": chat_id})
            except AgentTaskError as e:
                print(f"\nError: {e}\n")
                continue

            chat_id = reply.chat_id
            print(f"\nAssistant: {reply.content}\n")

    print("Goodbye!")


def chat() -> int:
    asyncio.run(chat_loop())
    return 0


def due_check() -> int:
    """Run one reminder scan."""
    with open_session() as db:
        notified = asyncio.run(send_reminder_notifications(db))

    print(f"Notified {notified} reminder(s)")
    return 0


COMMANDS = {
    "chat": chat,
    "due-check": due_check,
    "init-db": lambda: init_db() or 0,
}


def main() -> int:
    logging.basicConfig(level=settings.log_level)

    if len(sys.argv) < 2 or sys.argv[1] not in COMMANDS:
        print(__doc__)
        return 1

    try:
        return COMMANDS[sys.argv[1]]()
    except ValueError as e:
        # Missing DATABASE_URL / DEEPSEEK_API_KEY
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
