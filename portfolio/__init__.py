"""
Portfolio Agents Backend.

Core components:
- agents: Job search, resume distribution, visitor chat, portfolio manager
- db: Profile tables and the repository used by the agents
- notifications: Email and SMS senders
"""
