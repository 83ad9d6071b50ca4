"""Shared Application Layer components."""

from .command import Command
from .handler import CommandHandler, QueryHandler
from .query import Query
from .retry import call_with_backoff
from .unit_of_work import UnitOfWork

__all__ = [
    "Command",
    "Query",
    "CommandHandler",
    "QueryHandler",
    "UnitOfWork",
    "call_with_backoff",
]
