from .base import Base, BigIntPK
from .session import (
    create_engine_from_url,
    create_engine_from_settings,
    build_session_maker,
    get_async_session,
)
from .transaction import Transaction, TransactionManager

__all__ = [
    "Base",
    "BigIntPK",
    "create_engine_from_url",
    "create_engine_from_settings",
    "build_session_maker",
    "get_async_session",
    "Transaction",
    "TransactionManager",
]
