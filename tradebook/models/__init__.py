# tradebook/models/__init__.py
# Central import registry for Alembic

from tradebook.models.user import User
from tradebook.models.trade import Trade
from tradebook.models.journal import DiaryEntry, Goal

__all__ = ["User", "Trade", "DiaryEntry", "Goal"]
