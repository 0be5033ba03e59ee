from .migrations import MIGRATIONS_DIR, apply_migrations, connect_db, pending_migrations
from .repository import MessageRepository

__all__ = ["MIGRATIONS_DIR", "connect_db", "apply_migrations", "pending_migrations", "MessageRepository"]
