"""Persistent per-slide conversation context."""

from collections.abc import Callable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models.database import ConversationContext
from shared.utils import setup_logging, utc_now

from .service import extend_context

logger = setup_logging("chat-context")


class ConversationContextStore:
    """
    Conversation history for chat edits, one row per slide.

    Writes read the row with ``SELECT ... FOR UPDATE`` and compute the new
    value from what they read, so concurrent edits of the same slide
    serialize on backends that support row locks. When two requests race to
    create the first row, the loser re-reads the winner's row and applies its
    change on top. Callers own the transaction and commit after ``save`` or
    ``append``.
    """

    def __init__(self, db: Session):
        self.db = db

    def _load(self, slide_id: int, lock: bool = False) -> ConversationContext | None:
        query = self.db.query(ConversationContext).filter(ConversationContext.slide_id == slide_id)
        if lock:
            query = query.with_for_update()
        return query.first()

    def _write(self, slide_id: int, update: Callable[[str], str]) -> str:
        row = self._load(slide_id, lock=True)
        if row is None:
            row = ConversationContext(slide_id=slide_id, context=update(""))
            self.db.add(row)
            try:
                self.db.flush()
            except IntegrityError:
                # A concurrent request created the row first
                self.db.rollback()
                row = self._load(slide_id, lock=True)
                row.context = update(row.context)
                logger.info(f"Merged concurrent context write for slide {slide_id}")
        else:
            row.context = update(row.context)
        row.updated_at = utc_now()
        self.db.flush()
        return row.context

    def get(self, slide_id: int) -> str:
        row = self._load(slide_id)
        return row.context if row else ""

    def save(self, slide_id: int, context: str) -> str:
        """Replace the stored context for a slide."""
        return self._write(slide_id, lambda current: context)

    def append(self, slide_id: int, instruction: str) -> str:
        """Add an instruction to the stored context and return the result."""
        return self._write(slide_id, lambda current: extend_context(current, instruction))
