"""Chat-driven slide editing."""

from .context_store import ConversationContextStore
from .service import ChatEditResult, ChatEditService, extend_context

__all__ = ["ChatEditResult", "ChatEditService", "ConversationContextStore", "extend_context"]
