"""Chat-edit endpoint."""

from functools import lru_cache

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import get_db
from models.database import User
from services.ai import build_generation_driver
from services.auth import get_current_user
from services.slides import SlideService
from shared.deck_models import ChatRequest, ChatResponse
from shared.utils import setup_logging

from .context_store import ConversationContextStore
from .service import ChatEditService

logger = setup_logging("chat-routes")

router = APIRouter(tags=["chat"])


@lru_cache
def get_chat_edit_service() -> ChatEditService:
    return ChatEditService(driver=build_generation_driver())


@router.post(
    "/chat",
    response_model=ChatResponse,
    response_model_exclude_unset=True,
    summary="Chat Edit Slide",
    description="Get editing suggestions and an optional field patch for a slide",
)
async def chat_edit(
    request: ChatRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    chat_service: ChatEditService = Depends(get_chat_edit_service),
):
    slide = SlideService(db, current_user).get_slide(request.slide_id)
    store = ConversationContextStore(db)

    context = store.get(slide.id)
    result = await chat_service.chat_edit(request.prompt, context, request.slide_data)

    # The stored value includes edits that landed during the model call
    context = store.append(slide.id, request.prompt)
    db.commit()

    response = {"edit": result.edit, "context": context}
    if result.slide_updates is not None:
        response["slideUpdates"] = result.slide_updates
    return response
