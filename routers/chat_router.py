"""
Chat history and the companion chat endpoint.
"""

from typing import Any, Dict, Mapping

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy import delete
from sqlalchemy.orm import Session

from models.db import get_db
from models.journal import ChatMessage
from models.schemas import ChatMessageCreate, ChatMessageOut, ChatMessageUpdate, CompanionMessage
from routers.resource_router import Resource, build_router
from services.companion_service import ResponseGenerator, get_response_generator
from utils.auth import get_current_user_id
from utils.errors import ApiError, internal_error
from utils.helpers import log_api_call, utcnow
from utils.validation import parse_payload

# How many past messages the reply generator sees
COMPANION_CONTEXT_MESSAGES = 20


class ChatHistoryResource(Resource):
    """Chat messages, plus ``DELETE ?all=true`` to clear the caller's history."""

    def delete(self, db: Session, user_id: str, params: Mapping[str, str]) -> Dict[str, Any]:
        if params.get("all") != "true":
            return super().delete(db, user_id, params)
        result = db.execute(delete(ChatMessage).where(ChatMessage.user_id == user_id))
        db.commit()
        logger.info(f"Cleared {result.rowcount} chat messages for {user_id}")
        return {"message": "All chat history deleted successfully", "count": result.rowcount}


chat_resource = ChatHistoryResource(
    path="/chat-history",
    model=ChatMessage,
    create_schema=ChatMessageCreate,
    update_schema=ChatMessageUpdate,
    out_schema=ChatMessageOut,
    label="Message",
    delete_key="deleted",
    default_limit=50,
    max_limit=200,
    order_by=[ChatMessage.created_at.asc(), ChatMessage.id.asc()],
    tag="chat",
)

router = build_router(chat_resource)
companion_router = APIRouter(prefix="/api", tags=["chat"])


@companion_router.post("/chat-companion", status_code=201)
async def chat_with_companion(
    request: Request,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    generator: ResponseGenerator = Depends(get_response_generator),
):
    """
    Store the caller's message, generate the companion's reply and store it too.

    Returns:
        Both persisted messages as ``userMessage`` and ``assistantMessage``
    """
    log_api_call("POST /api/chat-companion")
    try:
        body = await request.json()
        values = parse_payload(CompanionMessage, body)

        user_message = ChatMessage(
            user_id=user_id, message=values["message"], role="user", created_at=utcnow()
        )
        db.add(user_message)
        db.flush()

        history = (
            chat_resource.owned(db, user_id)
            .order_by(ChatMessage.created_at.desc(), ChatMessage.id.desc())
            .limit(COMPANION_CONTEXT_MESSAGES)
            .all()
        )
        history.reverse()

        reply = (generator.generate(history) or "").strip()
        if not reply:
            raise ValueError("Response generator returned an empty reply")

        assistant_message = ChatMessage(
            user_id=user_id, message=reply, role="assistant", created_at=utcnow()
        )
        db.add(assistant_message)
        db.commit()
        db.refresh(user_message)
        db.refresh(assistant_message)

        return JSONResponse(
            status_code=201,
            content={
                "userMessage": chat_resource.serialize(user_message),
                "assistantMessage": chat_resource.serialize(assistant_message),
            },
        )
    except ApiError:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to generate companion reply: {e}")
        raise internal_error(e)
