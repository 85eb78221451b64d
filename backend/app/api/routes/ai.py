"""
AI assistant routes (opaque pass-through to the completion endpoint).
"""
from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel
from typing import Dict, List, Optional
from app.api.dependencies import CurrentIdentity, get_current_identity
from app.services import ai_service

router = APIRouter(prefix="/ai", tags=["ai"])


class ChatRequest(BaseModel):
    """Schema for a chat message."""
    message: str
    history: Optional[List[Dict[str, str]]] = None


class ChatResponse(BaseModel):
    """Schema for the assistant reply."""
    reply: str


@router.post("/chat", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    identity: CurrentIdentity = Depends(get_current_identity)
):
    """Forward a message to the AI assistant."""
    if not ai_service.is_configured():
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="AI assistant is not configured"
        )
    try:
        reply = await ai_service.chat_completion(request.message, request.history)
    except ai_service.AIServiceUnavailable as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(e)
        )
    return ChatResponse(reply=reply)
