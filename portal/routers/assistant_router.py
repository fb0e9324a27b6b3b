# /portal/routers/assistant_router.py

from fastapi import APIRouter, Depends, HTTPException, status

from ..core.deps import get_current_identity
from ..models import assistant_model
from ..models.identity_model import Identity
from ..services import assistant_service

router = APIRouter()


@router.post(
    "/announcement",
    response_model=assistant_model.DraftResponse,
    summary="Polish an Announcement Draft",
    description="Rewrites a draft or a list of keywords into a formal announcement. Returns the draft unchanged when the assistant is unavailable.",
)
async def generate_announcement(
    request: assistant_model.DraftRequest,
    identity: Identity = Depends(get_current_identity),
):
    text = await assistant_service.generate_announcement(request.draft, identity.role)
    return assistant_model.DraftResponse(text=text)


@router.post(
    "/poll-question",
    response_model=assistant_model.DraftResponse,
    summary="Reformulate a Poll Question",
)
async def reformulate_poll_question(
    request: assistant_model.DraftRequest,
    identity: Identity = Depends(get_current_identity),
):
    text = await assistant_service.reformulate_poll_question(request.draft)
    return assistant_model.DraftResponse(text=text)


@router.post(
    "/chat",
    response_model=assistant_model.ChatResponse,
    summary="Ask the Study Assistant",
    description="Answers the last user message of the conversation. Responds 503 when the assistant is not configured.",
)
async def chat(
    request: assistant_model.ChatRequest,
    identity: Identity = Depends(get_current_identity),
):
    try:
        reply = await assistant_service.chat(request.messages)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return assistant_model.ChatResponse(reply=reply)
