import os
import logging

from fastapi import APIRouter, Depends, Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from api.dependencies import get_conversation, get_event_store, get_task_store
from api.metrics import TRANSCRIPT_MESSAGES
from storage.conversation_memory import ConversationMemory
from storage.event_store import EventStore
from storage.task_store import TaskStore

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health")
async def health_check(
    task_store: TaskStore = Depends(get_task_store),
    event_store: EventStore = Depends(get_event_store),
    conversation: ConversationMemory = Depends(get_conversation),
) -> dict:
    """Health check endpoint for container orchestration."""
    return {
        "status": "healthy",
        "profile": os.getenv("DEPLOYMENT_PROFILE", "unknown"),
        "tasks": len(task_store.list_tasks()),
        "events": len(event_store.list_events()),
        "transcript_messages": len(conversation),
    }


@router.get("/metrics")
async def metrics(conversation: ConversationMemory = Depends(get_conversation)) -> Response:
    """
    Prometheus scrape endpoint.
    """
    TRANSCRIPT_MESSAGES.set(len(conversation))
    data = generate_latest()
    return Response(content=data, media_type=CONTENT_TYPE_LATEST)
