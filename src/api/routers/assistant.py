import asyncio
import logging
import time
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from api.dependencies import (
    get_command_router,
    get_conversation,
    get_executor,
    get_llm_client,
    get_settings_store,
    get_task_store,
)
from api.metrics import (
    COMMANDS_TOTAL,
    DISPATCH_TOTAL,
    REQUESTS_TOTAL,
    REQUEST_LATENCY_SECONDS,
    TRANSCRIPT_MESSAGES,
)
from classification.intent_classifiers import ParseContext
from formatting.response_formatter import Style, format_response
from integration.command_executor import CommandExecutor
from llm.llm_client import LLMClient
from llm.prompt_builder import build_prompt
from llm.registry import AUTO_MODEL, DEFAULT_MODEL, list_providers
from routing.command_router import CommandRouter
from storage.conversation_memory import ConversationMemory
from storage.settings_store import SettingsStore
from storage.task_store import TaskStore
from study_assistant.models import AssistantSettings

router = APIRouter()
logger = logging.getLogger(__name__)


class AssistantIn(BaseModel):
    text: str
    mode: Optional[str] = None
    model: Optional[str] = None
    style: Style = "markdown"


class SettingsIn(BaseModel):
    selected_model: Optional[str] = None
    api_key: Optional[str] = Field(default=None, repr=False)


def _record(endpoint: str, status: str, start: float) -> None:
    # Prometheus counters (best-effort)
    try:
        REQUESTS_TOTAL.labels(endpoint=endpoint, status=status).inc()
        REQUEST_LATENCY_SECONDS.labels(endpoint=endpoint).observe(time.time() - start)
    except Exception as e:
        logger.debug(f"Could not record request metrics: {e}")


def _public_settings(settings: AssistantSettings) -> dict:
    # the key itself never leaves the server
    return {"selected_model": settings.selected_model, "has_api_key": settings.has_api_key}


@router.post("/assistant")
async def assistant(
    payload: AssistantIn,
    command_router: CommandRouter = Depends(get_command_router),
    executor: CommandExecutor = Depends(get_executor),
    task_store: TaskStore = Depends(get_task_store),
    conversation: ConversationMemory = Depends(get_conversation),
    settings_store: SettingsStore = Depends(get_settings_store),
    llm_client: LLMClient = Depends(get_llm_client),
) -> dict:
    start = time.time()
    logger.info(f"Received assistant request: {payload.text[:50]}...")

    command = command_router.route(
        payload.text,
        mode=payload.mode,
        context=ParseContext(tasks=task_store.list_tasks()),
    )
    COMMANDS_TOTAL.labels(kind=command.kind).inc()

    if command.kind == "ask":
        prompt = build_prompt(command.prompt, task_store.list_tasks(), conversation)
        generation = conversation.begin_turn(command.prompt)

        settings = settings_store.load()
        model = payload.model or settings.selected_model
        result = await asyncio.to_thread(llm_client.dispatch, model, prompt, settings.api_key)
        DISPATCH_TOTAL.labels(provider=result.provider or "none", outcome=result.outcome.value).inc()

        recorded = conversation.complete_turn(generation, result.text)
        if not recorded:
            logger.info("Dropped a stale reply for generation %s", generation)
        TRANSCRIPT_MESSAGES.set(len(conversation))
        _record("/assistant", result.outcome.value, start)

        return {
            "kind": command.kind,
            "mode": "ask",
            "reply": format_response(result.text, payload.style).model_dump(),
            "model": result.model,
            "provider": result.provider,
            "outcome": result.outcome.value,
            "recorded": recorded,
        }

    generation = conversation.begin_turn(payload.text)
    outcome = executor.execute(command)
    conversation.complete_turn(generation, outcome.message)
    TRANSCRIPT_MESSAGES.set(len(conversation))
    _record("/assistant", "applied" if outcome.applied else "not_applied", start)

    return {
        "kind": command.kind,
        "mode": "create",
        "command": command.model_dump(mode="json"),
        "reply": format_response(outcome.message, payload.style).model_dump(),
        "applied": outcome.applied,
        "tasks": [t.model_dump(mode="json") for t in outcome.tasks],
        "event": outcome.event.model_dump(mode="json") if outcome.event else None,
    }


@router.get("/providers")
async def providers() -> dict:
    return {
        "providers": list_providers(),
        "default_model": DEFAULT_MODEL,
        "auto_model": AUTO_MODEL,
    }


@router.get("/settings")
async def get_settings(settings_store: SettingsStore = Depends(get_settings_store)) -> dict:
    return _public_settings(settings_store.load())


@router.put("/settings")
async def put_settings(
    payload: SettingsIn,
    settings_store: SettingsStore = Depends(get_settings_store),
) -> dict:
    current = settings_store.load()
    updates = payload.model_dump(exclude_unset=True)
    if "api_key" in updates and updates["api_key"] is not None and not updates["api_key"].strip():
        updates["api_key"] = None
    if updates.get("selected_model") is None:
        updates.pop("selected_model", None)

    settings = current.model_copy(update=updates)
    settings_store.save(settings)
    logger.info("Settings updated, model=%s", settings.selected_model)
    return _public_settings(settings_store.load())


@router.get("/transcript")
async def get_transcript(conversation: ConversationMemory = Depends(get_conversation)) -> dict:
    return {
        "messages": [m.model_dump() for m in conversation.messages()],
        "summary": conversation.summary().model_dump(),
    }


@router.delete("/transcript")
async def clear_transcript(conversation: ConversationMemory = Depends(get_conversation)) -> dict:
    conversation.reset()
    TRANSCRIPT_MESSAGES.set(0)
    return {"status": "cleared"}
