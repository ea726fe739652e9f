from api import state
from integration.command_executor import CommandExecutor
from llm.llm_client import LLMClient
from routing.command_router import CommandRouter
from storage.conversation_memory import ConversationMemory
from storage.event_store import EventStore
from storage.settings_store import SettingsStore
from storage.task_store import TaskStore


def get_task_store() -> TaskStore:
    return state.task_store


def get_event_store() -> EventStore:
    return state.event_store


def get_conversation() -> ConversationMemory:
    return state.conversation


def get_settings_store() -> SettingsStore:
    return state.settings_store


def get_llm_client() -> LLMClient:
    return state.llm_client


def get_command_router() -> CommandRouter:
    return state.command_router


def get_executor() -> CommandExecutor:
    return state.executor
