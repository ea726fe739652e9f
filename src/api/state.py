from integration.command_executor import CommandExecutor
from llm.llm_client import LLMClient
from routing.command_router import CommandRouter
from storage.conversation_memory import ConversationMemory
from storage.event_store import EventStore
from storage.settings_store import SettingsStore
from storage.task_store import TaskStore

# Process-wide singletons; last writer wins.
task_store = TaskStore()
event_store = EventStore()
conversation = ConversationMemory()
settings_store = SettingsStore()
llm_client = LLMClient()
command_router = CommandRouter()
executor = CommandExecutor(task_store, event_store)
