"""
ElderEase Client

The front-end logic layer: session cache, API client, account flows,
tutorial pages with optimistic updates, and the helper chat.

    store = MemoryKeyValueStore()
    session = SessionStore(store)
    async with ElderEaseClient() as api:
        await AccountManager(api, session).login("alice@example.com", "pw123456")
        view = TutorialView(api, session, "2")
        await view.load()
        result = await view.next_step()
"""

from elderease.client.storage import KeyValueStore, MemoryKeyValueStore, RedisKeyValueStore
from elderease.client.session import SessionStore, SessionSnapshot
from elderease.client.api import ElderEaseClient
from elderease.client.account import AccountManager
from elderease.client.commands import OptimisticCommand, CommandResult
from elderease.client.tutorial_view import TutorialView, TutorialDashboard
from elderease.client.chat import ChatWidget, ComposeState, VoiceState, SpeechRecognizer
from elderease.client.notices import user_message

__all__ = [
    # Session cache
    "KeyValueStore",
    "MemoryKeyValueStore",
    "RedisKeyValueStore",
    "SessionStore",
    "SessionSnapshot",

    # Server access
    "ElderEaseClient",
    "AccountManager",

    # Pages
    "OptimisticCommand",
    "CommandResult",
    "TutorialView",
    "TutorialDashboard",
    "ChatWidget",
    "ComposeState",
    "VoiceState",
    "SpeechRecognizer",

    "user_message",
]
