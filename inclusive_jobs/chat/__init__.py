"""Direct messaging fallback for Inclusive Jobs."""

from inclusive_jobs.chat.local import ChatMessage, ChatProfile, ChatRoom, LocalChatStore

__all__ = [
    "ChatMessage",
    "ChatProfile",
    "ChatRoom",
    "LocalChatStore",
]
