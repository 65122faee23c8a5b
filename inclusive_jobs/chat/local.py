"""
Local Chat - Direct messages kept in local storage.

Used when no remote data store is configured. The current user's
identity, the chat list and each chat's messages are persisted under
separate keys; chats are between one candidate and one employer.

Example:
    chat = LocalChatStore(storage)
    chat.save_self(ChatProfile("Asha", "asha@example.com", "candidate"))

    room = chat.start_chat("hr@brightdesign.example")
    chat.send(room.id, "Hello! Is the designer role still open?")
"""

from __future__ import annotations

import json
import logging
import uuid
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from inclusive_jobs.storage import (
    CHAT_LIST_KEY,
    CHAT_MESSAGES_PREFIX,
    CHAT_SELF_KEY,
    KeyValueStorage,
)

logger = logging.getLogger(__name__)

ROLES = ("candidate", "employer")


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class ChatProfile:
    """Who is using this device."""
    name: str
    email: str
    role: str = "candidate"


@dataclass
class ChatRoom:
    id: str
    candidate_email: str
    employer_email: str
    last_message: Optional[str] = None
    last_at: Optional[str] = None

    def involves(self, email: str) -> bool:
        return email in (self.candidate_email, self.employer_email)


@dataclass
class ChatMessage:
    id: str
    chat_id: str
    sender: str
    body: str
    created_at: str


class LocalChatStore:
    """Chat persistence without a backend."""

    def __init__(
        self,
        storage: KeyValueStorage,
        clock: Callable[[], str] = _now_iso,
        id_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
    ) -> None:
        self.storage = storage
        self._clock = clock
        self._new_id = id_factory

    def _load_list(self, key: str) -> list[dict[str, Any]]:
        raw = self.storage.get_item(key)
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning(f"Ignoring corrupt chat data under {key}")
            return []
        return [row for row in data if isinstance(row, dict)] if isinstance(data, list) else []

    # Identity

    def get_self(self) -> Optional[ChatProfile]:
        raw = self.storage.get_item(CHAT_SELF_KEY)
        if not raw:
            return None
        try:
            data = json.loads(raw)
            return ChatProfile(
                name=data["name"],
                email=data["email"],
                role=data.get("role", "candidate"),
            )
        except (json.JSONDecodeError, KeyError, TypeError):
            logger.warning("Ignoring corrupt chat profile")
            return None

    def save_self(self, profile: ChatProfile) -> ChatProfile:
        """Persist the current identity.

        Raises:
            ValueError: If name or email is blank, or the role is unknown
        """
        name = profile.name.strip()
        email = profile.email.strip()
        if not name or not email:
            raise ValueError("Chat profile needs a name and an email")
        if profile.role not in ROLES:
            raise ValueError(f"Unknown chat role '{profile.role}'. Expected one of: {', '.join(ROLES)}")

        profile = ChatProfile(name=name, email=email, role=profile.role)
        self.storage.set_item(CHAT_SELF_KEY, json.dumps(asdict(profile)))
        return profile

    def _require_self(self) -> ChatProfile:
        profile = self.get_self()
        if profile is None:
            raise ValueError("Save a chat profile first")
        return profile

    # Chats

    def _all_chats(self) -> list[ChatRoom]:
        rooms = []
        for row in self._load_list(CHAT_LIST_KEY):
            try:
                rooms.append(ChatRoom(**row))
            except TypeError:
                logger.warning(f"Skipping malformed chat row {row!r}")
        return rooms

    def _store_chats(self, rooms: list[ChatRoom]) -> None:
        self.storage.set_item(CHAT_LIST_KEY, json.dumps([asdict(r) for r in rooms]))

    def list_chats(self) -> list[ChatRoom]:
        """Chats the current identity takes part in, newest first."""
        profile = self.get_self()
        if profile is None:
            return []
        return [room for room in self._all_chats() if room.involves(profile.email)]

    def start_chat(self, peer_email: str) -> ChatRoom:
        """Open a new chat with another user.

        The current identity's role decides which side it takes.

        Raises:
            ValueError: If no profile is saved or the peer email is blank
        """
        profile = self._require_self()
        peer = peer_email.strip()
        if not peer:
            raise ValueError("Peer email is required")

        if profile.role == "candidate":
            candidate, employer = profile.email, peer
        else:
            candidate, employer = peer, profile.email

        room = ChatRoom(
            id=self._new_id(),
            candidate_email=candidate,
            employer_email=employer,
            last_at=self._clock(),
        )
        rooms = self._all_chats()
        rooms.insert(0, room)
        self._store_chats(rooms)
        return room

    # Messages

    def messages(self, chat_id: str) -> list[ChatMessage]:
        rows = self._load_list(f"{CHAT_MESSAGES_PREFIX}{chat_id}")
        result = []
        for row in rows:
            try:
                result.append(ChatMessage(**row))
            except TypeError:
                logger.warning(f"Skipping malformed message row in chat {chat_id}")
        return result

    def send(self, chat_id: str, body: str) -> ChatMessage:
        """Append a message and update the chat's last message.

        Raises:
            ValueError: If no profile is saved or the body is blank
            KeyError: If the chat does not exist
        """
        profile = self._require_self()
        text = body.strip()
        if not text:
            raise ValueError("Message body is empty")

        rooms = self._all_chats()
        room = next((r for r in rooms if r.id == chat_id), None)
        if room is None:
            raise KeyError(chat_id)

        message = ChatMessage(
            id=self._new_id(),
            chat_id=chat_id,
            sender=profile.email,
            body=text,
            created_at=self._clock(),
        )
        history = self.messages(chat_id)
        history.append(message)
        self.storage.set_item(
            f"{CHAT_MESSAGES_PREFIX}{chat_id}",
            json.dumps([asdict(m) for m in history]),
        )

        room.last_message = text
        room.last_at = message.created_at
        self._store_chats(rooms)
        return message
