from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Iterator, List, Optional


class Sender(str, Enum):
	USER = "user"
	ASSISTANT = "assistant"


@dataclass(frozen=True)
class Message:
	id: int
	content: str
	sender: Sender
	created_at: datetime


class ConversationStore:
	"""Append-only chat transcript. Ids start at 1 and follow append order."""

	def __init__(self) -> None:
		self._messages: List[Message] = []
		self._next_id = 1

	def append(self, content: str, sender: Sender) -> Message:
		message = Message(id=self._next_id, content=content, sender=Sender(sender), created_at=datetime.utcnow())
		self._messages.append(message)
		self._next_id += 1
		return message

	@property
	def last(self) -> Optional[Message]:
		return self._messages[-1] if self._messages else None

	def __len__(self) -> int:
		return len(self._messages)

	def __iter__(self) -> Iterator[Message]:
		return iter(list(self._messages))


class PendingInput:
	"""Text the user is composing; typed text and dictated fragments land here."""

	def __init__(self, text: str = "") -> None:
		self._text = text

	@property
	def text(self) -> str:
		return self._text

	def set(self, text: str) -> None:
		self._text = text or ""

	def append_fragment(self, fragment: str) -> None:
		self._text = self._text + " " + fragment

	def clear(self) -> None:
		self._text = ""
