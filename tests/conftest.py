from __future__ import annotations

from typing import List, Optional

import anyio
import pytest
from fastapi.testclient import TestClient

from codegenai.config import settings
from codegenai.services.conversation import ConversationStore, PendingInput
from codegenai.services.orchestrator import GenerationOrchestrator
from codegenai.services.session_manager import session_manager


SAMPLE_ANSWER = (
	"1. Brute Force Approach:\n```java\nclass Solution {}\n```\n\n"
	"2. Better Approach:\n```java\nclass Solution {}\n```\n\n"
	"3. Optimal Approach:\n```java\nclass Solution {}\n```\n\n"
	"4. Edge Cases to Remember:\n- empty array\n"
)


class FakeBackend:
	"""Scripted backend session: returns queued replies, raises queued errors, or waits on a gate."""

	def __init__(self, replies: Optional[List[object]] = None, *, delay: float = 0.0) -> None:
		self.replies: List[object] = list(replies or [])
		self.prompts: List[str] = []
		self.delay = delay
		self.gate: Optional[anyio.Event] = None
		self.closed = False

	async def send_message(self, prompt: str) -> str:
		self.prompts.append(prompt)
		if self.gate is not None:
			await self.gate.wait()
		if self.delay:
			await anyio.sleep(self.delay)
		reply = self.replies.pop(0) if self.replies else SAMPLE_ANSWER
		if isinstance(reply, BaseException):
			raise reply
		return reply

	def close(self) -> None:
		self.closed = True


@pytest.fixture
def anyio_backend():
	return "asyncio"


@pytest.fixture
def backend() -> FakeBackend:
	return FakeBackend()


@pytest.fixture
def make_orchestrator(backend):
	def _make(**kwargs) -> GenerationOrchestrator:
		store = kwargs.pop("store", None)
		if store is None:
			store = ConversationStore()
		pending = kwargs.pop("pending", None)
		if pending is None:
			pending = PendingInput()
		return GenerationOrchestrator(kwargs.pop("backend", backend), store, pending, **kwargs)

	return _make


@pytest.fixture
def client(monkeypatch, backend):
	monkeypatch.setattr(settings, "api_key", None)
	monkeypatch.setattr(session_manager, "_backend_factory", lambda: backend)

	from codegenai.main import app

	with TestClient(app) as test_client:
		yield test_client
