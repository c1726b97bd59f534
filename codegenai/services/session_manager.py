from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Optional
import uuid
import asyncio
import logging

from codegenai.config import settings
from codegenai.services.conversation import ConversationStore, PendingInput, Sender
from codegenai.services.dictation import DictationBridge, Recognizer, UnavailableDictationBridge, create_dictation_bridge
from codegenai.services.llm_service import BackendSession, llm_service
from codegenai.services.orchestrator import GenerationOrchestrator
from codegenai.services.prompt_builder import TargetLanguage


logger = logging.getLogger(__name__)


@dataclass
class ChatSession:
	session_id: str
	backend: BackendSession
	store: ConversationStore
	pending: PendingInput
	orchestrator: GenerationOrchestrator
	dictation: DictationBridge | UnavailableDictationBridge = field(default_factory=UnavailableDictationBridge)
	created_at: datetime = field(default_factory=datetime.utcnow)
	last_update: datetime = field(default_factory=datetime.utcnow)

	@property
	def language(self) -> TargetLanguage:
		return self.orchestrator.language

	def touch(self) -> None:
		self.last_update = datetime.utcnow()

	def attach_recognizer(self, recognizer: Optional[Recognizer]) -> DictationBridge | UnavailableDictationBridge:
		self.dictation = create_dictation_bridge(recognizer, self.pending)
		return self.dictation

	def detach_recognizer(self) -> None:
		self.dictation = UnavailableDictationBridge()

	def close(self) -> None:
		self.detach_recognizer()
		self.backend.close()


class SessionManager:
	"""In-memory registry of chat sessions; nothing survives a restart."""

	def __init__(self, backend_factory: Optional[Callable[[], BackendSession]] = None) -> None:
		self._sessions: Dict[str, ChatSession] = {}
		self._lock = asyncio.Lock()
		self._backend_factory = backend_factory or llm_service.start_chat

	async def create_session(self, language: Optional[TargetLanguage | str] = None) -> ChatSession:
		async with self._lock:
			session_id = str(uuid.uuid4())
			store = ConversationStore()
			if settings.welcome_message:
				store.append(settings.welcome_message, Sender.ASSISTANT)
			pending = PendingInput()
			backend = self._backend_factory()
			orchestrator = GenerationOrchestrator(
				backend,
				store,
				pending,
				language=language or settings.default_language,
				timeout=settings.backend_timeout_seconds,
				policy=settings.submit_policy,
			)
			state = ChatSession(
				session_id=session_id,
				backend=backend,
				store=store,
				pending=pending,
				orchestrator=orchestrator,
			)
			self._sessions[session_id] = state
			logger.info("Created session %s", session_id)
			return state

	async def get(self, session_id: str) -> Optional[ChatSession]:
		return self._sessions.get(session_id)

	async def get_required(self, session_id: str) -> ChatSession:
		state = await self.get(session_id)
		if state is None:
			raise KeyError("session not found")
		return state

	async def list_sessions(self) -> List[dict]:
		"""Return lightweight session summaries for frontend lists."""
		items: List[dict] = []
		for s in self._sessions.values():
			items.append({
				"session_id": s.session_id,
				"last_update": s.last_update,
				"message_count": len(s.store),
				"language": s.language,
				"preview": s.store.last.content[:80] if s.store.last else "",
			})
		# Newest first
		items.sort(key=lambda x: x["last_update"], reverse=True)
		return items

	async def delete_session(self, session_id: str) -> bool:
		"""Tear down a session and release its backend handle. Returns True if deleted."""
		async with self._lock:
			state = self._sessions.pop(session_id, None)
			if state is None:
				return False
			state.close()
			logger.info("Deleted session %s", session_id)
			return True

	async def close_all(self) -> None:
		async with self._lock:
			for state in self._sessions.values():
				state.close()
			self._sessions.clear()


session_manager = SessionManager()
