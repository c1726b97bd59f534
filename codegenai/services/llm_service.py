from __future__ import annotations

import logging
from typing import List, Dict, Protocol

import anyio
from groq import Groq
try:
	import google.generativeai as genai
except Exception:
	genai = None

from codegenai.config import settings


logger = logging.getLogger(__name__)


class BackendError(Exception):
	"""Raised when the generative backend cannot produce an answer."""


class BackendUnavailable(BackendError):
	"""No provider is configured (missing key, unknown provider, SDK not installed)."""


class EmptyResponse(BackendError):
	pass


class BackendSession(Protocol):
	async def send_message(self, prompt: str) -> str: ...

	def close(self) -> None: ...


class GroqChatSession:
	"""Chat handle over the Groq completions API; keeps the turn history like a chat session."""

	def __init__(self, client: Groq, model: str, *, temperature: float, max_tokens: int) -> None:
		self._client = client
		self._model = model
		self._temperature = temperature
		self._max_tokens = max_tokens
		self._history: List[Dict[str, str]] = []

	async def send_message(self, prompt: str) -> str:
		messages = self._history + [{"role": "user", "content": prompt}]

		def _call() -> str:
			resp = self._client.chat.completions.create(
				model=self._model,
				messages=messages,
				temperature=self._temperature,
				max_tokens=self._max_tokens,
			)
			return resp.choices[0].message.content or ""

		text = await anyio.to_thread.run_sync(_call)
		if not text.strip():
			raise EmptyResponse("groq returned an empty completion")
		# Only successful turns become context for follow-ups
		self._history = messages + [{"role": "assistant", "content": text}]
		return text

	def close(self) -> None:
		self._history.clear()


class GeminiChatSession:
	def __init__(self, model_id: str) -> None:
		self._chat = genai.GenerativeModel(model_id).start_chat(history=[])

	async def send_message(self, prompt: str) -> str:
		def _call() -> str:
			resp = self._chat.send_message(prompt)
			return getattr(resp, "text", None) or (resp.candidates[0].content.parts[0].text if getattr(resp, "candidates", None) else "")

		text = await anyio.to_thread.run_sync(_call)
		if not (text or "").strip():
			raise EmptyResponse("gemini returned an empty response")
		return text

	def close(self) -> None:
		self._chat = None


class UnavailableSession:
	def __init__(self, reason: str) -> None:
		self._reason = reason

	async def send_message(self, prompt: str) -> str:
		raise BackendUnavailable(self._reason)

	def close(self) -> None:
		pass


class LLMService:
	def __init__(self) -> None:
		self._client: Groq | None = None

	def _ensure_client(self):
		provider = (settings.llm_provider or "gemini").lower()
		if provider == "groq":
			api_key = settings.groq_api_key
			if not api_key:
				self._client = None
				return None
			if self._client is None or not isinstance(self._client, Groq):
				self._client = Groq(api_key=api_key)
			return self._client
		elif provider == "gemini":
			if genai is None:
				return None
			api_key = settings.gemini_api_key
			if not api_key:
				return None
			# For gemini we return a configured module handle to keep usage simple
			genai.configure(api_key=api_key)
			return genai
		else:
			return None

	@property
	def enabled(self) -> bool:
		provider = (settings.llm_provider or "gemini").lower()
		if provider == "groq":
			return bool(settings.groq_api_key)
		if provider == "gemini":
			return genai is not None and bool(settings.gemini_api_key)
		return False

	def start_chat(self) -> BackendSession:
		"""Open a fresh chat handle for one conversation."""
		provider = (settings.llm_provider or "gemini").lower()
		client = self._ensure_client()
		if client is None:
			logger.warning("LLM provider %r is not configured; generations will fail", provider)
			return UnavailableSession(f"provider '{provider}' is not configured")
		if provider == "groq":
			return GroqChatSession(
				client,
				settings.groq_model,
				temperature=settings.answer_temperature,
				max_tokens=settings.groq_max_tokens,
			)
		return GeminiChatSession(settings.gemini_model)


llm_service = LLMService()
