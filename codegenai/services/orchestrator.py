from __future__ import annotations

import logging
from contextlib import nullcontext
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

import anyio

from codegenai.services.classifier import is_coding_problem
from codegenai.services.conversation import ConversationStore, Message, PendingInput, Sender
from codegenai.services.llm_service import BackendSession
from codegenai.services.prompt_builder import TargetLanguage, build_prompt


logger = logging.getLogger(__name__)

INVALID_INPUT_TEXT = "Invalid input. Please provide a coding problem statement."
BACKEND_ERROR_TEXT = "Error: Could not process the request."
BUSY_TEXT = "Please wait for the current response to finish."

SUBMIT_POLICIES = ("queue", "reject")


class GenerationState(str, Enum):
	IDLE = "idle"
	AWAITING_RESPONSE = "awaiting_response"


class SubmitOutcome(str, Enum):
	ACCEPTED = "accepted"
	REJECTED = "rejected"
	FAILED = "failed"
	BUSY = "busy"


@dataclass(frozen=True)
class GenerationRequest:
	problem_text: str
	language: TargetLanguage


@dataclass
class SubmitResult:
	outcome: SubmitOutcome
	messages: List[Message] = field(default_factory=list)
	language: Optional[TargetLanguage] = None
	elapsed: Optional[float] = None
	error: Optional[BaseException] = None


class GenerationOrchestrator:
	"""Drives one conversation: gate the input, prompt the backend, record the reply.

	States are IDLE and AWAITING_RESPONSE. At most one generation is in flight;
	with the "queue" policy later submissions wait their turn, with "reject" they
	get a busy notice instead of a second backend call. Every accepted request
	is resolved exactly once, by success or by failure.
	"""

	def __init__(
		self,
		backend: BackendSession,
		store: ConversationStore,
		pending: PendingInput,
		*,
		language: TargetLanguage | str = TargetLanguage.JAVASCRIPT,
		timeout: Optional[float] = None,
		policy: str = "queue",
	) -> None:
		if policy not in SUBMIT_POLICIES:
			raise ValueError(f"unknown submit policy: {policy!r}")
		self._backend = backend
		self._store = store
		self._pending = pending
		self._language = TargetLanguage(language)
		self._timeout = timeout or None
		self._policy = policy
		self._state = GenerationState.IDLE
		self._active: Optional[GenerationRequest] = None
		self._flight = anyio.Lock()
		# Accepted submissions not yet finished; counted before the first await
		self._admitted = 0

	@property
	def state(self) -> GenerationState:
		return self._state

	@property
	def is_loading(self) -> bool:
		return self._state is GenerationState.AWAITING_RESPONSE

	@property
	def active_request(self) -> Optional[GenerationRequest]:
		return self._active

	@property
	def language(self) -> TargetLanguage:
		return self._language

	@language.setter
	def language(self, value: TargetLanguage | str) -> None:
		self._language = TargetLanguage(value)

	async def submit_pending(self) -> Optional[SubmitResult]:
		return await self.submit(self._pending.text)

	async def submit(self, raw_input: str) -> Optional[SubmitResult]:
		text = (raw_input or "").strip()
		if not text:
			return None

		appended = [self._store.append(text, Sender.USER)]
		self._pending.clear()

		if not is_coding_problem(text):
			logger.debug("Rejected non-coding input: %r", text[:80])
			appended.append(self._store.append(INVALID_INPUT_TEXT, Sender.ASSISTANT))
			return SubmitResult(SubmitOutcome.REJECTED, appended)

		if self._policy == "reject" and self._admitted:
			appended.append(self._store.append(BUSY_TEXT, Sender.ASSISTANT))
			return SubmitResult(SubmitOutcome.BUSY, appended)

		self._admitted += 1
		self._state = GenerationState.AWAITING_RESPONSE
		try:
			async with self._flight:
				request = GenerationRequest(problem_text=text, language=self._language)
				return await self._generate(request, appended)
		finally:
			self._admitted -= 1
			if not self._admitted and self._active is None:
				self._state = GenerationState.IDLE

	async def _generate(self, request: GenerationRequest, appended: List[Message]) -> SubmitResult:
		self._active = request
		self._state = GenerationState.AWAITING_RESPONSE
		prompt = build_prompt(request.problem_text, request.language)
		started = anyio.current_time()
		logger.info("Generating %s solution (%d chars of problem text)", request.language.value, len(request.problem_text))

		deadline = anyio.fail_after(self._timeout) if self._timeout else nullcontext()
		try:
			with deadline:
				reply = await self._backend.send_message(prompt)
		except anyio.get_cancelled_exc_class():
			self._resolve(request, error=RuntimeError("generation cancelled"))
			raise
		except Exception as exc:
			message = self._resolve(request, error=exc)
			if message is not None:
				appended.append(message)
			return SubmitResult(SubmitOutcome.FAILED, appended, request.language, anyio.current_time() - started, exc)

		message = self._resolve(request, text=reply)
		if message is not None:
			appended.append(message)
		return SubmitResult(SubmitOutcome.ACCEPTED, appended, request.language, anyio.current_time() - started)

	def on_backend_success(self, response_text: str) -> Message:
		"""Record the reply for the request in flight and return to IDLE."""
		request = self._require_active()
		return self._resolve(request, text=response_text)

	def on_backend_failure(self, error: BaseException) -> Message:
		"""Record the fixed error reply for the request in flight and return to IDLE."""
		request = self._require_active()
		return self._resolve(request, error=error)

	def _require_active(self) -> GenerationRequest:
		if self._active is None:
			raise RuntimeError("no generation in flight")
		return self._active

	def _resolve(self, request: GenerationRequest, *, text: Optional[str] = None, error: Optional[BaseException] = None) -> Optional[Message]:
		# A request resolved early (explicit callback) ignores its late backend result
		if self._active is not request:
			return None
		self._active = None
		# Submissions queued behind this one keep the machine busy
		self._state = GenerationState.IDLE if self._admitted <= 1 else GenerationState.AWAITING_RESPONSE
		if error is not None:
			logger.error("Generation failed for %s request", request.language.value, exc_info=error)
			return self._store.append(BACKEND_ERROR_TEXT, Sender.ASSISTANT)
		return self._store.append(text or "", Sender.ASSISTANT)
