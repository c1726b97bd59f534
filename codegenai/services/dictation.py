from __future__ import annotations

import logging
from typing import Awaitable, Callable, Optional, Protocol

from codegenai.services.conversation import PendingInput


logger = logging.getLogger(__name__)

UNSUPPORTED_NOTICE = "Speech recognition is not supported in this browser."


class DictationUnavailable(Exception):
	"""The host has no speech recognition capability."""

	def __init__(self, notice: str = UNSUPPORTED_NOTICE) -> None:
		super().__init__(notice)
		self.notice = notice


class Recognizer(Protocol):
	"""Single-utterance speech engine. Results and end events come back via the bridge callbacks."""

	async def start(self) -> None: ...

	async def stop(self) -> None: ...


class DictationBridge:
	available = True

	def __init__(self, recognizer: Recognizer, pending: PendingInput) -> None:
		self._recognizer = recognizer
		self._pending = pending
		self._recording = False

	@property
	def is_recording(self) -> bool:
		return self._recording

	async def toggle(self) -> bool:
		"""Start or stop listening. The flag flips before the engine confirms."""
		was_recording = self._recording
		self._recording = not was_recording
		if was_recording:
			await self._recognizer.stop()
		else:
			await self._recognizer.start()
		return self._recording

	def on_result(self, transcript: str) -> str:
		self._pending.append_fragment(transcript)
		return self._pending.text

	def on_end(self) -> None:
		# Explicit stop, silence timeout and engine errors all end here
		self._recording = False


class UnavailableDictationBridge:
	available = False
	is_recording = False

	def __init__(self, notice: str = UNSUPPORTED_NOTICE) -> None:
		self.notice = notice

	async def toggle(self) -> bool:
		raise DictationUnavailable(self.notice)

	def on_result(self, transcript: str) -> str:
		raise DictationUnavailable(self.notice)

	def on_end(self) -> None:
		pass


def create_dictation_bridge(recognizer: Optional[Recognizer], pending: PendingInput) -> DictationBridge | UnavailableDictationBridge:
	"""Probe for a speech engine once and hand back the matching bridge."""
	if recognizer is None:
		logger.info("Dictation unavailable: no speech recognizer")
		return UnavailableDictationBridge()
	return DictationBridge(recognizer, pending)


class RemoteRecognizer:
	"""Speech engine that lives in the browser; start/stop are relayed as command frames."""

	def __init__(self, send_json: Callable[[dict], Awaitable[None]]) -> None:
		self._send_json = send_json

	async def start(self) -> None:
		await self._send_json({"type": "command", "action": "start"})

	async def stop(self) -> None:
		await self._send_json({"type": "command", "action": "stop"})
