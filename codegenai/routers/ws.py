from __future__ import annotations

import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status

from codegenai.config import settings
from codegenai.services.dictation import DictationUnavailable, RemoteRecognizer
from codegenai.services.session_manager import ChatSession, session_manager
from codegenai.utils.security import websocket_key_ok


router = APIRouter()
logger = logging.getLogger(__name__)


async def _serve_dictation(websocket: WebSocket, state: ChatSession) -> None:
	# Capability negotiation: the first frame says whether the browser has a speech engine
	hello = await websocket.receive_json()
	supported = (
		settings.dictation_enabled
		and isinstance(hello, dict)
		and hello.get("type") == "hello"
		and bool(hello.get("supported"))
	)
	bridge = state.attach_recognizer(RemoteRecognizer(websocket.send_json) if supported else None)
	await websocket.send_json({"type": "ready", "available": bridge.available})

	try:
		while True:
			msg = await websocket.receive_json()
			if not isinstance(msg, dict):
				await websocket.send_json({"type": "error", "detail": "frames must be JSON objects"})
				continue
			kind = msg.get("type")
			try:
				if kind == "toggle":
					recording = await bridge.toggle()
					await websocket.send_json({"type": "recording", "value": recording})
				elif kind == "result":
					text = bridge.on_result(str(msg.get("transcript") or ""))
					state.touch()
					await websocket.send_json({"type": "pending_input", "text": text})
				elif kind == "end":
					bridge.on_end()
					await websocket.send_json({"type": "recording", "value": False})
				else:
					await websocket.send_json({"type": "error", "detail": f"unknown frame type: {kind!r}"})
			except DictationUnavailable as exc:
				await websocket.send_json({"type": "error", "detail": exc.notice})
	finally:
		bridge.on_end()
		if state.dictation is bridge:
			state.detach_recognizer()


@router.websocket("/ws/dictation/{session_id}")
async def ws_dictation(websocket: WebSocket, session_id: str):
	protocol = websocket.headers.get("sec-websocket-protocol")
	if not websocket_key_ok(protocol):
		await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
		return
	state = await session_manager.get(session_id)
	if state is None:
		await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
		return
	await websocket.accept(subprotocol=protocol if settings.api_key else None)

	try:
		await _serve_dictation(websocket, state)
	except WebSocketDisconnect:
		logger.debug("Dictation socket closed for session %s", session_id)
