from fastapi import APIRouter, HTTPException, Depends
from typing import Optional

from codegenai.config import settings
from codegenai.schemas import (
	CreateSessionIn, SessionOut, SessionList, SessionSummary, MessageIn, MessageOut, SubmitOut,
	LanguageIn, PendingInputIn, LanguageOption, LanguageList,
)
from codegenai.services.conversation import Message
from codegenai.services.orchestrator import SubmitOutcome
from codegenai.services.prompt_builder import TargetLanguage
from codegenai.services.session_manager import ChatSession, session_manager
from codegenai.utils.security import verify_api_key
from codegenai.utils.audit import auditor


router = APIRouter(dependencies=[Depends(verify_api_key)])


def _message_out(message: Message) -> MessageOut:
	return MessageOut(id=message.id, content=message.content, sender=message.sender, created_at=message.created_at)


def _session_out(state: ChatSession) -> SessionOut:
	return SessionOut(
		session_id=state.session_id,
		language=state.language,
		state=state.orchestrator.state,
		is_loading=state.orchestrator.is_loading,
		is_recording=state.dictation.is_recording,
		dictation_available=state.dictation.available,
		pending_input=state.pending.text,
		messages=[_message_out(m) for m in state.store],
	)


async def _get_session(session_id: str) -> ChatSession:
	try:
		return await session_manager.get_required(session_id)
	except KeyError:
		raise HTTPException(status_code=404, detail="Session not found. Create one via POST /api/session and reuse its session_id.")


@router.get("/languages", response_model=LanguageList)
async def list_languages():
	return LanguageList(
		default=TargetLanguage(settings.default_language),
		items=[LanguageOption(value=lang, label=lang.label) for lang in TargetLanguage],
	)


@router.post("/session", response_model=SessionOut)
async def create_session(payload: Optional[CreateSessionIn] = None):
	language = payload.language if payload else None
	state = await session_manager.create_session(language)
	await auditor.log({
		"type": "session_created",
		"session_id": state.session_id,
		"language": state.language.value,
	})
	return _session_out(state)


@router.get("/sessions", response_model=SessionList)
async def list_sessions():
	items_raw = await session_manager.list_sessions()
	return SessionList(items=[SessionSummary(**i) for i in items_raw])


@router.get("/session/{session_id}", response_model=SessionOut)
async def get_session(session_id: str):
	state = await _get_session(session_id)
	return _session_out(state)


@router.delete("/session/{session_id}")
async def delete_session(session_id: str):
	deleted = await session_manager.delete_session(session_id)
	if not deleted:
		raise HTTPException(status_code=404, detail="Session not found")
	await auditor.log({"type": "session_deleted", "session_id": session_id})
	return {"status": "ok", "deleted": True}


@router.put("/session/{session_id}/language", response_model=SessionOut)
async def set_language(session_id: str, payload: LanguageIn):
	state = await _get_session(session_id)
	state.orchestrator.language = payload.language
	state.touch()
	return _session_out(state)


@router.put("/session/{session_id}/input", response_model=SessionOut)
async def set_pending_input(session_id: str, payload: PendingInputIn):
	state = await _get_session(session_id)
	state.pending.set(payload.text)
	state.touch()
	return _session_out(state)


@router.post("/message", response_model=SubmitOut)
async def submit_message(payload: MessageIn):
	state = await _get_session(payload.session_id)
	orchestrator = state.orchestrator
	if payload.language is not None:
		orchestrator.language = payload.language

	if payload.text is None:
		result = await orchestrator.submit_pending()
	else:
		result = await orchestrator.submit(payload.text)
	state.touch()

	if result is None:
		return SubmitOut(session_id=state.session_id, outcome="ignored", state=orchestrator.state, messages=[])

	await auditor.log({
		"type": "submission",
		"session_id": state.session_id,
		"outcome": result.outcome.value,
		"language": orchestrator.language.value,
	})
	if result.outcome is SubmitOutcome.ACCEPTED:
		await auditor.log({
			"type": "generation",
			"session_id": state.session_id,
			"language": result.language.value,
			"elapsed": round(result.elapsed or 0.0, 3),
			"chars": len(result.messages[-1].content) if len(result.messages) > 1 else 0,
		})
	elif result.outcome is SubmitOutcome.FAILED:
		await auditor.log({
			"type": "generation_error",
			"session_id": state.session_id,
			"error_type": type(result.error).__name__,
			"error": str(result.error),
		})

	return SubmitOut(
		session_id=state.session_id,
		outcome=result.outcome.value,
		state=orchestrator.state,
		messages=[_message_out(m) for m in result.messages],
	)
