from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

from codegenai.services.conversation import Sender
from codegenai.services.orchestrator import GenerationState
from codegenai.services.prompt_builder import TargetLanguage


class MessageOut(BaseModel):
	id: int
	content: str
	sender: Sender
	created_at: datetime


class CreateSessionIn(BaseModel):
	language: Optional[TargetLanguage] = Field(default=None, description="Initial target language")


class SessionOut(BaseModel):
	session_id: str
	language: TargetLanguage
	state: GenerationState
	is_loading: bool
	is_recording: bool
	dictation_available: bool
	pending_input: str
	messages: List[MessageOut]


class SessionSummary(BaseModel):
	session_id: str
	last_update: datetime
	message_count: int
	language: TargetLanguage
	preview: str = ""


class SessionList(BaseModel):
	items: List[SessionSummary]


class MessageIn(BaseModel):
	session_id: str = Field(..., description="Session identifier")
	text: Optional[str] = Field(default=None, description="Message text; the pending input buffer is submitted when omitted")
	language: Optional[TargetLanguage] = Field(default=None, description="Switch the target language before submitting")


class SubmitOut(BaseModel):
	session_id: str
	outcome: str = Field(..., description="accepted|rejected|failed|busy|ignored")
	state: GenerationState
	messages: List[MessageOut]


class LanguageIn(BaseModel):
	language: TargetLanguage


class PendingInputIn(BaseModel):
	text: str = ""


class LanguageOption(BaseModel):
	value: TargetLanguage
	label: str


class LanguageList(BaseModel):
	default: TargetLanguage
	items: List[LanguageOption]
