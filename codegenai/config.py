from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import List
from dotenv import load_dotenv


# Ensure .env is loaded eagerly
load_dotenv(dotenv_path=".env")


class Settings(BaseSettings):
	# Server
	cors_allow_origins: List[str] = [
		"http://localhost:3000",
		"http://localhost:5173",
		"http://127.0.0.1:3000",
		"http://127.0.0.1:5173",
	]

	# Auth
	api_key: str | None = None  # simple bearer key if provided

	# LLM Provider Selection
	llm_provider: str = "gemini"  # options: groq, gemini

	# Groq
	groq_api_key: str | None = None
	groq_model: str = "openai/gpt-oss-120b"
	groq_max_tokens: int = 4096
	answer_temperature: float = 1.0

	# Google Gemini
	gemini_api_key: str | None = None
	gemini_model: str = "gemini-1.5-flash"

	# Conversation
	default_language: str = "javascript"
	welcome_message: str = "Hello! Please provide a coding problem statement."
	backend_timeout_seconds: float | None = 60.0  # 0 or unset disables the deadline
	submit_policy: str = "queue"  # options: queue, reject

	# Dictation
	dictation_enabled: bool = True

	# Logging
	log_level: str = "INFO"
	analytics_path: str | None = None  # e.g., logs/codegen.jsonl

	@field_validator("answer_temperature")
	@classmethod
	def clamp_temperature(cls, v: float) -> float:
		return max(0.0, min(1.0, v))

	@field_validator("submit_policy")
	@classmethod
	def check_submit_policy(cls, v: str) -> str:
		v = (v or "").strip().lower()
		if v not in ("queue", "reject"):
			raise ValueError("submit_policy must be 'queue' or 'reject'")
		return v

	@field_validator("llm_provider", "default_language")
	@classmethod
	def lower_tag(cls, v: str) -> str:
		return (v or "").strip().lower()

	@field_validator("cors_allow_origins", mode="before")
	@classmethod
	def parse_cors_origins(cls, v):
		# Allow environment variable override
		if isinstance(v, str):
			return [origin.strip() for origin in v.split(",")]
		return v

	class Config:
		env_file = ".env"
		env_file_encoding = "utf-8"


settings = Settings()
