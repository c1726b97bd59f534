from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse

from codegenai.config import settings
from codegenai.utils.logging import configure_logging
from codegenai.routers.chat import router as chat_router
from codegenai.routers.ws import router as ws_router
from codegenai.utils.audit import auditor
from codegenai.services.llm_service import llm_service
from codegenai.services.session_manager import session_manager


configure_logging(settings.log_level)
auditor.configure(settings.analytics_path)


@asynccontextmanager
async def lifespan(_: FastAPI):
	yield
	# Release every chat handle on shutdown
	await session_manager.close_all()


app = FastAPI(title="CodeGenAI Backend", version="0.1.0", lifespan=lifespan)

# CORS
app.add_middleware(
	CORSMiddleware,
	allow_origins=settings.cors_allow_origins,
	# Wildcard origins require credentials to be False per CORS spec
	allow_credentials=False if settings.cors_allow_origins == ["*"] else True,
	allow_methods=["*"],
	allow_headers=["*"],
	max_age=3600,
)


@app.get("/health")
async def health() -> JSONResponse:
	return JSONResponse({
		"status": "ok",
		"version": app.version,
		"llm": {"provider": settings.llm_provider, "enabled": llm_service.enabled},
	})


# Routers
app.include_router(chat_router, prefix="/api", tags=["chat"])
app.include_router(ws_router, tags=["dictation"])
