"""FastAPI main application."""

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .config import settings
from .actions import ActionExecutor, action_registry
from .db import (
    DatabaseConnection,
    ActionLogRepository,
    AssistantRepository,
    ConversationRepository,
    MessageRepository,
    ProjectRepository
)
from .services import AnthropicModelClient, ChatOrchestrator
from .utils.logger import init_app_logger
from .api.v1 import assistant, projects


# Initialize logger
logger = init_app_logger(settings)


def _masked(secret) -> str:
    if not secret:
        return "Not set"
    return secret[:4] + "..." + secret[-4:] if len(secret) > 12 else "***"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.

    Args:
        app: FastAPI application instance
    """
    # Startup
    logger.info("=" * 70)
    logger.info("Starting Project Assistant...")
    logger.info("=" * 70)

    logger.info("")
    logger.info("📡 Server Configuration:")
    logger.info(f"  Host: {settings.host}")
    logger.info(f"  Port: {settings.port}")
    logger.info(f"  Debug: {settings.debug}")
    logger.info(f"  Log Level: {settings.log_level}")
    logger.info(f"  Log File: {settings.log_file}")
    logger.info(f"  Database: {settings.database_path}")

    logger.info("")
    logger.info("🤖 Model Configuration:")
    logger.info(f"  Default Model: {settings.default_model}")
    logger.info(f"  Max Tokens: {settings.default_max_tokens}")
    logger.info(f"  History Window: {settings.max_history_messages} messages")
    logger.info(f"  API Key: {_masked(settings.anthropic_api_key)}")

    logger.info("")
    logger.info("🔌 Integrations:")
    logger.info(f"  Vercel Token: {_masked(settings.vercel_token)}")
    logger.info(f"  Supabase URL: {settings.supabase_url or 'Not set'}")
    logger.info(f"  Actions: {', '.join(action_registry.names())}")

    db_conn = DatabaseConnection(settings.database_path)
    http_client = httpx.AsyncClient(timeout=settings.http_timeout)
    model_client = AnthropicModelClient(settings.anthropic_api_key, timeout=settings.model_timeout)

    executor = ActionExecutor(ActionLogRepository(db_conn.conn), action_registry)
    orchestrator = ChatOrchestrator(
        assistants=AssistantRepository(db_conn.conn),
        conversations=ConversationRepository(db_conn.conn),
        messages=MessageRepository(db_conn.conn),
        projects=ProjectRepository(db_conn.conn),
        model_client=model_client,
        executor=executor,
        action_settings=settings.action_settings(),
        http_client=http_client,
        default_model=settings.default_model,
        default_max_tokens=settings.default_max_tokens,
        max_history_messages=settings.max_history_messages
    )

    # Set dependencies in API modules
    assistant.db_conn = db_conn
    assistant.orchestrator = orchestrator
    projects.db_conn = db_conn

    logger.info("")
    logger.info("=" * 70)
    logger.info("✅ Project Assistant started successfully!")
    logger.info(f"📍 Access at: http://{settings.host}:{settings.port}")
    logger.info(f"📚 API Docs: http://{settings.host}:{settings.port}/docs")
    logger.info("=" * 70)

    yield

    # Shutdown
    logger.info("")
    logger.info("Shutting down Project Assistant...")

    assistant.orchestrator = None
    assistant.db_conn = None
    projects.db_conn = None

    await model_client.close()
    await http_client.aclose()
    db_conn.close()

    logger.info("✅ Project Assistant shut down successfully")


# Create FastAPI application
app = FastAPI(
    title="Project Assistant",
    description="Per-project conversational assistant with audited operational actions",
    version=__version__,
    lifespan=lifespan
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(assistant.router)
app.include_router(projects.router)


@app.get("/health")
async def health():
    """
    Simple health check endpoint.

    Returns:
        Health status
    """
    return {
        "status": "healthy",
        "service": "Project Assistant",
        "version": __version__
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "project_assistant.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
