"""Main FastAPI application for the Tweet Thread Generator."""
from contextlib import asynccontextmanager
from typing import Callable, Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from config import create_llm, setup_logging
from llm_client import GenerativeTextClient
from routes import router
from thread_generator import ThreadGenerator
from twitter_session import PublishSession, create_session


def create_app(
    thread_generator: Optional[ThreadGenerator] = None,
    session_factory: Callable[..., PublishSession] = create_session,
) -> FastAPI:
    """Create the application. Collaborators not supplied are built at startup."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging()
        # The LLM client is created once per process and shared read-only
        if getattr(app.state, "thread_generator", None) is None:
            app.state.thread_generator = ThreadGenerator(GenerativeTextClient(create_llm()))
        yield

    app = FastAPI(
        title="Tweet Thread Generator API",
        description="API for analyzing tweet style, generating Twitter threads and posting them as reply chains",
        version="1.0.0",
        lifespan=lifespan
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Allow all origins
        allow_credentials=True,
        allow_methods=["*"],  # Allow all methods
        allow_headers=["*"],  # Allow all headers
    )

    app.state.thread_generator = thread_generator
    app.state.session_factory = session_factory

    # Include router
    app.include_router(router)
    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
