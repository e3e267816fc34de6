# routes.py
import logging
from fastapi import APIRouter, HTTPException, Request
from config import DEFAULT_FOLLOW_UP_COUNT
from exceptions import InvalidArgumentError
from models import (
    AnalysisResponse, ApiRequest, PublishOptions, PublishResponse,
    StatusResponse, ThreadOptions, ThreadResponse,
)
from thread_publisher import post_thread
from tweet_analysis import analyze_tweet

logger = logging.getLogger("API")

# Initialize router
router = APIRouter()

ACTIONS = ("analyze", "generate", "post")


@router.get("/api", response_model=StatusResponse)
async def status():
    return {"status": "API is running"}


@router.post("/api")
async def handle_action(body: ApiRequest, request: Request):
    """Dispatch an analyze, generate or post action."""
    try:
        if body.action == "analyze":
            if not body.tweet_text:
                raise InvalidArgumentError("Tweet text is required")
            return AnalysisResponse(analysis=analyze_tweet(body.tweet_text))

        if body.action == "generate":
            options = ThreadOptions(
                follow_up_count=DEFAULT_FOLLOW_UP_COUNT if body.follow_up_count is None else body.follow_up_count,
                include_cta=body.include_cta,
                style=body.style,
            )
            thread_generator = request.app.state.thread_generator
            thread = await thread_generator.generate_thread(body.topic or "", options)
            return ThreadResponse(thread=thread)

        if body.action == "post":
            results = await post_thread(
                body.tweets or [],
                body.credentials,
                PublishOptions(
                    media_files_by_index=body.media_files,
                    scheduled_time=body.scheduled_time,
                ),
                headless=body.headless,
                session_factory=request.app.state.session_factory,
            )
            for i, result in enumerate(results):
                logger.info(
                    "Tweet %d: %s %s", i + 1,
                    "Posted successfully" if result.success else "Failed",
                    result.url or result.error or ""
                )
            return PublishResponse(results=results)

    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("API error: %s", str(e))
        raise HTTPException(status_code=500, detail=str(e))

    raise HTTPException(
        status_code=400,
        detail=f"Invalid action. Use {', '.join(repr(a) for a in ACTIONS)}"
    )
