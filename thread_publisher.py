"""Publishes a generated thread as a reply chain."""
import asyncio
import logging
from typing import Awaitable, Callable, List, Optional
from config import POST_DELAY
from exceptions import InvalidArgumentError
from models import PublishOptions, PublishResult, TweetOptions, TwitterCredentials
from twitter_session import PublishSession, create_session

logger = logging.getLogger("ThreadPublisher")


class ThreadPublisher:
    """Posts tweets in order, each one replying to the tweet before it.

    The session is supplied by the caller, who is also responsible for
    closing it.
    """

    def __init__(
        self,
        session: PublishSession,
        post_delay: float = POST_DELAY,
        sleep_func: Optional[Callable[[float], Awaitable[None]]] = None,
    ):
        self.session = session
        self.post_delay = post_delay
        self._sleep = sleep_func or asyncio.sleep

    async def publish_thread(self, tweets: List[str], options: Optional[PublishOptions] = None) -> List[PublishResult]:
        """Publish a thread and return one result per attempted tweet.

        Stops at the first failed tweet; the returned list is then shorter
        than ``tweets``. Already published tweets are not rolled back.
        """
        if not tweets:
            return []

        options = options or PublishOptions()
        results: List[PublishResult] = []
        previous_tweet_id: Optional[str] = None

        for i, text in enumerate(tweets):
            tweet_options = TweetOptions(
                text=text,
                reply_to_id=previous_tweet_id,
                scheduled_time=options.scheduled_time if i == 0 else None,
                media_files=options.media_files_by_index.get(i, []),
            )

            result = await self.session.publish_one(tweet_options)
            results.append(result)

            if not result.success:
                logger.error("Failed to post tweet #%d in thread: %s", i + 1, result.error)
                break

            previous_tweet_id = result.post_id

            # Rate limiting between tweets
            if i < len(tweets) - 1:
                await self._sleep(self.post_delay)

        logger.info("Published %d/%d tweets", sum(1 for r in results if r.success), len(tweets))
        return results


async def post_thread(
    tweets: List[str],
    credentials: TwitterCredentials,
    options: Optional[PublishOptions] = None,
    headless: bool = True,
    session_factory: Callable[..., PublishSession] = create_session,
) -> List[PublishResult]:
    """Validate input, open a session, publish the thread and close the session."""
    if not tweets:
        raise InvalidArgumentError("Tweets array is required")
    if credentials is None or not credentials.is_complete():
        raise InvalidArgumentError("Twitter credentials are required")

    session = session_factory(credentials, headless=headless)
    try:
        return await ThreadPublisher(session).publish_thread(tweets, options)
    finally:
        await session.close()
