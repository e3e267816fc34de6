"""Publish sessions for Twitter/X.

``PublishSession`` owns the session lifecycle and the retry policy; concrete
drivers only implement login, submit and logout. ``MockTwitterSession``
simulates a browser, ``PlaywrightTwitterSession`` drives a real one.
"""
import asyncio
import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Dict, List, Optional
from playwright.async_api import async_playwright
from config import TWITTER_DRIVER
from exceptions import InvalidArgumentError, PublishAttemptError
from models import PublishResult, TweetOptions, TwitterCredentials
from publish_retry import RetryConfig, RetryError, retry_async

logger = logging.getLogger("TwitterSession")

SleepFunc = Callable[[float], Awaitable[None]]


class PublishSession(ABC):
    """A stateful, authenticated connection to the publish backend.

    Created unauthenticated. ``initialize`` logs in (a no-op when already
    logged in) and ``close`` logs out; both are safe to call repeatedly.
    One session belongs to one thread-publish operation.
    """

    def __init__(
        self,
        credentials: TwitterCredentials,
        retry_config: Optional[RetryConfig] = None,
        sleep_func: Optional[SleepFunc] = None,
        headless: bool = True,
    ):
        self.credentials = credentials
        self.retry_config = retry_config or RetryConfig()
        self.headless = headless
        self._sleep = sleep_func or asyncio.sleep
        self._logged_in = False

    @property
    def is_logged_in(self) -> bool:
        return self._logged_in

    @abstractmethod
    async def _login(self) -> None:
        """Authenticate. Raise on failure."""

    @abstractmethod
    async def _submit(self, options: TweetOptions) -> PublishResult:
        """Publish one tweet. Raise on failure so the attempt is retried."""

    @abstractmethod
    async def _logout(self) -> None:
        """Release driver resources."""

    async def initialize(self) -> bool:
        if self._logged_in:
            return True
        try:
            logger.info("Initializing Twitter session for user: %s", self.credentials.username)
            await self._login()
        except Exception as e:
            logger.error("Failed to initialize Twitter session: %s", str(e))
            return False
        self._logged_in = True
        logger.info("Successfully logged in to Twitter")
        return True

    async def publish_one(self, options: TweetOptions) -> PublishResult:
        """Publish a single tweet with retries. Failures are returned, not raised."""
        if not self._logged_in and not await self.initialize():
            return PublishResult(success=False, error="Failed to initialize Twitter session")

        try:
            return await retry_async(self._submit, self.retry_config, self._sleep, options)
        except RetryError as e:
            logger.error("Giving up on tweet after %d attempts: %s", e.attempts, str(e.last_error))
            return PublishResult(success=False, error=str(e.last_error))

    async def close(self) -> None:
        if not self._logged_in:
            return
        logger.info("Closing Twitter session")
        try:
            await self._logout()
        except Exception as e:
            logger.error("Failed to close Twitter session: %s", str(e))
        finally:
            self._logged_in = False

    async def __aenter__(self) -> "PublishSession":
        await self.initialize()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()


class MockTwitterSession(PublishSession):
    """Simulated browser session. Posts are recorded in ``posted``."""

    def __init__(
        self,
        credentials: TwitterCredentials,
        retry_config: Optional[RetryConfig] = None,
        sleep_func: Optional[SleepFunc] = None,
        headless: bool = True,
        latency: float = 1.0,
    ):
        super().__init__(credentials, retry_config, sleep_func, headless)
        self.latency = latency
        self.posted: List[Dict[str, Any]] = []

    async def _login(self) -> None:
        await self._sleep(self.latency * 1.5)

    async def _submit(self, options: TweetOptions) -> PublishResult:
        logger.info("Posting tweet: %s...", options.text[:30])
        await self._sleep(self.latency)

        if options.media_files:
            logger.info("Uploading %d media files", len(options.media_files))
            await self._sleep(self.latency * 0.5 * len(options.media_files))

        if options.scheduled_time:
            logger.info("Scheduling tweet for %s", options.scheduled_time.isoformat())
            await self._sleep(self.latency * 0.5)

        tweet_id = f"tweet_{time.time_ns()}_{len(self.posted) + 1}"
        self.posted.append({"id": tweet_id, **options.model_dump()})
        return PublishResult(
            success=True,
            post_id=tweet_id,
            url=f"https://twitter.com/{self.credentials.username}/status/{tweet_id}"
        )

    async def _logout(self) -> None:
        await self._sleep(self.latency * 0.5)


class PlaywrightTwitterSession(PublishSession):
    """Publishes through the X web UI with a Playwright-driven Chromium."""

    BASE_URL = "https://x.com"
    USER_AGENT = 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/125.0.0.0 Safari/537.36'

    def __init__(
        self,
        credentials: TwitterCredentials,
        retry_config: Optional[RetryConfig] = None,
        sleep_func: Optional[SleepFunc] = None,
        headless: bool = True,
        timeout: int = 30000,
    ):
        super().__init__(credentials, retry_config, sleep_func, headless)
        self.timeout = timeout
        self._playwright = None
        self._browser = None
        self._page = None

    async def _login(self) -> None:
        self._playwright = await async_playwright().start()
        try:
            self._browser = await self._playwright.chromium.launch(
                headless=self.headless,
                args=['--disable-blink-features=AutomationControlled']
            )
            context = await self._browser.new_context(
                viewport={'width': 1280, 'height': 720},
                user_agent=self.USER_AGENT,
                extra_http_headers={'Accept-Language': 'en-US,en;q=0.9'}
            )
            page = await context.new_page()
            self._page = page

            await page.goto(f"{self.BASE_URL}/i/flow/login", wait_until='domcontentloaded', timeout=self.timeout)
            await page.fill('input[autocomplete="username"]', self.credentials.username, timeout=self.timeout)
            await page.click('button:has-text("Next")')
            await page.fill('input[name="password"]', self.credentials.password, timeout=self.timeout)
            await page.click('[data-testid="LoginForm_Login_Button"]')
            await page.wait_for_selector('[data-testid="SideNav_NewTweet_Button"]', timeout=self.timeout)
        except Exception:
            await self._logout()
            raise

    async def _submit(self, options: TweetOptions) -> PublishResult:
        page = self._page
        username = self.credentials.username

        if options.reply_to_id:
            await page.goto(f"{self.BASE_URL}/{username}/status/{options.reply_to_id}",
                            wait_until='domcontentloaded', timeout=self.timeout)
            await page.locator('article [data-testid="reply"]').first.click(timeout=self.timeout)
        else:
            await page.goto(f"{self.BASE_URL}/compose/post", wait_until='domcontentloaded', timeout=self.timeout)

        textbox = page.locator('[data-testid="tweetTextarea_0"]').first
        await textbox.click(timeout=self.timeout)
        await textbox.fill(options.text)

        if options.media_files:
            logger.info("Uploading %d media files", len(options.media_files))
            await page.set_input_files('input[data-testid="fileInput"]', options.media_files)
            await page.wait_for_timeout(1000 * len(options.media_files))

        if options.scheduled_time:
            logger.warning("Scheduling is not supported by the browser session, posting now")

        async with page.expect_response(lambda r: "CreateTweet" in r.url, timeout=self.timeout) as response_info:
            await page.locator('[data-testid="tweetButton"]').first.click()
        response = await response_info.value
        if not response.ok:
            raise PublishAttemptError(f"CreateTweet returned HTTP {response.status}")

        data = await response.json()
        try:
            tweet_id = data["data"]["create_tweet"]["tweet_results"]["result"]["rest_id"]
        except (KeyError, TypeError) as e:
            raise PublishAttemptError(f"Unexpected CreateTweet response: {str(e)}") from e

        return PublishResult(
            success=True,
            post_id=tweet_id,
            url=f"{self.BASE_URL}/{username}/status/{tweet_id}"
        )

    async def _logout(self) -> None:
        try:
            if self._browser:
                await self._browser.close()
        finally:
            playwright = self._playwright
            self._browser = None
            self._playwright = None
            self._page = None
            if playwright:
                await playwright.stop()


SESSION_DRIVERS = {
    "mock": MockTwitterSession,
    "playwright": PlaywrightTwitterSession,
}


def create_session(
    credentials: TwitterCredentials,
    headless: bool = True,
    driver: Optional[str] = None,
) -> PublishSession:
    """Build a publish session for the configured driver."""
    driver = (driver or TWITTER_DRIVER).lower()
    if driver not in SESSION_DRIVERS:
        raise InvalidArgumentError(f"Unknown Twitter driver '{driver}'. Use one of: {', '.join(SESSION_DRIVERS)}")
    return SESSION_DRIVERS[driver](credentials, headless=headless)
