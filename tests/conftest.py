"""Shared test fixtures and fakes.

The fakes stand in for the chat model and the publish driver so the
pipeline can be exercised without network access or real delays.
"""
import re
from typing import Callable, List, Optional

import pytest
from langchain_core.messages import AIMessage

from models import PublishResult, TweetOptions, TwitterCredentials
from publish_retry import RetryConfig
from twitter_session import PublishSession

META_HEADER = "You are an expert at creating effective prompts"


async def no_sleep(seconds: float) -> None:
    return None


class SleepRecorder:
    """Async sleep replacement that records requested delays."""

    def __init__(self):
        self.calls: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


class FakeChatModel:
    """Chat model double: records prompts, answers through a responder."""

    def __init__(self, responder: Callable[[str], str]):
        self.responder = responder
        self.prompts: List[str] = []

    async def ainvoke(self, prompt: str) -> AIMessage:
        self.prompts.append(prompt)
        return AIMessage(content=self.responder(prompt))

    def meta_prompts(self, role: str) -> List[str]:
        return [p for p in self.prompts if p.startswith(META_HEADER) and f"generate a {role} tweet" in p]


def thread_responder(hook_text: str = "Big news about AI today", cta_text: str = "Follow for more!"):
    """Answer meta-prompts with a role marker and generation prompts with tweets."""
    followups = {"count": 0}

    def respond(prompt: str) -> str:
        match = re.search(r"generate a (\w+) tweet", prompt)
        if prompt.startswith(META_HEADER) and match:
            return f"WRITE-{match.group(1).upper()}"
        if prompt == "WRITE-HOOK":
            return hook_text
        if prompt == "WRITE-FOLLOWUP":
            followups["count"] += 1
            return f"Follow-up number {followups['count']}"
        if prompt == "WRITE-CTA":
            return cta_text
        raise AssertionError(f"Unexpected prompt: {prompt}")

    return respond


class ScriptedSession(PublishSession):
    """Publish session whose attempts follow a script.

    Each ``outcomes`` entry is consumed by one submit attempt: a string is
    used as the new post id, an exception is raised. Once the script runs
    out, ids are generated.
    """

    def __init__(
        self,
        outcomes: Optional[list] = None,
        login_ok: bool = True,
        max_attempts: int = 1,
        sleep_func=None,
    ):
        super().__init__(
            TwitterCredentials(username="tester", password="secret"),
            retry_config=RetryConfig(max_attempts=max_attempts, delay=2.0),
            sleep_func=sleep_func or no_sleep,
        )
        self.outcomes = list(outcomes or [])
        self.login_ok = login_ok
        self.submitted: List[TweetOptions] = []
        self.login_calls = 0
        self.logout_calls = 0

    async def _login(self) -> None:
        self.login_calls += 1
        if not self.login_ok:
            raise RuntimeError("login refused")

    async def _submit(self, options: TweetOptions) -> PublishResult:
        self.submitted.append(options)
        outcome = self.outcomes.pop(0) if self.outcomes else None
        if isinstance(outcome, Exception):
            raise outcome
        post_id = outcome or f"id{len(self.submitted)}"
        return PublishResult(success=True, post_id=post_id, url=f"https://twitter.com/tester/status/{post_id}")

    async def _logout(self) -> None:
        self.logout_calls += 1


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()
