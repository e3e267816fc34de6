"""Tests for thread publishing."""

import logging
from datetime import datetime

import pytest
from conftest import ScriptedSession
from exceptions import InvalidArgumentError, PublishAttemptError
from models import PublishOptions, TwitterCredentials
from thread_publisher import ThreadPublisher, post_thread


class TestPublishThread:
    @pytest.mark.asyncio
    async def test_reply_chain(self, sleep_recorder):
        session = ScriptedSession(outcomes=["a", "b", "c"])
        results = await ThreadPublisher(session, sleep_func=sleep_recorder).publish_thread(["p0", "p1", "p2"])

        assert [r.post_id for r in results] == ["a", "b", "c"]
        assert [o.reply_to_id for o in session.submitted] == [None, "a", "b"]
        assert [o.text for o in session.submitted] == ["p0", "p1", "p2"]

    @pytest.mark.asyncio
    async def test_delay_between_tweets_only(self, sleep_recorder):
        session = ScriptedSession()
        publisher = ThreadPublisher(session, post_delay=1.0, sleep_func=sleep_recorder)
        await publisher.publish_thread(["p0", "p1", "p2"])
        assert sleep_recorder.calls == [1.0, 1.0]

    @pytest.mark.asyncio
    async def test_aborts_on_first_failure(self, sleep_recorder):
        session = ScriptedSession(
            outcomes=["a", PublishAttemptError("x"), PublishAttemptError("y"), PublishAttemptError("z")],
            max_attempts=3,
        )
        results = await ThreadPublisher(session, post_delay=1.0, sleep_func=sleep_recorder).publish_thread(["p0", "p1", "p2"])

        assert len(results) == 2
        assert results[0].success
        assert not results[1].success
        assert results[1].error == "z"
        assert "p2" not in [o.text for o in session.submitted]
        assert sleep_recorder.calls == [1.0]

    @pytest.mark.asyncio
    async def test_empty_thread_does_not_touch_session(self):
        session = ScriptedSession()
        assert await ThreadPublisher(session).publish_thread([]) == []
        assert session.login_calls == 0
        assert session.submitted == []

    @pytest.mark.asyncio
    async def test_schedule_and_media(self, sleep_recorder):
        scheduled = datetime(2030, 5, 1, 8, 30)
        session = ScriptedSession()
        options = PublishOptions(media_files_by_index={1: ["chart.png"]}, scheduled_time=scheduled)
        await ThreadPublisher(session, sleep_func=sleep_recorder).publish_thread(["p0", "p1", "p2"], options)

        assert [o.scheduled_time for o in session.submitted] == [scheduled, None, None]
        assert [o.media_files for o in session.submitted] == [[], ["chart.png"], []]

    @pytest.mark.asyncio
    async def test_publisher_leaves_session_open(self, sleep_recorder):
        session = ScriptedSession()
        await ThreadPublisher(session, sleep_func=sleep_recorder).publish_thread(["p0"])
        assert session.is_logged_in
        assert session.logout_calls == 0

    @pytest.mark.asyncio
    async def test_session_init_failure_in_first_result(self, sleep_recorder):
        session = ScriptedSession(login_ok=False)
        results = await ThreadPublisher(session, sleep_func=sleep_recorder).publish_thread(["p0", "p1"])
        assert len(results) == 1
        assert results[0].error == "Failed to initialize Twitter session"


class TestPostThread:
    CREDENTIALS = TwitterCredentials(username="tester", password="secret")

    @pytest.mark.asyncio
    async def test_rejects_empty_tweets(self):
        with pytest.raises(InvalidArgumentError):
            await post_thread([], self.CREDENTIALS)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("credentials", [
        None,
        TwitterCredentials(username="tester"),
        TwitterCredentials(password="secret"),
    ])
    async def test_rejects_incomplete_credentials(self, credentials):
        with pytest.raises(InvalidArgumentError):
            await post_thread(["p0"], credentials)

    @pytest.mark.asyncio
    async def test_closes_session_after_publishing(self):
        sessions = []

        def factory(credentials, headless=True):
            sessions.append(ScriptedSession())
            return sessions[-1]

        results = await post_thread(["p0"], self.CREDENTIALS, session_factory=factory)
        assert results[0].success
        assert sessions[0].logout_calls == 1
        assert not sessions[0].is_logged_in

    @pytest.mark.asyncio
    async def test_closes_session_on_error(self):
        session = ScriptedSession()

        async def broken_publish(options):
            raise KeyError("unexpected")

        session.publish_one = broken_publish
        await session.initialize()

        with pytest.raises(KeyError):
            await post_thread(["p0"], self.CREDENTIALS, session_factory=lambda c, headless=True: session)
        assert session.logout_calls == 1

    @pytest.mark.asyncio
    async def test_teardown_failure_keeps_results(self, caplog):
        class BrokenLogoutSession(ScriptedSession):
            async def _logout(self) -> None:
                await super()._logout()
                raise RuntimeError("browser already gone")

        session = BrokenLogoutSession(outcomes=["a", "b"])
        with caplog.at_level(logging.ERROR, logger="TwitterSession"):
            results = await post_thread(["p0", "p1"], self.CREDENTIALS, session_factory=lambda c, headless=True: session)

        assert [r.post_id for r in results] == ["a", "b"]
        assert all(r.success for r in results)
        assert session.logout_calls == 1
        assert not session.is_logged_in
        assert "Failed to close Twitter session: browser already gone" in caplog.text
