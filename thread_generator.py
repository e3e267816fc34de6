"""Thread generation service.

Every tweet is produced in two steps: the model first writes a generation
prompt from a meta-prompt, then that prompt is used to write the tweet.
Follow-ups inherit the style detected in the hook tweet.
"""
import logging
from typing import Any, Callable, Dict, List, Optional
from config import DEFAULT_FOLLOW_UP_COUNT, MAX_TWEET_CHARS
from exceptions import InvalidArgumentError
from llm_client import GenerativeTextClient
from models import GenerationRequest, PromptRole, StyleOverrides, StyleProfile, ThreadOptions
from prompt_composer import PromptComposer
from tweet_analysis import analyze_tweet

logger = logging.getLogger("ThreadGenerator")

CTA_TYPES = [
    "Follow for more content",
    "Share the thread",
    "Like the thread",
    "Comment with questions",
    "Visit a website (hypothetical)",
]


def _emoji_instruction(emoji_count: int) -> str:
    return "Include emojis" if emoji_count > 0 else "Minimal emojis"


def _formatting_instruction(uses_bullet_points: bool) -> str:
    return "Use bullet points" if uses_bullet_points else "No bullet points"


def merge_style(overrides: Optional[StyleOverrides], hook_profile: StyleProfile) -> Dict[str, Any]:
    """Combine caller overrides with the style inferred from the hook tweet.

    Explicit override fields take precedence field by field.
    """
    explicit = overrides.model_dump(mode="json", exclude_none=True) if overrides else {}

    emoji_count = explicit.get("emoji_count", hook_profile.emoji_count)
    uses_bullet_points = explicit.get("uses_bullet_points", hook_profile.formatting.uses_bullet_points)

    inferred = {
        "content_type": hook_profile.content_type.value,
        "emoji_usage": _emoji_instruction(emoji_count),
        "formatting": _formatting_instruction(uses_bullet_points),
    }
    return {**inferred, **explicit}


class ThreadGenerator:
    """Service for generating a hook, follow-ups and an optional CTA tweet."""

    def __init__(
        self,
        client: GenerativeTextClient,
        composer: Optional[PromptComposer] = None,
        analyzer: Callable[[str], StyleProfile] = analyze_tweet,
        max_chars: int = MAX_TWEET_CHARS,
    ):
        self.client = client
        self.composer = composer or PromptComposer(max_chars=max_chars)
        self.analyzer = analyzer
        self.max_chars = max_chars

    async def generate_prompt(self, request: GenerationRequest) -> str:
        """Ask the model to write the generation prompt for one tweet."""
        meta_prompt = self.composer.compose(request)
        result = await self.client.complete(meta_prompt)
        logger.info("Generated %s prompt: %s", request.role.value, result.text)
        return result.text

    async def generate_tweet(self, request: GenerationRequest) -> str:
        generated_prompt = await self.generate_prompt(request)
        result = await self.client.complete(generated_prompt)

        # Not enforced, the limit is only part of the instructions
        if len(result.text) > self.max_chars:
            logger.warning(
                "Generated %s tweet is %d characters, over the %d limit",
                request.role.value, len(result.text), self.max_chars
            )
        return result.text

    async def generate_hook_tweet(self, topic: str, style: Optional[StyleOverrides] = None) -> str:
        style_dict = style.model_dump(mode="json", exclude_none=True) if style else None
        return await self.generate_tweet(GenerationRequest(
            role=PromptRole.HOOK,
            topic=topic,
            style=style_dict or None,
        ))

    async def generate_follow_up_tweets(
        self,
        topic: str,
        hook_tweet: str,
        num_tweets: int = DEFAULT_FOLLOW_UP_COUNT,
        style: Optional[Dict[str, Any]] = None
    ) -> List[str]:
        """Generate follow-ups one at a time, each aware of the tweet before it.

        Position numbering starts at 2, the hook is tweet #1.
        """
        follow_ups: List[str] = []
        for i in range(num_tweets):
            previous_tweet = follow_ups[-1] if follow_ups else hook_tweet
            tweet = await self.generate_tweet(GenerationRequest(
                role=PromptRole.FOLLOWUP,
                topic=topic,
                style=style,
                hook_text=hook_tweet,
                previous_text=previous_tweet,
                position=i + 2,
            ))
            follow_ups.append(tweet)
        return follow_ups

    async def generate_cta_tweet(self, topic: str, style: Optional[Dict[str, Any]] = None) -> str:
        return await self.generate_tweet(GenerationRequest(
            role=PromptRole.CTA,
            topic=topic,
            style=style,
            cta_types=CTA_TYPES,
        ))

    async def generate_thread(self, topic: str, options: Optional[ThreadOptions] = None) -> List[str]:
        """Generate a complete thread: hook, follow-ups and an optional CTA.

        Args:
            topic: Topic of the thread
            options: Follow-up count, CTA toggle and style overrides

        Returns:
            Tweets in generation order, which is also publish order

        Raises:
            InvalidArgumentError: If the topic is blank
        """
        if not topic or not topic.strip():
            raise InvalidArgumentError("Topic is required")

        options = options or ThreadOptions()
        follow_up_count = max(1, options.follow_up_count)
        logger.info(
            "Generating thread on '%s' with %d follow-ups (CTA: %s)",
            topic, follow_up_count, options.include_cta
        )

        hook_tweet = await self.generate_hook_tweet(topic, options.style)

        hook_profile = self.analyzer(hook_tweet)
        effective_style = merge_style(options.style, hook_profile)

        follow_ups = await self.generate_follow_up_tweets(topic, hook_tweet, follow_up_count, effective_style)
        thread = [hook_tweet, *follow_ups]

        if options.include_cta:
            thread.append(await self.generate_cta_tweet(topic, effective_style))

        logger.info("Generated thread of %d tweets", len(thread))
        return thread
