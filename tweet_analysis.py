"""Tweet style analysis: hooks, emojis, CTAs, content type and formatting."""
import re
from models import ContentType, Formatting, StyleProfile

EMOJI_PATTERN = re.compile(
    "["
    "\U0001F300-\U0001F5FF"  # symbols & pictographs
    "\U0001F600-\U0001F64F"  # emoticons
    "\U0001F680-\U0001F6FF"  # transport & map symbols
    "\U0001F900-\U0001F9FF"  # supplemental symbols and pictographs
    "\U0001FA70-\U0001FAFF"  # symbols and pictographs extended-A
    "\U00002600-\U000026FF"  # misc symbols
    "\U00002700-\U000027BF"  # dingbats
    "\U00002B50\U00002B55"
    "]"
)

CTA_PATTERNS = [
    re.compile(p, re.IGNORECASE)
    for p in (r"follow", r"share", r"like", r"retweet", r"comment",
              r"subscribe", r"join", r"click", r"check out", r"learn more")
]

MEDIA_PATTERN = re.compile(r"pic\.twitter|photo|image|video|watch|see below", re.IGNORECASE)

# Checked in order, first match wins
CONTENT_TYPE_PATTERNS = [
    (ContentType.PROMOTIONAL, re.compile(
        r"launch|new|introducing|announcement|released|now available|discount|offer|sale|limited time",
        re.IGNORECASE)),
    (ContentType.EDUCATIONAL, re.compile(
        r"learn|how to|guide|tutorial|tips|tricks|advice|explain|understanding", re.IGNORECASE)),
    (ContentType.STORYTELLING, re.compile(
        r"story|journey|experience|when I|started|learned|discovered|realized", re.IGNORECASE)),
    (ContentType.QUESTION, re.compile(
        r"\?|what if|have you|do you|should you|could you|would you", re.IGNORECASE)),
    (ContentType.STATISTIC, re.compile(
        r"\d+%|\d+ percent|survey|study|research|data shows|according to", re.IGNORECASE)),
]


def analyze_structure(tweet_text: str) -> dict:
    """Detect the hook, emojis, CTA phrases and media references."""
    hook = tweet_text.split("\n")[0]
    emojis = EMOJI_PATTERN.findall(tweet_text)

    return {
        "hook": hook,
        "emoji_count": len(emojis),
        "emojis": "".join(emojis),
        "has_cta": any(pattern.search(tweet_text) for pattern in CTA_PATTERNS),
        "has_media_reference": bool(MEDIA_PATTERN.search(tweet_text)),
    }


def analyze_content_type(tweet_text: str) -> ContentType:
    for content_type, pattern in CONTENT_TYPE_PATTERNS:
        if pattern.search(tweet_text):
            return content_type
    return ContentType.GENERAL


def analyze_style(tweet_text: str) -> dict:
    """Sentence statistics and formatting flags."""
    sentences = [s for s in re.split(r"[.!?]+", tweet_text) if s.strip()]
    avg_sentence_length = (
        sum(len(s.strip()) for s in sentences) / len(sentences) if sentences else 0.0
    )

    formatting = Formatting(
        uses_bullet_points=bool(re.search(r"•|\*|-|✅|✓|✔️|1\.|2\.|3\.", tweet_text)),
        uses_numbered_list=bool(re.search(r"1\.|2\.|3\.|\d+\)", tweet_text)),
        uses_all_caps=bool(re.search(r"[A-Z]{3,}", tweet_text)),
        uses_bold=bool(re.search(r"\*\*[^*]+\*\*", tweet_text)),
        uses_italics=bool(re.search(r"\*[^*]+\*|_[^_]+_", tweet_text)),
        uses_line_breaks=len(tweet_text.split("\n")) > 1,
    )

    return {
        "sentence_count": len(sentences),
        "avg_sentence_length": avg_sentence_length,
        "formatting": formatting,
        "tweet_length": len(tweet_text),
    }


def analyze_tweet(tweet_text: str) -> StyleProfile:
    """Build a complete style profile for a tweet. Pure and total."""
    return StyleProfile(
        **analyze_structure(tweet_text),
        content_type=analyze_content_type(tweet_text),
        **analyze_style(tweet_text),
    )
