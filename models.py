"""Data models for the Tweet Thread Generator API."""
from datetime import datetime
from enum import Enum
from typing import List, Optional, Dict, Any
from pydantic import BaseModel, Field

class ContentType(str, Enum):
    """Primary content type detected in a tweet."""
    PROMOTIONAL = "promotional"
    EDUCATIONAL = "educational"
    STORYTELLING = "storytelling"
    QUESTION = "question"
    STATISTIC = "statistic"
    GENERAL = "general"

class PromptRole(str, Enum):
    """Role of a tweet within a thread."""
    HOOK = "hook"
    FOLLOWUP = "followup"
    CTA = "cta"

class Formatting(BaseModel):
    """Formatting patterns detected in a tweet."""
    uses_bullet_points: bool = False
    uses_numbered_list: bool = False
    uses_all_caps: bool = False
    uses_bold: bool = False
    uses_italics: bool = False
    uses_line_breaks: bool = False

    class Config:
        frozen = True

class StyleProfile(BaseModel):
    """Structural and stylistic fingerprint of a tweet."""
    hook: str = ""
    emoji_count: int = 0
    emojis: str = ""
    has_cta: bool = False
    has_media_reference: bool = False
    content_type: ContentType = ContentType.GENERAL
    sentence_count: int = 0
    avg_sentence_length: float = 0.0
    formatting: Formatting = Field(default_factory=Formatting)
    tweet_length: int = 0

    class Config:
        frozen = True

class StyleOverrides(BaseModel):
    """Style preferences supplied by the caller."""
    emoji_count: Optional[int] = None
    uses_bullet_points: Optional[bool] = None
    avg_sentence_length: Optional[float] = None
    content_type: Optional[ContentType] = None

    class Config:
        # Allow extra fields such as "tone"
        extra = "allow"

class GenerationRequest(BaseModel):
    """Context for generating one tweet of a thread."""
    role: PromptRole
    topic: str
    style: Optional[Dict[str, Any]] = None
    hook_text: Optional[str] = None
    previous_text: Optional[str] = None
    position: Optional[int] = None
    cta_types: List[str] = Field(default_factory=list)

class ThreadOptions(BaseModel):
    """Options for generating a thread."""
    follow_up_count: int = 3
    include_cta: bool = True
    style: Optional[StyleOverrides] = None

class TextResult(BaseModel):
    """Result of a single language model completion."""
    text: str
    degraded: bool = False
    error: Optional[str] = None

class TweetOptions(BaseModel):
    """A single publish request."""
    text: str
    reply_to_id: Optional[str] = None
    media_files: List[str] = Field(default_factory=list)
    scheduled_time: Optional[datetime] = None

class PublishOptions(BaseModel):
    """Options for publishing a whole thread."""
    media_files_by_index: Dict[int, List[str]] = Field(default_factory=dict)
    scheduled_time: Optional[datetime] = None

class PublishResult(BaseModel):
    """Outcome of publishing one tweet."""
    success: bool
    post_id: Optional[str] = None
    url: Optional[str] = None
    error: Optional[str] = None

class TwitterCredentials(BaseModel):
    """Login credentials for the publish backend."""
    username: str = ""
    password: str = ""

    def is_complete(self) -> bool:
        return bool(self.username and self.password)

class ApiRequest(BaseModel):
    """Request model for the action endpoint."""
    action: Optional[str] = None
    # analyze
    tweet_text: Optional[str] = None
    # generate
    topic: Optional[str] = None
    follow_up_count: Optional[int] = None
    style: Optional[StyleOverrides] = None
    include_cta: bool = True
    # post
    tweets: Optional[List[str]] = None
    credentials: Optional[TwitterCredentials] = None
    media_files: Dict[int, List[str]] = Field(default_factory=dict)
    scheduled_time: Optional[datetime] = None
    headless: bool = True

class StatusResponse(BaseModel):
    status: str

class AnalysisResponse(BaseModel):
    analysis: StyleProfile

class ThreadResponse(BaseModel):
    thread: List[str]

class PublishResponse(BaseModel):
    results: List[PublishResult]
