"""Meta-prompt construction for thread generation.

The composer writes an instruction for the language model whose output is
itself the prompt used to generate a tweet.
"""
import json
from typing import List
from config import MAX_TWEET_CHARS
from models import GenerationRequest, PromptRole

ROLE_GUIDANCE = {
    PromptRole.HOOK: [
        "Open with a bold claim, surprising fact or provocative question",
        "Make readers want to expand the thread",
        "Keep it self-contained, it is the first thing people see",
    ],
    PromptRole.FOLLOWUP: [
        "Deliver one concrete point that builds on the previous tweet",
        "Keep the voice consistent with the hook tweet",
        "Do not repeat what the previous tweet already said",
    ],
    PromptRole.CTA: [
        "Close the thread with a single clear call to action",
        "Pick the call to action that fits the topic best",
        "Keep it short and friendly",
    ],
}


class PromptComposer:
    """Builds the meta-prompt for one tweet of a thread."""

    def __init__(self, max_chars: int = MAX_TWEET_CHARS):
        self.max_chars = max_chars

    def _context_lines(self, request: GenerationRequest) -> List[str]:
        lines = [f"- Topic: {request.topic}"]
        if request.style:
            lines.append(f"- Style preferences: {json.dumps(request.style, sort_keys=True, ensure_ascii=False)}")
        if request.hook_text:
            lines.append(f'- Hook tweet: "{request.hook_text}"')
        if request.previous_text:
            lines.append(f'- Previous tweet: "{request.previous_text}"')
        if request.position:
            lines.append(f"- This is tweet #{request.position} in the thread")
        if request.cta_types:
            lines.append(f"- Suggested calls to action: {', '.join(request.cta_types)}")
        return lines

    def compose(self, request: GenerationRequest) -> str:
        role = request.role.value
        context = "\n".join(self._context_lines(request))
        guidance = "\n".join(f"- {item}" for item in ROLE_GUIDANCE[request.role])

        return f"""You are an expert at creating effective prompts for generating Twitter content.
I need you to create a detailed prompt that will be used to generate a {role} tweet.

Here's the context:
{context}

A good {role} tweet should:
{guidance}

Your task is to create a prompt that will guide an AI to generate a compelling {role} tweet.
The prompt should include specific instructions about:
- The tone and style to use
- Any formatting considerations
- Character limits (tweets must be under {self.max_chars} characters)
- What makes a good {role} tweet

Return ONLY the prompt text, without any explanations or meta-commentary."""
