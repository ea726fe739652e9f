"""Upstream response shapes, one schema per provider family.

Only the fields we read are declared; everything else in the payload is
ignored. All fields are optional so a partial payload still validates and the
caller can fall back to placeholder text.
"""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class GeminiPart(BaseModel):
    text: Optional[str] = None


class GeminiContent(BaseModel):
    parts: List[GeminiPart] = Field(default_factory=list)


class GeminiCandidate(BaseModel):
    content: Optional[GeminiContent] = None


class GeminiResponse(BaseModel):
    candidates: List[GeminiCandidate] = Field(default_factory=list)

    def first_text(self) -> Optional[str]:
        if not self.candidates:
            return None
        content = self.candidates[0].content
        if content is None or not content.parts:
            return None
        return content.parts[0].text or None


class ChatMessage(BaseModel):
    role: Optional[str] = None
    content: Optional[str] = None


class ChatChoice(BaseModel):
    message: Optional[ChatMessage] = None


class ChatCompletionResponse(BaseModel):
    """OpenAI chat completion; Groq speaks the same dialect."""

    choices: List[ChatChoice] = Field(default_factory=list)

    def first_text(self) -> Optional[str]:
        if not self.choices or self.choices[0].message is None:
            return None
        content = self.choices[0].message.content
        if content is None:
            return None
        return content.strip() or None
