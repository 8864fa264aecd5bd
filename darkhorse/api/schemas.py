from pydantic import BaseModel, Field
from typing import Optional

from darkhorse.analytics.generation import GenerationResult
from darkhorse.chat import ChatMessage
from darkhorse.core.records import HitStatus, SlotType


class ModuleIn(BaseModel):
    values: list[str] = Field(min_length=7, max_length=7)


class SettingsIn(BaseModel):
    entropy: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    voice_enabled: Optional[bool] = None


class HitIn(BaseModel):
    value: str
    type: SlotType
    position: int = Field(ge=1, le=7)
    status: HitStatus = HitStatus.EXACT


class RectifyIn(BaseModel):
    generated: str
    actual: str
    type: SlotType
    rank_label: str


class ChatIn(BaseModel):
    messages: list[ChatMessage] = Field(min_length=1)


class GenerateOut(BaseModel):
    generation: GenerationResult
    warnings: list[str]
    speech: list[str]


class ChatOut(BaseModel):
    reply: str
    speech: list[str]
