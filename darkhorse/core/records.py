from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
import time
import uuid

# A DigitRow is 3 or 4 single digits; a DataSet is 7 rows shaped [4,4,4,4,4,4,3].
DigitRow = list[int]
DataSet = list[DigitRow]


class SlotType(str, Enum):
    MILHAR = "Milhar"
    CENTENA = "Centena"


class HitStatus(str, Enum):
    EXACT = "Exact"
    NEAR = "Near"


def _new_id() -> str:
    return str(uuid.uuid4())


def _now_ms() -> int:
    return int(time.time() * 1000)


class HitRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_id)
    value: str
    type: SlotType
    position: int = Field(ge=1, le=7)
    status: HitStatus
    timestamp: int = Field(default_factory=_now_ms)


class RectificationRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_id)
    generated: str
    actual: str
    type: SlotType
    rank_label: str
    timestamp: int = Field(default_factory=_now_ms)


class AppSettings(BaseModel):
    entropy: float = Field(default=0.45, ge=0.0, le=1.0)
    voice_enabled: bool = True


class Candidate(BaseModel):
    sequence: DigitRow
    confidence: float


class Prediction(BaseModel):
    value: str
    confidence: float


class AdvancedPredictions(BaseModel):
    hundreds: list[Prediction]
    tens: list[Prediction]
    elite_tens: list[Prediction]
    super_tens: list[Prediction]
