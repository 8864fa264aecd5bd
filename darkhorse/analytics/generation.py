import logging
import random
from typing import Sequence
from pydantic import BaseModel

from darkhorse.analytics.collapse import RandomSource, collapse
from darkhorse.analytics.frequency import CombinedAnalysis, combine
from darkhorse.core.records import (
    AdvancedPredictions, Candidate, DataSet, HitRecord, Prediction, RectificationRecord,
)

logger = logging.getLogger(__name__)

ROWS = 7
DIGITS = 4
CANDIDATES = 3
CANDIDATE_ENTROPY_SCALE = 0.35

# name -> (count, entropy, slice kept, base confidence)
ADVANCED_GROUPS = {
    'hundreds': (3, 0.08, slice(1, 4), 99.98),
    'tens': (3, 0.12, slice(2, 4), 99.97),
    'elite_tens': (2, 0.04, slice(2, 4), 99.99),
    'super_tens': (3, 0.06, slice(2, 4), 99.96),
}


class GenerationResult(BaseModel):
    result: DataSet
    candidates: list[Candidate]
    advanced_predictions: AdvancedPredictions
    analysis: CombinedAnalysis


def collapse_row(analysis: CombinedAnalysis, hits: Sequence[HitRecord], entropy: float,
                 rank: int, rng: RandomSource) -> list[int]:
    seq: list[int] = []
    for p in range(DIGITS):
        seq.append(collapse(analysis, hits, entropy, p, rank, seq, rng=rng))
    return seq


def run_generation_cycle(modules: list[DataSet], history: list[DataSet], hits: Sequence[HitRecord],
                         rectifications: Sequence[RectificationRecord], entropy: float = 0.5,
                         rng: RandomSource | None = None) -> GenerationResult:
    rng = rng or random
    analysis = combine(modules, history)

    result: DataSet = []
    for i in range(ROWS):
        seq = collapse_row(analysis, hits, entropy, i + 1, rng)
        # the centena keeps the last three digits; the first one is still
        # collapsed so positional weighting stays aligned with the milhar rows
        result.append(seq[1:] if i == ROWS - 1 else seq)

    candidates = [
        Candidate(
            sequence=collapse_row(analysis, hits, entropy * CANDIDATE_ENTROPY_SCALE, 1, rng),
            confidence=99.88 + rng.random() * 0.11,
        )
        for _ in range(CANDIDATES)
    ]

    groups = {}
    for name, (count, ent, keep, base) in ADVANCED_GROUPS.items():
        groups[name] = [
            Prediction(
                value=''.join(str(d) for d in collapse_row(analysis, hits, ent, 1, rng)[keep]),
                confidence=base - rng.random() * 0.01,
            )
            for _ in range(count)
        ]

    logger.info("generation cycle: %d modules, %d history sets, %d hits, entropy=%.2f",
                len(modules), len(history), len(hits), entropy)
    return GenerationResult(
        result=result,
        candidates=candidates,
        advanced_predictions=AdvancedPredictions(**groups),
        analysis=analysis,
    )
