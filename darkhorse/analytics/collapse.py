"""Resistance collapse: picks one digit for one output position.

Every digit starts at a resistance of 100. Resonance built from the frequency
tables and prior exact hits pulls resistance down, digits already used in the
row push it back up. The lowest-resistance digits form a window whose width
grows with entropy, and one of them is drawn at random.
"""
import math
import random
from typing import Protocol, Sequence

from darkhorse.analytics.frequency import CombinedAnalysis
from darkhorse.core.records import HitRecord, HitStatus

BASELINE = 100.0
W_GLOBAL = 0.35
W_POSITIONAL = 2.5
W_FIRST_RANK = 9.0
W_HIT = 35.0
W_REPEAT = 25.0
WINDOW_SCALE = 3.5


class RandomSource(Protocol):
    def random(self) -> float: ...


def hit_influence(hits: Sequence[HitRecord], rank: int, digit: int) -> int:
    ch = str(digit)
    return sum(1 for h in hits if h.position == rank and h.status == HitStatus.EXACT and ch in h.value)


def resistance_map(analysis: CombinedAnalysis, hits: Sequence[HitRecord], entropy: float,
                   pos: int, rank: int, previous: Sequence[int] = ()) -> list[float]:
    inp = analysis.input_analysis
    col = inp.col_digit_freq[pos] if 0 <= pos < len(inp.col_digit_freq) else {}
    out = [BASELINE] * 10
    for d in range(10):
        resonance = inp.global_digit_freq.get(d, 0) * W_GLOBAL
        resonance += col.get(d, 0) * W_POSITIONAL
        if rank == 1:
            resonance += inp.first_prize_freq.get(d, 0) * W_FIRST_RANK
        resonance += hit_influence(hits, rank, d) * W_HIT
        occurrences = list(previous).count(d)
        if occurrences:
            resonance -= (W_REPEAT * occurrences) * (1.2 - entropy)
        out[d] -= resonance / (1 + entropy)
    return out


def window_size(entropy: float) -> int:
    return max(1, math.floor(entropy * WINDOW_SCALE))


def collapse(analysis: CombinedAnalysis, hits: Sequence[HitRecord], entropy: float,
             pos: int, rank: int, previous: Sequence[int] = (),
             rng: RandomSource | None = None) -> int:
    rng = rng or random
    res = resistance_map(analysis, hits, entropy, pos, rank, previous)
    ranked = sorted(range(10), key=lambda d: res[d])
    idx = math.floor(rng.random() * window_size(entropy))
    if 0 <= idx < len(ranked):
        return ranked[idx]
    return ranked[0]
