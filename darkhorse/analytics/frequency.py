from typing import Iterable
from pydantic import BaseModel, Field

COLUMNS = 4
FIRST_RANK_STRIDE = 7

FrequencyTable = dict[int, int]


def empty_table() -> FrequencyTable:
    return {d: 0 for d in range(10)}


class EvenOdd(BaseModel):
    evens: int = 0
    odds: int = 0


class AnalysisResult(BaseModel):
    row_sums: list[int] = Field(default_factory=list)
    row_even_odd: list[EvenOdd] = Field(default_factory=list)
    row_digit_freq: list[FrequencyTable] = Field(default_factory=list)
    col_digit_freq: list[FrequencyTable] = Field(default_factory=lambda: [empty_table() for _ in range(COLUMNS)])
    global_digit_freq: FrequencyTable = Field(default_factory=empty_table)
    first_prize_freq: FrequencyTable = Field(default_factory=empty_table)
    total_even_odd: EvenOdd = Field(default_factory=EvenOdd)


class HistoricalAnalysis(BaseModel):
    historical_digit_freq: FrequencyTable = Field(default_factory=empty_table)


class CombinedAnalysis(BaseModel):
    input_analysis: AnalysisResult
    historical_analysis: HistoricalAnalysis


def analyze_set(rows: Iterable[list[int]]) -> AnalysisResult:
    out = AnalysisResult()
    for idx, row in enumerate(rows):
        if not row:
            continue
        # rows 0, 7, 14, ... are the first-prize slot of their data set
        is_head = idx % FIRST_RANK_STRIDE == 0
        row_freq = empty_table()
        row_eo = EvenOdd()
        for col, d in enumerate(row):
            out.global_digit_freq[d] += 1
            row_freq[d] += 1
            if col < COLUMNS:
                out.col_digit_freq[col][d] += 1
            if is_head:
                out.first_prize_freq[d] += 1
            if d % 2 == 0:
                row_eo.evens += 1
            else:
                row_eo.odds += 1
        out.row_sums.append(sum(row))
        out.row_digit_freq.append(row_freq)
        out.row_even_odd.append(row_eo)
        out.total_even_odd.evens += row_eo.evens
        out.total_even_odd.odds += row_eo.odds
    return out


def flatten(data_sets: Iterable[list[list[int]]]) -> list[list[int]]:
    return [row for ds in data_sets for row in ds]


def combine(modules: list[list[list[int]]], history: list[list[list[int]]]) -> CombinedAnalysis:
    """Analyze the entered modules followed by the full history as one row list."""
    inp = analyze_set(flatten(list(modules) + list(history)))
    return CombinedAnalysis(
        input_analysis=inp,
        historical_analysis=HistoricalAnalysis(historical_digit_freq=dict(inp.global_digit_freq)),
    )
