import re
import string

from darkhorse.core.records import DataSet, SlotType

MODULE_ROWS = 7
CENTENA_INDEX = 6


def is_valid_line(line: str, idx: int) -> bool:
    if idx == CENTENA_INDEX:
        return bool(re.fullmatch(r"[0-9]{3}", line or ""))
    return bool(re.fullmatch(r"[0-9]{4}", line or ""))


def is_valid_module(lines: list[str]) -> bool:
    return all(is_valid_line(line, idx) for idx, line in enumerate(lines))


def to_row(line: str) -> list[int]:
    # anything but ASCII 0-9 is dropped rather than rejected
    return [int(c) for c in (line or "") if c in string.digits]


def parse_modules(modules: list[list[str]]) -> tuple[list[DataSet], list[str]]:
    parsed: list[DataSet] = []
    errors: list[str] = []
    for n, lines in enumerate(modules, start=1):
        if not is_valid_module(lines):
            errors.append(f"Vetor {n} instável.")
        parsed.append([to_row(line) for line in lines])
    return parsed, errors


def slot_type_for(idx: int) -> SlotType:
    return SlotType.CENTENA if idx == CENTENA_INDEX else SlotType.MILHAR


def rank_label(idx: int) -> str:
    return f"{idx + 1}º PRÊMIO"
