import logging
from dataclasses import dataclass, field
from typing import Sequence

from darkhorse.core.records import (
    DataSet, HitRecord, HitStatus, RectificationRecord, SlotType,
)
from darkhorse.core.validation import rank_label, slot_type_for

logger = logging.getLogger(__name__)

MIN_LENGTH = 3
MIN_POSITIONAL = {SlotType.MILHAR: 3, SlotType.CENTENA: 2}

SAY_EXACT = "Ressonância absoluta. Meus cálculos colapsaram perfeitamente na realidade."
SAY_NEAR = "Aproximação por permutação detectada. Os dígitos estão corretos, o Oráculo está recalibrando a ordem."
SAY_NONE = "Ajustes assimilados. Minha inteligência preditiva está se refinando."


@dataclass
class ReconcileOutcome:
    hits: list[HitRecord] = field(default_factory=list)
    rectifications: list[RectificationRecord] = field(default_factory=list)


def classify(generated: str, actual: str, slot_type: SlotType) -> HitStatus | None:
    if generated == actual:
        return HitStatus.EXACT
    if sorted(generated) == sorted(actual):
        return HitStatus.NEAR
    matches = sum(1 for g, a in zip(generated, actual) if g == a)
    if matches >= MIN_POSITIONAL[slot_type]:
        return HitStatus.NEAR
    return None


def reconcile(actual_values: Sequence[str], generated: DataSet, now: int | None = None) -> ReconcileOutcome:
    out = ReconcileOutcome()
    stamp = {'timestamp': now} if now is not None else {}
    for idx, act in enumerate(actual_values):
        if not act or len(act) < MIN_LENGTH or idx >= len(generated):
            continue
        gen = ''.join(str(d) for d in generated[idx])
        slot = slot_type_for(idx)
        status = classify(gen, act, slot)
        if status is not None:
            out.hits.append(HitRecord(value=gen, type=slot, position=idx + 1, status=status, **stamp))
        out.rectifications.append(RectificationRecord(
            generated=gen, actual=act, type=slot, rank_label=rank_label(idx), **stamp))
    logger.info("reconciled %d values: %d hits", len(out.rectifications), len(out.hits))
    return out


def announcement(hits: Sequence[HitRecord]) -> str:
    if any(h.status == HitStatus.EXACT for h in hits):
        return SAY_EXACT
    if any(h.status == HitStatus.NEAR for h in hits):
        return SAY_NEAR
    return SAY_NONE
