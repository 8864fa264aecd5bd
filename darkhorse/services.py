import logging
from dataclasses import dataclass
from typing import Optional

from darkhorse.analytics.collapse import RandomSource
from darkhorse.analytics.generation import GenerationResult, run_generation_cycle
from darkhorse.analytics.reconcile import ReconcileOutcome, announcement, reconcile
from darkhorse.chat import ChatClient, ChatMessage
from darkhorse.config import settings
from darkhorse.core.records import AppSettings, DataSet, HitRecord, HitStatus, RectificationRecord, SlotType
from darkhorse.core.state import AppState, empty_module, load_state, push_history, save_state
from darkhorse.core.validation import parse_modules, to_row
from darkhorse.db.store import Store
from darkhorse.speech import Speaker

logger = logging.getLogger(__name__)

SAY_START = "Manifestando a matriz. Analisando correntes de probabilidade subatômica."
SAY_DONE = "Matriz prevista gerada. Os padrões foram isolados."
SAY_CLEARED = "Memória limpa."

# a cycle waiting out its loading delay; lives only in this process
_pending = False


class GenerationRejected(Exception):
    pass


def _say(state: AppState, speaker: Speaker, text: str):
    if state.settings.voice_enabled:
        speaker.speak(text)


def get_state(store: Store) -> AppState:
    return load_state(store)


def is_pending() -> bool:
    return _pending


@dataclass
class PendingCycle:
    """Inputs captured when a cycle starts; edits made during the delay don't reach it."""
    modules: list[DataSet]
    errors: list[str]
    history: list[DataSet]
    hits: list[HitRecord]
    rectifications: list[RectificationRecord]
    entropy: float


def begin_generation(store: Store, speaker: Speaker) -> PendingCycle:
    global _pending
    state = load_state(store)
    if _pending:
        raise GenerationRejected("generation already in progress")
    if state.locked:
        raise GenerationRejected("result locked until actual values are submitted")
    modules, errors = parse_modules(state.modules)
    for err in errors:
        logger.warning(err)
    _pending = True
    _say(state, speaker, SAY_START)
    return PendingCycle(modules, errors, list(state.input_history), list(state.hits),
                        list(state.rectifications), state.settings.entropy)


def run_generation(store: Store, speaker: Speaker, cycle: PendingCycle,
                   rng: Optional[RandomSource] = None):
    global _pending
    try:
        out: GenerationResult = run_generation_cycle(
            cycle.modules, cycle.history, cycle.hits, cycle.rectifications,
            entropy=cycle.entropy, rng=rng,
        )
        state = load_state(store)
        state.generated_result = out.result
        state.candidates = out.candidates
        state.advanced_predictions = out.advanced_predictions
        state.analysis = out.analysis
        state.locked = True
        save_state(store, state)
    finally:
        _pending = False
    _say(state, speaker, SAY_DONE)
    return out, cycle.errors


def generate(store: Store, speaker: Speaker, rng: Optional[RandomSource] = None):
    cycle = begin_generation(store, speaker)
    return run_generation(store, speaker, cycle, rng=rng)


def submit_actual(store: Store, values: list[str], speaker: Speaker) -> ReconcileOutcome:
    state = load_state(store)
    outcome = ReconcileOutcome()
    if state.generated_result:
        outcome = reconcile(values, state.generated_result)
        state.hits = outcome.hits + state.hits
        state.rectifications = outcome.rectifications + state.rectifications
        _say(state, speaker, announcement(outcome.hits))
    _, m2, m3 = state.modules
    state.modules = [m2, m3, list(values)]
    push_history(state, [to_row(v) for v in values], cap=settings.history_cap)
    state.locked = False
    save_state(store, state)
    return outcome


def set_wave(store: Store, values: list[str]) -> AppState:
    state = load_state(store)
    state.modules[2] = list(values)
    state.locked = False
    save_state(store, state)
    return state


def clear_wave(store: Store, speaker: Speaker) -> AppState:
    state = load_state(store)
    state.modules[2] = empty_module()
    save_state(store, state)
    _say(state, speaker, SAY_CLEARED)
    return state


def update_settings(store: Store, entropy: Optional[float] = None, voice_enabled: Optional[bool] = None):
    state = load_state(store)
    changes = {}
    if entropy is not None:
        changes['entropy'] = entropy
    if voice_enabled is not None:
        changes['voice_enabled'] = voice_enabled
    state.settings = AppSettings.model_validate({**state.settings.model_dump(), **changes})
    save_state(store, state)
    return state.settings


def mark_hit(store: Store, value: str, slot_type: SlotType, position: int,
             status: HitStatus = HitStatus.EXACT) -> HitRecord:
    state = load_state(store)
    hit = HitRecord(value=value, type=slot_type, position=position, status=status)
    state.hits = [hit] + state.hits
    save_state(store, state)
    return hit


def manual_rectify(store: Store, generated: str, actual: str, slot_type: SlotType,
                   rank_label: str) -> RectificationRecord:
    state = load_state(store)
    rect = RectificationRecord(generated=generated, actual=actual, type=slot_type, rank_label=rank_label)
    state.rectifications = [rect] + state.rectifications
    save_state(store, state)
    return rect


def _delete_at(store: Store, field: str, idx: int):
    state = load_state(store)
    items = getattr(state, field)
    if not 0 <= idx < len(items):
        raise IndexError(f"{field} has no entry {idx}")
    removed = items[idx]
    setattr(state, field, items[:idx] + items[idx + 1:])
    save_state(store, state)
    return removed


def _clear(store: Store, field: str) -> int:
    state = load_state(store)
    n = len(getattr(state, field))
    setattr(state, field, [])
    save_state(store, state)
    return n


def delete_hit(store: Store, idx: int):
    return _delete_at(store, 'hits', idx)


def clear_hits(store: Store) -> int:
    return _clear(store, 'hits')


def delete_rectification(store: Store, idx: int):
    return _delete_at(store, 'rectifications', idx)


def clear_rectifications(store: Store) -> int:
    return _clear(store, 'rectifications')


def delete_history_item(store: Store, idx: int):
    return _delete_at(store, 'input_history', idx)


def clear_history(store: Store) -> int:
    return _clear(store, 'input_history')


def chat(store: Store, messages: list[ChatMessage], speaker: Speaker,
         client: Optional[ChatClient] = None) -> str:
    state = load_state(store)
    text = (client or ChatClient()).reply(messages)
    _say(state, speaker, text)
    return text
