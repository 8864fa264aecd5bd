from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from darkhorse.analytics.generation import run_generation_cycle
from darkhorse.core.records import AppSettings, HitRecord, HitStatus, RectificationRecord, SlotType
from darkhorse.core.state import AppState, load_state, push_history, save_state
from darkhorse.db.base import init_db
from darkhorse.db.store import MemoryStore, SqlStore
from conftest import FixedRandom

DATA_SET = [[1, 2, 3, 4]] * 6 + [[5, 6, 7]]


def _populated() -> AppState:
    gen = run_generation_cycle([DATA_SET], [DATA_SET], [], [], rng=FixedRandom(0.3))
    return AppState(
        input_history=[DATA_SET, DATA_SET],
        hits=[HitRecord(value="1234", type=SlotType.MILHAR, position=2, status=HitStatus.NEAR)],
        rectifications=[RectificationRecord(generated="567", actual="576", type=SlotType.CENTENA, rank_label="7º PRÊMIO")],
        settings=AppSettings(entropy=0.8, voice_enabled=False),
        modules=[["1234"] * 6 + ["567"], [""] * 7, ["9"] * 7],
        generated_result=gen.result,
        candidates=gen.candidates,
        advanced_predictions=gen.advanced_predictions,
        analysis=gen.analysis,
        locked=True,
    )


def test_defaults_from_empty_store():
    state = load_state(MemoryStore())
    assert state == AppState()
    assert state.settings.entropy == 0.45 and state.settings.voice_enabled
    assert state.modules == [[""] * 7] * 3


def test_round_trip_memory():
    store = MemoryStore()
    state = _populated()
    save_state(store, state)
    assert store.get('dh_v25_locked') == 'true'
    assert load_state(store) == state


def test_round_trip_sql():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    init_db(bind=engine)
    state = _populated()
    with Session(engine) as session:
        save_state(SqlStore(session), state)
        save_state(SqlStore(session), state)
    with Session(engine) as session:
        assert load_state(SqlStore(session)) == state


def _tagged(i: int):
    return [[i // 100, (i // 10) % 10, i % 10, 0]] * 6 + [[0, 0, 0]]


def test_history_eviction():
    state = AppState()
    for i in range(300):
        push_history(state, _tagged(i))
    assert len(state.input_history) == 300
    assert state.input_history[-1] == _tagged(0)
    push_history(state, _tagged(300))
    assert len(state.input_history) == 300
    assert state.input_history[0] == _tagged(300)
    assert state.input_history[-1] == _tagged(1)
