"""Explicit application state and its load/save boundary.

Each field is stored as its own JSON blob under a fixed key, so a partially
populated store still loads: missing keys keep their defaults.
"""
import json
from pydantic import BaseModel, Field

from darkhorse.analytics.frequency import CombinedAnalysis
from darkhorse.core.records import (
    AdvancedPredictions, AppSettings, Candidate, DataSet, HitRecord, RectificationRecord,
)
from darkhorse.core.validation import MODULE_ROWS
from darkhorse.db.store import Store

HISTORY_CAP = 300
MODULE_SLOTS = 3

FIELD_KEYS = {
    'input_history': 'dh_v25_history',
    'hits': 'dh_v25_hits',
    'rectifications': 'dh_v25_rect',
    'settings': 'dh_v25_settings',
    'generated_result': 'dh_v25_last_res',
    'candidates': 'dh_v25_last_cand',
    'advanced_predictions': 'dh_v25_last_adv',
    'analysis': 'dh_v25_last_ana',
    'locked': 'dh_v25_locked',
}
MODULE_KEYS = ['dh_v25_m1', 'dh_v25_m2', 'dh_v25_m3']


def empty_module() -> list[str]:
    return [''] * MODULE_ROWS


class AppState(BaseModel):
    input_history: list[DataSet] = Field(default_factory=list)
    hits: list[HitRecord] = Field(default_factory=list)
    rectifications: list[RectificationRecord] = Field(default_factory=list)
    settings: AppSettings = Field(default_factory=AppSettings)
    modules: list[list[str]] = Field(default_factory=lambda: [empty_module() for _ in range(MODULE_SLOTS)])
    generated_result: DataSet | None = None
    candidates: list[Candidate] | None = None
    advanced_predictions: AdvancedPredictions | None = None
    analysis: CombinedAnalysis | None = None
    locked: bool = False


def load_state(store: Store) -> AppState:
    data = {}
    for name, key in FIELD_KEYS.items():
        raw = store.get(key)
        if raw is not None:
            data[name] = json.loads(raw)
    modules = []
    for key in MODULE_KEYS:
        raw = store.get(key)
        modules.append(json.loads(raw) if raw is not None else empty_module())
    data['modules'] = modules
    return AppState.model_validate(data)


def save_state(store: Store, state: AppState) -> None:
    dumped = state.model_dump(mode='json')
    for name, key in FIELD_KEYS.items():
        store.set(key, json.dumps(dumped[name]))
    for key, module in zip(MODULE_KEYS, dumped['modules']):
        store.set(key, json.dumps(module))


def push_history(state: AppState, data_set: DataSet, cap: int = HISTORY_CAP) -> None:
    state.input_history = [data_set, *state.input_history][:cap]
