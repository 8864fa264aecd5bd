import asyncio
from fastapi import APIRouter, Depends, HTTPException, Header
from sqlmodel import Session
from darkhorse.db.base import get_session
from darkhorse.db.store import SqlStore
from darkhorse.api.schemas import ChatIn, ChatOut, GenerateOut, HitIn, ModuleIn, RectifyIn, SettingsIn
from darkhorse.config import settings
from darkhorse.chat import GREETING, ChatMessage
from darkhorse.speech import Speaker
from darkhorse import services

router = APIRouter()


def _auth(api_key_header: str | None = Header(default=None, alias="X-API-Key")):
    if settings.api_key and api_key_header != settings.api_key:
        raise HTTPException(status_code=401, detail="Invalid API key")


def get_store(session: Session = Depends(get_session)):
    return SqlStore(session)


def get_speaker():
    return Speaker()


def _state_out(store):
    state = services.get_state(store)
    return {**state.model_dump(mode='json'), 'pending': services.is_pending()}


@router.get('/state')
async def state(store=Depends(get_store)):
    return _state_out(store)


@router.post('/generate', response_model=GenerateOut)
async def generate(store=Depends(get_store), speaker: Speaker = Depends(get_speaker), ok=Depends(_auth)):
    try:
        cycle = services.begin_generation(store, speaker)
    except services.GenerationRejected as e:
        raise HTTPException(409, detail=str(e))
    try:
        await asyncio.sleep(settings.generation_delay)
    except asyncio.CancelledError:
        # a started cycle always completes, even if the client goes away
        services.run_generation(store, speaker, cycle)
        raise
    out, warnings = services.run_generation(store, speaker, cycle)
    return {'generation': out, 'warnings': warnings, 'speech': speaker.drain()}


@router.post('/actual')
async def actual(data: ModuleIn, store=Depends(get_store), speaker: Speaker = Depends(get_speaker), ok=Depends(_auth)):
    outcome = services.submit_actual(store, data.values, speaker)
    return {
        'hits': [h.model_dump(mode='json') for h in outcome.hits],
        'rectifications': [r.model_dump(mode='json') for r in outcome.rectifications],
        'speech': speaker.drain(),
    }


@router.put('/wave')
async def wave(data: ModuleIn, store=Depends(get_store), ok=Depends(_auth)):
    services.set_wave(store, data.values)
    return _state_out(store)


@router.delete('/wave')
async def clear_wave(store=Depends(get_store), speaker: Speaker = Depends(get_speaker), ok=Depends(_auth)):
    services.clear_wave(store, speaker)
    return {**_state_out(store), 'speech': speaker.drain()}


@router.put('/settings')
async def update_settings(data: SettingsIn, store=Depends(get_store), ok=Depends(_auth)):
    return services.update_settings(store, entropy=data.entropy, voice_enabled=data.voice_enabled)


@router.post('/hits')
async def add_hit(data: HitIn, store=Depends(get_store), ok=Depends(_auth)):
    return services.mark_hit(store, data.value, data.type, data.position, data.status)


@router.post('/rectifications')
async def add_rectification(data: RectifyIn, store=Depends(get_store), ok=Depends(_auth)):
    return services.manual_rectify(store, data.generated, data.actual, data.type, data.rank_label)


def _delete(fn, store, idx: int):
    try:
        return fn(store, idx)
    except IndexError as e:
        raise HTTPException(404, detail=str(e))


@router.delete('/hits/{idx}')
async def delete_hit(idx: int, store=Depends(get_store), ok=Depends(_auth)):
    return _delete(services.delete_hit, store, idx)


@router.delete('/hits')
async def clear_hits(store=Depends(get_store), ok=Depends(_auth)):
    return {'removed': services.clear_hits(store)}


@router.delete('/rectifications/{idx}')
async def delete_rectification(idx: int, store=Depends(get_store), ok=Depends(_auth)):
    return _delete(services.delete_rectification, store, idx)


@router.delete('/rectifications')
async def clear_rectifications(store=Depends(get_store), ok=Depends(_auth)):
    return {'removed': services.clear_rectifications(store)}


@router.delete('/history/{idx}')
async def delete_history_item(idx: int, store=Depends(get_store), ok=Depends(_auth)):
    return {'removed': _delete(services.delete_history_item, store, idx)}


@router.delete('/history')
async def clear_history(store=Depends(get_store), ok=Depends(_auth)):
    return {'removed': services.clear_history(store)}


@router.post('/chat', response_model=ChatOut)
def chat(data: ChatIn, store=Depends(get_store), speaker: Speaker = Depends(get_speaker), ok=Depends(_auth)):
    text = services.chat(store, data.messages, speaker)
    return {'reply': text, 'speech': speaker.drain()}


@router.get('/chat', response_model=list[ChatMessage])
async def chat_opening():
    return [ChatMessage(role='model', text=GREETING)]
