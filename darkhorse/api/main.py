import logging
from fastapi import FastAPI
from contextlib import asynccontextmanager
from darkhorse.config import settings
from darkhorse.db.base import init_db
from darkhorse.api.routes import router

logging.basicConfig(level=settings.log_level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield

app = FastAPI(title="Dark Horse Oracle", lifespan=lifespan)
app.include_router(router)

@app.get("/")
def home():
    return {"ok": True, "app": "Dark Horse Oracle"}
