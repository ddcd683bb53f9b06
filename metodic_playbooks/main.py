# metodic_playbooks/main.py

from fastapi import FastAPI
from fastapi.responses import HTMLResponse
import logging

from .config import VERSION
from .routers import playbooks

app = FastAPI(title="Metodic Playbooks", version=VERSION)
logging.basicConfig(level=logging.INFO)

app.include_router(playbooks.router)


# ====== Routes ======

@app.get("/", response_class=HTMLResponse)
async def root():
    return "<h3>Metodic Playbooks is running. GET /playbooks or /playbooks/{slug}/download</h3>"


@app.get("/health")
async def health():
    return {"ok": True, "version": VERSION}
