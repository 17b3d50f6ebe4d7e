"""HTTP access to the converter.

Run locally:
uvicorn kg_frames.api:app --reload
"""
from __future__ import annotations
import logging
import os
from typing import Any, Dict, List

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from .assemble import convert_parts

log = logging.getLogger(__name__)

app = FastAPI(title="KG Frames API", version="0.1.0")

default_origins = {
    "http://localhost:8080",
    "http://127.0.0.1:8080",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
}
extra = os.getenv("FRONTEND_ORIGIN")
if extra:
    default_origins.add(extra)
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(default_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class FramesPart(BaseModel):
    frames: List[Any] = Field(default_factory=list)


class ConvertRequest(BaseModel):
    docId: str = Field(min_length=1)
    entities: FramesPart
    events: FramesPart
    sentences: FramesPart


@app.get("/health")
def health():
    return {"status": "ok"}


@app.post("/api/convert")
def convert(req: ConvertRequest) -> Dict[str, Any]:
    parts = {
        'entities': req.entities.model_dump(),
        'events': req.events.model_dump(),
        'sentences': req.sentences.model_dump(),
    }
    document = convert_parts(req.docId, parts)
    log.info("%s: converted via API (%d relations)", req.docId, len(document['events']))
    return document
