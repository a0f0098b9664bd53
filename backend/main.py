"""FastAPI entrypoint for the term glossary backend."""

from __future__ import annotations

import traceback

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from app_state import GlossaryAppState
from interfaces import CollectingNotifier, SelectionEditor
from models import (
    ActionResponsePayload,
    ClearTermRequest,
    DefineTermRequest,
    DefinitionFormatting,
    GlossaryDocumentPayload,
    TermPayload,
    TermsResponsePayload,
    UpdateSettingsRequest,
)
from services import InvalidDefinitionError, InvalidSelectionError, TermService
from settings import TermManagerSettings

app = FastAPI(title="Term Glossary Backend", description="Alphabetical glossary document API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

state = GlossaryAppState()


def _request_service(notifier: CollectingNotifier) -> TermService:
    services = state.current()
    return TermService(manager=services.manager, settings=services.settings, notifier=notifier)


@app.get("/", tags=["health"])
async def root():
    return {"status": "ok", "message": "Term glossary backend is running"}


@app.get("/health", tags=["health"])
async def health():
    return {"status": "ok", "message": "Term glossary backend is running"}


@app.get("/terms", response_model=TermsResponsePayload, tags=["terms"])
async def terms():
    try:
        index = state.current().manager.index
        return TermsResponsePayload(
            terms=[TermPayload(term=term, definition=definition) for term, definition in index.items()]
        )
    except Exception as exc:
        raise HTTPException(status_code=500, detail=str(exc))


@app.get("/terms/{term}", response_model=TermPayload, tags=["terms"])
async def get_term(term: str):
    definition = state.current().manager.index.get(term)
    if definition is None:
        raise HTTPException(status_code=404, detail="Term not defined")
    return TermPayload(term=term, definition=definition)


@app.get("/glossary", response_model=GlossaryDocumentPayload, tags=["terms"])
async def glossary():
    try:
        with state.lock:
            manager = state.current().manager
            return GlossaryDocumentPayload(document_name=manager.document_name, content=manager.read())
    except FileNotFoundError:
        raise HTTPException(status_code=404, detail="Glossary document not found")
    except Exception as exc:
        raise HTTPException(status_code=500, detail=str(exc))


@app.post("/define-term", response_model=ActionResponsePayload, tags=["actions"])
async def define_term(request: DefineTermRequest):
    notifier = CollectingNotifier()
    editor = SelectionEditor(request.selection)
    formatting = DefinitionFormatting(**request.model_dump(exclude={"selection"}))
    try:
        with state.lock:
            result = _request_service(notifier).define_term(editor, formatting)
        return ActionResponsePayload(replacement=editor.replacement or "", notices=notifier.messages, anchor=result.anchor)
    except (InvalidSelectionError, InvalidDefinitionError) as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except Exception as exc:
        traceback.print_exc()
        raise HTTPException(status_code=500, detail=str(exc))


@app.post("/clear-term-definition", response_model=ActionResponsePayload, tags=["actions"])
async def clear_term_definition(request: ClearTermRequest):
    notifier = CollectingNotifier()
    editor = SelectionEditor(request.selection)
    try:
        with state.lock:
            _request_service(notifier).clear_term_definition(editor)
        return ActionResponsePayload(replacement=editor.replacement or "", notices=notifier.messages)
    except InvalidSelectionError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except Exception as exc:
        traceback.print_exc()
        raise HTTPException(status_code=500, detail=str(exc))


@app.get("/settings", response_model=TermManagerSettings, tags=["settings"])
async def get_settings():
    return state.current().settings


@app.post("/settings", response_model=TermManagerSettings, tags=["settings"])
async def update_settings(request: UpdateSettingsRequest):
    try:
        return state.update_settings(**request.model_dump(exclude_none=True))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except Exception as exc:
        traceback.print_exc()
        raise HTTPException(status_code=500, detail=str(exc))


@app.post("/admin/reload-index", tags=["admin"])
async def reload_index():
    try:
        services = state.reload()
        return {"success": True, "terms_indexed": len(services.manager.index)}
    except Exception as exc:
        traceback.print_exc()
        raise HTTPException(status_code=500, detail=str(exc))


if __name__ == "__main__":
    uvicorn.run(app, host="127.0.0.1", port=8000)
