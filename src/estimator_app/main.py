from __future__ import annotations

import logging
from typing import Dict

from fastapi import Depends, FastAPI, HTTPException, Response

from .config import Settings, configure_logging, get_settings
from .errors import ExportUnavailableError, MemberNotFoundError
from .models.project import ProjectState
from .models.results import ProjectEstimate
from .schemas import EstimateResponse, ExportSavedResponse, MemberPatch, ProjectConfigPatch
from .services.calculator import estimate_project
from .services.dashboard import build_dashboard
from .services.exporter import WorkbookWriter, format_export
from .services.store import ProjectStore


XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Project Estimator", version="0.1.0")

store = ProjectStore(settings.storage_path, settings.storage_key)
writer = WorkbookWriter()


def get_store() -> ProjectStore:
    return store


def _respond(state: ProjectState, estimate: ProjectEstimate, settings: Settings) -> EstimateResponse:
    return EstimateResponse(
        state=state,
        aggregate=estimate.aggregate,
        breakdown=estimate.breakdown,
        dashboard=build_dashboard(estimate, settings.currency_symbol),
    )


def _current(store: ProjectStore, settings: Settings) -> EstimateResponse:
    state, estimate = store.snapshot()
    return _respond(state, estimate, settings)


@app.get("/health")
def healthcheck() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/project", response_model=ProjectState)
def get_project(store: ProjectStore = Depends(get_store)) -> ProjectState:
    return store.state


@app.patch("/project", response_model=EstimateResponse)
def update_project(
    payload: ProjectConfigPatch,
    store: ProjectStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> EstimateResponse:
    store.update_config(**payload.changes())
    return _current(store, settings)


@app.post("/project/members", response_model=EstimateResponse)
def add_member(
    payload: MemberPatch | None = None,
    store: ProjectStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> EstimateResponse:
    store.add_member(**(payload.changes() if payload else {}))
    return _current(store, settings)


@app.patch("/project/members/{index}", response_model=EstimateResponse)
def update_member(
    index: int,
    payload: MemberPatch,
    store: ProjectStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> EstimateResponse:
    try:
        store.update_member(index, **payload.changes())
    except MemberNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return _current(store, settings)


@app.delete("/project/members/{index}", response_model=EstimateResponse)
def remove_member(
    index: int,
    store: ProjectStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> EstimateResponse:
    try:
        store.remove_member(index)
    except MemberNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return _current(store, settings)


@app.post("/project/reset", response_model=EstimateResponse)
def reset_project(
    store: ProjectStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> EstimateResponse:
    store.reset()
    return _current(store, settings)


@app.get("/estimate", response_model=EstimateResponse)
def get_estimate(
    store: ProjectStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> EstimateResponse:
    return _current(store, settings)


@app.post("/estimate", response_model=EstimateResponse)
def run_estimate(payload: ProjectState, settings: Settings = Depends(get_settings)) -> EstimateResponse:
    return _respond(payload, estimate_project(payload, payload.members), settings)


@app.get("/export")
def download_export(
    store: ProjectStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> Response:
    state, estimate = store.snapshot()
    document = format_export(estimate.aggregate, state, estimate.breakdown, currency_symbol=settings.currency_symbol)
    content = writer.to_bytes(document)
    logger.info("Serving export %s (%d bytes)", document.filename, len(content))
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{document.filename}"'},
    )


@app.post("/export", response_model=ExportSavedResponse)
def save_export(
    store: ProjectStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> ExportSavedResponse:
    state, estimate = store.snapshot()
    document = format_export(estimate.aggregate, state, estimate.breakdown, currency_symbol=settings.currency_symbol)
    try:
        path = writer.save(document, settings.export_dir)
    except ExportUnavailableError as exc:
        raise HTTPException(status_code=503, detail=str(exc), headers={"Retry-After": "5"}) from exc
    return ExportSavedResponse(filename=document.filename, path=str(path))
