# apps/api/main.py
from __future__ import annotations

import logging
from typing import Callable, Iterable

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import config
from errors import RecoError, status_for
from graph import Neo4jGraphStore
from health import collect_health_status
from routes_items import router as items_router
from routes_links import router as links_router
from routes_recommend import router as recommend_router
from routes_users import router as users_router


app = FastAPI(title="Graph Recommendation API")

log = logging.getLogger("api.main")


StartupTask = tuple[str, Callable[[], None], bool]


def _run_startup_tasks(tasks: Iterable[StartupTask]) -> None:
    for name, task, optional in tasks:
        try:
            task()
            log.debug("Startup task '%s' completed", name)
        except Exception as exc:
            if optional:
                log.info("Optional startup task '%s' failed: %s", name, exc)
            else:
                log.warning("Startup task '%s' failed: %s", name, exc)


app.add_middleware(
    CORSMiddleware,
    allow_origins=config.settings.cors_origins or ["http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(users_router)
app.include_router(items_router)
app.include_router(links_router)
app.include_router(recommend_router)


@app.exception_handler(RecoError)
async def _reco_error(request: Request, exc: RecoError) -> JSONResponse:
    code = status_for(exc)
    if code >= 500:
        log.warning("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=code, content={"detail": exc.detail or type(exc).__name__})


@app.exception_handler(RequestValidationError)
async def _bad_payload(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": "Bad Request", "errors": jsonable_encoder(exc.errors())})


@app.on_event("startup")
def _startup() -> None:
    store = Neo4jGraphStore.from_settings(config.settings)
    app.state.store = store
    _run_startup_tasks((("graph_constraints", store.ensure_constraints, False),))


@app.on_event("shutdown")
def _shutdown() -> None:
    store = getattr(app.state, "store", None)
    if store is not None:
        store.close()
        log.info("Neo4j driver closed")


@app.get("/")
def root():
    return {"message": "hello from api"}


@app.get("/healthz")
def healthz(request: Request):
    return collect_health_status(getattr(request.app.state, "store", None))


# Run: uvicorn main:app --reload --port 8080
