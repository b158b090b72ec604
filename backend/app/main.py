# -*- coding: utf-8 -*-

import logging
from pathlib import Path
from threading import Lock
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware

from analyzers import UnknownMetricError, compute_grouped_average, compute_metric_summary
from app.views import dashboard_payload, model_bar_series, record_rows, summary_table
from models import Loaded, LoadOutcome, SourceUnavailable
from parsers import RecordLoader
from utils.config import Settings

load_dotenv()

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"

# =============================================================================
# DATASET CACHE
# =============================================================================


class DatasetStore:
    """Single-slot cache of the last load outcome.

    The first access loads the configured file. ``reload`` and ``replace``
    swap the cached outcome wholesale; nothing is merged.
    """

    def __init__(self, loader: RecordLoader, path: Path) -> None:
        self._loader = loader
        self._path = Path(path)
        self._lock = Lock()
        self._outcome: Optional[LoadOutcome] = None

    @property
    def path(self) -> Path:
        return self._path

    def current(self) -> LoadOutcome:
        with self._lock:
            if self._outcome is None:
                self._outcome = self._loader.load(self._path)
            return self._outcome

    def reload(self) -> LoadOutcome:
        outcome = self._loader.load(self._path)
        with self._lock:
            self._outcome = outcome
        logger.info("Results reloaded from %s (status=%s)", self._path, outcome.status)
        return outcome

    def replace(self, outcome: LoadOutcome) -> None:
        with self._lock:
            self._outcome = outcome
        logger.info("Results replaced from %s", outcome.source)


def _require_loaded(outcome: LoadOutcome) -> Loaded:
    if isinstance(outcome, SourceUnavailable):
        raise HTTPException(
            status_code=404,
            detail=(
                f"No results data found. Make sure the results file exists at "
                f"{outcome.source} ({outcome.reason})."
            ),
        )
    return outcome


# =============================================================================
# APPLICATION
# =============================================================================


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    loader = RecordLoader()
    store = DatasetStore(loader, settings.results_path)
    places = settings.display_precision

    app = FastAPI(title="Training Results Viewer", version=API_VERSION)
    app.state.settings = settings
    app.state.store = store

    # CORS for the React dashboard (Vite dev server by default)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    async def _loaded() -> Loaded:
        outcome = await run_in_threadpool(store.current)
        return _require_loaded(outcome)

    @app.get("/")
    async def root():
        return {"message": "Training Results Viewer API", "version": API_VERSION}

    @app.get("/api/results")
    async def get_results() -> Dict[str, Any]:
        return dashboard_payload(await _loaded(), places)

    @app.post("/api/results/reload")
    async def reload_results() -> Dict[str, Any]:
        outcome = await run_in_threadpool(store.reload)
        return dashboard_payload(_require_loaded(outcome), places)

    @app.get("/api/summary")
    async def get_summary() -> Dict[str, Any]:
        loaded = await _loaded()
        summary = compute_metric_summary(loaded.records)
        return {
            "status": "empty" if loaded.is_empty else "ok",
            "record_count": summary.record_count,
            "summary": summary_table(summary, places),
        }

    @app.get("/api/models/{metric}")
    async def get_model_averages(metric: str) -> Dict[str, Any]:
        loaded = await _loaded()
        try:
            groups = compute_grouped_average(loaded.records, metric)
        except UnknownMetricError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return {"metric": metric, "groups": model_bar_series(groups, places)}

    @app.get("/api/records")
    async def get_records() -> Dict[str, Any]:
        loaded = await _loaded()
        return {"records": record_rows(loaded.records)}

    @app.post("/api/upload/results")
    async def upload_results(results_csv: UploadFile = File(...)) -> Dict[str, Any]:
        """Replace the cached dataset with an uploaded results file."""
        filename = Path(results_csv.filename or "results.csv").name
        raw = await results_csv.read()
        try:
            text = raw.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            logger.warning("Uploaded results file %s is not UTF-8", filename)
            raise HTTPException(status_code=400, detail="Results file must be UTF-8 text.") from exc

        loaded = loader.load_text(text, source=filename)
        store.replace(loaded)
        return dashboard_payload(loaded, places)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=8000)
