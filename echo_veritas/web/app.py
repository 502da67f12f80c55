"""
FastAPI Web Application - Echo Veritas Dashboard
================================================

Single-page dashboard for checking reviews, plus a small JSON API.
Each browser gets its own in-memory AnalysisSession via a cookie.

Notices follow Post/Redirect/Get: every form post redirects back to "/"
with ?message= or ?error=.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional
from urllib.parse import urlencode

from fastapi import FastAPI, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from ..application import AnalysisSession, SessionRegistry
from ..domain import Prediction, ReviewAnalysisError
from ..infrastructure.classifier import ClassifierClient, build_classifier
from ..infrastructure.config import Settings, get_settings
from .pages import FILTERS, render_dashboard

logger = logging.getLogger(__name__)

SESSION_COOKIE = "veritas_session"


def _redirect(message: str = "", error: str = "") -> RedirectResponse:
    params = {k: v for k, v in (("message", message), ("error", error)) if v}
    url = "/?" + urlencode(params) if params else "/"
    return RedirectResponse(url=url, status_code=303)


def _notice(e: ReviewAnalysisError) -> str:
    return str(e) or e.notice


def _prediction_or_400(prediction: Optional[str]) -> Optional[str]:
    if prediction in (None, "", "all"):
        return None
    try:
        return Prediction(prediction).value
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Unknown prediction filter: {prediction}")


def create_app(
    classifier: Optional[ClassifierClient] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """Build the app. Tests inject a fake classifier and settings."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        for issue in settings.validate():
            logger.warning(issue)
        logger.info("Echo Veritas ready")
        yield

    app = FastAPI(
        title="Echo Veritas",
        description="Fake Review Detection Workbench",
        lifespan=lifespan,
    )

    shared_classifier = classifier or build_classifier(settings)
    registry = SessionRegistry(
        lambda: AnalysisSession(shared_classifier, settings=settings)
    )
    app.state.sessions = registry

    def _session(request: Request) -> AnalysisSession:
        session_id, session = registry.get_or_create(request.cookies.get(SESSION_COOKIE))
        request.state.session_id = session_id
        return session

    @app.middleware("http")
    async def session_cookie(request: Request, call_next):
        response = await call_next(request)
        session_id = getattr(request.state, "session_id", None)
        if session_id and session_id != request.cookies.get(SESSION_COOKIE):
            response.set_cookie(key=SESSION_COOKIE, value=session_id, httponly=True)
        return response

    # ── Dashboard ──────────────────────────────────────────────

    @app.get("/", response_class=HTMLResponse)
    async def dashboard(request: Request, filter: str = "all", message: str = "", error: str = ""):
        session = _session(request)
        active = filter if filter in FILTERS else "all"
        return render_dashboard(
            stats=session.stats(),
            queue=session.queue.items(),
            results=session.results(active),
            active_filter=active,
            busy=session.is_busy,
            max_chars=settings.ingestion.max_review_chars,
            message=message,
            error=error,
        )

    # ── Single review ──────────────────────────────────────────

    @app.post("/analyze")
    async def analyze(request: Request, text: str = Form("")):
        session = _session(request)
        try:
            result = await session.analyze_single(text)
        except ReviewAnalysisError as e:
            return _redirect(error=_notice(e))
        return _redirect(message=f"Analysis complete: {result.prediction.value.upper()} "
                                 f"({result.confidence * 100:.1f}% confidence)")

    # ── Batch queue ────────────────────────────────────────────

    @app.post("/batch/text")
    async def batch_text(request: Request, text: str = Form("")):
        session = _session(request)
        try:
            count = session.queue_text(text)
        except ReviewAnalysisError as e:
            return _redirect(error=_notice(e))
        return _redirect(message=f"{count} reviews added to batch processing queue.")

    @app.post("/batch/upload")
    async def batch_upload(request: Request, file: UploadFile = File(...)):
        session = _session(request)
        if not file.filename:
            return _redirect(error="No file selected")

        try:
            content = await file.read()
            count = session.queue_upload(file.filename, content)
        except ReviewAnalysisError as e:
            return _redirect(error=_notice(e))
        except Exception as e:
            logger.exception(f"Upload import error: {e}")
            return _redirect(error=f"Import failed: {str(e)[:80]}")

        return _redirect(message=f"{count} reviews loaded from {file.filename}.")

    @app.post("/batch/{index}/remove")
    async def batch_remove(request: Request, index: int):
        session = _session(request)
        session.remove_queued(index)
        return _redirect()

    @app.post("/batch/submit")
    async def batch_submit(request: Request):
        session = _session(request)
        try:
            results = await session.submit_batch()
        except ReviewAnalysisError as e:
            return _redirect(error=_notice(e))
        return _redirect(message=f"{len(results)} reviews analyzed successfully.")

    # ── Export ─────────────────────────────────────────────────

    @app.get("/export")
    async def export(request: Request):
        session = _session(request)
        filename = session.export_filename()
        logger.info(f"Exporting {len(session.store)} results to {filename}")
        return Response(
            content=session.export_csv(),
            media_type="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    # ── API Endpoints ──────────────────────────────────────────

    @app.get("/health")
    async def health():
        return {"status": "healthy"}

    @app.get("/api/results")
    async def api_results(request: Request, prediction: Optional[str] = None):
        session = _session(request)
        results = session.results(_prediction_or_400(prediction))
        return {"count": len(results), "results": [r.to_dict() for r in results]}

    @app.get("/api/stats")
    async def api_stats(request: Request):
        return _session(request).stats().to_dict()

    @app.get("/api/queue")
    async def api_queue(request: Request):
        session = _session(request)
        items = session.queue.items()
        return {
            "count": len(items),
            "busy": session.is_busy,
            "reviews": [{"text": c.text, "provenance": c.provenance.value} for c in items],
        }

    @app.get("/api/export")
    async def api_export(request: Request, prediction: Optional[str] = None):
        session = _session(request)
        return Response(
            content=session.export_csv(_prediction_or_400(prediction)),
            media_type="text/csv",
        )

    return app


app = create_app()
