"""FastAPI application exposing the report and the daily analysis schedule."""
from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from fastapi import FastAPI, Form, Request, status
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from .config import Settings, parse_schedule_time
from .errors import InvestmentTrackerError
from .logging_utils import configure_logging
from .quotes import create_quote_provider
from .report import ReportFormatter
from .runner import AnalysisRun, create_notifier
from .storage import load_config

configure_logging()

LOGGER = logging.getLogger(__name__)

settings = Settings.load()
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))

scheduler = AsyncIOScheduler()
JOB_ID = "daily-analysis"

_run_lock = threading.Lock()

schedule: dict[str, Any] = {
    "hour": settings.schedule_hour,
    "minute": settings.schedule_minute,
    "timezone": settings.timezone,
}


def run_analysis() -> str:
    """Run one analysis batch with the configured provider and notifier.

    The scheduled job and ``POST /run`` share this lock, so a run that starts
    while another is in progress waits for it and never overwrites its results.
    """

    with _run_lock:
        provider = create_quote_provider(settings.quote_provider)
        run = AnalysisRun(settings.config_path, provider, create_notifier(settings))
        return run.run()


def _analysis_job() -> None:
    """Wrapper for running the analysis within the scheduler."""

    LOGGER.info("Running scheduled analysis job")
    try:
        run_analysis()
    except InvestmentTrackerError:
        LOGGER.exception("Scheduled analysis run failed")
    else:
        LOGGER.info("Scheduled analysis job completed successfully")


def _configure_job() -> None:
    """Ensure the APScheduler job reflects the current schedule."""

    trigger = CronTrigger(
        hour=schedule["hour"],
        minute=schedule["minute"],
        timezone=ZoneInfo(schedule["timezone"]),
    )
    if scheduler.get_job(JOB_ID):
        scheduler.reschedule_job(JOB_ID, trigger=trigger)
        LOGGER.info(
            "Rescheduled daily analysis job for %02d:%02d %s",
            schedule["hour"],
            schedule["minute"],
            schedule["timezone"],
        )
    else:
        scheduler.add_job(_analysis_job, trigger=trigger, id=JOB_ID, replace_existing=True)
        LOGGER.info(
            "Scheduled daily analysis job for %02d:%02d %s",
            schedule["hour"],
            schedule["minute"],
            schedule["timezone"],
        )


def _format_schedule() -> str:
    return f"{int(schedule['hour']):02d}:{int(schedule['minute']):02d}"


def _schedule_context(request: Request, **extra: Any) -> dict[str, Any]:
    context = {
        "request": request,
        "schedule_time": _format_schedule(),
        "schedule_timezone": schedule["timezone"],
    }
    context.update(extra)
    return context


app = FastAPI(title="Investment Tracker", default_response_class=HTMLResponse)


@app.on_event("startup")
async def startup_event() -> None:
    LOGGER.info("Starting FastAPI application")
    _configure_job()
    if not scheduler.running:
        scheduler.start()
        LOGGER.info("Scheduler started")


@app.on_event("shutdown")
async def shutdown_event() -> None:
    if scheduler.running:
        scheduler.shutdown()
        LOGGER.info("Scheduler shut down")


@app.get("/", response_class=HTMLResponse)
async def dashboard(request: Request) -> Response:
    LOGGER.debug("Rendering dashboard view")
    try:
        config = load_config(settings.config_path)
    except InvestmentTrackerError as exc:
        return PlainTextResponse(str(exc), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
    return templates.TemplateResponse(
        request,
        "dashboard.html",
        _schedule_context(
            request,
            report=ReportFormatter().render(config),
            investment_count=len(config.investments),
        ),
    )


@app.post("/run")
def trigger_run() -> Response:
    try:
        run_analysis()
    except InvestmentTrackerError as exc:
        LOGGER.warning("Manual analysis run failed: %s", exc)
        return PlainTextResponse(str(exc), status_code=status.HTTP_502_BAD_GATEWAY)
    return RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)


@app.get("/schedule", response_class=HTMLResponse)
async def show_schedule(request: Request) -> HTMLResponse:
    LOGGER.debug("Rendering schedule view")
    updated = request.query_params.get("updated")
    return templates.TemplateResponse(
        request,
        "schedule.html",
        _schedule_context(request, updated=bool(updated), error=None),
    )


@app.post("/schedule", response_class=HTMLResponse)
async def update_schedule_view(request: Request, time: str = Form(...)) -> HTMLResponse:
    try:
        hour, minute = parse_schedule_time(time)
    except ValueError as exc:
        LOGGER.warning("Invalid schedule submitted: %s", exc)
        return templates.TemplateResponse(
            request,
            "schedule.html",
            _schedule_context(request, updated=False, error=str(exc)),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    schedule["hour"] = hour
    schedule["minute"] = minute
    if scheduler.running:
        _configure_job()
    LOGGER.info("Updated schedule to %02d:%02d %s", hour, minute, schedule["timezone"])
    return RedirectResponse(url="/schedule?updated=1", status_code=status.HTTP_303_SEE_OTHER)


__all__ = ["app", "run_analysis"]
