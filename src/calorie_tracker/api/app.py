"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, status
from pydantic import BaseModel

from calorie_tracker.app_logging import configure_logging
from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.intake import IntakeRecord, IntakeRow
from calorie_tracker.services.ledger import IntakeStorageError


class IntakeSubmission(BaseModel):
    """Raw calorie text as typed by the user."""

    calories: str | None = None


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/intakes")
    async def list_intakes(request: Request) -> dict[str, object]:
        """Return every intake as a display row, oldest first."""
        state_container: AppContainer = request.app.state.container
        try:
            rows = state_container.intake_service.list_rows()
        except IntakeStorageError as exc:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Could not load intakes. Please try again.",
            ) from exc
        return {"intakes": [_serialize_row(row) for row in rows]}

    @app.post("/intakes", status_code=status.HTTP_201_CREATED)
    async def add_intake(
        submission: IntakeSubmission, request: Request
    ) -> dict[str, object]:
        """Parse the submitted text and add it to the ledger."""
        state_container: AppContainer = request.app.state.container
        try:
            record = state_container.intake_service.submit(submission.calories)
        except IntakeStorageError as exc:
            logger.warning("Rejected intake submission: %s", exc)
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Could not save intake. Please try again.",
            ) from exc
        return {"intake": _serialize_record(record)}

    @app.get("/chart")
    async def chart(request: Request) -> dict[str, object]:
        """Return the current calorie series for the area chart."""
        state_container: AppContainer = request.app.state.container
        try:
            state_container.chart.refresh_if_stale(state_container.ledger)
        except IntakeStorageError as exc:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Could not load chart. Please try again.",
            ) from exc
        series = state_container.chart.chart_series()
        return {"series": series.values, "area": series.area}

    return app


def _serialize_record(record: IntakeRecord) -> dict[str, object]:
    return {
        "id": record.id,
        "calories": record.calories,
        "logged_at": record.logged_at.isoformat(),
    }


def _serialize_row(row: IntakeRow) -> dict[str, object]:
    return {
        **_serialize_record(row.record),
        "calories_text": row.calories_text,
        "logged_at_text": row.logged_at_text,
    }
