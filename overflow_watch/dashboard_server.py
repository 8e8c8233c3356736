"""HTTP API serving overflow projections to the dashboard front end.

Routes:

* ``GET /health`` liveness probe.
* ``GET /api/overflow`` fetches the latest prediction from the prediction
  source and returns the full overflow report. When the source cannot be
  reached the response is a ``503`` carrying ``fallback: true`` so the
  dashboard can show its fallback state.
* ``POST /api/overflow/project`` projects an explicit
  ``{current_max_id, predicted_max_id_in_30_days}`` pair without calling the
  prediction source.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Awaitable, Callable, Optional, Tuple

from aiohttp import web

from .overflow_estimator import INT64_MAX
from .prediction_source import PredictionClient, SourceUnavailable
from .projector import OverflowProjector

LOGGER = logging.getLogger("overflow_watch.server")

DEFAULT_ALLOWED_ORIGINS = (
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
)


def _allowed_origins() -> Tuple[str, ...]:
    raw = os.getenv("DASHBOARD_ALLOWED_ORIGINS")
    if not raw:
        return DEFAULT_ALLOWED_ORIGINS
    return tuple(origin.strip() for origin in raw.split(",") if origin.strip())


def apply_cors_headers(response: web.StreamResponse, origin: Optional[str]) -> None:
    if origin and origin in _allowed_origins():
        response.headers["Access-Control-Allow-Origin"] = origin
        response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
        response.headers["Access-Control-Allow-Headers"] = "Content-Type"
        response.headers["Vary"] = "Origin"


@web.middleware
async def cors_middleware(
    request: web.Request, handler: Callable[[web.Request], Awaitable[web.StreamResponse]]
) -> web.StreamResponse:
    origin = request.headers.get("Origin")
    if request.method == "OPTIONS":
        response = web.Response(status=204)
    else:
        response = await handler(request)
    if not response.prepared:
        apply_cors_headers(response, origin)
    return response


def _parse_id(payload: Any, field: str) -> int:
    value = payload.get(field)
    if isinstance(value, bool) or not isinstance(value, int):
        raise web.HTTPBadRequest(text=f"{field} must be an integer")
    if abs(value) > INT64_MAX:
        raise web.HTTPBadRequest(text=f"{field} must fit in a 64-bit integer")
    return value


class DashboardApplication:
    """Encapsulates the aiohttp application and overflow handlers."""

    def __init__(
        self,
        *,
        client: Optional[PredictionClient] = None,
        projector: Optional[OverflowProjector] = None,
    ) -> None:
        self.client = client or PredictionClient.from_environment()
        self.projector = projector or OverflowProjector.from_environment()
        self.app = web.Application(middlewares=[cors_middleware])
        self.app.router.add_get("/health", self.handle_health)
        self.app.router.add_get("/api/overflow", self.handle_overflow)
        self.app.router.add_post("/api/overflow/project", self.handle_project)

    async def handle_health(self, request: web.Request) -> web.Response:
        return web.json_response({"status": "ok"})

    async def handle_overflow(self, request: web.Request) -> web.Response:
        """Project overflow risk from the live prediction source."""

        try:
            prediction = await self.client.fetch_prediction_async()
        except SourceUnavailable as exc:
            LOGGER.warning("Serving fallback overflow response: %s", exc)
            return web.json_response(
                {"error": "Failed to load prediction data. Please try again later.", "fallback": True},
                status=503,
            )

        report = self.projector.project(prediction.current_max_id, prediction.predicted_max_id_in_30_days)
        LOGGER.info(
            "Overflow report: tier=%s days=%s growth=%.2f",
            report.tier.name, report.forecast.display, report.growth_rate,
        )
        return web.json_response(report.to_dict())

    async def handle_project(self, request: web.Request) -> web.Response:
        try:
            payload = await request.json()
        except ValueError as exc:
            raise web.HTTPBadRequest(text="Request body must be JSON") from exc
        if not isinstance(payload, dict):
            raise web.HTTPBadRequest(text="Request body must be a JSON object")

        current = _parse_id(payload, "current_max_id")
        predicted = _parse_id(payload, "predicted_max_id_in_30_days")
        report = self.projector.project(current, predicted)
        return web.json_response(report.to_dict())


def configure_logging() -> None:
    log_dir = os.getenv("LOG_DIR", "/var/log/overflow-watch")
    log_file = os.path.join(log_dir, "dashboard-server.log")

    handlers = [logging.StreamHandler()]
    try:
        os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, mode="a"))
        file_logging_status = f"Logging to {log_file}"
    except OSError as e:
        file_logging_status = f"File logging disabled for {log_dir}: {e}"

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )
    LOGGER.info("File logging configuration: %s", file_logging_status)


def create_app(
    *,
    client: Optional[PredictionClient] = None,
    projector: Optional[OverflowProjector] = None,
) -> web.Application:
    configure_logging()
    server = DashboardApplication(client=client, projector=projector)
    return server.app


def main() -> None:
    app = create_app()
    host = os.getenv("DASHBOARD_HOST", "127.0.0.1")
    port = int(os.getenv("DASHBOARD_PORT", "8080"))
    web.run_app(app, host=host, port=port)


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    main()
