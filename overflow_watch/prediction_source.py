"""Client for the external max ID prediction service."""

from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from .overflow_estimator import INT64_MAX

LOGGER = logging.getLogger("overflow_watch.prediction_source")

DEFAULT_API_URL = "http://127.0.0.1:8000"
DEFAULT_TIMEOUT = 10.0


class SourceUnavailable(RuntimeError):
    """The prediction source could not be reached or returned malformed data."""


@dataclass
class Prediction:
    """Raw inputs for one projection run."""

    predicted_max_id_in_30_days: int
    current_max_id: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "predicted_max_id_in_30_days": self.predicted_max_id_in_30_days,
            "current_max_id": self.current_max_id,
        }


def _require_int(payload: Any, field: str) -> int:
    if not isinstance(payload, dict):
        raise SourceUnavailable(f"Prediction source returned a non-object payload for {field}")
    value = payload.get(field)
    # bool is an int subclass but never a valid ID
    if isinstance(value, bool) or not isinstance(value, int):
        raise SourceUnavailable(f"Prediction source returned an invalid {field}: {value!r}")
    if abs(value) > INT64_MAX:
        raise SourceUnavailable(f"Prediction source returned an out of range {field}: {value}")
    return value


class PredictionClient:
    """Fetches the 30-day max ID prediction and the current max ID."""

    def __init__(
        self,
        *,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        current_max_id: Optional[int] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = (base_url or os.getenv("PREDICTION_API_URL", DEFAULT_API_URL)).rstrip("/")
        self.timeout = timeout if timeout is not None else float(os.getenv("PREDICTION_TIMEOUT", DEFAULT_TIMEOUT))
        self.current_max_id = current_max_id
        self._session = session or requests.Session()

    @classmethod
    def from_environment(cls) -> "PredictionClient":
        raw_current = os.getenv("CURRENT_MAX_ID")
        return cls(current_max_id=int(raw_current) if raw_current else None)

    def _get_json(self, path: str) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self._session.get(url, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.RequestException as exc:
            LOGGER.error("Prediction source request to %s failed: %s", url, exc)
            raise SourceUnavailable(f"Prediction source unavailable at {url}") from exc
        except ValueError as exc:
            LOGGER.error("Prediction source at %s returned invalid JSON: %s", url, exc)
            raise SourceUnavailable(f"Prediction source returned invalid JSON at {url}") from exc

    def fetch_current_max_id(self) -> int:
        if self.current_max_id is not None:
            return self.current_max_id
        return _require_int(self._get_json("/current_max_id"), "current_max_id")

    def fetch_prediction(self) -> Prediction:
        payload = self._get_json("/predict_overflow")
        predicted = _require_int(payload, "predicted_max_id_in_30_days")

        if "current_max_id" in payload:
            current = _require_int(payload, "current_max_id")
        else:
            current = self.fetch_current_max_id()

        LOGGER.info("Fetched prediction: current=%s predicted=%s", current, predicted)
        return Prediction(predicted_max_id_in_30_days=predicted, current_max_id=current)

    async def fetch_prediction_async(self) -> Prediction:
        return await asyncio.to_thread(self.fetch_prediction)
