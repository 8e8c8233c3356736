"""
Overflow Monitor Module
Polls the prediction source and raises log alerts for enabled severity levels
"""

import logging
import os
import time
from datetime import datetime
from typing import Any, Dict, Optional

import schedule

from .prediction_source import PredictionClient, SourceUnavailable
from .projector import OverflowProjector

logger = logging.getLogger("overflow_watch.monitor")

FREQUENCIES = ("realtime", "hourly", "daily", "weekly")

ALERT_LOG_LEVELS = {
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
}


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class OverflowMonitor:
    """Runs periodic overflow checks and emits alerts"""

    def __init__(self,
                 client: Optional[PredictionClient] = None,
                 projector: Optional[OverflowProjector] = None,
                 frequency: str = "daily",
                 critical_alerts: bool = True,
                 warning_alerts: bool = True,
                 info_alerts: bool = False):
        """
        Initialize monitor

        Args:
            client: Prediction source client
            projector: Overflow projector
            frequency: One of realtime, hourly, daily, weekly
            critical_alerts: Alert on error-level tiers
            warning_alerts: Alert on warning-level tiers
            info_alerts: Alert on info-level tiers
        """
        if frequency not in FREQUENCIES:
            raise ValueError(f"Unknown notification frequency: {frequency}")

        self.client = client or PredictionClient.from_environment()
        self.projector = projector or OverflowProjector.from_environment()
        self.frequency = frequency
        self.enabled_alerts = {
            "error": critical_alerts,
            "warning": warning_alerts,
            "info": info_alerts,
        }
        self.last_run: Optional[datetime] = None
        self.is_running = False

    @classmethod
    def from_environment(cls) -> "OverflowMonitor":
        return cls(
            frequency=os.getenv("NOTIFICATION_FREQUENCY", "daily").lower(),
            critical_alerts=_env_flag("CRITICAL_ALERTS", True),
            warning_alerts=_env_flag("WARNING_ALERTS", True),
            info_alerts=_env_flag("INFO_ALERTS", False),
        )

    def should_alert(self, alert_type: str) -> bool:
        return self.enabled_alerts.get(alert_type, False)

    def run_check(self) -> Dict[str, Any]:
        """
        Fetch the latest prediction and alert on its severity

        Returns:
            Check result with status
        """
        if self.is_running:
            return {
                "status": "error",
                "message": "Check already running"
            }

        self.is_running = True

        try:
            prediction = self.client.fetch_prediction()
            report = self.projector.project(prediction.current_max_id,
                                            prediction.predicted_max_id_in_30_days)
            info = report.tier.info
            alerted = self.should_alert(info.alert_type)

            if alerted:
                logger.log(
                    ALERT_LOG_LEVELS[info.alert_type],
                    "%s: %s (days until overflow: %s)",
                    info.title, info.description, report.forecast.display,
                )

            self.last_run = datetime.now()
            result = {
                "status": "success",
                "checked_at": self.last_run.isoformat(),
                "tier": report.tier.name,
                "days_until_overflow": report.forecast.days_until_overflow,
                "alerted": alerted,
            }

        except SourceUnavailable as e:
            logger.error(f"Overflow check failed: {e}")
            result = {
                "status": "error",
                "message": str(e)
            }

        finally:
            self.is_running = False

        return result

    def schedule_checks(self, scheduler: Optional[schedule.Scheduler] = None) -> schedule.Job:
        """Register the check on a scheduler according to the frequency"""
        if scheduler is None:
            scheduler = schedule.default_scheduler
        if self.frequency == "realtime":
            every = scheduler.every().minute
        elif self.frequency == "hourly":
            every = scheduler.every().hour
        elif self.frequency == "daily":
            every = scheduler.every().day
        else:
            every = scheduler.every().week
        return every.do(self.run_check)


def main():
    """Main entry point"""
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    logger.info("Starting overflow monitor")

    monitor = OverflowMonitor.from_environment()
    monitor.schedule_checks()
    logger.info(f"Overflow checks scheduled ({monitor.frequency})")

    monitor.run_check()

    while True:
        try:
            schedule.run_pending()
            time.sleep(30)
        except KeyboardInterrupt:
            logger.info("Overflow monitor shutting down...")
            break
        except Exception as e:
            logger.error(f"Monitor loop error: {e}")
            time.sleep(30)


if __name__ == "__main__":
    main()
