from __future__ import annotations

import logging

from boostiq.collectors.providers import AppIdentityProvider, StaticAppIdentity
from boostiq.models import AppInfo

logger = logging.getLogger(__name__)

DEFAULT_APP_NAME = "BoostIQ Pro"
DEFAULT_APP_ID = "com.boostiq.pro"

# Representative catalog; there is no portable way to enumerate real apps.
CATALOG: tuple[AppInfo, ...] = (
    AppInfo(
        name="Social Media App",
        package_id="com.example.social",
        memory_usage_mb=245,
        battery_drain_pct_per_hour=2.5,
        background_time_minutes=120,
    ),
    AppInfo(
        name="Maps Navigation",
        package_id="com.example.maps",
        memory_usage_mb=180,
        battery_drain_pct_per_hour=4.2,
        background_time_minutes=30,
    ),
    AppInfo(
        name="Email Client",
        package_id="com.example.mail",
        memory_usage_mb=120,
        battery_drain_pct_per_hour=0.8,
        background_time_minutes=240,
    ),
    AppInfo(
        name="Weather App",
        package_id="com.example.weather",
        memory_usage_mb=75,
        battery_drain_pct_per_hour=0.3,
        background_time_minutes=15,
    ),
    AppInfo(
        name="Game App",
        package_id="com.example.game",
        memory_usage_mb=320,
        battery_drain_pct_per_hour=5.1,
        background_time_minutes=60,
    ),
)


class AppInventory:
    """Lists the apps fed to the recommender, host app last."""

    def __init__(self, identity: AppIdentityProvider | None = None) -> None:
        self._identity = identity or StaticAppIdentity()

    def list(self) -> list[AppInfo]:
        return [*CATALOG, self._host_app()]

    def _host_app(self) -> AppInfo:
        name, app_id = DEFAULT_APP_NAME, DEFAULT_APP_ID
        try:
            name = self._identity.application_name() or DEFAULT_APP_NAME
            app_id = self._identity.application_id() or DEFAULT_APP_ID
        except Exception:
            logger.warning("Could not read application identity, using defaults", exc_info=True)
        return AppInfo(
            name=name,
            package_id=app_id,
            memory_usage_mb=85,
            battery_drain_pct_per_hour=0.7,
            background_time_minutes=0,  # foreground
        )
