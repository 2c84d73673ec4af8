from .app_inventory import AppInventory
from .metrics_collector import MetricsCollector
from .monitor import MetricsMonitor
from .providers import (
    HostDeviceInfo,
    PsutilBattery,
    PsutilStorage,
    StaticAppIdentity,
)
from .readings import Default, FieldReading, Ok, read_field

__all__ = [
    "AppInventory",
    "MetricsCollector",
    "MetricsMonitor",
    "HostDeviceInfo",
    "PsutilBattery",
    "PsutilStorage",
    "StaticAppIdentity",
    "Default",
    "FieldReading",
    "Ok",
    "read_field",
]
