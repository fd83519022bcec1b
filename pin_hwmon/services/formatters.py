import json
from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel, Field

from pin_hwmon.config import Settings
from pin_hwmon.models.thermal import ThermalSnapshot

EXIT_OK = 0
EXIT_HOT = 2
EXIT_USAGE = 2

METRIC_NAME = "pin_hwmon_temperature_celsius"
USAGE = "Usage: pin-hwmon-win [read|json|check --cpu-max=N --gpu-max=N|metrics]"


class CommandResult(BaseModel):
    """Rendered output of one command plus the process exit code."""

    lines: List[str] = Field(default_factory=list, description="Lines for stdout")
    exit_code: int = Field(EXIT_OK, description="Process exit code")

    @property
    def text(self) -> str:
        return "".join(f"{line}\n" for line in self.lines)


def format_celsius(value: float) -> str:
    """One decimal place with a dot, independent of the process locale."""
    return f"{value:.1f}"


def _display(value: Optional[float]) -> str:
    return "N/A" if value is None else f"{format_celsius(value)}°C"


def escape_label_value(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


def snapshot_payload(snapshot: ThermalSnapshot) -> Dict[str, Any]:
    """
    Build the JSON document for a snapshot.

    Absent cpu/gpu values are left out. The nvme object is always present and
    keeps every drive, with null for drives that reported no temperature.
    """
    payload: Dict[str, Any] = {}
    if snapshot.cpu_celsius is not None:
        payload["cpu"] = round(snapshot.cpu_celsius, 1)
    if snapshot.gpu_celsius is not None:
        payload["gpu"] = round(snapshot.gpu_celsius, 1)
    payload["nvme"] = {
        name: None if value is None else round(value, 1)
        for name, value in snapshot.nvme_celsius().items()
    }
    return payload


def render_read(snapshot: ThermalSnapshot, settings: Settings) -> CommandResult:
    lines = [
        f"CPU: {_display(snapshot.cpu_celsius)}  GPU: {_display(snapshot.gpu_celsius)}"
    ]
    for name, value in snapshot.nvme_celsius().items():
        lines.append(f"{name}: {_display(value)}")
    return CommandResult(lines=lines)


def render_json(snapshot: ThermalSnapshot, settings: Settings) -> CommandResult:
    document = json.dumps(snapshot_payload(snapshot), separators=(",", ":"))
    return CommandResult(lines=[document])


def is_hot(snapshot: ThermalSnapshot, cpu_max: float, gpu_max: float) -> bool:
    """Thresholds are inclusive; an absent reading never counts as hot."""
    cpu = snapshot.cpu_celsius
    gpu = snapshot.gpu_celsius
    return (cpu is not None and cpu >= cpu_max) or (gpu is not None and gpu >= gpu_max)


def render_check(snapshot: ThermalSnapshot, settings: Settings) -> CommandResult:
    if is_hot(snapshot, settings.cpu_max, settings.gpu_max):
        return CommandResult(lines=["HOT"], exit_code=EXIT_HOT)
    return CommandResult(lines=["OK"], exit_code=EXIT_OK)


def render_metrics(snapshot: ThermalSnapshot, settings: Settings) -> CommandResult:
    """Prometheus text exposition lines, one per present reading."""
    samples = [("cpu", snapshot.cpu_celsius), ("gpu", snapshot.gpu_celsius)]
    samples.extend(snapshot.nvme_celsius().items())

    lines = [
        f'{METRIC_NAME}{{sensor="{escape_label_value(label)}"}} {format_celsius(value)}'
        for label, value in samples
        if value is not None
    ]
    return CommandResult(lines=lines)


def render_usage() -> CommandResult:
    return CommandResult(lines=[USAGE], exit_code=EXIT_USAGE)


RENDERERS: Dict[str, Callable[[ThermalSnapshot, Settings], CommandResult]] = {
    "read": render_read,
    "json": render_json,
    "check": render_check,
    "metrics": render_metrics,
}
