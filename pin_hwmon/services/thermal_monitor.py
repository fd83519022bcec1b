import logging
from contextlib import contextmanager
from typing import Dict, Iterable, Iterator, List, Optional, Sequence

from pin_hwmon.models.hardware import GPU_TYPES, HardwareType, Sensor, SensorType
from pin_hwmon.models.thermal import Reading, ThermalSnapshot
from pin_hwmon.services.provider import (
    Hardware,
    HardwareProvider,
    close_quietly,
    refresh,
)

logger = logging.getLogger(__name__)

# Sensor name fragments that identify the most representative temperature.
# Matching is case-insensitive and the first match ends the scan of a device.
CPU_PRIORITY_NAMES = ("package", "tctl")
GPU_PRIORITY_NAMES = ("junction", "hot spot")
NVME_PRIORITY_NAME = "composite"


def _temperatures(sensors: Iterable[Sensor]) -> List[Sensor]:
    return [s for s in sensors if s.sensor_type == SensorType.TEMPERATURE]


def _matches(sensor: Sensor, names: Sequence[str]) -> bool:
    lowered = sensor.name.lower()
    return any(name in lowered for name in names)


def select_preferred(
    tag: str,
    sensors: Iterable[Sensor],
    priority_names: Sequence[str],
    current: Optional[Reading] = None,
) -> Optional[Reading]:
    """
    Pick the representative temperature from one device's sensors.

    A sensor whose name contains one of priority_names wins immediately.
    Otherwise the first temperature with a value becomes the fallback, unless
    current (carried over from an earlier device of the same class) already
    holds one.
    """
    selected = current
    for sensor in _temperatures(sensors):
        if _matches(sensor, priority_names):
            return Reading(tag=tag, celsius=sensor.value, sensor=sensor.name)
        if selected is None or selected.celsius is None:
            selected = Reading(tag=tag, celsius=sensor.value, sensor=sensor.name)
    return selected


def select_nvme(name: str, sensors: Iterable[Sensor]) -> Optional[Reading]:
    """Pick the Composite sensor of an NVMe drive, else its first temperature."""
    tag = f"nvme:{name}"
    selected: Optional[Reading] = None
    for sensor in _temperatures(sensors):
        if selected is None or selected.celsius is None:
            selected = Reading(tag=tag, celsius=sensor.value, sensor=sensor.name)
        if NVME_PRIORITY_NAME in sensor.name.lower():
            return Reading(tag=tag, celsius=sensor.value, sensor=sensor.name)
    return selected


def is_nvme(device: Hardware) -> bool:
    return "nvme" in device.name.lower() or "/nvme/" in device.identifier


def collect_snapshot(devices: Iterable[Hardware]) -> ThermalSnapshot:
    """
    Refresh and read every device and reduce the sensors to one reading per
    device class.

    A device whose refresh or sensor enumeration raises is skipped entirely;
    its sensors are copied out before any selection happens, so a failing
    device never contributes a partial reading.
    """
    cpu: Optional[Reading] = None
    gpu: Optional[Reading] = None
    nvme: Dict[str, Optional[Reading]] = {}

    for device in devices:
        try:
            refresh(device)
            hardware_type = device.hardware_type
            if hardware_type == HardwareType.CPU:
                sensors = list(device.sensors)
                cpu = select_preferred("cpu", sensors, CPU_PRIORITY_NAMES, cpu)
            elif hardware_type in GPU_TYPES:
                sensors = list(device.sensors)
                gpu = select_preferred("gpu", sensors, GPU_PRIORITY_NAMES, gpu)
            elif hardware_type == HardwareType.STORAGE and is_nvme(device):
                name = device.name
                sensors = list(device.sensors)
                nvme[name] = select_nvme(name, sensors)
        except Exception as exc:
            logger.debug("Skipping hardware device after read error: %s", exc)

    return ThermalSnapshot(cpu=cpu, gpu=gpu, nvme=nvme)


@contextmanager
def opened(provider: HardwareProvider) -> Iterator[HardwareProvider]:
    """Keep the provider open for the duration of the block and always close it."""
    provider.open()
    try:
        yield provider
    finally:
        close_quietly(provider)


def read_snapshot(provider: HardwareProvider) -> ThermalSnapshot:
    with opened(provider):
        return collect_snapshot(provider.hardware())
