import logging
from typing import List, Optional, Sequence, Tuple

import pytest

from pin_hwmon.models.hardware import HardwareType, Sensor, SensorType


def temp(name: str, value: Optional[float]) -> Sensor:
    return Sensor(name=name, sensor_type=SensorType.TEMPERATURE, value=value)


class FakeHardware:
    """In-memory stand-in for a provider hardware device."""

    def __init__(
        self,
        hardware_type: HardwareType,
        name: str,
        sensors: Sequence[Sensor] = (),
        identifier: str = "",
        sub_hardware: Sequence["FakeHardware"] = (),
        fail_on_sensors: bool = False,
        fail_on_update: bool = False,
    ) -> None:
        self.hardware_type = hardware_type
        self.name = name
        self.identifier = identifier or f"/{hardware_type.value.lower()}/0"
        self._sensors = list(sensors)
        self.sub_hardware = list(sub_hardware)
        self.fail_on_sensors = fail_on_sensors
        self.fail_on_update = fail_on_update
        self.updates = 0

    @property
    def sensors(self) -> List[Sensor]:
        if self.fail_on_sensors:
            raise RuntimeError(f"sensor read failed for {self.name}")
        return self._sensors

    def update(self) -> None:
        if self.fail_on_update:
            raise RuntimeError(f"update failed for {self.name}")
        self.updates += 1


class FakeProvider:
    def __init__(self, devices: Sequence[FakeHardware] = (), fail_on_close: bool = False):
        self.devices = list(devices)
        self.fail_on_close = fail_on_close
        self.events: List[str] = []

    def open(self) -> None:
        self.events.append("open")

    def close(self) -> None:
        self.events.append("close")
        if self.fail_on_close:
            raise RuntimeError("driver unload failed")

    def hardware(self) -> List[FakeHardware]:
        return self.devices


def desktop(
    cpu: Optional[float] = None,
    gpu: Optional[float] = None,
    nvme: Sequence[Tuple[str, Optional[float]]] = (),
) -> List[FakeHardware]:
    """Build a device list with one CPU package, one GPU hot spot and NVMe drives."""
    devices = [
        FakeHardware(HardwareType.CPU, "AMD Ryzen 7 5800X", [temp("Core (Tctl/Tdie)", cpu)]),
        FakeHardware(HardwareType.GPU_NVIDIA, "NVIDIA GeForce RTX 3080", [temp("GPU Hot Spot", gpu)]),
    ]
    for name, value in nvme:
        sensors = [temp("Composite", value)] if value is not None else []
        devices.append(FakeHardware(HardwareType.STORAGE, name, sensors, identifier="/nvme/0"))
    return devices


@pytest.fixture
def fake_provider():
    return FakeProvider(desktop(cpu=72.3, gpu=70.5, nvme=[("Samsung SSD 980 PRO 1TB", 41.0)]))


@pytest.fixture(autouse=True)
def reset_pin_hwmon_logger():
    yield
    logger = logging.getLogger("pin_hwmon")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
