import logging
import os
import sys
from typing import Iterable, List, Optional, Protocol

from pin_hwmon.models.hardware import HardwareType, Sensor, SensorType

logger = logging.getLogger(__name__)

_LHM_ASSEMBLY = "LibreHardwareMonitorLib"

_runtime_loaded = False


class ProviderUnavailableError(RuntimeError):
    """Raised when the hardware-monitoring library cannot be loaded or opened."""


class Hardware(Protocol):
    hardware_type: HardwareType
    name: str
    identifier: str

    @property
    def sub_hardware(self) -> Iterable["Hardware"]: ...

    @property
    def sensors(self) -> Iterable[Sensor]: ...

    def update(self) -> None: ...


class HardwareProvider(Protocol):
    def open(self) -> None: ...

    def close(self) -> None: ...

    def hardware(self) -> Iterable[Hardware]: ...


def refresh(device: Hardware) -> None:
    """Update a device and all of its sub-devices, depth first."""
    device.update()
    for sub in device.sub_hardware:
        refresh(sub)


def close_quietly(provider: HardwareProvider) -> None:
    """
    Close the provider and swallow any error raised while doing so.

    Shutdown failures must never change the outcome of a command, so they are
    only logged at debug level.
    """
    try:
        provider.close()
    except Exception as exc:
        logger.debug("Ignoring error while closing hardware provider: %s", exc)


def _load_runtime(lhm_dir: Optional[str]):
    global _runtime_loaded

    try:
        import pythonnet

        if not _runtime_loaded:
            pythonnet.load("coreclr")
            _runtime_loaded = True
        import clr
    except Exception as exc:
        raise ProviderUnavailableError(
            "pythonnet with a .NET runtime is required to read hardware sensors"
        ) from exc

    if lhm_dir:
        lhm_dir = os.path.abspath(lhm_dir)
        if lhm_dir not in sys.path:
            sys.path.insert(0, lhm_dir)

    try:
        clr.AddReference(_LHM_ASSEMBLY)
        from LibreHardwareMonitor.Hardware import Computer
    except Exception as exc:
        raise ProviderUnavailableError(
            f"{_LHM_ASSEMBLY}.dll not found; pass --lhm-dir=<directory>"
        ) from exc

    return Computer


class LibreHardwareMonitorHardware:
    """Thin adapter around a LibreHardwareMonitor IHardware handle."""

    def __init__(self, handle) -> None:
        self._handle = handle

    @property
    def hardware_type(self) -> HardwareType:
        return HardwareType.parse(str(self._handle.HardwareType))

    @property
    def name(self) -> str:
        return str(self._handle.Name)

    @property
    def identifier(self) -> str:
        return str(self._handle.Identifier)

    @property
    def sub_hardware(self) -> List["LibreHardwareMonitorHardware"]:
        return [LibreHardwareMonitorHardware(sub) for sub in self._handle.SubHardware]

    @property
    def sensors(self) -> List[Sensor]:
        sensors: List[Sensor] = []
        for sensor in self._handle.Sensors:
            value = sensor.Value
            sensors.append(
                Sensor(
                    name=str(sensor.Name),
                    sensor_type=SensorType.parse(str(sensor.SensorType)),
                    value=None if value is None else float(value),
                )
            )
        return sensors

    def update(self) -> None:
        self._handle.Update()


class LibreHardwareMonitorProvider:
    """
    Hardware provider backed by LibreHardwareMonitor through pythonnet.

    The .NET runtime and the LibreHardwareMonitorLib assembly are only loaded
    in open(), so importing this module works on hosts without either.
    """

    def __init__(self, lhm_dir: Optional[str] = None) -> None:
        self.lhm_dir = lhm_dir
        self._computer = None

    def open(self) -> None:
        computer_cls = _load_runtime(self.lhm_dir)

        computer = computer_cls()
        computer.IsCpuEnabled = True
        computer.IsGpuEnabled = True
        computer.IsStorageEnabled = True
        computer.IsMotherboardEnabled = True
        computer.IsControllerEnabled = True
        try:
            computer.Open()
        except Exception as exc:
            raise ProviderUnavailableError(
                f"Could not open hardware monitor: {exc}"
            ) from exc

        self._computer = computer
        logger.debug("LibreHardwareMonitor opened")

    def close(self) -> None:
        if self._computer is None:
            return
        computer, self._computer = self._computer, None
        computer.Close()

    def hardware(self) -> List[LibreHardwareMonitorHardware]:
        if self._computer is None:
            raise RuntimeError("Hardware provider is not open")
        return [LibreHardwareMonitorHardware(hw) for hw in self._computer.Hardware]
