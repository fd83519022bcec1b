from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class HardwareType(str, Enum):
    """Hardware classification as reported by the monitoring provider."""

    CPU = "Cpu"
    GPU_AMD = "GpuAmd"
    GPU_NVIDIA = "GpuNvidia"
    GPU_INTEL = "GpuIntel"
    STORAGE = "Storage"
    MOTHERBOARD = "Motherboard"
    SUPER_IO = "SuperIO"
    EMBEDDED_CONTROLLER = "EmbeddedController"
    OTHER = "Other"

    @classmethod
    def parse(cls, raw: str) -> "HardwareType":
        try:
            return cls(raw)
        except ValueError:
            return cls.OTHER


GPU_TYPES = frozenset(
    {HardwareType.GPU_AMD, HardwareType.GPU_NVIDIA, HardwareType.GPU_INTEL}
)


class SensorType(str, Enum):
    TEMPERATURE = "Temperature"
    LOAD = "Load"
    FAN = "Fan"
    CLOCK = "Clock"
    POWER = "Power"
    VOLTAGE = "Voltage"
    OTHER = "Other"

    @classmethod
    def parse(cls, raw: str) -> "SensorType":
        try:
            return cls(raw)
        except ValueError:
            return cls.OTHER


class Sensor(BaseModel):
    """A single sensor value copied out of the provider."""

    name: str = Field(..., description="Sensor name, e.g. 'CPU Package'")
    sensor_type: SensorType = Field(
        ...,
        description="Sensor classification; only Temperature is used for selection",
    )
    value: Optional[float] = Field(
        None,
        description="Last refreshed value, absent if the sensor did not report",
    )
