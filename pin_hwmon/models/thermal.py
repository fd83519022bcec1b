from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class Reading(BaseModel):
    """The representative temperature picked for one device class."""

    model_config = ConfigDict(frozen=True)

    tag: str = Field(
        ...,
        description="Device class tag: 'cpu', 'gpu' or 'nvme:<device name>'",
    )
    celsius: Optional[float] = Field(
        None,
        description="Temperature in degrees Celsius, absent if no sensor reported",
    )
    sensor: Optional[str] = Field(
        None,
        description="Name of the sensor the value was taken from (selection only)",
    )


class ThermalSnapshot(BaseModel):
    """Domain model describing all temperatures read in one invocation."""

    model_config = ConfigDict(frozen=True)

    cpu: Optional[Reading] = Field(None, description="Selected CPU reading")
    gpu: Optional[Reading] = Field(None, description="Selected GPU reading")
    nvme: Dict[str, Optional[Reading]] = Field(
        default_factory=dict,
        description="NVMe readings keyed by device display name, in scan order",
    )

    @property
    def cpu_celsius(self) -> Optional[float]:
        return self.cpu.celsius if self.cpu is not None else None

    @property
    def gpu_celsius(self) -> Optional[float]:
        return self.gpu.celsius if self.gpu is not None else None

    def nvme_celsius(self) -> Dict[str, Optional[float]]:
        return {
            name: reading.celsius if reading is not None else None
            for name, reading in self.nvme.items()
        }
