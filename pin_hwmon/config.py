from typing import List, Optional, Sequence

from pydantic import BaseModel, Field

DEFAULT_COMMAND = "read"
DEFAULT_CPU_MAX = 85.0
DEFAULT_GPU_MAX = 90.0

_CPU_MAX_FLAG = "--cpu-max="
_GPU_MAX_FLAG = "--gpu-max="
_LHM_DIR_FLAG = "--lhm-dir="
_VERBOSE_FLAG = "--verbose"


def parse_threshold(raw: str, default: float) -> float:
    """
    Parse a threshold value from the command line.

    Malformed values are ignored on purpose: the caller keeps its default
    instead of failing the invocation.
    """
    try:
        return float(raw.strip())
    except ValueError:
        return default


class Settings(BaseModel):
    command: str = Field(
        default=DEFAULT_COMMAND,
        description="Output mode: read, json, check or metrics",
    )
    cpu_max: float = Field(
        default=DEFAULT_CPU_MAX,
        description="CPU temperature in Celsius at or above which 'check' reports HOT",
    )
    gpu_max: float = Field(
        default=DEFAULT_GPU_MAX,
        description="GPU temperature in Celsius at or above which 'check' reports HOT",
    )
    lhm_dir: Optional[str] = Field(
        default=None,
        description="Directory containing LibreHardwareMonitorLib.dll",
    )
    verbose: bool = Field(
        default=False,
        description="Log debug diagnostics to stderr",
    )

    @classmethod
    def from_args(cls, argv: Sequence[str]) -> "Settings":
        args: List[str] = list(argv)
        # The first argument is always the command, even if it looks like a flag
        command = args[0].lower() if args else DEFAULT_COMMAND

        cpu_max = DEFAULT_CPU_MAX
        gpu_max = DEFAULT_GPU_MAX
        lhm_dir: Optional[str] = None
        verbose = False
        for arg in args:
            if arg.startswith(_CPU_MAX_FLAG):
                cpu_max = parse_threshold(arg[len(_CPU_MAX_FLAG):], cpu_max)
            elif arg.startswith(_GPU_MAX_FLAG):
                gpu_max = parse_threshold(arg[len(_GPU_MAX_FLAG):], gpu_max)
            elif arg.startswith(_LHM_DIR_FLAG):
                lhm_dir = arg[len(_LHM_DIR_FLAG):] or None
            elif arg == _VERBOSE_FLAG:
                verbose = True

        return cls(
            command=command,
            cpu_max=cpu_max,
            gpu_max=gpu_max,
            lhm_dir=lhm_dir,
            verbose=verbose,
        )
