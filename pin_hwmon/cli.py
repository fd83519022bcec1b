import logging
import sys
from typing import Optional, Sequence

from pin_hwmon.config import Settings
from pin_hwmon.logging_config import setup_logger
from pin_hwmon.services import formatters
from pin_hwmon.services.provider import (
    HardwareProvider,
    LibreHardwareMonitorProvider,
    ProviderUnavailableError,
)
from pin_hwmon.services.thermal_monitor import collect_snapshot, opened

EXIT_PROVIDER_UNAVAILABLE = 1

logger = logging.getLogger(__name__)


def run(settings: Settings, provider: HardwareProvider) -> int:
    """
    Execute one command against an already constructed provider.

    The provider stays open while the output is rendered and is closed on
    every exit path; errors from closing it are ignored.
    """
    renderer = formatters.RENDERERS.get(settings.command)
    if renderer is None:
        result = formatters.render_usage()
        sys.stdout.write(result.text)
        return result.exit_code

    with opened(provider):
        snapshot = collect_snapshot(provider.hardware())
        result = renderer(snapshot, settings)
        sys.stdout.write(result.text)
    return result.exit_code


def main(argv: Optional[Sequence[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    settings = Settings.from_args(argv)
    setup_logger("pin_hwmon", logging.DEBUG if settings.verbose else logging.WARNING)

    provider = LibreHardwareMonitorProvider(lhm_dir=settings.lhm_dir)
    try:
        return run(settings, provider)
    except ProviderUnavailableError as exc:
        logger.error("%s", exc)
        return EXIT_PROVIDER_UNAVAILABLE


if __name__ == "__main__":
    raise SystemExit(main())
