from pin_hwmon.config import Settings, parse_threshold


def test_settings_defaults():
    settings = Settings.from_args([])

    assert settings.command == "read"
    assert settings.cpu_max == 85.0
    assert settings.gpu_max == 90.0
    assert settings.lhm_dir is None
    assert settings.verbose is False


def test_settings_from_args_parses_thresholds():
    settings = Settings.from_args(["check", "--cpu-max=80.5", "--gpu-max=95"])

    assert settings.command == "check"
    assert settings.cpu_max == 80.5
    assert settings.gpu_max == 95.0


def test_malformed_threshold_keeps_default():
    settings = Settings.from_args(["check", "--cpu-max=hot", "--gpu-max="])

    assert settings.cpu_max == 85.0
    assert settings.gpu_max == 90.0


def test_malformed_threshold_keeps_earlier_value():
    settings = Settings.from_args(["check", "--cpu-max=70", "--cpu-max=seventy"])

    assert settings.cpu_max == 70.0


def test_parse_threshold_uses_dot_decimal():
    assert parse_threshold("82.5", 85.0) == 82.5
    assert parse_threshold("82,5", 85.0) == 85.0


def test_command_is_lowercased_and_flags_parsed_anywhere():
    settings = Settings.from_args(["METRICS", "--verbose", "--lhm-dir=C:\\lhm"])

    assert settings.command == "metrics"
    assert settings.verbose is True
    assert settings.lhm_dir == "C:\\lhm"
