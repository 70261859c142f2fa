from festival.config import Settings
from festival.logging import resolve_options


def test_command_line_level_overrides_settings():
    settings = Settings(log_level="WARNING")
    assert resolve_options(settings) == ("WARNING", False)
    assert resolve_options(settings, log_level="debug") == ("DEBUG", False)


def test_json_output_enabled_by_either_source():
    assert resolve_options(Settings(json_logs=True)) == ("INFO", True)
    assert resolve_options(Settings(), json_output=True)[1] is True
