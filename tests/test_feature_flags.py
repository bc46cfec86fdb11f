from feature_flags import (
    get_trace_feature,
    is_trace_enabled,
    reload as reload_features,
)


def setup_function():
    reload_features()


def test_trace_disabled_by_default():
    assert is_trace_enabled({}, profile="dev") is False


def test_trace_can_be_overridden_via_env():
    assert is_trace_enabled({"CLI_SEARCH_TRACE": "1"}, profile="dev") is True
    assert is_trace_enabled({"SEARCH_TRACE": "off"}, profile="debug") is False
    assert is_trace_enabled({"PUZZLE_SEARCH_TRACE": "true"}, profile="prod") is True


def test_cli_override_takes_priority():
    env = {"CLI_SEARCH_TRACE": "0", "SEARCH_TRACE": "1"}
    assert is_trace_enabled(env, profile="dev") is False


def test_unparseable_override_is_ignored():
    assert is_trace_enabled({"SEARCH_TRACE": "maybe"}, profile="debug") is True


def test_trace_feature_merges_profile_overrides():
    assert get_trace_feature("dev") == {"enabled": False}
    assert get_trace_feature("DEBUG")["enabled"] is True
    assert "by_profile" not in get_trace_feature(None)


def test_settings_take_trace_from_feature_flags():
    from solver.settings import resolve_settings

    env = {"PUZZLE_SEARCH_TRACE": "maybe", "SEARCH_TRACE": "0"}
    assert resolve_settings("debug", env).trace_enabled is is_trace_enabled(env, profile="debug") is False
    assert resolve_settings("prod", {"CLI_SEARCH_TRACE": "yes"}).trace_enabled is True
