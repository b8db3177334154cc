import logging

import pytest

from devtools_prefs.core.collaborators import (
    BASIC_LOGGING_LEVEL,
    VERBOSE_LOGGING_LEVEL,
    VmServiceFlags,
)
from devtools_prefs.preferences import (
    PreferencesController,
    bool_value_from_storage,
    int_value_from_storage,
)
from devtools_prefs.preferences.base import list_value_from_storage

from fakes import RecordingAnalytics, RecordingStorage, run_now


def make_controller(storage, **kwargs):
    levels = []
    kwargs.setdefault("set_log_level", levels.append)
    controller = PreferencesController(storage, run_now, **kwargs)
    return controller, levels


@pytest.mark.parametrize(
    "stored, defaults_to, expected",
    [
        (None, True, True),
        (None, False, False),
        ("true", False, True),
        ("false", True, False),
        ("true", True, True),
        ("false", False, False),
        ("garbage", True, True),
        ("garbage", False, False),
    ],
)
def test_bool_value_from_storage(stored, defaults_to, expected):
    storage = RecordingStorage({} if stored is None else {"key": stored})
    assert run_now(bool_value_from_storage(storage, "key", defaults_to=defaults_to)) is expected


def test_int_value_from_storage():
    storage = RecordingStorage({"good": "12", "bad": "twelve"})
    assert run_now(int_value_from_storage(storage, "good", defaults_to=3)) == 12
    assert run_now(int_value_from_storage(storage, "bad", defaults_to=3)) == 3
    assert run_now(int_value_from_storage(storage, "missing", defaults_to=3)) == 3


def test_list_value_from_storage():
    storage = RecordingStorage({"good": '["a", "b"]', "bad": "[", "wrong": '{"a": 1}'})
    assert run_now(list_value_from_storage(storage, "good")) == ["a", "b"]
    assert run_now(list_value_from_storage(storage, "bad")) == []
    assert run_now(list_value_from_storage(storage, "wrong")) == []
    assert run_now(list_value_from_storage(storage, "missing")) == []


def test_defaults_when_storage_is_empty(storage):
    controller, levels = make_controller(storage)

    run_now(controller.init())

    assert controller.dark_mode_enabled.value is True
    assert controller.vm_developer_mode_enabled.value is False
    assert controller.verbose_logging_enabled.value is False
    assert levels == [BASIC_LOGGING_LEVEL]
    assert controller.inspector.hover_eval_mode_enabled.value is True
    assert controller.inspector.auto_refresh_enabled.value is True
    assert controller.inspector.custom_pub_root_directories.value == []
    assert controller.memory.android_collection_enabled.value is False
    assert controller.memory.show_chart.value is True
    assert controller.memory.ref_limit.value == 100000
    assert controller.logging.retention_limit.value == 3000
    assert controller.performance.show_flutter_frames_chart.value is True
    assert controller.performance.include_cpu_samples_in_timeline.value is False
    assert controller.extensions.show_only_enabled_extensions.value is False
    assert storage.writes == []


def test_stored_values_are_loaded():
    storage = RecordingStorage(
        {
            "ui.darkMode": "false",
            "ui.vmDeveloperMode": "true",
            "verboseLogging": "true",
            "inspector.hoverEvalMode": "false",
            "inspector.customPubRootDirectories": '["lib", "packages/app"]',
            "memory.refLimit": "500",
            "logging.retentionLimit": "10",
            "performance.includeCpuSamplesInTimeline": "true",
            "devtools_extensions.showOnlyEnabledExtensions": "true",
        }
    )
    flags = VmServiceFlags()
    controller, levels = make_controller(storage, vm_service_flags=flags)

    run_now(controller.init())

    assert controller.dark_mode_enabled.value is False
    assert controller.vm_developer_mode_enabled.value is True
    assert flags.enable_private_rpcs is True
    assert controller.verbose_logging_enabled.value is True
    assert levels == [VERBOSE_LOGGING_LEVEL]
    assert controller.inspector.hover_eval_mode_enabled.value is False
    assert controller.inspector.custom_pub_root_directories.value == ["lib", "packages/app"]
    assert controller.memory.ref_limit.value == 500
    assert controller.logging.retention_limit.value == 10
    assert controller.performance.include_cpu_samples_in_timeline.value is True
    assert controller.extensions.show_only_enabled_extensions.value is True
    assert storage.writes == []


def test_dark_mode_only_disabled_by_explicit_false():
    controller, _ = make_controller(RecordingStorage({"ui.darkMode": "nonsense"}))
    run_now(controller.init())
    assert controller.dark_mode_enabled.value is False


def test_starting_theme_impression(storage):
    analytics = RecordingAnalytics()
    controller, _ = make_controller(storage, analytics=analytics)

    run_now(controller.init())

    assert analytics.impressions == [("main", "startingTheme-dark")]


def test_toggle_none_leaves_value_unchanged(storage):
    flags = VmServiceFlags()
    controller, levels = make_controller(storage, vm_service_flags=flags)
    run_now(controller.init())
    levels.clear()

    controller.toggle_dark_mode_theme(None)
    controller.toggle_vm_developer_mode(None)
    controller.toggle_verbose_logging(None)
    controller.memory.set_ref_limit(None)
    controller.inspector.toggle_auto_refresh(None)

    assert controller.dark_mode_enabled.value is True
    assert controller.vm_developer_mode_enabled.value is False
    assert flags.enable_private_rpcs is False
    assert controller.verbose_logging_enabled.value is False
    assert controller.memory.ref_limit.value == 100000
    assert controller.inspector.auto_refresh_enabled.value is True
    assert levels == []
    assert storage.writes == []


def test_toggle_writes_stringified_value_once(storage):
    controller, _ = make_controller(storage)
    run_now(controller.init())

    controller.toggle_dark_mode_theme(False)

    assert controller.dark_mode_enabled.value is False
    assert storage.writes == [("ui.darkMode", "false")]


def test_each_flag_writes_its_own_key(storage):
    controller, levels = make_controller(storage)
    run_now(controller.init())

    controller.toggle_vm_developer_mode(True)
    controller.toggle_verbose_logging(True)
    controller.inspector.toggle_hover_eval_mode(False)
    controller.memory.toggle_android_collection(True)
    controller.memory.set_ref_limit(7)
    controller.logging.set_retention_limit(25)
    controller.performance.toggle_show_flutter_frames_chart(False)
    controller.extensions.toggle_show_only_enabled_extensions(True)

    assert storage.writes == [
        ("ui.vmDeveloperMode", "true"),
        ("verboseLogging", "true"),
        ("inspector.hoverEvalMode", "false"),
        ("memory.androidCollectionEnabled", "true"),
        ("memory.refLimit", "7"),
        ("logging.retentionLimit", "25"),
        ("performance.showFlutterFramesChart", "false"),
        ("devtools_extensions.showOnlyEnabledExtensions", "true"),
    ]
    assert controller.vm_service_flags.enable_private_rpcs is True
    assert levels[-1] == VERBOSE_LOGGING_LEVEL


def test_verbose_logging_uses_root_logger_by_default(storage):
    controller = PreferencesController(storage, run_now)
    run_now(controller.init())

    controller.toggle_verbose_logging(True)
    assert logging.getLogger().level == VERBOSE_LOGGING_LEVEL

    controller.toggle_verbose_logging(False)
    assert logging.getLogger().level == BASIC_LOGGING_LEVEL


def test_pub_root_directories_are_persisted_as_json(storage):
    controller, _ = make_controller(storage)
    run_now(controller.init())
    inspector = controller.inspector

    inspector.add_pub_root_directories(["lib", "lib", "test"])
    inspector.add_pub_root_directories(["lib"])
    inspector.remove_pub_root_directories(["lib", "unknown"])

    assert inspector.custom_pub_root_directories.value == ["test"]
    assert storage.writes == [
        ("inspector.customPubRootDirectories", '["lib", "test"]'),
        ("inspector.customPubRootDirectories", '["test"]'),
    ]


def test_init_is_idempotent(storage):
    controller, _ = make_controller(storage)
    run_now(controller.init())
    reads = len(storage.reads)

    run_now(controller.init())
    controller.toggle_dark_mode_theme(False)

    assert len(storage.reads) == reads
    assert controller.is_initialized
    assert storage.writes == [("ui.darkMode", "false")]


def test_no_writes_before_init(storage):
    controller, _ = make_controller(storage)

    controller.toggle_dark_mode_theme(False)

    assert controller.dark_mode_enabled.value is False
    assert storage.writes == []


def test_dispose_stops_write_back(storage):
    controller, _ = make_controller(storage)
    run_now(controller.init())

    controller.dispose()
    controller.toggle_dark_mode_theme(False)
    controller.toggle_verbose_logging(True)
    controller.memory.toggle_show_chart(False)
    controller.extensions.toggle_show_only_enabled_extensions(True)

    assert storage.writes == []
    assert not controller.dark_mode_enabled.has_listeners
    assert not controller.memory.show_chart.has_listeners


def test_last_written_value_is_read_back():
    storage = RecordingStorage()
    first, _ = make_controller(storage)
    run_now(first.init())
    first.toggle_dark_mode_theme(False)
    first.memory.set_ref_limit(9)
    first.dispose()

    second, _ = make_controller(RecordingStorage(storage.values))
    run_now(second.init())

    assert second.dark_mode_enabled.value is False
    assert second.memory.ref_limit.value == 9
