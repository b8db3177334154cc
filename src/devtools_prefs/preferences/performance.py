"""Preferences for the performance screen."""

from typing import Optional

from ..core.observable import ObservableValue
from ..storage.key_value import KeyValueStorage
from .base import BasePreferencesController, RunAsync, bool_to_storage, bool_value_from_storage

SHOW_FLUTTER_FRAMES_CHART_STORAGE_ID = "performance.showFlutterFramesChart"
INCLUDE_CPU_SAMPLES_STORAGE_ID = "performance.includeCpuSamplesInTimeline"


class PerformancePreferencesController(BasePreferencesController):
    """Timeline frames chart and CPU sample settings."""

    def __init__(self, storage: KeyValueStorage, run_async: RunAsync):
        super().__init__(storage, run_async)
        self.show_flutter_frames_chart = ObservableValue(True)
        self.include_cpu_samples_in_timeline = ObservableValue(False)

    async def _load(self) -> None:
        self.toggle_show_flutter_frames_chart(
            await bool_value_from_storage(
                self.storage, SHOW_FLUTTER_FRAMES_CHART_STORAGE_ID, defaults_to=True
            )
        )
        self.write_back(
            self.show_flutter_frames_chart, SHOW_FLUTTER_FRAMES_CHART_STORAGE_ID, bool_to_storage
        )

        self.toggle_include_cpu_samples(
            await bool_value_from_storage(self.storage, INCLUDE_CPU_SAMPLES_STORAGE_ID, defaults_to=False)
        )
        self.write_back(
            self.include_cpu_samples_in_timeline, INCLUDE_CPU_SAMPLES_STORAGE_ID, bool_to_storage
        )

    def toggle_show_flutter_frames_chart(self, show: Optional[bool]) -> None:
        if show is not None:
            self.show_flutter_frames_chart.value = show

    def toggle_include_cpu_samples(self, include: Optional[bool]) -> None:
        if include is not None:
            self.include_cpu_samples_in_timeline.value = include
