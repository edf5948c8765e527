import os
from concurrent.futures import Executor, ThreadPoolExecutor, wait
from typing import Optional

from core.camera import Camera
from core.scene import Scene, RenderSettings
from renderers.base_renderer import RendererFactory
from renderers.cpu_renderer import CPURenderer, Buffers


class ParallelCPURenderer(CPURenderer):
    """Ray caster that splits the rows in halves recursively (fork/join).

    Every leaf renders exactly its own row range, so the output matches the
    sequential renderer pixel for pixel.
    """

    CAPABILITIES = CPURenderer.CAPABILITIES + ("fork_join",)

    def __init__(self, scene: Scene, settings: Optional[RenderSettings] = None,
                 workers: Optional[int] = None):
        super().__init__(scene, settings, name="raycaster_parallel")
        self.workers = workers or os.cpu_count() or 1

    def _fill(self, camera: Camera, buffers: Buffers):
        # the executor lives for one render only
        with ThreadPoolExecutor(max_workers=self.workers,
                                thread_name_prefix="raycast-fork") as executor:
            self._compute(executor, camera, buffers, 0, camera.height - 1)

    def _compute(self, executor: Executor, camera: Camera, buffers: Buffers,
                 row_min: int, row_max: int):
        """Render the inclusive row range [row_min, row_max]."""
        if row_max - row_min <= self.settings.split_threshold:
            self._render_rows(camera, buffers, row_min, row_max + 1)
            return

        limit = (row_min + row_max) // 2
        forked = executor.submit(self._compute, executor, camera, buffers, limit + 1, row_max)
        try:
            self._compute(executor, camera, buffers, row_min, limit)
        except BaseException:
            if not forked.cancel():
                wait([forked])
            raise

        # nobody picked the forked half up yet: do it here instead of blocking a worker
        if forked.cancel():
            self._compute(executor, camera, buffers, limit + 1, row_max)
        else:
            forked.result()


RendererFactory.register("raycaster_parallel", ParallelCPURenderer)
