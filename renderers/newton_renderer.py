import logging
import time
from functools import partial
from typing import List, Optional, Tuple

import numpy as np

from core.complex import Complex
from core.polynomial import ComplexPolynomial, ComplexRootedPolynomial
from core.scene import NewtonSettings
from renderers.base_renderer import (BaseRenderer, FractalObserver, RenderError,
                                     RendererFactory, check_dimensions)
from renderers.worker_pool import WorkerPool

logger = logging.getLogger(__name__)


def newton_iterate(polynomial: ComplexPolynomial,
                   derived: ComplexPolynomial,
                   z: Complex,
                   threshold: float,
                   max_iterations: int) -> Complex:
    """Run z <- z - P(z)/P'(z) until the step is at most threshold or the cap is hit."""
    for _ in range(max_iterations):
        next_z = z - polynomial.apply(z) / derived.apply(z)
        step = (next_z - z).module()
        z = next_z
        if step <= threshold:
            break
    return z


def split_bands(height: int, count: int) -> List[Tuple[int, int]]:
    """Split rows [0, height) into at most count contiguous non-empty bands."""
    return [(int(rows[0]), int(rows[-1]) + 1)
            for rows in np.array_split(np.arange(height), count) if rows.size]


class NewtonRenderer(BaseRenderer):
    """Newton-Raphson fractal producer working on a fixed pool of threads."""

    CAPABILITIES = ("newton_fractal", "row_bands", "worker_pool")

    def __init__(self,
                 rooted_polynomial: ComplexRootedPolynomial,
                 pool: Optional[WorkerPool] = None,
                 settings: Optional[NewtonSettings] = None):
        super().__init__("newton")
        self.rooted_polynomial = rooted_polynomial
        self.polynomial = rooted_polynomial.to_complex_polynomial()
        self.derived = self.polynomial.derive()
        self.settings = settings or NewtonSettings()

        self._owns_pool = pool is None
        self.pool = pool if pool is not None else WorkerPool()

    def get_capabilities(self) -> List[str]:
        return list(self.CAPABILITIES)

    def palette_size(self) -> int:
        return self.polynomial.order() + 1

    def produce(self,
                re_min: float, re_max: float,
                im_min: float, im_max: float,
                width: int, height: int,
                request_id,
                observer: FractalObserver) -> None:
        check_dimensions(width, height)
        start_time = time.time()

        bands = split_bands(height, self.settings.worker_factor * self.pool.size)
        logger.info("Newton request %s: %dx%d in %d bands, %s",
                    request_id, width, height, len(bands), self.rooted_polynomial)

        data = np.zeros(width * height, dtype=np.uint16)
        bounds = (re_min, re_max, im_min, im_max)
        tasks = [partial(self._calculate_band, data, bounds, width, height, y_min, y_max)
                 for y_min, y_max in bands]
        try:
            self.pool.run_all(tasks)
        except Exception as e:
            logger.error("Newton request %s failed: %r", request_id, e)
            raise RenderError(request_id, e) from e

        logger.info("Newton request %s finished in %.2fs", request_id, time.time() - start_time)
        observer(data, self.palette_size(), request_id)

    def _calculate_band(self, data: np.ndarray, bounds, width: int, height: int,
                        y_min: int, y_max: int):
        re_min, re_max, im_min, im_max = bounds
        threshold = self.settings.convergence_threshold
        max_iterations = self.settings.max_iterations

        for y in range(y_min, y_max):
            im = (height - 1.0 - y) / (height - 1) * (im_max - im_min) + im_min
            row = []
            for x in range(width):
                re = x / (width - 1.0) * (re_max - re_min) + re_min
                z = newton_iterate(self.polynomial, self.derived, Complex(re, im),
                                   threshold, max_iterations)
                index = self.rooted_polynomial.index_of_closest_root_for(z, threshold)
                row.append(index + 1)
            data[y * width:(y + 1) * width] = row

    def close(self):
        if self._owns_pool:
            self.pool.close()


RendererFactory.register("newton", NewtonRenderer)
