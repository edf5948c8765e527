import numpy as np
import pytest

from core.complex import Complex
from core.polynomial import ComplexRootedPolynomial
from core.scene import NewtonSettings
from renderers.base_renderer import RenderError, RendererFactory
from renderers.newton_renderer import NewtonRenderer, newton_iterate, split_bands
from renderers.worker_pool import WorkerPool

SETTINGS = NewtonSettings()


class Collector:
    def __init__(self):
        self.calls = []

    def __call__(self, *args):
        self.calls.append(args)


@pytest.fixture
def pool():
    with WorkerPool(3) as p:
        yield p


def sequential_reference(rooted, re_min, re_max, im_min, im_max, width, height):
    polynomial = rooted.to_complex_polynomial()
    derived = polynomial.derive()
    expected = np.zeros(width * height, dtype=np.uint16)
    for y in range(height):
        im = (height - 1.0 - y) / (height - 1) * (im_max - im_min) + im_min
        for x in range(width):
            re = x / (width - 1.0) * (re_max - re_min) + re_min
            z = newton_iterate(polynomial, derived, Complex(re, im),
                               SETTINGS.convergence_threshold, SETTINGS.max_iterations)
            expected[y * width + x] = rooted.index_of_closest_root_for(
                z, SETTINGS.convergence_threshold) + 1
    return expected


def test_newton_converges_to_nearest_real_root():
    rooted = ComplexRootedPolynomial(Complex(1, 0), Complex(-1, 0))
    polynomial = rooted.to_complex_polynomial()
    z = newton_iterate(polynomial, polynomial.derive(), Complex(1.5, 0), 1e-3, 64)
    assert rooted.index_of_closest_root_for(z, 1e-3) == 0
    z = newton_iterate(polynomial, polynomial.derive(), Complex(-3, 0.2), 1e-3, 64)
    assert rooted.index_of_closest_root_for(z, 1e-3) == 1


def test_newton_on_cubic_from_one_and_a_half():
    rooted = ComplexRootedPolynomial(*Complex.ONE.root(3))
    polynomial = rooted.to_complex_polynomial()
    z = newton_iterate(polynomial, polynomial.derive(), Complex(1.5, 0), 1e-3, 64)
    assert rooted.index_of_closest_root_for(z, 1e-3) == 0


def test_newton_stops_at_iteration_cap():
    polynomial = ComplexRootedPolynomial(Complex(1, 0), Complex(-1, 0)).to_complex_polynomial()
    start = Complex(10, 0)
    assert newton_iterate(polynomial, polynomial.derive(), start, 1e-3, 0) == start
    # one step of z - (z^2 - 1) / 2z
    assert newton_iterate(polynomial, polynomial.derive(), start, 1e-3, 1) == Complex(5.05, 0)


def test_split_bands():
    assert split_bands(10, 4) == [(0, 3), (3, 6), (6, 8), (8, 10)]
    assert split_bands(3, 8) == [(0, 1), (1, 2), (2, 3)]
    assert split_bands(5, 1) == [(0, 5)]


def test_cube_roots_of_unity_match_sequential_reference(pool):
    rooted = ComplexRootedPolynomial(*Complex.ONE.root(3))
    width, height = 20, 16
    observer = Collector()

    renderer = NewtonRenderer(rooted, pool)
    assert renderer.palette_size() == 4
    renderer.produce(-2, 2, -2, 2, width, height, "cubic", observer)

    assert len(observer.calls) == 1
    data, palette_size, request_id = observer.calls[0]
    assert request_id == "cubic"
    assert palette_size == 4
    assert data.dtype == np.uint16
    assert data.shape == (width * height,)
    np.testing.assert_array_equal(data, sequential_reference(rooted, -2, 2, -2, 2, width, height))
    # every basin shows up
    assert {1, 2, 3} <= set(int(v) for v in data)
    assert data.max() <= rooted.to_complex_polynomial().order()


def test_pixel_exactly_on_a_root(pool):
    rooted = ComplexRootedPolynomial(Complex(1, 0), Complex(-1, 0))
    observer = Collector()
    NewtonRenderer(rooted, pool).produce(1, 3, -1, 1, 3, 3, 5, observer)
    data = observer.calls[0][0]
    # row 1 is im = 0, column 0 is re = 1
    assert data[1 * 3 + 0] == 1


def test_zero_derivative_fails_the_request(pool):
    rooted = ComplexRootedPolynomial(Complex(1, 0), Complex(-1, 0), Complex(0, 1), Complex(0, -1))
    observer = Collector()

    # the middle pixel of a symmetric odd-sized image is z = 0, where 4z^3 vanishes
    with pytest.raises(RenderError) as info:
        NewtonRenderer(rooted, pool).produce(-1, 1, -1, 1, 3, 3, "zero", observer)

    assert info.value.request_id == "zero"
    assert isinstance(info.value.cause, ZeroDivisionError)
    assert observer.calls == []


def test_requests_share_a_pool(pool):
    rooted = ComplexRootedPolynomial(Complex(1, 0), Complex(-1, 0))
    renderer = NewtonRenderer(rooted, pool)
    observer = Collector()
    for request_id in range(3):
        renderer.produce(-2, 2, -1.5, 1.5, 8, 6, request_id, observer)
    renderer.close()  # borrowed pool stays open

    assert [call[2] for call in observer.calls] == [0, 1, 2]
    np.testing.assert_array_equal(observer.calls[0][0], observer.calls[2][0])
    assert pool.run_all([lambda: 1]) == [1]


def test_owned_pool_is_closed_with_renderer():
    rooted = ComplexRootedPolynomial(Complex(1, 0), Complex(-1, 0))
    with NewtonRenderer(rooted, settings=NewtonSettings(worker_factor=1)) as renderer:
        pool = renderer.pool
    with pytest.raises(RuntimeError):
        pool.run_all([lambda: None])


def test_small_images_are_rejected(pool):
    rooted = ComplexRootedPolynomial(Complex(1, 0), Complex(-1, 0))
    with pytest.raises(ValueError):
        NewtonRenderer(rooted, pool).produce(-1, 1, -1, 1, 1, 5, 1, Collector())


def test_factory_knows_newton(pool):
    rooted = ComplexRootedPolynomial(Complex(1, 0), Complex(-1, 0))
    renderer = RendererFactory.create("newton", rooted_polynomial=rooted, pool=pool)
    assert isinstance(renderer, NewtonRenderer)
    assert renderer.supports("newton_fractal")
    assert "newton" in RendererFactory.list_available("worker_pool")
