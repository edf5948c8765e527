import sys
import time
import logging
import argparse
from typing import Callable, List

import numpy as np
from PIL import Image, ImageColor

from core.complex import Complex
from core.polynomial import ComplexRootedPolynomial
from core.scene import RenderSettings
from scene_builders.predefined_scene_builder import PredefinedSceneBuilder
from renderers.base_renderer import RendererFactory, RenderError
from renderers.worker_pool import WorkerPool

# 렌더러 모듈들 import (등록을 위해)
import renderers.cpu_renderer
import renderers.parallel_renderer
import renderers.newton_renderer

DONE = "done"


def read_roots(read: Callable[[str], str] = input,
               write: Callable[[str], None] = print) -> List[Complex]:
    """Prompt for roots one per line until 'done'; at least two are required."""
    write("Please enter at least two roots, one root per line. Enter 'done' when done.")
    roots = []
    while True:
        try:
            line = read(f"Root {len(roots) + 1}> ").strip()
        except EOFError:
            if len(roots) >= 2:
                return roots
            raise ValueError(f"At least two roots are required, roots entered: {len(roots)}")

        if line.lower() == DONE:
            if len(roots) >= 2:
                return roots
            write(f"You must enter at least two roots, roots entered: {len(roots)}")
            continue

        try:
            roots.append(Complex.parse(line))
        except ValueError:
            write("Invalid input.")


def build_palette(size: int) -> np.ndarray:
    """Index 0 (no convergence) is black, roots get evenly spaced hues."""
    palette = [(0, 0, 0)]
    for i in range(1, size):
        hue = int(360 * (i - 1) / max(1, size - 1))
        palette.append(ImageColor.getrgb(f"hsl({hue}, 80%, 55%)"))
    return np.array(palette, dtype=np.uint8)


def save_index_image(data: np.ndarray, palette_size: int, width: int, height: int, path: str):
    colors = build_palette(palette_size)[data]
    Image.fromarray(colors.reshape((height, width, 3))).save(path)


def save_rgb_image(red: np.ndarray, green: np.ndarray, blue: np.ndarray,
                   width: int, height: int, path: str):
    pixels = np.stack([red, green, blue], axis=-1).reshape((height, width, 3))
    Image.fromarray(pixels).save(path)


def run_raycast(args) -> None:
    scene_builder = PredefinedSceneBuilder()
    scene = scene_builder.build_scene()
    camera = scene_builder.create_camera()
    settings = RenderSettings(width=args.width, height=args.height)

    print(f"렌더러 생성: {args.renderer}")
    kwargs = {"scene": scene, "settings": settings}
    if args.renderer == "raycaster_parallel":
        kwargs["workers"] = args.workers
    renderer = RendererFactory.create(args.renderer, **kwargs)
    print(f"지원 기능: {', '.join(renderer.get_capabilities())}")

    def on_result(red, green, blue, request_id):
        save_rgb_image(red, green, blue, settings.width, settings.height, args.output)
        print(f"이미지 저장: {args.output} (request {request_id})")

    start_time = time.time()
    renderer.produce(camera.eye, camera.view, camera.view_up,
                     camera.horizontal, camera.vertical,
                     settings.width, settings.height, 1, on_result)
    print(f"총 실행 시간: {time.time() - start_time:.2f}초")


def run_newton(args) -> None:
    if args.root:
        roots = [Complex.parse(text) for text in args.root]
        if len(roots) < 2:
            raise ValueError(f"At least two roots are required, roots given: {len(roots)}")
    else:
        print("Welcome to Newton-Raphson iteration-based fractal viewer.")
        roots = read_roots()

    polynomial = ComplexRootedPolynomial(*roots)
    print(f"Polynomial: {polynomial}")

    def on_result(data, palette_size, request_id):
        save_index_image(data, palette_size, args.width, args.height, args.output)
        print(f"이미지 저장: {args.output} (request {request_id})")

    start_time = time.time()
    with WorkerPool(args.workers) as pool:
        renderer = RendererFactory.create("newton", rooted_polynomial=polynomial, pool=pool)
        renderer.produce(args.re_min, args.re_max, args.im_min, args.im_max,
                         args.width, args.height, 1, on_result)
    print(f"총 실행 시간: {time.time() - start_time:.2f}초")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Parallel Newton fractal and ray casting renderer')
    parser.add_argument('--verbose', '-v', action='store_true', help='렌더러 로그 출력')
    subparsers = parser.add_subparsers(dest='command', required=True)

    raycast = subparsers.add_parser('raycast', help='미리 정의된 장면을 레이캐스팅')
    raycast.add_argument('--renderer', '-r',
                         choices=RendererFactory.list_available('ray_casting'),
                         default='raycaster_parallel',
                         help='렌더러 선택')
    raycast.add_argument('--width', '-w', type=int, default=500, help='이미지 가로 크기')
    raycast.add_argument('--height', type=int, default=500, help='이미지 세로 크기')
    raycast.add_argument('--workers', type=int, default=None,
                         help='fork/join 스레드 수 (기본값: CPU 수)')
    raycast.add_argument('--output', '-o', default='raycast.png', help='출력 파일명')
    raycast.set_defaults(handler=run_raycast)

    newton = subparsers.add_parser('newton', help='Newton-Raphson 프랙탈')
    newton.add_argument('--root', action='append',
                        help="근 (예: 1, -1, i, 0.5-i0.866); 생략하면 입력 프롬프트")
    newton.add_argument('--width', '-w', type=int, default=600, help='이미지 가로 크기')
    newton.add_argument('--height', type=int, default=600, help='이미지 세로 크기')
    newton.add_argument('--re-min', type=float, default=-2.0)
    newton.add_argument('--re-max', type=float, default=2.0)
    newton.add_argument('--im-min', type=float, default=-2.0)
    newton.add_argument('--im-max', type=float, default=2.0)
    newton.add_argument('--workers', type=int, default=None,
                        help='작업 스레드 수 (기본값: CPU 수)')
    newton.add_argument('--output', '-o', default='newton.png', help='출력 파일명')
    newton.set_defaults(handler=run_newton)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING,
                        format="%(asctime)s %(name)s %(levelname)s: %(message)s")
    try:
        args.handler(args)
    except RenderError as e:
        print(f"렌더링 실패 (request {e.request_id}): {e.cause}")
        return 1
    except ValueError as e:
        print(f"잘못된 입력: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
