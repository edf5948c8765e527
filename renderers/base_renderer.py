from abc import ABC, abstractmethod
from typing import Any, Callable, List

import numpy as np

# (data, palette_size, request_id)
FractalObserver = Callable[[np.ndarray, int, Any], None]
# (red, green, blue, request_id)
RGBObserver = Callable[[np.ndarray, np.ndarray, np.ndarray, Any], None]


class RenderError(RuntimeError):
    """A render request failed; the observer was not notified."""

    def __init__(self, request_id, cause: BaseException):
        super().__init__(f"Render request {request_id} failed: {cause!r}")
        self.request_id = request_id
        self.cause = cause


def check_dimensions(width: int, height: int):
    # pixel mapping divides by (width - 1) and (height - 1)
    if width < 2 or height < 2:
        raise ValueError(f"Image must be at least 2x2 pixels, got {width}x{height}")


class BaseRenderer(ABC):
    """Base class for every producer of raster images."""

    def __init__(self, name: str):
        self.name = name

    @abstractmethod
    def produce(self, *args) -> None:
        """Compute a full raster and hand it to the observer exactly once."""
        pass

    @abstractmethod
    def get_capabilities(self) -> List[str]:
        pass

    def get_name(self) -> str:
        return self.name

    def supports(self, feature: str) -> bool:
        return feature in self.get_capabilities()

    def close(self):
        """Release resources owned by the renderer."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


class RendererFactory:
    _renderers = {}

    @classmethod
    def register(cls, name: str, renderer_class):
        cls._renderers[name] = renderer_class

    @classmethod
    def create(cls, name: str, **kwargs) -> BaseRenderer:
        if name not in cls._renderers:
            raise ValueError(f"Unknown renderer: {name}")
        return cls._renderers[name](**kwargs)

    @classmethod
    def list_available(cls, capability: str = None) -> List[str]:
        if capability is None:
            return list(cls._renderers.keys())
        return [name for name, renderer_class in cls._renderers.items()
                if capability in renderer_class.CAPABILITIES]
