"""Host windowing seams: pointer sampling and the managed window."""

from __future__ import annotations

from abc import ABC, abstractmethod

from edgedock.core.geometry import Coordinate


class WindowOperationFailed(Exception):
    """A position/size/show/hide call to the host windowing layer failed."""


class Sampler(ABC):
    """Reads the pointer position in logical screen coordinates."""

    @abstractmethod
    def sample(self) -> Coordinate | None:
        """Current pointer position, or None when it cannot be read."""


class WindowPort(ABC):
    """The single window the dock manages, in logical units.

    Every method may raise WindowOperationFailed.
    """

    @abstractmethod
    def get_position(self) -> Coordinate: ...

    @abstractmethod
    def set_position(self, position: Coordinate) -> None: ...

    @abstractmethod
    def get_size(self) -> tuple[float, float]: ...

    @abstractmethod
    def get_scale_factor(self) -> int: ...

    @abstractmethod
    def show(self) -> None: ...

    @abstractmethod
    def hide(self) -> None: ...
