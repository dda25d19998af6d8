"""Containers that host a map widget."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(eq=False)
class MapContainer:
    """The element a map widget is attached to.

    Identity is the ``element_id``; two containers with the same id refer to
    the same element.
    """

    element_id: str
    width: float = 0
    height: float = 0
    style: dict[str, str] = field(default_factory=dict)

    def has_layout(self) -> bool:
        return self.width > 0 and self.height > 0

    def force_min_size(self, min_height: int) -> None:
        """Give a collapsed container enough room for the widget to lay out."""

        self.style["width"] = "100%"
        self.style["height"] = f"{min_height}px"
        self.height = max(self.height, min_height)
        if self.width <= 0:
            # "100%" of an unknown parent; any positive width lets layout proceed.
            self.width = 1

    def css(self) -> str:
        return "; ".join(f"{key}: {value}" for key, value in self.style.items())
