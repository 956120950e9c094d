"""
Type-to-colour assignment for rendering collaborators.
"""

DEFAULT_PALETTE = (
    "#6366f1",
    "#8b5cf6",
    "#a855f7",
    "#ec4899",
    "#14b8a6",
    "#22c55e",
    "#eab308",
    "#f97316",
    "#3b82f6",
    "#06b6d4",
    "#f43f5e",
    "#84cc16",
)


class TypeColorRegistry:
    """Assigns palette colours to node types in first-seen order.

    One registry is owned by each session and reset whenever a fresh document
    is normalized, so colours are stable while filters change but start over
    for a new document.
    """

    def __init__(self, palette: tuple[str, ...] = DEFAULT_PALETTE):
        if not palette:
            raise ValueError("palette must contain at least one colour")
        self.palette = palette
        self._assigned: dict[str, str] = {}

    def color_for(self, node_type: str) -> str:
        color = self._assigned.get(node_type)
        if color is None:
            color = self.palette[len(self._assigned) % len(self.palette)]
            self._assigned[node_type] = color
        return color

    def assignments(self) -> dict[str, str]:
        return dict(self._assigned)

    def reset(self) -> None:
        self._assigned.clear()

    def __len__(self) -> int:
        return len(self._assigned)
