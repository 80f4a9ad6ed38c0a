"""Matplotlib rendering of a board snapshot and its territory field."""

from __future__ import annotations

from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
from matplotlib.colors import ListedColormap  # noqa: E402
from matplotlib.image import AxesImage  # noqa: E402

from lightcycle.domain.grid import FREE, GridModel  # noqa: E402
from lightcycle.search.territory import TerritoryField  # noqa: E402

EMPTY_CELL_COLOR = "#f2f2f2"
GRID_LINE_COLOR = "#d0d0d0"
OWN_HEAD_MARKER = "*"
OPPONENT_HEAD_MARKER = "o"
MAX_GRID_LINES = 64
"""Grid lines are skipped on boards wider or taller than this."""


def _player_index_grid(grid: GridModel) -> tuple[np.ndarray, list[int]]:
    """Map player ids to dense colour indices; 0 is an empty cell."""
    players = sorted(int(p) for p in np.unique(grid.occupation) if p != FREE)
    index = np.zeros(grid.occupation.shape, dtype=int)
    for i, player in enumerate(players, start=1):
        index[grid.occupation == player] = i
    return index, players


def _player_cmap(n_players: int) -> ListedColormap:
    palette = plt.get_cmap("tab20")
    colors = [EMPTY_CELL_COLOR] + [palette(i % palette.N) for i in range(n_players)]
    return ListedColormap(colors)


def _draw_cell_grid(ax: plt.Axes, image: np.ndarray, **imshow_kwargs: object) -> AxesImage:
    """Shared renderer: imshow with subtle grid lines on *ax*."""
    img = ax.imshow(image, origin="upper", aspect="equal", **imshow_kwargs)
    h, w = image.shape
    if max(h, w) <= MAX_GRID_LINES:
        for x in range(w + 1):
            ax.axvline(x - 0.5, color=GRID_LINE_COLOR, linewidth=0.4)
        for y in range(h + 1):
            ax.axhline(y - 0.5, color=GRID_LINE_COLOR, linewidth=0.4)
    ax.set_xticks([])
    ax.set_yticks([])
    return img


def render_board(
    grid: GridModel,
    territory: TerritoryField,
    output_path: Path,
    title: str | None = None,
    dpi: int = 120,
) -> Path:
    """Save occupancy (left) and territory field (right) side by side as an image."""
    if not grid.is_initialized():
        raise ValueError("cannot render an uninitialized grid")

    index, players = _player_index_grid(grid)
    fig, (ax_board, ax_field) = plt.subplots(1, 2, figsize=(10, 5))
    try:
        _draw_cell_grid(
            ax_board,
            index,
            cmap=_player_cmap(len(players)),
            vmin=-0.5,
            vmax=len(players) + 0.5,
            interpolation="nearest",
        )
        for player, head in grid.heads.items():
            own = player == grid.my_id
            ax_board.scatter(
                [head.x],
                [head.y],
                marker=OWN_HEAD_MARKER if own else OPPONENT_HEAD_MARKER,
                s=90 if own else 50,
                facecolors="white",
                edgecolors="black",
                linewidths=1.0,
                zorder=3,
            )
        ax_board.set_title("Occupancy")

        field_img = _draw_cell_grid(
            ax_field,
            territory.values,
            cmap="viridis",
            vmin=0.0,
            vmax=float(territory.values.max(initial=1.0)),
            interpolation="nearest",
        )
        fig.colorbar(field_img, ax=ax_field, fraction=0.046, pad=0.04)
        ax_field.set_title("Territory field")

        if title:
            fig.suptitle(title)
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(output_path, dpi=dpi, bbox_inches="tight")
    finally:
        plt.close(fig)
    return output_path
