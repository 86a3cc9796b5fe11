"""Plots of run histories and sweep results."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import matplotlib.pyplot as plt
import numpy as np

from helloevo.analysis.statistics import GenerationSeries, generation_series
from helloevo.evolution.individual import Individual


class HistoryPlotter:
    """Draw per-generation mean and best distance."""

    def __init__(self, goal_length: int, point_size: float = 20.0) -> None:
        self.goal_length = goal_length
        self.point_size = point_size

    def plot_history(
        self,
        history: Sequence[Sequence[Individual]],
        output_dir: str | Path,
    ) -> list[Path]:
        """Save one scatter plot for mean distance and one for best distance."""
        return self.plot_series(generation_series(history), output_dir)

    def plot_series(
        self, series: GenerationSeries, output_dir: str | Path
    ) -> list[Path]:
        if not series.generation:
            return []
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        paths = []
        for name, values in (
            ("mean", series.mean_distance),
            ("best", series.best_distance),
        ):
            fig, ax = plt.subplots(figsize=(10, 4))
            ax.scatter(
                series.generation,
                values,
                s=self.point_size,
                facecolors="none",
                edgecolors="black",
            )
            ax.set_ylim(0, self.goal_length)
            ax.set_xlabel("Generation")
            ax.set_ylabel("Distance")
            ax.set_title(f"{name.capitalize()} distance per generation")
            path = output_dir / f"{name}_distance.png"
            plt.tight_layout()
            plt.savefig(path, dpi=150)
            plt.close(fig)
            paths.append(path)
        return paths


def plot_heatmap(
    grid: dict[tuple[float, float], float],
    x_name: str,
    y_name: str,
    value_name: str,
    output_path: str | Path,
) -> Path | None:
    """Heatmap of an averaged dependent value over two independent variables."""
    if not grid:
        return None
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    xs = sorted({x for x, _ in grid})
    ys = sorted({y for _, y in grid})
    matrix = np.full((len(ys), len(xs)), np.nan)
    for (x, y), value in grid.items():
        matrix[ys.index(y), xs.index(x)] = value

    fig, ax = plt.subplots(figsize=(8, 6))
    im = ax.imshow(matrix, origin="lower", aspect="auto", cmap="viridis")
    _label_ticks(ax.set_xticks, ax.set_xticklabels, xs)
    _label_ticks(ax.set_yticks, ax.set_yticklabels, ys)
    ax.set_xlabel(x_name)
    ax.set_ylabel(y_name)
    ax.set_title(f"Average {value_name}")
    fig.colorbar(im, ax=ax, label=value_name)
    plt.tight_layout()
    plt.savefig(output_path, dpi=150)
    plt.close(fig)
    return output_path


def _label_ticks(
    set_ticks, set_labels, values: Sequence[float], max_labels: int = 10
) -> None:
    stride = max(1, -(-len(values) // max_labels))
    positions = list(range(0, len(values), stride))
    set_ticks(positions)
    set_labels([f"{values[i]:.3g}" for i in positions])


def plot_triplets(
    size_grid: dict[tuple[float, float, float], float],
    color_grid: dict[tuple[float, float, float], float],
    x_name: str,
    y_name: str,
    z_name: str,
    size_name: str,
    color_name: str,
    output_path: str | Path,
    max_size: float = 400.0,
) -> Path | None:
    """3D scatter of averaged outcomes over three independent variables.

    Each cube's size follows ``size_grid`` and its colour ``color_grid``;
    triplets missing from either grid are skipped.
    """
    keys = sorted(set(size_grid) & set(color_grid))
    if not keys:
        return None
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    points = np.array(keys, dtype=float)
    sizes = np.array([size_grid[key] for key in keys], dtype=float)
    colors = np.array([color_grid[key] for key in keys], dtype=float)
    span = sizes.max() - sizes.min()
    scaled = (sizes - sizes.min()) / span if span > 0 else np.ones_like(sizes)

    fig = plt.figure(figsize=(9, 7))
    ax = fig.add_subplot(projection="3d")
    sc = ax.scatter(
        points[:, 0],
        points[:, 1],
        points[:, 2],
        s=20.0 + scaled * (max_size - 20.0),
        c=colors,
        cmap="viridis",
        marker="s",
        edgecolors="black",
    )
    ax.set_xlabel(x_name)
    ax.set_ylabel(y_name)
    ax.set_zlabel(z_name)
    ax.set_title(f"Average {size_name} (size) and {color_name} (colour)")
    fig.colorbar(sc, ax=ax, label=color_name, shrink=0.7)
    plt.tight_layout()
    plt.savefig(output_path, dpi=150)
    plt.close(fig)
    return output_path
