"""Matplotlib plotting utilities for comparing attitude tracks."""

from typing import Optional

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from matplotlib.axes import Axes

from simulation import SimulationResult


# Track labels and line styles, in TRACK_NAMES order
TRACK_STYLES = [
    ('raw', 'Accelerometer', 'tab:gray', '-'),
    ('gyro', 'Raw gyro', 'tab:orange', ':'),
    ('complementary', 'Complementary', 'tab:green', '--'),
    ('kalman', 'Kalman', 'tab:red', '-'),
]


def _draw_axis(
    ax: Axes,
    result: SimulationResult,
    axis: str,
    true_angle_deg: Optional[np.ndarray],
) -> None:
    for name, label, color, style in TRACK_STYLES:
        linewidth = 0.8 if name == 'raw' else 1.5
        ax.plot(result.time_s, result.track(axis, name), color=color,
                linestyle=style, label=label, linewidth=linewidth)

    if true_angle_deg is not None:
        ax.plot(result.time_s, true_angle_deg, 'b-', label='True', linewidth=1.0, alpha=0.6)

    reset_times = result.time_s[result.crossing_resets]
    for reset_time in reset_times:
        ax.axvline(reset_time, color='k', alpha=0.2, linewidth=0.8)

    ax.set_xlabel('Time (s)')
    ax.set_ylabel(f'{axis.capitalize()} (deg)')
    ax.set_title(axis.capitalize())
    ax.legend(loc='best')
    ax.grid(True, alpha=0.3)


def plot_axis_tracks(
    result: SimulationResult,
    axis: str = 'roll',
    true_angle_deg: Optional[np.ndarray] = None,
    title: Optional[str] = None,
    save_path: Optional[str] = None,
) -> Figure:
    """Plot the four tracks of one axis over time.

    Args:
        result: Simulation or recorded run
        axis: 'roll' or 'pitch'
        true_angle_deg: Optional ground truth (N,)
        title: Figure title
        save_path: Optional path to save figure

    Returns:
        Matplotlib Figure object
    """
    fig, ax = plt.subplots(figsize=(12, 5))
    fig.suptitle(title or f"{axis.capitalize()} estimates", fontsize=14)
    _draw_axis(ax, result, axis, true_angle_deg)
    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')

    return fig


def plot_attitude_tracks(
    result: SimulationResult,
    true_roll_deg: Optional[np.ndarray] = None,
    true_pitch_deg: Optional[np.ndarray] = None,
    title: str = "Attitude Estimates",
    save_path: Optional[str] = None,
) -> Figure:
    """Plot roll and pitch tracks stacked vertically.

    Args:
        result: Simulation or recorded run
        true_roll_deg: Optional roll ground truth (N,)
        true_pitch_deg: Optional pitch ground truth (N,)
        title: Figure title
        save_path: Optional path to save figure

    Returns:
        Matplotlib Figure object
    """
    fig, axes = plt.subplots(2, 1, figsize=(12, 9), sharex=True)
    fig.suptitle(title, fontsize=14)

    _draw_axis(axes[0], result, 'roll', true_roll_deg)
    _draw_axis(axes[1], result, 'pitch', true_pitch_deg)

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')

    return fig
