"""Debug module for attitude track visualization.

Provides:
- plot_axis_tracks: All tracks of one axis over time
- plot_attitude_tracks: Roll and pitch tracks side by side
"""

from debug.plotting import (
    plot_axis_tracks,
    plot_attitude_tracks,
)

__all__ = [
    'plot_axis_tracks',
    'plot_attitude_tracks',
]
