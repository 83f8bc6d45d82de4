"""
Simulation — 宿主循环, 轨迹记录, 坐标范围
"""

from danyuan.simulation.config import SimulationConfig, MAX_PLOT_POINTS
from danyuan.simulation.recorder import TraceRecorder, PlotBounds, TRACE_NAMES
from danyuan.simulation.session import SimulationSession

__all__ = [
    "SimulationConfig",
    "MAX_PLOT_POINTS",
    "TraceRecorder",
    "PlotBounds",
    "TRACE_NAMES",
    "SimulationSession",
]
