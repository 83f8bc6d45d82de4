"""
记录缓冲与坐标轴自动缩放

TraceRecorder: 预分配的时间索引数组, 每个仿真步写入一个采样点。
PlotBounds: 随数据扩展的坐标范围 (只增不减, 直到 reset)。
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np


TRACE_NAMES = (
    'time',
    'membrane_potential',
    'recovery',
    'm_gate',
    'h_gate',
    'n_gate',
    'potassium_current',
    'sodium_current',
    'leak_current',
    'synaptic_current',
)


class TraceRecorder:
    """固定容量的轨迹记录器

    所有数组在构造时一次性分配, count 之后的内容无意义。
    """

    def __init__(self, max_points: int):
        if max_points < 1:
            raise ValueError(f"max_points 必须 ≥ 1, 实际 {max_points}")
        self.max_points = max_points
        self.count = 0
        for name in TRACE_NAMES:
            setattr(self, name, np.zeros(max_points))

    @property
    def is_full(self) -> bool:
        return self.count >= self.max_points

    def record_izhikevich(self, t: float, v: float, u: float) -> bool:
        if self.is_full:
            return False
        i = self.count
        self.time[i] = t
        self.membrane_potential[i] = v
        self.recovery[i] = u
        self.count += 1
        return True

    def record_hodgkin_huxley(
        self, t: float, v: float,
        m: float, h: float, n: float,
        i_k: float, i_na: float, i_leak: float,
    ) -> bool:
        if self.is_full:
            return False
        i = self.count
        self.time[i] = t
        self.membrane_potential[i] = v
        self.m_gate[i] = m
        self.h_gate[i] = h
        self.n_gate[i] = n
        self.potassium_current[i] = i_k
        self.sodium_current[i] = i_na
        self.leak_current[i] = i_leak
        self.count += 1
        return True

    def record_synaptic_current(self, current: float) -> bool:
        """写入当前索引 (下一个 record_* 之前调用)"""
        if self.is_full:
            return False
        self.synaptic_current[self.count] = current
        return True

    def series(self, name: str) -> np.ndarray:
        """已填充部分的视图"""
        if name not in TRACE_NAMES:
            raise KeyError(f"未知轨迹: {name}")
        return getattr(self, name)[:self.count]

    def clear(self) -> None:
        self.count = 0
        for name in TRACE_NAMES:
            getattr(self, name).fill(0.0)

    def __repr__(self) -> str:
        return f"TraceRecorder({self.count}/{self.max_points})"


@dataclass
class PlotBounds:
    """坐标轴范围

    新最小值会额外留出余量: 电压 -2mV, 电流 -10000。
    """
    plot_x_min: float = 0.0
    plot_x_max: float = 200.0
    plot_y_min: float = -80.0
    plot_y_max: float = 40.0

    phase_x_min: float = -12.0
    phase_x_max: float = -10.0
    phase_y_min: float = -80.0
    phase_y_max: float = 40.0

    probability_y_min: float = 0.0
    probability_y_max: float = 1.0

    current_y_min: float = -20.0
    current_y_max: float = 20.0

    VOLTAGE_MARGIN = 2.0
    CURRENT_MARGIN = 10000.0

    def _update_voltage(self, t: float, v: float) -> None:
        self.plot_x_max = t
        if v > self.plot_y_max:
            self.plot_y_max = v
        if v < self.plot_y_min:
            self.plot_y_min = v - self.VOLTAGE_MARGIN

    def update_izhikevich(self, t: float, v: float, u: float) -> None:
        self._update_voltage(t, v)
        if u > self.phase_x_max:
            self.phase_x_max = u
        if u < self.phase_x_min:
            self.phase_x_min = u
        if v > self.phase_y_max:
            self.phase_y_max = v
        if v < self.phase_y_min:
            self.phase_y_min = v - self.VOLTAGE_MARGIN

    def update_hodgkin_huxley(
        self, t: float, v: float, i_k: float, i_na: float, i_leak: float,
    ) -> None:
        self._update_voltage(t, v)
        for current in (i_k, i_na, i_leak):
            if current > self.current_y_max:
                self.current_y_max = current
            if current < self.current_y_min:
                self.current_y_min = current - self.CURRENT_MARGIN

    def reset(self) -> None:
        defaults = PlotBounds()
        self.__dict__.update(defaults.__dict__)

    @property
    def main_limits(self) -> Tuple[Tuple[float, float], Tuple[float, float]]:
        return (self.plot_x_min, self.plot_x_max), (self.plot_y_min, self.plot_y_max)

    @property
    def phase_limits(self) -> Tuple[Tuple[float, float], Tuple[float, float]]:
        return (self.phase_x_min, self.phase_x_max), (self.phase_y_min, self.phase_y_max)
