"""
Layer 0: RK4 积分器 — 与模型无关的定步长 4 阶 Runge-Kutta

对 n 维系统 dy/dt = f(y) 做一步显式积分:

    k1 = f(y)
    k2 = f(y + dt/2 · k1)
    k3 = f(y + dt/2 · k2)
    k4 = f(y + dt · k3)
    y ← y + dt/6 · (k1 + 2·k2 + 2·k3 + k4)

f 由 DerivativeModel.derivatives() 提供 (Izhikevich / HH / 突触各自实现),
积分器本身只认识"状态向量 + 导数能力"。

scratch 缓冲: 一块 (5, n) 连续数组, 行视图分别命名为
k1 / k2 / k3 / k4 / temp_state, 构造时分配一次, 之后不再重新分配。
"""

from abc import ABC, abstractmethod
from typing import Optional

import numpy as np


# 参考时间步 (ms)
DEFAULT_DT = 0.01


class DerivativeModel(ABC):
    """导数能力接口

    RK4Integrator 只依赖这一个方法。

    约定:
    - 只读 state, 只写 deriv (恰好 n 个值)
    - 不得重新分配或改变任何缓冲区的大小
    - 允许把中间量写入模型自己的电流缓存 (HH 离子电流 / 突触递质浓度)
    """

    @abstractmethod
    def derivatives(self, state: np.ndarray, deriv: np.ndarray) -> None:
        """计算 dy/dt

        Args:
            state: 当前 (或 RK4 中间级) 状态向量
            deriv: 输出导数向量, 原地写入
        """
        raise NotImplementedError


class RK4Integrator:
    """定步长 RK4 求解器

    Attributes:
        model: 提供 derivatives() 的模型
        n: 状态维度
        dt: 时间步长 (ms)
        buffer: (5, n) scratch 数组, release() 后为 None
    """

    def __init__(self, model: DerivativeModel, dimension: int, dt: float = DEFAULT_DT):
        if dimension < 1:
            raise ValueError(f"状态维度必须 >= 1, 得到 {dimension}")
        if dt <= 0.0:
            raise ValueError(f"时间步长必须 > 0, 得到 {dt}")

        self.model: Optional[DerivativeModel] = model
        self.n = dimension
        self.dt = dt

        # 4 个斜率 + 1 个中间状态, 一次分配
        self.buffer: Optional[np.ndarray] = np.zeros((5, dimension))
        self.k1, self.k2, self.k3, self.k4, self.temp_state = self.buffer

    @property
    def is_released(self) -> bool:
        return self.buffer is None

    def step(self, state: np.ndarray) -> None:
        """原地推进 state 一个 dt

        Args:
            state: 长度必须恰好为 n 的状态向量

        Raises:
            ValueError: state 长度与积分器维度不一致
        """
        if self.buffer is None:
            return
        if len(state) != self.n:
            raise ValueError(
                f"状态长度 {len(state)} 与积分器维度 {self.n} 不一致"
            )

        f = self.model.derivatives
        dt = self.dt
        dt_half = dt * 0.5
        k1, k2, k3, k4 = self.k1, self.k2, self.k3, self.k4
        temp = self.temp_state

        # k1 = f(y)
        f(state, k1)

        # k2 = f(y + dt/2 · k1)
        np.multiply(k1, dt_half, out=temp)
        temp += state
        f(temp, k2)

        # k3 = f(y + dt/2 · k2)
        np.multiply(k2, dt_half, out=temp)
        temp += state
        f(temp, k3)

        # k4 = f(y + dt · k3)
        np.multiply(k3, dt, out=temp)
        temp += state
        f(temp, k4)

        # y += dt/6 · (k1 + 2·(k2 + k3) + k4), 在 k2 行内累加
        # temp_state 保留 k4 级的输入状态 (HH 电流缓存就是在这一级算出的)
        np.add(k2, k3, out=k2)
        k2 *= 2.0
        k2 += k1
        k2 += k4
        k2 *= dt / 6.0
        state += k2

    def release(self) -> None:
        """释放 scratch 缓冲 (幂等)"""
        if self.buffer is None:
            return
        self.k1 = self.k2 = self.k3 = self.k4 = self.temp_state = None
        self.buffer = None
        self.model = None

    def __repr__(self) -> str:
        status = "released" if self.is_released else "ready"
        return f"RK4Integrator(n={self.n}, dt={self.dt}, {status})"
