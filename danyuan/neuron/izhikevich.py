"""
Layer 1: Izhikevich 神经元 — 2 状态唯象模型 + 离散 spike-reset

连续动力学 (RK4 积分):
  dv/dt = 0.04·v² + 5·v + 140 - u + I
  du/dt = a·(b·v - u)
  I = I_ext + I_syn

离散规则 (每个完整 RK4 步之后, 绝不在步内):
  v ≥ 30mV → v ← c, u ← u + d, 本步报告 30.0 (峰值)
  否则     → 报告积分后的 v

参数 (a, b, c, d) 来自 Izhikevich (2003) 的 7 种发放模式。
"""

import dataclasses
from dataclasses import dataclass
from types import MappingProxyType
from typing import Union

import numpy as np

from danyuan.core.model_base import null_safe
from danyuan.core.model_types import IzhikevichType, NeuronModelType
from danyuan.core.rk4 import DEFAULT_DT
from danyuan.neuron.neuron_base import NeuronBase


# dv/dt 多项式系数
QUAD_COEFF = 0.04
LINEAR_COEFF = 5.0
CONST_TERM = 140.0

# 脉冲峰值 (mV): 触发 reset, 同时作为本步的报告值
IZHIKEVICH_SPIKE_PEAK = 30.0


# =============================================================================
# 参数与预设
# =============================================================================

@dataclass(frozen=True)
class IzhikevichParams:
    """Izhikevich 参数包

    Attributes:
        a: 恢复变量 u 的时间尺度 (越小恢复越慢)
        b: u 对膜电位 v 的敏感度
        c: 脉冲后 v 的重置值 (mV)
        d: 脉冲后 u 的增量
        neuron_type: 对应的发放模式
    """
    a: float
    b: float
    c: float
    d: float
    neuron_type: IzhikevichType = IzhikevichType.REGULAR_SPIKING


# 预定义参数集 (Izhikevich, 2003, "Simple model of spiking neurons")
CHATTERING_PARAMS = IzhikevichParams(
    a=0.02, b=0.20, c=-50.0, d=2.0, neuron_type=IzhikevichType.CHATTERING)
FAST_SPIKING_PARAMS = IzhikevichParams(
    a=0.10, b=0.20, c=-65.0, d=2.0, neuron_type=IzhikevichType.FAST_SPIKING)
INTRINSICALLY_BURSTING_PARAMS = IzhikevichParams(
    a=0.02, b=0.20, c=-55.0, d=4.0, neuron_type=IzhikevichType.INTRINSICALLY_BURSTING)
LOW_THRESHOLD_SPIKING_PARAMS = IzhikevichParams(
    a=0.02, b=0.25, c=-65.0, d=2.0, neuron_type=IzhikevichType.LOW_THRESHOLD_SPIKING)
REGULAR_SPIKING_PARAMS = IzhikevichParams(
    a=0.02, b=0.20, c=-65.0, d=8.0, neuron_type=IzhikevichType.REGULAR_SPIKING)
RESONATOR_PARAMS = IzhikevichParams(
    a=0.10, b=0.26, c=-60.0, d=-1.0, neuron_type=IzhikevichType.RESONATOR)
THALAMO_CORTICAL_PARAMS = IzhikevichParams(
    a=0.02, b=0.25, c=-65.0, d=0.05, neuron_type=IzhikevichType.THALAMO_CORTICAL)

IZHIKEVICH_PRESETS = MappingProxyType({
    IzhikevichType.CHATTERING: CHATTERING_PARAMS,
    IzhikevichType.FAST_SPIKING: FAST_SPIKING_PARAMS,
    IzhikevichType.INTRINSICALLY_BURSTING: INTRINSICALLY_BURSTING_PARAMS,
    IzhikevichType.LOW_THRESHOLD_SPIKING: LOW_THRESHOLD_SPIKING_PARAMS,
    IzhikevichType.REGULAR_SPIKING: REGULAR_SPIKING_PARAMS,
    IzhikevichType.RESONATOR: RESONATOR_PARAMS,
    IzhikevichType.THALAMO_CORTICAL: THALAMO_CORTICAL_PARAMS,
})


def get_izhikevich_params(neuron_type: Union[IzhikevichType, int]) -> IzhikevichParams:
    """按枚举键 (或其整数值) 查预设

    Raises:
        ValueError: 未知的预设键
    """
    return IZHIKEVICH_PRESETS[IzhikevichType(neuron_type)]


@dataclass
class IzhikevichCurrents:
    """输入电流槽 (每步重新设置/消费, 不属于积分状态)"""
    external: float = 0.0
    synaptic: float = 0.0


# =============================================================================
# Izhikevich 神经元
# =============================================================================

class IzhikevichNeuron(NeuronBase):
    """Izhikevich 唯象神经元

    状态向量: [v, u]
    初始条件: v₀ = c - 10, u₀ = b·v₀

    使用示例:
        neuron = IzhikevichNeuron(IzhikevichType.REGULAR_SPIKING, dt=0.01)
        neuron.set_external_current(10.0)
        for _ in range(1000):
            v = neuron.step()   # 发放时恰好返回 30.0
    """

    DIMENSION = 2
    MODEL_TYPE = NeuronModelType.IZHIKEVICH

    def __init__(
        self,
        neuron_type: Union[IzhikevichType, int] = IzhikevichType.REGULAR_SPIKING,
        dt: float = DEFAULT_DT,
    ):
        # 非法预设在分配任何缓冲之前就报错
        self._preset = get_izhikevich_params(neuron_type)
        self.params = None
        self._spike_count = 0
        super().__init__(dt)

    def _init_buffers(self) -> None:
        # 按值拷贝预设
        self.params = dataclasses.replace(self._preset)
        self.currents = IzhikevichCurrents()

    def _set_initial_conditions(self) -> None:
        v0 = self.params.c - 10.0
        self._state[0] = v0
        self._state[1] = self.params.b * v0
        self._spike_count = 0

    def _release_buffers(self) -> None:
        self.params = None
        self.currents = None

    def derivatives(self, state: np.ndarray, deriv: np.ndarray) -> None:
        v = float(state[0])
        u = float(state[1])
        p = self.params
        i_total = self.currents.external + self.currents.synaptic

        deriv[0] = (QUAD_COEFF * v * v) + (LINEAR_COEFF * v) + CONST_TERM - u + i_total
        deriv[1] = p.a * (p.b * v - u)

    def _after_step(self) -> float:
        """离散 spike-reset: 峰值被报告, 即使 v 已被立即重置"""
        if self._state[0] >= IZHIKEVICH_SPIKE_PEAK:
            self._state[0] = self.params.c
            self._state[1] += self.params.d
            self._spike_count += 1
            return IZHIKEVICH_SPIKE_PEAK
        return float(self._state[0])

    # =========================================================================
    # 状态查询
    # =========================================================================

    @property
    @null_safe(0.0)
    def recovery(self) -> float:
        """恢复变量 u"""
        return float(self._state[1])

    def get_recovery(self) -> float:
        return self.recovery

    @property
    @null_safe(0)
    def spike_count(self) -> int:
        """构造/重置以来的 reset 次数"""
        return self._spike_count

    @property
    def neuron_type(self):
        return self._preset.neuron_type

    def __repr__(self) -> str:
        if self.is_released:
            return f"IzhikevichNeuron(type={self._preset.neuron_type.name}, released)"
        return (
            f"IzhikevichNeuron(type={self.params.neuron_type.name}, "
            f"v={self._state[0]:.2f}mV, u={self._state[1]:.3f}, "
            f"spikes={self._spike_count})"
        )
