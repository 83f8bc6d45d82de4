"""
Layer 1: Hodgkin-Huxley 神经元 — 4 状态电导模型

状态向量: [V, m, h, n]

离子电流 (由当前级的门控值计算):
  I_Na = g_Na · m³ · h · (E_Na - V)
  I_K  = g_K  · n⁴     · (E_K  - V)
  I_L  = g_L           · (E_L  - V)

微分方程:
  dV/dt = (I_Na + I_K + I_L + I_ext + I_syn) / C
  dX/dt = α_X(V) · (1 - X) - β_X(V) · X,   X ∈ {m, h, n}

电流缓存的"一级滞后":
  导数函数每次求值都把 I_Na / I_K / I_L 写入缓存,
  所以 step() 之后访问器返回的是 RK4 最后一级 (k4, 即 y + dt·k3)
  上算出的电流, 不在新 V 上重新计算。
"""

import dataclasses
import math
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from danyuan.core.model_base import null_safe
from danyuan.core.model_types import NeuronModelType
from danyuan.core.rk4 import DEFAULT_DT
from danyuan.neuron.neuron_base import NeuronBase
from danyuan.neuron.hodgkin_huxley_rates import (
    alpha_m, beta_m,
    alpha_h, beta_h,
    alpha_n, beta_n,
    steady_state,
)


# =============================================================================
# 参数
# =============================================================================

@dataclass(frozen=True)
class HodgkinHuxleyParams:
    """HH 生物物理常数

    电压采用 HH 原始约定 (相对值, mV); 电容与电导按膜面积缩放 (×9π)。

    Attributes:
        resting_potential: 初始膜电位 (mV)
        capacitance: 膜电容 C
        e_leak / e_na / e_k: 漏/钠/钾反转电位 (mV)
        g_leak / g_na / g_k: 最大电导
    """
    resting_potential: float = -65.0
    capacitance: float = 9.0 * math.pi
    e_leak: float = 10.6
    e_na: float = 115.0
    e_k: float = -12.0
    g_leak: float = 2.7 * math.pi
    g_na: float = 1080.0 * math.pi
    g_k: float = 324.0 * math.pi


# 默认参数集 (HH 1952 经典值, 按膜面积缩放)
HH_PARAMS = HodgkinHuxleyParams()


@dataclass
class HodgkinHuxleyCurrents:
    """电流缓存: 离子电流由导数函数写入, 输入电流由宿主/突触写入"""
    sodium: float = 0.0
    potassium: float = 0.0
    leak: float = 0.0
    synaptic: float = 0.0
    external: float = 0.0


def ionic_currents(
    params: HodgkinHuxleyParams,
    v: float, m: float, h: float, n: float,
) -> Tuple[float, float, float]:
    """计算 (I_Na, I_K, I_L)"""
    i_na = params.g_na * m * m * m * h * (params.e_na - v)
    i_k = params.g_k * n * n * n * n * (params.e_k - v)
    i_leak = params.g_leak * (params.e_leak - v)
    return i_na, i_k, i_leak


# =============================================================================
# Hodgkin-Huxley 神经元
# =============================================================================

class HodgkinHuxleyNeuron(NeuronBase):
    """Hodgkin-Huxley 电导神经元

    初始条件: V₀ = 静息电位, m₀/h₀/n₀ = α/(α+β) 在 V₀ 处的稳态值

    使用示例:
        neuron = HodgkinHuxleyNeuron(dt=0.01)
        neuron.set_external_current(50.0)
        v = neuron.step()
        i_na = neuron.sodium_current   # k4 级的缓存值
    """

    DIMENSION = 4
    MODEL_TYPE = NeuronModelType.HODGKIN_HUXLEY

    def __init__(
        self,
        dt: float = DEFAULT_DT,
        params: Optional[HodgkinHuxleyParams] = None,
    ):
        self._preset = params or HH_PARAMS
        self.params = None
        super().__init__(dt)

    def _init_buffers(self) -> None:
        self.params = dataclasses.replace(self._preset)
        self.currents = HodgkinHuxleyCurrents()

    def _set_initial_conditions(self) -> None:
        v_rest = self.params.resting_potential
        self._state[0] = v_rest
        self._state[1] = steady_state(alpha_m, beta_m, v_rest)
        self._state[2] = steady_state(alpha_h, beta_h, v_rest)
        self._state[3] = steady_state(alpha_n, beta_n, v_rest)

    def _release_buffers(self) -> None:
        self.params = None
        self.currents = None

    def derivatives(self, state: np.ndarray, deriv: np.ndarray) -> None:
        v = float(state[0])
        m = float(state[1])
        h = float(state[2])
        n = float(state[3])
        currents = self.currents

        i_na, i_k, i_leak = ionic_currents(self.params, v, m, h, n)

        # 写入缓存 (访问器读取的就是这里的值)
        currents.sodium = i_na
        currents.potassium = i_k
        currents.leak = i_leak

        i_input = currents.external + currents.synaptic

        deriv[0] = ((i_na + i_k + i_leak) + i_input) / self.params.capacitance
        deriv[1] = alpha_m(v) * (1.0 - m) - beta_m(v) * m
        deriv[2] = alpha_h(v) * (1.0 - h) - beta_h(v) * h
        deriv[3] = alpha_n(v) * (1.0 - n) - beta_n(v) * n

    # =========================================================================
    # 状态查询
    # =========================================================================

    @property
    @null_safe(0.0)
    def sodium_current(self) -> float:
        return self.currents.sodium

    @property
    @null_safe(0.0)
    def potassium_current(self) -> float:
        return self.currents.potassium

    @property
    @null_safe(0.0)
    def leak_current(self) -> float:
        return self.currents.leak

    @property
    @null_safe(0.0)
    def m_gate(self) -> float:
        """Na⁺ 激活门 m"""
        return float(self._state[1])

    @property
    @null_safe(0.0)
    def h_gate(self) -> float:
        """Na⁺ 失活门 h"""
        return float(self._state[2])

    @property
    @null_safe(0.0)
    def n_gate(self) -> float:
        """K⁺ 激活门 n"""
        return float(self._state[3])

    def __repr__(self) -> str:
        if self.is_released:
            return "HodgkinHuxleyNeuron(released)"
        v, m, h, n = self._state
        return (
            f"HodgkinHuxleyNeuron(V={v:.2f}mV, "
            f"m={m:.3f}, h={h:.3f}, n={n:.3f})"
        )
