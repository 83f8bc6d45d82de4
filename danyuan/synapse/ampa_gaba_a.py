"""
Layer 2: AMPA / GABA-A 化学突触 — 1 状态动力学

递质释放 (突触前电压的 sigmoid):
  T(V_pre) = T_max / (1 + exp(-(V_pre - V_p) / K_p)),   T_max = 1

开放通道比例:
  dr/dt = α · T · (1 - r) - β · r

突触电流 (注入突触后神经元):
  I_syn = g_max · r · (E_rev - V_post)

与神经元的关系只是"引用", 不是"拥有":
  突触持有突触前/后神经元对象的弱引用, 读取 voltage,
  通过 accumulate_synaptic_current() 写入突触后神经元的输入槽。
  引用失效或神经元已释放 → 按未连接处理 (V_pre = V_post = -70mV)。
"""

import dataclasses
import logging
import math
import weakref
from dataclasses import dataclass
from types import MappingProxyType
from typing import Optional, Union

import numpy as np

from danyuan.core.model_base import DynamicalModel, null_safe
from danyuan.core.model_types import NeuronModelType, SynapseType
from danyuan.core.rk4 import DEFAULT_DT

logger = logging.getLogger(__name__)


# 最大递质浓度
T_MAX = 1.0

# 未连接时使用的默认电压 (mV)
DEFAULT_V_PRE = -70.0
DEFAULT_V_POST = -70.0


# =============================================================================
# 参数与预设
# =============================================================================

@dataclass(frozen=True)
class ReleaseParams:
    """递质释放 sigmoid 参数

    Attributes:
        v_p: 半激活电压 (mV)
        k_p: 陡峭度 (mV)
        t_max: 最大递质浓度
    """
    v_p: float
    k_p: float
    t_max: float = T_MAX


@dataclass(frozen=True)
class ReceptorParams:
    """受体动力学参数

    Attributes:
        alpha: 结合速率
        beta: 解离速率
        e_rev: 反转电位 (mV). 兴奋性 AMPA 随目标模型而定, GABA-A=-80mV
        g_max: 最大电导 (默认 0, 需显式设置)
    """
    alpha: float
    beta: float
    e_rev: float
    g_max: float = 0.0


@dataclass(frozen=True)
class SynapseParams:
    """一个目标神经元模型对应的突触参数集"""
    release: ReleaseParams
    ampa: ReceptorParams
    gaba_a: ReceptorParams

    def receptor(self, synapse_type: SynapseType) -> ReceptorParams:
        if synapse_type == SynapseType.AMPA:
            return self.ampa
        return self.gaba_a


# 目标为 Izhikevich 神经元 (电压为绝对 mV)
IZHIKEVICH_SYNAPSE_PARAMS = SynapseParams(
    release=ReleaseParams(v_p=2.0, k_p=5.0),
    ampa=ReceptorParams(alpha=1.1, beta=0.30, e_rev=0.0),
    gaba_a=ReceptorParams(alpha=5.0, beta=0.18, e_rev=-80.0),
)

# 目标为 Hodgkin-Huxley 神经元 (电压为相对静息的 HH 约定)
HODGKIN_HUXLEY_SYNAPSE_PARAMS = SynapseParams(
    release=ReleaseParams(v_p=62.0, k_p=5.0),
    ampa=ReceptorParams(alpha=1.1, beta=0.19, e_rev=60.0),
    gaba_a=ReceptorParams(alpha=5.0, beta=0.18, e_rev=-80.0),
)

SYNAPSE_PRESETS = MappingProxyType({
    NeuronModelType.IZHIKEVICH: IZHIKEVICH_SYNAPSE_PARAMS,
    NeuronModelType.HODGKIN_HUXLEY: HODGKIN_HUXLEY_SYNAPSE_PARAMS,
})


def get_synapse_params(
    synapse_type: Union[SynapseType, int],
    target_type: Union[NeuronModelType, int],
) -> ReceptorParams:
    """按 (突触类型, 目标模型) 查受体预设

    Raises:
        ValueError: 未知的枚举键
    """
    return SYNAPSE_PRESETS[NeuronModelType(target_type)].receptor(
        SynapseType(synapse_type))


def release_concentration(v_pre: float, release: ReleaseParams) -> float:
    """递质浓度 T(V_pre); 指数溢出时 (极度超极化) 取 0"""
    try:
        return release.t_max / (1.0 + math.exp(-(v_pre - release.v_p) / release.k_p))
    except OverflowError:
        return 0.0


@dataclass
class SynapticCurrents:
    """派生量缓存"""
    synaptic: float = 0.0
    neurotransmitter: float = 0.0


# =============================================================================
# AMPA / GABA-A 突触
# =============================================================================

class AmpaGabaaSynapse(DynamicalModel):
    """AMPA (兴奋) / GABA-A (抑制) 化学突触

    使用示例:
        syn = AmpaGabaaSynapse(SynapseType.AMPA, NeuronModelType.IZHIKEVICH)
        syn.set_max_conductance(0.5)
        syn.connect(pre_neuron, post_neuron)

        # 每个时间步: 先推进神经元, 再推进突触
        pre_neuron.step(); post_neuron.step()
        syn.step()      # I_syn 在下一步被 post_neuron 消费
    """

    DIMENSION = 1

    def __init__(
        self,
        synapse_type: Union[SynapseType, int] = SynapseType.AMPA,
        target_type: Union[NeuronModelType, int] = NeuronModelType.IZHIKEVICH,
        dt: float = DEFAULT_DT,
    ):
        self.synapse_type = SynapseType(synapse_type)
        self.target_type = NeuronModelType(target_type)
        self._release_preset = SYNAPSE_PRESETS[self.target_type].release
        self._receptor_preset = get_synapse_params(self.synapse_type, self.target_type)
        self.release_params: Optional[ReleaseParams] = None
        self.receptor_params: Optional[ReceptorParams] = None
        self._pre_ref: Optional[weakref.ref] = None
        self._post_ref: Optional[weakref.ref] = None
        self._v_pre = DEFAULT_V_PRE
        super().__init__(dt)

    def _init_buffers(self) -> None:
        self.release_params = dataclasses.replace(self._release_preset)
        self.receptor_params = dataclasses.replace(self._receptor_preset)
        self.currents = SynapticCurrents()

    def _set_initial_conditions(self) -> None:
        self._state[0] = 0.0

    def _release_buffers(self) -> None:
        self._pre_ref = None
        self._post_ref = None
        self.release_params = None
        self.receptor_params = None
        self.currents = None

    # =========================================================================
    # 连接
    # =========================================================================

    @null_safe(False)
    def connect(self, pre, post) -> bool:
        """连接突触前/后神经元 (只建立引用关系)

        Args:
            pre: 突触前神经元 (提供 voltage)
            post: 突触后神经元 (提供 accumulate_synaptic_current)

        Returns:
            任一端为 None 时返回 False, 不改变现有连接
        """
        if pre is None or post is None:
            return False
        post_model = getattr(post, "MODEL_TYPE", None)
        if post_model is not None and post_model != self.target_type:
            logger.warning(
                "突触参数按 %s 设定, 突触后神经元为 %s",
                self.target_type.name, NeuronModelType(post_model).name,
            )
        self._pre_ref = weakref.ref(pre)
        self._post_ref = weakref.ref(post)
        return True

    def disconnect(self) -> None:
        self._pre_ref = None
        self._post_ref = None

    @staticmethod
    def _live(ref):
        """解引用; 失效或已释放的神经元视为未连接"""
        if ref is None:
            return None
        neuron = ref()
        if neuron is None or getattr(neuron, "is_released", False):
            return None
        return neuron

    @property
    def is_connected(self) -> bool:
        return (
            self._live(self._pre_ref) is not None
            and self._live(self._post_ref) is not None
        )

    @null_safe(False)
    def set_max_conductance(self, g_max: float) -> bool:
        """设置最大电导 (替换受体参数, 预设表不受影响)"""
        self.receptor_params = dataclasses.replace(self.receptor_params, g_max=g_max)
        return True

    # =========================================================================
    # 动力学
    # =========================================================================

    def derivatives(self, state: np.ndarray, deriv: np.ndarray) -> None:
        r = float(state[0])
        receptor = self.receptor_params
        t = release_concentration(self._v_pre, self.release_params)
        self.currents.neurotransmitter = t
        deriv[0] = receptor.alpha * t * (1.0 - r) - receptor.beta * r

    @null_safe(False)
    def step(self) -> bool:
        """推进一个时间步并向突触后神经元注入电流

        执行顺序:
        1. 读取突触前电压 (未连接为 -70mV)
        2. RK4 积分 r
        3. I_syn = g_max · r · (E_rev - V_post), 缓存
        4. 已连接时累加到突触后神经元的输入槽
        """
        pre = self._live(self._pre_ref)
        post = self._live(self._post_ref)
        connected = pre is not None and post is not None

        self._v_pre = pre.voltage if connected else DEFAULT_V_PRE
        v_post = post.voltage if connected else DEFAULT_V_POST

        self.integrator.step(self._state)

        receptor = self.receptor_params
        i_syn = receptor.g_max * float(self._state[0]) * (receptor.e_rev - v_post)
        self.currents.synaptic = i_syn

        if connected:
            post.accumulate_synaptic_current(i_syn)
        return True

    # =========================================================================
    # 状态查询
    # =========================================================================

    @property
    @null_safe(0.0)
    def synaptic_current(self) -> float:
        """最近一步的 I_syn"""
        return self.currents.synaptic

    @property
    @null_safe(0.0)
    def open_fraction(self) -> float:
        """开放通道比例 r"""
        return float(self._state[0])

    @property
    @null_safe(0.0)
    def neurotransmitter_concentration(self) -> float:
        return self.currents.neurotransmitter

    @property
    @null_safe(0.0)
    def max_conductance(self) -> float:
        return self.receptor_params.g_max

    def __repr__(self) -> str:
        if self.is_released:
            return f"AmpaGabaaSynapse({self.synapse_type.name}, released)"
        return (
            f"AmpaGabaaSynapse({self.synapse_type.name}→{self.target_type.name}, "
            f"r={self._state[0]:.4f}, g_max={self.receptor_params.g_max}, "
            f"connected={self.is_connected})"
        )
