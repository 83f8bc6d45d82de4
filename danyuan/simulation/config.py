"""
仿真会话配置
"""

from dataclasses import dataclass

from danyuan.core.model_types import IzhikevichType, NeuronModelType
from danyuan.core.rk4 import DEFAULT_DT

# 记录缓冲容量 (采样点数)
MAX_PLOT_POINTS = 50001


@dataclass
class SimulationConfig:
    """单细胞仿真配置

    Attributes:
        dt: 时间步长 (ms)
        max_points: 记录缓冲容量, 写满后会话自动停止
        neuron_model: 被观察的神经元模型
        izhikevich_type: Izhikevich 发放模式 (仅 IZHIKEVICH 时使用)
        external_current: 注入被观察神经元的外部电流
        pre_current: 注入突触前驱动神经元的外部电流
        ampa_conductance: AMPA 突触最大电导 (> 0 时构建突触对)
        gaba_a_conductance: GABA-A 突触最大电导 (> 0 时构建突触对)
    """
    dt: float = DEFAULT_DT
    max_points: int = MAX_PLOT_POINTS
    neuron_model: NeuronModelType = NeuronModelType.IZHIKEVICH
    izhikevich_type: IzhikevichType = IzhikevichType.REGULAR_SPIKING
    external_current: float = 0.0
    pre_current: float = 0.0
    ampa_conductance: float = 0.0
    gaba_a_conductance: float = 0.0

    @property
    def has_synapses(self) -> bool:
        return self.ampa_conductance > 0.0 or self.gaba_a_conductance > 0.0
