"""
DanYuan (单元) — 单细胞计算神经科学仿真核心

    core        RK4 积分器 + 模型生命周期
    neuron      Izhikevich / Hodgkin-Huxley 神经元
    synapse     AMPA / GABA-A 化学突触
    simulation  宿主循环 + 轨迹记录
    viz         matplotlib 绘图 (需显式导入 danyuan.viz)
"""

from danyuan.core import (
    NeuronModelType,
    IzhikevichType,
    SynapseType,
    RK4Integrator,
    DEFAULT_DT,
    release_model,
)
from danyuan.neuron import (
    IzhikevichNeuron,
    HodgkinHuxleyNeuron,
    IZHIKEVICH_PRESETS,
    HH_PARAMS,
)
from danyuan.synapse import AmpaGabaaSynapse, SYNAPSE_PRESETS
from danyuan.simulation import SimulationConfig, SimulationSession

__version__ = "0.1.0"

__all__ = [
    "NeuronModelType",
    "IzhikevichType",
    "SynapseType",
    "RK4Integrator",
    "DEFAULT_DT",
    "release_model",
    "IzhikevichNeuron",
    "HodgkinHuxleyNeuron",
    "IZHIKEVICH_PRESETS",
    "HH_PARAMS",
    "AmpaGabaaSynapse",
    "SYNAPSE_PRESETS",
    "SimulationConfig",
    "SimulationSession",
]
