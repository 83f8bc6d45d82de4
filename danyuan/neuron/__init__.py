"""
Layer 1: Neuron — 单细胞神经元模型

两种可插拔模型, 共享 NeuronBase 接口 (set_external_current / step /
voltage / accumulate_synaptic_current):

- IzhikevichNeuron: 2 状态唯象模型 + 离散 spike-reset, 7 种发放模式预设
- HodgkinHuxleyNeuron: 4 状态电导模型 (V, m, h, n), 电流缓存可观测
"""

from danyuan.core.model_types import NeuronModelType, IzhikevichType
from danyuan.neuron.neuron_base import NeuronBase

from danyuan.neuron.izhikevich import (
    IzhikevichNeuron,
    IzhikevichParams,
    IzhikevichCurrents,
    IZHIKEVICH_SPIKE_PEAK,
    IZHIKEVICH_PRESETS,
    CHATTERING_PARAMS,
    FAST_SPIKING_PARAMS,
    INTRINSICALLY_BURSTING_PARAMS,
    LOW_THRESHOLD_SPIKING_PARAMS,
    REGULAR_SPIKING_PARAMS,
    RESONATOR_PARAMS,
    THALAMO_CORTICAL_PARAMS,
    get_izhikevich_params,
)

from danyuan.neuron.hodgkin_huxley import (
    HodgkinHuxleyNeuron,
    HodgkinHuxleyParams,
    HodgkinHuxleyCurrents,
    HH_PARAMS,
    ionic_currents,
)

from danyuan.neuron import hodgkin_huxley_rates

__all__ = [
    # 类型
    "NeuronModelType",
    "IzhikevichType",
    # 基类
    "NeuronBase",
    # Izhikevich
    "IzhikevichNeuron",
    "IzhikevichParams",
    "IzhikevichCurrents",
    "IZHIKEVICH_SPIKE_PEAK",
    "IZHIKEVICH_PRESETS",
    "get_izhikevich_params",
    # 预定义参数
    "CHATTERING_PARAMS",
    "FAST_SPIKING_PARAMS",
    "INTRINSICALLY_BURSTING_PARAMS",
    "LOW_THRESHOLD_SPIKING_PARAMS",
    "REGULAR_SPIKING_PARAMS",
    "RESONATOR_PARAMS",
    "THALAMO_CORTICAL_PARAMS",
    # Hodgkin-Huxley
    "HodgkinHuxleyNeuron",
    "HodgkinHuxleyParams",
    "HodgkinHuxleyCurrents",
    "HH_PARAMS",
    "ionic_currents",
    "hodgkin_huxley_rates",
]
