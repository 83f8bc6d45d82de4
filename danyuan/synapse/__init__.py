"""
Layer 2: Synapse — AMPA / GABA-A 化学突触

突触读取突触前神经元的膜电位, 积分自身的开放通道比例,
把电流累加到突触后神经元的输入槽 (下一个时间步被消费)。
"""

from danyuan.core.model_types import SynapseType

from danyuan.synapse.ampa_gaba_a import (
    AmpaGabaaSynapse,
    ReleaseParams,
    ReceptorParams,
    SynapseParams,
    SynapticCurrents,
    IZHIKEVICH_SYNAPSE_PARAMS,
    HODGKIN_HUXLEY_SYNAPSE_PARAMS,
    SYNAPSE_PRESETS,
    DEFAULT_V_PRE,
    DEFAULT_V_POST,
    T_MAX,
    get_synapse_params,
    release_concentration,
)

__all__ = [
    "SynapseType",
    "AmpaGabaaSynapse",
    "ReleaseParams",
    "ReceptorParams",
    "SynapseParams",
    "SynapticCurrents",
    "IZHIKEVICH_SYNAPSE_PARAMS",
    "HODGKIN_HUXLEY_SYNAPSE_PARAMS",
    "SYNAPSE_PRESETS",
    "DEFAULT_V_PRE",
    "DEFAULT_V_POST",
    "T_MAX",
    "get_synapse_params",
    "release_concentration",
]
