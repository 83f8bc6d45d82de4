"""
danyuan.core — 积分核心

提供与具体模型无关的两块基础:
- RK4Integrator + DerivativeModel: 定步长 4 阶 Runge-Kutta 与导数能力接口
- DynamicalModel: 缓冲区生命周期 (构造/释放/空句柄语义)

以及所有按枚举键选择的类型 (NeuronModelType / IzhikevichType / SynapseType)。
"""

from danyuan.core.model_types import (
    NeuronModelType,
    IzhikevichType,
    SynapseType,
)
from danyuan.core.rk4 import (
    DerivativeModel,
    RK4Integrator,
    DEFAULT_DT,
)
from danyuan.core.model_base import (
    DynamicalModel,
    null_safe,
    release_model,
)

__all__ = [
    # 类型枚举
    'NeuronModelType',
    'IzhikevichType',
    'SynapseType',
    # 积分器
    'DerivativeModel',
    'RK4Integrator',
    'DEFAULT_DT',
    # 模型生命周期
    'DynamicalModel',
    'null_safe',
    'release_model',
]
