"""
Layer 0: 模型类型枚举

定义单元 (DanYuan) 系统中所有"按枚举键选择"的类型:
- NeuronModelType: 神经元模型种类 (Izhikevich / Hodgkin-Huxley)
- IzhikevichType:  Izhikevich 发放模式预设 (7 种文献参数集)
- SynapseType:     突触极性 (AMPA 兴奋性 / GABA-A 抑制性)

预设参数表 (IZHIKEVICH_PRESETS / SYNAPSE_PRESETS) 都以这些枚举为键。
这些是最底层的"原子"定义，不依赖任何其他单元模块。
"""

from enum import IntEnum


class NeuronModelType(IntEnum):
    """神经元模型种类

    突触预设按目标神经元种类区分:
    两种模型的电压范围不同, 递质释放 sigmoid 的中点 V_p 和
    反转电位都需要相应调整。
    """
    IZHIKEVICH = 0
    HODGKIN_HUXLEY = 1


class IzhikevichType(IntEnum):
    """Izhikevich 发放模式 (Izhikevich, 2003)

    枚举值即预设表索引, 顺序不可改变。
    """
    CHATTERING = 0
    FAST_SPIKING = 1
    INTRINSICALLY_BURSTING = 2
    LOW_THRESHOLD_SPIKING = 3
    REGULAR_SPIKING = 4
    RESONATOR = 5
    THALAMO_CORTICAL = 6


class SynapseType(IntEnum):
    """突触极性

    - AMPA:   兴奋性, E_rev 高于静息电位 → 去极化电流
    - GABA_A: 抑制性, E_rev = -80mV     → 超极化电流
    """
    AMPA = 0
    GABA_A = 1

    @property
    def is_excitatory(self) -> bool:
        """是否为兴奋性突触"""
        return self == SynapseType.AMPA
