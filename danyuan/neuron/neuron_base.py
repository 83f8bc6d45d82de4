"""
Layer 1: 单细胞神经元基类

Izhikevich 和 Hodgkin-Huxley 神经元共享的接口:

    外部注入 ──► set_external_current()   (每个时间步由宿主循环设置)
    突触输入 ──► accumulate_synaptic_current()  (由突触在两步之间累加)
                   │
                   ▼
                step()  ← RK4 推进一步, 突触输入被"消费"后清零
                   │
                   ▼
                voltage  (突触读取的突触前/后电压)

突触只依赖 voltage + accumulate_synaptic_current 这两个能力,
不直接触碰神经元的内部缓冲区。
"""

from danyuan.core.model_base import DynamicalModel, null_safe
from danyuan.core.model_types import NeuronModelType


class NeuronBase(DynamicalModel):
    """单细胞神经元基类

    子类的电流缓存 (self.currents) 必须包含 external / synaptic 两个字段,
    状态向量第 0 维必须是膜电位。
    """

    MODEL_TYPE: NeuronModelType = NeuronModelType.IZHIKEVICH

    # =========================================================================
    # 输入注入
    # =========================================================================

    @null_safe(False)
    def set_external_current(self, current: float) -> bool:
        """设置外部注入电流 (不做范围限制)"""
        self.currents.external = current
        return True

    @null_safe(False)
    def accumulate_synaptic_current(self, current: float) -> bool:
        """累加突触电流 (累加, 不覆盖; 下一次 step() 消费)"""
        self.currents.synaptic += current
        return True

    # =========================================================================
    # 核心仿真步骤
    # =========================================================================

    @null_safe(0.0)
    def step(self) -> float:
        """推进一个时间步

        执行顺序:
        1. RK4 积分连续动力学 (I = I_ext + I_syn 在整步内保持不变)
        2. 子类的离散规则 (如 Izhikevich 的 spike-reset)
        3. 清空已消费的突触输入

        Returns:
            本步报告的膜电位 (mV)
        """
        self.integrator.step(self._state)
        reported = self._after_step()
        self.currents.synaptic = 0.0
        return reported

    def _after_step(self) -> float:
        """积分完成后的处理, 返回报告电压"""
        return float(self._state[0])

    # =========================================================================
    # 状态查询
    # =========================================================================

    @property
    @null_safe(0.0)
    def voltage(self) -> float:
        """当前膜电位 (状态向量中的值)"""
        return float(self._state[0])

    @property
    @null_safe(0.0)
    def external_current(self) -> float:
        return self.currents.external

    @property
    @null_safe(0.0)
    def synaptic_current(self) -> float:
        """待消费的突触电流累加值"""
        return self.currents.synaptic
