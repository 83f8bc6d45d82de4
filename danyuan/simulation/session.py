"""
仿真会话 — 宿主循环

一个会话拥有一个被观察的神经元 (Izhikevich 或 HH), 可选地再拥有一个
突触对: 突触前驱动神经元 + AMPA 突触 + GABA-A 突触, 都投射到被观察神经元。

每个 tick 的顺序:
  1. 设置外部电流
  2. 推进神经元 (被观察神经元 + 驱动神经元)
  3. 推进突触 (电流写入输入槽, 下一个 tick 被消费)
  4. 记录采样点, 更新坐标范围, 时间 += dt

记录缓冲写满后会话自动停止。
"""

import logging
from typing import List, Optional

from danyuan.core.model_base import release_model
from danyuan.core.model_types import NeuronModelType, SynapseType
from danyuan.neuron.hodgkin_huxley import HodgkinHuxleyNeuron
from danyuan.neuron.izhikevich import IzhikevichNeuron
from danyuan.neuron.neuron_base import NeuronBase
from danyuan.simulation.config import SimulationConfig
from danyuan.simulation.recorder import PlotBounds, TraceRecorder
from danyuan.synapse.ampa_gaba_a import AmpaGabaaSynapse

logger = logging.getLogger(__name__)


class SimulationSession:
    """单细胞仿真会话

    使用示例:
        session = SimulationSession(SimulationConfig(external_current=10.0))
        session.start()
        session.run(1000)
        v = session.recorder.series('membrane_potential')
    """

    def __init__(self, config: Optional[SimulationConfig] = None):
        self.config = config or SimulationConfig()
        self.recorder = TraceRecorder(self.config.max_points)
        self.bounds = PlotBounds()

        self.current_time = 0.0
        self.is_running = False
        self.external_current = self.config.external_current

        self.neuron: Optional[NeuronBase] = None
        self.pre_neuron: Optional[NeuronBase] = None
        self.synapses: List[AmpaGabaaSynapse] = []

    # =========================================================================
    # 模型构建
    # =========================================================================

    def _build_neuron(self) -> Optional[NeuronBase]:
        cfg = self.config
        if cfg.neuron_model == NeuronModelType.HODGKIN_HUXLEY:
            return HodgkinHuxleyNeuron.create(dt=cfg.dt)
        return IzhikevichNeuron.create(cfg.izhikevich_type, dt=cfg.dt)

    def _build_synaptic_pair(self) -> None:
        cfg = self.config
        self.pre_neuron = self._build_neuron()
        if self.pre_neuron is None:
            return
        for syn_type, g_max in (
            (SynapseType.AMPA, cfg.ampa_conductance),
            (SynapseType.GABA_A, cfg.gaba_a_conductance),
        ):
            syn = AmpaGabaaSynapse.create(syn_type, cfg.neuron_model, dt=cfg.dt)
            if syn is None:
                continue
            syn.set_max_conductance(g_max)
            syn.connect(self.pre_neuron, self.neuron)
            self.synapses.append(syn)
        logger.debug(
            "突触对已构建: AMPA g_max=%.3f, GABA-A g_max=%.3f",
            cfg.ampa_conductance, cfg.gaba_a_conductance,
        )

    # =========================================================================
    # 运行控制
    # =========================================================================

    def start(self) -> bool:
        """重置并构建模型, 开始运行

        Returns:
            神经元构建失败时返回 False
        """
        self.reset()
        self.neuron = self._build_neuron()
        if self.neuron is None:
            logger.error("神经元构建失败, 会话未启动")
            return False
        if self.config.has_synapses:
            self._build_synaptic_pair()
        self.is_running = True
        logger.info(
            "会话启动: model=%s, dt=%s, I_ext=%s",
            self.config.neuron_model.name, self.config.dt, self.external_current,
        )
        return True

    def pause(self) -> None:
        self.is_running = False

    def resume(self) -> bool:
        """继续运行 (仅当模型已构建)"""
        if self.neuron is None or self.neuron.is_released:
            return False
        self.is_running = True
        return True

    def toggle_pause(self) -> bool:
        if self.is_running:
            self.pause()
        else:
            self.resume()
        return self.is_running

    def set_external_current(self, current: float) -> None:
        """修改后续 tick 的外部电流"""
        self.external_current = current

    def update(self) -> bool:
        """执行一个 tick

        Returns:
            本次是否真正推进了一步
        """
        if not self.is_running:
            return False
        if self.recorder.is_full:
            self.is_running = False
            logger.info("记录缓冲已满 (%d 点), 会话停止", self.recorder.max_points)
            return False
        if self.neuron is None:
            return False

        # 1. 外部输入
        self.neuron.set_external_current(self.external_current)
        if self.pre_neuron is not None:
            self.pre_neuron.set_external_current(self.config.pre_current)

        # 2. 神经元
        v = self.neuron.step()
        if self.pre_neuron is not None:
            self.pre_neuron.step()

        # 3. 突触
        i_syn = 0.0
        for syn in self.synapses:
            syn.step()
            i_syn += syn.synaptic_current

        # 4. 记录
        t = self.current_time
        self.recorder.record_synaptic_current(i_syn)
        if isinstance(self.neuron, HodgkinHuxleyNeuron):
            hh = self.neuron
            self.recorder.record_hodgkin_huxley(
                t, v, hh.m_gate, hh.h_gate, hh.n_gate,
                hh.potassium_current, hh.sodium_current, hh.leak_current,
            )
            self.bounds.update_hodgkin_huxley(
                t, v, hh.potassium_current, hh.sodium_current, hh.leak_current)
        else:
            u = self.neuron.recovery
            self.recorder.record_izhikevich(t, v, u)
            self.bounds.update_izhikevich(t, v, u)

        self.current_time += self.config.dt
        return True

    def run(self, steps: int) -> int:
        """连续执行至多 steps 个 tick, 返回实际执行数"""
        done = 0
        for _ in range(steps):
            if not self.update():
                break
            done += 1
        return done

    def reset(self) -> None:
        """停止, 时间清零, 释放全部模型, 清空记录与坐标范围"""
        self.is_running = False
        self.current_time = 0.0

        for syn in self.synapses:
            syn.release()
        self.synapses = []
        release_model(self.pre_neuron)
        release_model(self.neuron)
        self.pre_neuron = None
        self.neuron = None

        self.recorder.clear()
        self.bounds.reset()
        logger.debug("会话已重置")

    def __repr__(self) -> str:
        state = "running" if self.is_running else "stopped"
        return (
            f"SimulationSession({self.config.neuron_model.name}, "
            f"t={self.current_time:.2f}ms, {state}, {self.recorder})"
        )
