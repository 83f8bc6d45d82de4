"""
单细胞仿真演示

运行一个仿真会话 (Izhikevich 或 Hodgkin-Huxley), 可选地加上
突触前驱动神经元 + AMPA/GABA-A 突触对, 打印发放统计并保存图像。

运行方式:
  python experiments/single_cell_demo.py --model iz --preset RS --current 10
  python experiments/single_cell_demo.py --model hh --current 300 --steps 5000
  python experiments/single_cell_demo.py --pre-current 10 --ampa 0.5 --save out.png
"""

import sys
import os
import logging

import numpy as np

# 确保能导入 danyuan 包
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from danyuan.core import IzhikevichType, NeuronModelType
from danyuan.neuron import IZHIKEVICH_SPIKE_PEAK
from danyuan.simulation import SimulationConfig, SimulationSession


PRESET_ALIASES = {
    'CH': IzhikevichType.CHATTERING,
    'FS': IzhikevichType.FAST_SPIKING,
    'IB': IzhikevichType.INTRINSICALLY_BURSTING,
    'LTS': IzhikevichType.LOW_THRESHOLD_SPIKING,
    'RS': IzhikevichType.REGULAR_SPIKING,
    'RZ': IzhikevichType.RESONATOR,
    'TC': IzhikevichType.THALAMO_CORTICAL,
}

MODEL_ALIASES = {
    'iz': NeuronModelType.IZHIKEVICH,
    'hh': NeuronModelType.HODGKIN_HUXLEY,
}


def print_header(title: str):
    print(f"\n{'=' * 60}")
    print(f"  {title}")
    print(f"{'=' * 60}")


def count_spikes(v: np.ndarray, model: NeuronModelType) -> int:
    """Izhikevich: 报告值恰为峰值的步数; HH: 向上穿越 50mV 的次数"""
    if model == NeuronModelType.IZHIKEVICH:
        return int(np.sum(v == IZHIKEVICH_SPIKE_PEAK))
    above = v > 50.0
    return int(np.sum(above[1:] & ~above[:-1]))


def run_demo(config: SimulationConfig, steps: int, save_path=None):
    print("╔══════════════════════════════════════════════════════════╗")
    print("║  单元 (DanYuan): 单细胞 ODE 仿真演示                    ║")
    print("╚══════════════════════════════════════════════════════════╝")

    session = SimulationSession(config)
    if not session.start():
        print("  ❌ 会话启动失败")
        return None

    print_header("配置")
    print(f"  模型: {config.neuron_model.name}")
    if config.neuron_model == NeuronModelType.IZHIKEVICH:
        print(f"  预设: {config.izhikevich_type.name}")
    print(f"  dt={config.dt}ms, steps={steps}, I_ext={config.external_current}")
    if config.has_synapses:
        print(f"  突触对: I_pre={config.pre_current}, "
              f"g_AMPA={config.ampa_conductance}, g_GABA_A={config.gaba_a_conductance}")

    done = session.run(steps)

    print_header("结果")
    rec = session.recorder
    v = rec.series('membrane_potential')
    n_spikes = count_spikes(v, config.neuron_model)
    duration = done * config.dt
    rate = n_spikes / duration * 1000.0 if duration > 0 else 0.0
    print(f"  执行步数: {done} ({duration:.1f}ms)")
    print(f"  V 范围: [{v.min():.2f}, {v.max():.2f}] mV")
    print(f"  发放数: {n_spikes} ({rate:.1f} Hz)")
    if config.has_synapses:
        i_syn = rec.series('synaptic_current')
        print(f"  I_syn 范围: [{i_syn.min():.3f}, {i_syn.max():.3f}]")

    if save_path:
        import matplotlib
        matplotlib.use('Agg')
        from danyuan.viz import plot_session
        plot_session(session, save_path=save_path)

    return session


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser(description='单细胞 ODE 仿真演示')
    parser.add_argument('--model', choices=sorted(MODEL_ALIASES), default='iz',
                        help='神经元模型 (iz / hh)')
    parser.add_argument('--preset', choices=sorted(PRESET_ALIASES), default='RS',
                        help='Izhikevich 发放模式')
    parser.add_argument('--current', type=float, default=10.0, help='外部注入电流')
    parser.add_argument('--steps', type=int, default=20000, help='仿真步数')
    parser.add_argument('--dt', type=float, default=0.01, help='时间步长 (ms)')
    parser.add_argument('--ampa', type=float, default=0.0, help='AMPA 最大电导')
    parser.add_argument('--gaba-a', type=float, default=0.0, help='GABA-A 最大电导')
    parser.add_argument('--pre-current', type=float, default=0.0,
                        help='突触前驱动神经元的注入电流')
    parser.add_argument('--save', type=str, default=None, help='图像保存路径')
    parser.add_argument('-v', '--verbose', action='store_true', help='DEBUG 日志')
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s %(name)s %(levelname)s: %(message)s',
    )

    run_demo(
        SimulationConfig(
            dt=args.dt,
            max_points=max(args.steps, 1),
            neuron_model=MODEL_ALIASES[args.model],
            izhikevich_type=PRESET_ALIASES[args.preset],
            external_current=args.current,
            pre_current=args.pre_current,
            ampa_conductance=args.ampa,
            gaba_a_conductance=args.gaba_a,
        ),
        steps=args.steps,
        save_path=args.save,
    )
