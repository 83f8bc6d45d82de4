"""
绘图工具验证 (Agg 后端, 不弹窗)

运行方式: python tests/test_viz.py
"""

import sys
import os
import tempfile

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
from matplotlib.figure import Figure

# 确保能导入 danyuan 包
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from danyuan.core import NeuronModelType
from danyuan.simulation import SimulationConfig, SimulationSession
from danyuan.viz import (
    plot_currents,
    plot_gates,
    plot_membrane_potential,
    plot_phase_plane,
    plot_session,
    plot_synaptic_current,
)


def print_header(title: str):
    print(f"\n{'=' * 60}")
    print(f"  {title}")
    print(f"{'=' * 60}")


def _run_session(**kwargs) -> SimulationSession:
    session = SimulationSession(SimulationConfig(max_points=800, **kwargs))
    session.start()
    session.run(800)
    return session


def test_izhikevich_plots():
    print_header("Izhikevich 绘图")

    session = _run_session(external_current=10.0)
    for fig in (
        plot_membrane_potential(session.recorder, session.bounds),
        plot_phase_plane(session.recorder, session.bounds),
        plot_synaptic_current(session.recorder),
    ):
        assert isinstance(fig, Figure), f"应返回 Figure, 得到 {type(fig)}"
        plt.close(fig)
    print("  ✅ PASS")


def test_hodgkin_huxley_plots():
    print_header("Hodgkin-Huxley 绘图")

    session = _run_session(
        neuron_model=NeuronModelType.HODGKIN_HUXLEY, external_current=300.0)
    for fig in (
        plot_gates(session.recorder),
        plot_currents(session.recorder, session.bounds),
    ):
        assert isinstance(fig, Figure)
        plt.close(fig)
    print("  ✅ PASS")


def test_plot_session_saves():
    print_header("plot_session 保存文件")

    configs = (
        dict(external_current=10.0),
        dict(neuron_model=NeuronModelType.HODGKIN_HUXLEY, external_current=300.0),
        dict(pre_current=10.0, ampa_conductance=0.5, gaba_a_conductance=0.2),
    )
    with tempfile.TemporaryDirectory() as tmp:
        for i, kwargs in enumerate(configs):
            path = os.path.join(tmp, f"session_{i}.png")
            fig = plot_session(_run_session(**kwargs), save_path=path)
            assert os.path.isfile(path), f"未生成文件: {path}"
            assert os.path.getsize(path) > 0
            n_axes = len(fig.axes)
            print(f"  {kwargs} → {n_axes} 个子图")
            plt.close(fig)
    print("  ✅ PASS")


def main():
    print("╔══════════════════════════════════════════════════════════╗")
    print("║  单元 (DanYuan): 绘图工具验证                           ║")
    print("╚══════════════════════════════════════════════════════════╝")

    cases = [
        ("Izhikevich 绘图", test_izhikevich_plots),
        ("HH 绘图", test_hodgkin_huxley_plots),
        ("plot_session 保存", test_plot_session_saves),
    ]

    results = []
    for name, fn in cases:
        try:
            fn()
            results.append((name, True))
        except AssertionError as exc:
            print(f"  ❌ FAIL: {exc}")
            results.append((name, False))

    print("\n" + "=" * 60)
    print("总结:")
    print("=" * 60)
    all_pass = True
    for name, passed in results:
        status = "✅ PASS" if passed else "❌ FAIL"
        print(f"  {status}: {name}")
        if not passed:
            all_pass = False
    return all_pass


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
