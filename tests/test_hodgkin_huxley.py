"""
Hodgkin-Huxley 神经元验证

  Case 1: 速率函数奇点: αm(25) == 1.0, αn(10) == 0.1, 且两侧连续
  Case 2: 初始门控值为静息电位处的稳态值
  Case 3: 门控变量在一组有界电流下始终位于 [0, 1]
  Case 4: 电流访问器返回 RK4 最后一级 (k4) 的缓存值
  Case 5: 足够大的注入电流产生动作电位
  Case 6: release 幂等, 释放后返回中性值

运行方式: python tests/test_hodgkin_huxley.py
"""

import sys
import os
import math

import numpy as np

# 确保能导入 danyuan 包
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from danyuan.core import NeuronModelType
from danyuan.neuron import (
    HodgkinHuxleyNeuron,
    HodgkinHuxleyParams,
    HH_PARAMS,
    ionic_currents,
)
from danyuan.neuron.hodgkin_huxley_rates import (
    alpha_m, beta_m,
    alpha_h, beta_h,
    alpha_n, beta_n,
    steady_state,
)


def print_header(title: str):
    print(f"\n{'=' * 60}")
    print(f"  {title}")
    print(f"{'=' * 60}")


def test_rate_singularities():
    """Case 1: 奇点处取解析极限"""
    print_header("Case 1: 速率函数奇点")

    assert alpha_m(25.0) == 1.0, f"αm(25) 应为 1.0, 实际 {alpha_m(25.0)}"
    assert alpha_n(10.0) == 0.1, f"αn(10) 应为 0.1, 实际 {alpha_n(10.0)}"

    for eps in (1e-4, -1e-4):
        am = alpha_m(25.0 + eps)
        an = alpha_n(10.0 + eps)
        print(f"  αm(25{eps:+g}) = {am:.8f}, αn(10{eps:+g}) = {an:.8f}")
        assert abs(am - 1.0) < 1e-3, f"αm 在 25 附近不连续: {am}"
        assert abs(an - 0.1) < 1e-4, f"αn 在 10 附近不连续: {an}"
    print("  ✅ PASS")


def test_rate_values():
    print_header("速率函数数值")

    assert math.isclose(beta_m(0.0), 4.0)
    assert math.isclose(alpha_h(0.0), 0.07)
    assert math.isclose(beta_h(30.0), 0.5)
    assert math.isclose(beta_n(0.0), 0.125)
    for v in (-80.0, -65.0, 0.0, 25.0, 60.0, 110.0):
        for alpha, beta in ((alpha_m, beta_m), (alpha_h, beta_h), (alpha_n, beta_n)):
            x = steady_state(alpha, beta, v)
            assert 0.0 <= x <= 1.0, f"稳态值越界: {alpha.__name__}({v}) → {x}"
    print("  ✅ PASS")


def test_rate_overflow_limits():
    """极端超极化: 指数溢出时速率取渐近极限, 不抛异常"""
    print_header("速率函数溢出极限")

    v = -1e5
    assert alpha_m(v) == 0.0, f"αm(-∞) 应 → 0, 实际 {alpha_m(v)}"
    assert alpha_n(v) == 0.0, f"αn(-∞) 应 → 0, 实际 {alpha_n(v)}"
    assert beta_h(v) == 0.0, f"βh(-∞) 应 → 0, 实际 {beta_h(v)}"
    assert beta_m(v) == math.inf, "βm(-∞) 应 → inf"
    assert alpha_h(v) == math.inf, "αh(-∞) 应 → inf"
    assert beta_n(v) == math.inf, "βn(-∞) 应 → inf"
    print("  ✅ PASS")


def test_strong_hyperpolarizing_current():
    """大幅超极化电流下 step() 不抛异常 (数值可以发散为 inf/NaN)"""
    print_header("I=-1000 / -1e4 持续 3000 步")

    for current in (-1000.0, -1e4):
        neuron = HodgkinHuxleyNeuron(dt=0.01)
        neuron.set_external_current(current)
        with np.errstate(over='ignore', invalid='ignore'):
            for _ in range(3000):
                v = neuron.step()
        print(f"  I={current:>8.0f}: 末态 V={v}")
        assert isinstance(v, float), f"step 应返回 float, 得到 {type(v)}"
        assert not neuron.is_released, "模型应保持可用"
    print("  ✅ PASS")


def test_initial_conditions():
    """Case 2: 初始条件"""
    print_header("Case 2: 初始条件")

    neuron = HodgkinHuxleyNeuron()
    v0 = HH_PARAMS.resting_potential
    print(f"  {neuron}")
    assert neuron.voltage == v0, f"V₀ 应为 {v0}, 实际 {neuron.voltage}"
    assert neuron.m_gate == steady_state(alpha_m, beta_m, v0), "m₀ 应为稳态值"
    assert neuron.h_gate == steady_state(alpha_h, beta_h, v0), "h₀ 应为稳态值"
    assert neuron.n_gate == steady_state(alpha_n, beta_n, v0), "n₀ 应为稳态值"
    assert neuron.MODEL_TYPE == NeuronModelType.HODGKIN_HUXLEY
    print("  ✅ PASS")


def test_preset_values():
    print_header("HH_PARAMS")

    p = HH_PARAMS
    assert p.resting_potential == -65.0
    assert p.capacitance == 9.0 * math.pi
    assert (p.e_leak, p.e_na, p.e_k) == (10.6, 115.0, -12.0)
    assert p.g_leak == 2.7 * math.pi
    assert p.g_na == 1080.0 * math.pi
    assert p.g_k == 324.0 * math.pi
    print("  ✅ PASS")


def test_gates_bounded():
    """Case 3: 门控变量有界"""
    print_header("Case 3: 门控变量 ∈ [0, 1]")

    for current in (-50.0, 0.0, 10.0, 50.0, 100.0, 250.0, 500.0):
        neuron = HodgkinHuxleyNeuron(dt=0.01)
        neuron.set_external_current(current)
        lo, hi = 1.0, 0.0
        for _ in range(3000):
            neuron.step()
            gates = (neuron.m_gate, neuron.h_gate, neuron.n_gate)
            lo = min(lo, *gates)
            hi = max(hi, *gates)
        print(f"  I={current:>6.1f}: gate 范围 [{lo:.4f}, {hi:.4f}], V={neuron.voltage:.2f}")
        assert lo >= 0.0, f"I={current}: 门控值 < 0 ({lo})"
        assert hi <= 1.0, f"I={current}: 门控值 > 1 ({hi})"
    print("  ✅ PASS")


def test_current_cache_is_final_stage():
    """Case 4: 电流缓存来自 k4 级"""
    print_header("Case 4: 电流缓存一级滞后")

    neuron = HodgkinHuxleyNeuron()
    neuron.set_external_current(100.0)
    for _ in range(50):
        neuron.step()

    stage_state = neuron.integrator.temp_state.copy()
    i_na, i_k, i_leak = ionic_currents(neuron.params, *stage_state)
    assert neuron.sodium_current == i_na, "I_Na 应为 k4 级缓存值"
    assert neuron.potassium_current == i_k, "I_K 应为 k4 级缓存值"
    assert neuron.leak_current == i_leak, "I_L 应为 k4 级缓存值"

    fresh = ionic_currents(neuron.params, *neuron.state)
    print(f"  缓存 I_Na={i_na:.4f}, 在新状态上重算 I_Na={fresh[0]:.4f}")
    assert fresh[2] != i_leak, "缓存值不应等于在新 V 上重算的值"
    print("  ✅ PASS")


def test_action_potential():
    """Case 5: 动作电位"""
    print_header("Case 5: I=300 产生动作电位")

    neuron = HodgkinHuxleyNeuron(dt=0.01)
    neuron.set_external_current(300.0)
    trace = np.array([neuron.step() for _ in range(5000)])
    print(f"  V 范围: [{trace.min():.2f}, {trace.max():.2f}]")
    assert trace.max() > 50.0, f"应出现动作电位, max V = {trace.max():.2f}"
    assert np.all(np.isfinite(trace)), "出现非有限值"
    print("  ✅ PASS")


def test_synaptic_slot_consumed():
    print_header("突触输入槽")

    neuron = HodgkinHuxleyNeuron()
    neuron.accumulate_synaptic_current(20.0)
    reference = HodgkinHuxleyNeuron()
    reference.set_external_current(20.0)

    assert neuron.step() == reference.step(), "突触输入与外部输入应等效"
    assert neuron.synaptic_current == 0.0, "step 之后输入槽应清零"
    print("  ✅ PASS")


def test_custom_params():
    print_header("自定义参数")

    params = HodgkinHuxleyParams(resting_potential=0.0)
    neuron = HodgkinHuxleyNeuron(params=params)
    assert neuron.voltage == 0.0
    assert neuron.params == params
    assert neuron.params is not params, "参数应按值拷贝"
    print("  ✅ PASS")


def test_reset():
    print_header("reset")

    neuron = HodgkinHuxleyNeuron()
    initial = neuron.state
    neuron.set_external_current(300.0)
    for _ in range(500):
        neuron.step()
    assert neuron.reset()
    assert np.array_equal(neuron.state, initial), "reset 后状态应恢复"
    assert neuron.sodium_current == 0.0, "reset 后电流缓存应清零"
    assert neuron.external_current == 0.0
    print("  ✅ PASS")


def test_release_null_handle():
    """Case 6: release"""
    print_header("Case 6: release")

    neuron = HodgkinHuxleyNeuron()
    assert neuron.release() is True
    assert neuron.release() is False
    assert neuron.integrator is None and neuron.currents is None and neuron.params is None
    assert neuron.step() == 0.0
    assert neuron.voltage == 0.0
    assert neuron.sodium_current == 0.0
    assert neuron.potassium_current == 0.0
    assert neuron.leak_current == 0.0
    assert neuron.m_gate == 0.0 and neuron.h_gate == 0.0 and neuron.n_gate == 0.0
    assert neuron.set_external_current(1.0) is False
    assert HodgkinHuxleyNeuron.create(dt=-1.0) is None
    print(f"  {neuron!r}")
    print("  ✅ PASS")


def main():
    print("╔══════════════════════════════════════════════════════════╗")
    print("║  单元 (DanYuan): Hodgkin-Huxley 神经元验证              ║")
    print("╚══════════════════════════════════════════════════════════╝")

    cases = [
        ("Case 1: 速率奇点", test_rate_singularities),
        ("速率函数数值", test_rate_values),
        ("速率溢出极限", test_rate_overflow_limits),
        ("强超极化电流", test_strong_hyperpolarizing_current),
        ("Case 2: 初始条件", test_initial_conditions),
        ("HH_PARAMS", test_preset_values),
        ("Case 3: 门控有界", test_gates_bounded),
        ("Case 4: 电流缓存", test_current_cache_is_final_stage),
        ("Case 5: 动作电位", test_action_potential),
        ("突触输入槽", test_synaptic_slot_consumed),
        ("自定义参数", test_custom_params),
        ("reset", test_reset),
        ("Case 6: release", test_release_null_handle),
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
