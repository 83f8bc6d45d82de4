"""
Hodgkin-Huxley 门控速率函数 α(V) / β(V)

经典 HH (1952) 形式, 电压以静息为 0 的约定书写 (去极化为正)。

两个可去奇点:
  αm 在 V = 25 处为 0/0, 极限 (L'Hôpital) = 1.0
  αn 在 V = 10 处为 0/0, 极限 (L'Hôpital) = 0.1
恰好落在奇点时直接返回解析极限, 不做除法。

指数溢出 (极端超极化) 时取 +inf, 各速率自然落到渐近极限:
  αm, αn, βh → 0;  βm, αh, βn → inf
"""

import math


def _exp(x: float) -> float:
    """math.exp, 溢出时返回 +inf"""
    try:
        return math.exp(x)
    except OverflowError:
        return math.inf


def alpha_m(voltage: float) -> float:
    """Na⁺ 激活门 m 的开放速率"""
    if voltage == 25.0:
        return 1.0
    return (25.0 - voltage) / (10.0 * (_exp((25.0 - voltage) / 10.0) - 1.0))


def beta_m(voltage: float) -> float:
    """Na⁺ 激活门 m 的关闭速率"""
    return 4.0 * _exp(-voltage / 18.0)


def alpha_h(voltage: float) -> float:
    """Na⁺ 失活门 h 的开放速率"""
    return 0.07 * _exp(-voltage / 20.0)


def beta_h(voltage: float) -> float:
    """Na⁺ 失活门 h 的关闭速率"""
    return 1.0 / (_exp((30.0 - voltage) / 10.0) + 1.0)


def alpha_n(voltage: float) -> float:
    """K⁺ 激活门 n 的开放速率"""
    if voltage == 10.0:
        return 0.1
    return (10.0 - voltage) / (100.0 * (_exp((10.0 - voltage) / 10.0) - 1.0))


def beta_n(voltage: float) -> float:
    """K⁺ 激活门 n 的关闭速率"""
    return 0.125 * _exp(-voltage / 80.0)


def steady_state(alpha, beta, voltage: float) -> float:
    """门控稳态值 x∞ = α / (α + β)"""
    a = alpha(voltage)
    b = beta(voltage)
    return a / (a + b)
