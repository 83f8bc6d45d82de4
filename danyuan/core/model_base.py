"""
Layer 0: 模型基类 — 缓冲区生命周期 + 空句柄语义

所有单元 (DanYuan) 模型共享同一个生命周期:

    构造: state 向量 → 参数/电流缓存 → RK4 scratch
      │     (任何一步分配失败 → release() 拆除已建部分 → 异常上抛)
      ▼
    每个时间步: set input → step()
      │
      ▼
    release(): RK4 scratch → 参数/电流缓存 → state (与构造相反的顺序)

release() 之后的模型就是"空句柄":
所有公共操作静默返回中性值 (0.0 / False / None), 从不抛异常。
create() 工厂把构造失败转换为 None 返回值。
"""

import dataclasses
import functools
import logging
from typing import Optional

import numpy as np

from danyuan.core.rk4 import DerivativeModel, RK4Integrator, DEFAULT_DT

logger = logging.getLogger(__name__)


def null_safe(default=0.0):
    """已释放模型上的调用直接返回 default"""
    def decorator(method):
        @functools.wraps(method)
        def wrapper(self, *args, **kwargs):
            if self._state is None:
                return default
            return method(self, *args, **kwargs)
        return wrapper
    return decorator


class DynamicalModel(DerivativeModel):
    """定步长 ODE 模型基类

    子类需要:
    - 设置 DIMENSION (状态维度)
    - 实现 derivatives(), _init_buffers(), _set_initial_conditions()
    - 在调用 super().__init__() 之前解析好预设 (非法预设直接 ValueError,
      此时还没有分配任何东西)

    Attributes:
        dt: 时间步长 (ms)
        integrator: RK4 积分器, release() 后为 None
        currents: 电流/派生量缓存 (dataclass), release() 后为 None
    """

    DIMENSION: int = 0

    def __init__(self, dt: float = DEFAULT_DT):
        self.dt = dt
        self.integrator: Optional[RK4Integrator] = None
        self.currents = None
        self._state: Optional[np.ndarray] = None

        # 构造顺序与原始分配顺序一致; 失败时整体拆除
        try:
            self._state = np.zeros(self.DIMENSION)
            self._init_buffers()
            self._set_initial_conditions()
            self.integrator = RK4Integrator(self, self.DIMENSION, dt)
        except (MemoryError, ValueError):
            self.release()
            raise

    @classmethod
    def create(cls, *args, **kwargs):
        """构造工厂: 成功返回实例, 失败 (分配失败/非法预设) 返回 None"""
        try:
            return cls(*args, **kwargs)
        except (MemoryError, ValueError) as exc:
            logger.error("%s 构造失败: %s", cls.__name__, exc)
            return None

    # =========================================================================
    # 子类钩子
    # =========================================================================

    def _init_buffers(self) -> None:
        """拷贝参数, 分配电流缓存"""
        raise NotImplementedError

    def _set_initial_conditions(self) -> None:
        """写入初始状态 (静息/平衡值)"""
        raise NotImplementedError

    def _release_buffers(self) -> None:
        """释放参数/电流缓存"""
        self.currents = None

    # =========================================================================
    # 公共接口
    # =========================================================================

    @property
    def is_released(self) -> bool:
        return self._state is None

    @property
    @null_safe(None)
    def state(self) -> np.ndarray:
        """状态向量快照 (拷贝)"""
        return self._state.copy()

    @null_safe(False)
    def reset(self) -> bool:
        """恢复初始条件, 清空电流缓存 (不重新分配任何缓冲)"""
        for f in dataclasses.fields(self.currents):
            setattr(self.currents, f.name, 0.0)
        self._set_initial_conditions()
        return True

    def release(self) -> bool:
        """释放全部缓冲

        Returns:
            True 表示本次确实释放了资源; 已释放的模型返回 False
        """
        if self._state is None:
            return False
        if self.integrator is not None:
            self.integrator.release()
            self.integrator = None
        self._release_buffers()
        self._state = None
        return True


def release_model(model: Optional[DynamicalModel]) -> bool:
    """释放模型; model 为 None 时是安全的空操作"""
    if model is None:
        return False
    return model.release()
