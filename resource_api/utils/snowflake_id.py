import threading
import time
from typing import Optional

TIMESTAMP_SHIFT = 22
MACHINE_ID_SHIFT = 12
MAX_MACHINE_ID = (1 << 10) - 1
MAX_SEQUENCE = (1 << 12) - 1

# 2022-01-01 00:00:00 UTC
DEFAULT_EPOCH_MS = 1640995200000


class SnowflakeIDGenerator:
    """
    雪花算法ID生成器，用于服务端分配的资源ID

    41位毫秒时间戳 | 10位机器ID | 12位序列号，同一进程内单调递增。
    """

    def __init__(self, machine_id: int = 0, epoch: int = DEFAULT_EPOCH_MS):
        if not 0 <= machine_id <= MAX_MACHINE_ID:
            raise ValueError(f"机器ID必须在0-{MAX_MACHINE_ID}之间")
        self.machine_id = machine_id
        self.epoch = epoch
        self._sequence = 0
        self._last_timestamp = -1
        self._lock = threading.Lock()

    @staticmethod
    def _now_ms() -> int:
        return int(time.time() * 1000)

    def generate_id(self) -> int:
        """
        生成ID

        异常:
            RuntimeError: 检测到时钟回拨
        """
        with self._lock:
            timestamp = self._now_ms()
            if timestamp < self._last_timestamp:
                raise RuntimeError(
                    f"时钟回拨检测：当前时间戳{timestamp}小于上次时间戳{self._last_timestamp}"
                )

            if timestamp == self._last_timestamp:
                self._sequence = (self._sequence + 1) & MAX_SEQUENCE
                # 本毫秒序列号用尽，等到下一毫秒
                if self._sequence == 0:
                    while timestamp <= self._last_timestamp:
                        timestamp = self._now_ms()
            else:
                self._sequence = 0

            self._last_timestamp = timestamp
            return (
                ((timestamp - self.epoch) << TIMESTAMP_SHIFT)
                | (self.machine_id << MACHINE_ID_SHIFT)
                | self._sequence
            )


_generator: Optional[SnowflakeIDGenerator] = None
_generator_lock = threading.Lock()


def get_snowflake_generator() -> SnowflakeIDGenerator:
    """获取进程内共享的生成器"""
    global _generator

    if _generator is None:
        with _generator_lock:
            if _generator is None:
                _generator = SnowflakeIDGenerator()
    return _generator


def generate_snowflake_string_id() -> str:
    """生成字符串格式的ID"""
    return str(get_snowflake_generator().generate_id())
