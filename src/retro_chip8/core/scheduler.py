# retro_chip8/core/scheduler.py
"""
ステップ駆動（フレームペーサー）

1フレームごとに一定数の命令を実行し、フレームの終わりにタイマを1回減算します。
1フレームあたりの命令数は外部ポリシーであり、コアの不変条件ではありません。
"""
from typing import Optional

from retro_chip8.core.cpu import Chip8Cpu
from retro_chip8.core.snapshot import Snapshot

# @intent:constant 60Hzのフレームあたりの既定命令数。
DEFAULT_INSTRUCTIONS_PER_FRAME = 11

# @intent:responsibility 命令のバッチ実行とタイマ減算を1フレーム単位で行います。
class FrameScheduler:
    def __init__(self, cpu: Chip8Cpu, instructions_per_frame: int = DEFAULT_INSTRUCTIONS_PER_FRAME):
        if instructions_per_frame <= 0:
            raise ValueError("instructions_per_frame must be a positive integer.")
        self._cpu = cpu
        self._instructions_per_frame = instructions_per_frame
        self._frame_count = 0

    @property
    def cpu(self) -> Chip8Cpu:
        return self._cpu

    @property
    def frame_count(self) -> int:
        return self._frame_count

    @property
    def instructions_per_frame(self) -> int:
        return self._instructions_per_frame

    # @intent:responsibility サウンドタイマが動作中（非ゼロ）かどうかを返します。
    @property
    def sound_active(self) -> bool:
        return self._cpu.machine.state.st > 0

    # @intent:responsibility 1フレーム分の命令を実行し、タイマを減算します。
    # @intent:return フレーム内で最後に実行した命令のSnapshot。
    # @intent:rationale 各命令は原子的に完了するため、フレームの途中で例外が伝播しても状態は一貫している。
    def run_frame(self) -> Optional[Snapshot]:
        snapshot = None
        for _ in range(self._instructions_per_frame):
            snapshot = self._cpu.step()
        self._cpu.machine.decrement_timers()
        self._frame_count += 1
        return snapshot

    # @intent:responsibility 指定したフレーム数だけ連続で実行します（ヘッドレス実行用）。
    def run_frames(self, count: int) -> Optional[Snapshot]:
        snapshot = None
        for _ in range(count):
            snapshot = self.run_frame()
        return snapshot
