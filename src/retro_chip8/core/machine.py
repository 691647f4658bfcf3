# retro_chip8/core/machine.py
"""
Core Layer (マシン状態)

メモリ、レジスタ、スタック、ディスプレイバッファ、キー状態を1つの可変集約として保持します。
集約はエミュレーションセッションごとに1つ生成され、ステップ駆動側が排他的に所有します。
"""
from dataclasses import dataclass, field
from typing import Iterable, List

from retro_chip8.core.memory import RAM, MEMORY_SIZE
from retro_chip8.core.state import CpuState
from retro_chip8.devices.display import Display
from retro_chip8.devices.font import FONT_ADDRESS, FONT_SET
from retro_chip8.devices.keypad import Keypad

# @intent:constant スタックの段数と、プログラムの慣例的なロードアドレス。
STACK_SIZE = 16
PROGRAM_START = 0x200

# @intent:responsibility CHIP-8マシンの全状態を保持し、外部協調者向けの操作を提供します。
# @intent:rationale 状態はグローバルに置かず、fetch/decode/executeに明示的に渡す。
@dataclass
class Machine:
    """
    CHIP-8マシン状態の集約。命令の意味論は持たず、アクセサと初期化操作のみを提供します。
    """
    state: CpuState = field(default_factory=CpuState)
    memory: RAM = field(default_factory=lambda: RAM(MEMORY_SIZE))
    stack: List[int] = field(default_factory=lambda: [0] * STACK_SIZE)
    display: Display = field(default_factory=Display)
    keypad: Keypad = field(default_factory=Keypad)

    # @intent:responsibility バイト列を指定アドレスへそのままコピーします（ROMローダー向け）。
    def load_into_memory(self, data: Iterable[int], start_address: int = PROGRAM_START) -> None:
        self.memory.load(start_address, data)

    # @intent:responsibility 組み込みフォントをアドレス0〜79へ書き込みます。
    # @intent:pre-condition フォントグリフアドレス命令(Fx29)の実行前に一度呼び出す必要があります。
    def load_font(self) -> None:
        self.memory.load(FONT_ADDRESS, FONT_SET)

    # @intent:responsibility ディレイタイマとサウンドタイマを1ずつ減算します（0未満にはならない）。
    def decrement_timers(self) -> None:
        if self.state.dt > 0:
            self.state.dt -= 1
        if self.state.st > 0:
            self.state.st -= 1
