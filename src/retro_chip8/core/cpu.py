# retro_chip8/core/cpu.py
"""
Core Layer (CPU)

このモジュールは、CHIP-8の命令サイクル（フェッチ→デコード→実行）の駆動を提供します。
具体的な命令の振る舞いはInstruction Layerに委譲されます。
"""
from random import Random
from typing import Optional

from retro_chip8.core.machine import Machine, PROGRAM_START
from retro_chip8.core.snapshot import Snapshot, Metadata
from retro_chip8.instructions import (
    Operation, fetch_opcode, decode_opcode, execute_instruction,
)

# @intent:responsibility CHIP-8マシンに対して1命令ずつ実行を進めます。
class Chip8Cpu:
    """
    CHIP-8の命令サイクルを駆動するクラス。
    マシン状態と乱数源は外部から注入され、CPU自身はグローバルな状態を持ちません。
    """
    # @intent:responsibility マシン状態と乱数源への参照を初期化します。
    # @intent:rationale 乱数源を注入可能にすることで、シード固定による決定的なテストを可能にします。
    def __init__(self, machine: Machine, rng: Optional[Random] = None, start_address: int = PROGRAM_START):
        self._machine = machine
        self._rng = rng if rng is not None else Random()
        self._start_address = start_address
        self._step_count: int = 0
        self._machine.state.pc = start_address

    @property
    def machine(self) -> Machine:
        return self._machine

    @property
    def step_count(self) -> int:
        return self._step_count

    # @intent:responsibility 乱数源のシードを再設定します。
    def seed(self, value: Optional[int]) -> None:
        self._rng.seed(value)

    # @intent:responsibility レジスタ・スタック・ディスプレイ・キーをリセットします。
    # @intent:rationale メモリ（フォントとロード済みROM）は保持し、同じプログラムを最初から再実行できるようにする。
    def reset(self) -> None:
        machine = self._machine
        machine.state = type(machine.state)()
        machine.stack[:] = [0] * len(machine.stack)
        machine.display.clear()
        machine.keypad.release_all()
        machine.state.pc = self._start_address
        self._step_count = 0

    def _fetch(self) -> int:
        return fetch_opcode(self._machine)

    def _decode(self, opcode: int) -> Operation:
        return decode_opcode(opcode)

    def _execute(self, operation: Operation) -> None:
        execute_instruction(operation, self._machine, self._rng)

    # @intent:responsibility 1命令サイクルを実行し、その結果のスナップショットを返します。
    # @intent:flow フェッチ(PC+2) -> デコード -> 実行 -> スナップショット生成 の順序で処理を行います。
    # @intent:post-condition 未定義命令の場合はInvalidOpcodeErrorが伝播し、実行は継続できません。
    def step(self) -> Snapshot:
        initial_pc = self._machine.state.pc

        opcode = self._fetch()
        operation = self._decode(opcode)
        self._execute(operation)

        self._step_count += 1
        return Snapshot(
            state=self._machine.state.copy(),
            operation=operation,
            metadata=Metadata(
                step_count=self._step_count,
                address=initial_pc,
                symbol_info=f"{initial_pc:#05x}: {operation.text}",
            ),
        )
