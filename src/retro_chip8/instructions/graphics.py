# src/retro_chip8/instructions/graphics.py
"""
描画命令（CLS, DRW）の実装。
"""
from random import Random

from retro_chip8.core.machine import Machine
from .base import Operation, Mnemonic, get_nibble

# --- CLS ---
def execute_cls(machine: Machine, rng: Random, op: Operation) -> None:
    machine.display.clear()

# --- DRW ---
def decode_drw(opcode: int) -> Operation:
    return Operation(
        opcode, Mnemonic.DRW,
        x=get_nibble(opcode, 2), y=get_nibble(opcode, 1), n=get_nibble(opcode, 0),
    )

# @intent:responsibility Dxyn を実行し、Iから読んだnバイトのスプライトをXORで描画します。
# @intent:rationale 描画原点は画面サイズで剰余を取って折り返すが、描画中に画面端を越えた
#                  ピクセルは反対側へ回り込まずに切り捨てる。
# @intent:post-condition 点灯していたピクセルが1つでも消えた場合VF=1、それ以外はVF=0。
#                       スプライトの読み出しが範囲外の場合は、画面とVFを変更せずにIndexErrorを送出する。
def execute_drw(machine: Machine, rng: Random, op: Operation) -> None:
    state = machine.state
    display = machine.display
    # 画面を書き換える前にスプライト全体を読み出す
    sprite = [machine.memory.read(state.i + row) for row in range(op.n)]
    # 座標はVFリセット前に読む（x/yにVFが指定された場合のため）
    origin_x = state.v[op.x] % display.width
    origin_y = state.v[op.y] % display.height
    state.vf = 0

    for row, sprite_row in enumerate(sprite):
        y = origin_y + row
        if y >= display.height:
            break
        for bit in range(8):
            x = origin_x + bit
            if x >= display.width:
                break
            if not sprite_row & (0x80 >> bit):
                continue
            if display.get_px(x, y):
                state.vf = 1
                display.set_px(x, y, 0)
            else:
                display.set_px(x, y, 1)
