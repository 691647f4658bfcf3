# src/retro_chip8/instructions/load.py
"""
ロード/ストア命令（レジスタ、インデックスレジスタ、タイマ、メモリ転送）の実装。
"""
from random import Random

from retro_chip8.core.machine import Machine
from retro_chip8.devices.font import FONT_ADDRESS, GLYPH_SIZE
from .base import (
    Mnemonic, Operation, InvalidOpcodeError, decode_nnn, decode_x, decode_x_kk, get_low_byte,
)

# --- LD Vx, kk ---
def decode_ld(opcode: int) -> Operation:
    return decode_x_kk(opcode, Mnemonic.LD)

def execute_ld(machine: Machine, rng: Random, op: Operation) -> None:
    machine.state.v[op.x] = op.kk

# --- LD Vx, Vy ---
def execute_ld_reg(machine: Machine, rng: Random, op: Operation) -> None:
    v = machine.state.v
    v[op.x] = v[op.y]

# --- LD I, nnn ---
def decode_ld_i(opcode: int) -> Operation:
    return decode_nnn(opcode, Mnemonic.LD_I)

def execute_ld_i(machine: Machine, rng: Random, op: Operation) -> None:
    machine.state.i = op.nnn

# --- 0xF ファミリ ---
_MISC_OPS = {
    0x07: Mnemonic.LD_FROM_DT,
    0x0A: Mnemonic.LD_KEY,
    0x15: Mnemonic.LD_INTO_DT,
    0x18: Mnemonic.LD_ST,
    0x1E: Mnemonic.ADD_I,
    0x29: Mnemonic.LD_F,
    0x33: Mnemonic.LD_B,
    0x55: Mnemonic.LD_REGS_MEM,
    0x65: Mnemonic.LD_MEM_REGS,
}

# @intent:responsibility 0xFファミリを下位バイトで選択してデコードします。
def decode_misc(opcode: int) -> Operation:
    selector = get_low_byte(opcode)
    mnemonic = _MISC_OPS.get(selector)
    if mnemonic is None:
        raise InvalidOpcodeError(opcode, f"unknown selector {selector:#04x} for group F")
    return decode_x(opcode, mnemonic)

# --- タイマ ---
def execute_ld_from_dt(machine: Machine, rng: Random, op: Operation) -> None:
    machine.state.v[op.x] = machine.state.dt

def execute_ld_into_dt(machine: Machine, rng: Random, op: Operation) -> None:
    machine.state.dt = machine.state.v[op.x]

def execute_ld_st(machine: Machine, rng: Random, op: Operation) -> None:
    machine.state.st = machine.state.v[op.x]

# --- LD Vx, K ---
# @intent:responsibility Fx0A を実行します。押下中のキーがなければPCを2戻して同じ命令を再実行させます。
# @intent:rationale 真のブロッキングではなく、ステップ駆動側へ毎回制御を返すポーリング方式。
#                  キーの離上エッジは検出せず、押しっぱなしのキーは即座に条件を満たす。
def execute_ld_key(machine: Machine, rng: Random, op: Operation) -> None:
    key = machine.keypad.first_pressed()
    if key is None:
        machine.state.pc = (machine.state.pc - 2) & 0xFFFF
    else:
        machine.state.v[op.x] = key

# --- ADD I, Vx ---
# @intent:responsibility Fx1E を実行します。16bitで加算し、フラグは変更しません。
def execute_add_i(machine: Machine, rng: Random, op: Operation) -> None:
    state = machine.state
    state.i = (state.i + state.v[op.x]) & 0xFFFF

# --- LD F, Vx ---
# @intent:pre-condition Vxが0x0〜0xFの場合のみ意味のあるアドレスになります。
def execute_ld_f(machine: Machine, rng: Random, op: Operation) -> None:
    machine.state.i = FONT_ADDRESS + machine.state.v[op.x] * GLYPH_SIZE

# @intent:pre-condition I から count バイトの範囲全体がメモリ内に収まっている必要があります。
# @intent:rationale 途中で範囲外に達してから失敗すると部分的に書き込まれるため、先に範囲全体を検査する。
def _check_range(machine: Machine, start: int, count: int) -> None:
    if start + count > machine.memory.get_size():
        raise IndexError(
            f"Access of {count} bytes at {start:#05x} exceeds memory of size {machine.memory.get_size()}."
        )

# --- LD B, Vx ---
# @intent:responsibility Fx33 を実行し、Vxの百の位・十の位・一の位を I, I+1, I+2 に格納します。
def execute_ld_b(machine: Machine, rng: Random, op: Operation) -> None:
    value = machine.state.v[op.x]
    i = machine.state.i
    _check_range(machine, i, 3)
    machine.memory.write(i, value // 100)
    machine.memory.write(i + 1, (value // 10) % 10)
    machine.memory.write(i + 2, value % 10)

# --- LD [I], Vx / LD Vx, [I] ---
# @intent:responsibility Fx55 を実行します。V0..Vx（両端を含む）をIから連続して書き込みます。
# @intent:post-condition Iは変更されない。
def execute_ld_regs_mem(machine: Machine, rng: Random, op: Operation) -> None:
    state = machine.state
    _check_range(machine, state.i, op.x + 1)
    for reg in range(op.x + 1):
        machine.memory.write(state.i + reg, state.v[reg])

def execute_ld_mem_regs(machine: Machine, rng: Random, op: Operation) -> None:
    state = machine.state
    _check_range(machine, state.i, op.x + 1)
    for reg in range(op.x + 1):
        state.v[reg] = machine.memory.read(state.i + reg)
