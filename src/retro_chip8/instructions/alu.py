# src/retro_chip8/instructions/alu.py
"""
算術論理演算命令の実装。

全ての演算は8bit（mod 256）で行われます。VFへのフラグ書き込みは結果の格納より先に行い、
Vx自身がVFである場合は結果の値が優先されます。
"""
from random import Random

from retro_chip8.core.machine import Machine
from retro_chip8.core.state import CpuState
from .base import (
    Mnemonic, Operation, InvalidOpcodeError, decode_x_kk, decode_x_y, get_nibble,
)

# @intent:utility_function フラグを書き込んだ後に8bitに切り詰めた結果をVxへ格納します。
def _store_with_flag(state: CpuState, reg: int, result: int, flag: bool) -> None:
    state.vf = 0x1 if flag else 0x0
    state.v[reg] = result & 0xFF

# --- ADD (即値) ---
def decode_add(opcode: int) -> Operation:
    return decode_x_kk(opcode, Mnemonic.ADD)

# @intent:responsibility 7xkk を実行します。キャリーフラグは変更しません。
def execute_add(machine: Machine, rng: Random, op: Operation) -> None:
    v = machine.state.v
    v[op.x] = (v[op.x] + op.kk) & 0xFF

# --- 0x8 ファミリ ---
_ALU_OPS = {
    0x0: Mnemonic.LD_REG,
    0x1: Mnemonic.OR,
    0x2: Mnemonic.AND,
    0x3: Mnemonic.XOR,
    0x4: Mnemonic.ADD_REG,
    0x5: Mnemonic.SUB,
    0x6: Mnemonic.SHR,
    0x7: Mnemonic.SUBN,
    0xE: Mnemonic.SHL,
}

# @intent:responsibility 0x8ファミリを下位ニブルで選択してデコードします。
def decode_alu(opcode: int) -> Operation:
    selector = get_nibble(opcode, 0)
    mnemonic = _ALU_OPS.get(selector)
    if mnemonic is None:
        raise InvalidOpcodeError(opcode, f"unknown selector {selector:#x} for group 8")
    return decode_x_y(opcode, mnemonic)

def execute_or(machine: Machine, rng: Random, op: Operation) -> None:
    v = machine.state.v
    v[op.x] = v[op.x] | v[op.y]

def execute_and(machine: Machine, rng: Random, op: Operation) -> None:
    v = machine.state.v
    v[op.x] = v[op.x] & v[op.y]

def execute_xor(machine: Machine, rng: Random, op: Operation) -> None:
    v = machine.state.v
    v[op.x] = v[op.x] ^ v[op.y]

# @intent:responsibility 8xy4 を実行します。9bit幅で加算し、255を超えた場合VF=1。
def execute_add_reg(machine: Machine, rng: Random, op: Operation) -> None:
    state = machine.state
    result = state.v[op.x] + state.v[op.y]
    _store_with_flag(state, op.x, result, result > 0xFF)

# @intent:responsibility 8xy5 を実行します。VFは「ボローなし」(Vx > Vy) を表します。
def execute_sub(machine: Machine, rng: Random, op: Operation) -> None:
    state = machine.state
    vx, vy = state.v[op.x], state.v[op.y]
    _store_with_flag(state, op.x, vx - vy, vx > vy)

# @intent:responsibility 8xy7 を実行します。Vx = Vy - Vx、VFは Vy > Vx。
def execute_subn(machine: Machine, rng: Random, op: Operation) -> None:
    state = machine.state
    vx, vy = state.v[op.x], state.v[op.y]
    _store_with_flag(state, op.x, vy - vx, vy > vx)

# @intent:responsibility 8xy6 を実行します。VFにはシフト前の最下位ビットが入ります。
# @intent:rationale オリジナルCHIP-8方式。Vyは参照しない（CHIP-48/SUPER-CHIPの Vx=Vy は実装しない）。
def execute_shr(machine: Machine, rng: Random, op: Operation) -> None:
    state = machine.state
    value = state.v[op.x]
    _store_with_flag(state, op.x, value >> 1, (value & 0x01) != 0)

# @intent:responsibility 8xyE を実行します。VFにはシフト前の最上位ビットが入ります。
def execute_shl(machine: Machine, rng: Random, op: Operation) -> None:
    state = machine.state
    value = state.v[op.x]
    _store_with_flag(state, op.x, value << 1, (value & 0x80) != 0)

# --- RND ---
def decode_rnd(opcode: int) -> Operation:
    return decode_x_kk(opcode, Mnemonic.RND)

# @intent:responsibility Cxkk を実行します。注入された乱数源から1バイトを引き、マスクして格納します。
def execute_rnd(machine: Machine, rng: Random, op: Operation) -> None:
    machine.state.v[op.x] = rng.getrandbits(8) & op.kk
