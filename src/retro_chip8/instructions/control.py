# src/retro_chip8/instructions/control.py
"""
制御命令（ジャンプ、サブルーチン、条件スキップ）の実装。
"""
from random import Random

from retro_chip8.core.machine import Machine
from .base import (
    Mnemonic, Operation, InvalidOpcodeError, get_low_byte,
    decode_nnn, decode_x, decode_x_kk, decode_x_y, get_nibble, skip_next,
)

# --- 0x0 ファミリ (CLS / RET) ---
# @intent:responsibility 0x0ファミリの命令をデコードします。00E0と00EE以外は未定義です。
# @intent:rationale 0nnn (SYS) は実機の機械語呼び出しであり、インタプリタでは扱わない。
def decode_system(opcode: int) -> Operation:
    if opcode == 0x00E0:
        return Operation(opcode, Mnemonic.CLS)
    if opcode == 0x00EE:
        return Operation(opcode, Mnemonic.RET)
    raise InvalidOpcodeError(opcode, "unknown system instruction")

# --- RET ---
# @intent:responsibility RET命令を実行し、スタックから戻りアドレスを取り出します。
# @intent:rationale SPが0の場合は減算しない（飽和）。スロット0はCALLでは使われない。
def execute_ret(machine: Machine, rng: Random, op: Operation) -> None:
    state = machine.state
    state.pc = machine.stack[state.sp]
    if state.sp > 0:
        state.sp -= 1

# --- JP ---
def decode_jp(opcode: int) -> Operation:
    return decode_nnn(opcode, Mnemonic.JP)

def execute_jp(machine: Machine, rng: Random, op: Operation) -> None:
    machine.state.pc = op.nnn

# --- CALL ---
def decode_call(opcode: int) -> Operation:
    return decode_nnn(opcode, Mnemonic.CALL)

# @intent:responsibility CALL命令を実行します。SPを先に進めてから戻りアドレスを格納します。
# @intent:pre-condition スタックに空きがあること。溢れた場合はIndexErrorを送出します。
def execute_call(machine: Machine, rng: Random, op: Operation) -> None:
    state = machine.state
    if state.sp + 1 >= len(machine.stack):
        raise IndexError(f"Stack overflow: CALL ${op.nnn:03X} with SP={state.sp}")
    state.sp += 1
    # state.pc はフェッチ時に既に次の命令を指している
    machine.stack[state.sp] = state.pc
    state.pc = op.nnn

# --- SE / SNE (即値) ---
def decode_se(opcode: int) -> Operation:
    return decode_x_kk(opcode, Mnemonic.SE)

def execute_se(machine: Machine, rng: Random, op: Operation) -> None:
    if machine.state.v[op.x] == op.kk:
        skip_next(machine.state)

def decode_sne(opcode: int) -> Operation:
    return decode_x_kk(opcode, Mnemonic.SNE)

def execute_sne(machine: Machine, rng: Random, op: Operation) -> None:
    if machine.state.v[op.x] != op.kk:
        skip_next(machine.state)

# --- SE / SNE (レジスタ間) ---
# @intent:responsibility 5xy0 をデコードします。下位ニブルが0以外の場合は未定義命令です。
def decode_se_reg(opcode: int) -> Operation:
    if get_nibble(opcode, 0) != 0x0:
        raise InvalidOpcodeError(opcode, "5xy_ requires low nibble 0")
    return decode_x_y(opcode, Mnemonic.SE_REG)

def execute_se_reg(machine: Machine, rng: Random, op: Operation) -> None:
    v = machine.state.v
    if v[op.x] == v[op.y]:
        skip_next(machine.state)

# @intent:responsibility 9xy0 をデコードします。下位ニブルが0以外の場合は未定義命令です。
def decode_sne_reg(opcode: int) -> Operation:
    if get_nibble(opcode, 0) != 0x0:
        raise InvalidOpcodeError(opcode, "9xy_ requires low nibble 0")
    return decode_x_y(opcode, Mnemonic.SNE_REG)

def execute_sne_reg(machine: Machine, rng: Random, op: Operation) -> None:
    v = machine.state.v
    if v[op.x] != v[op.y]:
        skip_next(machine.state)

# --- JP V0 ---
def decode_jp_v0(opcode: int) -> Operation:
    return decode_nnn(opcode, Mnemonic.JP_V0)

# @intent:responsibility Bnnn を実行します。結果は12bitアドレス空間に収まるようマスクされます。
def execute_jp_v0(machine: Machine, rng: Random, op: Operation) -> None:
    machine.state.pc = (machine.state.v[0x0] + op.nnn) & 0x0FFF

# --- SKP / SKNP (0xE ファミリ) ---
_KEY_SKIPS = {
    0x9E: Mnemonic.SKP,
    0xA1: Mnemonic.SKNP,
}

# @intent:responsibility 0xEファミリを下位バイトで選択してデコードします。
def decode_key_skip(opcode: int) -> Operation:
    mnemonic = _KEY_SKIPS.get(get_low_byte(opcode))
    if mnemonic is None:
        raise InvalidOpcodeError(opcode, f"unknown selector {get_low_byte(opcode):#04x} for group E")
    return decode_x(opcode, mnemonic)

# @intent:pre-condition Vxの値は0x0〜0xFである必要があります（範囲外はIndexError）。
def execute_skp(machine: Machine, rng: Random, op: Operation) -> None:
    if machine.keypad.is_down(machine.state.v[op.x]):
        skip_next(machine.state)

def execute_sknp(machine: Machine, rng: Random, op: Operation) -> None:
    if not machine.keypad.is_down(machine.state.v[op.x]):
        skip_next(machine.state)
