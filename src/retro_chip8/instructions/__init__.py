"""
CHIP-8命令セット実装パッケージ。

フェッチ（命令語の読み出し）、デコード（命令語→Operation の純粋関数）、
実行（Operation をマシン状態へ適用）の3段階を提供します。
"""
from random import Random

from retro_chip8.core.machine import Machine
from .base import InvalidOpcodeError, Mnemonic, Operation, get_nibble
from .maps import DECODE_MAP, EXECUTE_MAP

__all__ = [
    "InvalidOpcodeError", "Mnemonic", "Operation",
    "fetch_opcode", "decode_opcode", "execute_instruction",
]

# @intent:responsibility PCの位置から16bitの命令語をビッグエンディアンで読み出し、PCを2進めます。
# @intent:pre-condition PCとPC+1がメモリ範囲内であること。範囲外はIndexError（回復不能）。
def fetch_opcode(machine: Machine) -> int:
    state = machine.state
    opcode = machine.memory.read_word(state.pc)
    state.pc = (state.pc + 2) & 0xFFFF
    return opcode

# @intent:responsibility 命令語をデコードし、Operationオブジェクトを返します。
# @intent:post-condition 未定義の命令語に対してはInvalidOpcodeErrorを送出します。副作用はありません。
def decode_opcode(opcode: int) -> Operation:
    """
    16bitの命令語を34種類の命令バリアントのいずれかにデコードします。
    """
    if not 0 <= opcode <= 0xFFFF:
        raise InvalidOpcodeError(opcode & 0xFFFF, f"{opcode} is not a 16-bit word")
    decoder = DECODE_MAP[get_nibble(opcode, 3)]
    return decoder(opcode)

# @intent:responsibility デコードされた命令を実行し、マシン状態を変更します。
def execute_instruction(operation: Operation, machine: Machine, rng: Random) -> None:
    """
    デコードされた命令を実行します。PCはフェッチ時に既に次の命令へ進んでいる前提です。
    """
    executor = EXECUTE_MAP[operation.mnemonic]
    executor(machine, rng, operation)
