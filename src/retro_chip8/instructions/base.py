# retro_chip8/instructions/base.py
"""
CHIP-8命令実装用の共通定義。

デコード済み命令を表す `Operation`、34種類のニーモニック、オペランド抽出用の
ユーティリティを提供します。
"""
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

# @intent:responsibility 命令バリアントの閉じた集合を定義します。
class Mnemonic(Enum):
    CLS = "CLS"
    RET = "RET"
    JP = "JP"
    CALL = "CALL"
    SE = "SE"
    SNE = "SNE"
    SE_REG = "SE_REG"
    LD = "LD"
    ADD = "ADD"
    LD_REG = "LD_REG"
    OR = "OR"
    AND = "AND"
    XOR = "XOR"
    ADD_REG = "ADD_REG"
    SUB = "SUB"
    SHR = "SHR"
    SUBN = "SUBN"
    SHL = "SHL"
    SNE_REG = "SNE_REG"
    LD_I = "LD_I"
    JP_V0 = "JP_V0"
    RND = "RND"
    DRW = "DRW"
    SKP = "SKP"
    SKNP = "SKNP"
    LD_FROM_DT = "LD_FROM_DT"
    LD_KEY = "LD_KEY"
    LD_INTO_DT = "LD_INTO_DT"
    LD_ST = "LD_ST"
    ADD_I = "ADD_I"
    LD_F = "LD_F"
    LD_B = "LD_B"
    LD_REGS_MEM = "LD_REGS_MEM"
    LD_MEM_REGS = "LD_MEM_REGS"

# @intent:responsibility 文書化されたオペコード表に存在しない命令語を表す致命的エラー。
class InvalidOpcodeError(ValueError):
    def __init__(self, opcode: int, detail: str = ""):
        self.opcode = opcode
        message = f"Instruction {opcode:#06x} not recognized"
        if detail:
            message += f" ({detail})"
        super().__init__(message)

# @intent:responsibility デコードされた1命令の種類とオペランドを記録します。
@dataclass(frozen=True)
class Operation:
    """
    デコード済み命令。使用しないオペランドフィールドはNoneのままです。
    同じ命令語からは常に等価なOperationが得られます。
    """
    opcode: int              # 元の16bit命令語
    mnemonic: Mnemonic
    x: Optional[int] = None    # 第1レジスタオペランド (nibble 2)
    y: Optional[int] = None    # 第2レジスタオペランド (nibble 1)
    n: Optional[int] = None    # 4bit即値 (nibble 0)
    kk: Optional[int] = None   # 8bit即値 (下位バイト)
    nnn: Optional[int] = None  # 12bitアドレス

    # @intent:responsibility アセンブラ風のオペランド文字列を生成します。
    @property
    def operands(self) -> List[str]:
        return _format_operands(self)

    # @intent:responsibility ニーモニックとオペランドを結合した表記を返します。例: "LD VA, #0F"
    @property
    def text(self) -> str:
        name = _ASSEMBLY_NAMES.get(self.mnemonic, self.mnemonic.value)
        operands = self.operands
        return f"{name} {', '.join(operands)}" if operands else name

# @intent:utility_function 命令語のi番目のニブル（0が最下位）を返します。
def get_nibble(word: int, index: int) -> int:
    return (word >> (index * 4)) & 0xF

# @intent:utility_function 下位8bitの即値を返します。
def get_low_byte(word: int) -> int:
    return word & 0xFF

# @intent:utility_function 下位12bitのアドレスを返します。
def get_address(word: int) -> int:
    return word & 0x0FFF

# 表示用の慣用ニーモニック。内部のバリアント名とは別に、一般的なアセンブラ表記に合わせる。
_ASSEMBLY_NAMES = {
    Mnemonic.SE_REG: "SE",
    Mnemonic.SNE_REG: "SNE",
    Mnemonic.LD_REG: "LD",
    Mnemonic.ADD_REG: "ADD",
    Mnemonic.LD_I: "LD",
    Mnemonic.JP_V0: "JP",
    Mnemonic.LD_FROM_DT: "LD",
    Mnemonic.LD_KEY: "LD",
    Mnemonic.LD_INTO_DT: "LD",
    Mnemonic.LD_ST: "LD",
    Mnemonic.ADD_I: "ADD",
    Mnemonic.LD_F: "LD",
    Mnemonic.LD_B: "LD",
    Mnemonic.LD_REGS_MEM: "LD",
    Mnemonic.LD_MEM_REGS: "LD",
}

def _reg(index: int) -> str:
    return f"V{index:X}"

def _format_operands(op: Operation) -> List[str]:
    m = op.mnemonic
    if m in (Mnemonic.CLS, Mnemonic.RET):
        return []
    if m in (Mnemonic.JP, Mnemonic.CALL):
        return [f"${op.nnn:03X}"]
    if m == Mnemonic.LD_I:
        return ["I", f"${op.nnn:03X}"]
    if m == Mnemonic.JP_V0:
        return ["V0", f"${op.nnn:03X}"]
    if m in (Mnemonic.SE, Mnemonic.SNE, Mnemonic.LD, Mnemonic.ADD, Mnemonic.RND):
        return [_reg(op.x), f"#{op.kk:02X}"]
    if m == Mnemonic.DRW:
        return [_reg(op.x), _reg(op.y), f"#{op.n:X}"]
    if op.y is not None:
        return [_reg(op.x), _reg(op.y)]
    # Fx/Ex系 (xのみ)
    special = {
        Mnemonic.LD_FROM_DT: [_reg(op.x), "DT"],
        Mnemonic.LD_KEY: [_reg(op.x), "K"],
        Mnemonic.LD_INTO_DT: ["DT", _reg(op.x)],
        Mnemonic.LD_ST: ["ST", _reg(op.x)],
        Mnemonic.ADD_I: ["I", _reg(op.x)],
        Mnemonic.LD_F: ["F", _reg(op.x)],
        Mnemonic.LD_B: ["B", _reg(op.x)],
        Mnemonic.LD_REGS_MEM: ["[I]", _reg(op.x)],
        Mnemonic.LD_MEM_REGS: [_reg(op.x), "[I]"],
    }
    return special.get(m, [_reg(op.x)])

# --- オペランド形状ごとの共通デコーダ ---
# @intent:utility_function `_nnn` 形式（12bitアドレス）の命令をデコードします。
def decode_nnn(opcode: int, mnemonic: Mnemonic) -> Operation:
    return Operation(opcode, mnemonic, nnn=get_address(opcode))

# @intent:utility_function `_xkk` 形式（レジスタ + 8bit即値）の命令をデコードします。
def decode_x_kk(opcode: int, mnemonic: Mnemonic) -> Operation:
    return Operation(opcode, mnemonic, x=get_nibble(opcode, 2), kk=get_low_byte(opcode))

# @intent:utility_function `_xy_` 形式（レジスタ2つ）の命令をデコードします。
def decode_x_y(opcode: int, mnemonic: Mnemonic) -> Operation:
    return Operation(opcode, mnemonic, x=get_nibble(opcode, 2), y=get_nibble(opcode, 1))

# @intent:utility_function `_x__` 形式（レジスタ1つ）の命令をデコードします。
def decode_x(opcode: int, mnemonic: Mnemonic) -> Operation:
    return Operation(opcode, mnemonic, x=get_nibble(opcode, 2))

# @intent:utility_function スキップ系命令の共通処理。フェッチ済みの+2に加えてさらに2進めます。
def skip_next(state) -> None:
    state.pc = (state.pc + 2) & 0xFFFF
