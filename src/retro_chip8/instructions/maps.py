# src/retro_chip8/instructions/maps.py
"""
オペコードと命令実装のマッピング定義。
"""
from . import alu
from . import control
from . import graphics
from . import load
from .base import Mnemonic

# @intent:map 命令語の最上位ニブル（ファミリ）からデコード関数へのマッピングテーブル。
# 0x0, 0x8, 0xE, 0xF の各ファミリは、デコード関数内で二次セレクタを解決する。
DECODE_MAP = {
    0x0: control.decode_system,
    0x1: control.decode_jp,
    0x2: control.decode_call,
    0x3: control.decode_se,
    0x4: control.decode_sne,
    0x5: control.decode_se_reg,
    0x6: load.decode_ld,
    0x7: alu.decode_add,
    0x8: alu.decode_alu,
    0x9: control.decode_sne_reg,
    0xA: load.decode_ld_i,
    0xB: control.decode_jp_v0,
    0xC: alu.decode_rnd,
    0xD: graphics.decode_drw,
    0xE: control.decode_key_skip,
    0xF: load.decode_misc,
}

# @intent:map ニーモニックから実行関数へのマッピングテーブル。
EXECUTE_MAP = {
    # Control
    Mnemonic.RET: control.execute_ret,
    Mnemonic.JP: control.execute_jp,
    Mnemonic.CALL: control.execute_call,
    Mnemonic.SE: control.execute_se,
    Mnemonic.SNE: control.execute_sne,
    Mnemonic.SE_REG: control.execute_se_reg,
    Mnemonic.SNE_REG: control.execute_sne_reg,
    Mnemonic.JP_V0: control.execute_jp_v0,
    Mnemonic.SKP: control.execute_skp,
    Mnemonic.SKNP: control.execute_sknp,

    # ALU
    Mnemonic.ADD: alu.execute_add,
    Mnemonic.OR: alu.execute_or,
    Mnemonic.AND: alu.execute_and,
    Mnemonic.XOR: alu.execute_xor,
    Mnemonic.ADD_REG: alu.execute_add_reg,
    Mnemonic.SUB: alu.execute_sub,
    Mnemonic.SHR: alu.execute_shr,
    Mnemonic.SUBN: alu.execute_subn,
    Mnemonic.SHL: alu.execute_shl,
    Mnemonic.RND: alu.execute_rnd,

    # Load/Store
    Mnemonic.LD: load.execute_ld,
    Mnemonic.LD_REG: load.execute_ld_reg,
    Mnemonic.LD_I: load.execute_ld_i,
    Mnemonic.LD_FROM_DT: load.execute_ld_from_dt,
    Mnemonic.LD_KEY: load.execute_ld_key,
    Mnemonic.LD_INTO_DT: load.execute_ld_into_dt,
    Mnemonic.LD_ST: load.execute_ld_st,
    Mnemonic.ADD_I: load.execute_add_i,
    Mnemonic.LD_F: load.execute_ld_f,
    Mnemonic.LD_B: load.execute_ld_b,
    Mnemonic.LD_REGS_MEM: load.execute_ld_regs_mem,
    Mnemonic.LD_MEM_REGS: load.execute_ld_mem_regs,

    # Graphics
    Mnemonic.CLS: graphics.execute_cls,
    Mnemonic.DRW: graphics.execute_drw,
}
