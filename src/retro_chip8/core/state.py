# retro_chip8/core/state.py
"""
Core Layer (CPU状態)

このモジュールは、CHIP-8のレジスタファイル（V0〜VF、I、PC、SP、DT、ST）を保持する
データ構造を定義します。
"""
from dataclasses import dataclass, field, replace
from typing import List

# @intent:constant 汎用レジスタの本数。VFはフラグレジスタとして兼用されます。
REGISTER_COUNT = 16
FLAG_REGISTER = 0xF

# @intent:responsibility CHIP-8のレジスタ状態を保持します。
@dataclass
class CpuState:
    """
    CHIP-8のレジスタ状態を保持するデータクラス。
    全ての値は符号なし整数として扱われ、ビット幅は各命令の実装側でマスクされます。
    """
    v: List[int] = field(default_factory=lambda: [0] * REGISTER_COUNT)  # V0..VF (8bit)
    i: int = 0x0000   # Index Register (16bit)
    pc: int = 0x0000  # Program Counter (16bit)
    sp: int = 0x00    # Stack Pointer (8bit)
    dt: int = 0x00    # Delay Timer (8bit)
    st: int = 0x00    # Sound Timer (8bit)
    # @intent:rationale 初期値は全て0。PCはステップ駆動の開始直前にロードアドレス(0x200)へ設定される。

    # @intent:accessor VFフラグレジスタへのアクセスを提供します。
    @property
    def vf(self) -> int:
        return self.v[FLAG_REGISTER]

    @vf.setter
    def vf(self, value: int) -> None:
        self.v[FLAG_REGISTER] = value & 0xFF

    # @intent:responsibility レジスタリストを含めた独立したコピーを返します。
    # @intent:rationale dataclasses.replaceは浅いコピーのため、vリストを共有してしまう。
    def copy(self) -> "CpuState":
        return replace(self, v=list(self.v))
