# retro_chip8/core/snapshot.py
"""
実行状態の不変スナップショット

1命令の実行結果（実行後のレジスタ状態、実行した命令、メタデータ）を記録する
不変のデータ構造を定義します。
"""
from dataclasses import dataclass
from typing import Optional

from retro_chip8.core.state import CpuState
from retro_chip8.instructions.base import Operation

# @intent:responsibility 実行に関するメタデータを記録します。
@dataclass(frozen=True)
class Metadata:
    """
    実行に関するメタデータ（累計実行命令数、命令のアセンブリ表記）を記録するデータクラス。
    """
    step_count: int
    address: int  # 命令がフェッチされたアドレス
    symbol_info: Optional[str] = None  # 例: "0x200: LD V1, #0A"

# @intent:responsibility ある一時点におけるCPUの状態を不変に記録します。
@dataclass(frozen=True)
class Snapshot:
    state: CpuState  # 生成時にコピーされ、以後のステップの影響を受けない
    operation: Operation
    metadata: Metadata
