from dataclasses import dataclass, field
from typing import Dict, Optional

# @intent:data_structure 既定のキー配置。ホストの 1234/QWER/ASDF/ZXCV を
# CHIP-8キーパッドの 123C/456D/789E/A0BF に対応させる。
DEFAULT_KEYMAP: Dict[str, int] = {
    "1": 0x1, "2": 0x2, "3": 0x3, "4": 0xC,
    "Q": 0x4, "W": 0x5, "E": 0x6, "R": 0xD,
    "A": 0x7, "S": 0x8, "D": 0x9, "F": 0xE,
    "Z": 0xA, "X": 0x0, "C": 0xB, "V": 0xF,
}

@dataclass
class DisplayConfig:
    scale: int = 10
    foreground: str = "#33FF66"
    background: str = "#101010"

@dataclass
class MachineConfig:
    load_address: int = 0x200
    instructions_per_frame: int = 11
    frame_rate: int = 60
    seed: Optional[int] = None  # 固定するとRND命令の結果が決定的になる
    display: DisplayConfig = field(default_factory=DisplayConfig)
    keymap: Dict[str, int] = field(default_factory=lambda: dict(DEFAULT_KEYMAP))
