# retro_chip8/loader/loader.py
"""
ROMローダーモジュール。
ヘッダを持たないフラットなバイナリイメージをそのままメモリへコピーします。
"""
from pathlib import Path
from typing import Union

from retro_chip8.core.machine import Machine, PROGRAM_START

class RomLoader:
    """
    CHIP-8 ROMファイルを読み込み、マシンのメモリへロードするローダー。
    プログラムとしての正しさは検証しません。
    """
    def load_rom(self, file_path: Union[str, Path], machine: Machine, address: int = PROGRAM_START) -> int:
        """
        ROMを読み込み、指定アドレスからメモリに書き込みます。ロードしたバイト数を返します。
        ファイルが存在しない場合はFileNotFoundError、メモリに収まらない場合はValueErrorを送出します。
        """
        with open(file_path, 'rb') as f:
            data = f.read()
        return self.load_bytes(data, machine, address)

    def load_bytes(self, data: bytes, machine: Machine, address: int = PROGRAM_START) -> int:
        capacity = machine.memory.get_size() - address
        if len(data) > capacity:
            raise ValueError(
                f"ROM image of {len(data)} bytes does not fit at {address:#05x} "
                f"({capacity} bytes available)"
            )
        machine.load_into_memory(data, address)
        return len(data)
