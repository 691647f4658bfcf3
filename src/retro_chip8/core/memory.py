# retro_chip8/core/memory.py
"""
Core Layer (メモリ)

CHIP-8の4KBアドレス空間を表すRAMデバイスを定義します。
範囲外アクセスは前提条件違反として例外を送出し、回復は行いません。
"""
from typing import Iterable

# @intent:constant CHIP-8のアドレス空間サイズ。
MEMORY_SIZE = 4096

# @intent:responsibility 基本的なRAMデバイスの機能を提供します。
class RAM:
    """
    境界チェック付きの8bitメモリ。
    """
    # @intent:responsibility 指定されたサイズのメモリ領域を初期化します。
    # @intent:pre-condition sizeは正の整数である必要があります。
    def __init__(self, size: int = MEMORY_SIZE):
        if not isinstance(size, int) or size <= 0:
            raise ValueError("RAM size must be a positive integer.")
        self._memory = bytearray(size)
        self._size = size

    # @intent:responsibility 指定されたアドレスから8bitのデータを読み出します。
    # @intent:pre-condition アドレスはRAMの有効範囲内である必要があります。
    def read(self, address: int) -> int:
        if not 0 <= address < self._size:
            raise IndexError(f"Address {address:#05x} out of bounds for RAM of size {self._size}.")
        return self._memory[address]

    # @intent:responsibility 指定されたアドレスに8bitのデータを書き込みます。
    # @intent:pre-condition アドレスはRAMの有効範囲内であり、データは8bit値である必要があります。
    def write(self, address: int, data: int) -> None:
        if not 0 <= address < self._size:
            raise IndexError(f"Address {address:#05x} out of bounds for RAM of size {self._size}.")
        if not 0 <= data <= 0xFF:
            raise ValueError(f"Data {data} is not an 8-bit value.")
        self._memory[address] = data

    # @intent:utility_function 16ビットワードをビッグエンディアン形式で読み込みます。
    def read_word(self, address: int) -> int:
        """Big-endian 16-bit read."""
        return (self.read(address) << 8) | self.read(address + 1)

    # @intent:responsibility バイト列を指定アドレスから連続して書き込みます。
    # @intent:pre-condition 書き込み範囲全体がRAM内に収まっている必要があります。
    def load(self, address: int, data: Iterable[int]) -> None:
        """
        バイト列をそのままコピーします。内容の検証は行いません。
        範囲外にはみ出す場合は、何も書き込まずにIndexErrorを送出します。
        """
        payload = bytes(data)
        if address < 0 or address + len(payload) > self._size:
            raise IndexError(
                f"Cannot load {len(payload)} bytes at {address:#05x}: exceeds RAM of size {self._size}."
            )
        self._memory[address:address + len(payload)] = payload

    # @intent:responsibility RAMのサイズを返します。
    def get_size(self) -> int:
        return self._size
