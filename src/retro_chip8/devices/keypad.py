# retro_chip8/devices/keypad.py
"""
16キーの論理キーパッド。

キー状態は外部の入力トランスレータからのみ変更されます。
"""
from typing import List, Optional

# @intent:constant 論理キー数 (0x0〜0xF)。
KEY_COUNT = 16

# @intent:responsibility 各論理キーの押下状態を保持します。
class Keypad:
    def __init__(self):
        self._keys: List[bool] = [False] * KEY_COUNT

    # @intent:pre-condition keyは0x0〜0xFの範囲である必要があります。
    def _check(self, key: int) -> int:
        if not 0 <= key < KEY_COUNT:
            raise IndexError(f"Key {key:#x} out of range for {KEY_COUNT}-key keypad.")
        return key

    def set_key_down(self, key: int) -> None:
        self._keys[self._check(key)] = True

    def set_key_up(self, key: int) -> None:
        self._keys[self._check(key)] = False

    def is_down(self, key: int) -> bool:
        return self._keys[self._check(key)]

    # @intent:responsibility 押下中のキーのうち最小のインデックスを返します。
    # @intent:return 押されているキーがなければNone。
    def first_pressed(self) -> Optional[int]:
        for key, is_down in enumerate(self._keys):
            if is_down:
                return key
        return None

    def release_all(self) -> None:
        self._keys = [False] * KEY_COUNT
