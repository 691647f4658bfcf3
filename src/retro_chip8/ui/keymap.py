"""
入力トランスレータ。

ホストのキーコード（Qt.Key）をCHIP-8の16キー論理キーパッドへ対応付けます。
"""
from typing import Dict, Mapping, Optional

from PySide6.QtCore import Qt

# @intent:responsibility 設定上のキー名（"1", "Q", "Space" など）をQtのキーコードへ変換します。
def qt_key_for_name(name: str) -> int:
    attr = f"Key_{name if len(name) > 1 else name.upper()}"
    key = getattr(Qt.Key, attr, None)
    if key is None:
        raise ValueError(f"Unknown host key name '{name}' in keymap")
    return int(key)

# @intent:responsibility キー名ベースのキーマップを、Qtキーコードから論理キーへの変換表に展開します。
def build_key_table(keymap: Mapping[str, int]) -> Dict[int, int]:
    return {qt_key_for_name(name): chip_key for name, chip_key in keymap.items()}

# @intent:responsibility ホストのキーコードを論理キーに変換します。
# @intent:return 対応するキーがなければNone。
def translate_key(qt_key: int, table: Mapping[int, int]) -> Optional[int]:
    return table.get(int(qt_key))
