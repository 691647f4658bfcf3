# retro_chip8/devices/display.py
"""
ディスプレイバッファ

64x32のモノクロフレームバッファを保持します。1ピクセル1バイトの行優先配置で、
線形インデックスは y * 64 + x です。
"""

# @intent:constant 画面サイズ。
SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32

# @intent:responsibility フレームバッファの保持とピクセル単位のアクセスを提供します。
class Display:
    """
    64x32のフレームバッファ。非ゼロのセルが点灯ピクセルを表します。
    描画結果の提示（ウィンドウ表示など）は外部のプレゼンタが自身のタイミングで行います。
    """
    def __init__(self, width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT):
        self._width = width
        self._height = height
        self._buffer = bytearray(width * height)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    # @intent:pre-condition 座標は画面内である必要があります。
    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"Pixel ({x}, {y}) out of bounds for {self._width}x{self._height} display.")
        return y * self._width + x

    def get_px(self, x: int, y: int) -> int:
        return self._buffer[self._index(x, y)]

    def set_px(self, x: int, y: int, value: int) -> None:
        self._buffer[self._index(x, y)] = value

    # @intent:responsibility プレゼンタ向けに点灯/消灯を真偽値で返します。
    def get(self, x: int, y: int) -> bool:
        return self.get_px(x, y) != 0

    # @intent:responsibility 全てのセルを0にします。
    def clear(self) -> None:
        self._buffer[:] = bytes(len(self._buffer))

    # @intent:responsibility ヘッドレス検査用にバッファをASCIIで描画します。
    def render_text(self, lit: str = "O", unlit: str = ".") -> str:
        """
        点灯を `O`、消灯を `.` として、1行ずつ空白区切りで描画した文字列を返します。
        """
        rows = []
        for y in range(self._height):
            row = self._buffer[y * self._width:(y + 1) * self._width]
            rows.append(" ".join(lit if cell else unlit for cell in row))
        return "\n".join(rows)
