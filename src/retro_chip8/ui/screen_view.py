# src/retro_chip8/ui/screen_view.py
"""
ディスプレイプレゼンタ。

フレームバッファを固定倍率・固定パレットで描画するウィジェットです。
コアはフレームを押し出さないため、描画はウィジェット側の再描画タイミングで行います。
"""
from typing import Optional

from PySide6.QtWidgets import QWidget
from PySide6.QtGui import QPainter, QColor, QPaintEvent
from PySide6.QtCore import QSize

from retro_chip8.devices.display import Display
from retro_chip8.config.models import DisplayConfig

# @intent:responsibility Displayの内容を拡大表示するUIウィジェットを提供します。
class ScreenView(QWidget):
    def __init__(self, display_config: Optional[DisplayConfig] = None, parent=None):
        super().__init__(parent)
        config = display_config or DisplayConfig()
        self._scale = config.scale
        self._foreground = QColor(config.foreground)
        self._background = QColor(config.background)
        self._display: Optional[Display] = None

    # @intent:responsibility 描画対象のディスプレイを設定します。
    def set_display(self, display: Display) -> None:
        self._display = display
        self.setFixedSize(self.sizeHint())
        self.update()

    @property
    def scale(self) -> int:
        return self._scale

    def sizeHint(self) -> QSize:
        if self._display is None:
            return QSize(64 * self._scale, 32 * self._scale)
        return QSize(self._display.width * self._scale, self._display.height * self._scale)

    # @intent:responsibility 背景を塗りつぶし、点灯ピクセルのみを矩形で描画します。
    def paintEvent(self, event: QPaintEvent):
        painter = QPainter(self)
        painter.fillRect(self.rect(), self._background)
        if self._display is not None:
            s = self._scale
            for y in range(self._display.height):
                for x in range(self._display.width):
                    if self._display.get(x, y):
                        painter.fillRect(x * s, y * s, s, s, self._foreground)
        painter.end()
