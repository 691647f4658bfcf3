# src/retro_chip8/ui/main_window.py
"""
メインウィンドウの実装。
画面ウィジェットを保持し、QTimerでフレームを刻んでステップ駆動とキー入力の中継を行います。
"""
from typing import Optional

from PySide6.QtWidgets import QMainWindow, QApplication
from PySide6.QtGui import QKeyEvent, QCloseEvent
from PySide6.QtCore import Qt, QTimer, Slot

from retro_chip8.config.models import MachineConfig
from retro_chip8.core.cpu import Chip8Cpu
from retro_chip8.core.scheduler import FrameScheduler
from retro_chip8.instructions import InvalidOpcodeError
from .keymap import build_key_table, translate_key
from .screen_view import ScreenView

# @intent:responsibility エミュレーション画面とフレームペーシングを管理するメインウィンドウ。
class MainWindow(QMainWindow):
    """
    CHIP-8の実行ウィンドウ。
    実行ループの開始・停止はこのウィンドウが所有し、コアは各ステップを原子的に完了させます。
    """
    def __init__(self, cpu: Chip8Cpu, config: Optional[MachineConfig] = None, title: str = "Retro CHIP-8", parent=None):
        super(MainWindow, self).__init__(parent)
        self._config = config or MachineConfig()
        self._cpu = cpu
        self._machine = cpu.machine
        self._scheduler = FrameScheduler(cpu, self._config.instructions_per_frame)
        self._key_table = build_key_table(self._config.keymap)
        self._sound_was_active = False
        self.fault: Optional[Exception] = None

        self.setWindowTitle(title)
        self.screen_view = ScreenView(self._config.display, self)
        self.screen_view.set_display(self._machine.display)
        self.setCentralWidget(self.screen_view)

        self._timer = QTimer(self)
        self._timer.setInterval(max(1, round(1000 / self._config.frame_rate)))
        self._timer.timeout.connect(self._on_frame)

    @property
    def scheduler(self) -> FrameScheduler:
        return self._scheduler

    def is_running(self) -> bool:
        return self._timer.isActive()

    def start(self) -> None:
        self._timer.start()

    def stop(self) -> None:
        self._timer.stop()

    # @intent:responsibility 1フレーム分の命令を実行し、サウンドと画面を更新します。
    # @intent:rationale 未定義命令や範囲外アクセスは回復不能のため、ループを止めてアプリケーションを終了させる。
    @Slot()
    def _on_frame(self):
        try:
            self._scheduler.run_frame()
        except (InvalidOpcodeError, IndexError) as e:
            self.stop()
            self.fault = e
            print(f"Fatal: {e} (PC={self._machine.state.pc:#05x})")
            QApplication.exit(1)
            return

        sound_active = self._scheduler.sound_active
        if sound_active and not self._sound_was_active:
            QApplication.beep()
        self._sound_was_active = sound_active
        self.screen_view.update()

    # @intent:responsibility ホストのキー押下を論理キーパッドへ中継します。Escapeで終了します。
    def keyPressEvent(self, event: QKeyEvent):
        if event.key() == Qt.Key_Escape:
            self.close()
            return
        key = translate_key(event.key(), self._key_table)
        if key is None or event.isAutoRepeat():
            super().keyPressEvent(event)
            return
        self._machine.keypad.set_key_down(key)

    def keyReleaseEvent(self, event: QKeyEvent):
        key = translate_key(event.key(), self._key_table)
        if key is None or event.isAutoRepeat():
            super().keyReleaseEvent(event)
            return
        self._machine.keypad.set_key_up(key)

    def closeEvent(self, event: QCloseEvent):
        self.stop()
        event.accept()
