# src/retro_chip8/ui/app.py
"""
アプリケーションのエントリポイント。
構成とROMを読み込み、ウィンドウ表示またはヘッドレスで実行します。
"""
import argparse
import sys
from pathlib import Path
from typing import List, Optional

import yaml

from retro_chip8.config.builder import SystemBuilder
from retro_chip8.config.loader import ConfigLoader
from retro_chip8.config.models import MachineConfig
from retro_chip8.core.scheduler import FrameScheduler
from retro_chip8.instructions import InvalidOpcodeError
from retro_chip8.loader.loader import RomLoader

def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="retro-chip8", description="CHIP-8 interpreter")
    parser.add_argument("rom", help="path to a raw CHIP-8 ROM image")
    parser.add_argument("--config", help="YAML machine configuration")
    parser.add_argument("--headless", action="store_true", help="run without a window and print the display")
    parser.add_argument("--frames", type=int, default=60, help="frames to run in headless mode")
    return parser.parse_args(argv)

# @intent:responsibility ヘッドレスで指定フレーム数だけ実行し、画面をASCIIで出力します。
def run_headless(scheduler: FrameScheduler, frames: int) -> int:
    machine = scheduler.cpu.machine
    try:
        scheduler.run_frames(frames)
    except (InvalidOpcodeError, IndexError) as e:
        print(f"Fatal: {e} (PC={machine.state.pc:#05x})")
        return 1
    print(machine.display.render_text())
    return 0

# @intent:responsibility アプリケーションを起動します。
# @intent:rationale 構成ファイルやROMの読み込み失敗は利用者向けのメッセージで報告し、クラッシュさせずに終了コード1で終える。
def main(argv: Optional[List[str]] = None) -> int:
    """
    アプリケーションのメイン関数。
    """
    args = _parse_args(argv)

    try:
        config = ConfigLoader().load_from_file(args.config) if args.config else MachineConfig()
        cpu, machine = SystemBuilder().build_system(config)
        size = RomLoader().load_rom(args.rom, machine, config.load_address)
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(f"Loaded {size} bytes from {args.rom} at {config.load_address:#05x}")

    if args.headless:
        return run_headless(FrameScheduler(cpu, config.instructions_per_frame), args.frames)

    from PySide6.QtWidgets import QApplication
    from .main_window import MainWindow

    app = QApplication.instance() or QApplication(sys.argv[:1])
    try:
        main_win = MainWindow(cpu, config, title=f"Retro CHIP-8 - {Path(args.rom).name}")
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    main_win.show()
    main_win.start()
    return app.exec()

if __name__ == '__main__':
    sys.exit(main())
