# tests/ui/test_app.py
"""
retro_chip8.ui.appモジュール（コマンドラインエントリポイント）のテスト。
ヘッドレスモードのみを対象とし、ウィンドウは生成しません。
"""
import pytest

from retro_chip8.ui.app import main

# LD V0, #00 / LD F, V0 / DRW V0, V0, #5 / JP $206
FONT_ZERO_ROM = bytes([0x60, 0x00, 0xF0, 0x29, 0xD0, 0x05, 0x12, 0x06])

@pytest.fixture
def rom_file(tmp_path):
    path = tmp_path / "zero.ch8"
    path.write_bytes(FONT_ZERO_ROM)
    return path

class TestHeadless:
    # @intent:test_case フォント"0"を描画するROMをヘッドレス実行し、画面がASCIIで出力されることを検証します。
    def test_headless_renders_display(self, rom_file, capsys):
        assert main([str(rom_file), "--headless", "--frames", "2"]) == 0
        out = capsys.readouterr().out
        assert f"Loaded 8 bytes from {rom_file} at 0x200" in out
        lines = out.splitlines()
        screen = lines[-32:]
        assert screen[0].startswith("O O O O . ")
        assert screen[1].startswith("O . . O . ")
        assert screen[4].startswith("O O O O . ")
        assert screen[5] == " ".join(["."] * 64)

    def test_headless_with_config(self, rom_file, tmp_path, capsys):
        config_file = tmp_path / "chip8.yaml"
        config_file.write_text("instructions_per_frame: 1\nseed: 3\n")
        assert main([str(rom_file), "--config", str(config_file), "--headless", "--frames", "4"]) == 0
        assert "O O O O" in capsys.readouterr().out

    def test_invalid_opcode_is_fatal(self, tmp_path, capsys):
        rom = tmp_path / "bad.ch8"
        rom.write_bytes(b"\xFF\xFF")
        assert main([str(rom), "--headless"]) == 1
        out = capsys.readouterr().out
        assert "Fatal:" in out
        assert "0xffff" in out

class TestStartupErrors:
    def test_missing_rom(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing.ch8"), "--headless"]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_rom_too_large(self, tmp_path, capsys):
        rom = tmp_path / "huge.ch8"
        rom.write_bytes(bytes(3585))
        assert main([str(rom), "--headless"]) == 1
        assert "does not fit" in capsys.readouterr().err

    def test_invalid_config(self, rom_file, tmp_path, capsys):
        config_file = tmp_path / "bad.yaml"
        config_file.write_text("frame_rate: 0\n")
        assert main([str(rom_file), "--config", str(config_file), "--headless"]) == 1
        assert "Error:" in capsys.readouterr().err

    # @intent:test_case マッピングでない設定セクションは利用者向けのエラーとして報告されることを検証します。
    @pytest.mark.parametrize("text", ["display: 5\n", "keymap: [1, 2]\n"])
    def test_non_mapping_config_section(self, rom_file, tmp_path, capsys, text):
        config_file = tmp_path / "section.yaml"
        config_file.write_text(text)
        assert main([str(rom_file), "--config", str(config_file), "--headless"]) == 1
        assert "must be a mapping" in capsys.readouterr().err
