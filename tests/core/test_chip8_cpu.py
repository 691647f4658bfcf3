# tests/core/test_chip8_cpu.py
"""
retro_chip8.core.cpuモジュールの単体テスト。
"""
from random import Random

import pytest

from retro_chip8.core.cpu import Chip8Cpu
from retro_chip8.core.machine import Machine
from retro_chip8.instructions import InvalidOpcodeError, Mnemonic, fetch_opcode

# @intent:test_suite 命令サイクル（フェッチ→デコード→実行）とスナップショット生成を検証します。

@pytest.fixture
def setup_cpu():
    machine = Machine()
    machine.load_font()
    cpu = Chip8Cpu(machine, rng=Random(0))
    return cpu, machine

class TestFetch:
    def test_fetch_reads_big_endian_and_advances(self):
        machine = Machine()
        machine.memory.load(0x200, [0x12, 0x34])
        machine.state.pc = 0x200
        assert fetch_opcode(machine) == 0x1234
        assert machine.state.pc == 0x202

    # @intent:test_case メモリ末尾を越えるフェッチはIndexErrorとなることを検証します。
    def test_fetch_past_end_of_memory(self):
        machine = Machine()
        machine.state.pc = 0xFFF
        with pytest.raises(IndexError):
            fetch_opcode(machine)

class TestChip8Cpu:
    def test_initial_pc(self, setup_cpu):
        cpu, machine = setup_cpu
        assert machine.state.pc == 0x200
        assert cpu.step_count == 0

    def test_custom_start_address(self):
        machine = Machine()
        Chip8Cpu(machine, start_address=0x600)
        assert machine.state.pc == 0x600

    def test_step_runs_program(self, setup_cpu):
        cpu, machine = setup_cpu
        machine.load_into_memory([
            0x60, 0x05,  # LD V0, #05
            0x71, 0x03,  # ADD V1, #03
            0x80, 0x14,  # ADD V0, V1
        ])
        for _ in range(3):
            cpu.step()
        assert machine.state.v[0] == 0x08
        assert machine.state.v[1] == 0x03
        assert machine.state.vf == 0x0
        assert machine.state.pc == 0x206
        assert cpu.step_count == 3

    # @intent:test_case スナップショットが実行後の状態・命令・アドレスを記録することを検証します。
    def test_step_returns_snapshot(self, setup_cpu):
        cpu, machine = setup_cpu
        machine.load_into_memory([0x6A, 0x12])
        snapshot = cpu.step()
        assert snapshot.operation.mnemonic is Mnemonic.LD
        assert snapshot.state.v[0xA] == 0x12
        assert snapshot.state.pc == 0x202
        assert snapshot.metadata.step_count == 1
        assert snapshot.metadata.address == 0x200
        assert snapshot.metadata.symbol_info == "0x200: LD VA, #12"

    # @intent:test_case スナップショットは後続のステップの影響を受けないことを検証します。
    def test_snapshot_is_independent_of_later_steps(self, setup_cpu):
        cpu, machine = setup_cpu
        machine.load_into_memory([0x60, 0x01, 0x60, 0x02])
        first = cpu.step()
        cpu.step()
        assert first.state.v[0] == 0x01
        assert machine.state.v[0] == 0x02

    def test_invalid_opcode_propagates(self, setup_cpu):
        cpu, machine = setup_cpu
        machine.load_into_memory([0xFF, 0xFF])
        with pytest.raises(InvalidOpcodeError) as excinfo:
            cpu.step()
        assert excinfo.value.opcode == 0xFFFF
        assert cpu.step_count == 0

    # @intent:test_case キー待ち命令はキーが押されるまで同じアドレスに留まり続けることを検証します。
    def test_wait_for_key_repeats_until_pressed(self, setup_cpu):
        cpu, machine = setup_cpu
        machine.load_into_memory([0xF3, 0x0A, 0x60, 0x01])
        for _ in range(5):
            snapshot = cpu.step()
            assert snapshot.metadata.address == 0x200
            assert machine.state.pc == 0x200
        machine.keypad.set_key_down(0xB)
        cpu.step()
        assert machine.state.v[3] == 0xB
        assert machine.state.pc == 0x202

    def test_call_and_return(self, setup_cpu):
        cpu, machine = setup_cpu
        machine.load_into_memory([
            0x22, 0x06,  # 0x200: CALL $206
            0x61, 0x02,  # 0x202: LD V1, #02
            0x12, 0x04,  # 0x204: JP $204
            0x60, 0x01,  # 0x206: LD V0, #01
            0x00, 0xEE,  # 0x208: RET
        ])
        for _ in range(4):
            cpu.step()
        assert machine.state.v[0] == 0x01
        assert machine.state.v[1] == 0x02
        assert machine.state.sp == 0
        assert machine.state.pc == 0x204

    # @intent:test_case リセットでメモリを保持したままレジスタ・画面・キーが初期化されることを検証します。
    def test_reset_keeps_memory(self, setup_cpu):
        cpu, machine = setup_cpu
        machine.load_into_memory([0x60, 0x01, 0x00, 0xE0])
        cpu.step()
        machine.display.set_px(0, 0, 1)
        machine.keypad.set_key_down(1)
        machine.stack[1] = 0x300

        cpu.reset()
        assert machine.state.v[0] == 0
        assert machine.state.pc == 0x200
        assert machine.stack == [0] * 16
        assert "O" not in machine.display.render_text()
        assert machine.keypad.first_pressed() is None
        assert cpu.step_count == 0
        assert machine.memory.read_word(0x200) == 0x6001
        assert machine.memory.read(0) == 0xF0

    # @intent:test_case 同じシードからは同じRND結果列が得られることを検証します。
    def test_seeded_random_is_deterministic(self):
        def run_once():
            machine = Machine()
            machine.load_into_memory([0xC0, 0xFF, 0xC1, 0xFF, 0xC2, 0x0F])
            cpu = Chip8Cpu(machine, rng=Random(1234))
            for _ in range(3):
                cpu.step()
            return machine.state.v[:3]

        first, second = run_once(), run_once()
        assert first == second
        assert first[2] <= 0x0F

    def test_seed_resets_sequence(self, setup_cpu):
        cpu, machine = setup_cpu
        machine.load_into_memory([0xC0, 0xFF])
        cpu.seed(99)
        cpu.step()
        first = machine.state.v[0]
        cpu.reset()
        cpu.seed(99)
        cpu.step()
        assert machine.state.v[0] == first
