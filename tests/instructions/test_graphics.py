# tests/instructions/test_graphics.py
"""
描画命令（CLS, DRW）の単体テスト。
"""

import pytest

def _load_sprite(machine, rows, address=0x200):
    machine.state.i = address
    machine.memory.load(address, rows)

def _lit(machine):
    display = machine.display
    return {(x, y) for y in range(display.height) for x in range(display.width) if display.get(x, y)}

class TestClear:
    def test_cls(self, machine, run):
        machine.display.set_px(3, 4, 1)
        machine.display.set_px(63, 31, 1)
        run(machine, 0x00E0)
        assert _lit(machine) == set()

class TestDraw:
    # @intent:test_case 同じスプライトを2回描画すると画面が消え、2回目でVF=1となることを検証します。
    def test_draw_twice_clears_and_sets_collision(self, machine, run):
        _load_sprite(machine, [0xFF, 0xFF, 0xFF])
        machine.state.v[0xA] = 10
        machine.state.v[0xB] = 5

        run(machine, 0xDAB3)
        assert _lit(machine) == {(x, y) for x in range(10, 18) for y in range(5, 8)}
        assert machine.state.vf == 0x0

        run(machine, 0xDAB3)
        assert _lit(machine) == set()
        assert machine.state.vf == 0x1

    # @intent:test_case 画面外の座標は描画前に剰余で折り返されることを検証します。
    def test_draw_origin_wraps(self, machine, run):
        _load_sprite(machine, [0xFF, 0xFF, 0xFF])
        machine.state.v[0xA] = 10 + 64
        machine.state.v[0xB] = 5 + 32

        run(machine, 0xDAB3)
        assert _lit(machine) == {(x, y) for x in range(10, 18) for y in range(5, 8)}
        assert machine.state.vf == 0x0

    # @intent:test_case 描画中に画面端を越えたピクセルは反対側に回り込まず切り捨てられることを検証します。
    def test_draw_clips_at_edges(self, machine, run):
        _load_sprite(machine, [0xFF, 0xFF, 0xFF])
        machine.state.v[0xA] = 62
        machine.state.v[0xB] = 30

        run(machine, 0xDAB3)
        assert _lit(machine) == {(62, 30), (63, 30), (62, 31), (63, 31)}
        assert machine.state.vf == 0x0

    def test_draw_sets_only_sprite_bits(self, machine, run):
        _load_sprite(machine, [0b10100000])
        run(machine, 0xD001)
        assert _lit(machine) == {(0, 0), (2, 0)}

    # @intent:test_case 重ならないピクセルの追加描画ではVF=0にリセットされることを検証します。
    def test_collision_flag_is_reset_each_draw(self, machine, run):
        _load_sprite(machine, [0x80])
        machine.state.vf = 0x1
        machine.state.v[0x1] = 5
        run(machine, 0xD111)
        assert machine.state.vf == 0x0
        assert _lit(machine) == {(5, 5)}

    def test_partial_overlap_collision(self, machine, run):
        machine.display.set_px(1, 0, 1)
        _load_sprite(machine, [0xC0])
        run(machine, 0xD001)
        assert _lit(machine) == {(0, 0)}
        assert machine.state.vf == 0x1

    # @intent:test_case 座標レジスタにVFを指定した場合、リセット前の値が使われることを検証します。
    def test_draw_with_vf_as_coordinate(self, machine, run):
        _load_sprite(machine, [0x80])
        machine.state.vf = 7
        run(machine, 0xDFF1)
        assert _lit(machine) == {(7, 7)}
        assert machine.state.vf == 0x0

    def test_draw_zero_rows_is_noop(self, machine, run):
        _load_sprite(machine, [0xFF])
        run(machine, 0xD000)
        assert _lit(machine) == set()
        assert machine.state.vf == 0x0

    # @intent:test_case 折り返した原点から描画し、画面端で切り捨てられることを検証します。
    def test_wrapped_origin_then_clips(self, machine, run):
        _load_sprite(machine, [0xFF])
        machine.state.v[0xA] = 126  # 126 % 64 = 62
        run(machine, 0xDAB1)
        assert _lit(machine) == {(62, 0), (63, 0)}

    # @intent:test_case スプライトの読み出しがメモリ末尾を越える場合、画面とVFを変更せずに失敗することを検証します。
    def test_sprite_past_end_of_memory_draws_nothing(self, machine, run):
        machine.memory.write(0xFFF, 0xFF)
        machine.state.i = 0xFFF
        machine.state.vf = 0x1
        with pytest.raises(IndexError):
            run(machine, 0xD002)
        assert _lit(machine) == set()
        assert machine.state.vf == 0x1
