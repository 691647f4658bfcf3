from random import Random

import pytest

from retro_chip8.core.machine import Machine
from retro_chip8.instructions import decode_opcode, execute_instruction

@pytest.fixture
def machine():
    return Machine()

# @intent:utility_function 命令語をデコードしてそのまま実行します（フェッチによるPC更新は行わない）。
@pytest.fixture
def run():
    def _run(machine: Machine, opcode: int, rng: Random = None):
        execute_instruction(decode_opcode(opcode), machine, rng or Random(0))
    return _run
