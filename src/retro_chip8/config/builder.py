from random import Random
from typing import Tuple

from retro_chip8.core.cpu import Chip8Cpu
from retro_chip8.core.machine import Machine
from retro_chip8.core.memory import MEMORY_SIZE
from .models import MachineConfig

# @intent:responsibility 構成（Config）に基づいて、Machineを生成しフォントをロードした上で、CPUを接続します。
class SystemBuilder:
    def build_system(self, config: MachineConfig) -> Tuple[Chip8Cpu, Machine]:
        if not 0 <= config.load_address < MEMORY_SIZE:
            raise ValueError(f"Load address {config.load_address:#x} outside {MEMORY_SIZE}-byte memory.")

        machine = Machine()
        machine.load_font()

        rng = Random(config.seed)
        cpu = Chip8Cpu(machine, rng=rng, start_address=config.load_address)
        return cpu, machine
