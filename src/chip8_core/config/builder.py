import logging
from typing import Optional

from chip8_core.system.machine import Chip8Machine
from .loader import ConfigLoader
from .models import MachineConfig

logger = logging.getLogger(__name__)

# @intent:responsibility システム構成（Config）に基づいてマシンを生成し、必要であればROMをロードします。
class MachineBuilder:
    def build_system(self, config: MachineConfig, rom_path: Optional[str] = None) -> Chip8Machine:
        machine = Chip8Machine(config)
        logger.debug(
            "Built machine: memory=%#06x program_start=%#05x cpu_hz=%d timer_hz=%d",
            config.memory_size, config.program_start, config.cpu_hz, config.timer_hz,
        )
        if rom_path:
            machine.load_rom(rom_path)
        return machine

    # @intent:responsibility YAMLファイルから構成を読み込み、マシンを生成します。
    def build_from_file(self, config_path: str, rom_path: Optional[str] = None) -> Chip8Machine:
        config = ConfigLoader().load_from_file(config_path)
        return self.build_system(config, rom_path)
