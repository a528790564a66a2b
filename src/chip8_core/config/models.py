from dataclasses import dataclass, field
from typing import Optional

from chip8_core.display.screen import SCREEN_HEIGHT, SCREEN_WIDTH
from chip8_core.instructions.base import Quirks
from chip8_core.transport.memory import FONT_START, MEMORY_SIZE, PROGRAM_START

@dataclass
class ScreenConfig:
    width: int = SCREEN_WIDTH
    height: int = SCREEN_HEIGHT

@dataclass
class MachineConfig:
    memory_size: int = MEMORY_SIZE
    program_start: int = PROGRAM_START
    font_start: int = FONT_START
    cpu_hz: int = 700    # 1秒あたりの命令数
    timer_hz: int = 60   # タイマー減算の周期
    seed: Optional[int] = None  # RND命令の乱数シード (Noneで非決定的)
    screen: ScreenConfig = field(default_factory=ScreenConfig)
    quirks: Quirks = field(default_factory=Quirks)
