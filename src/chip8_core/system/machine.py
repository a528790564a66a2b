# chip8_core/system/machine.py
"""
マシン（駆動ループ）モジュール。

CPU・アドレス空間・画面を束ね、命令クロックと60Hzのタイマークロックという
2つの独立したクロックを経過時間に基づいて調停します。
コアはエラーから回復しないため、step/advanceで発生したChipErrorはそのまま呼び出し元に伝播します。
"""
import logging
import random
from typing import Optional, Union

from chip8_core.config.models import MachineConfig
from chip8_core.core.cpu import Chip8Cpu
from chip8_core.display.screen import Screen
from chip8_core.instructions import ExecutionContext, Operation
from chip8_core.loader.loader import RomImage, RomLoader
from chip8_core.transport.memory import create_memory, load_font, load_program, load_sparse_image

logger = logging.getLogger(__name__)

# @intent:responsibility CHIP-8マシン全体の構成要素を所有し、命令実行とタイマー減算を駆動します。
class Chip8Machine:
    """
    CPU、メモリ、画面を所有するCHIP-8マシン。
    """
    def __init__(self, config: Optional[MachineConfig] = None):
        self.config = config if config is not None else MachineConfig()
        context = ExecutionContext(
            quirks=self.config.quirks,
            rng=random.Random(self.config.seed),
            font_address=self.config.font_start,
        )
        self.cpu = Chip8Cpu(context)
        self.memory = create_memory(self.config.memory_size)
        self.screen = Screen(self.config.screen.width, self.config.screen.height)
        self._step_credit = 0.0
        self._timer_credit = 0.0
        self.reset()

    # @intent:responsibility マシンを電源投入直後の状態に戻します。
    # @intent:post-condition CPUはゼロクリアされた後、PCのみプログラム開始アドレスに設定されます。
    def reset(self) -> None:
        self.cpu.reset()
        self.memory[:] = bytes(len(self.memory))
        load_font(self.memory, self.config.font_start)
        self.screen.clear()
        self.cpu.get_state().program_counter = self.config.program_start
        self._step_credit = 0.0
        self._timer_credit = 0.0

    # @intent:responsibility ROMイメージ（バイト列、疎な辞書、またはファイルパス）をロードします。
    def load_rom(self, rom: Union[RomImage, str]) -> int:
        """
        マシンをリセットしてからROMをロードし、ロードしたバイト数を返します。
        """
        if isinstance(rom, str):
            rom = RomLoader().load_file(rom)
        self.reset()
        if isinstance(rom, dict):
            size = load_sparse_image(self.memory, rom)
        else:
            size = load_program(self.memory, rom, self.config.program_start)
        logger.info("Loaded ROM: %d bytes", size)
        return size

    def step(self) -> Operation:
        return self.cpu.step(self.memory, self.screen)

    def tick(self) -> None:
        self.cpu.tick()

    @property
    def sound_active(self) -> bool:
        return self.cpu.get_state().sound_timer > 0

    # @intent:responsibility 1フレーム分（cpu_hz / timer_hz 命令）を実行した後、タイマーを1回減算します。
    def run_frame(self) -> int:
        steps = max(1, self.config.cpu_hz // self.config.timer_hz)
        for _ in range(steps):
            self.step()
        self.tick()
        return steps

    # @intent:responsibility 経過時間に応じた数の命令とタイマー減算を実行します。
    # @intent:rationale 命令クロックとタイマークロックはそれぞれ独立したクレジット（実行可能回数）で管理され、端数は次回に繰り越されます。
    def advance(self, elapsed_seconds: float) -> int:
        """
        elapsed_seconds 秒分だけマシンを進め、実行した命令数を返します。
        命令とタイマー減算は、期限が先に来た方から順に実行されます。
        """
        if elapsed_seconds < 0:
            raise ValueError("elapsed_seconds must be non-negative.")

        cpu_hz = self.config.cpu_hz
        timer_hz = self.config.timer_hz
        self._step_credit += elapsed_seconds * cpu_hz
        self._timer_credit += elapsed_seconds * timer_hz

        executed = 0
        while self._step_credit >= 1 or self._timer_credit >= 1:
            # 期限を過ぎてからの経過時間が長い方が先に発生したイベント
            step_age = (self._step_credit - 1) / cpu_hz if self._step_credit >= 1 else -1.0
            timer_age = (self._timer_credit - 1) / timer_hz if self._timer_credit >= 1 else -1.0
            if self._step_credit >= 1 and step_age >= timer_age:
                self._step_credit -= 1
                self.step()
                executed += 1
            else:
                self._timer_credit -= 1
                self.tick()
        logger.debug("Advanced %.4fs: %d instructions", elapsed_seconds, executed)
        return executed
