import random

import pytest

from chip8_core.core.state import Chip8CpuState
from chip8_core.display.screen import Screen
from chip8_core.instructions import ExecutionContext, Quirks, decode_opcode, execute_instruction

class InstructionHarness:
    """命令ワードを1つ、フェッチ済みの状態（PCが2進んだ状態）で実行するテスト用ヘルパー。"""
    def __init__(self, quirks: Quirks = None, seed: int = 1234):
        self.state = Chip8CpuState()
        self.memory = bytearray(0x1000)
        self.screen = Screen()
        self.ctx = ExecutionContext(quirks=quirks or Quirks(), rng=random.Random(seed))

    def execute(self, word: int, current_pc: int = 0x200):
        self.memory[current_pc] = word >> 8
        self.memory[current_pc + 1] = word & 0xFF
        self.state.program_counter = current_pc
        opcode = self.state.fetch(self.memory)
        op = decode_opcode(opcode)
        execute_instruction(op, self.state, self.memory, self.screen, self.ctx)
        return op

@pytest.fixture
def harness():
    return InstructionHarness()

@pytest.fixture
def make_harness():
    return InstructionHarness
