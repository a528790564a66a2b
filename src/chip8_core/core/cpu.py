# chip8_core/core/cpu.py
"""
Core Layer (CPU)

このモジュールは、CHIP-8 CPUの状態管理と命令サイクル（フェッチ→デコード→実行）の駆動を提供します。
具体的な命令の振る舞いはInstruction Layerに移譲されます。
"""
from typing import Dict, List, Optional

from chip8_core.common.types import DisassemblyLine, RegisterInfo, RegisterLayoutInfo
from chip8_core.core import disassembler
from chip8_core.core.state import Chip8CpuState
from chip8_core.display.screen import Screen
from chip8_core.instructions import ExecutionContext, Operation, decode_opcode, execute_instruction

# @intent:responsibility CHIP-8 CPUの命令サイクルを駆動し、状態への参照を提供します。
class Chip8Cpu:
    """
    CHIP-8 CPUをエミュレートするクラス。
    メモリと画面はCPUが所有せず、step()の呼び出しごとに渡されます。
    """
    # @intent:responsibility CPUの状態と実行コンテキストを初期化します。全フィールドはゼロで開始します。
    def __init__(self, context: Optional[ExecutionContext] = None):
        self._state = Chip8CpuState()
        self._context = context if context is not None else ExecutionContext()
        self._cycle_count: int = 0

    @property
    def context(self) -> ExecutionContext:
        return self._context

    @property
    def cycle_count(self) -> int:
        return self._cycle_count

    # @intent:responsibility 現在のCPUの状態を返します。
    def get_state(self) -> Chip8CpuState:
        return self._state

    # @intent:responsibility 保存しておいた状態をCPUに書き戻します（デバッガ用）。
    def restore_state(self, state: Chip8CpuState) -> None:
        self._state = state.copy()

    # @intent:responsibility CPUをリセットし、全てのフィールドをゼロに戻します。
    def reset(self) -> None:
        self._state.reset()
        self._cycle_count = 0

    # @intent:responsibility 外部の60Hzクロックからタイマーを1回減算します。
    def tick(self) -> None:
        self._state.tick_timers()

    # @intent:responsibility メモリから次の命令ワードをフェッチします。
    def _fetch(self, memory: bytearray) -> int:
        return self._state.fetch(memory)

    # @intent:responsibility 命令ワードをOperationオブジェクトに変換します。
    def _decode(self, opcode: int) -> Operation:
        return decode_opcode(opcode)

    # @intent:responsibility Operationを実行し、状態・メモリ・画面を更新します。
    def _execute(self, operation: Operation, memory: bytearray, screen: Screen) -> None:
        execute_instruction(operation, self._state, memory, screen, self._context)

    # @intent:responsibility CPUを1命令サイクル進め、実行した命令を返します。
    # @intent:flow フェッチ(PC+2) -> デコード -> 実行 の順序で処理を行います。
    # @intent:post-condition いずれかの段階で発生したChipErrorはそのまま呼び出し元に伝播します。
    def step(self, memory: bytearray, screen: Screen) -> Operation:
        """
        1命令を実行します。エラーからの回復は行わず、呼び出し元（駆動ループ）に判断を委ねます。
        """
        opcode = self._fetch(memory)
        operation = self._decode(opcode)
        self._execute(operation, memory, screen)
        self._cycle_count += 1
        return operation

    # @intent:responsibility 現在のレジスタ値を辞書形式で提供します。
    def get_register_map(self) -> Dict[str, int]:
        s = self._state
        register_map = {f"V{i:X}": value for i, value in enumerate(s.registers)}
        register_map.update({
            "I": s.index_register, "PC": s.program_counter, "SP": s.stack_pointer,
            "DT": s.delay_timer, "ST": s.sound_timer,
        })
        return register_map

    # @intent:responsibility レジスタ表示のレイアウト（グループ化）を定義します。
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        return [
            RegisterLayoutInfo("General", [RegisterInfo(f"V{i:X}", 8) for i in range(16)]),
            RegisterLayoutInfo("Index/Pointers", [
                RegisterInfo("I", 16), RegisterInfo("PC", 16), RegisterInfo("SP", 8)
            ]),
            RegisterLayoutInfo("Timers", [
                RegisterInfo("DT", 8), RegisterInfo("ST", 8)
            ]),
        ]

    # @intent:responsibility 指定範囲のメモリを逆アセンブルします。
    def disassemble(self, memory: bytearray, start_addr: int, length: int) -> List[DisassemblyLine]:
        return disassembler.disassemble(memory, start_addr, length)
