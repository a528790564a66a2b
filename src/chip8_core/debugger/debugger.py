# chip8_core/debugger/debugger.py
"""
デバッガモジュール。

マシンの実行を制御し、ユーザーが指定した条件（ブレークポイント）で
実行を中断させる責務を負います。コアが送出したエラーに対する回復方針（停止）もここで決定します。
"""
from dataclasses import dataclass
from enum import Enum
from typing import Deque, List, Optional, Tuple
from collections import deque
import logging

from chip8_core.common.errors import ChipError
from chip8_core.core.state import Chip8CpuState
from chip8_core.instructions import Operation
from chip8_core.system.machine import Chip8Machine

logger = logging.getLogger(__name__)

TRACE_LIMIT = 256

# @intent:responsibility ブレークポイントの条件タイプを定義します。
class BreakpointConditionType(Enum):
    PC_MATCH = "PC_MATCH"               # プログラムカウンタが特定のアドレスに一致
    REGISTER_VALUE = "REGISTER_VALUE"   # 特定のレジスタが特定の値になった
    REGISTER_CHANGE = "REGISTER_CHANGE" # 特定のレジスタの値が変化した

# @intent:responsibility run()が停止した理由を表します。
class StopReason(Enum):
    BREAKPOINT = "BREAKPOINT"
    ERROR = "ERROR"
    STEP_LIMIT = "STEP_LIMIT"
    STOPPED = "STOPPED"

# @intent:responsibility ブレークポイントをトリガーする条件を定義します。
@dataclass(frozen=True)
class BreakpointCondition:
    """
    ブレークポイントがヒットするための条件を定義するデータクラス。
    register_nameはCPUのレジスタマップのキー（"V0"-"VF", "I", "PC", "SP", "DT", "ST"）です。
    """
    condition_type: BreakpointConditionType
    value: Optional[int] = None           # PC_MATCH, REGISTER_VALUEで使用
    register_name: Optional[str] = None   # REGISTER_VALUE, REGISTER_CHANGEで使用
    enabled: bool = True

# @intent:responsibility マシンの実行制御とブレークポイント管理を行います。
class Debugger:
    """
    マシンの実行を制御し、ブレークポイントの管理を行うクラス。
    """
    def __init__(self, machine: Chip8Machine):
        self._machine = machine
        self._breakpoints: List[BreakpointCondition] = []
        self._running: bool = False
        self._previous_registers = machine.cpu.get_register_map()
        self._trace: Deque[Tuple[int, Operation]] = deque(maxlen=TRACE_LIMIT)
        self.last_error: Optional[ChipError] = None

    def add_breakpoint(self, condition: BreakpointCondition) -> None:
        if condition not in self._breakpoints:
            self._breakpoints.append(condition)

    def update_breakpoint(self, old_condition: BreakpointCondition, new_condition: BreakpointCondition) -> None:
        if old_condition in self._breakpoints:
            idx = self._breakpoints.index(old_condition)
            self._breakpoints[idx] = new_condition

    def remove_breakpoint(self, condition: BreakpointCondition) -> None:
        if condition in self._breakpoints:
            self._breakpoints.remove(condition)

    def get_breakpoints(self) -> List[BreakpointCondition]:
        return list(self._breakpoints)

    # @intent:responsibility 直近に実行した命令の (実行前PC, Operation) 履歴を返します。
    def get_trace(self) -> List[Tuple[int, Operation]]:
        return list(self._trace)

    def _check_register_breakpoints(self) -> bool:
        """
        現在のレジスタ状態に基づいてPC_MATCH以外のブレークポイントをチェックします。
        """
        current = self._machine.cpu.get_register_map()

        for bp in self._breakpoints:
            if not bp.enabled or bp.register_name not in current:
                continue
            if bp.condition_type == BreakpointConditionType.REGISTER_VALUE:
                if current[bp.register_name] == bp.value:
                    return True
            elif bp.condition_type == BreakpointConditionType.REGISTER_CHANGE:
                if current[bp.register_name] != self._previous_registers.get(bp.register_name):
                    return True
        return False

    def _pc_breakpoint_hit(self, pc: int) -> bool:
        return any(
            bp.enabled and bp.condition_type == BreakpointConditionType.PC_MATCH and bp.value == pc
            for bp in self._breakpoints
        )

    # @intent:responsibility マシンを1命令分実行し、実行した命令を返します。
    # @intent:post-condition コアのエラーはそのまま伝播します。
    def step_instruction(self) -> Operation:
        cpu = self._machine.cpu
        self._previous_registers = cpu.get_register_map()
        pc = cpu.get_state().program_counter
        operation = self._machine.step()
        self._trace.append((pc, operation))
        return operation

    # @intent:responsibility ブレークポイント・エラー・ステップ上限のいずれかまで実行を継続します。
    # @intent:rationale コアのエラーはここで捕捉してlast_errorに保持し、停止理由として返します。フェッチ済みのためPCは失敗した命令の次を指しますが、それ以外の状態は命令実行前のままです。
    def run(self, max_steps: Optional[int] = None) -> StopReason:
        """
        CPUの実行を継続し、停止した理由を返します。
        """
        self._running = True
        self.last_error = None
        executed = 0

        # 現在のPCにブレークポイントがある場合は、まず1命令進める
        first = True
        while self._running:
            if max_steps is not None and executed >= max_steps:
                self._running = False
                return StopReason.STEP_LIMIT

            pc = self._machine.cpu.get_state().program_counter
            if not first and self._pc_breakpoint_hit(pc):
                self._running = False
                logger.info("Breakpoint hit at PC: %#06x", pc)
                return StopReason.BREAKPOINT
            first = False

            try:
                self.step_instruction()
            except ChipError as e:
                self._running = False
                self.last_error = e
                logger.warning("Execution stopped at PC %#06x: %s", pc, e)
                return StopReason.ERROR
            executed += 1

            if self._check_register_breakpoints():
                self._running = False
                logger.info("Breakpoint hit at PC: %#06x", self._machine.cpu.get_state().program_counter)
                return StopReason.BREAKPOINT

        return StopReason.STOPPED

    def stop(self) -> None:
        self._running = False

    # @intent:responsibility CPUのレジスタレイアウトに従ってレジスタ値をテキスト化します。
    def format_registers(self) -> str:
        cpu = self._machine.cpu
        values = cpu.get_register_map()
        lines = []
        for group in cpu.get_register_layout():
            digits = {8: 2, 16: 4}
            parts = [f"{r.name}={values[r.name]:0{digits.get(r.width, 4)}X}" for r in group.registers]
            lines.append(f"{group.group_name}: " + " ".join(parts))
        return "\n".join(lines)

    def snapshot_state(self) -> Chip8CpuState:
        return self._machine.cpu.get_state().copy()

    def restore_state(self, state: Chip8CpuState) -> None:
        self._machine.cpu.restore_state(state)
