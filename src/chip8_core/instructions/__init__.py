"""
CHIP-8命令セット実装パッケージ。
"""
from typing import Optional

from chip8_core.common.errors import UnsupportedOpcode
from chip8_core.core.state import Chip8CpuState
from chip8_core.display.screen import Screen
from .base import ExecutionContext, Quirks
from .maps import DECODE_MAP, EXECUTE_MAP
from .operation import Operation, OpKind

# @intent:responsibility 16ビットの命令ワードをOperationにデコードします。
# @intent:post-condition 全ての入力に対して何らかのOperationを返します（未知のパターンはUNKNOWN）。状態には一切触れません。
def decode_opcode(opcode: int) -> Operation:
    """
    CHIP-8の命令ワードをデコードし、Operationオブジェクトを返します。
    """
    opcode &= 0xFFFF
    return DECODE_MAP[opcode >> 12](opcode)

# @intent:responsibility デコードされた命令を実行し、CPU状態・メモリ・画面を変更します。
# @intent:post-condition 実行できない命令はUnsupportedOpcodeを送出します。
def execute_instruction(operation: Operation, state: Chip8CpuState, memory: bytearray, screen: Screen,
                        context: Optional[ExecutionContext] = None) -> None:
    """
    デコードされたCHIP-8命令を実行します。
    """
    executor = EXECUTE_MAP.get(operation.kind)
    if executor is None:
        raise UnsupportedOpcode(operation.opcode)
    executor(state, memory, screen, operation, context if context is not None else ExecutionContext())
