# chip8_core/instructions/keypad.py
"""
入力命令（SKP, SKNP, LD Vx, K）の実装。
キーパッドの状態は外部の入力層がステップの前に書き込みます。
"""
from chip8_core.core.state import Chip8CpuState
from chip8_core.display.screen import Screen
from chip8_core.instructions.base import ExecutionContext, make_operation, reg, unknown_operation
from chip8_core.instructions.operation import Operation, OpKind

# --- Ex9E / ExA1 ---
def decode_key_skip(opcode: int) -> Operation:
    x = reg((opcode >> 8) & 0xF)
    if opcode & 0xFF == 0x9E:
        return make_operation(OpKind.SKP, opcode, "SKP", x)
    if opcode & 0xFF == 0xA1:
        return make_operation(OpKind.SKNP, opcode, "SKNP", x)
    return unknown_operation(opcode)

# @intent:responsibility Vxの値のキーが押されていれば次の命令をスキップします。
# @intent:pre-condition Vx が 0-F であること。それ以外はInvalidOperandを送出します。
def execute_skp(state: Chip8CpuState, memory: bytearray, screen: Screen, op: Operation, ctx: ExecutionContext) -> None:
    if state.is_key_pressed(state.registers[op.x]):
        state.program_counter += 2

def execute_sknp(state: Chip8CpuState, memory: bytearray, screen: Screen, op: Operation, ctx: ExecutionContext) -> None:
    if not state.is_key_pressed(state.registers[op.x]):
        state.program_counter += 2

# --- Fx0A: LD Vx, K ---
# @intent:responsibility キー入力を待ち、押されたキー番号をVxに格納します。
# @intent:rationale 待機中はPCを2戻し、次のステップで同じ命令を再実行させます。
def execute_ld_vx_k(state: Chip8CpuState, memory: bytearray, screen: Screen, op: Operation, ctx: ExecutionContext) -> None:
    key = state.first_pressed_key()
    if key is None:
        state.program_counter -= 2
        return
    state.registers[op.x] = key
