# chip8_core/instructions/control.py
"""
制御命令（ジャンプ、サブルーチン、条件スキップ）の実装。

実行時点でPCは既に次の命令を指しています（フェッチで2進められているため）。
"""
from chip8_core.core.state import Chip8CpuState
from chip8_core.display.screen import Screen
from chip8_core.instructions.base import (
    ExecutionContext, check_jump_target, make_operation, reg, unknown_operation,
)
from chip8_core.instructions.operation import Operation, OpKind

# --- 0nnn: CLS / RET / SYS ---
# @intent:responsibility 上位ニブル0の命令 (CLS, RET, SYS) をデコードします。
def decode_system(opcode: int) -> Operation:
    if opcode == 0x00E0:
        return make_operation(OpKind.CLS, opcode, "CLS")
    if opcode == 0x00EE:
        return make_operation(OpKind.RET, opcode, "RET")
    return make_operation(OpKind.SYS, opcode, "SYS", f"${opcode & 0xFFF:03X}")

# @intent:responsibility SYS命令を実行します。マシン語ルーチン呼び出しは再現しないため何もしません。
def execute_sys(state: Chip8CpuState, memory: bytearray, screen: Screen, op: Operation, ctx: ExecutionContext) -> None:
    pass

# @intent:responsibility RET命令を実行し、スタックから戻りアドレスをポップしてPCに設定します。
def execute_ret(state: Chip8CpuState, memory: bytearray, screen: Screen, op: Operation, ctx: ExecutionContext) -> None:
    state.program_counter = state.pop()

# --- 1nnn: JP ---
def decode_jp(opcode: int) -> Operation:
    return make_operation(OpKind.JP, opcode, "JP", f"${opcode & 0xFFF:03X}")

# @intent:responsibility JP命令を実行し、PCをnnnに設定します。
def execute_jp(state: Chip8CpuState, memory: bytearray, screen: Screen, op: Operation, ctx: ExecutionContext) -> None:
    check_jump_target(memory, op.nnn)
    state.program_counter = op.nnn

# --- 2nnn: CALL ---
def decode_call(opcode: int) -> Operation:
    return make_operation(OpKind.CALL, opcode, "CALL", f"${opcode & 0xFFF:03X}")

# @intent:responsibility CALL命令を実行し、戻りアドレス（次の命令）をプッシュしてからジャンプします。
# @intent:post-condition ジャンプ先が不正な場合、またはスタックが満杯の場合はスタックもPCも変更されません。
def execute_call(state: Chip8CpuState, memory: bytearray, screen: Screen, op: Operation, ctx: ExecutionContext) -> None:
    check_jump_target(memory, op.nnn)
    state.push(state.program_counter)
    state.program_counter = op.nnn

# --- 3xnn / 4xnn: SE / SNE Vx, byte ---
def decode_se_byte(opcode: int) -> Operation:
    x = (opcode >> 8) & 0xF
    return make_operation(OpKind.SE_BYTE, opcode, "SE", reg(x), f"#${opcode & 0xFF:02X}")

def execute_se_byte(state: Chip8CpuState, memory: bytearray, screen: Screen, op: Operation, ctx: ExecutionContext) -> None:
    if state.registers[op.x] == op.nn:
        state.program_counter += 2

def decode_sne_byte(opcode: int) -> Operation:
    x = (opcode >> 8) & 0xF
    return make_operation(OpKind.SNE_BYTE, opcode, "SNE", reg(x), f"#${opcode & 0xFF:02X}")

def execute_sne_byte(state: Chip8CpuState, memory: bytearray, screen: Screen, op: Operation, ctx: ExecutionContext) -> None:
    if state.registers[op.x] != op.nn:
        state.program_counter += 2

# --- 5xy0 / 9xy0: SE / SNE Vx, Vy ---
# @intent:responsibility 5xy0をデコードします。下位ニブルが0以外のパターンは未定義命令です。
def decode_se_reg(opcode: int) -> Operation:
    if opcode & 0xF:
        return unknown_operation(opcode)
    return make_operation(OpKind.SE_REG, opcode, "SE", reg((opcode >> 8) & 0xF), reg((opcode >> 4) & 0xF))

def execute_se_reg(state: Chip8CpuState, memory: bytearray, screen: Screen, op: Operation, ctx: ExecutionContext) -> None:
    if state.registers[op.x] == state.registers[op.y]:
        state.program_counter += 2

def decode_sne_reg(opcode: int) -> Operation:
    if opcode & 0xF:
        return unknown_operation(opcode)
    return make_operation(OpKind.SNE_REG, opcode, "SNE", reg((opcode >> 8) & 0xF), reg((opcode >> 4) & 0xF))

def execute_sne_reg(state: Chip8CpuState, memory: bytearray, screen: Screen, op: Operation, ctx: ExecutionContext) -> None:
    if state.registers[op.x] != state.registers[op.y]:
        state.program_counter += 2

# --- Bnnn: JP V0, addr ---
def decode_jp_v0(opcode: int) -> Operation:
    return make_operation(OpKind.JP_V0, opcode, "JP", "V0", f"${opcode & 0xFFF:03X}")

# @intent:responsibility JP V0, nnn を実行します。jump_uses_vxが有効な場合はV0の代わりにVxを加算します。
def execute_jp_v0(state: Chip8CpuState, memory: bytearray, screen: Screen, op: Operation, ctx: ExecutionContext) -> None:
    offset_reg = op.x if ctx.quirks.jump_uses_vx else 0
    target = op.nnn + state.registers[offset_reg]
    check_jump_target(memory, target)
    state.program_counter = target
