# chip8_core/instructions/alu.py
"""
算術・論理演算命令の実装。

VFはフラグレジスタを兼ねるため、フラグの書き込みは常に結果の書き込みの後に行います。
これにより、Vx = VF の場合でもフラグ値が残ります。
"""
from chip8_core.core.state import Chip8CpuState
from chip8_core.display.screen import Screen
from chip8_core.instructions.base import (
    FLAG_REGISTER, ExecutionContext, make_operation, reg, unknown_operation,
)
from chip8_core.instructions.operation import Operation, OpKind

# @intent:map 8xyN の下位ニブルから命令種別とニーモニックへの対応表。
_ARITH_KINDS = {
    0x0: (OpKind.LD_REG, "LD"),
    0x1: (OpKind.OR, "OR"),
    0x2: (OpKind.AND, "AND"),
    0x3: (OpKind.XOR, "XOR"),
    0x4: (OpKind.ADD_REG, "ADD"),
    0x5: (OpKind.SUB, "SUB"),
    0x6: (OpKind.SHR, "SHR"),
    0x7: (OpKind.SUBN, "SUBN"),
    0xE: (OpKind.SHL, "SHL"),
}

# --- 7xnn: ADD Vx, byte ---
def decode_add_byte(opcode: int) -> Operation:
    return make_operation(OpKind.ADD_BYTE, opcode, "ADD", reg((opcode >> 8) & 0xF), f"#${opcode & 0xFF:02X}")

# @intent:responsibility Vx に nn を加算します。キャリーはVFに反映しません。
def execute_add_byte(state: Chip8CpuState, memory: bytearray, screen: Screen, op: Operation, ctx: ExecutionContext) -> None:
    state.registers[op.x] = (state.registers[op.x] + op.nn) & 0xFF

# --- 8xyN ---
# @intent:responsibility 8xyN 系のレジスタ間演算をデコードします。
def decode_arith(opcode: int) -> Operation:
    entry = _ARITH_KINDS.get(opcode & 0xF)
    if entry is None:
        return unknown_operation(opcode)
    kind, mnemonic = entry
    return make_operation(kind, opcode, mnemonic, reg((opcode >> 8) & 0xF), reg((opcode >> 4) & 0xF))

def execute_ld_reg(state: Chip8CpuState, memory: bytearray, screen: Screen, op: Operation, ctx: ExecutionContext) -> None:
    state.registers[op.x] = state.registers[op.y]

def _logic_result(state: Chip8CpuState, op: Operation, ctx: ExecutionContext, value: int) -> None:
    state.registers[op.x] = value & 0xFF
    if ctx.quirks.logic_resets_vf:
        state.registers[FLAG_REGISTER] = 0

def execute_or(state: Chip8CpuState, memory: bytearray, screen: Screen, op: Operation, ctx: ExecutionContext) -> None:
    _logic_result(state, op, ctx, state.registers[op.x] | state.registers[op.y])

def execute_and(state: Chip8CpuState, memory: bytearray, screen: Screen, op: Operation, ctx: ExecutionContext) -> None:
    _logic_result(state, op, ctx, state.registers[op.x] & state.registers[op.y])

def execute_xor(state: Chip8CpuState, memory: bytearray, screen: Screen, op: Operation, ctx: ExecutionContext) -> None:
    _logic_result(state, op, ctx, state.registers[op.x] ^ state.registers[op.y])

# @intent:responsibility Vx += Vy を実行し、キャリーをVFに設定します。
def execute_add_reg(state: Chip8CpuState, memory: bytearray, screen: Screen, op: Operation, ctx: ExecutionContext) -> None:
    result = state.registers[op.x] + state.registers[op.y]
    state.registers[op.x] = result & 0xFF
    state.registers[FLAG_REGISTER] = 1 if result > 0xFF else 0

# @intent:responsibility Vx -= Vy を実行し、ボローが発生しなかった場合にVF=1とします。
def execute_sub(state: Chip8CpuState, memory: bytearray, screen: Screen, op: Operation, ctx: ExecutionContext) -> None:
    vx, vy = state.registers[op.x], state.registers[op.y]
    state.registers[op.x] = (vx - vy) & 0xFF
    state.registers[FLAG_REGISTER] = 1 if vx >= vy else 0

# @intent:responsibility Vx = Vy - Vx を実行し、ボローが発生しなかった場合にVF=1とします。
def execute_subn(state: Chip8CpuState, memory: bytearray, screen: Screen, op: Operation, ctx: ExecutionContext) -> None:
    vx, vy = state.registers[op.x], state.registers[op.y]
    state.registers[op.x] = (vy - vx) & 0xFF
    state.registers[FLAG_REGISTER] = 1 if vy >= vx else 0

# @intent:responsibility 右シフトを実行し、押し出されたビットをVFに設定します。
def execute_shr(state: Chip8CpuState, memory: bytearray, screen: Screen, op: Operation, ctx: ExecutionContext) -> None:
    source = state.registers[op.y if ctx.quirks.shift_uses_vy else op.x]
    state.registers[op.x] = source >> 1
    state.registers[FLAG_REGISTER] = source & 0x1

# @intent:responsibility 左シフトを実行し、押し出されたビットをVFに設定します。
def execute_shl(state: Chip8CpuState, memory: bytearray, screen: Screen, op: Operation, ctx: ExecutionContext) -> None:
    source = state.registers[op.y if ctx.quirks.shift_uses_vy else op.x]
    state.registers[op.x] = (source << 1) & 0xFF
    state.registers[FLAG_REGISTER] = (source >> 7) & 0x1

# --- Cxnn: RND ---
def decode_rnd(opcode: int) -> Operation:
    return make_operation(OpKind.RND, opcode, "RND", reg((opcode >> 8) & 0xF), f"#${opcode & 0xFF:02X}")

# @intent:responsibility 乱数とnnの論理積をVxに設定します。乱数源は実行コンテキストから取得します。
def execute_rnd(state: Chip8CpuState, memory: bytearray, screen: Screen, op: Operation, ctx: ExecutionContext) -> None:
    state.registers[op.x] = ctx.rng.randint(0, 0xFF) & op.nn
