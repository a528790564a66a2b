# chip8_core/instructions/load.py
"""
ロード/ストア命令（レジスタ、インデックスレジスタ、タイマー、メモリ転送）の実装。
"""
from chip8_core.core.state import Chip8CpuState
from chip8_core.display.screen import Screen
from chip8_core.instructions.base import ExecutionContext, make_operation, reg, unknown_operation
from chip8_core.instructions.operation import Operation, OpKind
from chip8_core.transport.memory import FONT_CHAR_SIZE, check_range

# --- 6xnn: LD Vx, byte ---
def decode_ld_byte(opcode: int) -> Operation:
    return make_operation(OpKind.LD_BYTE, opcode, "LD", reg((opcode >> 8) & 0xF), f"#${opcode & 0xFF:02X}")

def execute_ld_byte(state: Chip8CpuState, memory: bytearray, screen: Screen, op: Operation, ctx: ExecutionContext) -> None:
    state.registers[op.x] = op.nn

# --- Annn: LD I, addr ---
def decode_ld_i(opcode: int) -> Operation:
    return make_operation(OpKind.LD_I, opcode, "LD", "I", f"${opcode & 0xFFF:03X}")

def execute_ld_i(state: Chip8CpuState, memory: bytearray, screen: Screen, op: Operation, ctx: ExecutionContext) -> None:
    state.index_register = op.nnn

# --- Fxnn ---
# @intent:responsibility 上位ニブルFの命令群をデコードします。下位バイトで命令が決まります。
def decode_misc(opcode: int) -> Operation:
    x = reg((opcode >> 8) & 0xF)
    low = opcode & 0xFF
    if low == 0x07:
        return make_operation(OpKind.LD_VX_DT, opcode, "LD", x, "DT")
    if low == 0x0A:
        return make_operation(OpKind.LD_VX_K, opcode, "LD", x, "K")
    if low == 0x15:
        return make_operation(OpKind.LD_DT_VX, opcode, "LD", "DT", x)
    if low == 0x18:
        return make_operation(OpKind.LD_ST_VX, opcode, "LD", "ST", x)
    if low == 0x1E:
        return make_operation(OpKind.ADD_I_VX, opcode, "ADD", "I", x)
    if low == 0x29:
        return make_operation(OpKind.LD_F_VX, opcode, "LD", "F", x)
    if low == 0x33:
        return make_operation(OpKind.LD_B_VX, opcode, "LD", "B", x)
    if low == 0x55:
        return make_operation(OpKind.STORE_REGS, opcode, "LD", "[I]", x)
    if low == 0x65:
        return make_operation(OpKind.LOAD_REGS, opcode, "LD", x, "[I]")
    return unknown_operation(opcode)

def execute_ld_vx_dt(state: Chip8CpuState, memory: bytearray, screen: Screen, op: Operation, ctx: ExecutionContext) -> None:
    state.registers[op.x] = state.delay_timer

def execute_ld_dt_vx(state: Chip8CpuState, memory: bytearray, screen: Screen, op: Operation, ctx: ExecutionContext) -> None:
    state.delay_timer = state.registers[op.x]

def execute_ld_st_vx(state: Chip8CpuState, memory: bytearray, screen: Screen, op: Operation, ctx: ExecutionContext) -> None:
    state.sound_timer = state.registers[op.x]

# @intent:responsibility I += Vx を実行します。Iは16ビットで折り返します。
def execute_add_i_vx(state: Chip8CpuState, memory: bytearray, screen: Screen, op: Operation, ctx: ExecutionContext) -> None:
    state.index_register = (state.index_register + state.registers[op.x]) & 0xFFFF

# @intent:responsibility Iを Vx の下位ニブルに対応するフォント文字のアドレスに設定します。
def execute_ld_f_vx(state: Chip8CpuState, memory: bytearray, screen: Screen, op: Operation, ctx: ExecutionContext) -> None:
    digit = state.registers[op.x] & 0xF
    state.index_register = ctx.font_address + digit * FONT_CHAR_SIZE

# @intent:responsibility Vxの10進3桁（百、十、一の位）をI, I+1, I+2に書き込みます。
# @intent:pre-condition I..I+2がメモリ内であること。範囲外の場合は何も書き込みません。
def execute_ld_b_vx(state: Chip8CpuState, memory: bytearray, screen: Screen, op: Operation, ctx: ExecutionContext) -> None:
    i = state.index_register
    check_range(memory, i, 3)
    value = state.registers[op.x]
    memory[i] = value // 100
    memory[i + 1] = (value // 10) % 10
    memory[i + 2] = value % 10

# @intent:responsibility V0..Vx をIから始まるメモリに書き込みます。
def execute_store_regs(state: Chip8CpuState, memory: bytearray, screen: Screen, op: Operation, ctx: ExecutionContext) -> None:
    i = state.index_register
    count = op.x + 1
    check_range(memory, i, count)
    memory[i:i + count] = state.registers[:count]
    if ctx.quirks.load_store_increments_i:
        state.index_register = (i + count) & 0xFFFF

# @intent:responsibility Iから始まるメモリを V0..Vx に読み込みます。
def execute_load_regs(state: Chip8CpuState, memory: bytearray, screen: Screen, op: Operation, ctx: ExecutionContext) -> None:
    i = state.index_register
    count = op.x + 1
    check_range(memory, i, count)
    state.registers[:count] = memory[i:i + count]
    if ctx.quirks.load_store_increments_i:
        state.index_register = (i + count) & 0xFFFF
