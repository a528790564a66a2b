# chip8_core/instructions/display.py
"""
画面命令（CLS, DRW）の実装。
"""
from chip8_core.core.state import Chip8CpuState
from chip8_core.display.screen import Screen
from chip8_core.instructions.base import FLAG_REGISTER, ExecutionContext, make_operation, reg
from chip8_core.instructions.operation import Operation, OpKind
from chip8_core.transport.memory import check_range

# @intent:responsibility CLS命令を実行し、画面をクリアします。
def execute_cls(state: Chip8CpuState, memory: bytearray, screen: Screen, op: Operation, ctx: ExecutionContext) -> None:
    screen.clear()

# --- Dxyn: DRW Vx, Vy, n ---
def decode_drw(opcode: int) -> Operation:
    return make_operation(
        OpKind.DRW, opcode, "DRW",
        reg((opcode >> 8) & 0xF), reg((opcode >> 4) & 0xF), f"#{opcode & 0xF}",
    )

# @intent:responsibility Iから読んだnバイトのスプライトを (Vx, Vy) に描画し、衝突をVFに設定します。
# @intent:pre-condition I..I+n-1 がメモリ内であること。範囲外の場合は画面もVFも変更しません。
def execute_drw(state: Chip8CpuState, memory: bytearray, screen: Screen, op: Operation, ctx: ExecutionContext) -> None:
    i = state.index_register
    check_range(memory, i, op.n)
    sprite = memory[i:i + op.n]
    x, y = state.registers[op.x], state.registers[op.y]
    collision = screen.draw_sprite(x, y, sprite, clip=ctx.quirks.clip_sprites)
    state.registers[FLAG_REGISTER] = 1 if collision else 0
