# chip8_core/instructions/base.py
"""
CHIP-8命令実装のための共通ヘルパー関数とデータ構造。
"""
from dataclasses import dataclass, field
import random

from chip8_core.common.errors import AddressOutOfBounds
from chip8_core.instructions.operation import Operation, OpKind
from chip8_core.transport.memory import FONT_START

FLAG_REGISTER = 0xF

# @intent:data_structure 歴代インタプリタ間で解釈が異なる命令の挙動を切り替えるフラグ群。
@dataclass(frozen=True)
class Quirks:
    shift_uses_vy: bool = False            # 8xy6/8xyE: VyをシフトしてVxに格納する (COSMAC VIP)
    load_store_increments_i: bool = True   # Fx55/Fx65: 実行後にIを x + 1 進める
    jump_uses_vx: bool = False             # Bnnn: V0ではなくVx (xはnnnの上位ニブル) を加算する
    logic_resets_vf: bool = True           # 8xy1/8xy2/8xy3: VFを0にする
    clip_sprites: bool = True              # Dxyn: 画面端をはみ出したピクセルを切り捨てる

# @intent:data_structure 命令実行時に参照される、CPU状態以外の環境（クセ設定、乱数源、フォント位置）。
@dataclass
class ExecutionContext:
    quirks: Quirks = field(default_factory=Quirks)
    rng: random.Random = field(default_factory=random.Random)
    font_address: int = FONT_START

# @intent:utility_function 命令ワードを (x, y, n, nn, nnn) のビットフィールドに分解します。
def split_fields(opcode: int):
    x = (opcode >> 8) & 0xF
    y = (opcode >> 4) & 0xF
    n = opcode & 0xF
    nn = opcode & 0xFF
    nnn = opcode & 0xFFF
    return x, y, n, nn, nnn

# @intent:utility_function 命令ワードからビットフィールドを埋めたOperationを生成します。
def make_operation(kind: OpKind, opcode: int, mnemonic: str, *operands: str) -> Operation:
    x, y, n, nn, nnn = split_fields(opcode)
    return Operation(kind, opcode, mnemonic, tuple(operands), x, y, n, nn, nnn)

# @intent:utility_function 認識できない命令ワードをUNKNOWNとしてデコードします。
def unknown_operation(opcode: int) -> Operation:
    return make_operation(OpKind.UNKNOWN, opcode, "UNKNOWN", f"${opcode:04X}")

# @intent:utility_function ジャンプ先アドレスがメモリ内にあることを検証します。
def check_jump_target(memory: bytearray, target: int) -> None:
    if not 0 <= target < len(memory):
        raise AddressOutOfBounds(address=target, limit=len(memory))

# @intent:utility_function レジスタ番号から表示用のレジスタ名 (V0-VF) を返します。
def reg(index: int) -> str:
    return f"V{index:X}"
