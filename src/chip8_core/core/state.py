# chip8_core/core/state.py
"""
Core Layer (CPU状態)

このモジュールは、CHIP-8 CPUの全ての可変状態（レジスタ群、コールスタック、タイマー、キーパッド）を
保持するデータ構造と、それに対する基本操作（フェッチ、プッシュ、ポップ、リセット）を定義します。
"""
from dataclasses import dataclass, field, fields
from typing import List, Optional
import copy

from chip8_core.common.errors import AddressOutOfBounds, InvalidOperand, StackOverflow, StackUnderflow

NUM_REGISTERS = 0x10
STACK_SIZE = 16
NUM_KEYS = 16

# @intent:responsibility CHIP-8 CPUのレジスタ、スタック、タイマー、キーパッドの状態を保持します。
@dataclass
class Chip8CpuState:
    """
    CHIP-8 CPUの状態を保持するデータクラス。
    全ての配列は固定長で、生成後にサイズが変わることはありません。
    """
    registers: bytearray = field(default_factory=lambda: bytearray(NUM_REGISTERS))  # V0-VF
    index_register: int = 0x0000  # I
    program_counter: int = 0x0000
    stack_pointer: int = 0  # 0 = 空。最初のプッシュはスロット1に書き込まれる
    delay_timer: int = 0x00
    sound_timer: int = 0x00
    call_stack: List[int] = field(default_factory=lambda: [0] * STACK_SIZE)
    keypad: List[bool] = field(default_factory=lambda: [False] * NUM_KEYS)

    # @intent:responsibility コールスタックに戻りアドレスをプッシュします。
    # @intent:pre-condition stack_pointerがSTACK_SIZE - 1未満であること。満杯の場合は状態を変更せずStackOverflowを送出します。
    # @intent:rationale スロット0は空を表す番兵として予約されており、使用可能なのは15スロットです。
    def push(self, value: int) -> None:
        """
        コールスタックに値をプッシュします。
        スタックポインタを先に進め、新しいトップに書き込みます。
        """
        if self.stack_pointer == STACK_SIZE - 1:
            raise StackOverflow(len(self.call_stack))

        self.stack_pointer += 1
        self.call_stack[self.stack_pointer] = value & 0xFFFF

    # @intent:responsibility コールスタックから戻りアドレスをポップします。
    # @intent:pre-condition stack_pointerが0でないこと。空の場合は状態を変更せずStackUnderflowを送出します。
    def pop(self) -> int:
        """
        コールスタックから値をポップします。
        現在のトップを読み出してからスタックポインタを戻します。
        """
        if self.stack_pointer == 0:
            raise StackUnderflow()

        value = self.call_stack[self.stack_pointer]
        self.stack_pointer -= 1
        return value

    # @intent:responsibility PCの位置から次の命令ワードをフェッチします。
    # @intent:pre-condition program_counter + 1 がメモリの有効なインデックスであること。
    # @intent:post-condition 成功時はPCが2進み、失敗時はPCは変更されません。
    def fetch(self, memory: bytearray) -> int:
        """
        PCから2バイトを読み出し、ビッグエンディアンの16ビット命令ワードとして返します。
        """
        pc = self.program_counter
        if pc + 1 >= len(memory):
            raise AddressOutOfBounds(address=pc + 1, limit=len(memory))

        # CHIP-8の命令は上位バイトが先に格納される
        opcode = (memory[pc] << 8) | memory[pc + 1]
        self.program_counter = pc + 2
        return opcode

    # @intent:responsibility 全てのフィールドをゼロ相当の値に戻します。
    # @intent:rationale 新しい値を全て生成してから代入するため、部分的なリセット状態は観測されません。
    def reset(self) -> None:
        """
        レジスタ、スタック、タイマー、キーパッドを全てゼロ（False）に戻します。
        """
        fresh = Chip8CpuState()
        for f in fields(self):
            setattr(self, f.name, getattr(fresh, f.name))

    # @intent:responsibility 遅延タイマーとサウンドタイマーを1ずつ減算します（0で停止）。
    # @intent:rationale このメソッドは命令サイクルからは呼ばれません。外部の60Hzクロックが呼び出します。
    def tick_timers(self) -> None:
        if self.delay_timer > 0:
            self.delay_timer -= 1
        if self.sound_timer > 0:
            self.sound_timer -= 1

    # @intent:responsibility キーパッドの押下状態を設定します。外部の入力層から呼ばれます。
    def set_key(self, key: int, pressed: bool) -> None:
        self._check_key(key)
        self.keypad[key] = bool(pressed)

    def is_key_pressed(self, key: int) -> bool:
        self._check_key(key)
        return self.keypad[key]

    # @intent:responsibility 押下されている最小番号のキーを返します。押下なしの場合はNone。
    def first_pressed_key(self) -> Optional[int]:
        for key, pressed in enumerate(self.keypad):
            if pressed:
                return key
        return None

    # @intent:responsibility 独立したコピーを返します（デバッガの変化検出・状態復元用）。
    def copy(self) -> 'Chip8CpuState':
        return copy.deepcopy(self)

    @staticmethod
    def _check_key(key: int) -> None:
        if not 0 <= key < NUM_KEYS:
            raise InvalidOperand(f"Key index {key} out of range 0-{NUM_KEYS - 1}.")
