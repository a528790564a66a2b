"""
共通の例外定義を提供するモジュール。

コア（CPU状態・命令実行）で発生するエラーは全てChipErrorの派生クラスとして送出され、
呼び出し元（駆動ループ）が停止・リセット・スキップなどの回復方針を決定します。
"""


# @intent:responsibility CHIP-8コアが送出する全ての例外の基底クラスです。
class ChipError(Exception):
    """CHIP-8コアの実行時エラーの基底クラス。"""


# @intent:responsibility 満杯のコールスタックへのプッシュを表します。
class StackOverflow(ChipError):
    def __init__(self, stack_length: int):
        self.stack_length = stack_length
        super().__init__(f"Stack overflow: call stack of length {stack_length} is full.")


# @intent:responsibility 空のコールスタックからのポップを表します。
class StackUnderflow(ChipError):
    def __init__(self):
        super().__init__("Stack underflow: call stack is empty.")


# @intent:responsibility メモリ長を超えるアドレスへのアクセスを表します。
# @intent:rationale 既存のメモリ境界チェック（IndexError）と互換にするため、IndexErrorも継承します。
class AddressOutOfBounds(ChipError, IndexError):
    def __init__(self, address: int, limit: int):
        self.address = address
        self.limit = limit
        super().__init__(f"Address {address:#06x} out of bounds for memory of size {limit:#06x}.")


# @intent:responsibility デコード結果が実行できない命令パターンであることを表します。
class UnsupportedOpcode(ChipError):
    def __init__(self, opcode: int):
        self.opcode = opcode
        super().__init__(f"Unsupported opcode {opcode:04X}.")


# @intent:responsibility 命令のオペランド（レジスタ番号・キー番号など）が範囲外であることを表します。
class InvalidOperand(ChipError, ValueError):
    """命令のオペランドが不正な場合に送出されます。"""
