# chip8_core/instructions/operation.py
"""
デコード済み命令の表現。

16ビットの命令ワードは、閉じた集合であるOpKindのいずれか1つに分類されます。
認識できないビットパターンもOpKind.UNKNOWNに分類されるため、デコードは常に成功します。
"""
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

# @intent:responsibility CHIP-8命令の種類を列挙します。EXECUTE_MAPはこの全メンバーを網羅します。
class OpKind(Enum):
    # Control
    SYS = "SYS"                # 0nnn
    RET = "RET"                # 00EE
    JP = "JP"                  # 1nnn
    CALL = "CALL"              # 2nnn
    SE_BYTE = "SE_BYTE"        # 3xnn
    SNE_BYTE = "SNE_BYTE"      # 4xnn
    SE_REG = "SE_REG"          # 5xy0
    SNE_REG = "SNE_REG"        # 9xy0
    JP_V0 = "JP_V0"            # Bnnn
    # Load
    LD_BYTE = "LD_BYTE"        # 6xnn
    LD_I = "LD_I"              # Annn
    LD_VX_DT = "LD_VX_DT"      # Fx07
    LD_DT_VX = "LD_DT_VX"      # Fx15
    LD_ST_VX = "LD_ST_VX"      # Fx18
    ADD_I_VX = "ADD_I_VX"      # Fx1E
    LD_F_VX = "LD_F_VX"        # Fx29
    LD_B_VX = "LD_B_VX"        # Fx33
    STORE_REGS = "STORE_REGS"  # Fx55
    LOAD_REGS = "LOAD_REGS"    # Fx65
    # ALU
    ADD_BYTE = "ADD_BYTE"      # 7xnn
    LD_REG = "LD_REG"          # 8xy0
    OR = "OR"                  # 8xy1
    AND = "AND"                # 8xy2
    XOR = "XOR"                # 8xy3
    ADD_REG = "ADD_REG"        # 8xy4
    SUB = "SUB"                # 8xy5
    SHR = "SHR"                # 8xy6
    SUBN = "SUBN"              # 8xy7
    SHL = "SHL"                # 8xyE
    RND = "RND"                # Cxnn
    # Display
    CLS = "CLS"                # 00E0
    DRW = "DRW"                # Dxyn
    # Input
    SKP = "SKP"                # Ex9E
    SKNP = "SKNP"              # ExA1
    LD_VX_K = "LD_VX_K"        # Fx0A
    UNKNOWN = "UNKNOWN"

# @intent:responsibility デコードされた1命令の種類、フィールド、表示用ニーモニックを不変に保持します。
@dataclass(frozen=True)
class Operation:
    """
    デコード済み命令。x, y, n, nn, nnn は命令ワードのビットフィールドです。
    """
    kind: OpKind
    opcode: int
    mnemonic: str
    operands: Tuple[str, ...] = ()
    x: int = 0
    y: int = 0
    n: int = 0
    nn: int = 0
    nnn: int = 0

    @property
    def opcode_hex(self) -> str:
        return f"{self.opcode:04X}"

    # @intent:responsibility ニーモニックとオペランドを連結した表示用文字列を返します。
    def to_assembly(self) -> str:
        if self.operands:
            return f"{self.mnemonic} " + ", ".join(self.operands)
        return self.mnemonic
