# chip8_core/instructions/maps.py
"""
命令ワードと命令実装のマッピング定義。
"""
from . import alu
from . import control
from . import display
from . import keypad
from . import load
from .operation import OpKind

# @intent:map 命令ワードの上位ニブルからデコード関数へのマッピングテーブル。16エントリ全てを定義します。
DECODE_MAP = {
    0x0: control.decode_system,
    0x1: control.decode_jp,
    0x2: control.decode_call,
    0x3: control.decode_se_byte,
    0x4: control.decode_sne_byte,
    0x5: control.decode_se_reg,
    0x6: load.decode_ld_byte,
    0x7: alu.decode_add_byte,
    0x8: alu.decode_arith,
    0x9: control.decode_sne_reg,
    0xA: load.decode_ld_i,
    0xB: control.decode_jp_v0,
    0xC: alu.decode_rnd,
    0xD: display.decode_drw,
    0xE: keypad.decode_key_skip,
    0xF: load.decode_misc,
}

# @intent:map 命令種別から実行関数へのマッピングテーブル。UNKNOWNを除く全てのOpKindを網羅します。
EXECUTE_MAP = {
    # Control
    OpKind.SYS: control.execute_sys,
    OpKind.RET: control.execute_ret,
    OpKind.JP: control.execute_jp,
    OpKind.CALL: control.execute_call,
    OpKind.SE_BYTE: control.execute_se_byte,
    OpKind.SNE_BYTE: control.execute_sne_byte,
    OpKind.SE_REG: control.execute_se_reg,
    OpKind.SNE_REG: control.execute_sne_reg,
    OpKind.JP_V0: control.execute_jp_v0,

    # Load
    OpKind.LD_BYTE: load.execute_ld_byte,
    OpKind.LD_I: load.execute_ld_i,
    OpKind.LD_VX_DT: load.execute_ld_vx_dt,
    OpKind.LD_DT_VX: load.execute_ld_dt_vx,
    OpKind.LD_ST_VX: load.execute_ld_st_vx,
    OpKind.ADD_I_VX: load.execute_add_i_vx,
    OpKind.LD_F_VX: load.execute_ld_f_vx,
    OpKind.LD_B_VX: load.execute_ld_b_vx,
    OpKind.STORE_REGS: load.execute_store_regs,
    OpKind.LOAD_REGS: load.execute_load_regs,

    # ALU
    OpKind.ADD_BYTE: alu.execute_add_byte,
    OpKind.LD_REG: alu.execute_ld_reg,
    OpKind.OR: alu.execute_or,
    OpKind.AND: alu.execute_and,
    OpKind.XOR: alu.execute_xor,
    OpKind.ADD_REG: alu.execute_add_reg,
    OpKind.SUB: alu.execute_sub,
    OpKind.SHR: alu.execute_shr,
    OpKind.SUBN: alu.execute_subn,
    OpKind.SHL: alu.execute_shl,
    OpKind.RND: alu.execute_rnd,

    # Display
    OpKind.CLS: display.execute_cls,
    OpKind.DRW: display.execute_drw,

    # Input
    OpKind.SKP: keypad.execute_skp,
    OpKind.SKNP: keypad.execute_sknp,
    OpKind.LD_VX_K: keypad.execute_ld_vx_k,
}
