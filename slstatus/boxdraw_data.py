"""Shape table for the U+2500 - U+259F box drawing and block elements.

Each shape is a 16-bit value. The high bits hold the category and the low
byte holds category-specific data.
"""

from __future__ import annotations

# Categories (mutually exclusive except BDB).
BDL = 1 << 8   # lines: light, double, heavy
BDA = 1 << 9   # light arcs

BBD = 1 << 10  # lower (down) block, data is 8 - X eighths
BBL = 2 << 10  # left block, data is X eighths
BBU = 3 << 10  # upper block, data is X eighths
BBR = 4 << 10  # right block, data is 8 - X eighths
BBQ = 5 << 10  # quadrants
BRL = 6 << 10  # braille, data is the low byte of U+28XX

BBS = 1 << 14  # shades
BDB = 1 << 15  # drawn bold

# Line directions: Light/Double/Heavy x Left/Up/Right/Down/Horizontal/Vertical.
# Heavy is light plus double drawn so that they align.
LL = 1 << 0
LU = 1 << 1
LR = 1 << 2
LD = 1 << 3
LH = LL + LR
LV = LU + LD

DL = 1 << 4
DU = 1 << 5
DR = 1 << 6
DD = 1 << 7
DH = DL + DR
DV = DU + DD

HL = LL + DL
HU = LU + DU
HR = LR + DR
HD = LD + DD
HH = HL + HR
HV = HU + HD

# Quadrants: Top/Bottom x Left/Right.
TL = 1 << 0
TR = 1 << 1
BL = 1 << 2
BR = 1 << 3

_ENTRIES = {
    # light lines
    0x00: BDL + LH,
    0x02: BDL + LV,
    0x0C: BDL + LD + LR,
    0x10: BDL + LD + LL,
    0x14: BDL + LU + LR,
    0x18: BDL + LU + LL,
    0x1C: BDL + LV + LR,
    0x24: BDL + LV + LL,
    0x2C: BDL + LH + LD,
    0x34: BDL + LH + LU,
    0x3C: BDL + LV + LH,
    0x74: BDL + LL,
    0x75: BDL + LU,
    0x76: BDL + LR,
    0x77: BDL + LD,

    # heavy [+light] lines
    0x01: BDL + HH,
    0x03: BDL + HV,
    0x0D: BDL + HR + LD,
    0x0E: BDL + HD + LR,
    0x0F: BDL + HD + HR,
    0x11: BDL + HL + LD,
    0x12: BDL + HD + LL,
    0x13: BDL + HD + HL,
    0x15: BDL + HR + LU,
    0x16: BDL + HU + LR,
    0x17: BDL + HU + HR,
    0x19: BDL + HL + LU,
    0x1A: BDL + HU + LL,
    0x1B: BDL + HU + HL,
    0x1D: BDL + HR + LV,
    0x1E: BDL + HU + LD + LR,
    0x1F: BDL + HD + LR + LU,
    0x20: BDL + HV + LR,
    0x21: BDL + HU + HR + LD,
    0x22: BDL + HD + HR + LU,
    0x23: BDL + HV + HR,
    0x25: BDL + HL + LV,
    0x26: BDL + HU + LD + LL,
    0x27: BDL + HD + LU + LL,
    0x28: BDL + HV + LL,
    0x29: BDL + HU + HL + LD,
    0x2A: BDL + HD + HL + LU,
    0x2B: BDL + HV + HL,
    0x2D: BDL + HL + LD + LR,
    0x2E: BDL + HR + LL + LD,
    0x2F: BDL + HH + LD,
    0x30: BDL + HD + LH,
    0x31: BDL + HD + HL + LR,
    0x32: BDL + HR + HD + LL,
    0x33: BDL + HH + HD,
    0x35: BDL + HL + LU + LR,
    0x36: BDL + HR + LU + LL,
    0x37: BDL + HH + LU,
    0x38: BDL + HU + LH,
    0x39: BDL + HU + HL + LR,
    0x3A: BDL + HU + HR + LL,
    0x3B: BDL + HH + HU,
    0x3D: BDL + HL + LV + LR,
    0x3E: BDL + HR + LV + LL,
    0x3F: BDL + HH + LV,
    0x40: BDL + HU + LH + LD,
    0x41: BDL + HD + LH + LU,
    0x42: BDL + HV + LH,
    0x43: BDL + HU + HL + LD + LR,
    0x44: BDL + HU + HR + LD + LL,
    0x45: BDL + HD + HL + LU + LR,
    0x46: BDL + HD + HR + LU + LL,
    0x47: BDL + HH + HU + LD,
    0x48: BDL + HH + HD + LU,
    0x49: BDL + HV + HL + LR,
    0x4A: BDL + HV + HR + LL,
    0x4B: BDL + HV + HH,
    0x78: BDL + HL,
    0x79: BDL + HU,
    0x7A: BDL + HR,
    0x7B: BDL + HD,
    0x7C: BDL + HR + LL,
    0x7D: BDL + HD + LU,
    0x7E: BDL + HL + LR,
    0x7F: BDL + HU + LD,

    # double [+light] lines
    0x50: BDL + DH,
    0x51: BDL + DV,
    0x52: BDL + DR + LD,
    0x53: BDL + DD + LR,
    0x54: BDL + DR + DD,
    0x55: BDL + DL + LD,
    0x56: BDL + DD + LL,
    0x57: BDL + DL + DD,
    0x58: BDL + DR + LU,
    0x59: BDL + DU + LR,
    0x5A: BDL + DU + DR,
    0x5B: BDL + DL + LU,
    0x5C: BDL + DU + LL,
    0x5D: BDL + DL + DU,
    0x5E: BDL + DR + LV,
    0x5F: BDL + DV + LR,
    0x60: BDL + DV + DR,
    0x61: BDL + DL + LV,
    0x62: BDL + DV + LL,
    0x63: BDL + DV + DL,
    0x64: BDL + DH + LD,
    0x65: BDL + DD + LH,
    0x66: BDL + DD + DH,
    0x67: BDL + DH + LU,
    0x68: BDL + DU + LH,
    0x69: BDL + DH + DU,
    0x6A: BDL + DH + LV,
    0x6B: BDL + DV + LH,
    0x6C: BDL + DH + DV,

    # (light) arcs
    0x6D: BDA + LD + LR,
    0x6E: BDA + LD + LL,
    0x6F: BDA + LU + LL,
    0x70: BDA + LU + LR,

    # lower (down) X/8 block, data is 8 - X
    0x81: BBD + 7, 0x82: BBD + 6, 0x83: BBD + 5, 0x84: BBD + 4,
    0x85: BBD + 3, 0x86: BBD + 2, 0x87: BBD + 1, 0x88: BBD + 0,

    # left X/8 block, data is X
    0x89: BBL + 7, 0x8A: BBL + 6, 0x8B: BBL + 5, 0x8C: BBL + 4,
    0x8D: BBL + 3, 0x8E: BBL + 2, 0x8F: BBL + 1,

    # upper 1/2 and 1/8 blocks (X), right 1/2 and 1/8 blocks (8 - X)
    0x80: BBU + 4, 0x94: BBU + 1,
    0x90: BBR + 4, 0x95: BBR + 7,

    # quadrants
    0x96: BBQ + BL,
    0x97: BBQ + BR,
    0x98: BBQ + TL,
    0x99: BBQ + TL + BL + BR,
    0x9A: BBQ + TL + BR,
    0x9B: BBQ + TL + TR + BL,
    0x9C: BBQ + TL + TR + BR,
    0x9D: BBQ + TR,
    0x9E: BBQ + BL + TR,
    0x9F: BBQ + BL + TR + BR,

    # shades, data is alpha in 25% units
    0x91: BBS + 1, 0x92: BBS + 2, 0x93: BBS + 3,

    # U+2504 - U+250B, U+254C - U+254F (dashes) and
    # U+2571 - U+2573 (diagonals) are unsupported.
}

BOXDATA: tuple[int, ...] = tuple(_ENTRIES.get(i, 0) for i in range(256))


def shape_for(codepoint: int) -> int:
    """Shape of a U+25XX codepoint; 0 when unsupported or outside that block."""
    if codepoint & ~0xFF != 0x2500:
        return 0
    return BOXDATA[codepoint & 0xFF]