import string
from typing import Dict

from errors import ConfigError
from machine import Machine
from utilities import parse_catalog

Alpha26 = string.ascii_uppercase

# Wheels of the naval machine: eight moving rotors, two thin fixed rotors
# and two thin reflectors, in cycle notation.
NAVAL = f"""
{Alpha26}
5 3
I     MQ   (AELTPHQXRU) (BKNW) (CMOY) (DFG) (IV) (JZ) (S)
II    ME   (FIXVYOMW) (CDKLHUP) (ESZ) (BJ) (GR) (NT) (A) (Q)
III   MV   (ABDHPEJT) (CFLVMZOYQIRWUKXSG) (N)
IV    MJ   (AEPLIYWCOXMRFZBSTGJQNH) (DV) (KU)
V     MZ   (AVOLDRWFIUQ)(BZKSMNHYC) (EGTJPX)
VI    MZM  (AJQDVLEOZWIYTS) (CGMNHFUX) (BPRK)
VII   MZM  (ANOUPFRIMBZTLWKSVEGCJYDHXQ)
VIII  MZM  (AFLSETWUNDHOZVICQ) (BKJ) (GXY) (MPR)
Beta  N    (ALBEVFCYODJWUGNMQTZSKPR) (HIX)
Gamma N    (AFNIRLBSQWVXGUZDKMTPCOYJHE)
B     R    (AE) (BN) (CK) (DQ) (FU) (GY) (HW) (IJ) (LO) (MP) (RX) (SZ) (TV)
C     R    (AR) (BD) (CO) (EJ) (FN) (GT) (HK) (IV) (LM) (PW) (QZ) (SX) (UY)
"""

SUITES: Dict[str, str] = {
    "naval": NAVAL,
}


def build_suite(name: str = "naval") -> Machine:
    """Fresh machine (with fresh wheels) for the built-in catalog NAME."""
    try:
        return parse_catalog(SUITES[name])
    except KeyError:
        raise ConfigError(f"Unknown suite '{name}'. Expected one of {list(SUITES)}") from None
