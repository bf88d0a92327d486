# rotor_and_reflector.py
from __future__ import annotations

from enum import Enum

from alphabet_and_permutation import Alphabet, Permutation
from debug import Debug
from errors import ConfigError, SettingError

debug = Debug()
debug.disable("rotor")


class RotorKind(Enum):
    """Closed set of rotor variants, keyed by their catalog type letter."""

    REFLECTOR = "R"
    FIXED = "N"
    MOVING = "M"


class Rotor:
    """A wired disk: a permutation seen through a rotational offset.

    One record serves every variant; ``kind`` decides whether it may turn,
    whether it has notches, and whether it may leave position 0.
    """

    def __init__(
        self,
        name: str,
        perm: Permutation,
        kind: RotorKind = RotorKind.FIXED,
        notches: str = "",
    ) -> None:
        if notches and kind is not RotorKind.MOVING:
            raise ConfigError(f"Rotor {name}: only moving rotors have notches")
        if not set(notches) <= set(perm.alphabet):
            raise ConfigError(f"Rotor {name}: notch characters must be in the alphabet")

        self.name = name
        self.permutation = perm
        self.kind = kind
        self.notches = frozenset(notches)
        self._setting = 0

    # ── variant constructors ─────────────────────────────────────
    @classmethod
    def reflector(cls, name: str, perm: Permutation) -> "Rotor":
        return cls(name, perm, RotorKind.REFLECTOR)

    @classmethod
    def fixed(cls, name: str, perm: Permutation) -> "Rotor":
        return cls(name, perm, RotorKind.FIXED)

    @classmethod
    def moving(cls, name: str, perm: Permutation, notches: str) -> "Rotor":
        return cls(name, perm, RotorKind.MOVING, notches)

    # ── plain accessors ──────────────────────────────────────────
    @property
    def alphabet(self) -> Alphabet:
        return self.permutation.alphabet

    @property
    def size(self) -> int:
        return self.permutation.size

    @property
    def setting(self) -> int:
        return self._setting

    @property
    def setting_symbol(self) -> str:
        return self.alphabet.to_symbol(self._setting)

    def set(self, setting: int | str) -> None:
        """Move to SETTING, given as an index or as an alphabet symbol."""
        if isinstance(setting, str):
            setting = self.alphabet.to_index(setting)
        setting = self.permutation.wrap(setting)
        if self.kind is RotorKind.REFLECTOR and setting != 0:
            raise SettingError(f"Reflector {self.name} has only one position")
        self._setting = setting

    # ── per-variant behaviour ────────────────────────────────────
    def rotates(self) -> bool:
        match self.kind:
            case RotorKind.MOVING:
                return True
            case RotorKind.FIXED | RotorKind.REFLECTOR:
                return False

    def reflecting(self) -> bool:
        return self.kind is RotorKind.REFLECTOR

    def at_notch(self) -> bool:
        match self.kind:
            case RotorKind.MOVING:
                return self.setting_symbol in self.notches
            case RotorKind.FIXED | RotorKind.REFLECTOR:
                return False

    def advance(self) -> None:
        match self.kind:
            case RotorKind.MOVING:
                self._setting = self.permutation.wrap(self._setting + 1)
                debug.log("rotor", f"{self.name} -> {self.setting_symbol}")
            case RotorKind.FIXED | RotorKind.REFLECTOR:
                pass

    # ── signal paths ---------------------------------------------
    def convert_forward(self, sig: int) -> int:
        perm = self.permutation
        mapped = perm.permute(perm.wrap(sig + self._setting))
        out = perm.wrap(mapped - self._setting)
        debug.log("rotor", f"{self.name} fwd {sig}->{out}")
        return out

    def convert_backward(self, sig: int) -> int:
        perm = self.permutation
        mapped = perm.invert(perm.wrap(sig + self._setting))
        out = perm.wrap(mapped - self._setting)
        debug.log("rotor", f"{self.name} bwd {sig}->{out}")
        return out

    # ── niceties --------------------------------------------------
    def __repr__(self) -> str:
        notch = f" notches={''.join(sorted(self.notches))}" if self.notches else ""
        return f"<Rotor {self.name} {self.kind.name} pos={self.setting_symbol}{notch}>"
