# machine.py  ──────────────────────────────────────────────────────
from __future__ import annotations

from collections.abc import Iterable, Sequence

from alphabet_and_permutation import Alphabet, Permutation
from debug import Debug
from errors import (
    DuplicateRotorError,
    MachineError,
    PlacementError,
    SettingError,
    SlotCountError,
    UnknownRotorError,
)
from rotor_and_reflector import Rotor

debug = Debug()
debug.disable("stepping", "machine", "plugboard")


class Machine:
    """A rotor machine: NUM_ROTORS slots (slot 0 holds the reflector),
    NUM_PAWLS of which are expected to hold moving rotors, chosen from the
    rotors in ALL_ROTORS.

    The catalog rotors are kept in a list and the slots store positions in
    that list, so the very objects handed in are the ones that turn.
    """

    def __init__(
        self,
        alphabet: Alphabet,
        num_rotors: int,
        num_pawls: int,
        all_rotors: Iterable[Rotor],
    ) -> None:
        if num_rotors < 2:
            raise MachineError(f"Need at least 2 rotor slots, got {num_rotors}")
        if not 0 <= num_pawls < num_rotors:
            raise MachineError(
                f"Pawl count {num_pawls} must lie in 0..{num_rotors - 1}"
            )

        self.alphabet = alphabet
        self._num_rotors = num_rotors
        self._num_pawls = num_pawls

        self._all_rotors: list[Rotor] = list(all_rotors)
        self._by_name: dict[str, int] = {}
        for i, rotor in enumerate(self._all_rotors):
            if rotor.alphabet != alphabet:
                raise MachineError(f"Rotor {rotor.name} uses a different alphabet")
            if rotor.name in self._by_name:
                raise DuplicateRotorError(f"Two rotors named {rotor.name} in catalog")
            self._by_name[rotor.name] = i

        self._slots: list[int] = []
        self._plugboard: Permutation | None = None

    # ── geometry ────────────────────────────────────────────────
    @property
    def num_rotors(self) -> int:
        return self._num_rotors

    @property
    def num_pawls(self) -> int:
        return self._num_pawls

    @property
    def all_rotors(self) -> list[Rotor]:
        return list(self._all_rotors)

    @property
    def rotors(self) -> list[Rotor]:
        """Rotors in their slots, reflector first."""
        return [self._all_rotors[i] for i in self._slots]

    @property
    def settings(self) -> str:
        """Window letters of every slot, reflector included."""
        return "".join(r.setting_symbol for r in self.rotors)

    @property
    def plugboard(self) -> Permutation | None:
        return self._plugboard

    # ── configuration ───────────────────────────────────────────
    def insert_rotors(self, names: Sequence[str]) -> None:
        """Fill the slots with the rotors called NAMES (NAMES[0] is the
        reflector) and put each of them back at setting 0."""
        if len(names) != self._num_rotors:
            raise SlotCountError(
                f"Expected {self._num_rotors} rotor names, got {len(names)}"
            )

        slots: list[int] = []
        for name in names:
            if name not in self._by_name:
                raise UnknownRotorError(f"No rotor named {name!r}")
            idx = self._by_name[name]
            if idx in slots:
                raise DuplicateRotorError(f"Rotor {name} requested more than once")
            slots.append(idx)

        chosen = [self._all_rotors[i] for i in slots]
        if not chosen[0].reflecting():
            raise PlacementError(f"Leftmost rotor {chosen[0].name} is not a reflector")
        for rotor in chosen[1:]:
            if rotor.reflecting():
                raise PlacementError(f"Reflector {rotor.name} outside the leftmost slot")

        moving = sum(r.rotates() for r in chosen)
        if moving != self._num_pawls:
            debug.warn(
                "machine",
                f"{moving} moving rotors inserted for {self._num_pawls} pawls",
            )

        for rotor in chosen:
            rotor.set(0)
        self._slots = slots
        debug.log("machine", f"inserted {' '.join(names)}")

    def set_rotors(self, setting: str) -> None:
        """Set the non-reflector rotors, leftmost first, from the window
        letters in SETTING; the reflector always goes back to 0."""
        if not self._slots:
            raise SettingError("No rotors inserted")
        if len(setting) != self._num_rotors - 1:
            raise SettingError(
                f"Setting {setting!r} must have {self._num_rotors - 1} symbols"
            )
        for ch in setting:
            if ch not in self.alphabet:
                raise SettingError(f"Setting symbol {ch!r} not in alphabet")

        letters = iter(setting)
        for rotor in self.rotors:
            if rotor.reflecting():
                rotor.set(0)
            else:
                rotor.set(next(letters))
        debug.log("machine", f"settings {self.settings}")

    def set_plugboard(self, plugboard: Permutation | None) -> None:
        self._plugboard = plugboard
        debug.log("plugboard", f"plugboard {plugboard}")

    # ── stepping logic  ─────────────────────────────────────────
    def _advancing_slots(self) -> frozenset[int]:
        """Slots whose rotor steps on the next key press.

        Pure: reads the current settings only. A slot advances when its
        rotor sits at a notch or the rotor to its right does; while the
        rightmost rotor is off its notch, only the rightmost rotor moves.
        """
        rotors = self.rotors
        last = len(rotors) - 1
        if not rotors[last].at_notch():
            return frozenset({last})

        notched = [r.at_notch() for r in rotors]
        flagged = set()
        for i, hit in enumerate(notched):
            if hit:
                flagged.add(i)
                if i > 0:
                    flagged.add(i - 1)
        return frozenset(flagged)

    def _step_rotors(self) -> None:
        """Advance rotors one key-press."""
        rotors = self.rotors
        for i in sorted(self._advancing_slots()):
            if rotors[i].rotates():
                rotors[i].advance()
        debug.log("stepping", f"Rotor pos {self.settings}")

    # ── encipher one symbol  ────────────────────────────────────
    def convert_index(self, c: int) -> int:
        """Advance the machine, then return the image of index C."""
        if not self._slots:
            raise SlotCountError("No rotors inserted")
        self._step_rotors()

        rotors = self.rotors
        signal = c % self.alphabet.size
        if self._plugboard is not None:
            signal = self._plugboard.permute(signal)

        # rightmost to reflector, then back out again
        for rotor in reversed(rotors):
            signal = rotor.convert_forward(signal)
        for rotor in rotors[1:]:
            signal = rotor.convert_backward(signal)

        if self._plugboard is not None:
            signal = self._plugboard.invert(signal)
        return signal

    def convert(self, msg: str) -> str:
        """Encode or decode MSG, dropping whitespace. Rotors keep turning
        across calls."""
        out: list[str] = []
        for ch in msg:
            if ch.isspace():
                continue
            index = self.alphabet.to_index(ch.upper())
            out.append(self.alphabet.to_symbol(self.convert_index(index)))
        result = "".join(out)
        debug.log("machine", f"{msg!r} -> {result!r}")
        return result

    def __repr__(self) -> str:
        names = " ".join(r.name for r in self.rotors) or "-"
        return f"<Machine [{names}] pos={self.settings or '-'}>"
