# alphabet_and_permutation.py
from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

from debug import Debug
from errors import AlphabetError, ConfigError

debug = Debug()
debug.disable("alphabet", "permutation")

_CYCLES_RE = re.compile(r"(?:\([^()]+\))*")
_CYCLE_RE = re.compile(r"\(([^()]+)\)")


# ── Alphabet ──────────────────────────────────────────────────────
class Alphabet:
    """Ordered, duplicate-free symbol set numbered 0..size-1."""

    def __init__(self, symbols: str) -> None:
        if not symbols:
            raise AlphabetError("Alphabet must contain at least one symbol")
        seen: set[str] = set()
        for ch in symbols:
            if ch in seen:
                raise AlphabetError(f"Duplicate symbol {ch!r} in alphabet")
            if ch.isspace() or ch in "()*":
                raise AlphabetError(f"Symbol {ch!r} cannot be used in an alphabet")
            seen.add(ch)

        self.symbols: str = symbols
        self.symbol_to_index: dict[str, int] = {
            ch: i for i, ch in enumerate(symbols)
        }

    @classmethod
    def range(cls, first: str, last: str) -> "Alphabet":
        """Contiguous character range, e.g. ``Alphabet.range("A", "Z")``."""
        if ord(first) > ord(last):
            raise AlphabetError(f"Empty range {first!r}..{last!r}")
        return cls("".join(chr(c) for c in range(ord(first), ord(last) + 1)))

    @property
    def size(self) -> int:
        return len(self.symbols)

    def __len__(self) -> int:
        return len(self.symbols)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self.symbol_to_index

    def __iter__(self):
        return iter(self.symbols)

    # symbol → integer index
    def to_index(self, symbol: str) -> int:
        try:
            return self.symbol_to_index[symbol]
        except KeyError:
            raise AlphabetError(
                f"Invalid character {symbol!r} for current alphabet."
            ) from None

    # integer index → symbol
    def to_symbol(self, index: int) -> str:
        if not (0 <= index < len(self.symbols)):
            hi = len(self.symbols) - 1
            raise AlphabetError(f"Index {index} out of range 0–{hi}")
        return self.symbols[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Alphabet):
            return NotImplemented
        return self.symbols == other.symbols

    def __hash__(self) -> int:
        return hash(self.symbols)

    def __repr__(self) -> str:
        return f"<Alphabet {self.symbols!r}>"


# ── Permutation ───────────────────────────────────────────────────
class Permutation:
    """A permutation of an alphabet given in cycle notation.

    Each cycle ``c0 c1 ... cm`` maps c0→c1→…→cm→c0; symbols that appear in
    no cycle map to themselves. Cycles are expected to be disjoint; use
    :meth:`from_cycles` when the input comes from a user.
    """

    def __init__(self, cycles: Iterable[str], alphabet: Alphabet) -> None:
        self.alphabet = alphabet
        self.cycles: tuple[str, ...] = tuple(cycles)

        # integer lookup tables
        size = alphabet.size
        self._fwd = list(range(size))
        self._rev = list(range(size))
        for cycle in self.cycles:
            for pos, ch in enumerate(cycle):
                if ch not in alphabet:
                    raise AlphabetError(
                        f"Cycle symbol {ch!r} not in alphabet"
                    )
                src = alphabet.to_index(ch)
                dst = alphabet.to_index(cycle[(pos + 1) % len(cycle)])
                self._fwd[src] = dst
                self._rev[dst] = src

    @classmethod
    def from_cycles(cls, text: str, alphabet: Alphabet) -> "Permutation":
        """Parse ``"(AELT) (BK)(CM)"``; whitespace is insignificant."""
        return cls(parse_cycles(text, alphabet), alphabet)

    @property
    def size(self) -> int:
        return self.alphabet.size

    def wrap(self, p: int) -> int:
        """Return P modulo the alphabet size, always in 0..size-1."""
        r = p % self.size
        if r < 0:
            r += self.size
        return r

    # ── index paths ----------------------------------------------
    def permute(self, p: int) -> int:
        out = self._fwd[self.wrap(p)]
        debug.log("permutation", f"permute {p}->{out}")
        return out

    def invert(self, c: int) -> int:
        out = self._rev[self.wrap(c)]
        debug.log("permutation", f"invert {c}->{out}")
        return out

    # ── symbol paths ---------------------------------------------
    def permute_symbol(self, symbol: str) -> str:
        for cycle in self.cycles:
            pos = cycle.find(symbol)
            if pos != -1:
                return cycle[(pos + 1) % len(cycle)]
        return symbol

    def invert_symbol(self, symbol: str) -> str:
        for cycle in self.cycles:
            pos = cycle.find(symbol)
            if pos != -1:
                return cycle[pos - 1]
        return symbol

    def derangement(self) -> bool:
        """True iff no symbol maps to itself."""
        return all(i != j for i, j in enumerate(self._fwd))

    # niceties
    def __str__(self) -> str:
        return " ".join(f"({c})" for c in self.cycles)

    def __repr__(self) -> str:
        return f"<Permutation {self}>"


def parse_cycles(text: str, alphabet: Alphabet) -> list[str]:
    """Split cycle notation into cycle strings, checking symbols and overlap."""
    compact = "".join(text.split())
    if not _CYCLES_RE.fullmatch(compact):
        raise ConfigError(f"Malformed cycle notation: {text.strip()!r}")

    cycles = _CYCLE_RE.findall(compact)
    used: set[str] = set()
    for cycle in cycles:
        for ch in cycle:
            if ch not in alphabet:
                raise ConfigError(f"Symbol {ch!r} in cycle ({cycle}) not in alphabet")
            if ch in used:
                raise ConfigError(f"Symbol {ch!r} appears in more than one cycle")
            used.add(ch)
    debug.log("permutation", f"parsed {len(cycles)} cycles from {text.strip()!r}")
    return cycles


def cycle_sizes(perm: Permutation) -> Sequence[int]:
    return [len(c) for c in perm.cycles]
