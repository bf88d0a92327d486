# utilities.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, Tuple

from alphabet_and_permutation import Alphabet, Permutation, cycle_sizes, parse_cycles
from debug import Debug
from errors import ConfigError, PlugboardError
from machine import Machine
from rotor_and_reflector import Rotor, RotorKind

debug = Debug()
debug.disable("config")

# ────────────────────────────────────────────────────────────────────────
#  0. Trivial helpers
# ────────────────────────────────────────────────────────────────────────


def _int_field(token: str | None, what: str) -> int:
    if token is None:
        raise ConfigError(f"Missing {what}")
    try:
        return int(token)
    except ValueError:
        raise ConfigError(f"{what.capitalize()} must be an integer, got {token!r}") from None


def _is_cycle(token: str) -> bool:
    return token.startswith("(")


# ────────────────────────────────────────────────────────────────────────
#  1. Rotor catalog (text form)
# ────────────────────────────────────────────────────────────────────────


def make_rotor(name: str, type_token: str, cycles: str, alpha: Alphabet) -> Rotor:
    """Build one rotor from its NAME, type token (``M<notches>``, ``N`` or
    ``R``) and cycle text."""
    try:
        kind = RotorKind(type_token[:1])
    except ValueError:
        raise ConfigError(f"Rotor {name}: unknown rotor type {type_token!r}") from None

    notches = type_token[1:]
    perm = Permutation.from_cycles(cycles, alpha)
    if kind is RotorKind.REFLECTOR and not perm.derangement():
        raise ConfigError(f"Reflector {name}: every symbol must be paired off")
    debug.log("config", f"rotor {name} {kind.name} notches={notches!r} {perm}")
    return Rotor(name, perm, kind, notches)


def parse_catalog(text: str) -> Machine:
    """Return a Machine described by a catalog:

        ALPHABET NUM_ROTORS NUM_PAWLS
        NAME TYPE (CYCLE) (CYCLE) ...
        ...

    Cycles may continue on following lines; a new descriptor starts at
    the first token that is not a cycle.
    """
    tokens = text.split()
    if not tokens:
        raise ConfigError("Empty configuration")

    alpha = Alphabet(tokens[0])
    num_rotors = _int_field(tokens[1] if len(tokens) > 1 else None, "number of rotors")
    num_pawls = _int_field(tokens[2] if len(tokens) > 2 else None, "number of pawls")

    rotors: List[Rotor] = []
    pos = 3
    while pos < len(tokens):
        name = tokens[pos]
        if pos + 1 >= len(tokens) or _is_cycle(tokens[pos + 1]):
            raise ConfigError(f"Wrong description for rotor {name}")
        type_token = tokens[pos + 1]
        pos += 2

        start = pos
        while pos < len(tokens) and _is_cycle(tokens[pos]):
            pos += 1
        rotors.append(make_rotor(name, type_token, " ".join(tokens[start:pos]), alpha))

    return Machine(alpha, num_rotors, num_pawls, rotors)


# ────────────────────────────────────────────────────────────────────────
#  2. Rotor catalog (JSON form)
# ────────────────────────────────────────────────────────────────────────


def catalog_from_json(data: Any) -> Machine:
    if not isinstance(data, dict):
        raise ConfigError("Catalog must be a JSON object")
    required = {"alphabet", "slots", "pawls", "catalog"}
    missing = required - data.keys()
    if missing:
        raise ConfigError(f"Missing keys in config: {', '.join(sorted(missing))}")

    if not isinstance(data["alphabet"], str):
        raise ConfigError("Catalog alphabet must be a string")
    if not isinstance(data["catalog"], dict):
        raise ConfigError("Catalog 'catalog' must map rotor names to descriptions")

    alpha = Alphabet(data["alphabet"])
    rotors = []
    for name, desc in data["catalog"].items():
        if not isinstance(desc, dict) or not all(
            isinstance(desc.get(k, ""), str) for k in ("type", "notches", "cycles")
        ):
            raise ConfigError(f"Rotor {name}: description must be an object of strings")
        type_token = desc.get("type", "") + desc.get("notches", "")
        rotors.append(make_rotor(name, type_token, desc.get("cycles", ""), alpha))
    return Machine(
        alpha,
        _int_field(str(data["slots"]), "number of rotors"),
        _int_field(str(data["pawls"]), "number of pawls"),
        rotors,
    )


def load_catalog(path: str | Path) -> Machine:
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ConfigError(f"{path}: not UTF-8 text ({exc.reason})") from exc
    debug.log("config", f"loading catalog {path}")
    if path.suffix.lower() == ".json":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"{path}: {exc}") from exc
        return catalog_from_json(data)
    return parse_catalog(text)


# ────────────────────────────────────────────────────────────────────────
#  3. Setting lines
# ────────────────────────────────────────────────────────────────────────


def is_setting_line(line: str) -> bool:
    return line.lstrip().startswith("*")


def split_setting_line(line: str, num_rotors: int) -> Tuple[List[str], str, str]:
    """Split ``* NAME... SETTING [CYCLES]`` into (names, setting, cycles)."""
    text = line.strip()
    if not text.startswith("*"):
        raise ConfigError(f"Setting line must start with '*': {line.strip()!r}")
    tokens = text[1:].split()

    names = tokens[:num_rotors]
    if len(names) < num_rotors or any(_is_cycle(n) for n in names):
        raise ConfigError(f"Setting line names fewer than {num_rotors} rotors")
    rest = tokens[num_rotors:]
    if not rest or _is_cycle(rest[0]):
        raise ConfigError("Setting line has no initial rotor setting")
    return names, rest[0], " ".join(rest[1:])


def parse_plugboard(cycles: str, alpha: Alphabet) -> Permutation | None:
    """Plugboard from swap pairs, or None when there are no pairs."""
    perm = Permutation(parse_cycles(cycles, alpha), alpha)
    if not perm.cycles:
        return None
    for size, cycle in zip(cycle_sizes(perm), perm.cycles):
        if size != 2:
            raise PlugboardError(f"Plugboard cycle ({cycle}) must be a pair")
    return perm


def apply_setting_line(machine: Machine, line: str) -> None:
    """Insert, set and plug MACHINE as the setting LINE says."""
    names, setting, cycles = split_setting_line(line, machine.num_rotors)
    plugboard = parse_plugboard(cycles, machine.alphabet)

    machine.insert_rotors(names)
    machine.set_rotors(setting)
    machine.set_plugboard(plugboard)
    debug.log("config", f"configured {machine!r}")


# ────────────────────────────────────────────────────────────────────────
#  4. Text helpers
# ────────────────────────────────────────────────────────────────────────


def preprocess_message(msg: str) -> str:
    """Upper‑case and drop whitespace."""
    return "".join(msg.split()).upper()


def group(text: str, block: int = 5) -> str:
    """Split TEXT into space-separated groups of BLOCK symbols."""
    return " ".join(text[i : i + block] for i in range(0, len(text), block))
