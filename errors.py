# errors.py
"""Exception hierarchy shared by the machine, its parts and the CLI.

Everything derives from ValueError so callers that only care about
"bad input" can keep catching that.
"""
from __future__ import annotations


class EnigmaError(ValueError):
    """Base class for every error the simulator reports."""


class AlphabetError(EnigmaError):
    """Symbol or index outside the alphabet, or a malformed alphabet."""


class ConfigError(EnigmaError):
    """Malformed catalog, setting line or cycle notation."""


class UnknownRotorError(ConfigError):
    pass


class DuplicateRotorError(ConfigError):
    pass


class SlotCountError(ConfigError):
    pass


class SettingError(ConfigError):
    pass


class MachineError(ConfigError):
    """Impossible machine geometry (slot / pawl counts, mixed alphabets)."""


class PlacementError(ConfigError):
    """Reflector missing from the leftmost slot or found elsewhere."""


class PlugboardError(ConfigError):
    pass
