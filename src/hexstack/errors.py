"""Exception types raised by the Hex Stack core."""


class HexStackError(Exception):
    """Base class for errors raised by the game core."""


class ConfigError(HexStackError, ValueError):
    """A level definition cannot produce a valid grid."""


class StorageUnavailable(HexStackError, OSError):
    """Progress storage could not be read or written.

    Raised by storage backends only; the progression layer catches it and falls
    back to defaults (load) or drops the write (save).
    """
