"""Type-safe enumerations for netswitch.

All categorical values use enum types for type safety and consistency.
"""

from enum import Enum


class AdapterType(str, Enum):
    """Adapter classification types.

    Classification may also yield the raw adapter-type label reported by
    the data source when no rule matches, so consumers must accept plain
    strings as well.
    """

    ETHERNET = "Ethernet"
    WIFI = "Wi-Fi"
    BLUETOOTH = "Bluetooth"
    LOOPBACK = "Loopback"
    TUNNEL = "Tunnel"
    PPP = "PPP"
    VIRTUAL = "Virtual"
    UNKNOWN = "Unknown"


class Theme(str, Enum):
    """Persisted UI theme name."""

    DARK = "dark"
    LIGHT = "light"


class Language(str, Enum):
    """Persisted UI language (closed set)."""

    ENGLISH = "English"
    RUSSIAN = "Russian"
    FRENCH = "French"
    GERMAN = "German"
    CHINESE = "Chinese"
    POLISH = "Polish"
    JAPANESE = "Japanese"

    @classmethod
    def parse(cls, value: object) -> "Language":
        """Match a stored language name case-insensitively.

        Args:
            value: Stored value (any type)

        Returns:
            Matching Language, or ENGLISH if unknown.
        """
        if isinstance(value, str):
            wanted = value.strip().casefold()
            for language in cls:
                if language.value.casefold() == wanted or language.name.casefold() == wanted:
                    return language
        return cls.ENGLISH


class CooldownPhase(str, Enum):
    """Switch cooldown states."""

    ELIGIBLE = "eligible"
    COOLING = "cooling"
