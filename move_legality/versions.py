"""Game versions, the version groups that own move tables, and their generations."""

from __future__ import annotations

from enum import Enum

__all__ = [
    "GameVersion",
    "VersionGroup",
    "MAX_GENERATION",
    "Species",
    "Move",
]

MAX_GENERATION = 9


class GameVersion(str, Enum):
    """Individual game releases an encounter can originate from."""

    RED = "RD"
    GREEN = "GN"
    BLUE = "BU"
    YELLOW = "YW"
    GOLD = "GD"
    SILVER = "SI"
    CRYSTAL = "C"
    RUBY = "R"
    SAPPHIRE = "S"
    EMERALD = "E"
    FIRERED = "FR"
    LEAFGREEN = "LG"
    DIAMOND = "D"
    PEARL = "P"
    PLATINUM = "Pt"
    HEARTGOLD = "HG"
    SOULSILVER = "SS"
    BLACK = "B"
    WHITE = "W"
    BLACK2 = "B2"
    WHITE2 = "W2"
    X = "X"
    Y = "Y"
    OMEGA_RUBY = "OR"
    ALPHA_SAPPHIRE = "AS"
    SUN = "SN"
    MOON = "MN"
    ULTRA_SUN = "US"
    ULTRA_MOON = "UM"
    SWORD = "SW"
    SHIELD = "SH"
    SCARLET = "SL"
    VIOLET = "VL"

    @property
    def group(self) -> "VersionGroup":
        return _GROUP_OF[self]

    @property
    def generation(self) -> int:
        return self.group.generation


class VersionGroup(str, Enum):
    """Releases that share one set of move-source tables."""

    RB = "RB"
    YW = "YW"
    GS = "GS"
    C = "C"
    RS = "RS"
    E = "E"
    FRLG = "FRLG"
    DP = "DP"
    PT = "Pt"
    HGSS = "HGSS"
    BW = "BW"
    B2W2 = "B2W2"
    XY = "XY"
    ORAS = "ORAS"
    SM = "SM"
    USUM = "USUM"
    SWSH = "SWSH"
    SV = "SV"

    @property
    def generation(self) -> int:
        return _GROUP_GENERATION[self]

    @property
    def members(self) -> tuple[GameVersion, ...]:
        return _GROUP_MEMBERS[self]

    def contains(self, version: GameVersion) -> bool:
        return version in _GROUP_MEMBERS[self]


_GROUP_MEMBERS: dict[VersionGroup, tuple[GameVersion, ...]] = {
    VersionGroup.RB: (GameVersion.RED, GameVersion.GREEN, GameVersion.BLUE),
    VersionGroup.YW: (GameVersion.YELLOW,),
    VersionGroup.GS: (GameVersion.GOLD, GameVersion.SILVER),
    VersionGroup.C: (GameVersion.CRYSTAL,),
    VersionGroup.RS: (GameVersion.RUBY, GameVersion.SAPPHIRE),
    VersionGroup.E: (GameVersion.EMERALD,),
    VersionGroup.FRLG: (GameVersion.FIRERED, GameVersion.LEAFGREEN),
    VersionGroup.DP: (GameVersion.DIAMOND, GameVersion.PEARL),
    VersionGroup.PT: (GameVersion.PLATINUM,),
    VersionGroup.HGSS: (GameVersion.HEARTGOLD, GameVersion.SOULSILVER),
    VersionGroup.BW: (GameVersion.BLACK, GameVersion.WHITE),
    VersionGroup.B2W2: (GameVersion.BLACK2, GameVersion.WHITE2),
    VersionGroup.XY: (GameVersion.X, GameVersion.Y),
    VersionGroup.ORAS: (GameVersion.OMEGA_RUBY, GameVersion.ALPHA_SAPPHIRE),
    VersionGroup.SM: (GameVersion.SUN, GameVersion.MOON),
    VersionGroup.USUM: (GameVersion.ULTRA_SUN, GameVersion.ULTRA_MOON),
    VersionGroup.SWSH: (GameVersion.SWORD, GameVersion.SHIELD),
    VersionGroup.SV: (GameVersion.SCARLET, GameVersion.VIOLET),
}

_GROUP_GENERATION: dict[VersionGroup, int] = {
    VersionGroup.RB: 1,
    VersionGroup.YW: 1,
    VersionGroup.GS: 2,
    VersionGroup.C: 2,
    VersionGroup.RS: 3,
    VersionGroup.E: 3,
    VersionGroup.FRLG: 3,
    VersionGroup.DP: 4,
    VersionGroup.PT: 4,
    VersionGroup.HGSS: 4,
    VersionGroup.BW: 5,
    VersionGroup.B2W2: 5,
    VersionGroup.XY: 6,
    VersionGroup.ORAS: 6,
    VersionGroup.SM: 7,
    VersionGroup.USUM: 7,
    VersionGroup.SWSH: 8,
    VersionGroup.SV: 9,
}

_GROUP_OF: dict[GameVersion, VersionGroup] = {
    version: group for group, members in _GROUP_MEMBERS.items() for version in members
}


class Species:
    """National dex numbers referenced by generation rules."""

    DEOXYS = 386
    GIRATINA = 487
    SHAYMIN = 492
    HOOPA = 720


class Move:
    """Move identifiers referenced by generation rules."""

    VOLT_TACKLE = 344
