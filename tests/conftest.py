"""Shared fixtures: a small move-source payload covering generations 4 and 5."""

from __future__ import annotations

import copy
from typing import Any

import pytest

from move_legality import (
    Creature,
    EncounterKind,
    EncounterTemplate,
    EvoCriteria,
    EvolutionHistory,
    GameVersion,
    MoveSourceRegistry,
    parse_registry,
)

# Species
BULBASAUR = 1
IVYSAUR = 2
PIKACHU = 25
PICHU = 172
DEOXYS = 386
ZORUA = 570
KYUREM = 646

# Moves
THUNDER_PUNCH = 9
VINE_WHIP = 22
TACKLE = 33
GROWL = 45
SURF = 57
LEECH_SEED = 73
GROWTH = 74
THUNDERSHOCK = 84
THUNDERBOLT = 85
THUNDER_WAVE = 86
TOXIC = 92
AGILITY = 97
QUICK_ATTACK = 98
SWEET_KISS = 186
CHARM = 204
FAKE_OUT = 252
TAUNT = 269
IRON_DEFENSE = 334
VOLT_TACKLE = 344
PSYCHO_BOOST = 354
SEED_BOMB = 402
NASTY_PLOT = 417
FUSION_BOLT = 559
UNOBTAINABLE = 999

_DEOXYS_FORMS = {0: (), 1: ((TAUNT, 1),), 2: ((IRON_DEFENSE, 1),), 3: ((AGILITY, 1),)}


def _deoxys_rows() -> list[dict[str, Any]]:
    return [
        {
            "species": DEOXYS,
            "form": form,
            "form_count": 4,
            "level_up": [[PSYCHO_BOOST, 1], *[list(pair) for pair in extra]],
        }
        for form, extra in _DEOXYS_FORMS.items()
    ]


_GEN4_BULBASAUR = [[TACKLE, 1], [GROWL, 3], [LEECH_SEED, 7], [VINE_WHIP, 9], [GROWTH, 15]]
_GEN4_IVYSAUR = [[TACKLE, 1], [GROWL, 1], [LEECH_SEED, 1], [VINE_WHIP, 1]]

PAYLOAD: dict[str, Any] = {
    "version_groups": {
        "HGSS": [
            {"species": BULBASAUR, "level_up": _GEN4_BULBASAUR, "machine": [TOXIC]},
            {"species": IVYSAUR, "level_up": _GEN4_IVYSAUR, "machine": [TOXIC]},
        ],
        "Pt": [
            {"species": BULBASAUR, "level_up": _GEN4_BULBASAUR, "tutor": [SEED_BOMB], "machine": [TOXIC]},
            {"species": IVYSAUR, "level_up": _GEN4_IVYSAUR},
        ],
        "DP": [
            {"species": BULBASAUR, "level_up": [*_GEN4_BULBASAUR, [TOXIC, 10]]},
            {"species": IVYSAUR, "level_up": _GEN4_IVYSAUR},
        ],
        "B2W2": [
            {"species": IVYSAUR, "level_up": [[TACKLE, 1], [GROWL, 1], [LEECH_SEED, 1]]},
            {
                "species": PIKACHU,
                "form": 0,
                "form_count": 2,
                "level_up": [[THUNDERSHOCK, 1], [QUICK_ATTACK, 10]],
                "machine": [THUNDERBOLT],
                "tutor": [THUNDER_PUNCH],
            },
            {
                "species": PIKACHU,
                "form": 1,
                "form_count": 2,
                "level_up": [[THUNDERSHOCK, 1], [FAKE_OUT, 1]],
            },
            {
                "species": PICHU,
                "level_up": [[THUNDERSHOCK, 1], [CHARM, 1], [QUICK_ATTACK, 13], [NASTY_PLOT, 18]],
                "egg": [SWEET_KISS, NASTY_PLOT],
            },
            {"species": KYUREM, "form": 1, "form_count": 3, "level_up": [[FUSION_BOLT, 1]]},
            *_deoxys_rows(),
        ],
        "BW": [
            {"species": IVYSAUR, "level_up": [[TACKLE, 1], [GROWL, 1], [LEECH_SEED, 1]]},
            {
                "species": PIKACHU,
                "form_count": 1,
                "level_up": [[THUNDERSHOCK, 1], [THUNDER_WAVE, 15], [THUNDERBOLT, 20]],
                "machine": [THUNDERBOLT],
            },
            {
                "species": PICHU,
                "level_up": [[THUNDERSHOCK, 1], [CHARM, 1], [THUNDER_WAVE, 10]],
                "egg": [SWEET_KISS],
            },
            {"species": ZORUA, "level_up": [[TAUNT, 1]]},
            *_deoxys_rows(),
        ],
    }
}


@pytest.fixture
def payload() -> dict[str, Any]:
    return copy.deepcopy(PAYLOAD)


@pytest.fixture
def tables() -> MoveSourceRegistry:
    return parse_registry(copy.deepcopy(PAYLOAD))


def gen5_history(species: int, form: int = 0, level_max: int = 100) -> EvolutionHistory:
    return EvolutionHistory.from_mapping({5: [EvoCriteria(species, form, level_max=level_max)]})


def wild(species: int, version: GameVersion = GameVersion.BLACK2, **kwargs: Any) -> EncounterTemplate:
    return EncounterTemplate(EncounterKind.WILD, species=species, version=version, **kwargs)


def egg(species: int, version: GameVersion = GameVersion.BLACK2, **kwargs: Any) -> EncounterTemplate:
    return EncounterTemplate(EncounterKind.EGG, species=species, version=version, **kwargs)


def creature(species: int, form: int = 0, generation: int = 5) -> Creature:
    return Creature(species=species, form=form, generation=generation)
