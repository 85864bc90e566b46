"""Stage names, kingdom aliases and the lookups between them."""

from __future__ import annotations

ALIAS_TO_STAGE: dict[str, str] = {
    "cap": "CapWorldHomeStage",
    "cascade": "WaterfallWorldHomeStage",
    "sand": "SandWorldHomeStage",
    "lake": "LakeWorldHomeStage",
    "wooded": "ForestWorldHomeStage",
    "cloud": "CloudWorldHomeStage",
    "lost": "ClashWorldHomeStage",
    "metro": "CityWorldHomeStage",
    "snow": "SnowWorldHomeStage",
    "sea": "SeaWorldHomeStage",
    "lunch": "LavaWorldHomeStage",
    "ruined": "BossRaidWorldHomeStage",
    "bowser": "SkyWorldHomeStage",
    "moon": "MoonWorldHomeStage",
    "mush": "PeachWorldHomeStage",
    "dark": "Special1WorldHomeStage",
    "darker": "Special2WorldHomeStage",
    "odyssey": "HomeShipInsideStage",
}

ALIAS_TO_KINGDOM: dict[str, str] = {
    "cap": "Cap Kingdom",
    "cascade": "Cascade Kingdom",
    "sand": "Sand Kingdom",
    "lake": "Lake Kingdom",
    "wooded": "Wooded Kingdom",
    "cloud": "Cloud Kingdom",
    "lost": "Lost Kingdom",
    "metro": "Metro Kingdom",
    "snow": "Snow Kingdom",
    "sea": "Seaside Kingdom",
    "lunch": "Luncheon Kingdom",
    "ruined": "Ruined Kingdom",
    "bowser": "Bowser's Kingdom",
    "moon": "Moon Kingdom",
    "mush": "Mushroom Kingdom",
    "dark": "Dark Side",
    "darker": "Darker Side",
    "odyssey": "Odyssey",
}

_STAGES_BY_ALIAS: dict[str, tuple[str, ...]] = {
    "cap": (
        "CapWorldHomeStage", "CapWorldTowerStage", "FrogSearchExStage",
        "PoisonWaveExStage", "PushBlockExStage", "RollingExStage",
    ),
    "cascade": (
        "WaterfallWorldHomeStage", "TrexPoppunExStage", "Lift2DExStage",
        "WanwanClashExStage", "CapAppearExStage", "WindBlowExStage",
    ),
    "sand": (
        "SandWorldHomeStage", "SandWorldShopStage", "SandWorldSlotStage",
        "SandWorldVibrationStage", "SandWorldSecretStage", "SandWorldMeganeExStage",
        "SandWorldKillerExStage", "SandWorldPressExStage", "SandWorldSphinxExStage",
        "SandWorldCostumeStage", "SandWorldPyramid000Stage", "SandWorldPyramid001Stage",
        "SandWorldUnderground000Stage", "SandWorldUnderground001Stage",
        "SandWorldRotateExStage", "MeganeLiftExStage", "RocketFlowerExStage",
        "WaterTubeExStage",
    ),
    "lake": (
        "LakeWorldHomeStage", "LakeWorldShopStage", "FastenerExStage",
        "TrampolineWallCatchExStage", "GotogotonExStage", "FrogPoisonExStage",
    ),
    "wooded": (
        "ForestWorldHomeStage", "ForestWorldWaterExStage", "ForestWorldTowerStage",
        "ForestWorldBossStage", "ForestWorldBonusStage", "ForestWorldCloudBonusExStage",
        "FogMountainExStage", "RailCollisionExStage", "ShootingElevatorExStage",
        "ForestWorldWoodsStage", "ForestWorldWoodsTreasureStage",
        "ForestWorldWoodsCostumeStage", "PackunPoisonExStage", "AnimalChaseExStage",
        "KillerRoadExStage",
    ),
    "cloud": ("CloudWorldHomeStage", "FukuwaraiKuriboStage", "Cube2DExStage"),
    "lost": (
        "ClashWorldHomeStage", "ClashWorldShopStage", "ImomuPoisonExStage",
        "JangoExStage",
    ),
    "metro": (
        "CityWorldHomeStage", "CityWorldMainTowerStage", "CityWorldFactoryStage",
        "CityWorldShop01Stage", "CityWorldSandSlotStage", "CityPeopleRoadStage",
        "PoleGrabCeilExStage", "TrexBikeExStage", "PoleKillerExStage",
        "Note2D3DRoomExStage", "ShootingCityExStage", "CapRotatePackunExStage",
        "RadioControlExStage", "ElectricWireExStage", "Theater2DExStage",
        "DonsukeExStage", "SwingSteelExStage", "BikeSteelExStage",
    ),
    "snow": (
        "SnowWorldHomeStage", "SnowWorldTownStage", "SnowWorldShopStage",
        "SnowWorldLobby000Stage", "SnowWorldLobby001Stage", "SnowWorldRaceTutorialStage",
        "SnowWorldRace000Stage", "SnowWorldRace001Stage", "SnowWorldCostumeStage",
        "SnowWorldCloudBonusExStage", "IceWalkerExStage", "IceWaterBlockExStage",
        "ByugoPuzzleExStage", "IceWaterDashExStage", "SnowWorldLobbyExStage",
        "SnowWorldRaceExStage", "SnowWorldRaceHardExStage", "KillerRailCollisionExStage",
    ),
    "sea": (
        "SeaWorldHomeStage", "SeaWorldUtsuboCaveStage", "SeaWorldVibrationStage",
        "SeaWorldSecretStage", "SeaWorldCostumeStage", "SeaWorldSneakingManStage",
        "SenobiTowerExStage", "CloudExStage", "WaterValleyExStage",
        "ReflectBombExStage", "TogezoRotateExStage",
    ),
    "lunch": (
        "LavaWorldHomeStage", "LavaWorldUpDownExStage", "LavaBonus1Zone",
        "LavaWorldShopStage", "LavaWorldCostumeStage", "ForkExStage",
        "LavaWorldExcavationExStage", "LavaWorldClockExStage",
        "LavaWorldBubbleLaneExStage", "LavaWorldTreasureStage", "GabuzouClockExStage",
        "CapAppearLavaLiftExStage", "LavaWorldFenceLiftExStage",
    ),
    "ruined": ("BossRaidWorldHomeStage", "DotTowerExStage", "BullRunExStage"),
    "bowser": (
        "SkyWorldHomeStage", "SkyWorldShopStage", "SkyWorldCostumeStage",
        "SkyWorldCloudBonusExStage", "SkyWorldTreasureStage", "JizoSwitchExStage",
        "TsukkunRotateExStage", "KaronWingTowerStage", "TsukkunClimbExStage",
    ),
    "moon": (
        "MoonWorldHomeStage", "MoonWorldCaptureParadeStage", "MoonWorldWeddingRoomStage",
        "MoonWorldKoopa1Stage", "MoonWorldBasementStage", "MoonWorldWeddingRoom2Stage",
        "MoonWorldKoopa2Stage", "MoonWorldShopRoom", "MoonWorldSphinxRoom",
        "MoonAthleticExStage", "Galaxy2DExStage",
    ),
    "mush": (
        "PeachWorldHomeStage", "PeachWorldShopStage", "PeachWorldCastleStage",
        "PeachWorldCostumeStage", "FukuwaraiMarioStage", "DotHardExStage",
        "YoshiCloudExStage", "PeachWorldPictureBossMagmaStage", "RevengeBossMagmaStage",
        "PeachWorldPictureGiantWanderBossStage", "RevengeGiantWanderBossStage",
        "PeachWorldPictureBossKnuckleStage", "RevengeBossKnuckleStage",
        "PeachWorldPictureBossForestStage", "RevengeForestBossStage",
        "PeachWorldPictureMofumofuStage", "RevengeMofumofuStage",
        "PeachWorldPictureBossRaidStage", "RevengeBossRaidStage",
    ),
    "dark": (
        "Special1WorldHomeStage", "Special1WorldTowerStackerStage",
        "Special1WorldTowerBombTailStage", "Special1WorldTowerFireBlowerStage",
        "Special1WorldTowerCapThrowerStage", "KillerRoadNoCapExStage",
        "PackunPoisonNoCapExStage", "BikeSteelNoCapExStage", "ShootingCityYoshiExStage",
        "SenobiTowerYoshiExStage", "LavaWorldUpDownYoshiExStage",
    ),
    "darker": (
        "Special2WorldHomeStage", "Special2WorldLavaStage", "Special2WorldCloudStage",
        "Special2WorldKoopaStage",
    ),
    "odyssey": ("HomeShipInsideStage",),
}

STAGE_TO_ALIAS: dict[str, str] = {
    stage: alias for alias, stages in _STAGES_BY_ALIAS.items() for stage in stages
}


def is_alias(text: str) -> bool:
    """Whether ``text`` is a kingdom alias such as ``cap``."""
    return text in ALIAS_TO_STAGE


def is_stage(text: str) -> bool:
    """Whether ``text`` is a known stage name."""
    return text in STAGE_TO_ALIAS


def input_to_stage(text: str) -> str | None:
    """Resolve user input to a stage name.

    An alias gives its home stage, a known stage gives itself, and any
    input ending in ``!`` is taken as-is without the ``!``.
    """
    if is_alias(text):
        return ALIAS_TO_STAGE[text]
    if is_stage(text):
        return text
    if text.endswith("!"):
        return text[:-1]
    return None


def stage_to_kingdom(stage: str) -> str | None:
    """The display name of the kingdom a stage belongs to."""
    alias = STAGE_TO_ALIAS.get(stage)
    if alias is None:
        return None
    return ALIAS_TO_KINGDOM.get(alias)


def stages_by_input(text: str) -> list[str]:
    """All stages that ``text`` refers to: a whole kingdom for an alias."""
    if is_alias(text):
        return list(_STAGES_BY_ALIAS[text])
    stage = input_to_stage(text)
    return [stage] if stage is not None else []