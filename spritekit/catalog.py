"""
Asset catalog - canonical dimensions for every game asset.

Spritesheets are laid out on a grid of `frame_width` x `frame_height` cells.
Only the tileset has a recolor region: row 9, columns 1-2 (the grass tiles).
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from spritekit.core.recolor import RecolorRegion


@dataclass(frozen=True)
class AssetSpec:
    """Canonical layout of a single asset file."""

    key: str
    file: str
    width: int
    height: int
    frame_width: int
    frame_height: int
    kind: str  # weapon | spritesheet | particle | ui
    usage: str
    total_frames: int = 1
    recolor_region: Optional[RecolorRegion] = None
    use_backup: bool = False  # Shipped as-is, never generated

    @property
    def columns(self) -> int:
        return self.width // self.frame_width

    @property
    def rows(self) -> int:
        return self.height // self.frame_height


def tile_region(row: int, first_col: int, last_col: int, tile: int = 16) -> RecolorRegion:
    """Region covering tiles [first_col, last_col] of a row (0-indexed)."""
    return RecolorRegion(first_col * tile, row * tile, (last_col + 1) * tile, (row + 1) * tile)


ASSET_CATALOG: Dict[str, AssetSpec] = {
    spec.key: spec
    for spec in (
        AssetSpec("sword", "sword.png", 32, 32, 32, 32, "weapon", "Player melee attack projectile"),
        AssetSpec("potions", "potions.png", 176, 16, 16, 16, "spritesheet", "Potion collectables", 11),
        AssetSpec("fireball", "fireball.png", 64, 16, 16, 16, "spritesheet", "Boss attack projectile", 4),
        AssetSpec("spell", "spell.png", 72, 12, 12, 12, "spritesheet", "Player spell attack projectile", 6),
        AssetSpec("characters", "characters.png", 192, 128, 16, 16, "spritesheet", "Player and enemy characters", 96),
        AssetSpec("dragons", "dragons.png", 384, 256, 32, 32, "spritesheet", "Boss enemy with color variants", 96),
        AssetSpec(
            "tiles", "tiles.png", 128, 240, 16, 16, "spritesheet",
            "Background tiles and environment obstacles", 120,
            recolor_region=tile_region(row=8, first_col=0, last_col=1),
            use_backup=True,
        ),
        AssetSpec("things", "things.png", 192, 128, 16, 16, "spritesheet", "Collectable items (chests)", 96),
        AssetSpec("dead", "dead.png", 48, 64, 16, 16, "spritesheet", "Corpse sprites when entities die", 12),
        AssetSpec("flame", "flame.png", 32, 32, 32, 32, "particle", "Particle effect for explosions"),
        AssetSpec("level-particle", "level-particle.png", 2, 2, 2, 2, "particle", "Particle effect for level-up"),
        AssetSpec("spell-particle", "spell-particle.png", 2, 2, 2, 2, "particle", "Particle effect for spell impact"),
        AssetSpec("play", "play.png", 102, 24, 102, 24, "ui", "Main menu play button"),
    )
}


def get_asset_spec(asset_key: str) -> AssetSpec:
    """Look up an asset by key."""
    spec = ASSET_CATALOG.get(asset_key)
    if spec is None:
        raise ValueError(f"Unknown asset: {asset_key}. Available: {list(ASSET_CATALOG.keys())}")
    return spec


def get_all_asset_keys() -> List[str]:
    return list(ASSET_CATALOG.keys())


def find_asset_by_file(filename: str) -> Optional[AssetSpec]:
    """Match a file name (or stem) to its catalog entry."""
    for spec in ASSET_CATALOG.values():
        if filename in (spec.file, spec.key):
            return spec
    return None
