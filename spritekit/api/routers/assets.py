"""Assets API router - persistence and sprite post-processing endpoints."""

import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, HTTPException, status
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel

from spritekit.catalog import ASSET_CATALOG, get_asset_spec
from spritekit.config import get_config
from spritekit.core.chroma import KeyColorConfig
from spritekit.core.errors import SpriteKitError
from spritekit.core.recolor import RecolorRegion
from spritekit.core.themes import extract_theme
from spritekit.pipeline import ProcessResult, clean_asset, process_catalog_asset, recolor_asset
from spritekit.storage import AssetStore, InvalidFilenameError, decode_payload, encode_payload

logger = logging.getLogger(__name__)

router = APIRouter(tags=["assets"])


def get_store() -> AssetStore:
    return AssetStore(get_config().assets_dir)


def _key_config(key_color: Optional[str], tolerance: Optional[int]) -> KeyColorConfig:
    config = get_config()
    try:
        return KeyColorConfig.from_hex(
            key_color or config.key_color,
            tolerance=config.tolerance if tolerance is None else tolerance,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


def _payload_bytes(data: str) -> bytes:
    try:
        return decode_payload(data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


# Pydantic schemas
class SaveAssetRequest(BaseModel):
    """Request to persist one encoded asset."""
    filename: str
    data: str  # base64, optionally a data: URL


class SaveAssetResponse(BaseModel):
    success: bool
    path: str
    size: int


class SaveAssetsRequest(BaseModel):
    assets: list[SaveAssetRequest]


class SaveAssetResult(BaseModel):
    filename: str
    success: bool = False
    size: Optional[int] = None
    error: Optional[str] = None


class SaveAssetsResponse(BaseModel):
    success: bool
    results: list[SaveAssetResult]


class ProcessRequest(BaseModel):
    """Request to post-process a generated asset."""
    asset_key: str
    data: str
    theme: Optional[str] = None
    description: Optional[str] = None  # Free-text game description, used when theme is missing
    passes: Optional[int] = None
    key_color: Optional[str] = None
    tolerance: Optional[int] = None
    save: bool = False


class CleanRequest(BaseModel):
    """Request to re-run background removal on a processed asset."""
    data: str
    filename: Optional[str] = None  # Save under this name when given
    passes: Optional[int] = None
    key_color: Optional[str] = None
    tolerance: Optional[int] = None


class RecolorRequest(BaseModel):
    """Request to recolor the theme region of an existing asset."""
    asset_key: str
    data: Optional[str] = None  # Defaults to the stored asset file
    theme: Optional[str] = None
    save: bool = False


class ProcessResponse(BaseModel):
    data: str  # PNG data URL
    width: int
    height: int
    transparent_pixels: int = 0
    total_pixels: int
    recolored_pixels: int = 0
    theme: Optional[str] = None
    path: Optional[str] = None


class AssetInfo(BaseModel):
    key: str
    file: str
    width: int
    height: int
    frame_width: int
    frame_height: int
    kind: str
    total_frames: int
    usage: str
    recolor_region: Optional[list[int]] = None
    use_backup: bool = False


def _response(result: ProcessResult, path: Optional[str] = None, theme: Optional[str] = None) -> ProcessResponse:
    return ProcessResponse(
        data=encode_payload(result.data),
        width=result.width,
        height=result.height,
        transparent_pixels=result.removal.changed if result.removal else 0,
        total_pixels=result.width * result.height,
        recolored_pixels=result.recolored,
        theme=theme,
        path=path,
    )


def _save(filename: str, data: bytes) -> Path:
    try:
        return get_store().save(filename, data)
    except InvalidFilenameError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/health")
async def health() -> dict:
    """Health check."""
    return {"status": "ok"}


@router.get("/assets", response_model=list[AssetInfo])
async def list_assets() -> list[AssetInfo]:
    """List the asset catalog."""
    return [
        AssetInfo(
            key=spec.key,
            file=spec.file,
            width=spec.width,
            height=spec.height,
            frame_width=spec.frame_width,
            frame_height=spec.frame_height,
            kind=spec.kind,
            total_frames=spec.total_frames,
            usage=spec.usage,
            recolor_region=(
                [spec.recolor_region.x0, spec.recolor_region.y0, spec.recolor_region.x1, spec.recolor_region.y1]
                if spec.recolor_region else None
            ),
            use_backup=spec.use_backup,
        )
        for spec in ASSET_CATALOG.values()
    ]


@router.post("/save-asset", response_model=SaveAssetResponse)
async def save_asset(request: SaveAssetRequest) -> SaveAssetResponse:
    """Save one asset to the assets directory."""
    if not request.filename or not request.data:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Filename and data are required")

    path = _save(request.filename, _payload_bytes(request.data))
    return SaveAssetResponse(success=True, path=str(path), size=path.stat().st_size)


@router.post("/save-assets", response_model=SaveAssetsResponse)
async def save_assets(request: SaveAssetsRequest) -> SaveAssetsResponse:
    """Save several assets; each item succeeds or fails on its own."""
    store = get_store()
    results = []

    for asset in request.assets:
        if not asset.filename or not asset.data:
            results.append(SaveAssetResult(filename=asset.filename, error="Missing filename or data"))
            continue
        try:
            path = store.save(asset.filename, asset.data)
        except ValueError as e:
            results.append(SaveAssetResult(filename=asset.filename, error=str(e)))
            continue
        results.append(SaveAssetResult(filename=asset.filename, success=True, size=path.stat().st_size))

    return SaveAssetsResponse(success=True, results=results)


@router.post("/process", response_model=ProcessResponse)
async def process(request: ProcessRequest) -> ProcessResponse:
    """Resize, remove the key background and recolor a generated asset."""
    try:
        spec = get_asset_spec(request.asset_key)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    key = _key_config(request.key_color, request.tolerance)
    passes = request.passes or get_config().passes
    theme = request.theme or (extract_theme(request.description) if request.description else None)
    source = _payload_bytes(request.data)
    try:
        result = await run_in_threadpool(
            process_catalog_asset, spec.key, source, theme=theme, key=key, passes=passes
        )
    except SpriteKitError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))

    path = str(_save(spec.file, result.data)) if request.save else None
    return _response(result, path, theme)


@router.post("/clean", response_model=ProcessResponse)
async def clean(request: CleanRequest) -> ProcessResponse:
    """Remove leftover key pixels from an already-processed asset."""
    key = _key_config(request.key_color, request.tolerance)
    passes = request.passes or get_config().passes
    source = _payload_bytes(request.data)
    try:
        result = await run_in_threadpool(clean_asset, source, key=key, passes=passes)
    except SpriteKitError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))

    path = str(_save(request.filename, result.data)) if request.filename else None
    return _response(result, path)


@router.post("/recolor", response_model=ProcessResponse)
async def recolor(request: RecolorRequest) -> ProcessResponse:
    """Recolor the theme region of an asset (e.g. the shipped tileset)."""
    try:
        spec = get_asset_spec(request.asset_key)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    if spec.recolor_region is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Asset {spec.key} has no recolor region",
        )

    # Without data, recolor the copy already in the assets directory
    store = get_store()
    if request.data:
        source = _payload_bytes(request.data)
    elif store.exists(spec.file):
        source = store.load(spec.file)
    else:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No data given and {spec.file} is not in the assets directory",
        )

    region: RecolorRegion = spec.recolor_region
    try:
        result = await run_in_threadpool(recolor_asset, source, region, request.theme)
    except SpriteKitError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))

    path = str(_save(spec.file, result.data)) if request.save else None
    return _response(result, path, request.theme)
