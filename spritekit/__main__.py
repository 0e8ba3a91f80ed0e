"""
SpriteKit CLI

Command-line interface for the sprite post-processing pipeline:
1. process - Resize a generated sprite, remove the key background, recolor
2. clean   - Re-run background removal on an already-processed asset
3. recolor - Recolor the theme region of an existing asset
4. batch   - Process every catalog asset found in a directory
5. assets  - List the asset catalog
6. serve   - Run the asset HTTP server
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

from spritekit.catalog import ASSET_CATALOG, find_asset_by_file, get_asset_spec
from spritekit.config import SUPPORTED_INPUT_FORMATS, get_config
from spritekit.core.chroma import MAX_PASSES, KeyColorConfig
from spritekit.core.errors import SpriteKitError
from spritekit.core.resize import FitMode
from spritekit.core.themes import extract_theme, theme_description
from spritekit.pipeline import (
    AssetJob,
    clean_asset,
    process_asset,
    process_batch,
    process_catalog_asset,
    recolor_asset,
)


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _key_config(args) -> KeyColorConfig:
    config = get_config()
    return KeyColorConfig.from_hex(
        args.key_color or config.key_color,
        tolerance=config.tolerance if args.tolerance is None else args.tolerance,
        brightness_threshold=getattr(args, "brightness", None),
    )


def _passes(args) -> int:
    return args.passes or get_config().passes


def _theme(args) -> Optional[str]:
    """Explicit --theme, else a theme found in --description."""
    if args.theme:
        return args.theme
    if args.description:
        return extract_theme(args.description)
    return None


def _resolve_output(input_path: Path, output: Optional[str], filename: str) -> Path:
    """Output file: explicit file, file inside an output directory, or in place."""
    if output is None:
        return input_path
    output_path = Path(output)
    if output_path.suffix:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        return output_path
    output_path.mkdir(parents=True, exist_ok=True)
    return output_path / filename


def handle_process(args) -> None:
    """Process a generated sprite to its canonical size."""
    input_path = Path(args.input)
    source = input_path.read_bytes()
    key = _key_config(args)
    theme = _theme(args)

    if args.asset:
        spec = get_asset_spec(args.asset)
        result = process_catalog_asset(
            spec.key,
            source,
            theme=theme,
            key=key,
            passes=_passes(args),
            fit_mode=FitMode(args.fit),
        )
        filename = spec.file
    else:
        if not args.size:
            raise ValueError("Either --asset or --size is required")
        width, height = args.size
        result = process_asset(source, width, height, key=key, passes=_passes(args), fit_mode=FitMode(args.fit))
        filename = input_path.name

    output_file = _resolve_output(input_path, args.output, filename)
    output_file.write_bytes(result.data)
    print(f"Saved: {output_file} ({result.width}x{result.height})")
    if result.removal:
        print(
            f"  Made {result.removal.changed} background pixels transparent "
            f"({round(result.removal.ratio * 100)}%)"
        )
    if result.recolored:
        print(f"  Recolored {result.recolored} pixels for theme '{theme}' ({theme_description(theme)})")


def handle_clean(args) -> None:
    """Remove leftover key pixels from a processed asset."""
    input_path = Path(args.input)
    result = clean_asset(input_path.read_bytes(), key=_key_config(args), passes=_passes(args))

    output_file = _resolve_output(input_path, args.output, input_path.name)
    output_file.write_bytes(result.data)
    print(f"Saved: {output_file}")
    print(f"  Cleaned {result.removal.changed} key pixels")


def handle_recolor(args) -> None:
    """Recolor the theme region of an asset."""
    spec = get_asset_spec(args.asset)
    if spec.recolor_region is None:
        raise ValueError(f"Asset {spec.key} has no recolor region")

    input_path = Path(args.input)
    result = recolor_asset(input_path.read_bytes(), spec.recolor_region, args.theme)

    output_file = _resolve_output(input_path, args.output, spec.file)
    output_file.write_bytes(result.data)
    print(f"Saved: {output_file}")
    print(f"  Recolored {result.recolored} pixels for theme '{args.theme}' ({theme_description(args.theme)})")


def handle_batch(args) -> int:
    """Process every catalog asset in a directory."""
    input_dir = Path(args.input)
    output_dir = Path(args.output)
    output_dir.mkdir(parents=True, exist_ok=True)

    theme = _theme(args)
    if theme:
        print(f"Theme: {theme} ({theme_description(theme)})")

    jobs = []
    for input_file in sorted(input_dir.iterdir()):
        if input_file.suffix.lower() not in SUPPORTED_INPUT_FORMATS:
            continue
        spec = find_asset_by_file(input_file.name) or find_asset_by_file(input_file.stem)
        if spec is None:
            print(f"Skipping: {input_file.name} (not in catalog)")
            continue
        if spec.use_backup and not args.include_backup:
            print(f"Skipping: {input_file.name} (shipped asset)")
            continue
        jobs.append(AssetJob(spec.key, input_file.read_bytes(), theme=theme))

    print(f"Processing {len(jobs)} assets...")
    report = asyncio.run(
        process_batch(
            jobs,
            max_workers=args.workers or get_config().max_workers,
            key=_key_config(args),
            passes=_passes(args),
        )
    )

    for asset_key, result in report.results.items():
        output_file = output_dir / ASSET_CATALOG[asset_key].file
        output_file.write_bytes(result.data)
        print(f"  -> {output_file}")
    for asset_key, error in report.failures.items():
        print(f"  FAILED {asset_key}: {error}")

    print(f"\nDone! {len(report.results)} processed, {len(report.failures)} failed")
    return 1 if report.failures else 0


def handle_assets(args) -> None:
    """Print the asset catalog."""
    for spec in ASSET_CATALOG.values():
        line = f"{spec.key:<16} {spec.file:<20} {spec.width}x{spec.height}"
        if spec.total_frames > 1:
            line += f"  ({spec.columns}x{spec.rows} frames of {spec.frame_width}x{spec.frame_height})"
        if spec.recolor_region:
            region = spec.recolor_region
            line += f"  recolor ({region.x0},{region.y0})-({region.x1},{region.y1})"
        print(line)


def handle_serve(args) -> None:
    """Run the asset server."""
    from spritekit.api.main import run_api

    config = get_config()
    run_api(host=args.host or config.host, port=args.port or config.port, reload=args.reload)


def _add_key_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--key-color", type=str, help="Background key color (hex, default: #FF00FF)")
    parser.add_argument("--tolerance", type=int, help="Per-channel key color tolerance (default: 30)")
    parser.add_argument(
        "--passes",
        type=int,
        choices=range(1, MAX_PASSES + 1),
        help="Background removal passes (default: 4)",
    )
    parser.add_argument(
        "--brightness",
        type=int,
        help="Also remove light pixels brighter than this (0-255)",
    )


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="spritekit",
        description="SpriteKit - Post-process generated pixel-art sprites",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Process a generated sprite to its canonical size
  python -m spritekit process ./raw/sword.png --asset sword -o ./assets/images/

  # Process with a theme (recolors the tileset grass)
  python -m spritekit process ./raw/tiles.png --asset tiles --theme horror -o ./out/

  # Pick the theme from a game description
  python -m spritekit process ./raw/tiles.png --asset tiles --description "A zombie survival game" -o ./out/

  # Clean leftover key pixels in place
  python -m spritekit clean ./assets/images/potions.png

  # Process a whole directory
  python -m spritekit batch ./raw/ -o ./assets/images/ --theme cyberpunk
        """,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # Process command
    process_parser = subparsers.add_parser("process", help="Resize and remove background")
    process_parser.add_argument("input", type=str, help="Input image")
    process_parser.add_argument("--output", "-o", type=str, help="Output file or directory (default: in place)")
    process_parser.add_argument("--asset", type=str, choices=list(ASSET_CATALOG.keys()), help="Catalog asset key")
    process_parser.add_argument("--size", type=int, nargs=2, help="Target size (width height)")
    process_parser.add_argument("--theme", type=str, help="Theme keyword for recoloring")
    process_parser.add_argument("--description", type=str, help="Game description to pick a theme from")
    process_parser.add_argument(
        "--fit",
        choices=[mode.value for mode in FitMode],
        default=FitMode.CONTAIN.value,
        help="Fit mode (default: contain)",
    )
    _add_key_arguments(process_parser)

    # Clean command
    clean_parser = subparsers.add_parser("clean", help="Remove leftover key pixels")
    clean_parser.add_argument("input", type=str, help="Input image")
    clean_parser.add_argument("--output", "-o", type=str, help="Output file or directory (default: in place)")
    _add_key_arguments(clean_parser)

    # Recolor command
    recolor_parser = subparsers.add_parser("recolor", help="Recolor an asset's theme region")
    recolor_parser.add_argument("input", type=str, help="Input image")
    recolor_parser.add_argument("--asset", type=str, default="tiles", help="Catalog asset key (default: tiles)")
    recolor_parser.add_argument("--theme", type=str, required=True, help="Theme keyword")
    recolor_parser.add_argument("--output", "-o", type=str, help="Output file or directory (default: in place)")

    # Batch command
    batch_parser = subparsers.add_parser("batch", help="Process a directory of catalog assets")
    batch_parser.add_argument("input", type=str, help="Directory of generated images")
    batch_parser.add_argument("--output", "-o", type=str, required=True, help="Output directory")
    batch_parser.add_argument("--theme", type=str, help="Theme keyword for recoloring")
    batch_parser.add_argument("--description", type=str, help="Game description to pick a theme from")
    batch_parser.add_argument("--workers", type=int, help="Parallel workers")
    batch_parser.add_argument("--include-backup", action="store_true", help="Also process shipped assets")
    _add_key_arguments(batch_parser)

    # Assets command
    subparsers.add_parser("assets", help="List the asset catalog")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the asset server")
    serve_parser.add_argument("--host", type=str, help="Bind address (default: 127.0.0.1)")
    serve_parser.add_argument("--port", type=int, help="Port (default: 3002)")
    serve_parser.add_argument("--reload", action="store_true", help="Auto-reload on code changes")

    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    handlers = {
        "process": handle_process,
        "clean": handle_clean,
        "recolor": handle_recolor,
        "batch": handle_batch,
        "assets": handle_assets,
        "serve": handle_serve,
    }

    try:
        return handlers[args.command](args) or 0
    except (SpriteKitError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
