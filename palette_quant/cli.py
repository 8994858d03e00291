"""Command-line interface for palette extraction."""
from __future__ import annotations

import argparse
import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Sequence

from PIL import Image

from .color_map import PaletteEntry
from .errors import PaletteError
from .palette_io import write_act_palette
from .sampling import Area
from .thief import get_palette


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PaletteOptions:
    color_count: int = 10
    quality: int = 10
    area: Area | None = None
    with_metrics: bool = False
    output_format: str = "text"  # text|hex|json
    act_path: Path | None = None


def _setup_debug_logging() -> None:
    if not os.environ.get("PALETTE_QUANT_DEBUG"):
        return
    root_logger = logging.getLogger()
    log_path = Path(os.environ.get("PALETTE_QUANT_DEBUG_LOG", "palette_quant_debug.log"))
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers = [h for h in root_logger.handlers if not isinstance(h, logging.FileHandler)]
    root_logger.addHandler(handler)
    root_logger.info("palette_quant debug logging enabled at %s", log_path)


def parse_area(value: str) -> Area:
    parts = [part.strip() for part in value.split(",")]
    if len(parts) not in (2, 4):
        raise argparse.ArgumentTypeError("Expected X,Y or X,Y,W,H")
    try:
        numbers = [int(part) for part in parts]
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Area values must be integers: {value}") from exc
    if len(numbers) == 2:
        return Area(x=numbers[0], y=numbers[1])
    return Area(x=numbers[0], y=numbers[1], width=numbers[2], height=numbers[3])


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Extract a color palette from images")
    parser.add_argument("inputs", nargs="+", type=Path, help="Input files or folders")
    parser.add_argument("--colors", type=int, default=10, help="Palette size (2-256, approximate)")
    parser.add_argument(
        "--quality",
        type=int,
        default=10,
        help="Sample every Nth pixel; 1 reads every pixel",
    )
    parser.add_argument(
        "--area",
        type=parse_area,
        default=None,
        help="Restrict sampling to X,Y[,W,H]",
    )
    parser.add_argument(
        "--metrics", action="store_true", help="Include pixel count, box volume and ratio"
    )
    parser.add_argument(
        "--format",
        choices=("text", "hex", "json"),
        default="text",
        help="Output format",
    )
    parser.add_argument(
        "--recursive", action="store_true", help="Descend into subfolders"
    )
    parser.add_argument(
        "--act",
        type=Path,
        default=None,
        help="Write the palette of the last input as an ACT file",
    )
    return parser


def _is_image_file(path: Path) -> bool:
    return path.suffix.lower() in Image.registered_extensions()


def _expand_inputs(inputs: Iterable[Path], recursive: bool) -> List[Path]:
    files: List[Path] = []
    for path in inputs:
        if path.is_file():
            files.append(path)
        elif path.is_dir():
            candidates = path.rglob("*") if recursive else path.glob("*")
            files.extend(sorted(p for p in candidates if p.is_file() and _is_image_file(p)))
        else:
            raise FileNotFoundError(path)
    return files


def format_palette(path: Path, palette: Sequence[PaletteEntry], output_format: str) -> str:
    if output_format == "hex":
        return "\n".join(entry.hex for entry in palette)
    if output_format == "json":
        payload = {
            "path": str(path),
            "palette": [
                {
                    "color": list(entry.color),
                    "hex": entry.hex,
                    **(
                        {"count": entry.count, "volume": entry.volume, "ratio": entry.ratio}
                        if entry.count is not None
                        else {}
                    ),
                }
                for entry in palette
            ],
        }
        return json.dumps(payload)
    lines = [f"{path}:"]
    for entry in palette:
        line = f"  {entry.hex} rgb{entry.color}"
        if entry.count is not None:
            line += f" count={entry.count} volume={entry.volume} ratio={entry.ratio:.4f}"
        lines.append(line)
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    _setup_debug_logging()
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        input_files = _expand_inputs(args.inputs, args.recursive)
    except FileNotFoundError as exc:
        parser.error(f"Input path not found: {exc}")

    if not input_files:
        parser.error("No image files found")

    options = PaletteOptions(
        color_count=args.colors,
        quality=args.quality,
        area=args.area,
        with_metrics=args.metrics,
        output_format=args.format,
        act_path=args.act,
    )

    successes = 0
    failures = 0
    last_palette: List[PaletteEntry] = []
    for file_path in input_files:
        try:
            palette = get_palette(
                file_path,
                color_count=options.color_count,
                quality=options.quality,
                area=options.area,
                with_metrics=options.with_metrics,
            )
        except (PaletteError, OSError) as exc:
            failures += 1
            logger.debug("Palette extraction failed path=%s", file_path, exc_info=True)
            print(f"[FAIL] {file_path}: {exc}")
            continue
        successes += 1
        last_palette = palette
        print(format_palette(file_path, palette, options.output_format))

    if options.act_path is not None and last_palette:
        write_act_palette(options.act_path, [entry.color for entry in last_palette])
        logger.debug("Wrote ACT palette path=%s colors=%s", options.act_path, len(last_palette))

    if options.output_format == "text":
        print(f"Completed {successes} file(s), {failures} failure(s).")
    return 0 if failures == 0 else 1


if __name__ == "__main__":
    raise SystemExit(main())
