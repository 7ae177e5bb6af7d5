import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

import matplotlib

from geoscene import (
    DragLock,
    RenderOptions,
    SceneView,
    find_embedded_blocks,
    print_scene,
)

logger = logging.getLogger(__name__)

RAW_SUFFIXES = {'.geo', '.geometry', '.txt'}


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def _load_blocks(path: Path) -> List[str]:
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in RAW_SUFFIXES:
        return [text]
    return find_embedded_blocks(text)


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Render geometry diagrams")
    parser.add_argument(
        "path",
        help="Markdown file with ```geometry blocks, or a raw .geo file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--output-dir",
        help="Write one PNG per block to this directory",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Open interactive windows with draggable points ('l' toggles the drag lock)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on the first line that does not parse or resolve",
    )
    parser.add_argument(
        "--resolve-dependencies",
        action="store_true",
        help="Derive midpoints before drawing so shapes built on them are shown",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)
    if not args.show:
        matplotlib.use("Agg")

    path = Path(args.path)
    logger.info("Reading geometry from %s", path)
    blocks = _load_blocks(path)
    if not blocks:
        logger.error("No geometry blocks found in %s", path)
        raise SystemExit(1)

    lock = DragLock()
    options = RenderOptions(resolve_dependencies=args.resolve_dependencies)
    views = []
    for idx, block in enumerate(blocks):
        view = SceneView(block, lock=lock, options=options, strict=args.strict)
        logger.info("Block %d: %d entities\n%s", idx, len(view.scene), print_scene(view.scene))
        views.append(view)

    if args.output_dir:
        out_dir = Path(args.output_dir)
        out_dir.mkdir(parents=True, exist_ok=True)
        for idx, view in enumerate(views):
            out_path = out_dir / f"{path.stem}-{idx}.png"
            view.save(out_path)
            print(f"Block {idx} written to {out_path}")

    if args.show:
        import matplotlib.pyplot as plt

        for view in views:
            view.enable_drag()
        plt.show()

    for view in views:
        view.close()


if __name__ == "__main__":
    main(sys.argv[1:])
