"""CLI for rendering curve-driven motion blur exports."""

import argparse
import logging
from pathlib import Path

from tqdm import tqdm

from curveblur import RenderConfig, EditorState, RenderPipeline
from curveblur.codecs import ImageCodec, SessionCodec
from curveblur.logging_config import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render curve-driven motion blur for an image")
    parser.add_argument("image", type=Path, help="Input image")
    parser.add_argument("-o", "--output", type=Path, required=True, help="Output directory")
    parser.add_argument("-s", "--session", type=Path, help="Session YAML (path, rotation, radius, crop)")
    parser.add_argument("-c", "--config", type=Path, help="Render config YAML")
    parser.add_argument("--radius", type=int, help="Blur radius in display pixels")
    parser.add_argument("--rotation", type=float, help="Path rotation in degrees")
    parser.add_argument("--scales", type=float, nargs="+", help="Export scale factors")
    parser.add_argument("--preview", action="store_true", help="Also write the display-resolution preview")
    parser.add_argument("--save-session", type=Path, help="Write the effective session YAML here")
    parser.add_argument("--no-progress", action="store_true", help="Disable progress bar")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    cfg = RenderConfig.from_yaml(args.config) if args.config else RenderConfig()
    state = EditorState(cfg)
    state.load_image(ImageCodec.load(args.image))

    if args.session:
        SessionCodec.load(args.session, state)
    if args.radius is not None:
        state.set_blur_radius(args.radius)
    if args.rotation is not None:
        state.set_rotation(args.rotation)

    pipeline = RenderPipeline(cfg)
    stem = args.image.stem
    args.output.mkdir(parents=True, exist_ok=True)

    if args.preview:
        out = args.output / f"{stem}_preview.png"
        ImageCodec.save(out, pipeline.to_uint8(pipeline.render_preview(state)))
        logger.info("Preview -> %s", out)

    scales = args.scales or cfg.export_scales
    written = []
    for scale in tqdm(scales, desc="Exporting", disable=args.no_progress):
        blur = pipeline.render_export(state, scale)
        out = args.output / f"{stem}_blur_{scale:g}x.png"
        ImageCodec.save(out, pipeline.to_uint8(blur))
        written.append(out)

    if args.save_session:
        SessionCodec.save(args.save_session, state)

    print(f"Rendered {len(written)} export(s) -> {args.output}")
    for path in written:
        print(f"  {path.name}")
    return 0


if __name__ == "__main__":
    main()
