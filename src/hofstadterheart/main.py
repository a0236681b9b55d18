"""
Application Entry
=================
Runs the pipeline from the command line: compute the sequences, build the
point cloud, and optionally save it and/or open the viewer.

Usage:
    $ python -m hofstadterheart --n-max 10750 --step 1 --save heart.h5 --show
"""
import argparse
import logging
import sys
from typing import Optional, Sequence

from hofstadterheart import __version__
from hofstadterheart.config import PipelineConfig, DEFAULT_N_MAX, DEFAULT_STEP
from hofstadterheart.errors import HofstadterError
from hofstadterheart.logging_config import setup_logging
from hofstadterheart.pointcloud.generator import PointCloudGenerator

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hofstadterheart",
        description="Point cloud from Hofstadter's a(n) and Q(n) sequences.",
    )
    parser.add_argument("--n-max", type=int, default=DEFAULT_N_MAX, help="highest sequence index (default: %(default)s)")
    parser.add_argument("--step", type=int, default=DEFAULT_STEP, help="sampling stride (default: %(default)s)")
    parser.add_argument("--srgb", action="store_true", help="emit sRGB colors instead of linear RGB")
    parser.add_argument("--save", metavar="FILE", help="write the point cloud to an HDF5 file")
    parser.add_argument("--show", action="store_true", help="open the 3D viewer")
    parser.add_argument("--plot-sequences", action="store_true", help="plot a(n), Q(n) and their difference")
    parser.add_argument("--log-file", help="also write the log to this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def run(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    app_logger = setup_logging(level=logging.DEBUG if args.verbose else logging.INFO, log_file=args.log_file)
    app_logger.info(f"hofstadterheart {__version__}: n_max={args.n_max}, step={args.step}")

    try:
        config = PipelineConfig(n_max=args.n_max, step=args.step, linear_colors=not args.srgb).validate()
        generator = PointCloudGenerator(config)
        cloud = generator.generate()
    except HofstadterError as e:
        logger.error(str(e))
        return 1

    bounds = cloud.bounds
    logger.info(f"Bounds: min={bounds.min.to_tuple()}, max={bounds.max.to_tuple()}")
    logger.info(f"Center: {bounds.center.to_tuple()}, Size: {bounds.size.to_array().tolist()}")
    logger.info(f"Concordant fraction: {cloud.concordant_fraction:.3f}")

    if args.save:
        from hofstadterheart.model.io import PointCloudIO
        PointCloudIO.save(cloud, args.save, config)

    if args.plot_sequences:
        generator.sequences.build_tables(config.n_max).plot()

    if args.show:
        # pyvista pulls in VTK, only import it when a window is requested
        from hofstadterheart.view.viewer import PointCloudViewer
        PointCloudViewer(cloud).show()

    return 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
