import argparse
import json
import logging
import os
import sys
import time
from typing import List, Optional

from ..config_loader import load_config
from ..core import FrstError
from ..pipeline import detect_centers, setup_logging
from ..utils import (load_grayscale, save_image, save_npy, save_metadata, ensure_dir_exists,
                     draw_centers)
from .. import __version__


def create_parser() -> argparse.ArgumentParser:
    """Creates the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="frst",
        description=f"Fast Radial Symmetry Transform v{__version__}. Detect blob-like points of interest in an image.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    parser.add_argument(
        "image",
        type=str,
        help="Path to the input image. Color images are converted to grayscale."
    )

    parser.add_argument(
        "-c", "--config",
        type=str,
        help="Path to the JSON configuration file. If not provided, default settings are used.",
        default=None
    )

    parser.add_argument(
        "-o", "--output-dir",
        type=str,
        help="Directory to save the results. Overrides 'output_dir' in the config file.",
        default=None
    )

    parser.add_argument(
        "-r", "--radius",
        type=int,
        help="Projection radius in pixels. Overrides 'transform.radius'.",
        default=None
    )

    parser.add_argument(
        "-a", "--alpha",
        type=float,
        help="Radial strictness exponent (>= 1). Overrides 'transform.alpha'.",
        default=None
    )

    parser.add_argument(
        "--std-factor",
        type=float,
        help="Gaussian sigma as a fraction of the radius. Overrides 'transform.std_factor'.",
        default=None
    )

    parser.add_argument(
        "-m", "--mode",
        type=str,
        choices=["bright", "dark", "both"],
        help="Symmetry polarity. Overrides 'transform.mode'.",
        default=None
    )

    parser.add_argument(
        "--workers",
        type=int,
        help="Row bands used for vote accumulation. Overrides 'workers'.",
        default=None
    )

    parser.add_argument(
        "--log-file",
        type=str,
        help="Also write a DEBUG level log to this file.",
        default=None
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show DEBUG messages on the console."
    )

    parser.add_argument(
        "--show-config",
        action="store_true",
        help="Show the final configuration (after loading and overrides) and exit."
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    return parser


def apply_overrides(config: dict, args: argparse.Namespace) -> dict:
    """Copies explicitly given CLI options into the configuration."""
    transform_conf = config.setdefault('transform', {})
    if args.radius is not None:
        transform_conf['radius'] = args.radius
    if args.alpha is not None:
        transform_conf['alpha'] = args.alpha
    if args.std_factor is not None:
        transform_conf['std_factor'] = args.std_factor
    if args.mode is not None:
        transform_conf['mode'] = args.mode
    if args.workers is not None:
        config['workers'] = args.workers
    if args.output_dir is not None:
        config['output_dir'] = args.output_dir
    return config


def save_results(result, image, image_path: str, config: dict) -> dict:
    """Writes the enabled outputs and returns {name: path}."""
    output_dir = config.get('output_dir', './output')
    output_opts = config.get('output_options', {})
    ext = output_opts.get('image_format', 'png').lstrip('.')
    stem = os.path.splitext(os.path.basename(image_path))[0]
    ensure_dir_exists(output_dir)

    def path_for(suffix: str, extension: str = ext) -> str:
        return os.path.join(output_dir, f"{stem}_{suffix}.{extension}")

    paths = {}
    if output_opts.get('save_score_npy', True):
        paths['score'] = path_for("score", "npy")
        save_npy(result.score, paths['score'])
    if output_opts.get('save_normalized', True):
        paths['normalized'] = path_for("frst")
        save_image(result.normalized, paths['normalized'])
    if output_opts.get('save_binary', True):
        paths['binary'] = path_for("binary")
        save_image(result.binary, paths['binary'])
    if output_opts.get('save_markers', True):
        paths['markers'] = path_for("markers")
        save_image(result.markers, paths['markers'])
    if output_opts.get('save_overlay', True):
        overlay_conf = config.get('overlay', {})
        overlay = draw_centers(image, result.centers,
                               radius=int(overlay_conf.get('marker_radius', 2)),
                               color=tuple(overlay_conf.get('marker_color', (0, 255, 0))))
        paths['overlay'] = path_for("overlay")
        save_image(overlay, paths['overlay'])
    if output_opts.get('save_metadata', True):
        paths['metadata'] = path_for("meta", "json")
        metadata = dict(result.metadata, source_image=os.path.abspath(image_path), outputs=paths)
        save_metadata(metadata, paths['metadata'])
    return paths


def run_cli(argv: Optional[List[str]] = None) -> int:
    """Parses arguments, runs the detection chain and saves the outputs."""
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING, args.log_file)

    try:
        config = apply_overrides(load_config(args.config), args)

        if args.show_config:
            print("--- Configuration ---")
            print(json.dumps(config, indent=4, default=str))
            print("---------------------")
            return 0

        print(f"Processing {args.image}")
        print(f"Using Config: {args.config or 'Defaults'}")
        start_time = time.time()

        image = load_grayscale(args.image)
        result = detect_centers(image, config)
        result.output_paths = save_results(result, image, args.image, config)

        print(f"Found {len(result.centers)} centers:")
        for x, y in result.centers:
            print(f"  ({x:.1f}, {y:.1f})")
        print(f"Total time: {time.time() - start_time:.2f} seconds.")
        print(f"Results saved to: {os.path.abspath(config['output_dir'])}")
        return 0

    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
    except json.JSONDecodeError as e:
        print(f"Error reading config file: {e}", file=sys.stderr)
    except FrstError as e:
        print(f"Error: {e}", file=sys.stderr)
    except ValueError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
    return 1
