"""Plot the density of the complex zeroes of polynomials with restricted coefficients.

Usage:
    python plot_zeroes.py [options] [--] <xmin> <xmax> <ymin> <ymax> <xres> <coeff> ... <coeff> - <degree> ... <degree>

Example (Littlewood polynomials of degree 10 to 14):
    python plot_zeroes.py -o littlewood.ppm --preview littlewood.png -2 2 -1.5 1.5 800 1 -1 - 10 11 12 13 14
"""

import os
import sys
import warnings
from dataclasses import dataclass
from pathlib import Path
from typing import Any

_VERBOSE_FLAGS = {"--verbose", "-v"}
_cli_verbose = any(arg in _VERBOSE_FLAGS for arg in sys.argv[1:])
_env_log_level = os.environ.get("TF_CPP_MIN_LOG_LEVEL")
_suppress_messages = (not _cli_verbose) and _env_log_level != "0"

if _suppress_messages and _env_log_level is None:
    os.environ["TF_CPP_MIN_LOG_LEVEL"] = "3"

if _suppress_messages:
    warnings.filterwarnings(
        "ignore",
        message=r"Protobuf gencode version .* is exactly one major version older than the runtime version .*",
        category=UserWarning,
        module="google.protobuf",
    )

VERBOSE = _cli_verbose


def log(message, *args, **kwargs):
    if VERBOSE:
        print(message, *args, file=sys.stderr, **kwargs)


import numpy as np
import PIL.Image
import imageio

from zeroes import (
    EPSILON,
    REAL_CUTOFF,
    Histogram,
    NumpySolver,
    Window,
    get_colormap,
    render,
    report_progress,
    to_preview,
    write_ppm,
)

from argparse import ArgumentParser

USAGE = ("%(prog)s [options] [--] <xmin> <xmax> <ymin> <ymax> <xres> <coeff> ... <coeff> - <degree> ... <degree>\n"
         "  (put '--' before the numbers when one of them is written like -1e-3)")
SEPARATOR = "-"
SOLVERS = ("numpy", "tensorflow")


@dataclass
class OutputConfig:
    image_path: Path | None
    preview_path: Path | None
    gif_path: Path | None
    image_format: str


@dataclass(frozen=True)
class PlotArguments:
    window: Window
    coefficients: tuple[float, ...]
    degrees: tuple[int, ...]


def build_parser():
    parser = ArgumentParser(usage=USAGE, description="Render the density of the zeroes of every polynomial "
                            "whose coefficients are drawn from a fixed set, as a 16-bit PPM image.")

    parser.add_argument('values', nargs='+', metavar='ARG',
                        help='window bounds, width in pixels, coefficients, a lone "-" and the degrees; '
                             'negative numbers in exponent form such as -1e-3 must follow "--"')

    parser.add_argument('-o', '--output', type=str,
                        dest='output', help='file to write the PPM image to (default: standard output)',
                        metavar='OUTPUT')

    parser.add_argument('--solver', choices=SOLVERS, default='numpy',
                        help='root solver: numpy companion matrix or TensorFlow eigenvalues on the GPU when available')

    parser.add_argument('--epsilon', type=float, default=EPSILON,
                        help='zeroes with |imaginary part| below this are treated as real; '
                             'leading coefficients with |value| at most this are treated as zero')

    parser.add_argument('--real-cutoff', type=float, default=REAL_CUTOFF, dest='real_cutoff',
                        help='real zeroes farther than this from the origin are not plotted')

    parser.add_argument('--preview', type=str, dest='preview',
                        help='also write an 8-bit colour preview image to this path', metavar='PREVIEW')

    parser.add_argument('--gif', type=str, dest='gif',
                        help='also write an animated GIF with one cumulative frame per degree', metavar='GIF')

    parser.add_argument('--colormap', type=str,
                        dest='colormap', help='matplotlib colormap for previews (e.g. "viridis", "inferno")',
                        metavar='COLORMAP', default='inferno')

    parser.add_argument('--invert', action='store_true', help='Invert the selected colormap.')

    parser.add_argument('--format', type=str,
                        dest='format', help='file format for the preview. Can be any extension supported by Pillow. Default: "png".',
                        metavar='FORMAT', default='png')

    parser.add_argument('-q', '--quiet', action='store_true', help='Do not report progress per degree.')

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose logging, including TensorFlow and hardware diagnostics.')

    return parser


def _parse_number(text: str, kind, what: str, parser: ArgumentParser):
    try:
        return kind(text)
    except ValueError:
        parser.error(f"invalid {what}: {text!r}")


def parse_plot_arguments(values: list[str], parser: ArgumentParser) -> PlotArguments:
    """Split the positional arguments into window, coefficients and degrees."""

    if len(values) < 8:
        parser.error("too few arguments")

    xmin, xmax, ymin, ymax = (_parse_number(v, float, "window bound", parser) for v in values[:4])
    xres = _parse_number(values[4], int, "width", parser)

    rest = values[5:]
    if SEPARATOR not in rest:
        parser.error(f"expected a lone '{SEPARATOR}' between the coefficients and the degrees")
    split = rest.index(SEPARATOR)

    coefficients = tuple(_parse_number(v, float, "coefficient", parser) for v in rest[:split])
    if not coefficients:
        parser.error("specify at least one coefficient")

    degrees = tuple(_parse_number(v, int, "degree", parser) for v in rest[split + 1:])
    if not degrees:
        parser.error("specify at least one degree")
    for d in degrees:
        if d < 0:
            parser.error(f"degrees must not be negative, got {d}")

    try:
        window = Window(xmin=xmin, xmax=xmax, ymin=ymin, ymax=ymax, xres=xres)
    except ValueError as exc:
        parser.error(str(exc))

    return PlotArguments(window=window, coefficients=coefficients, degrees=degrees)


def resolve_output_config(opt, parser: ArgumentParser) -> OutputConfig:
    image_format = (getattr(opt, "format", "png") or "png").lower().lstrip(".")
    if not image_format:
        image_format = "png"

    image_path: Path | None = None
    if opt.output:
        image_path = Path(opt.output).expanduser()
        if image_path.exists() and image_path.is_dir():
            parser.error("--output must point to a file, not a directory.")
        image_path = image_path.resolve()
    elif sys.stdout.isatty():
        parser.error("refusing to write a binary image to a terminal; use --output or redirect standard output.")

    preview_path: Path | None = None
    if opt.preview:
        preview_path = Path(opt.preview).expanduser()
        expected_suffix = f".{image_format}"
        if preview_path.suffix:
            if preview_path.suffix.lower() != expected_suffix.lower():
                parser.error(f"--preview extension {preview_path.suffix} does not match --format {image_format}.")
        else:
            preview_path = preview_path.with_suffix(expected_suffix)
        preview_path = preview_path.resolve()

    gif_path: Path | None = None
    if opt.gif:
        gif_path = Path(opt.gif).expanduser()
        if gif_path.suffix:
            if gif_path.suffix.lower() != ".gif":
                parser.error("GIF outputs must end with .gif.")
        else:
            gif_path = gif_path.with_suffix(".gif")
        gif_path = gif_path.resolve()

    return OutputConfig(
        image_path=image_path,
        preview_path=preview_path,
        gif_path=gif_path,
        image_format=image_format,
    )


def _pil_format_name(ext: str) -> str:
    upper = ext.upper()
    if upper == "JPG":
        return "JPEG"
    if upper == "TIF":
        return "TIFF"
    return upper


def write_single_image(image: PIL.Image.Image, output_path: Path, image_format: str) -> None:
    """Write a single image to ``output_path`` using the provided format."""

    pil_format = _pil_format_name(image_format)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    image.save(str(output_path), format=pil_format)


def write_gif(writer: Any, frame_array: np.ndarray) -> None:
    """Append ``frame_array`` to an active GIF writer."""

    writer.append_data(frame_array)


@dataclass
class OutputWriters:
    config: OutputConfig
    cmap: Any
    invert: bool

    def __post_init__(self) -> None:
        self._gif_writer = None
        if self.config.gif_path is not None:
            self.config.gif_path.parent.mkdir(parents=True, exist_ok=True)
            self._gif_writer = imageio.get_writer(str(self.config.gif_path), mode='I', duration=0.5, loop=0)

    def on_degree(self, degree: int, histogram: Histogram) -> None:
        if self._gif_writer is not None:
            log("Appending GIF frame for degree %d" % degree)
            write_gif(self._gif_writer, to_preview(histogram, self.cmap, invert=self.invert))

    def finalize(self, histogram: Histogram) -> None:
        if self.config.preview_path is not None:
            preview = PIL.Image.fromarray(to_preview(histogram, self.cmap, invert=self.invert))
            write_single_image(preview, self.config.preview_path, self.config.image_format)
            log("Preview written to %s" % self.config.preview_path)

    def close(self) -> None:
        if self._gif_writer is not None:
            self._gif_writer.close()
            self._gif_writer = None


def make_solver(name: str):
    if name == "tensorflow":
        import tensorflow as tf

        if _suppress_messages:
            tf.get_logger().setLevel("ERROR")
        from zeroes.tf_solver import TensorFlowSolver, select_device

        log("TensorFlow version: %s" % tf.__version__)
        return TensorFlowSolver(device=select_device(log))
    return NumpySolver()


def main(argv=None):
    parser = build_parser()
    opt = parser.parse_args(argv)

    global VERBOSE
    VERBOSE = bool(opt.verbose)

    plot = parse_plot_arguments(opt.values, parser)
    output_config = resolve_output_config(opt, parser)
    cmap = get_colormap(opt.colormap)

    window = plot.window
    log("Window [%g, %g] x [%g, %g], image %d x %d" % (
        window.xmin, window.xmax, window.ymin, window.ymax, window.xres, window.yres))

    solver = make_solver(opt.solver)
    log("Using the %s solver" % solver.name)

    writers = OutputWriters(output_config, cmap=cmap, invert=bool(opt.invert))
    try:
        result = render(
            window,
            plot.coefficients,
            plot.degrees,
            solver,
            epsilon=opt.epsilon,
            real_cutoff=opt.real_cutoff,
            progress=None if opt.quiet else report_progress,
            on_degree=writers.on_degree,
        )
    finally:
        writers.close()

    stats = result.stats
    log("%d polynomials, %d skipped, %d solver failures, %d of %d zeroes plotted, max_count=%d" % (
        stats.enumerated, stats.skipped, stats.failures, stats.recorded, stats.roots, result.histogram.max_count))

    if output_config.image_path is not None:
        output_config.image_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_config.image_path, "wb") as stream:
            write_ppm(stream, result.histogram, plot.coefficients, plot.degrees)
    else:
        write_ppm(sys.stdout.buffer, result.histogram, plot.coefficients, plot.degrees)

    writers.finalize(result.histogram)
    return 0


if __name__ == '__main__':
    sys.exit(main())
