import os
import sys
import warnings
from argparse import ArgumentParser, ArgumentTypeError, RawDescriptionHelpFormatter
from pathlib import Path
from time import time

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
        print(message, *args, **kwargs)


import tensorflow as tf

if _suppress_messages:
    try:
        tf.get_logger().setLevel("ERROR")
        for handler in tf.get_logger().handlers:
            handler.setLevel("ERROR")
    except Exception:
        pass

from fractal import Julia, Mandelbrot, RenderParameters, render_frame, write_ppm

OUTPUT_FILE = "fractal.ppm"

EXAMPLES = """\
examples:
  fractal -o=1920,1080
      a 1920x1080 image of the Mandelbrot set
  fractal -o=500,500 -j=-0.3,0.7
      a 500x500 image of the degree-2 Julia set for c = -0.3+0.7i
  fractal -o=500,500 -d=4
      a 500x500 image of the degree-4 Mandelbrot set
  fractal -o=800,600 -j=-0.3,0.7 -m=1.6,1.2
      a Julia set over the region -1.6-1.2i .. 1.6+1.2i
"""


def select_device():
    gpus = tf.config.list_physical_devices('GPU')
    if gpus:
        try:
            for gpu in gpus:
                tf.config.experimental.set_memory_growth(gpu, True)
            log("GPU found, using %s" % gpus[0].name)
            return '/GPU:0'
        except RuntimeError as e:
            if VERBOSE:
                print(e)
            return '/CPU:0'
    log("No GPU found, using CPU")
    return '/CPU:0'


def _numbers(text, convert, name):
    try:
        return tuple(convert(part) for part in text.split(','))
    except ValueError as exc:
        raise ArgumentTypeError(f"malformed {name} '{text}'") from exc


def parse_dimensions(text):
    values = _numbers(text, int, "dimensions")
    if len(values) != 2:
        raise ArgumentTypeError(f"dimensions must be given as w,h, got '{text}'")
    return values


def parse_coordinate(text):
    values = _numbers(text, float, "coordinate")
    if len(values) != 2:
        raise ArgumentTypeError(f"coordinate must be given as re,im, got '{text}'")
    return complex(*values)


def parse_region(text):
    values = _numbers(text, float, "region")
    if len(values) == 2:
        x, y = values
        return complex(x, y), complex(-x, -y)
    if len(values) == 4:
        x, y, a, b = values
        return complex(x, y), complex(a, b)
    raise ArgumentTypeError(f"region must be given as x,y or x,y,a,b, got '{text}'")


class FractalArgumentParser(ArgumentParser):
    """Argument parser that exits with status 1 on invalid input."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser():
    parser = FractalArgumentParser(
        prog='fractal',
        description='Render a Mandelbrot or Julia set of arbitrary degree to %s.' % OUTPUT_FILE,
        epilog=EXAMPLES,
        formatter_class=RawDescriptionHelpFormatter,
    )

    parser.add_argument('-o', type=parse_dimensions, required=True,
                        dest='dimensions', help='dimensions of the output image in pixels',
                        metavar='W,H')

    parser.add_argument('-d', type=int,
                        dest='degree', help='degree of the Mandelbrot/Julia set, at least 2',
                        metavar='D', default=2)

    parser.add_argument('-j', type=parse_coordinate,
                        dest='julia', help='render the Julia set for the constant RE+IMi instead of the Mandelbrot set; write negative values as -j=-0.3,0.7',
                        metavar='RE,IM', default=None)

    parser.add_argument('-m', type=parse_region,
                        dest='region', help='region maximum X+Yi and minimum A+Bi, the minimum defaults to -X-Yi; write negative values as -m=X,Y,-A,-B',
                        metavar='X,Y[,A,B]', default=None)

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='print progress and TensorFlow diagnostics')

    return parser


def resolve_parameters(opt, parser):
    width, height = opt.dimensions
    if width <= 0 or height <= 0:
        parser.error(f"dimensions must be positive, got {width},{height}")
    if opt.degree < 2:
        parser.error(f"degree must be at least 2, got {opt.degree}")

    kind = Julia(opt.julia) if opt.julia is not None else Mandelbrot()
    region = {}
    if opt.region is not None:
        region = {"max_corner": opt.region[0], "min_corner": opt.region[1]}

    try:
        return RenderParameters(width=width, height=height, degree=opt.degree, kind=kind, **region)
    except ValueError as exc:
        parser.error(str(exc))


def main(argv=None):
    parser = build_parser()
    args = sys.argv[1:] if argv is None else list(argv)

    if not args:
        parser.print_help()
        return 0

    opt, ignored = parser.parse_known_args(args)

    global VERBOSE
    VERBOSE = VERBOSE or bool(opt.verbose)

    log("TensorFlow version: %s" % tf.__version__)
    if ignored:
        log("Ignoring unrecognized arguments: %s" % " ".join(ignored))

    params = resolve_parameters(opt, parser)
    log("Rendering %dx%d %s of degree %d over %s .. %s" % (
        params.width, params.height, type(params.kind).__name__, params.degree,
        params.min_corner, params.max_corner))

    start_time = time()
    result = render_frame(params, device=select_device())
    log("Render completed in %.2f seconds" % (time() - start_time))

    output_path = write_ppm(Path(OUTPUT_FILE).resolve(), result.colors)
    log("Wrote %s" % output_path)
    return 0


if __name__ == '__main__':
    sys.exit(main())
