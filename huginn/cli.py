"""huginn command line entry point."""

import argparse
import logging
import sys

from huginn import __version__
from huginn.canvas import DisplayMode, make_canvas
from huginn.compose import RenderOptions, compose
from huginn.config import Config, default_config_path, load_config, sanitize, save_config
from huginn.hooks import run_optional_hook
from huginn.logo import viu_blitter
from huginn.sysinfo import collect

logger = logging.getLogger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="huginn",
        description="A beautiful system information fetcher",
    )
    parser.add_argument("-c", "--challenge", action="store_true",
                        help="show the install-age challenge countdown in a box")
    parser.add_argument("--years", type=int, default=None,
                        help="number of years for the challenge (default from config: 2)")
    parser.add_argument("--months", type=int, default=None,
                        help="number of months for the challenge (default from config: 0)")
    parser.add_argument("--box", action="store_true",
                        help="draw the normal fetch inside a frame")
    parser.add_argument("--config", metavar="PATH", default=None,
                        help="read configuration from PATH")
    parser.add_argument("--generate-config", action="store_true",
                        help="write the default config file and exit")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="log debug output to stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def setup_logging(verbose):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def render_options(args, config):
    """Merge command line flags over the config file."""
    challenge = args.challenge or config.display.mode == "challenge"
    if args.years is not None:
        config.challenge.years = args.years
    if args.months is not None:
        config.challenge.months = args.months
    sanitize(config)
    options = RenderOptions(
        display=config.display,
        challenge=challenge,
        years=config.challenge.years,
        months=config.challenge.months,
        logo_width=config.logo.width,
        logo_height=config.logo.height,
        logo_path=config.logo.custom_path,
    )
    mode = DisplayMode.BOXED if (challenge or args.box) else DisplayMode.STREAM
    return mode, options


def generate_config(path=None):
    path = save_config(Config(), path or default_config_path())
    print(f"Generated default config at: {path}")
    return 0


def main(argv=None, out=None):
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    if args.generate_config:
        try:
            return generate_config(args.config)
        except OSError as e:
            logger.error("could not write config: %s", e)
            return 1

    config = load_config(args.config)
    mode, options = render_options(args, config)

    run_optional_hook("pre_fetch", config.scripts.pre_fetch)
    snapshot = collect(config.display)
    compose(make_canvas(mode, out), snapshot, options, blitter=viu_blitter)
    run_optional_hook("post_fetch", config.scripts.post_fetch)
    return 0


if __name__ == "__main__":
    sys.exit(main())
