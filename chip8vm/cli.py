"""Command-line entry point."""

import argparse
import sys

from chip8vm.constants import DEF_SCALE, EMULATION_IPS, SCREEN_WIDTH, SCREEN_HEIGHT
from chip8vm.errors import Chip8Error
from chip8vm.logging import get_logger
from chip8vm.rendering import COLOR_SCHEMES


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chip8vm", description="Simple CHIP-8 emulator")
    parser.add_argument("rom_path", help="Path to ROM file")
    parser.add_argument(
        "-s", "--scale", type=positive_int, default=DEF_SCALE,
        help=f"Positive integer for screen scale, default {DEF_SCALE} for resolution "
             f"{SCREEN_WIDTH * DEF_SCALE} x {SCREEN_HEIGHT * DEF_SCALE}",
    )
    parser.add_argument(
        "-i", "--emulation-ips", type=positive_int, default=EMULATION_IPS,
        help=f"Number of instructions per second for emulation, default {EMULATION_IPS}",
    )
    parser.add_argument("-d", "--debug", action="store_true", help="Trace every instruction and show registers")
    parser.add_argument("--color-scheme", choices=sorted(COLOR_SCHEMES), default="classic")
    parser.add_argument("--seed", type=int, default=0, help="Seed for the CXNN random source")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logger = get_logger(debug=args.debug)

    # Imported late so --help works without a display.
    from chip8vm.host import Emulator

    try:
        emulator = Emulator(
            "CHIP-8 Emulation",
            args.rom_path,
            scale=args.scale,
            instructions_per_second=args.emulation_ips,
            debug=args.debug,
            color_scheme=args.color_scheme,
            seed=args.seed,
        )
        emulator.emulate()
    except Chip8Error as e:
        logger.critical(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
