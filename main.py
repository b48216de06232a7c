"""Run a ROM: ``python main.py path/to/game.ch8 [-s SCALE] [-i IPS] [-d]``."""

import sys

from chip8vm.cli import main

if __name__ == "__main__":
    sys.exit(main())
