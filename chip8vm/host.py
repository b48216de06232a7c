"""Host driver loop composing the interpreter with pygame sinks."""

import time

import pygame

from chip8vm.constants import DEF_SCALE, EMULATION_IPS
from chip8vm.emulator import read_rom
from chip8vm.errors import KeyWaitCancelled
from chip8vm.interpreter import Interpreter
from chip8vm.keypad import CancellationToken
from chip8vm.logging import get_logger
from chip8vm.media import Beep, PygameKeypad, Screen


def nanos_time() -> int:
    return time.monotonic_ns()


class Emulator:
    """Runs a ROM in a window until the user quits."""

    def __init__(
        self,
        title: str,
        rom_path: str,
        scale: int = DEF_SCALE,
        instructions_per_second: int = EMULATION_IPS,
        debug: bool = False,
        color_scheme: str = "classic",
        seed: int = 0,
    ):
        self.logger = get_logger(debug=debug)
        rom = read_rom(rom_path)
        self.logger.info(f"Read {rom_path}")

        self.keypad = PygameKeypad()
        self.cancel = CancellationToken()
        self.chip8 = Interpreter(
            rom,
            instructions_per_second=instructions_per_second,
            start_time=nanos_time(),
            keypad=self.keypad,
            seed=seed,
            logger=self.logger,
            debug=debug,
        )

        pygame.mixer.pre_init(44100, -16, 1)
        pygame.init()
        try:
            self.screen = Screen(title, scale, color_scheme, show_debug=debug)
            self.beep = Beep(self.logger)
        except Exception:
            pygame.quit()
            raise
        self.screen.clear_screen()

    def _poll_events(self) -> bool:
        """Drain pending events; False once the user asked to quit."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                return False
        return True

    def emulate(self):
        """Main loop. Always releases the window and audio on exit."""
        try:
            while self._poll_events():
                try:
                    self.chip8.cycle(nanos_time(), self.cancel)
                except KeyWaitCancelled:
                    self.logger.info("Key wait cancelled, shutting down")
                    break

                if self.chip8.should_clear_screen:
                    self.screen.clear_screen()
                if self.chip8.should_update_screen:
                    self.screen.update_screen(self.chip8.display, self.chip8.state)

                if self.chip8.should_beep:
                    self.beep.play()
                else:
                    self.beep.pause()
        finally:
            self.beep.pause()
            pygame.quit()
            self.logger.info(f"Executed {self.chip8.instruction_count} instructions")
