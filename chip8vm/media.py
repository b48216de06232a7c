"""pygame sinks and input source for the host driver."""

from typing import Optional, Sequence

import numpy as np
import pygame

from chip8vm.constants import SCREEN_WIDTH, SCREEN_HEIGHT
from chip8vm.keypad import CancellationToken
from chip8vm.logging import ConsoleLogger
from chip8vm.rendering import chip8_display_to_rgb, create_color_scheme
from chip8vm.state import EmulatorState

# COSMAC VIP hex keypad on the left of a QWERTY keyboard:
#   1 2 3 C        1 2 3 4
#   4 5 6 D   <-   Q W E R
#   7 8 9 E        A S D F
#   A 0 B F        Z X C V
KEY_MAP = {
    pygame.K_1: 0x1, pygame.K_2: 0x2, pygame.K_3: 0x3, pygame.K_4: 0xC,
    pygame.K_q: 0x4, pygame.K_w: 0x5, pygame.K_e: 0x6, pygame.K_r: 0xD,
    pygame.K_a: 0x7, pygame.K_s: 0x8, pygame.K_d: 0x9, pygame.K_f: 0xE,
    pygame.K_z: 0xA, pygame.K_x: 0x0, pygame.K_c: 0xB, pygame.K_v: 0xF,
}

# Keys that abort a blocking key wait.
RESERVED_KEYS = (pygame.K_ESCAPE, pygame.K_CAPSLOCK)


def draw_overlay_text(surface, text_lines, position, font, bg_color=(0, 0, 0), text_color=(255, 255, 255), alpha=120):
    """Draw text with semi-transparent background overlay"""
    if not text_lines:
        return

    line_height = font.get_height()
    max_width = max(font.size(line)[0] for line in text_lines)
    overlay = pygame.Surface((max_width + 16, len(text_lines) * line_height + 8))
    overlay.set_alpha(alpha)
    overlay.fill(bg_color)
    surface.blit(overlay, position)

    x, y = position
    for i, line in enumerate(text_lines):
        text_surface = font.render(line, True, text_color)
        surface.blit(text_surface, (x + 8, y + 4 + i * line_height))


def debug_lines(state: EmulatorState) -> list[str]:
    """Register dump shown by the debug overlay."""
    lines = [
        f"PC: 0x{int(state.pc):03X}  I: 0x{int(state.I):03X}  SP: {int(state.stack.pointer)}",
        f"DT: {int(state.delay_timer)}  ST: {int(state.sound_timer)}",
    ]
    for i in range(0, 16, 4):
        lines.append(" ".join(f"V{j:X}:{int(state.V[j]):02X}" for j in range(i, i + 4)))
    return lines


class Screen:
    """Window that renders the 64x32 buffer at an integer scale."""

    def __init__(self, title: str, scale: int, color_scheme: str = "classic", show_debug: bool = False):
        self.scale = scale
        self.on_color, self.off_color = create_color_scheme(color_scheme)
        self.show_debug = show_debug
        self.surface = pygame.display.set_mode((SCREEN_WIDTH * scale, SCREEN_HEIGHT * scale))
        pygame.display.set_caption(title)
        self._font = pygame.font.Font(None, 18) if show_debug else None

    def clear_screen(self):
        """Fill the window with the background color."""
        self.surface.fill(self.off_color)
        pygame.display.flip()

    def update_screen(self, buffer: np.ndarray, state: Optional[EmulatorState] = None):
        """Render a (32, 64) bit buffer."""
        rgb = chip8_display_to_rgb(buffer, self.scale, self.on_color, self.off_color)
        # surfarray is indexed (x, y)
        pygame.surfarray.blit_array(self.surface, rgb.swapaxes(0, 1))
        if self.show_debug and state is not None:
            draw_overlay_text(self.surface, debug_lines(state), (5, 5), self._font, alpha=100)
        pygame.display.flip()


def square_wave(frequency: float = 440.0, sample_rate: int = 44100, volume: float = 0.2) -> np.ndarray:
    """One second of a mono int16 square wave."""
    phase = (np.arange(sample_rate) * frequency / sample_rate) % 1.0
    samples = np.where(phase <= 0.5, volume, -volume)
    return (samples * np.iinfo(np.int16).max).astype(np.int16)


class Beep:
    """Looping square-wave tone; silent when no audio device is available."""

    def __init__(self, logger: ConsoleLogger, frequency: float = 440.0, sample_rate: int = 44100):
        self.logger = logger
        self.playing = False
        self.sound = None
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init(frequency=sample_rate, size=-16, channels=1)
            mixer_rate, _, channels = pygame.mixer.get_init()
            wave = square_wave(frequency, mixer_rate)
            if channels > 1:
                wave = np.repeat(wave[:, None], channels, axis=1)
            self.sound = pygame.sndarray.make_sound(wave)
        except pygame.error as e:
            self.logger.warning(f"Audio disabled: {e}")

    def play(self):
        if self.sound is not None and not self.playing:
            self.sound.play(loops=-1)
        self.playing = True

    def pause(self):
        if self.sound is not None and self.playing:
            self.sound.stop()
        self.playing = False


class PygameKeypad:
    """``KeyInput`` backed by the pygame keyboard state and event queue."""

    def __init__(self, key_map: Optional[dict] = None, reserved: Sequence[int] = RESERVED_KEYS):
        self.key_map = key_map if key_map is not None else KEY_MAP
        self.scancodes = {value: key for key, value in self.key_map.items()}
        self.reserved = tuple(reserved)

    def is_pressed(self, key: int) -> bool:
        keycode = self.scancodes.get(key)
        if keycode is None:
            return False
        return bool(pygame.key.get_pressed()[keycode])

    def wait_for_key(self, cancel: CancellationToken) -> Optional[int]:
        while not cancel.cancelled:
            event = pygame.event.wait()
            if event.type == pygame.QUIT:
                cancel.cancel()
            elif event.type == pygame.KEYDOWN:
                if event.key in self.reserved:
                    cancel.cancel()
                elif event.key in self.key_map:
                    return self.key_map[event.key]
        return None
