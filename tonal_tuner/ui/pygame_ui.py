import math
from typing import Dict, Optional

import numpy as np
import pygame

from ..audio.tuner_service import TunerService
from ..logger import get_logger
from ..note_matcher import NoteMatcher
from ..note_types import TunerReading
from .needle import NEEDLE_RANGE_DEGREES, is_on_pitch

# Get logger for this module
logger = get_logger(__name__)

ANY_NOTE = "Any"


def make_ding(sample_rate: int = 44100, frequency: float = 1318.5, duration: float = 0.35) -> np.ndarray:
    """Synthesize a short decaying bell tone as int16 samples."""
    t = np.arange(int(sample_rate * duration)) / sample_rate
    envelope = np.exp(-t * 9.0)
    tone = np.sin(2 * np.pi * frequency * t) + 0.3 * np.sin(2 * np.pi * 2 * frequency * t)
    return (tone / 1.3 * envelope * 0.6 * 32767).astype(np.int16)


class PygameUI:
    """Pygame-based UI for Tonal Tuner"""

    def __init__(self, service: TunerService, width: int = 800, height: int = 600):
        """Initialize the Pygame UI"""
        self.service = service
        self.screen = None
        self.width = width
        self.height = height
        self.bg_color = (20, 20, 30)
        self.text_color = (255, 255, 0)
        self.secondary_color = (180, 255, 180)
        self.button_color = (0, 122, 255)
        self.button_text_color = (255, 255, 255)
        self.in_tune_color = (46, 204, 113)
        self.off_color = (231, 76, 60)
        self.initialized = False
        self.clock = None
        self.ding = None

        # Fonts
        self.large_font = None
        self.medium_font = None
        self.small_font = None

        self._buttons: Dict[str, pygame.Rect] = {}

        logger.debug("Initializing PygameUI")

    def init_screen(self):
        """Initialize the Pygame screen and resources"""
        try:
            pygame.mixer.pre_init(frequency=44100, size=-16, channels=1)
            pygame.init()
            self.screen = pygame.display.set_mode((self.width, self.height))
            pygame.display.set_caption(f"Tonal Tuner - {self.service.session.tuning.name}")

            self.large_font = pygame.font.SysFont("Arial", 64, bold=True)
            self.medium_font = pygame.font.SysFont("Arial", 32)
            self.small_font = pygame.font.SysFont("Arial", 22)

            self.clock = pygame.time.Clock()
            self._layout_buttons()
            self._load_ding()
            self.initialized = True
            logger.info("Pygame UI initialized successfully")
            return self.screen

        except pygame.error as e:
            logger.error(f"Failed to initialize Pygame: {e}")
            self.cleanup()
            raise

    def _load_ding(self):
        if not pygame.mixer.get_init():
            logger.warning("Audio output unavailable, confirmation sound disabled")
            return
        rate = pygame.mixer.get_init()[0]
        self.ding = pygame.mixer.Sound(buffer=make_ding(rate).tobytes())

    def _layout_buttons(self):
        labels = list(self.service.session.tuning) + [ANY_NOTE]
        width, height, gap = 90, 50, 15
        total = len(labels) * width + (len(labels) - 1) * gap
        x = (self.width - total) // 2
        y = self.height - height - 30
        self._buttons = {}
        for label in labels:
            self._buttons[label] = pygame.Rect(x, y, width, height)
            x += width + gap

    def draw_button(self, text, rect, active):
        """Draw a string-selection button."""
        mouse = pygame.mouse.get_pos()
        if active or rect.collidepoint(mouse):
            pygame.draw.rect(self.screen, self.button_color, rect)
        else:
            pygame.draw.rect(self.screen, self.button_color, rect, 2)

        text_surf = self.medium_font.render(text, True, self.button_text_color)
        self.screen.blit(text_surf, text_surf.get_rect(center=rect.center))

    def draw_needle(self, reading: Optional[TunerReading]):
        """Draw the reference line and the deviation needle."""
        center = (self.width // 2, self.height - 150)
        length = 220

        pygame.draw.line(self.screen, (204, 204, 204), center, (center[0], center[1] - length), 1)
        for edge in (-NEEDLE_RANGE_DEGREES, NEEDLE_RANGE_DEGREES):
            rad = math.radians(edge)
            tip = (center[0] + length * math.sin(rad), center[1] - length * math.cos(rad))
            pygame.draw.line(self.screen, (80, 80, 90), center, tip, 1)

        if reading is None:
            return
        rad = math.radians(reading.needle_angle)
        tip = (center[0] + length * math.sin(rad), center[1] - length * math.cos(rad))
        tolerance = self.service.session.config.tolerance_hz
        color = self.in_tune_color if is_on_pitch(reading.deviation, tolerance) else self.off_color
        pygame.draw.line(self.screen, color, center, tip, 4)

    def update_display(self):
        """Redraw the whole window from the session's latest reading."""
        if not self.initialized or not self.screen:
            return

        session = self.service.session
        reading = session.last_reading
        self.screen.fill(self.bg_color)

        if reading is None:
            message, color = "Play a string...", self.secondary_color
        else:
            message = reading.status.describe()
            color = self.in_tune_color if reading.status.is_in_tune else self.text_color

        msg_surf = self.medium_font.render(message, True, color)
        self.screen.blit(msg_surf, msg_surf.get_rect(center=(self.width // 2, 60)))

        freq_text = "--- Hz" if reading is None else f"{reading.frequency:.1f} Hz"
        freq_surf = self.large_font.render(freq_text, True, self.text_color)
        self.screen.blit(freq_surf, freq_surf.get_rect(center=(self.width // 2, 140)))

        if reading is not None:
            cents = NoteMatcher.cents_off(reading.frequency, reading.target_frequency)
            target_text = (
                f"target {reading.match.note} {reading.target_frequency:.2f} Hz "
                f"({reading.deviation:+.1f} Hz, {cents:+.0f} cents)"
            )
            target_surf = self.small_font.render(target_text, True, (200, 200, 255))
            self.screen.blit(target_surf, target_surf.get_rect(center=(self.width // 2, 190)))

        self.draw_needle(reading)

        selected = session.selected_target or ANY_NOTE
        for label, rect in self._buttons.items():
            self.draw_button(label, rect, label == selected)

        pygame.display.flip()

    def _select(self, label: str):
        self.service.select_target(None if label == ANY_NOTE else label)

    def handle_event(self, event) -> bool:
        """Handle one pygame event. Returns False when the UI should close."""
        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.MOUSEBUTTONDOWN:
            for label, rect in self._buttons.items():
                if rect.collidepoint(event.pos):
                    self._select(label)
                    break
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                return False
            labels = list(self._buttons)
            if pygame.K_1 <= event.key < pygame.K_1 + len(labels):
                self._select(labels[event.key - pygame.K_1])
            elif event.key == pygame.K_0:
                self._select(ANY_NOTE)
        return True

    def run(self, fps: int = 30):
        """Run the tuner until the window is closed."""
        if not self.initialized:
            self.init_screen()

        self.service.events.on_confirmation(self._play_ding)
        try:
            self.service.start()
            running = True
            while running:
                for event in pygame.event.get():
                    if not self.handle_event(event):
                        running = False
                        break
                self.service.poll()
                self.update_display()
                self.clock.tick(fps)
        finally:
            self.service.stop()
            self.cleanup()

    def _play_ding(self, _reading):
        if self.ding is not None:
            self.ding.stop()
            self.ding.play()

    def cleanup(self):
        """Clean up Pygame resources"""
        if self.initialized:
            logger.info("Cleaning up Pygame UI")
            pygame.quit()
            self.initialized = False
