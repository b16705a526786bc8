# loom/window.py
# Pygame canvas: one window, 32x32 cells scaled by cell_size, nothing else.
# Keys: ESC or closing the window ends await_quit (and interrupts a running program).

from __future__ import annotations
import logging
from typing import Optional

import pygame

from .display import DisplaySink, Frame, SIZE, blank_frame
from .errors import DisplayErrorLoom, QuitRequested
from .palette import color_for

log = logging.getLogger(__name__)

FPS = 30
CAPTION = "Loom"


class PygameDisplay(DisplaySink):
    def __init__(self, cell_size: int = 20, *, caption: str = CAPTION):
        self.cell_size = int(cell_size)
        self.frame: Frame = blank_frame()
        self.closed = False
        try:
            pygame.init()
            side = SIZE * self.cell_size
            self.surface = pygame.display.set_mode((side, side), 0, 32)
            pygame.display.set_caption(caption)
        except pygame.error as e:
            raise DisplayErrorLoom(f"cannot open canvas window: {e}") from e
        self.clock = pygame.time.Clock()
        log.debug("canvas window %dx%d opened", side, side)
        self._paint()

    def _paint(self) -> None:
        cs = self.cell_size
        for y, row in enumerate(self.frame):
            for x, value in enumerate(row):
                self.surface.fill(color_for(value), (x * cs, y * cs, cs, cs))
        pygame.display.flip()

    def _quit_requested(self) -> bool:
        for ev in pygame.event.get():
            if ev.type == pygame.QUIT:
                return True
            if ev.type == pygame.KEYDOWN and ev.key == pygame.K_ESCAPE:
                return True
        return False

    def close(self) -> None:
        if not self.closed:
            self.closed = True
            pygame.quit()

    def commit(self, frame: Frame) -> None:
        self.frame = frame
        self._paint()
        if self._quit_requested():
            self.close()
            raise QuitRequested("canvas closed during execution")

    def await_quit(self) -> None:
        if self.closed:
            return
        while not self._quit_requested():
            self._paint()
            self.clock.tick(FPS)
        self.close()

    def on_error(self, kind: str, position: Optional[int], detail: str) -> None:
        super().on_error(kind, position, detail)
        self.close()
