# mapview/app.py
from __future__ import annotations
import logging
import sys

import pygame

from mapview import settings
from mapview.scenes.viewer import MapViewerScene
from mapview.world.grid import MapGrid

logger = logging.getLogger(__name__)


def setup_logging(level: str = settings.LOG_LEVEL) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )


def main() -> None:
    setup_logging()
    pygame.init()
    pygame.display.set_caption(settings.WINDOW_TITLE)
    screen = pygame.display.set_mode(settings.SCREEN_SIZE)
    clock = pygame.time.Clock()

    scene = MapViewerScene(screen, MapGrid(variant=settings.MAP_VARIANT))  # type: ignore[arg-type]
    logger.info("viewer started: %dx%d %s map", scene.grid.cols, scene.grid.rows, scene.grid.variant)

    accumulator = 0.0
    running = True
    while running:
        # -- Input --
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            else:
                scene.handle_event(event)

        # -- Fixed updates --
        accumulator += min(clock.tick() / 1000.0, settings.DT_CLAMP)
        steps = 0
        while accumulator >= settings.FIXED_DT and steps < settings.MAX_STEPS:
            accumulator -= settings.FIXED_DT
            scene.update(settings.FIXED_DT)
            steps += 1

        # -- Render --
        scene.draw(screen)
        pygame.display.flip()

    pygame.quit()
