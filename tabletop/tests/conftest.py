"""Pytest configuration and fixtures for mapview tests."""

import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame
import pytest

from mapview.world.coords import Cart, Hex, Tile
from mapview.world.tile_index import TileIndex


@pytest.fixture
def cart_index():
    """Chebyshev index holding (0,0), (1,0) and (5,5)."""
    index = TileIndex(metric="chebyshev")
    index.extend(Tile(Cart(x, y), f"t{x}{y}") for x, y in ((0, 0), (1, 0), (5, 5)))
    return index


@pytest.fixture
def hex_index():
    """Hex index holding (0,0), (1,-1) and (3,0)."""
    index = TileIndex(metric="hex")
    index.extend(Tile(Hex(q, r)) for q, r in ((0, 0), (1, -1), (3, 0)))
    return index


@pytest.fixture
def screen():
    pygame.init()
    yield pygame.Surface((320, 240))
    pygame.quit()
