#!/usr/bin/env python3
"""
Tests for the background star field and shooting stars
"""

import pygame

from settings import (
    FPS, GAME_HEIGHT, GAME_WIDTH, NUM_STARS, SHOOTING_STAR_LENGTH, SHOOTING_STAR_SPEED,
    STAR_SIZE_MAX, STAR_SIZE_MIN,
)
from starfield import StarField


def test_stars_inside_world(seeded):
    field = StarField()
    assert len(field.stars) == NUM_STARS
    for star in field.stars:
        assert 0 <= star['x'] < GAME_WIDTH
        assert 0 <= star['y'] < GAME_HEIGHT
        assert STAR_SIZE_MIN <= star['radius'] <= STAR_SIZE_MAX


def test_shooting_star_enters_from_edge(seeded):
    field = StarField()
    for _ in range(20):
        star = field.spawn_shooting_star()
        on_edge = (star['x'] in (-SHOOTING_STAR_LENGTH, GAME_WIDTH + SHOOTING_STAR_LENGTH)
                   or star['y'] in (-SHOOTING_STAR_LENGTH, GAME_HEIGHT + SHOOTING_STAR_LENGTH))
        assert on_edge
        # heading into the field
        if star['x'] < 0:
            assert star['dx'] > 0
        if star['y'] > GAME_HEIGHT:
            assert star['dy'] < 0


def test_shooting_star_fades_out(monkeypatch, seeded):
    monkeypatch.setattr("starfield.SHOOTING_STAR_CHANCE", 0.0)
    field = StarField()
    star = field.spawn_shooting_star()
    star['dx'] = star['dy'] = 0.0  # park it so only the fade removes it
    star['x'], star['y'] = 100, 100

    fade_frames = int(FPS * (SHOOTING_STAR_LENGTH / SHOOTING_STAR_SPEED) * 2)
    for _ in range(fade_frames - 1):
        field.update()
    assert field.shooting_stars == [star]
    for _ in range(2):
        field.update()
    assert field.shooting_stars == []


def test_draw_smoke(seeded):
    field = StarField()
    field.spawn_shooting_star()
    surface = pygame.Surface((GAME_WIDTH, GAME_HEIGHT))
    field.draw(surface)
