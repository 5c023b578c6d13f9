#!/usr/bin/env python3
"""
Tests for levels, lives and per-frame session updates
"""

import math

import pytest

from controls import KeyState
from entities import Asteroid, Bullet, Ship
from geometry import dist_between_points
from session import Session
from settings import (
    ASTEROID_NUM, ASTEROID_SIZE, BULLET_MAX_DIST, BULLET_SPEED, FPS, GAME_LIVES, GAME_WIDTH,
    GAME_OVER_TEXT, SPAWN_MAX_ATTEMPTS, TEXT_FADE_TIME, frames,
)

NO_KEYS = KeyState()


def test_new_session(seeded):
    session = Session()
    assert session.level == 0
    assert session.score == 0
    assert session.lives == GAME_LIVES
    assert isinstance(session.ship, Ship)
    assert len(session.asteroids) == ASTEROID_NUM
    assert session.text == "Level 1"
    assert session.text_alpha == 1.0
    assert not session.game_over


def test_asteroids_spawn_away_from_ship(seeded):
    for _ in range(5):
        session = Session()
        ship = session.ship
        for asteroid in session.asteroids:
            assert asteroid.radius == ASTEROID_SIZE
            assert asteroid.position.x == int(asteroid.position.x)
            distance = dist_between_points(asteroid.position.x, asteroid.position.y,
                                           ship.position.x, ship.position.y)
            assert distance >= ASTEROID_SIZE * 2 + ship.radius


def test_spawn_gives_up_after_bounded_attempts(monkeypatch, seeded):
    session = Session()
    calls = []

    def always_centre(limit):
        calls.append(limit)
        return limit // 2

    monkeypatch.setattr("session.random.randrange", always_centre)
    x, y = session.spawn_position()
    assert (x, y) == (400, 300)
    assert len(calls) == SPAWN_MAX_ATTEMPTS * 2


def test_level_clear_starts_next_level(seeded):
    session = Session()
    session.asteroids = []
    session.update(NO_KEYS)
    assert session.level == 1
    assert len(session.asteroids) == ASTEROID_NUM + 1
    assert session.text == "Level 2"


def test_level_text_fades(seeded):
    session = Session()
    session.update(NO_KEYS)
    assert session.text_alpha == pytest.approx(1.0 - 1.0 / TEXT_FADE_TIME / FPS)


def test_idle_bullets_expire_without_hitting(seeded):
    session = Session()
    session.asteroids = []
    far_away = Asteroid(0, 0, ASTEROID_SIZE)
    far_away.velocity.x = far_away.velocity.y = 0
    session.asteroids.append(far_away)
    session.ship.shoot(session.bullets)  # straight up from the centre

    travel_frames = math.ceil(BULLET_MAX_DIST * GAME_WIDTH / (BULLET_SPEED / FPS)) + 1
    for _ in range(travel_frames):
        session.update(NO_KEYS)
    assert session.bullets == []
    assert session.asteroids == [far_away]


def test_untouched_session_keeps_its_asteroids(seeded):
    session = Session()
    travel_frames = math.ceil(BULLET_MAX_DIST * GAME_WIDTH / (BULLET_SPEED / FPS)) + 1
    for _ in range(travel_frames):
        assert not session.update(NO_KEYS)
    assert session.bullets == []
    assert len(session.asteroids) == ASTEROID_NUM
    assert session.score == 0
    assert session.lives == GAME_LIVES


def test_bullet_removed_after_hit_explosion(seeded):
    session = Session()
    target = Asteroid(400, 200, ASTEROID_SIZE)
    target.velocity.x = target.velocity.y = 0
    session.asteroids = [target]
    session.bullets.append(Bullet(400, 200, math.pi / 2))

    session.update(NO_KEYS)
    assert session.score == 50
    assert len(session.asteroids) == 2
    assert session.bullets[0].exploding

    for _ in range(frames(0.1)):
        session.update(NO_KEYS)
    assert session.bullets == []


def test_death_respawns_ship(seeded):
    session = Session()
    first_ship = session.ship
    first_ship.explode()
    for _ in range(frames(1.5)):
        session.update(NO_KEYS)
    assert session.lives == GAME_LIVES - 1
    assert session.ship is not first_ship
    assert session.ship.invulnerable


def test_last_life_ends_session(seeded):
    session = Session()
    session.lives = 1
    session.ship.explode()
    over = False
    for _ in range(frames(1.5)):
        over = session.update(NO_KEYS)
    assert over
    assert session.game_over
    assert session.ship is None
    assert session.text == GAME_OVER_TEXT

    # frozen from here on
    positions = [(a.position.x, a.position.y) for a in session.asteroids]
    session.update(NO_KEYS)
    assert [(a.position.x, a.position.y) for a in session.asteroids] == positions
