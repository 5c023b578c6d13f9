import logging
import random

from collisions import check_collisions
from entities import Asteroid, Ship
from gamelog import game_logger
from geometry import dist_between_points
from settings import (
    ASTEROID_NUM, ASTEROID_SIZE, FPS, GAME_HEIGHT, GAME_LIVES, GAME_OVER_TEXT,
    GAME_WIDTH, SPAWN_MAX_ATTEMPTS, TEXT_FADE_TIME,
)

logger = logging.getLogger(__name__)


class Session:
    """One play-through: level, score, lives and the live entities.

    A fresh session starts on level 0 with `GAME_LIVES` lives and a ship in
    the centre. `update()` advances exactly one frame.
    """

    def __init__(self):
        self.level = 0
        self.score = 0
        self.lives = GAME_LIVES
        self.ship = Ship()
        self.bullets = []
        self.asteroids = []
        self.text = ""
        self.text_alpha = 0.0
        self.game_over = False
        self.new_level()

    def new_level(self):
        self.text = f"Level {self.level + 1}"
        self.text_alpha = 1.0
        self.create_asteroids()
        game_logger.log_new_level(self.level, len(self.asteroids))

    def create_asteroids(self):
        self.asteroids = []
        for _ in range(ASTEROID_NUM + self.level):
            x, y = self.spawn_position()
            self.asteroids.append(Asteroid(x, y, ASTEROID_SIZE))

    def spawn_position(self):
        """Random integer position away from the ship.

        Gives up after SPAWN_MAX_ATTEMPTS draws and takes the farthest
        candidate seen.
        """
        ship = self.ship
        exclusion = ASTEROID_SIZE * 2 + ship.radius
        best, best_distance = None, -1.0
        for _ in range(SPAWN_MAX_ATTEMPTS):
            x, y = random.randrange(GAME_WIDTH), random.randrange(GAME_HEIGHT)
            distance = dist_between_points(ship.position.x, ship.position.y, x, y)
            if distance >= exclusion:
                return x, y
            if distance > best_distance:
                best, best_distance = (x, y), distance

        logger.warning("No asteroid spawn point %.0fpx from the ship after %d attempts, using %s",
                       exclusion, SPAWN_MAX_ATTEMPTS, best)
        return best

    def resolve_ship_explosion(self):
        """Spend a life once the explosion animation finishes"""
        if self.ship is None or not self.ship.explosion_finished:
            return
        self.lives -= 1
        game_logger.log_player_death(self.lives, self.level, self.score)
        if self.lives == 0:
            self.end()
        else:
            self.ship = Ship()

    def end(self):
        self.ship = None
        self.game_over = True
        self.text = GAME_OVER_TEXT
        self.text_alpha = 1.0
        game_logger.log_game_over(self.score, self.level)

    def remove_expired_bullets(self):
        for i in range(len(self.bullets) - 1, -1, -1):
            if self.bullets[i].expired:
                del self.bullets[i]

    def fade_text(self):
        if self.text_alpha >= 0:
            self.text_alpha -= 1.0 / TEXT_FADE_TIME / FPS

    def update(self, keys):
        """Advance one frame; returns True once the session is over"""
        if self.game_over:
            return True

        if self.ship is not None:
            self.ship.update(keys, self.bullets)
            self.resolve_ship_explosion()

        for bullet in reversed(self.bullets):
            bullet.update()
        self.remove_expired_bullets()

        for asteroid in reversed(self.asteroids):
            asteroid.update()

        if not self.game_over:
            check_collisions(self)

            if not self.asteroids:
                self.level += 1
                self.new_level()

            self.fade_text()

        return self.game_over
