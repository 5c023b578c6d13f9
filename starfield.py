import random

import pygame

from settings import (
    FPS, GAME_HEIGHT, GAME_WIDTH, NUM_STARS, SHOOTING_STAR_CHANCE, SHOOTING_STAR_COLOR,
    SHOOTING_STAR_LENGTH, SHOOTING_STAR_SPEED, STAR_SIZE_MAX, STAR_SIZE_MIN, WHITE,
)


class StarField:
    """Static background stars plus the occasional shooting star"""

    def __init__(self, num_stars=NUM_STARS, width=GAME_WIDTH, height=GAME_HEIGHT):
        self.num_stars = num_stars
        self.width = width
        self.height = height
        self.stars = []
        self.shooting_stars = []
        self.generate_stars()

    def generate_stars(self):
        self.stars = []
        for _ in range(self.num_stars):
            star = {
                'x': random.random() * self.width,
                'y': random.random() * self.height,
                'radius': random.uniform(STAR_SIZE_MIN, STAR_SIZE_MAX),
            }
            self.stars.append(star)

    def spawn_shooting_star(self):
        """Launch a shooting star from a random edge, heading into the field"""
        speed = SHOOTING_STAR_SPEED / FPS
        length = SHOOTING_STAR_LENGTH
        across = (random.random() - 0.5) * speed
        inward = (random.random() * 0.5 + 0.5) * speed

        side = random.randrange(4)
        if side == 0:  # top
            x, y, dx, dy = random.random() * self.width, -length, across, inward
        elif side == 1:  # right
            x, y, dx, dy = self.width + length, random.random() * self.height, -inward, across
        elif side == 2:  # bottom
            x, y, dx, dy = random.random() * self.width, self.height + length, across, -inward
        else:  # left
            x, y, dx, dy = -length, random.random() * self.height, inward, across

        shooting_star = {
            'x': x,
            'y': y,
            'dx': dx,
            'dy': dy,
            'length': length,
            'alpha': 1.0,
            # fade over twice the time it takes to travel one tail length
            'fade_rate': 1.0 / (FPS * (SHOOTING_STAR_LENGTH / SHOOTING_STAR_SPEED) * 2),
        }
        self.shooting_stars.append(shooting_star)
        return shooting_star

    def _out_of_bounds(self, star):
        length = star['length']
        return (star['x'] < -length or star['x'] > self.width + length
                or star['y'] < -length or star['y'] > self.height + length)

    def update(self):
        if random.random() < SHOOTING_STAR_CHANCE:
            self.spawn_shooting_star()

        for i in range(len(self.shooting_stars) - 1, -1, -1):
            star = self.shooting_stars[i]
            star['x'] += star['dx']
            star['y'] += star['dy']
            star['alpha'] -= star['fade_rate']
            if star['alpha'] <= 0 or self._out_of_bounds(star):
                del self.shooting_stars[i]

    def draw_stars(self, surface):
        for star in self.stars:
            pygame.draw.circle(surface, WHITE, (star['x'], star['y']), star['radius'])

    def draw_shooting_stars(self, surface):
        unit = SHOOTING_STAR_SPEED / FPS
        for star in self.shooting_stars:
            tail_x = star['x'] - star['dx'] / unit * star['length']
            tail_y = star['y'] - star['dy'] / unit * star['length']
            alpha = max(0, min(255, int(star['alpha'] * 255)))

            # Faded streak on its own SRCALPHA layer, sized to its bounding box
            left, top = min(star['x'], tail_x), min(star['y'], tail_y)
            width = int(abs(star['x'] - tail_x)) + 4
            height = int(abs(star['y'] - tail_y)) + 4
            layer = pygame.Surface((width, height), pygame.SRCALPHA)
            pygame.draw.line(
                layer, (*SHOOTING_STAR_COLOR, alpha),
                (star['x'] - left + 2, star['y'] - top + 2),
                (tail_x - left + 2, tail_y - top + 2),
                2,
            )
            surface.blit(layer, (left - 2, top - 2))

    def draw(self, surface):
        self.draw_stars(surface)
        self.draw_shooting_stars(surface)
