import math
import random

import pygame

from assets import image_cache
from geometry import Vector2D, heading_offset, wrap_coordinate
from settings import (
    ASTEROID_JAGGEDNESS, ASTEROID_MIN_RADIUS, ASTEROID_SPEED, ASTEROID_VERTICES,
    BULLET_EXPLODE_TIME, BULLET_MAX_DIST, BULLET_SPEED, FPS, GAME_HEIGHT, GAME_WIDTH,
    SHIP_BLINK_DURATION, SHIP_EXPLODE_DURATION, SHIP_INVULNERABILITY_DURATION,
    SHIP_SHOOT_COOLDOWN, SHIP_SIZE, SHIP_SPEED,
    CYAN, DARK_GREY, DARK_RED, GREY, LIME, ORANGE, ORANGE_RED, PINK, RED, SALMON,
    SKY_BLUE, SLATE_GREY, WHITE, YELLOW, frames,
)


def random_sign():
    return 1 if random.random() < 0.5 else -1


class GameObject:
    def __init__(self, x, y, vx=0, vy=0, radius=0):
        self.position = Vector2D(x, y)
        self.velocity = Vector2D(vx, vy)
        self.radius = radius
        self.angle = 0.0

    def move(self, margin=0):
        """Advance one frame and wrap around the world edges"""
        self.position.x += self.velocity.x
        self.position.y += self.velocity.y
        self.position.x = wrap_coordinate(self.position.x, GAME_WIDTH, margin)
        self.position.y = wrap_coordinate(self.position.y, GAME_HEIGHT, margin)


class Ship(GameObject):
    def __init__(self, x=GAME_WIDTH / 2, y=GAME_HEIGHT / 2):
        super().__init__(x, y, radius=SHIP_SIZE / 2)
        self.angle = math.pi / 2  # facing up
        self.thrusting = False

        # Explosion
        self.exploding = False
        self.explode_time = 0

        # Invulnerability blink
        self.blink_on = False
        self.blink_time = frames(SHIP_BLINK_DURATION)
        self.blink_num = frames(SHIP_INVULNERABILITY_DURATION)

        # Bullet cooldown
        self.can_shoot = True
        self.shoot_timer = 0

    @property
    def invulnerable(self):
        return self.blink_num > 0

    @property
    def vulnerable(self):
        return not self.exploding and self.blink_num == 0

    @property
    def visible(self):
        return self.blink_on or self.blink_num == 0

    @property
    def explosion_finished(self):
        return self.exploding and self.explode_time == 0

    def update(self, keys, bullets):
        if self.exploding:
            if self.explode_time > 0:
                self.explode_time -= 1
            return

        if self.blink_num > 0:
            self.blink_time -= 1
            if self.blink_time == 0:
                self.blink_on = not self.blink_on
                self.blink_time = frames(SHIP_BLINK_DURATION)
            self.blink_num -= 1
            if self.blink_num == 0:
                self.blink_on = False

        self.steer(keys)
        self.move(self.radius)

        if not self.can_shoot:
            self.shoot_timer += 1
            if self.shoot_timer >= frames(SHIP_SHOOT_COOLDOWN):
                self.can_shoot = True
                self.shoot_timer = 0

        if keys.shoot:
            self.shoot(bullets)

    def steer(self, keys):
        """Reset velocity from the held directions; later keys win the heading"""
        speed = SHIP_SPEED / FPS
        vx, vy = 0, 0

        if keys.left:
            vx = -speed
            self.angle = math.pi
        if keys.right:
            vx = speed
            self.angle = 0.0
        if keys.up:
            vy = -speed
            self.angle = math.pi / 2
        if keys.down:
            vy = speed
            self.angle = 3 * math.pi / 2

        if keys.up and keys.left:
            self.angle = 3 * math.pi / 4
        elif keys.up and keys.right:
            self.angle = math.pi / 4
        elif keys.down and keys.left:
            self.angle = 5 * math.pi / 4
        elif keys.down and keys.right:
            self.angle = 7 * math.pi / 4

        self.velocity = Vector2D(vx, vy)
        self.thrusting = keys.moving

    def explode(self):
        self.exploding = True
        self.explode_time = frames(SHIP_EXPLODE_DURATION)
        self.thrusting = False

    def shoot(self, bullets):
        if self.can_shoot and not self.exploding:
            bullets.append(Bullet(self.position.x, self.position.y, self.angle))
            self.can_shoot = False
            return True
        return False

    def draw(self, surface):
        x, y, r = self.position.x, self.position.y, self.radius

        if self.exploding:
            for scale, color in ((1.7, DARK_RED), (1.4, RED), (1.1, ORANGE), (0.8, YELLOW), (0.5, WHITE)):
                pygame.draw.circle(surface, color, (x, y), r * scale)
            return

        if not self.visible:
            return

        line_width = max(1, round(SHIP_SIZE / 20))
        hull = [
            heading_offset(x, y, r * 1.5, self.angle),  # nose
            heading_offset(x, y, r * 0.5, self.angle + 0.7 * math.pi),  # back-left wing
            heading_offset(x, y, r * 0.5, self.angle - 0.7 * math.pi),  # back-right wing
        ]
        pygame.draw.polygon(surface, GREY, hull)
        pygame.draw.polygon(surface, WHITE, hull, line_width)

        cockpit = heading_offset(x, y, r * 0.5, self.angle)
        pygame.draw.circle(surface, SKY_BLUE, cockpit, r * 0.3)
        pygame.draw.circle(surface, WHITE, cockpit, r * 0.3, line_width)

        engine = heading_offset(x, y, -r * 0.7, self.angle)
        pygame.draw.circle(surface, DARK_GREY, engine, r * 0.4)
        pygame.draw.circle(surface, WHITE, engine, r * 0.4, line_width)

        if self.thrusting:
            pygame.draw.circle(surface, CYAN, engine, r * 0.3 + random.random() * r * 0.1)


class Bullet(GameObject):
    def __init__(self, x, y, angle):
        super().__init__(
            x, y,
            BULLET_SPEED * math.cos(angle) / FPS,
            -BULLET_SPEED * math.sin(angle) / FPS,
            radius=SHIP_SIZE / 15,
        )
        self.angle = angle
        self.max_distance = BULLET_MAX_DIST * GAME_WIDTH
        self.distance_traveled = 0.0
        self.exploding = False
        self.explode_time = 0

    @property
    def expired(self):
        if self.exploding:
            return self.explode_time == 0
        return self.distance_traveled > self.max_distance

    def update(self):
        if self.exploding:
            if self.explode_time > 0:
                self.explode_time -= 1
            return

        self.move()
        self.distance_traveled += self.velocity.magnitude()

    def explode(self):
        self.exploding = True
        self.explode_time = frames(BULLET_EXPLODE_TIME)

    def draw(self, surface):
        center = (self.position.x, self.position.y)
        if not self.exploding:
            pygame.draw.circle(surface, LIME, center, self.radius)
            return
        for scale, color in ((0.75, ORANGE_RED), (0.5, SALMON), (0.25, PINK)):
            pygame.draw.circle(surface, color, center, max(1, self.radius * scale))


class Asteroid(GameObject):
    def __init__(self, x, y, radius):
        speed = ASTEROID_SPEED / FPS
        super().__init__(
            x, y,
            random.random() * speed * random_sign(),
            random.random() * speed * random_sign(),
            radius=radius,
        )
        self.angle = random.random() * math.pi * 2
        self.rotation_speed = random.random() * speed * random_sign()

        # Silhouette, fixed for the asteroid's lifetime
        self.vertices = math.floor(random.random() * (ASTEROID_VERTICES + 1) + ASTEROID_VERTICES / 2)
        self.offsets = [
            random.uniform(1 - ASTEROID_JAGGEDNESS, 1 + ASTEROID_JAGGEDNESS)
            for _ in range(self.vertices)
        ]

        self._texture = None
        self._texture_source = None

    @property
    def min_tier(self):
        return self.radius <= ASTEROID_MIN_RADIUS

    def update(self):
        self.move(self.radius)
        self.angle += self.rotation_speed / FPS

    def points(self, cx=None, cy=None, angle=None):
        """Polygon vertices around (cx, cy), defaulting to the current pose"""
        cx = self.position.x if cx is None else cx
        cy = self.position.y if cy is None else cy
        angle = self.angle if angle is None else angle
        step = math.pi * 2 / self.vertices
        return [
            (
                cx + self.radius * offset * math.cos(i * step + angle),
                cy + self.radius * offset * math.sin(i * step + angle),
            )
            for i, offset in enumerate(self.offsets)
        ]

    def split(self):
        """Children replacing this asteroid after a hit"""
        if self.min_tier:
            return []
        child_radius = math.ceil(self.radius / 2)
        return [Asteroid(self.position.x, self.position.y, child_radius) for _ in range(2)]

    def _textured_silhouette(self, texture):
        """Texture clipped to the unrotated silhouette, built once per texture"""
        if self._texture is not None and self._texture_source is texture:
            return self._texture

        size = math.ceil(self.radius * (1 + ASTEROID_JAGGEDNESS) * 2) + 2
        center = size / 2
        silhouette = pygame.Surface((size, size), pygame.SRCALPHA)

        # Slightly larger than the diameter so the image covers every vertex
        display_size = self.radius * 2.5
        scaled = image_cache.get_scaled_image(texture, (display_size, display_size))
        silhouette.blit(scaled, scaled.get_rect(center=(center, center)))

        mask = pygame.Surface((size, size), pygame.SRCALPHA)
        pygame.draw.polygon(mask, (255, 255, 255, 255), self.points(center, center, 0.0))
        silhouette.blit(mask, (0, 0), special_flags=pygame.BLEND_RGBA_MULT)

        self._texture = silhouette
        self._texture_source = texture
        return silhouette

    def draw(self, surface, texture=None):
        outline = self.points()
        if texture is not None:
            rotated = pygame.transform.rotate(self._textured_silhouette(texture), -math.degrees(self.angle))
            surface.blit(rotated, rotated.get_rect(center=(self.position.x, self.position.y)))
        else:
            pygame.draw.polygon(surface, SLATE_GREY, outline)
        pygame.draw.polygon(surface, WHITE, outline, max(1, round(SHIP_SIZE / 40)))
