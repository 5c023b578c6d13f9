import math

import pygame

from assets import image_cache
from settings import (
    CREDITS_TEXT, FONT_NAME, GAME_HEIGHT, GAME_OVER_TEXT, GAME_WIDTH, INTRO_IMAGE_WIDTH,
    SHIP_SIZE, TEXT_SIZE, TITLE_TEXT, WATERMARK_ALPHA, WATERMARK_WIDTH, RED, WHITE,
)

# Fonts keyed by (size, bold, italic)
_fonts = {}


def get_font(size, bold=False, italic=False):
    key = (int(size), bold, italic)
    if key not in _fonts:
        _fonts[key] = pygame.font.SysFont(FONT_NAME, int(size), bold=bold, italic=italic)
    return _fonts[key]


def draw_text(surface, text, size, center, color=WHITE, bold=False, italic=False, alpha=1.0):
    text_surface = get_font(size, bold, italic).render(text, True, color)
    if alpha < 1.0:
        text_surface.set_alpha(max(0, int(255 * alpha)))
    rect = text_surface.get_rect(center=center)
    surface.blit(text_surface, rect)
    return rect


def draw_loading_screen(surface, loaded, total):
    draw_text(surface, "Loading Assets...", TEXT_SIZE, (GAME_WIDTH / 2, GAME_HEIGHT / 2))
    draw_text(surface, f"({loaded} / {total} images loaded)", TEXT_SIZE * 0.75,
              (GAME_WIDTH / 2, GAME_HEIGHT / 2 + TEXT_SIZE))


def draw_intro_screen(surface, starfield, intro_asset=None):
    starfield.draw_stars(surface)

    draw_text(surface, TITLE_TEXT, TEXT_SIZE * 1.5, (GAME_WIDTH / 2, GAME_HEIGHT * 0.2), bold=True, italic=True)

    if intro_asset is not None and intro_asset.ready:
        width, height = intro_asset.natural_size
        scaled_height = height * INTRO_IMAGE_WIDTH / width
        image = image_cache.get_scaled_image(intro_asset.image, (INTRO_IMAGE_WIDTH, scaled_height))
        surface.blit(image, (GAME_WIDTH / 2 - INTRO_IMAGE_WIDTH / 2, GAME_HEIGHT * 0.4 - scaled_height / 2 + 20))
    else:
        draw_text(surface, "[My Image Placeholder]", TEXT_SIZE, (GAME_WIDTH / 2, GAME_HEIGHT * 0.4 + 20))

    draw_text(surface, CREDITS_TEXT, TEXT_SIZE, (GAME_WIDTH / 2, GAME_HEIGHT * 0.65 + 40))
    draw_text(surface, "Click / Tap to Start", TEXT_SIZE * 0.75, (GAME_WIDTH / 2, GAME_HEIGHT * 0.85 + 40), italic=True)


def draw_ship_life_icon(surface, x, y, angle, color=WHITE):
    """Outline-only ship used for the lives counter"""
    half = SHIP_SIZE / 2
    cos_a, sin_a = math.cos(angle), math.sin(angle)
    points = [
        (x + half * cos_a, y - half * sin_a),  # nose
        (x - half * (cos_a + sin_a), y + half * (sin_a - cos_a)),  # rear left
        (x - half * (cos_a - sin_a), y + half * (sin_a + cos_a)),  # rear right
    ]
    pygame.draw.polygon(surface, color, points, max(1, round(SHIP_SIZE / 20)))


def draw_hud(surface, score, high_score, lives, ship_exploding=False):
    score_text = get_font(TEXT_SIZE * 0.75).render(f"SCORE: {score}", True, WHITE)
    surface.blit(score_text, score_text.get_rect(midright=(GAME_WIDTH - SHIP_SIZE / 2, SHIP_SIZE)))

    draw_text(surface, f"HIGH SCORE: {high_score}", TEXT_SIZE * 0.75, (GAME_WIDTH / 2, SHIP_SIZE))

    for i in range(lives):
        color = RED if ship_exploding and i == lives - 1 else WHITE
        draw_ship_life_icon(surface, SHIP_SIZE + i * SHIP_SIZE * 1.2, SHIP_SIZE, 0.5 * math.pi, color)


def draw_level_text(surface, text, alpha):
    if alpha < 0:
        return
    draw_text(surface, text, TEXT_SIZE, (GAME_WIDTH / 2, GAME_HEIGHT * 0.75), bold=True, alpha=alpha)


def draw_game_over(surface):
    draw_text(surface, GAME_OVER_TEXT, TEXT_SIZE, (GAME_WIDTH / 2, GAME_HEIGHT * 0.75), bold=True)
    draw_text(surface, "Press Any Key or Gamepad Button to Restart", TEXT_SIZE * 0.75,
              (GAME_WIDTH / 2, GAME_HEIGHT * 0.85))


def draw_watermark(surface, asset):
    if asset is None or not asset.ready:
        return
    width, height = asset.natural_size
    target_height = height * WATERMARK_WIDTH / width
    image = image_cache.get_scaled_image(asset.image, (WATERMARK_WIDTH, target_height))
    image.set_alpha(int(255 * WATERMARK_ALPHA))
    surface.blit(image, (GAME_WIDTH - WATERMARK_WIDTH - 10, GAME_HEIGHT - target_height - 10))
