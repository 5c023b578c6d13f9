import argparse
import logging
import random
import sys

import pygame

from assets import AssetLoader, image_cache
from controls import InputAggregator, is_primary_action
from gamelog import LOG_FILE, game_logger, get_logger, setup_logging
from highscore import HighScoreStore
from screens import (
    draw_game_over, draw_hud, draw_intro_screen, draw_level_text, draw_loading_screen,
    draw_watermark,
)
from session import Session
from settings import (
    ASSET_DIR, BLACK, FPS, GAME_HEIGHT, GAME_WIDTH, HIGH_SCORE_FILE, MIN_HEIGHT, MIN_WIDTH,
    WINDOW_TITLE,
)
from starfield import StarField


class Game:
    """Owns the game state machine and everything that outlives a session.

    States: "loading" -> "intro" -> "playing" <-> "game_over".
    Rendering always goes to an 800x600 logical surface; `present()` scales
    it into the window.
    """

    def __init__(self, high_score_file=HIGH_SCORE_FILE, asset_dir=ASSET_DIR, window_scale=1.0):
        self.surface = pygame.Surface((GAME_WIDTH, GAME_HEIGHT))
        self.screen = None
        self.window_scale = window_scale
        self.viewport = pygame.Rect(0, 0, GAME_WIDTH, GAME_HEIGHT)
        self.clock = pygame.time.Clock()
        self.running = False
        self.game_state = "loading"

        self.images_loaded = 0
        self.assets = AssetLoader(asset_dir=asset_dir, on_settled=self.on_asset_settled)

        self.high_score_store = HighScoreStore(high_score_file)
        self.high_score = self.high_score_store.load()

        self.starfield = StarField()
        self.input = InputAggregator(to_logical=self.to_logical)
        self.session = None

    # State transitions

    def on_asset_settled(self, asset):
        self.images_loaded += 1
        get_logger().debug("Asset %s settled (%d / %d)", asset.name, self.images_loaded, self.assets.total)

    def new_game(self):
        game_logger.log_game_start()
        self.session = Session()
        self.input.reset()
        self.game_state = "playing"

    def enter_game_over(self):
        self.game_state = "game_over"
        if self.session.score > self.high_score:
            self.high_score = self.session.score
            self.high_score_store.save(self.high_score)
            game_logger.log_high_score(self.high_score)

    def handle_event(self, event):
        self.input.handle_event(event)
        if self.game_state in ("intro", "game_over") and is_primary_action(event):
            self.new_game()

    # Per-frame work

    def update_loading(self):
        self.assets.poll()
        if self.assets.done:
            self.game_state = "intro"
            get_logger().info("Assets settled, %d of %d ready",
                              sum(1 for name in self.assets.assets if self.assets.is_ready(name)),
                              self.assets.total)

    def asteroid_texture(self):
        asset = self.assets.get("asteroid")
        if asset is not None and asset.ready:
            return asset.image
        return None

    def draw_session(self):
        session = self.session
        if session.ship is not None:
            session.ship.draw(self.surface)
        for bullet in reversed(session.bullets):
            bullet.draw(self.surface)
        texture = self.asteroid_texture()
        for asteroid in reversed(session.asteroids):
            asteroid.draw(self.surface, texture)

    def frame(self):
        """One fixed tick: clear, dispatch on state, update, draw, HUD"""
        self.surface.fill(BLACK)

        if self.game_state == "loading":
            draw_loading_screen(self.surface, self.images_loaded, self.assets.total)
            self.update_loading()
            return

        if self.game_state == "intro":
            draw_intro_screen(self.surface, self.starfield, self.assets.get("intro"))
            return

        self.starfield.update()
        self.starfield.draw(self.surface)

        if self.game_state == "playing" and self.session.update(self.input.key_state()):
            self.enter_game_over()

        session = self.session
        self.draw_session()
        draw_hud(self.surface, session.score, self.high_score, session.lives,
                 session.ship is not None and session.ship.exploding)

        if self.game_state == "game_over":
            draw_game_over(self.surface)
        else:
            draw_level_text(self.surface, session.text, session.text_alpha)
            if self.input.show_touch_controls:
                self.input.touch.draw(self.surface)

        draw_watermark(self.surface, self.assets.get("watermark"))

    # Presentation

    def update_viewport(self, window_size):
        """Largest 4:3 rect centred in the window"""
        width, height = window_size
        scale = min(width / GAME_WIDTH, height / GAME_HEIGHT)
        view_width = max(1, int(GAME_WIDTH * scale))
        view_height = max(1, int(GAME_HEIGHT * scale))
        self.viewport = pygame.Rect((width - view_width) // 2, (height - view_height) // 2,
                                    view_width, view_height)

    def to_logical(self, x, y):
        """Map window-normalized (0..1) coordinates to the logical surface"""
        if self.screen is None:
            return x * GAME_WIDTH, y * GAME_HEIGHT
        width, height = self.screen.get_size()
        view = self.viewport
        return ((x * width - view.x) * GAME_WIDTH / view.width,
                (y * height - view.y) * GAME_HEIGHT / view.height)

    def present(self):
        if self.screen is None:
            return
        self.screen.fill(BLACK)
        if self.viewport.size == (GAME_WIDTH, GAME_HEIGHT):
            self.screen.blit(self.surface, self.viewport)
        else:
            self.screen.blit(pygame.transform.smoothscale(self.surface, self.viewport.size), self.viewport)
        pygame.display.flip()

    def open_window(self):
        size = (max(MIN_WIDTH, int(GAME_WIDTH * self.window_scale)),
                max(MIN_HEIGHT, int(GAME_HEIGHT * self.window_scale)))
        self.screen = pygame.display.set_mode(size, pygame.RESIZABLE)
        pygame.display.set_caption(WINDOW_TITLE)
        self.update_viewport(self.screen.get_size())

    def run(self):
        logger = get_logger()
        self.open_window()
        self.running = True
        logger.info("Game loop started at %d FPS", FPS)

        try:
            while self.running:
                self.clock.tick(FPS)

                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        if self.game_state == "playing" and self.session.score > 0:
                            game_logger.log_game_over(self.session.score, self.session.level)
                        self.running = False
                    elif event.type == pygame.VIDEORESIZE:
                        size = (max(MIN_WIDTH, event.w), max(MIN_HEIGHT, event.h))
                        self.screen = pygame.display.set_mode(size, pygame.RESIZABLE)
                        self.update_viewport(self.screen.get_size())
                    else:
                        self.handle_event(event)

                if self.running:
                    self.frame()
                    self.present()
        except Exception:
            logger.exception("Unhandled error in game loop (state=%s)", self.game_state)
            raise
        finally:
            stats = image_cache.get_cache_stats()
            logger.info("Game loop stopped (image cache: %d hits, %d misses, %d entries)",
                        stats["hits"], stats["misses"], stats["total_entries"])
            pygame.quit()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Belugaroids, an asteroids arcade game")
    parser.add_argument("--high-score-file", default=HIGH_SCORE_FILE,
                        help="JSON file holding the high score (default: %(default)s)")
    parser.add_argument("--asset-dir", default=ASSET_DIR,
                        help="directory containing the game images (default: %(default)s)")
    parser.add_argument("--window-scale", type=float, default=1.0,
                        help="initial window size as a multiple of 800x600")
    parser.add_argument("--log-file", default=LOG_FILE,
                        help="log file path, empty to disable (default: %(default)s)")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("-v", "--verbose", action="store_true", help="echo the log to the console")
    parser.add_argument("--seed", type=int, help="seed the random number generator")
    args = parser.parse_args(argv)
    if args.window_scale <= 0:
        parser.error("--window-scale must be positive")
    return args


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.log_file or None, getattr(logging, args.log_level), console=args.verbose)
    if args.seed is not None:
        random.seed(args.seed)
        get_logger().info("Random seed %d", args.seed)

    pygame.init()
    game = Game(args.high_score_file, args.asset_dir, args.window_scale)
    game.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
