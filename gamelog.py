import logging
import sys

LOG_FILE = "gamelog.txt"
LOG_FORMAT = '%(asctime)s - %(levelname)s - %(name)s - %(message)s'


def setup_logging(log_file=LOG_FILE, level=logging.INFO, console=False):
    """Setup logging to gamelog.txt, optionally echoed to stderr"""
    root = logging.getLogger()
    # Only configure if not already configured
    if root.handlers:
        return root
    handlers = []
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))
    if console or not handlers:
        handlers.append(logging.StreamHandler(sys.stderr))
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers)
    return root


# Initialize logger (lazy initialization)
logger = None


def get_logger():
    """Get the game loop logger, initializing logging if needed"""
    global logger
    if logger is None:
        setup_logging()
        logger = logging.getLogger("belugaroids")
    return logger


class GameLogger:
    """Gameplay event log.

    Every event is a single INFO record on the ``belugaroids.events`` logger so
    a session can be replayed from gamelog.txt: starts, levels, hits, deaths
    and final scores.
    """

    def __init__(self, name="belugaroids.events"):
        self.logger = logging.getLogger(name)

    def _write_log(self, message):
        self.logger.info(message)

    def log_game_start(self):
        self._write_log("GAME STARTED")

    def log_new_level(self, level, asteroids_count):
        """Log new level start with asteroid count"""
        self._write_log(f"NEW LEVEL: Level {level + 1} started with {asteroids_count} asteroids")

    def log_score_event(self, points, radius, total_score):
        self._write_log(f"SCORE: +{points} points (asteroid r={radius}) - Total: {total_score}")

    def log_player_death(self, lives, level, score):
        self._write_log(f"PLAYER DEATH: Lives remaining: {lives}, Level: {level + 1}, Score: {score}")

    def log_game_over(self, final_score, final_level):
        self._write_log(f"GAME OVER: Final Score: {final_score}, Final Level: {final_level + 1}")

    def log_high_score(self, score):
        self._write_log(f"NEW HIGH SCORE: {score}")


# Global game logger
game_logger = GameLogger()
