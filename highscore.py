import json
import logging
import os

from settings import HIGH_SCORE_FILE, SAVE_HIGH_SCORE_NAME

logger = logging.getLogger(__name__)


class HighScoreStore:
    """Persists a single named integer (the high score) in a JSON file.

    Other keys already present in the file are preserved on save.
    """

    def __init__(self, path=HIGH_SCORE_FILE, name=SAVE_HIGH_SCORE_NAME):
        self.path = path
        self.name = name

    def _read(self):
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")
        return data

    def load(self):
        """Return the stored high score, 0 if there is none or it is unreadable"""
        try:
            value = self._read().get(self.name, 0)
            return max(0, int(value))
        except (OSError, ValueError, TypeError, OverflowError) as e:
            logger.warning("Could not load high score from %s: %s", self.path, e)
            return 0

    def save(self, score):
        try:
            data = self._read()
        except (OSError, ValueError) as e:
            logger.warning("Overwriting unreadable high score file %s: %s", self.path, e)
            data = {}
        data[self.name] = int(score)
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            logger.warning("Could not save high score to %s: %s", self.path, e)
            return False
        logger.info("Saved high score %d to %s", score, self.path)
        return True
