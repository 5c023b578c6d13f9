import math

# Timing
FPS = 30  # frames per second, every update assumes exactly one 1/FPS slice

# Logical world / render surface
GAME_WIDTH = 800
GAME_HEIGHT = 600

# Ship
SHIP_SIZE = 30  # ship height in logical pixels
SHIP_SPEED = 200  # logical pixels per second
SHIP_EXPLODE_DURATION = 1.5  # seconds
SHIP_INVULNERABILITY_DURATION = 3.0  # seconds
SHIP_BLINK_DURATION = 0.2  # seconds per blink phase (5 phases per second)
SHIP_SHOOT_COOLDOWN = 0.2  # seconds

# Bullets
BULLET_SPEED = 500  # logical pixels per second
BULLET_MAX_DIST = 0.4  # fraction of world width a bullet may travel
BULLET_EXPLODE_TIME = 0.1  # seconds

# Asteroids
ASTEROID_NUM = 5  # asteroids on level 0, one more per level
ASTEROID_SPEED = 50  # max initial speed in logical pixels per second
ASTEROID_SIZE = 100  # radius of the largest tier
ASTEROID_MIN_RADIUS = math.ceil(ASTEROID_SIZE / 4)
ASTEROID_VERTICES = 10  # average vertex count
ASTEROID_JAGGEDNESS = 0.4  # 0 = smooth, 1 = very jagged
SPAWN_MAX_ATTEMPTS = 500

# Session
GAME_LIVES = 3
TEXT_FADE_TIME = 2.5  # seconds
TEXT_SIZE = 40
GAME_OVER_TEXT = "GAME OVER"
TITLE_TEXT = "ASTEROIDS"
CREDITS_TEXT = "Created by Rayyan"
SAVE_HIGH_SCORE_NAME = "asteroids_high_score"
HIGH_SCORE_FILE = "highscore.json"
FONT_NAME = "timesnewroman"

# Gamepad
GAMEPAD_THRESHOLD = 0.5  # min analog deflection that counts as held
GAMEPAD_FIRE_BUTTON = 0
GAMEPAD_UP_BUTTON = 11  # SDL game controller D-pad layout
GAMEPAD_DOWN_BUTTON = 12
GAMEPAD_LEFT_BUTTON = 13
GAMEPAD_RIGHT_BUTTON = 14

# Touch controls, as fractions of the smaller logical dimension
TOUCH_BUTTON_SCALE = 0.12
TOUCH_SHOOT_SCALE = 0.15
TOUCH_GAP_SCALE = 0.01
TOUCH_FONT_SCALE = 0.035

# Star field
NUM_STARS = 100
STAR_SIZE_MIN = 1
STAR_SIZE_MAX = 3
SHOOTING_STAR_CHANCE = 0.005  # chance per frame
SHOOTING_STAR_SPEED = 300  # logical pixels per second
SHOOTING_STAR_LENGTH = 100  # logical pixels

# Assets
ASSET_DIR = "assets"
WATERMARK_IMAGE = "watermark.jpeg"
INTRO_IMAGE = "intro.jpeg"
ASTEROID_IMAGE = "asteroid.gif"
WATERMARK_WIDTH = 60
WATERMARK_ALPHA = 0.3
INTRO_IMAGE_WIDTH = 150

# Window
WINDOW_TITLE = "Belugaroids"
MIN_WIDTH = 320
MIN_HEIGHT = 240

# Colors
BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
GREY = (128, 128, 128)
DARK_GREY = (169, 169, 169)
SLATE_GREY = (112, 128, 144)
SKY_BLUE = (135, 206, 235)
CYAN = (0, 255, 255)
LIME = (0, 255, 0)
RED = (255, 0, 0)
DARK_RED = (139, 0, 0)
ORANGE = (255, 165, 0)
ORANGE_RED = (255, 69, 0)
YELLOW = (255, 255, 0)
SALMON = (250, 128, 114)
PINK = (255, 192, 203)
SHOOTING_STAR_COLOR = (255, 255, 200)


def frames(seconds):
    """Convert a duration in seconds to a whole number of frames"""
    return math.ceil(FPS * seconds)
