import logging

import pygame

from settings import (
    GAME_HEIGHT, GAME_WIDTH, GAMEPAD_DOWN_BUTTON, GAMEPAD_FIRE_BUTTON, GAMEPAD_LEFT_BUTTON,
    GAMEPAD_RIGHT_BUTTON, GAMEPAD_THRESHOLD, GAMEPAD_UP_BUTTON, TOUCH_BUTTON_SCALE,
    TOUCH_FONT_SCALE, TOUCH_GAP_SCALE, TOUCH_SHOOT_SCALE, WHITE,
)

logger = logging.getLogger(__name__)

DIRECTIONS = ("up", "down", "left", "right")


class KeyState:
    """Normalized directional/fire input for one frame"""

    __slots__ = ("up", "down", "left", "right", "shoot")

    def __init__(self, up=False, down=False, left=False, right=False, shoot=False):
        self.up = up
        self.down = down
        self.left = left
        self.right = right
        self.shoot = shoot

    @classmethod
    def from_names(cls, names):
        return cls(**{name: True for name in names})

    def __or__(self, other):
        return KeyState(
            self.up or other.up,
            self.down or other.down,
            self.left or other.left,
            self.right or other.right,
            self.shoot or other.shoot,
        )

    def __eq__(self, other):
        if not isinstance(other, KeyState):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name) for name in self.__slots__)

    def __repr__(self):
        held = [name for name in self.__slots__ if getattr(self, name)]
        return f"KeyState({', '.join(held)})"

    @property
    def moving(self):
        return self.up or self.down or self.left or self.right


def is_primary_action(event):
    """True for any input that starts or restarts a game"""
    if event.type in (pygame.KEYDOWN, pygame.FINGERDOWN, pygame.JOYBUTTONDOWN):
        return True
    if event.type == pygame.MOUSEBUTTONDOWN:
        # wheel scrolls arrive as buttons 4 and up
        return event.button in (1, 2, 3)
    if event.type == pygame.JOYHATMOTION:
        return tuple(event.value) != (0, 0)
    if event.type == pygame.JOYAXISMOTION:
        return event.axis in (0, 1) and abs(event.value) > GAMEPAD_THRESHOLD
    return False


class KeyboardInput:
    KEY_MAP = {
        pygame.K_UP: "up",
        pygame.K_w: "up",
        pygame.K_DOWN: "down",
        pygame.K_s: "down",
        pygame.K_LEFT: "left",
        pygame.K_a: "left",
        pygame.K_RIGHT: "right",
        pygame.K_d: "right",
        pygame.K_SPACE: "shoot",
    }

    def __init__(self):
        self.held = {}  # key code -> action name

    def handle_event(self, event):
        if event.type == pygame.KEYDOWN and event.key in self.KEY_MAP:
            self.held[event.key] = self.KEY_MAP[event.key]
        elif event.type == pygame.KEYUP:
            self.held.pop(event.key, None)

    def key_state(self):
        return KeyState.from_names(set(self.held.values()))

    def reset(self):
        self.held.clear()


class TouchControls:
    """On-screen d-pad (bottom-left) and fire button (bottom-right).

    Rects are in logical coordinates. Finger positions arrive normalized to
    the window, so the owner passes `to_logical` to undo the letterboxing.
    """

    def __init__(self, width=GAME_WIDTH, height=GAME_HEIGHT, to_logical=None):
        self.width = width
        self.height = height
        self.to_logical = to_logical or (lambda x, y: (x * width, y * height))
        self.fingers = {}  # finger_id -> button name
        self.seen_touch = False
        self.buttons = self.layout()
        self._font = None

    def layout(self):
        min_dim = min(self.width, self.height)
        size = min_dim * TOUCH_BUTTON_SCALE
        shoot = min_dim * TOUCH_SHOOT_SCALE
        gap = min_dim * TOUCH_GAP_SCALE
        margin = size / 2
        step = size + gap

        left_x = margin
        top_y = self.height - margin - 3 * size - 2 * gap
        return {
            "up": pygame.Rect(left_x + step, top_y, size, size),
            "left": pygame.Rect(left_x, top_y + step, size, size),
            "right": pygame.Rect(left_x + 2 * step, top_y + step, size, size),
            "down": pygame.Rect(left_x + step, top_y + 2 * step, size, size),
            "shoot": pygame.Rect(self.width - margin - shoot, self.height - margin - shoot - step / 2, shoot, shoot),
        }

    def button_at(self, pos):
        for name, rect in self.buttons.items():
            if rect.collidepoint(pos):
                return name
        return None

    def handle_event(self, event):
        if event.type in (pygame.FINGERDOWN, pygame.FINGERMOTION):
            if event.type == pygame.FINGERDOWN:
                self.seen_touch = True
            name = self.button_at(self.to_logical(event.x, event.y))
            if name is None:
                self.fingers.pop(event.finger_id, None)
            else:
                self.fingers[event.finger_id] = name
        elif event.type == pygame.FINGERUP:
            self.fingers.pop(event.finger_id, None)

    def key_state(self):
        return KeyState.from_names(set(self.fingers.values()))

    def reset(self):
        self.fingers.clear()

    def _label_font(self):
        if self._font is None:
            size = max(8, int(min(self.width, self.height) * TOUCH_FONT_SCALE))
            self._font = pygame.font.Font(None, size)
        return self._font

    def draw(self, surface):
        pressed = set(self.fingers.values())
        overlay = pygame.Surface((self.width, self.height), pygame.SRCALPHA)

        for name in DIRECTIONS:
            rect = self.buttons[name]
            alpha = 102 if name in pressed else 51
            pygame.draw.rect(overlay, (255, 255, 255, alpha), rect, border_radius=int(rect.width * 0.2))
            pygame.draw.polygon(overlay, (255, 255, 255, 200), self._arrow(name, rect))

        rect = self.buttons["shoot"]
        alpha = 102 if "shoot" in pressed else 51
        pygame.draw.circle(overlay, (255, 255, 255, alpha), rect.center, rect.width / 2)
        surface.blit(overlay, (0, 0))

        label = self._label_font().render("FIRE", True, WHITE)
        surface.blit(label, label.get_rect(center=rect.center))

    @staticmethod
    def _arrow(name, rect):
        cx, cy = rect.center
        r = rect.width * 0.25
        if name == "up":
            return [(cx, cy - r), (cx - r, cy + r), (cx + r, cy + r)]
        if name == "down":
            return [(cx, cy + r), (cx - r, cy - r), (cx + r, cy - r)]
        if name == "left":
            return [(cx - r, cy), (cx + r, cy - r), (cx + r, cy + r)]
        return [(cx + r, cy), (cx - r, cy - r), (cx - r, cy + r)]


class GamepadInput:
    """Connected joysticks, keyed by SDL instance id"""

    def __init__(self):
        self.joysticks = {}

    def handle_event(self, event):
        if event.type == pygame.JOYDEVICEADDED:
            joystick = pygame.joystick.Joystick(event.device_index)
            self.add(joystick)
        elif event.type == pygame.JOYDEVICEREMOVED:
            self.remove(event.instance_id)

    def add(self, joystick):
        self.joysticks[joystick.get_instance_id()] = joystick
        logger.info("Gamepad connected: %s", joystick.get_name())

    def remove(self, instance_id):
        joystick = self.joysticks.pop(instance_id, None)
        if joystick is not None:
            logger.info("Gamepad disconnected: %s", joystick.get_name())

    @staticmethod
    def read(joystick):
        """KeyState for one joystick from its stick, hat and buttons"""
        def axis(index):
            return joystick.get_axis(index) if index < joystick.get_numaxes() else 0.0

        def button(index):
            return index < joystick.get_numbuttons() and bool(joystick.get_button(index))

        hat_x, hat_y = joystick.get_hat(0) if joystick.get_numhats() > 0 else (0, 0)
        axis_x, axis_y = axis(0), axis(1)

        # hat y is +1 for up, stick y is negative for up
        return KeyState(
            up=axis_y < -GAMEPAD_THRESHOLD or hat_y > 0 or button(GAMEPAD_UP_BUTTON),
            down=axis_y > GAMEPAD_THRESHOLD or hat_y < 0 or button(GAMEPAD_DOWN_BUTTON),
            left=axis_x < -GAMEPAD_THRESHOLD or hat_x < 0 or button(GAMEPAD_LEFT_BUTTON),
            right=axis_x > GAMEPAD_THRESHOLD or hat_x > 0 or button(GAMEPAD_RIGHT_BUTTON),
            shoot=button(GAMEPAD_FIRE_BUTTON),
        )

    def key_state(self):
        state = KeyState()
        for joystick in self.joysticks.values():
            state = state | self.read(joystick)
        return state


class InputAggregator:
    """OR of keyboard, touch and gamepad into a single KeyState"""

    def __init__(self, to_logical=None):
        self.keyboard = KeyboardInput()
        self.touch = TouchControls(to_logical=to_logical)
        self.gamepad = GamepadInput()

    def handle_event(self, event):
        self.keyboard.handle_event(event)
        self.touch.handle_event(event)
        self.gamepad.handle_event(event)

    def key_state(self):
        return self.keyboard.key_state() | self.touch.key_state() | self.gamepad.key_state()

    def reset(self):
        self.keyboard.reset()
        self.touch.reset()

    @property
    def show_touch_controls(self):
        return self.touch.seen_touch
