#!/usr/bin/env python3
"""
Tests for keyboard/touch/gamepad aggregation into a single KeyState
"""

import pygame
import pytest

from controls import (
    GamepadInput, InputAggregator, KeyboardInput, KeyState, TouchControls, is_primary_action,
)
from settings import (
    GAME_HEIGHT, GAME_WIDTH, GAMEPAD_FIRE_BUTTON, GAMEPAD_LEFT_BUTTON, TOUCH_BUTTON_SCALE,
)


class FakeJoystick:
    """Stands in for pygame.joystick.Joystick"""

    def __init__(self, axes=(0.0, 0.0), hat=(0, 0), buttons=(), instance_id=0):
        self.axes = list(axes)
        self.hat = hat
        self.buttons = set(buttons)
        self.instance_id = instance_id

    def get_instance_id(self):
        return self.instance_id

    def get_name(self):
        return "Fake Pad"

    def get_numaxes(self):
        return len(self.axes)

    def get_axis(self, index):
        return self.axes[index]

    def get_numhats(self):
        return 1

    def get_hat(self, index):
        return self.hat

    def get_numbuttons(self):
        return 16

    def get_button(self, index):
        return 1 if index in self.buttons else 0


def key_event(event_type, key):
    return pygame.event.Event(event_type, key=key, mod=0, scancode=0, unicode="")


def finger_event(event_type, finger_id, x, y):
    return pygame.event.Event(event_type, finger_id=finger_id, touch_id=0, x=x, y=y,
                              dx=0.0, dy=0.0, pressure=1.0)


def test_keystate_or():
    merged = KeyState(up=True) | KeyState(shoot=True)
    assert merged == KeyState(up=True, shoot=True)
    assert merged.moving
    assert not KeyState(shoot=True).moving


def test_keyboard_arrows_and_wasd():
    keyboard = KeyboardInput()
    keyboard.handle_event(key_event(pygame.KEYDOWN, pygame.K_w))
    keyboard.handle_event(key_event(pygame.KEYDOWN, pygame.K_LEFT))
    keyboard.handle_event(key_event(pygame.KEYDOWN, pygame.K_SPACE))
    assert keyboard.key_state() == KeyState(up=True, left=True, shoot=True)

    keyboard.handle_event(key_event(pygame.KEYUP, pygame.K_LEFT))
    assert keyboard.key_state() == KeyState(up=True, shoot=True)


def test_keyboard_two_keys_same_direction():
    keyboard = KeyboardInput()
    keyboard.handle_event(key_event(pygame.KEYDOWN, pygame.K_UP))
    keyboard.handle_event(key_event(pygame.KEYDOWN, pygame.K_w))
    keyboard.handle_event(key_event(pygame.KEYUP, pygame.K_UP))
    assert keyboard.key_state().up


def test_keyboard_reset():
    keyboard = KeyboardInput()
    keyboard.handle_event(key_event(pygame.KEYDOWN, pygame.K_d))
    keyboard.reset()
    assert keyboard.key_state() == KeyState()


def test_touch_layout_corners():
    touch = TouchControls()
    size = min(GAME_WIDTH, GAME_HEIGHT) * TOUCH_BUTTON_SCALE
    assert touch.buttons["left"].width == int(size)
    assert touch.buttons["left"].right < GAME_WIDTH / 2
    assert touch.buttons["down"].bottom <= GAME_HEIGHT
    assert touch.buttons["shoot"].left > GAME_WIDTH / 2


def test_touch_press_and_release():
    touch = TouchControls()
    cx, cy = touch.buttons["shoot"].center
    touch.handle_event(finger_event(pygame.FINGERDOWN, 7, cx / GAME_WIDTH, cy / GAME_HEIGHT))
    assert touch.seen_touch
    assert touch.key_state() == KeyState(shoot=True)

    touch.handle_event(finger_event(pygame.FINGERUP, 7, cx / GAME_WIDTH, cy / GAME_HEIGHT))
    assert touch.key_state() == KeyState()


def test_touch_finger_slides_to_another_button():
    touch = TouchControls()
    ux, uy = touch.buttons["up"].center
    rx, ry = touch.buttons["right"].center
    touch.handle_event(finger_event(pygame.FINGERDOWN, 1, ux / GAME_WIDTH, uy / GAME_HEIGHT))
    touch.handle_event(finger_event(pygame.FINGERMOTION, 1, rx / GAME_WIDTH, ry / GAME_HEIGHT))
    assert touch.key_state() == KeyState(right=True)


def test_touch_outside_buttons():
    touch = TouchControls()
    touch.handle_event(finger_event(pygame.FINGERDOWN, 1, 0.5, 0.1))
    assert touch.seen_touch
    assert touch.key_state() == KeyState()


@pytest.mark.parametrize("joystick, expected", [
    (FakeJoystick(axes=(-0.9, 0.0)), KeyState(left=True)),
    (FakeJoystick(axes=(0.3, -0.3)), KeyState()),
    (FakeJoystick(axes=(0.0, -0.8)), KeyState(up=True)),
    (FakeJoystick(hat=(1, -1)), KeyState(right=True, down=True)),
    (FakeJoystick(buttons={GAMEPAD_LEFT_BUTTON, GAMEPAD_FIRE_BUTTON}), KeyState(left=True, shoot=True)),
])
def test_gamepad_read(joystick, expected):
    assert GamepadInput.read(joystick) == expected


def test_gamepad_hot_plug_and_merge():
    gamepad = GamepadInput()
    gamepad.add(FakeJoystick(axes=(0.0, 0.9), instance_id=1))
    gamepad.add(FakeJoystick(buttons={GAMEPAD_FIRE_BUTTON}, instance_id=2))
    assert gamepad.key_state() == KeyState(down=True, shoot=True)

    gamepad.handle_event(pygame.event.Event(pygame.JOYDEVICEREMOVED, instance_id=1))
    assert gamepad.key_state() == KeyState(shoot=True)


def test_aggregator_ors_sources():
    controls = InputAggregator()
    controls.gamepad.add(FakeJoystick(axes=(0.9, 0.0)))
    controls.handle_event(key_event(pygame.KEYDOWN, pygame.K_UP))
    assert controls.key_state() == KeyState(up=True, right=True)
    assert not controls.show_touch_controls


@pytest.mark.parametrize("event, expected", [
    (pygame.event.Event(pygame.KEYDOWN, key=pygame.K_q, mod=0, scancode=0, unicode="q"), True),
    (pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(0, 0)), True),
    (pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=3, pos=(0, 0)), True),
    (pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=4, pos=(0, 0)), False),
    (pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=5, pos=(0, 0)), False),
    (pygame.event.Event(pygame.JOYBUTTONDOWN, button=5, joy=0, instance_id=0), True),
    (pygame.event.Event(pygame.JOYHATMOTION, hat=0, value=(0, 1), joy=0, instance_id=0), True),
    (pygame.event.Event(pygame.JOYHATMOTION, hat=0, value=(0, 0), joy=0, instance_id=0), False),
    (pygame.event.Event(pygame.JOYAXISMOTION, axis=0, value=0.6, joy=0, instance_id=0), True),
    (pygame.event.Event(pygame.JOYAXISMOTION, axis=3, value=1.0, joy=0, instance_id=0), False),
    (pygame.event.Event(pygame.MOUSEMOTION, pos=(1, 1), rel=(1, 1), buttons=(0, 0, 0)), False),
])
def test_primary_action(event, expected):
    assert is_primary_action(event) == expected


def test_touch_draw_smoke():
    surface = pygame.Surface((GAME_WIDTH, GAME_HEIGHT))
    TouchControls().draw(surface)
