import math


class Vector2D:
    def __init__(self, x=0, y=0):
        self.x = x
        self.y = y

    def __repr__(self):
        return f"Vector2D({self.x!r}, {self.y!r})"

    def magnitude(self):
        return math.sqrt(self.x**2 + self.y**2)


def dist_between_points(x1, y1, x2, y2):
    return math.sqrt((x2 - x1) ** 2 + (y2 - y1) ** 2)


def heading_offset(x, y, distance, angle):
    """Point `distance` away from (x, y) along a heading.

    Headings use the y-up convention: 0 is right, pi/2 is up, so the screen
    y offset is negated.
    """
    return (x + distance * math.cos(angle), y - distance * math.sin(angle))


def wrap_coordinate(value, limit, margin=0):
    """Teleport a coordinate that left [-margin, limit + margin] to the other side"""
    if value < -margin:
        return limit + margin
    if value > limit + margin:
        return -margin
    return value
