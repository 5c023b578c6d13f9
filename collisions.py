import numpy as np

from gamelog import game_logger
from settings import ASTEROID_SIZE


def asteroid_score(radius):
    """Points for hitting an asteroid, smaller asteroids are worth more"""
    return round((ASTEROID_SIZE - radius) / ASTEROID_SIZE * 100 + 50)


def circle_data(objects):
    """(N, 3) array of x, y, radius"""
    if not objects:
        return np.empty((0, 3))
    return np.array([[obj.position.x, obj.position.y, obj.radius] for obj in objects], dtype=float)


def hits_against(obj, data):
    """Indices into `data` whose circles overlap `obj`, in ascending order"""
    if len(data) == 0:
        return np.empty(0, dtype=int)
    distances = np.sqrt(
        (data[:, 0] - obj.position.x) ** 2 +
        (data[:, 1] - obj.position.y) ** 2
    )
    return np.where(distances < obj.radius + data[:, 2])[0]


def last_hit(obj, data):
    """Highest overlapping index, or None; matches a reverse-order scan"""
    hits = hits_against(obj, data)
    if len(hits) == 0:
        return None
    return int(hits[-1])


def break_asteroid(asteroids, index):
    """Replace the asteroid at `index` with its children (none at the smallest tier)"""
    asteroid = asteroids.pop(index)
    children = asteroid.split()
    asteroids.extend(children)
    return children


def check_ship_collisions(session):
    """Explode the ship on its first asteroid contact; True if it exploded"""
    ship = session.ship
    if ship is None or not ship.vulnerable:
        return False
    if last_hit(ship, circle_data(session.asteroids)) is None:
        return False
    ship.explode()
    return True


def check_bullet_collisions(session):
    """Each live bullet breaks at most one asteroid per frame. Returns points scored."""
    scored = 0
    asteroid_data = circle_data(session.asteroids)

    for i in range(len(session.bullets) - 1, -1, -1):
        bullet = session.bullets[i]
        if bullet.exploding:
            continue

        index = last_hit(bullet, asteroid_data)
        if index is None:
            continue

        radius = session.asteroids[index].radius
        bullet.explode()
        break_asteroid(session.asteroids, index)

        points = asteroid_score(radius)
        session.score += points
        scored += points
        game_logger.log_score_event(points, radius, session.score)

        # children can be hit by the remaining bullets this frame
        asteroid_data = circle_data(session.asteroids)

    return scored


def check_collisions(session):
    check_ship_collisions(session)
    return check_bullet_collisions(session)
