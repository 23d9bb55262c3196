"""
Contains all the math helpers that don't quite fit anywhere else
"""

import math

import numpy as np


def clamp(v, minV, maxV):
    """

    :param v: value to clamp
    :param minV: minimum value to clamp to
    :param maxV: maximum value to clamp to
    :return: the value V clamped between minV and maxV
    """
    return max(minV, min(v, maxV))


def normalize_to_range(v, a, b):
    """
    Normalizes the input value between a and b

    :param v: value to normalize
    :param a: minimum value to normalize to
    :param b: maximum value to normalize to
    :return: the value v normalized within the range a->b
    """
    return (v - a) / (b - a)


def unit_vector(vector):
    """
    :param vector: Vector to find the unit vector of

    :return: the normalized vector of the vector provided, using numpy
    """
    vector = np.asarray(vector, dtype=float)
    return vector / np.linalg.norm(vector)


def direction_to_pitch_heading(direction):
    """
    Converts a direction vector to the pitch and heading the autopilot
    understands, using krpc's surface frame axes (x up, y north, z east)
    relative to whatever reference frame the vector is expressed in.

    :param direction: 3-length (x, y, z)
    :return: pitch, heading in degrees, heading in [0, 360)
    """
    x, y, z = unit_vector(direction)
    pitch = math.degrees(math.asin(clamp(x, -1.0, 1.0)))
    heading = (math.degrees(math.atan2(z, y)) + 360) % 360

    return pitch, heading


def vis_viva_speed(mu, r, a):
    """
    Orbital speed at radius r on an orbit with semi-major axis a

    :param mu: gravitational parameter of the body, m^3/s^2
    :param r: distance from the body's centre, m
    :param a: semi-major axis, m
    """
    return math.sqrt(mu * ((2. / r) - (1. / a)))


def circular_speed(mu, r):
    """
    vis-viva with a == r
    """
    return math.sqrt(mu / r)
