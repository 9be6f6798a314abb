"""Truncated lunar theory (Meeus, Astronomical Algorithms, chapter 47).

Accurate to roughly 10 arcseconds in longitude and a few kilometres in
distance, which is ample for rise/set and phase searches.
"""

import math

import numpy as np

# Periodic terms for longitude and distance. Columns are the multipliers of
# D, M, M', F followed by the sine coefficient for longitude (1e-6 degree)
# and the cosine coefficient for distance (1e-3 km).
LONGITUDE_DISTANCE_TERMS = (
    (0, 0, 1, 0, 6288774, -20905355),
    (2, 0, -1, 0, 1274027, -3699111),
    (2, 0, 0, 0, 658314, -2955968),
    (0, 0, 2, 0, 213618, -569925),
    (0, 1, 0, 0, -185116, 48888),
    (0, 0, 0, 2, -114332, -3149),
    (2, 0, -2, 0, 58793, 246158),
    (2, -1, -1, 0, 57066, -152138),
    (2, 0, 1, 0, 53322, -170733),
    (2, -1, 0, 0, 45758, -204586),
    (0, 1, -1, 0, -40923, -129620),
    (1, 0, 0, 0, -34720, 108743),
    (0, 1, 1, 0, -30383, 104755),
    (2, 0, 0, -2, 15327, 10321),
    (0, 0, 1, 2, -12528, 0),
    (0, 0, 1, -2, 10980, 79661),
    (4, 0, -1, 0, 10675, -34782),
    (0, 0, 3, 0, 10034, -23210),
    (4, 0, -2, 0, 8548, -21636),
    (2, 1, -1, 0, -7888, 24208),
    (2, 1, 0, 0, -6766, 30824),
    (1, 0, -1, 0, -5163, -8379),
    (1, 1, 0, 0, 4987, -16675),
    (2, -1, 1, 0, 4036, -12831),
    (2, 0, 2, 0, 3994, -10445),
    (4, 0, 0, 0, 3861, -11650),
    (2, 0, -3, 0, 3665, 14403),
    (0, 1, -2, 0, -2689, -7003),
    (2, 0, -1, 2, -2602, 0),
    (2, -1, -2, 0, 2390, 10056),
    (1, 0, 1, 0, -2348, 6322),
    (2, -2, 0, 0, 2236, -9884),
    (0, 1, 2, 0, -2120, 5751),
    (0, 2, 0, 0, -2069, 0),
    (2, -2, -1, 0, 2048, -4950),
    (2, 0, 1, -2, -1773, 4130),
    (2, 0, 0, 2, -1595, 0),
    (4, -1, -1, 0, 1215, -3958),
    (0, 0, 2, 2, -1110, 0),
    (3, 0, -1, 0, -892, 3258),
    (2, 1, 1, 0, -810, 2616),
    (4, -1, -2, 0, 759, -1897),
    (0, 2, -1, 0, -713, -2117),
    (2, 2, -1, 0, -700, 2354),
    (2, 1, -2, 0, 691, 0),
    (2, -1, 0, -2, 596, 0),
    (4, 0, 1, 0, 549, -1423),
    (0, 0, 4, 0, 537, -1117),
    (4, -1, 0, 0, 520, -1571),
    (1, 0, -2, 0, -487, -1739),
    (2, 1, 0, -2, -399, 0),
    (0, 0, 2, -2, -381, -4421),
    (1, 1, 1, 0, 351, 0),
    (3, 0, -2, 0, -340, 0),
    (4, 0, -3, 0, 330, 0),
    (2, -1, 2, 0, 327, 0),
    (0, 2, 1, 0, -323, 1165),
    (1, 1, -1, 0, 299, 0),
    (2, 0, 3, 0, 294, 0),
    (2, 0, -1, -2, 0, 8752),
)

# Periodic terms for latitude: multipliers of D, M, M', F and the sine
# coefficient (1e-6 degree).
LATITUDE_TERMS = (
    (0, 0, 0, 1, 5128122),
    (0, 0, 1, 1, 280602),
    (0, 0, 1, -1, 277693),
    (2, 0, 0, -1, 173237),
    (2, 0, -1, 1, 55413),
    (2, 0, -1, -1, 46271),
    (2, 0, 0, 1, 32573),
    (0, 0, 2, 1, 17198),
    (2, 0, 1, -1, 9266),
    (0, 0, 2, -1, 8822),
    (2, -1, 0, -1, 8216),
    (2, 0, -2, -1, 4324),
    (2, 0, 1, 1, 4200),
    (2, 1, 0, -1, -3359),
    (2, -1, -1, 1, 2463),
    (2, -1, 0, 1, 2211),
    (2, -1, -1, -1, 2065),
    (0, 1, -1, -1, -1870),
    (4, 0, -1, -1, 1828),
    (0, 1, 0, 1, -1794),
    (0, 0, 0, 3, -1749),
    (0, 1, -1, 1, -1565),
    (1, 0, 0, 1, -1491),
    (0, 1, 1, 1, -1475),
    (0, 1, 1, -1, -1410),
    (0, 1, 0, -1, -1344),
    (1, 0, 0, -1, -1335),
    (0, 0, 3, 1, 1107),
    (4, 0, 0, -1, 1021),
    (4, 0, -1, 1, 833),
    (0, 0, 1, -3, 777),
    (4, 0, -2, 1, 671),
    (2, 0, 0, -3, 607),
    (2, 0, 2, -1, 596),
    (2, -1, 1, -1, 491),
    (2, 0, -2, 1, -451),
    (0, 0, 3, -1, 439),
    (2, 0, 2, 1, 422),
    (2, 0, -3, -1, 421),
    (2, 1, -1, 1, -366),
    (2, 1, 0, 1, -351),
    (4, 0, 0, 1, 331),
    (2, -1, 1, 1, 315),
    (2, -2, 0, -1, 302),
    (0, 0, 1, 3, -283),
    (2, 1, 1, -1, -229),
    (1, 1, 0, -1, 223),
    (1, 1, 0, 1, 223),
    (0, 1, -2, -1, -220),
    (2, 1, -1, -1, -220),
    (1, 0, 1, 1, -185),
    (2, -1, -2, -1, 181),
    (0, 1, 2, 1, -177),
    (4, 0, -2, -1, 176),
    (4, -1, -1, -1, 166),
    (1, 0, 1, -1, -164),
    (4, 0, 1, -1, 132),
    (1, 0, -1, -1, -119),
    (4, -1, 0, -1, 115),
    (2, -2, 0, 1, 107),
)

MEAN_DISTANCE_KM = 385000.56


def _poly_deg(T: float, *coefficients: float) -> float:
    value = 0.0
    for power, c in enumerate(coefficients):
        value += c * T**power
    return math.radians(value % 360.0)


def fundamental_arguments(T: float) -> tuple[float, float, float, float, float]:
    """Mean longitude L', elongation D, solar anomaly M, lunar anomaly M', argument F.

    ``T`` is in Julian centuries of TT since J2000. Values are in radians.
    """
    Lp = _poly_deg(T, 218.3164477, 481267.88123421, -0.0015786, 1 / 538841.0, -1 / 65194000.0)
    D = _poly_deg(T, 297.8501921, 445267.1114034, -0.0018819, 1 / 545868.0, -1 / 113065000.0)
    M = _poly_deg(T, 357.5291092, 35999.0502909, -0.0001536, 1 / 24490000.0)
    Mp = _poly_deg(T, 134.9633964, 477198.8675055, 0.0087414, 1 / 69699.0, -1 / 14712000.0)
    F = _poly_deg(T, 93.2720950, 483202.0175233, -0.0036539, -1 / 3526000.0, 1 / 863310000.0)
    return Lp, D, M, Mp, F


def moon_ecliptic_of_date(T: float) -> tuple[float, float, float]:
    """Geocentric ecliptic longitude, latitude (degrees) and distance (km).

    Referred to the mean ecliptic and equinox of date, without nutation.
    """
    Lp, D, M, Mp, F = fundamental_arguments(T)
    E = 1.0 - 0.002516 * T - 0.0000074 * T**2

    sigma_l = 0.0
    sigma_r = 0.0
    for d, m, mp, f, coef_l, coef_r in LONGITUDE_DISTANCE_TERMS:
        arg = d * D + m * M + mp * Mp + f * F
        scale = E ** abs(m)
        sigma_l += scale * coef_l * math.sin(arg)
        sigma_r += scale * coef_r * math.cos(arg)

    sigma_b = 0.0
    for d, m, mp, f, coef_b in LATITUDE_TERMS:
        arg = d * D + m * M + mp * Mp + f * F
        sigma_b += E ** abs(m) * coef_b * math.sin(arg)

    # Venus, Jupiter and Earth-flattening perturbations.
    A1 = math.radians((119.75 + 131.849 * T) % 360.0)
    A2 = math.radians((53.09 + 479264.290 * T) % 360.0)
    A3 = math.radians((313.45 + 481266.484 * T) % 360.0)
    sigma_l += 3958.0 * math.sin(A1) + 1962.0 * math.sin(Lp - F) + 318.0 * math.sin(A2)
    sigma_b += (
        -2235.0 * math.sin(Lp)
        + 382.0 * math.sin(A3)
        + 175.0 * math.sin(A1 - F)
        + 175.0 * math.sin(A1 + F)
        + 127.0 * math.sin(Lp - Mp)
        - 115.0 * math.sin(Lp + Mp)
    )

    longitude = (math.degrees(Lp) + sigma_l / 1e6) % 360.0
    latitude = sigma_b / 1e6
    distance = MEAN_DISTANCE_KM + sigma_r / 1e3
    return longitude, latitude, distance


def mean_obliquity_deg(T: float) -> float:
    """Mean obliquity of the ecliptic of date (IAU 1980 polynomial)."""
    seconds = 21.448 - 46.8150 * T - 0.00059 * T**2 + 0.001813 * T**3
    return 23.0 + 26.0 / 60.0 + seconds / 3600.0


def ecliptic_to_equatorial_matrix(obliquity_deg: float) -> np.ndarray:
    eps = math.radians(obliquity_deg)
    c = math.cos(eps)
    s = math.sin(eps)
    return np.array([[1.0, 0.0, 0.0], [0.0, c, -s], [0.0, s, c]])
