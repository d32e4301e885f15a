"""
Atmospheric Stability Classification.

Derives the Pasquill-Gifford stability class (A = very unstable ... F = very
stable) from surface observations using the Turner insolation table:

    Daytime:   wind speed x incoming solar radiation (cloud cover proxy)
    Nighttime: wind speed x cloud cover

Transitional cells of the table (A-B, B-C, C-D) are reported by
``stability_label``; ``classify_stability`` resolves them to the more
unstable letter so downstream lookups always receive a single class.
"""

from config import (
    KMH_WIND_THRESHOLD,
    KMH_TO_MS,
    DAY_CLEAR_CLOUD_PCT,
    DAY_PARTLY_CLOUD_PCT,
    NIGHT_CLOUDY_PCT,
)


def normalize_wind_speed(wind_speed: float) -> float:
    """Return wind speed in m/s, treating values above 20 as km/h."""
    if wind_speed > KMH_WIND_THRESHOLD:
        return wind_speed / KMH_TO_MS
    return wind_speed


def stability_label(wind_speed: float, cloud_cover: float, is_day) -> str:
    """
    Look up the Pasquill-Gifford table cell for the given conditions.

    Args:
        wind_speed: 10 m wind speed (m/s, or km/h if > 20).
        cloud_cover: Cloud cover in percent.
        is_day: Truthy for daytime (API flag 1), falsy for night (0).

    Returns:
        A class letter ``"A"``-``"F"`` or a transitional label such as ``"A-B"``.
    """
    u = normalize_wind_speed(wind_speed)

    if is_day:
        if cloud_cover < DAY_CLEAR_CLOUD_PCT:
            # Strong insolation
            if u < 2:
                return "A"
            if u < 3:
                return "A-B"
            if u < 5:
                return "B"
            if u < 6:
                return "C"
            return "D"
        if cloud_cover < DAY_PARTLY_CLOUD_PCT:
            # Moderate insolation
            if u < 2:
                return "B"
            if u < 3:
                return "B-C"
            if u < 5:
                return "C"
            if u < 6:
                return "C-D"
            return "D"
        # Overcast
        if u < 2:
            return "C"
        return "D"

    if cloud_cover >= NIGHT_CLOUDY_PCT:
        if u < 2.5:
            return "E"
        return "D"
    if u < 2.5:
        return "F"
    if u < 4:
        return "E"
    return "D"


def classify_stability(wind_speed: float, cloud_cover: float, is_day) -> str:
    """Return the Pasquill-Gifford class as a single letter A-F.

    Never fails for finite inputs; transitional labels resolve to their
    first (more unstable) letter.
    """
    return stability_label(wind_speed, cloud_cover, is_day)[0]
