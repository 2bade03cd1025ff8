from django.conf import settings

from algorithms import matching


def radius_km(name):
    """
    Configured default radius, e.g. radius_km('BROADCAST_RADIUS_KM').
    Falls back to the constant of the same name in algorithms.matching.
    """
    return float(getattr(settings, f'RAKHTSETU_{name}', getattr(matching, name)))
