"""
Exceptions raised by the matching core.
The API layer maps these onto HTTP responses (see api/exceptions.py).
"""


class MatchingError(Exception):
    """Base class for every error raised before or during matching"""
    status_code = 400
    default_code = 'invalid'


class InvalidCoordinates(MatchingError, ValueError):
    default_code = 'invalid_coordinates'


class InvalidBloodGroup(MatchingError, ValueError):
    default_code = 'invalid_blood_group'


class InvalidStatusTransition(MatchingError):
    default_code = 'invalid_status_transition'


class DonorLookupError(MatchingError):
    """The donor repository could not be queried. Callers decide whether to retry."""
    status_code = 503
    default_code = 'donor_lookup_failed'
