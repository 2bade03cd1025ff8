"""
Blood Type Compatibility Helper
Determines which donor blood groups may give to which recipient blood groups
"""

from algorithms.exceptions import InvalidBloodGroup

BLOOD_GROUPS = ('A+', 'A-', 'B+', 'B-', 'AB+', 'AB-', 'O+', 'O-')

BLOOD_GROUP_CHOICES = [(group, group) for group in BLOOD_GROUPS]

# Recipient -> donor groups allowed to give to them
COMPATIBLE_DONOR_GROUPS = {
    'A+': frozenset(['A+', 'A-', 'O+', 'O-']),
    'A-': frozenset(['A-', 'O-']),
    'B+': frozenset(['B+', 'B-', 'O+', 'O-']),
    'B-': frozenset(['B-', 'O-']),
    'AB+': frozenset(BLOOD_GROUPS),  # Universal recipient
    'AB-': frozenset(['AB-', 'A-', 'B-', 'O-']),
    'O+': frozenset(['O+', 'O-']),
    'O-': frozenset(['O-']),
}


def normalize_blood_group(value):
    """
    Clean up a blood group typed by a user ('ab +' -> 'AB+')

    Raises:
        InvalidBloodGroup: if the value is not one of the eight groups
    """
    if not isinstance(value, str):
        raise InvalidBloodGroup(f"Unrecognized blood group: {value!r}")

    group = value.upper().replace(' ', '')
    if group not in COMPATIBLE_DONOR_GROUPS:
        raise InvalidBloodGroup(f"Unrecognized blood group: {value!r}")
    return group


def compatible_donor_groups(recipient_blood_group):
    """
    Get the set of blood groups that can donate to the recipient

    Args:
        recipient_blood_group: Recipient's blood group (e.g., 'A+')

    Returns:
        frozenset of donor blood groups
    """
    try:
        return COMPATIBLE_DONOR_GROUPS[recipient_blood_group]
    except (KeyError, TypeError):
        raise InvalidBloodGroup(f"Unrecognized blood group: {recipient_blood_group!r}") from None


def is_compatible(donor_blood_group, recipient_blood_group):
    """
    Check if donor blood group is compatible with recipient

    Returns:
        Boolean: True if compatible, False otherwise
    """
    return donor_blood_group in compatible_donor_groups(recipient_blood_group)
