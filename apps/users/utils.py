"""
Utility functions for the Users app.
"""


def generate_username(email, max_length=30):
    """
    Derive a unique username from the local part of *email*.

    Args:
        email: The user's email address.
        max_length: Maximum length of the base username (default 30).

    Returns:
        The email prefix, suffixed with a counter if it is already taken.
    """
    from apps.users.models import User

    base_username = email.split('@')[0][:max_length]
    username = base_username
    counter = 1
    while User.objects.filter(username=username).exists():
        username = f'{base_username}{counter}'
        counter += 1
    return username
