"""
A normalizer maps a token and the user context to a new token. Normalizers
are applied before filters.
"""


def normalize_trim_space(token, context=None):
    """
    The default normalizer, strips surrounding whitespace.
    """
    return token.strip()


def normalize_upper(token, context=None):
    return token.upper()


def normalize_lower(token, context=None):
    return token.lower()


def chain_normalizers(*normalizers):
    """
    Normalizer combinator.

    :param normalizers: List of normalizers.
    :returns: A normalizer applying each of normalizers in the given order.
    """

    def chained(token, context=None):
        for normalize in normalizers:
            token = normalize(token, context)
        return token

    return chained
