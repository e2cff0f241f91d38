"""
A filter takes a token and the user context and returns True if the token
is valid. Filters are evaluated on the normalized token.
"""

import re


def filter_non_empty(token, context=None):
    """
    Rejects empty and whitespace only tokens.
    """
    return token.strip() != ""


def filter_min_length(length):
    """
    :returns: Filter accepting tokens of at least length characters.
    """

    def min_length(token, context=None):
        return len(token) >= length

    return min_length


def filter_max_length(length):
    """
    :returns: Filter accepting tokens of at most length characters.
    """

    def max_length(token, context=None):
        return len(token) <= length

    return max_length


def filter_regexp(expression):
    """
    :param expression: A regular expression, either compiled or its source.
    :returns: Filter accepting tokens that the expression matches (anywhere).
    """
    if isinstance(expression, str):
        expression = re.compile(expression)

    def matches(token, context=None):
        return expression.search(token) is not None

    return matches


def all_of(*filters):
    """
    Filter combinator.

    :param filters: List of filters.
    :returns: A filter accepting a token only if every filter does.
    """

    def all_of_filter(token, context=None):
        return all(f(token, context) for f in filters)

    return all_of_filter


def any_of(*filters):
    """
    Filter combinator.

    :param filters: List of filters.
    :returns: A filter accepting a token if at least one filter does.
    """

    def any_of_filter(token, context=None):
        return any(f(token, context) for f in filters)

    return any_of_filter


def negate(to_negate):
    def negated(token, context=None):
        return not to_negate(token, context)

    return negated
