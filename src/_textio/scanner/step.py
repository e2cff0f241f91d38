from typing import NamedTuple, Optional

from _textio.scanner.scan_kind import ScanKind


class ScanStep(NamedTuple):
    """
    The outcome of one scan step. advance is the number of bytes to drop
    from the front of the buffer, token the bytes to emit (None if nothing
    is emitted).
    """

    kind: ScanKind
    advance: int = 0
    token: Optional[bytes] = None


NEED_MORE = ScanStep(ScanKind.NEED_MORE)
END_OF_TOKENS = ScanStep(ScanKind.STOP)


def pending_before(pattern, buffer, index, inclusive):
    """
    Whether an incomplete match of pattern at the tail of buffer starts
    before (or at, if inclusive) index.
    """
    pending = pattern.pending_start(buffer)
    if pending is None:
        return False
    return pending <= index if inclusive else pending < index


def scan(delimiter, buffer, at_eof):
    """
    Decide the next step of scanning buffer with the given delimiter.

    A stop match takes precedence over a token match starting at the same
    index or later. A stop match at the start of the buffer terminates
    without emitting, otherwise the bytes before it are emitted as the final
    token. Without any match, the remaining bytes are the final token at the
    end of input, and more data is requested otherwise.

    >>> scan(Delimiter(), b"a\\nb", at_eof=False)
    ScanStep(kind=<ScanKind.EMIT: 1>, advance=2, token=b'a')

    :param delimiter: The Delimiter to scan for.
    :param buffer: The bytes read from the source but not yet consumed.
    :param at_eof: Whether the source is exhausted.
    :returns: A ScanStep.
    """
    if at_eof and not buffer:
        return END_OF_TOKENS

    token, stop = delimiter.token, delimiter.stop
    token_match = token.find(buffer)
    stop_match = stop.find(buffer) if stop.enabled else None

    if stop_match is not None and (
        token_match is None or stop_match.start <= token_match.start
    ):
        if not at_eof and (
            pending_before(token, buffer, stop_match.start, inclusive=False)
            or pending_before(stop, buffer, stop_match.start, inclusive=False)
        ):
            return NEED_MORE
        if stop_match.start > 0:
            start = stop_match.start
            return ScanStep(ScanKind.FINAL, start, bytes(buffer[:start]))
        return ScanStep(ScanKind.STOP, stop_match.width)

    if token_match is not None:
        if not at_eof:
            if token.may_extend(buffer, token_match):
                return NEED_MORE
            if pending_before(token, buffer, token_match.start, inclusive=False):
                return NEED_MORE
            if pending_before(stop, buffer, token_match.start, inclusive=True):
                return NEED_MORE
        return ScanStep(
            ScanKind.EMIT, token_match.end, bytes(buffer[: token_match.start])
        )

    if at_eof:
        return ScanStep(ScanKind.FINAL, len(buffer), bytes(buffer))

    return NEED_MORE
