import logging
from enum import Enum, auto, unique
from typing import NamedTuple

logger = logging.getLogger(__name__)


@unique
class Verdict(Enum):
    ACCEPTED = auto()
    SKIPPED = auto()
    REJECTED = auto()


class ProcessedToken(NamedTuple):
    """
    A token after normalization and filtering. For rejected tokens, offset
    is the number of token bytes processed before it.
    """

    verdict: Verdict
    text: str
    offset: int = -1


class ProcessingPipeline:
    """
    Normalizes and then filters raw tokens.

    >>> pipeline = ProcessingPipeline(filter=filter_min_length(3))
    >>> pipeline.process(b" hi ")
    ProcessedToken(verdict=<Verdict.SKIPPED: 2>, text='hi', offset=-1)

    The pipeline keeps a running offset, counting the bytes of accepted and
    skipped tokens (after normalization). It is only used to locate rejected
    tokens in error messages.
    """

    def __init__(
        self,
        normalize=None,
        filter=None,
        fail_on_invalid=False,
        user_context=None,
        encoding="utf-8",
    ):
        self.normalize = normalize
        self.filter = filter
        self.fail_on_invalid = fail_on_invalid
        self.user_context = user_context
        self.encoding = encoding
        self.offset = 0

    @classmethod
    def from_config(cls, config):
        return cls(
            normalize=config.normalize,
            filter=config.filter,
            fail_on_invalid=config.fail_on_invalid,
            user_context=config.user_context,
            encoding=config.encoding,
        )

    def decode(self, raw_token):
        return raw_token.decode(self.encoding, errors="replace")

    def process(self, raw_token):
        """
        :param raw_token: The bytes of a token as emitted by the scanner.
        :returns: A ProcessedToken.
        """
        token = self.decode(raw_token)
        if self.normalize is not None:
            token = self.normalize(token, self.user_context)

        if self.filter is not None and not self.filter(token, self.user_context):
            if self.fail_on_invalid:
                return ProcessedToken(Verdict.REJECTED, token, self.offset)
            logger.debug("Skipping invalid token %r at %d", token, self.offset)
            self.offset += len(token.encode(self.encoding))
            return ProcessedToken(Verdict.SKIPPED, token)

        self.offset += len(token.encode(self.encoding))
        return ProcessedToken(Verdict.ACCEPTED, token)
