from __future__ import annotations


class RevealSniperError(Exception):
    pass


class StartupError(RevealSniperError):
    """Fatal misconfiguration detected before polling starts."""


class FeedError(RevealSniperError):
    """The Spore feed could not be fetched or parsed. Recovered by the poller."""


class SwapError(RevealSniperError):
    """Failure inside one target's swap sub-flow.

    Caught by the executor and turned into a failed outcome; never reaches the
    sibling sub-flow or the poller.
    """

    stage = "swap"


class QuoteError(SwapError):
    stage = "quote"


class SwapBuildError(SwapError):
    stage = "build"


class SubmissionError(SwapError):
    stage = "submit"


class ConfirmationError(SwapError):
    stage = "confirm"
