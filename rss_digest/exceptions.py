class DigestError(Exception):
    """Base class for errors raised while building or sending a digest."""


class FeedFetchError(DigestError):
    """Raised when an RSS feed cannot be fetched."""


class FeedParseError(DigestError):
    """Raised when a fetched document cannot be parsed into a feed."""


class NoFeedsAvailableError(DigestError):
    """Raised when every configured feed failed, leaving nothing to aggregate."""


class DeliveryError(DigestError):
    """Raised when the email provider rejects or fails to deliver the digest."""
