"""Errors raised while preparing label documents."""


class ShipCropError(Exception):
    """Base class for every error raised by shipcrop."""


class MalformedDocument(ShipCropError):
    """Input bytes could not be decoded as a PDF."""

    def __init__(self, message, index=None):
        super().__init__(message)
        self.index = index


class TextLayerUnavailable(ShipCropError):
    """The text view of a document, or of one of its pages, is unusable."""


class UnknownVariantOrOption(ShipCropError, KeyError):
    """A variant or option id does not belong to the selected platform."""

    def __str__(self):
        return Exception.__str__(self)


class UnknownPlatform(UnknownVariantOrOption):
    """The platform id is not in the registry."""


class InvalidCropRegion(ShipCropError, ValueError):
    """A crop region has zero or negative width or height."""


class SerializationFailure(ShipCropError):
    """The output document could not be written to bytes."""


class PipelineBusy(ShipCropError):
    """A run was started while another run on the same pipeline is active."""


class NoInputDocuments(ShipCropError, ValueError):
    """A run was started without any input buffers."""
