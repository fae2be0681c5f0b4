"""Custom exceptions for the renditions pipeline."""


class RenditionsError(Exception):
    """Base exception for all renditions pipeline errors."""


class ConfigurationError(RenditionsError):
    """Error raised for invalid configuration options."""


class KeyResolutionError(RenditionsError):
    """Error raised when a destination key cannot be derived."""


class InvalidKeyShapeError(KeyResolutionError):
    """Source key has fewer than two path segments."""


class IdenticalKeysError(KeyResolutionError):
    """Destination would overwrite the source object."""


class UnknownImageTypeError(KeyResolutionError):
    """Source key carries no file extension."""


class S3Error(RenditionsError):
    """Error raised for S3 related failures."""


class FetchError(S3Error):
    """Reading the source object failed."""


class StoreError(S3Error):
    """Writing a rendition failed."""


class ImageProcessingError(RenditionsError):
    """Error raised when transforming an image fails."""


class DecodeError(ImageProcessingError):
    """Bytes could not be decoded as an image."""


class TransformError(ImageProcessingError):
    """Crop or resize could not be applied to the decoded image."""


class EncodeError(ImageProcessingError):
    """Rendition could not be serialized in the requested format."""


class RenditionPipelineError(RenditionsError):
    """Overall failure of an invocation, carrying the first job error."""
