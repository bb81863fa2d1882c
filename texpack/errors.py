class TexpackError(RuntimeError):
    """base for all errors raised while converting texture packages"""


class MalformedContainer(TexpackError):
    """truncated buffer, out-of-range pointer or inconsistent size"""


class UnknownFormat(TexpackError, ValueError):
    """pixel format discriminant / name outside the known set"""


class MissingMetadata(TexpackError):
    """image file without a paired metadata sidecar"""


class MalformedMetadata(TexpackError):
    """metadata sidecar is missing fields or has bad values"""


class UnsupportedDimensions(TexpackError):
    """sizes or offsets that don't fit in 32 bits"""


class DuplicateId(TexpackError):
    """more than one texture shares an id (filename collision)"""


class InvalidTexture(TexpackError, ValueError):
    """pixels are not a (height, width, 4) array of 0..255 values"""
