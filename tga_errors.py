# tga_errors.py


class TGAError(ValueError):
    pass


class TruncatedHeader(TGAError):
    pass


class TruncatedData(TGAError):
    pass


class CorruptData(TGAError):
    """Run-length stream decodes to more bytes than the image holds."""


class UnsupportedFormat(TGAError):
    pass


class WriteFailed(TGAError):
    pass
