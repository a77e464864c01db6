"""
أخطاء محرك البث (Streaming Errors)
CourseStream - Video Course Platform

- MediaNotFound: معرف غير موجود أو ملف مفقود على القرص -> 404
- InvalidRange: Range غير صالح أو خارج حدود الملف -> 416
- MediaIOError: فشل القراءة بعد إرسال الـ headers -> قطع الاتصال
"""


class StreamingError(Exception):
    """Base exception for the streaming engine."""
    pass


class MediaNotFound(StreamingError):
    """Raised when a media id is unknown or its backing file is missing."""
    pass


class InvalidRange(StreamingError):
    """Raised when a Range header is malformed or cannot be satisfied."""

    def __init__(self, length: int, header: str = ''):
        super().__init__(f"Unsatisfiable range {header!r} for length {length}")
        self.length = length
        self.header = header


class MediaIOError(StreamingError):
    """Raised from a body iterator when a read fails mid-stream."""
    pass
