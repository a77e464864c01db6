"""
محرك البث (Streaming Engine) - خدمة ملفات بدعم Range Headers
CourseStream - Video Course Platform

يدعم:
- بث الفيديو مع Range Headers (التقديم والتأخير في المشغل)
- 200 للملف كامل، 206 لجزء واحد، 416 لـ Range غير قابل للتحقيق
- قراءة بأجزاء ثابتة الحجم من مقبض ملف خاص بكل طلب
- إغلاق الملف عند انقطاع الاتصال (Django يستدعي close على الـ iterator)
"""

import logging
import os
import re
from dataclasses import dataclass
from typing import Optional

from django.conf import settings
from django.http import HttpResponse, StreamingHttpResponse
from django.utils.http import content_disposition_header
from django.views import View

from .exceptions import InvalidRange, MediaIOError, MediaNotFound
from .responses import json_error
from .tasks import fire_and_forget

logger = logging.getLogger('streaming')

# bytes=<start>-<end> ; end is optional, nothing else is accepted.
_RANGE_RE = re.compile(r'bytes=(\d+)-(\d*)', re.ASCII)
# offsets longer than this are past any file and beyond int()'s digit limit
_MAX_OFFSET_DIGITS = 19


@dataclass(frozen=True)
class StoredMedia:
    """ملف مخزن كما يراه محرك البث."""
    pk: int
    path: str
    declared_length: int
    content_type: str
    filename: Optional[str] = None
    is_video: bool = False


@dataclass(frozen=True)
class ByteRange:
    """Inclusive byte range [start, end] of a file of `total` bytes."""
    start: int
    end: int
    total: int

    @property
    def length(self) -> int:
        return self.end - self.start + 1

    @property
    def content_range(self) -> str:
        return f'bytes {self.start}-{self.end}/{self.total}'


def parse_range_header(header: str, length: int) -> ByteRange:
    """
    تحليل Range header من الشكل bytes=<start>-<end>.

    - end اختياري، الافتراضي آخر بايت
    - end أكبر من الملف يُقص إلى length - 1
    - start غير صالح أو start > end أو start >= length -> InvalidRange
    """
    match = _RANGE_RE.fullmatch(header.strip())
    if not match:
        raise InvalidRange(length, header)

    start_str = match.group(1).lstrip('0')
    end_str = match.group(2)
    if len(start_str) > _MAX_OFFSET_DIGITS:
        raise InvalidRange(length, header)
    start = int(start_str or '0')

    if not end_str or len(end_str.lstrip('0')) > _MAX_OFFSET_DIGITS:
        end = length - 1
    else:
        end = int(end_str.lstrip('0') or '0')

    if start > end or start >= length:
        raise InvalidRange(length, header)

    end = min(end, length - 1)
    return ByteRange(start=start, end=end, total=length)


class RangeFileIterator:
    """
    مُكرّر للملفات مع دعم Range Headers.
    يقرأ length بايت بالضبط بدءاً من start، وإلا يرفع MediaIOError.
    """

    def __init__(self, file_obj, start: int = 0, length: int = 0, chunk_size: int = 8192):
        self.file_obj = file_obj
        self.start = start
        self.length = length
        self.chunk_size = chunk_size

    def __iter__(self):
        remaining = self.length
        try:
            self.file_obj.seek(self.start)
            while remaining > 0:
                data = self.file_obj.read(min(self.chunk_size, remaining))
                if not data:
                    raise MediaIOError(
                        f"{getattr(self.file_obj, 'name', 'file')} ended with {remaining} bytes unsent"
                    )
                remaining -= len(data)
                yield data
        except OSError as e:
            logger.error(f"Read failed on {getattr(self.file_obj, 'name', 'file')}: {e}")
            raise MediaIOError(str(e)) from e
        except MediaIOError as e:
            logger.error(f"Stream aborted: {e}")
            raise
        finally:
            self.close()

    def close(self):
        self.file_obj.close()


def open_media(stored: StoredMedia):
    """
    فتح الملف والتحقق من وجوده على القرص.
    الحجم يُقرأ من القرص الآن ولا يُعتمد على القيمة المخزنة.
    """
    try:
        file_handle = open(stored.path, 'rb')
    except (FileNotFoundError, IsADirectoryError, NotADirectoryError):
        logger.warning(f"Backing file missing for media {stored.pk}: {stored.path}")
        raise MediaNotFound(f"Backing file missing for media {stored.pk}")

    size = os.fstat(file_handle.fileno()).st_size
    if stored.declared_length and stored.declared_length != size:
        logger.info(
            f"Declared length {stored.declared_length} differs from on-disk size {size} "
            f"for media {stored.pk}; serving on-disk size"
        )
    return file_handle, size


def range_not_satisfiable(length: int) -> HttpResponse:
    response = HttpResponse(status=416)
    response['Content-Range'] = f'bytes */{length}'
    return response


def build_stream_response(stored: StoredMedia, range_header: Optional[str] = None,
                          as_attachment: bool = False) -> StreamingHttpResponse:
    """
    بناء استجابة البث (200 أو 206).

    يرفع MediaNotFound أو InvalidRange قبل إرسال أي بايت.
    أي خطأ قبل إرجاع الاستجابة يغلق الملف.
    """
    file_handle, size = open_media(stored)
    try:
        return _stream_response(file_handle, size, stored, range_header, as_attachment)
    except Exception:
        file_handle.close()
        raise


def _stream_response(file_handle, size, stored, range_header, as_attachment):
    chunk_size = getattr(settings, 'STREAM_CHUNK_SIZE', 8192)

    if range_header:
        byte_range = parse_range_header(range_header, size)
        iterator = RangeFileIterator(file_handle, start=byte_range.start,
                                     length=byte_range.length, chunk_size=chunk_size)
        response = StreamingHttpResponse(iterator, status=206, content_type=stored.content_type)
        response['Content-Length'] = byte_range.length
        response['Content-Range'] = byte_range.content_range
        response['Accept-Ranges'] = 'bytes'
    else:
        iterator = RangeFileIterator(file_handle, start=0, length=size, chunk_size=chunk_size)
        response = StreamingHttpResponse(iterator, status=200, content_type=stored.content_type)
        response['Content-Length'] = size
        response['Accept-Ranges'] = 'bytes'

    if as_attachment:
        filename = stored.filename or os.path.basename(stored.path)
        response['Content-Disposition'] = content_disposition_header(True, filename)

    return response


class RangeStreamView(View):
    """
    بث الملفات مع دعم Range Headers الكامل.

    الصنف الفرعي يحدد:
        get_media(pk) -> StoredMedia     (يرفع MediaNotFound إذا لم يوجد)
        on_stream_started(stored)        (يُنفذ في الخلفية بعد نجاح بدء البث)
    """

    as_attachment = False
    not_found_message = 'الملف غير موجود'

    def get_media(self, pk) -> StoredMedia:
        raise NotImplementedError

    def on_stream_started(self, stored: StoredMedia) -> None:
        pass

    def get(self, request, pk):
        try:
            stored, response = self.open_stream(request, pk)
        except MediaNotFound:
            return json_error(self.not_found_message, status=404)
        except InvalidRange as e:
            logger.debug(f"416 for media {pk}: {e}")
            return range_not_satisfiable(e.length)

        fire_and_forget(self.on_stream_started, stored)
        return response

    def head(self, request, pk):
        """نفس headers الـ GET بدون قراءة الملف وبدون زيادة العدادات."""
        try:
            _, response = self.open_stream(request, pk)
        except MediaNotFound:
            return HttpResponse(status=404)
        except InvalidRange as e:
            return range_not_satisfiable(e.length)

        head_response = HttpResponse(status=response.status_code, content_type=response['Content-Type'])
        for header in ('Content-Length', 'Content-Range', 'Accept-Ranges', 'Content-Disposition'):
            if response.has_header(header):
                head_response[header] = response[header]
        response.close()
        return head_response

    def open_stream(self, request, pk):
        stored = self.get_media(pk)
        response = build_stream_response(
            stored,
            request.headers.get('Range'),
            as_attachment=self.as_attachment,
        )
        return stored, response
