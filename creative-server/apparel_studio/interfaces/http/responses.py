"""HTTP delivery target for order bundles."""

from urllib.parse import quote

from fastapi import Response

ZIP_MEDIA_TYPE = "application/zip"


def content_disposition(filename: str) -> str:
    # the plain parameter must stay latin-1; the RFC 5987 one carries the real name
    fallback = filename.encode("ascii", "ignore").decode("ascii").replace('"', "_") or "bundle.zip"
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"


class ResponseArchiveDelivery:
    """Wraps the archive in a download response carrying its filename."""

    async def deliver(self, data: bytes, filename: str) -> Response:
        return Response(
            content=data,
            media_type=ZIP_MEDIA_TYPE,
            headers={"Content-Disposition": content_disposition(filename)},
        )
