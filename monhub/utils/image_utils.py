import re
from typing import Iterable, Optional, Union

from monhub.config import settings
from monhub.schemas.property import ImageData

# Simple gray placeholder as data URL
PLACEHOLDER_IMAGE = (
    "data:image/svg+xml;base64,PHN2ZyB3aWR0aD0iNDAwIiBoZWlnaHQ9IjMwMCIgeG1sbnM9Imh0dHA6"
    "Ly93d3cudzMub3JnLzIwMDAvc3ZnIj48cmVjdCB3aWR0aD0iMTAwJSIgaGVpZ2h0PSIxMDAlIiBmaWxsPSIj"
    "ZjNmNGY2Ii8+PHRleHQgeD0iNTAlIiB5PSI1MCUiIGZvbnQtZmFtaWx5PSJBcmlhbCwgc2Fucy1zZXJpZiIg"
    "Zm9udC1zaXplPSIxOCIgZmlsbD0iIzk5YTNhZiIgdGV4dC1hbmNob3I9Im1pZGRsZSIgZHk9Ii4zZW0iPklt"
    "YWdlIG5vbiBkaXNwb25pYmxlPC90ZXh0Pjwvc3ZnPg=="
)

# Global endpoint first, then regional (s3.<region>.amazonaws.com)
_S3_PATTERNS = [
    re.compile(r"^https://[^/]+\.s3\.amazonaws\.com/(.*)"),
    re.compile(r"^https://[^/]+\.s3\.[^/]+\.amazonaws\.com/(.*)"),
]

SIZES = ("original", "large", "medium", "thumbnail")


def to_cdn_url(url: Optional[str]) -> Optional[str]:
    """Rewrite a direct S3 object URL onto the CDN domain.

    Empty values, data URIs, CDN URLs and anything that is not an S3 URL
    are returned unchanged.
    """
    if not url or url.startswith("data:"):
        return url

    if url.startswith(settings.CDN_URL) or url.startswith(settings.CDN_FALLBACK_URL):
        return url

    if "amazonaws.com" in url and ".s3." in url:
        for pattern in _S3_PATTERNS:
            match = pattern.match(url)
            if match and match.group(1):
                return f"{settings.CDN_URL}/{match.group(1)}"

    return url


def get_fallback_cdn_url(url: str) -> str:
    """Swap the primary CDN domain for the fallback one."""
    if url.startswith(settings.CDN_URL):
        return settings.CDN_FALLBACK_URL + url[len(settings.CDN_URL):]
    return url


def get_image_url(
    image: Union[ImageData, dict, str, None],
    size: str = "large",
    fallback: str = PLACEHOLDER_IMAGE,
) -> str:
    if size not in SIZES:
        raise ValueError(f"Unknown image size: {size}")

    if isinstance(image, dict):
        image = ImageData.model_validate(image)

    if isinstance(image, str):
        url = image or fallback
    elif isinstance(image, ImageData):
        if image.url:
            url = image.url
        else:
            url = getattr(image, size) or image.large or image.original or fallback
    else:
        url = fallback

    return to_cdn_url(url)


def get_gallery_images(
    images: Optional[Iterable[Union[ImageData, dict, str]]] = None,
    size: str = "large",
) -> list[str]:
    return [get_image_url(img, size) for img in images or []]
