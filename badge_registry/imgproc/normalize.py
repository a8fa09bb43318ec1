"""Image normalisation helpers."""

from __future__ import annotations

from io import BytesIO

from PIL import Image, UnidentifiedImageError


class DecodeError(ValueError):
    """Raised when the supplied photo cannot be decoded as a raster image."""


class ImageNormalizer:
    """
    Fits a photo into a fixed bounding box and re-encodes it as JPEG.

    The image is scaled down (never up) so that both sides fit the box while
    keeping the aspect ratio; nothing is cropped. Metadata such as EXIF and ICC
    profiles is not carried over to the output.
    """

    def __init__(self, max_width: int = 240, max_height: int = 320, quality: int = 85) -> None:
        self.max_width = max_width
        self.max_height = max_height
        self.quality = quality

    def target_size(self, width: int, height: int) -> tuple[int, int]:
        """Return the output size for a source image of the given size."""

        scale = min(self.max_width / width, self.max_height / height, 1.0)
        return max(1, round(width * scale)), max(1, round(height * scale))

    def normalize(self, image_bytes: bytes) -> bytes:
        """Return JPEG bytes of the photo fitted into the bounding box."""

        try:
            with Image.open(BytesIO(image_bytes)) as img:
                img.load()
                image = self._to_rgb(img)
        except (UnidentifiedImageError, OSError, Image.DecompressionBombError) as exc:
            raise DecodeError("Photo is not a decodable image.") from exc

        size = self.target_size(*image.size)
        if size != image.size:
            image = image.resize(size, Image.Resampling.BICUBIC)

        image.info = {}
        buffer = BytesIO()
        image.save(buffer, format="JPEG", quality=self.quality)
        return buffer.getvalue()

    @staticmethod
    def _to_rgb(img: Image.Image) -> Image.Image:
        if img.mode == "RGB":
            return img.copy()
        if img.mode in ("RGBA", "LA") or (img.mode == "P" and "transparency" in img.info):
            rgba = img.convert("RGBA")
            background = Image.new("RGB", rgba.size, (255, 255, 255))
            background.paste(rgba, mask=rgba.getchannel("A"))
            return background
        return img.convert("RGB")
