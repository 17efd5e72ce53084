"""
Palette extraction from images.

Decodes an uploaded image, samples its opaque pixels and clusters them into a
palette ordered by dominance. Also supports picking the color of a single
pixel, as the image canvas does on click.
"""

import io
from collections import Counter
from typing import List, Tuple

import numpy as np
from loguru import logger
from PIL import Image, UnidentifiedImageError
from sklearn.cluster import MiniBatchKMeans

from palette_studio.config import config
from palette_studio.errors import ImageLoadFailure

ALPHA_OPAQUE_MIN = 128


def rgb_to_hex(rgb_u8: np.ndarray) -> str:
    """Convert RGB uint8 array to hex color string."""
    r, g, b = [int(x) for x in rgb_u8]
    return f"#{r:02X}{g:02X}{b:02X}"


def load_image(image_bytes: bytes) -> Image.Image:
    """
    Decode image bytes into an RGBA PIL image.

    Raises:
        ImageLoadFailure: If the bytes are not a decodable image
    """
    if not image_bytes:
        raise ImageLoadFailure("Empty image upload")
    try:
        image = Image.open(io.BytesIO(image_bytes))
        image.load()
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise ImageLoadFailure(f"Could not decode image: {e}")
    return image.convert("RGBA")


def sample_pixels(image: Image.Image, max_edge: int = None,
                  max_samples: int = None, rng_seed: int = 42) -> np.ndarray:
    """
    Downscale the image and return its opaque pixels.

    Args:
        image: RGBA image
        max_edge: Longest edge after downscaling
        max_samples: Maximum number of pixels returned
        rng_seed: Random seed for deterministic subsampling

    Returns:
        RGB pixels array (N, 3) uint8

    Raises:
        ImageLoadFailure: If no opaque pixels remain
    """
    max_edge = max_edge or config.EXTRACT_MAX_EDGE
    max_samples = max_samples or config.EXTRACT_MAX_SAMPLES

    image = image.copy()
    image.thumbnail((max_edge, max_edge))
    rgba = np.asarray(image, dtype=np.uint8).reshape(-1, 4)

    pixels = rgba[rgba[:, 3] >= ALPHA_OPAQUE_MIN][:, :3]
    if pixels.shape[0] == 0:
        raise ImageLoadFailure("Image has no opaque pixels")

    if pixels.shape[0] > max_samples:
        rng = np.random.default_rng(rng_seed)
        indices = rng.choice(pixels.shape[0], size=max_samples, replace=False)
        pixels = pixels[indices]
        logger.debug(f"Downsampled to {max_samples} pixels")

    return pixels


def cluster_palette(pixels_rgb_u8: np.ndarray, k: int, rng_seed: int = 42) -> List[Tuple[str, float]]:
    """
    Cluster pixels into at most ``k`` colors using MiniBatchKMeans.

    Returns:
        List of (hex, ratio) ordered by dominance, descending. Images with
        fewer than ``k`` distinct colors yield one entry per distinct color.
    """
    unique, counts = np.unique(pixels_rgb_u8, axis=0, return_counts=True)
    total_pixels = len(pixels_rgb_u8)

    if len(unique) <= k:
        order = np.argsort(-counts, kind="stable")
        return [(rgb_to_hex(unique[i]), float(counts[i] / total_pixels)) for i in order]

    kmeans = MiniBatchKMeans(
        n_clusters=k,
        random_state=rng_seed,
        batch_size=min(2048, total_pixels),
        n_init="auto",
        max_iter=100
    )
    labels = kmeans.fit_predict(pixels_rgb_u8.astype(np.float32))
    centers = np.clip(np.rint(kmeans.cluster_centers_), 0, 255).astype(np.uint8)

    label_counts = Counter(labels)
    cluster_stats = [(label_counts.get(i, 0) / total_pixels, centers[i]) for i in range(k)]
    cluster_stats.sort(key=lambda x: -x[0])

    palette = []
    for ratio, center in cluster_stats:
        if ratio == 0:
            continue
        hex_code = rgb_to_hex(center)
        if hex_code not in [entry[0] for entry in palette]:
            palette.append((hex_code, float(ratio)))

    logger.info(f"Clustering successful: {[f'{ratio:.3f}' for _, ratio in palette]}")
    return palette


def extract_palette(image_bytes: bytes, count: int = None) -> List[str]:
    """
    Extract an ordered palette of hex colors from an image.

    Args:
        image_bytes: Encoded image (PNG, JPEG, GIF, WebP)
        count: Number of colors requested

    Raises:
        ImageLoadFailure: If the image cannot be decoded or has no opaque pixels
    """
    count = count or config.EXTRACT_COUNT
    if not config.validate_extract_count(count):
        raise ValueError(f"count must be between 1 and 16, got {count}")

    image = load_image(image_bytes)
    logger.info(f"Extracting {count} colors from {image.width}x{image.height} image")
    pixels = sample_pixels(image)
    return [hex_code for hex_code, _ in cluster_palette(pixels, count)]


def pick_pixel(image_bytes: bytes, x: int, y: int) -> str:
    """
    Return the hex color of the pixel at (x, y) in image coordinates.

    Raises:
        ImageLoadFailure: If the image cannot be decoded
        ValueError: If the coordinates fall outside the image
    """
    image = load_image(image_bytes)
    if not (0 <= x < image.width and 0 <= y < image.height):
        raise ValueError(f"Pixel ({x}, {y}) outside {image.width}x{image.height} image")
    r, g, b, _ = image.getpixel((x, y))
    return f"#{r:02X}{g:02X}{b:02X}"
