"""
Palette Studio v1 API Routes
Color inspection, harmony generation, palette editing and image extraction
over a single in-process session.
"""
import threading
from contextlib import contextmanager, nullcontext
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile

from palette_studio.config import config
from palette_studio.errors import (
    EmptyName, EmptyPalette, ImageLoadFailure, IndexOutOfRange, InvalidColor,
    PaletteError, PaletteFull
)
from palette_studio.schemas import (
    AddColorRequest, ColorInfo, ColorInput, ErrorResponse, ExtractResponse, HarmonyResponse,
    PixelResponse, ReplacePaletteRequest, SavedPaletteModel, SavePaletteRequest,
    SessionResponse
)
from palette_studio.services.colors.extraction import extract_palette, pick_pixel
from palette_studio.services.colors.harmony import HarmonyScheme, harmony
from palette_studio.services.colors.model import describe, parse, random_color
from palette_studio.services.session import PaletteSession
from palette_studio.utils.logging import get_logger

logger = get_logger()

ERROR_RESPONSES = {
    status: {"model": ErrorResponse} for status in (400, 404, 409, 413, 415)
}

router = APIRouter(prefix="/v1", tags=["Palette Studio"], responses=ERROR_RESPONSES)

ERROR_STATUS = {
    InvalidColor: 400,
    EmptyName: 400,
    EmptyPalette: 400,
    ImageLoadFailure: 400,
    IndexOutOfRange: 404,
    PaletteFull: 409,
}

_session: Optional[PaletteSession] = None
_lock = threading.Lock()


def get_session() -> PaletteSession:
    """Get or create the process-wide session."""
    global _session
    if _session is None:
        with _lock:
            if _session is None:
                _session = PaletteSession(raise_errors=True)
    return _session


def reset_session(session: Optional[PaletteSession] = None) -> None:
    """Replace the process-wide session (a fresh one by default)."""
    global _session
    _session = session


@contextmanager
def palette_errors(lock: bool = True):
    """Map domain errors to HTTP errors, serializing session access unless ``lock`` is False."""
    with (_lock if lock else nullcontext()):
        try:
            yield
        except PaletteError as e:
            status = next((code for cls, code in ERROR_STATUS.items() if isinstance(e, cls)), 400)
            logger.warning(f"Request failed: {e.message}", extra={"error_code": e.code, "status": status})
            raise HTTPException(status_code=status, detail=e.message)


def _read_upload(file: UploadFile) -> bytes:
    """Read an uploaded image, enforcing media type and size limits."""
    if file.content_type not in config.SUPPORTED_MIME_TYPES:
        raise HTTPException(
            status_code=415,
            detail=f"Unsupported media type. Supported: {', '.join(config.SUPPORTED_MIME_TYPES)}"
        )
    data = file.file.read()
    if len(data) > config.MAX_FILE_MB * 1024 * 1024:
        raise HTTPException(status_code=413, detail=f"File too large. Maximum size: {config.MAX_FILE_MB}MB")
    return data


# ============================================================================
# COLORS
# ============================================================================

@router.get("/colors/random", response_model=ColorInfo, summary="Random color")
def get_random_color() -> dict:
    return describe(random_color())


@router.get("/colors/{value}", response_model=ColorInfo, summary="Describe a color")
def get_color(value: str) -> dict:
    """Hex code (without the leading #), RGB, HSL and contrast text color."""
    with palette_errors(lock=False):
        return describe(parse(value, allow_rgb=config.ACCEPT_RGB_SYNTAX))


@router.get("/harmony", response_model=HarmonyResponse, summary="Harmony colors for a base color")
def get_harmony(
    base: str = Query(..., description="Base color hex code"),
    scheme: HarmonyScheme = Query(..., description="Harmony scheme")
) -> dict:
    with palette_errors(lock=False):
        base_color = parse(base)
        colors = harmony(base_color, scheme)
    return {"base": base_color.hex, "scheme": scheme.value, "colors": [c.hex for c in colors]}


# ============================================================================
# SESSION
# ============================================================================

@router.get("/session", response_model=SessionResponse)
def get_session_state(session: PaletteSession = Depends(get_session)) -> dict:
    with palette_errors():
        return session.snapshot()


@router.put("/session/color", response_model=SessionResponse, summary="Set the current color")
def set_current_color(body: ColorInput, session: PaletteSession = Depends(get_session)) -> dict:
    with palette_errors():
        session.enter_color(body.value)
        return session.snapshot()


@router.post("/session/random", response_model=SessionResponse, summary="Pick a random current color")
def randomize_current_color(session: PaletteSession = Depends(get_session)) -> dict:
    with palette_errors():
        session.randomize()
        return session.snapshot()


@router.post("/session/harmony/{scheme}", response_model=SessionResponse,
             summary="Replace the palette with a harmony of the current color")
def apply_harmony(scheme: HarmonyScheme, session: PaletteSession = Depends(get_session)) -> dict:
    with palette_errors():
        session.apply_harmony(scheme)
        return session.snapshot()


# ============================================================================
# CURRENT PALETTE
# ============================================================================

@router.post("/palette", response_model=SessionResponse, summary="Add a color to the palette")
def add_palette_color(body: Optional[AddColorRequest] = None,
                      session: PaletteSession = Depends(get_session)) -> dict:
    with palette_errors():
        session.add_current_color(body.color if body and body.color else None)
        return session.snapshot()


@router.put("/palette", response_model=SessionResponse, summary="Replace the palette")
def replace_palette(body: ReplacePaletteRequest, session: PaletteSession = Depends(get_session)) -> dict:
    with palette_errors():
        session.store.replace_current([parse(c) for c in body.colors])
        return session.snapshot()


@router.delete("/palette/{index}", response_model=SessionResponse, summary="Remove a palette color")
def remove_palette_color(index: int, session: PaletteSession = Depends(get_session)) -> dict:
    with palette_errors():
        session.remove_color(index)
        return session.snapshot()


# ============================================================================
# SAVED PALETTES
# ============================================================================

@router.get("/palettes", response_model=List[SavedPaletteModel])
def list_palettes(session: PaletteSession = Depends(get_session)) -> list:
    with palette_errors():
        return [saved.to_dict() for saved in session.store.saved]


@router.post("/palettes", response_model=SavedPaletteModel, status_code=201,
             summary="Save the current palette")
def save_palette(body: SavePaletteRequest, session: PaletteSession = Depends(get_session)) -> dict:
    with palette_errors():
        return session.save_palette(body.name).to_dict()


@router.post("/palettes/{index}/load", response_model=SessionResponse, summary="Load a saved palette")
def load_palette(index: int, session: PaletteSession = Depends(get_session)) -> dict:
    with palette_errors():
        session.load_palette(index)
        return session.snapshot()


@router.delete("/palettes/{index}", response_model=SavedPaletteModel, summary="Delete a saved palette")
def delete_palette(index: int, session: PaletteSession = Depends(get_session)) -> dict:
    with palette_errors():
        return session.delete_palette(index).to_dict()


# ============================================================================
# IMAGE EXTRACTION
# ============================================================================

@router.post("/extract", response_model=ExtractResponse, summary="Extract a palette from an image")
def extract_from_image(
    file: UploadFile = File(..., description="Image file"),
    count: int = Query(config.EXTRACT_COUNT, ge=1, le=16, description="Number of colors"),
    apply: bool = Query(False, description="Replace the current palette with the result"),
    session: PaletteSession = Depends(get_session)
) -> dict:
    data = _read_upload(file)
    # Decoding and clustering run without holding the session lock
    with palette_errors(lock=False):
        colors = extract_palette(data, count)
    if apply:
        with palette_errors():
            session.on_palette_ready(colors)
    logger.info(f"Extracted {len(colors)} colors from {file.filename}", extra={"applied": apply})
    return {"colors": colors, "applied": apply}


@router.post("/extract/pixel", response_model=PixelResponse, summary="Pick one pixel's color")
def pick_image_pixel(
    file: UploadFile = File(..., description="Image file"),
    x: int = Form(..., ge=0),
    y: int = Form(..., ge=0),
    apply: bool = Query(False, description="Replace the current palette with this color"),
    session: PaletteSession = Depends(get_session)
) -> dict:
    data = _read_upload(file)
    with palette_errors(lock=False):
        try:
            color = pick_pixel(data, x, y)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
    if apply:
        with palette_errors():
            session.on_palette_ready([color])
    return {"color": color, "applied": apply}
