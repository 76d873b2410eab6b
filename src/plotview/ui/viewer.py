"""
OpenCV HighGUI front end for a cropping session.

The main window shows the preview and forwards pointer events; while a
region is selected a second window with R/G/B/A trackbars acts as the color
picker. Closing the main window, Esc or ``q`` ends the session.
"""

from typing import List, Optional

import cv2

from ..config import Settings
from ..image.extraction import ExtractedImage
from ..logging import get_logger
from ..regions.model import Color
from .session import CropSession

logger = get_logger(__name__)

PICKER_WINDOW = "Region color"
CHANNELS = ("R", "G", "B", "A")
EXIT_KEYS = (27, ord("q"))


def _on_mouse(event: int, x: int, y: int, flags: int, session: CropSession) -> None:
    if event == cv2.EVENT_MOUSEMOVE:
        session.pointer_moved(float(x), float(y))
    elif event == cv2.EVENT_LBUTTONDOWN:
        session.pointer_moved(float(x), float(y))
        session.left_click()
    elif event == cv2.EVENT_RBUTTONDOWN:
        session.pointer_moved(float(x), float(y))
        session.right_click()


def _open_picker(color: Color) -> None:
    cv2.namedWindow(PICKER_WINDOW, cv2.WINDOW_AUTOSIZE)
    for name, value in zip(CHANNELS, color.to_tuple()):
        cv2.createTrackbar(name, PICKER_WINDOW, value, 255, lambda _: None)


def _reset_picker(color: Color) -> None:
    for name, value in zip(CHANNELS, color.to_tuple()):
        cv2.setTrackbarPos(name, PICKER_WINDOW, value)


def _read_picker() -> Color:
    values = [cv2.getTrackbarPos(name, PICKER_WINDOW) for name in CHANNELS]
    return Color(*values)


def _window_closed(name: str) -> bool:
    return cv2.getWindowProperty(name, cv2.WND_PROP_VISIBLE) < 1


def run_viewer(session: CropSession, settings: Optional[Settings] = None) -> List[ExtractedImage]:
    """Run the interactive loop until the user quits, then export the regions."""
    settings = settings or session.settings
    title = settings.window_title

    cv2.namedWindow(title, cv2.WINDOW_AUTOSIZE)
    cv2.setMouseCallback(title, _on_mouse, session)
    picker_open = False
    picker_for: Optional[int] = None
    logger.info(f"Showing {session.size[0]}x{session.size[1]} preview (ratio={session.ratio})")

    try:
        while True:
            if session.picker.show:
                selected = session.regions.selected_index
                if not picker_open:
                    _open_picker(session.picker.color)
                    picker_open = True
                elif selected != picker_for:
                    _reset_picker(session.picker.color)
                picker_for = selected
            elif picker_open:
                cv2.destroyWindow(PICKER_WINDOW)
                picker_open = False
                picker_for = None

            if picker_open:
                if _window_closed(PICKER_WINDOW):
                    session.left_click()
                    picker_open = False
                    picker_for = None
                else:
                    color = _read_picker()
                    if color != session.picker.color:
                        session.pick_color(color)

            frame = session.render()
            cv2.imshow(title, cv2.cvtColor(frame, cv2.COLOR_RGBA2BGR))

            key = cv2.waitKey(30) & 0xFF
            if key in EXIT_KEYS or _window_closed(title):
                break
    finally:
        cv2.destroyAllWindows()

    return session.close()
