"""A window that shows frames and reports key presses as X keysyms."""

from __future__ import annotations

import pygame

from cube3d.image import Image

_SPECIAL_KEYSYMS = {
    pygame.K_ESCAPE: 0xFF1B,
    pygame.K_RETURN: 0xFF0D,
    pygame.K_BACKSPACE: 0xFF08,
    pygame.K_TAB: 0xFF09,
    pygame.K_DELETE: 0xFFFF,
    pygame.K_LEFT: 0xFF51,
    pygame.K_UP: 0xFF52,
    pygame.K_RIGHT: 0xFF53,
    pygame.K_DOWN: 0xFF54,
}


def to_keysym(key: int) -> int | None:
    """Translate a pygame key code to an X keysym, or None if unmapped."""
    if key in _SPECIAL_KEYSYMS:
        return _SPECIAL_KEYSYMS[key]
    # Latin-1 keysyms equal their character codes.
    if 0x20 <= key <= 0xFF:
        return key
    return None


class Window:
    """A fixed-size window that displays :class:`Image` frames."""

    def __init__(self, width: int, height: int, title: str) -> None:
        try:
            pygame.display.init()
            surface = pygame.display.set_mode((width, height))
        except pygame.error as exc:
            pygame.display.quit()
            raise RuntimeError(f"cannot open a {width}x{height} window: {exc}") from exc
        pygame.display.set_caption(title)
        self.width = width
        self.height = height
        self.title = title
        self.closed = False
        self._open = True
        self._surface = surface

    def __enter__(self) -> Window:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def surface(self) -> pygame.Surface:
        """The drawing surface of the window."""
        return self._surface

    def show(self, image: Image) -> None:
        """Clear the window and draw image at its top-left corner."""
        if not self._open:
            raise RuntimeError("window is closed")
        picture = pygame.image.frombuffer(
            image.rgb_bytes(), (image.width, image.height), "RGB"
        )
        self._surface.fill((0, 0, 0))
        self._surface.blit(picture, (0, 0))
        pygame.display.flip()

    def poll_keys(self) -> list[int]:
        """Wait for events and return the keysyms of the keys pressed.

        A request to close the window sets ``closed``.
        """
        if not self._open:
            return []
        events = pygame.event.get()
        if not events:
            events = [pygame.event.wait()]
        keys = []
        for event in events:
            if event.type == pygame.QUIT:
                self.closed = True
            elif event.type == pygame.KEYDOWN:
                keysym = to_keysym(event.key)
                if keysym is not None:
                    keys.append(keysym)
        return keys

    def close(self) -> None:
        """Destroy the window; further calls do nothing."""
        if self._open:
            pygame.display.quit()
            self._open = False
        self.closed = True