"""
Main application module for the explorer window.

Contains the ExplorerApp class which handles:
- Window setup and main loop
- User input (click to zoom, keyboard shortcuts, drag to capture)
- Holding the navigation state and threading it through transitions
- Blitting rendered buffers, the minimap and the selection overlay

All fractal work happens in the engine modules (renderer, history,
capture); this module only wires pygame events to them.
"""

import pygame

from .capture import SelectionRect, capture, save_capture
from .colormaps import DEFAULT_PALETTE, next_colormap_name
from .compute import warmup_jit
from .history import NavigationState, reset, undo, zoom_in
from .logging_setup import get_logger
from .renderer import FractalRenderer


class ExplorerApp:
    """
    Main application class for the explorer.

    Handles the pygame window, event loop, and coordinates between
    the navigation state, the renderer and region capture.
    """

    # Default configuration
    DEFAULT_WIDTH = 800
    DEFAULT_HEIGHT = 600
    MINIMAP_SIZE = 150
    MINIMAP_MARGIN = 20

    SELECTION_COLOR = (255, 255, 255)
    BORDER_COLOR = (255, 255, 255)

    HELP_TEXT = "click: zoom  U: undo  R: reset  M: minimap  S: select area  P: palette"

    def __init__(self, width=None, height=None, palette=DEFAULT_PALETTE,
                 show_minimap=False, minimap_size=None, capture_dir="."):
        """
        Initialize the application.

        Args:
            width: Window width in pixels (default 800)
            height: Window height in pixels (default 600)
            palette: Name of the initial palette
            show_minimap: Whether the overview minimap starts visible
            minimap_size: Minimap edge length in pixels (default 150)
            capture_dir: Directory captured regions are saved to
        """
        self.width = width or self.DEFAULT_WIDTH
        self.height = height or self.DEFAULT_HEIGHT
        self.minimap_size = minimap_size or self.MINIMAP_SIZE
        self.capture_dir = capture_dir
        self.logger = get_logger()

        # Pygame state (initialized in run())
        self.screen = None
        self.clock = None

        # Engine state
        self.renderer = FractalRenderer(palette)
        self.state = NavigationState()
        self.buffer = None
        self.minimap_buffer = None

        # Display state
        self.surface = None
        self.minimap_surface = None
        self.show_minimap = show_minimap
        self.needs_render = True

        # Selection gesture (only while dragging in selection mode)
        self.selecting = False
        self.selection_start = None
        self.selection_end = None

        self.running = False

    def run(self):
        """Run the application main loop."""
        self._init_pygame()
        self._warmup()

        self.running = True
        while self.running:
            self._handle_events()
            if self.needs_render:
                self._render()
            self._draw()
            self.clock.tick(60)

        pygame.quit()

    def _init_pygame(self):
        """Initialize pygame and create window."""
        pygame.init()
        self.screen = pygame.display.set_mode(
            (self.width, self.height),
            pygame.RESIZABLE
        )
        self.clock = pygame.time.Clock()
        self._allocate_buffers()

    def _allocate_buffers(self):
        self.buffer = self.renderer.new_buffer(self.width, self.height)
        self.minimap_buffer = self.renderer.new_buffer(self.minimap_size, self.minimap_size)

    def _warmup(self):
        """Warm up JIT before the first frame."""
        pygame.display.set_caption("Compiling (first run only)...")
        warmup_jit(self.renderer.palette)

    def _render(self):
        """Render the main view (and minimap when visible) from the current state."""
        pygame.display.set_caption("Computing...")
        viewport = self.state.current
        self.renderer.render(self.buffer, viewport)
        self.surface = self._to_surface(self.buffer)
        if self.show_minimap:
            self.renderer.render(self.minimap_buffer, viewport, overview=True)
            self.minimap_surface = self._to_surface(self.minimap_buffer)
        self.needs_render = False
        self._update_caption()

    @staticmethod
    def _to_surface(buffer):
        # surfarray is (x, y) indexed; buffers are (row, column)
        return pygame.surfarray.make_surface(buffer[:, :, :3].swapaxes(0, 1))

    def _update_caption(self, extra=None):
        parts = [self.state.current.describe(), self.renderer.palette_name]
        if self.selecting:
            parts.append("drag to select area, Esc to cancel")
        if extra:
            parts.append(extra)
        pygame.display.set_caption(" | ".join(parts))

    def _handle_events(self):
        """Process all pending pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.VIDEORESIZE:
                self._handle_resize(event)
            elif event.type == pygame.MOUSEBUTTONDOWN:
                self._handle_mouse_down(event)
            elif event.type == pygame.MOUSEMOTION:
                self._handle_mouse_motion(event)
            elif event.type == pygame.MOUSEBUTTONUP:
                self._handle_mouse_up(event)
            elif event.type == pygame.KEYDOWN:
                self._handle_key(event)

    def _handle_resize(self, event):
        self.width, self.height = max(1, event.w), max(1, event.h)
        self._allocate_buffers()
        self.needs_render = True

    def _minimap_rect(self):
        return pygame.Rect(
            self.width - self.minimap_size - self.MINIMAP_MARGIN,
            self.height - self.minimap_size - self.MINIMAP_MARGIN,
            self.minimap_size,
            self.minimap_size
        )

    def _handle_mouse_down(self, event):
        """Left click zooms, or starts a selection in selection mode."""
        if event.button != 1:
            return
        if self.selecting:
            self.selection_start = event.pos
            self.selection_end = event.pos
            return
        if self.show_minimap and self._minimap_rect().collidepoint(event.pos):
            return
        self.state = zoom_in(self.state, event.pos[0], event.pos[1], self.width, self.height)
        self.needs_render = True

    def _handle_mouse_motion(self, event):
        """Track the selection drag; the overlay is drawn in _draw."""
        if self.selecting and self.selection_start is not None:
            self.selection_end = event.pos

    def _handle_mouse_up(self, event):
        """Finish a selection drag: capture and save the region."""
        if event.button != 1 or not self.selecting or self.selection_start is None:
            return
        rect = SelectionRect(*self.selection_start, *event.pos)
        result = capture(self.buffer, rect, self.state.current, self.width, self.height)
        message = None
        if result is not None:
            path = save_capture(result, self.capture_dir)
            message = f"saved {path}"
        self._cancel_selection()
        self._update_caption(message)

    def _cancel_selection(self):
        self.selecting = False
        self.selection_start = None
        self.selection_end = None

    def _handle_key(self, event):
        """Handle keyboard input."""
        if event.key in (pygame.K_u, pygame.K_BACKSPACE):
            self.state = undo(self.state)
            self.needs_render = True
        elif event.key == pygame.K_r:
            self.state = reset()
            self.needs_render = True
        elif event.key == pygame.K_m:
            self.show_minimap = not self.show_minimap
            self.needs_render = True
        elif event.key == pygame.K_s:
            if self.selecting:
                self._cancel_selection()
            else:
                self.selecting = True
            self._update_caption()
        elif event.key == pygame.K_p:
            step = -1 if pygame.key.get_mods() & pygame.KMOD_SHIFT else 1
            self.renderer.set_palette(next_colormap_name(self.renderer.palette_name, step))
            self.needs_render = True
        elif event.key == pygame.K_h:
            self._update_caption(self.HELP_TEXT)
        elif event.key == pygame.K_ESCAPE:
            if self.selecting:
                self._cancel_selection()
                self._update_caption()
            else:
                self.running = False

    def _draw(self):
        """Draw the current frame."""
        self.screen.fill((0, 0, 0))
        if self.surface is not None:
            self.screen.blit(self.surface, (0, 0))

        # Selection overlay on top of the last rendered buffer
        if self.selection_start is not None and self.selection_end is not None:
            left, top, w, h = SelectionRect(*self.selection_start, *self.selection_end).normalized()
            pygame.draw.rect(self.screen, self.SELECTION_COLOR, pygame.Rect(left, top, w, h), 2)

        if self.show_minimap and self.minimap_surface is not None:
            rect = self._minimap_rect()
            self.screen.blit(self.minimap_surface, rect.topleft)
            pygame.draw.rect(self.screen, self.BORDER_COLOR, rect.inflate(4, 4), 2)

        pygame.display.flip()


def run(width=None, height=None, palette=DEFAULT_PALETTE, show_minimap=False,
        minimap_size=None, capture_dir="."):
    """
    Run the explorer window.

    Args:
        width: Window width (default 800)
        height: Window height (default 600)
        palette: Initial palette name
        show_minimap: Start with the minimap visible
        minimap_size: Minimap edge length (default 150)
        capture_dir: Where captured regions are written
    """
    app = ExplorerApp(width, height, palette, show_minimap, minimap_size, capture_dir)
    try:
        app.run()
    except KeyboardInterrupt:
        pygame.quit()
