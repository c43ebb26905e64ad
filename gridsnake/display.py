import os
import pygame
from . import config

_framebuffer = None
_fb_error_reported = False

def init_display(size):
    """Initialize Pygame and return the canvas the game draws on"""
    global _framebuffer

    if config.HEADLESS:
        # Headless/Framebuffer mode for Raspberry Pi
        os.environ["SDL_VIDEODRIVER"] = "dummy"
        pygame.init()
        # Create Surface matching Framebuffer format (RGB565)
        # 16-bit depth with specific masks for 5-6-5 format
        _framebuffer = pygame.Surface((config.FB_WIDTH, config.FB_HEIGHT), depth=16, masks=(0xF800, 0x07E0, 0x001F, 0))
    else:
        pygame.init()
        pygame.display.set_mode(size)
        pygame.display.set_caption("Snake")

    # The canvas stays at game resolution, it is scaled on flush
    return pygame.Surface(size)

def resize_display(size):
    """New canvas after the grid or tile size changed"""
    if not config.HEADLESS:
        pygame.display.set_mode(size)
    return pygame.Surface(size)

def _fit(src_size, dst_size):
    sw, sh = src_size
    dw, dh = dst_size
    scale = min(dw / sw, dh / sh)
    w, h = int(sw * scale), int(sh * scale)
    return pygame.Rect((dw - w) // 2, (dh - h) // 2, w, h)

def update_framebuffer(screen, fb_path=None):
    """Write the canvas to the framebuffer device or window"""
    global _fb_error_reported
    try:
        if config.HEADLESS:
            _framebuffer.fill(config.BLACK)
            area = _fit(screen.get_size(), _framebuffer.get_size())
            _framebuffer.blit(pygame.transform.scale(screen, area.size), area.topleft)
            with open(fb_path or config.FB_DEVICE, "wb") as fb:
                fb.write(_framebuffer.get_buffer())
        else:
            window = pygame.display.get_surface()
            pygame.transform.scale(screen, window.get_size(), window)
            pygame.display.flip()
    except OSError as e:
        if not _fb_error_reported:
            print(f"Framebuffer error: {e}")
            _fb_error_reported = True

def show_score(score):
    """Score sink: window caption, or console when there is no window"""
    if config.HEADLESS:
        print(f"🍎 Score: {score}")
    else:
        pygame.display.set_caption(f"Snake | Score: {score}")

def cleanup():
    pygame.quit()
