import os
import pygame
from PIL import Image, ImageDraw, ImageFont
from . import config

PYGAME_FONT = os.path.join(os.path.dirname(pygame.__file__), "freesansbold.ttf")

def _load_font(size, font_path=None):
    for path in (font_path, config.FONT_FILE, PYGAME_FONT):
        if path and os.path.exists(path):
            try:
                return ImageFont.truetype(path, size)
            except OSError as e:
                print(f"⚠️ Font {path} unusable: {e}")
    return ImageFont.load_default(size)

def render_text(text, size, color, font_path=None):
    """
    Render text using PIL and convert to Pygame Surface.
    Works without pygame.font, so headless framebuffers need no SDL_ttf.
    """
    pil_font = _load_font(size, font_path)

    # Measure on a dummy image first
    dummy_img = Image.new('RGBA', (1, 1), (0, 0, 0, 0))
    draw = ImageDraw.Draw(dummy_img)
    bbox = draw.textbbox((0, 0), text, font=pil_font)
    width = bbox[2] - bbox[0] + 10
    height = bbox[3] - bbox[1] + 10

    img = Image.new('RGBA', (int(width), int(height)), (0, 0, 0, 0))
    draw = ImageDraw.Draw(img)
    draw.text((5 - bbox[0], 5 - bbox[1]), text, font=pil_font, fill=tuple(color))

    raw_str = img.tobytes("raw", "RGBA")
    return pygame.image.fromstring(raw_str, img.size, 'RGBA')

# --- RASTER PRIMITIVES ---

def fill_rect(screen, color, rect):
    pygame.draw.rect(screen, color, rect)

def stroke_rect(screen, color, rect, width=1):
    pygame.draw.rect(screen, color, rect, width)

def fill_overlay(screen, rgba):
    """Blend a translucent color over the whole surface"""
    overlay = pygame.Surface(screen.get_size(), pygame.SRCALPHA)
    overlay.fill(rgba)
    screen.blit(overlay, (0, 0))

def draw_text_centered(screen, text, size, color, center):
    lbl = render_text(text, size, color)
    screen.blit(lbl, lbl.get_rect(center=center))
