import re
import sys
import math
try:
    from evdev import list_devices, InputDevice, ecodes
    HAS_EVDEV = True
except ImportError:
    HAS_EVDEV = False

HEX_COLOR = re.compile(r'^#?([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})$', re.IGNORECASE)
HEX_SHORTHAND = re.compile(r'^#?([0-9a-f])([0-9a-f])([0-9a-f])$', re.IGNORECASE)

# --- COLORS ---

def hex_to_rgb(value):
    """'#0A0', '00AA00' or '#00aa00' -> (0, 170, 0)"""
    value = value.strip()
    short = HEX_SHORTHAND.match(value)
    if short:
        value = "".join(c * 2 for c in short.groups())
    match = HEX_COLOR.match(value)
    if not match:
        raise ValueError(f"Not a hex color: {value!r}")
    return tuple(int(part, 16) for part in match.groups())

def rgb_to_hex(rgb):
    return "#{:02X}{:02X}{:02X}".format(*rgb)

def lerp(start, end, amount):
    return math.floor(start + (end - start) * amount)

def interpolate_color(start, end, t):
    """Componentwise blend of two RGB triples, floored to whole channel values."""
    return tuple(lerp(s, e, t) for s, e in zip(start, end))

def segment_fraction(index, length):
    # Head is 0, tail is 1; a lone segment stays at the head color
    if length <= 1:
        return 0
    return index / (length - 1)

def segment_color(index, length, head_color, tail_color):
    return interpolate_color(head_color, tail_color, segment_fraction(index, length))

# --- DEVICES ---

def find_keyboard_device(fallback=None):
    """Dynamically find a keyboard for headless play"""
    if not HAS_EVDEV:
        return fallback

    print("🔍 Searching for keyboard devices...")
    try:
        devices = [InputDevice(path) for path in list_devices()]
        for device in devices:
            print(f"  - Found: {device.name} at {device.path}")
            keys = device.capabilities().get(ecodes.EV_KEY, [])
            if ecodes.KEY_SPACE in keys and ecodes.KEY_UP in keys:
                print(f"🎯 MATCH FOUND: {device.name} at {device.path}")
                sys.stdout.flush()
                return device.path
    except OSError as e:
        print(f"❌ Device Discovery Error: {e}")

    print(f"⚠️ No keyboard matched. Falling back to {fallback}")
    sys.stdout.flush()
    return fallback
