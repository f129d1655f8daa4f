"""Generate the application icons.

Run this script directly to generate icons:
    python -m xenia_manager.assets.icon_generator
"""

from pathlib import Path

from PIL import Image, ImageDraw

XENIA_GREEN = (92, 184, 92, 255)
WHITE = (255, 255, 255, 255)
GRAY = (110, 110, 110, 255)


def _canvas(size: int) -> tuple[Image.Image, ImageDraw.ImageDraw]:
    img = Image.new('RGBA', (size, size), (0, 0, 0, 0))
    return img, ImageDraw.Draw(img)


def create_gear_icon(size: int = 32) -> Image.Image:
    """Create a gear icon for the settings button."""
    img, draw = _canvas(size)
    center = size // 2
    outer = size // 2 - 2
    inner = size // 5

    # Teeth
    tooth = size // 6
    for x0, y0 in ((center - tooth // 2, 0), (center - tooth // 2, size - tooth),
                   (0, center - tooth // 2), (size - tooth, center - tooth // 2)):
        draw.rectangle([x0, y0, x0 + tooth, y0 + tooth], fill=GRAY)

    draw.ellipse([center - outer + 2, center - outer + 2, center + outer - 2, center + outer - 2], fill=GRAY)
    draw.ellipse([center - inner, center - inner, center + inner, center + inner], fill=(0, 0, 0, 0))
    return img


def create_update_icon(size: int = 32) -> Image.Image:
    """Create a download arrow for the update button."""
    img, draw = _canvas(size)
    center = size // 2
    shaft = size // 8

    draw.rectangle([center - shaft, size // 8, center + shaft, size // 2 + 2], fill=WHITE)
    draw.polygon(
        [(size // 4, size // 2), (size - size // 4, size // 2), (center, size - size // 4)],
        fill=WHITE,
    )
    draw.rectangle([size // 8, size - size // 8 - 2, size - size // 8, size - size // 8], fill=WHITE)
    return img


def create_content_icon(size: int = 32) -> Image.Image:
    """Create a folder icon for the installed content button."""
    img, draw = _canvas(size)
    margin = size // 8

    draw.rectangle([margin, margin + 2, size // 2, margin + size // 6], fill=(230, 190, 80, 255))
    draw.rectangle(
        [margin, margin + size // 6, size - margin, size - margin],
        fill=(240, 200, 90, 255),
        outline=(200, 160, 60, 255),
    )
    return img


def create_patch_icon(size: int = 32) -> Image.Image:
    """Create a bandage-style icon for the patch editor button."""
    img, draw = _canvas(size)
    margin = size // 8
    band = size // 3

    # Two crossed strips
    draw.rounded_rectangle([margin, (size - band) // 2, size - margin, (size + band) // 2],
                           radius=band // 2, fill=XENIA_GREEN)
    draw.rounded_rectangle([(size - band) // 2, margin, (size + band) // 2, size - margin],
                           radius=band // 2, fill=XENIA_GREEN)
    dot = max(1, size // 16)
    center = size // 2
    for dx, dy in ((-2, -2), (2, -2), (-2, 2), (2, 2)):
        x, y = center + dx * dot, center + dy * dot
        draw.ellipse([x - dot, y - dot, x + dot, y + dot], fill=WHITE)
    return img


def create_app_icon(size: int = 256) -> Image.Image:
    """Create the application icon: a white X on a green circle."""
    img, draw = _canvas(size)
    margin = size // 16
    draw.ellipse([margin, margin, size - margin, size - margin], fill=XENIA_GREEN)

    inset = size // 4
    width = max(2, size // 10)
    draw.line([(inset, inset), (size - inset, size - inset)], fill=WHITE, width=width)
    draw.line([(size - inset, inset), (inset, size - inset)], fill=WHITE, width=width)
    return img


def generate_all_icons(output_dir: Path | None = None) -> list[Path]:
    """Generate all icons and save them to the icons directory.

    Returns:
        Paths of the written files
    """
    if output_dir is None:
        output_dir = Path(__file__).parent / "icons"
    output_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for name, factory in (
        ("gear.png", create_gear_icon),
        ("update.png", create_update_icon),
        ("content.png", create_content_icon),
        ("patch.png", create_patch_icon),
    ):
        path = output_dir / name
        factory(32).save(path)
        written.append(path)

    app_icon = create_app_icon(256)
    app_icon.save(output_dir / "app_icon.png")
    app_icon.save(
        output_dir / "app_icon.ico",
        format='ICO',
        sizes=[(16, 16), (32, 32), (48, 48), (256, 256)]
    )
    written.extend([output_dir / "app_icon.png", output_dir / "app_icon.ico"])

    for path in written:
        print(f"Created: {path}")
    return written


if __name__ == "__main__":
    generate_all_icons()
