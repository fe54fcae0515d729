"""Extension to category classification for creative assets."""

OTHER = "Other"

CATEGORY_GROUPS: dict[str, tuple[str, ...]] = {
    "Images": (
        "Image (JPEG)",
        "Image (PNG)",
        "Image (TIFF)",
        "Image (GIF)",
        "Image (WebP)",
        "Image (BMP)",
        "Vector (SVG)",
        "Image (RAW)",
    ),
    "Video": (
        "Video (MP4)",
        "Video (MOV)",
        "Video (AVI)",
        "Video (MKV)",
        "Video (M4V)",
        "Video (Professional)",
    ),
    "Adobe Creative": (
        "After Effects Project",
        "Premiere Pro Project",
        "Photoshop",
        "Illustrator",
        "Photoshop Brush",
        "Photoshop Action",
        "Photoshop Curve",
        "Adobe Swatch",
    ),
    "Audio": (
        "Audio (WAV)",
        "Audio (MP3)",
        "Audio (AIFF)",
        "Audio (FLAC)",
        "Audio (AAC)",
        "Audio (M4A)",
    ),
    "3D Models": (
        "3D Model (Blender)",
        "3D Model (FBX)",
        "3D Model (OBJ)",
        "3D Model (Cinema 4D)",
        "3D Model (Maya)",
        "3D Model (glTF)",
        "3D Model (STL)",
        "3D Model (3DS)",
    ),
    "Archives": (
        "Archive (ZIP)",
        "Archive (RAR)",
        "Archive (7-Zip)",
        "Archive (TAR)",
        "Archive (GZIP)",
    ),
    "Documents": (
        "Document (PDF)",
        "Document (Word)",
        "Document (Excel)",
        "Document (Text)",
    ),
    "Fonts": (
        "Font (TrueType)",
        "Font (OpenType)",
    ),
}

EXTENSION_CATEGORIES: dict[str, str] = {
    # Raster images
    ".jpg": "Image (JPEG)",
    ".jpeg": "Image (JPEG)",
    ".png": "Image (PNG)",
    ".tif": "Image (TIFF)",
    ".tiff": "Image (TIFF)",
    ".gif": "Image (GIF)",
    ".webp": "Image (WebP)",
    ".bmp": "Image (BMP)",
    ".svg": "Vector (SVG)",
    ".cr2": "Image (RAW)",
    ".cr3": "Image (RAW)",
    ".nef": "Image (RAW)",
    ".arw": "Image (RAW)",
    ".dng": "Image (RAW)",
    ".raf": "Image (RAW)",
    ".orf": "Image (RAW)",
    ".rw2": "Image (RAW)",
    # Video containers
    ".mp4": "Video (MP4)",
    ".mov": "Video (MOV)",
    ".avi": "Video (AVI)",
    ".mkv": "Video (MKV)",
    ".m4v": "Video (M4V)",
    ".mxf": "Video (Professional)",
    ".r3d": "Video (Professional)",
    ".braw": "Video (Professional)",
    # Adobe project and preset files
    ".aep": "After Effects Project",
    ".aet": "After Effects Project",
    ".prproj": "Premiere Pro Project",
    ".psd": "Photoshop",
    ".psb": "Photoshop",
    ".ai": "Illustrator",
    ".eps": "Illustrator",
    ".abr": "Photoshop Brush",
    ".atn": "Photoshop Action",
    ".acv": "Photoshop Curve",
    ".ase": "Adobe Swatch",
    ".aco": "Adobe Swatch",
    # Audio
    ".wav": "Audio (WAV)",
    ".mp3": "Audio (MP3)",
    ".aif": "Audio (AIFF)",
    ".aiff": "Audio (AIFF)",
    ".flac": "Audio (FLAC)",
    ".aac": "Audio (AAC)",
    ".m4a": "Audio (M4A)",
    # 3D
    ".blend": "3D Model (Blender)",
    ".fbx": "3D Model (FBX)",
    ".obj": "3D Model (OBJ)",
    ".c4d": "3D Model (Cinema 4D)",
    ".ma": "3D Model (Maya)",
    ".mb": "3D Model (Maya)",
    ".gltf": "3D Model (glTF)",
    ".glb": "3D Model (glTF)",
    ".stl": "3D Model (STL)",
    ".3ds": "3D Model (3DS)",
    # Archives
    ".zip": "Archive (ZIP)",
    ".rar": "Archive (RAR)",
    ".7z": "Archive (7-Zip)",
    ".tar": "Archive (TAR)",
    ".gz": "Archive (GZIP)",
    ".tgz": "Archive (GZIP)",
    # Documents
    ".pdf": "Document (PDF)",
    ".doc": "Document (Word)",
    ".docx": "Document (Word)",
    ".xls": "Document (Excel)",
    ".xlsx": "Document (Excel)",
    ".txt": "Document (Text)",
    ".rtf": "Document (Text)",
    ".md": "Document (Text)",
    # Fonts
    ".ttf": "Font (TrueType)",
    ".otf": "Font (OpenType)",
}


def classify(extension: str) -> str:
    """Map a file extension (with or without the leading dot) to a category label."""
    if not extension:
        return OTHER
    key = extension.lower()
    if not key.startswith("."):
        key = "." + key
    return EXTENSION_CATEGORIES.get(key, OTHER)


def categories_for_group(group: str) -> list[str]:
    """Return the category labels of a facet group, matched case-insensitively."""
    for name, labels in CATEGORY_GROUPS.items():
        if name.lower() == group.lower():
            return list(labels)
    raise KeyError(f"Unknown category group: {group}")
