"""setup-blender: resolve, download and cache Blender releases."""

__version__ = "0.1.0"
