"""bifslide: recognition of Ventana BigTIFF whole-slide images."""

__version__ = "0.1.0"
