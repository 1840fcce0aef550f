"""Convert images, animations and videos into coloured text art and play them in a terminal."""

__version__ = "0.1.0"