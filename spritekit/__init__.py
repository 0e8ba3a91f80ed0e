"""SpriteKit - post-processing for generated pixel-art sprites."""

__version__ = "0.1.0"
