from backend.engine.palette.palette import ColorPalette

__all__ = ["ColorPalette"]
