from .writer import FORMATS, render_grid, save_grid

__all__ = ["FORMATS", "render_grid", "save_grid"]
