from .fieldPlot import sample_grid, visualize

__all__ = ["sample_grid", "visualize"]
