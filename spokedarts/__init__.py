"""Point arithmetic, random sampling, line piercings, range trees, sphere searches and spacing histograms for Poisson-disk sampling."""

__version__ = "0.1.0"

__all__ = [
    "piercing",
    "point_tool",
    "quality",
    "random_source",
    "range_tree",
    "search_array",
]