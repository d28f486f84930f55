"""blockblog — render YAML block definitions into static HTML pages."""

__version__ = "0.1.0"
