"""Built-in schemas. Import concrete schemas from their modules or from ``shapecheck``."""
