"""Engine services: catalog lookup, validation, normalization, grouping,
fixed-width rendering, and the batch runner built on top of them."""
