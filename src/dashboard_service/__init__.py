"""HTTP surface for dataset profiling and chart extraction."""
