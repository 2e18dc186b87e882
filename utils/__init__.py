"""Console tables, JSON persistence and charts for fission results."""
