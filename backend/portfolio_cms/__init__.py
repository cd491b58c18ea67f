"""Portfolio CMS backend."""
