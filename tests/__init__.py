"""Portfolio agents test suite."""
