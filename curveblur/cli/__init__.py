"""CurveBlur command-line tools."""
