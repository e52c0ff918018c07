"""Container, package and navigation decoding."""
