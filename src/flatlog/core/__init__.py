"""Domain core: flattening, coercion, event formatting and routing."""
