"""Headless map-interaction layer: annotations, location picking, search suggestions, panel and editors."""
